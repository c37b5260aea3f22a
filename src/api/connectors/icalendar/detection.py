"""Heurística de detecção de texto iCalendar.

Não é garantia: quem precisa de certeza deve informar o formato.
"""

from __future__ import annotations

CALENDAR_HEADER = "BEGIN:VCALENDAR"

MARKERS: tuple[str, ...] = (
    "BEGIN:VEVENT",
    "DTSTART:",
    "DTEND:",
    "SUMMARY:",
    "UID:",
)

MIN_MARKERS = 3


def detect(data: bytes | str) -> bool:
    """True quando o texto parece iCalendar.

    Começa com BEGIN:VCALENDAR, ou contém ao menos três dos cinco
    marcadores fixos.
    """
    text = data.decode("utf-8", errors="replace") if isinstance(data, bytes) else data
    text = text.strip()
    if text.startswith(CALENDAR_HEADER):
        return True
    found = sum(1 for marker in MARKERS if marker in text)
    return found >= MIN_MARKERS
