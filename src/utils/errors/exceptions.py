"""Exceções de domínio para falhas de parse e de conversão de calendário."""

from __future__ import annotations


class JSCalendarError(Exception):
    """Base para todas as falhas do núcleo JSCalendar."""


class ParseError(JSCalendarError, ValueError):
    """Literal malformado (date-time, duração, by-day ou JSON).

    Sempre fatal para o decode que o contém: nenhum objeto parcial é devolvido.
    """


class ConversionError(JSCalendarError):
    """Falha estrutural ao mapear um componente entre formatos.

    Fatal apenas para o componente em questão; conversões em lote
    isolam a falha e seguem com os demais itens.
    """

    def __init__(
        self,
        message: str,
        *,
        uid: str | None = None,
        index: int | None = None,
    ) -> None:
        super().__init__(message)
        self.uid = uid
        self.index = index
