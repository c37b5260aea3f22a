"""Limites de tamanho do schema JSCalendar."""

MAX_UID_LENGTH = 255
MAX_TITLE_LENGTH = 1024
MAX_DESCRIPTION_LENGTH = 32768
