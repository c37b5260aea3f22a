"""Validators de schema.

Estrutura:
- jscalendar/: objetos JSCalendar (Event, Task, Group) e entidades aninhadas

Violações são agregadas com caminho de campo, nunca interrompem no primeiro erro.
"""

__all__: list[str] = []
