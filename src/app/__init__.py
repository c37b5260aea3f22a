"""App: núcleo JSCalendar: modelos, codecs e contratos.

Subpastas:
- domain/: Event, Task, Group, entidades, LocalDateTime e Duration
- services/: codec JSON dos objetos de calendário
- protocols/: contratos/interfaces (validador, normalizer, builder, conversor)
- observability/: correlation_id dos logs estruturados
- constants/: enums e faixas do JSCalendar

Padrão: app modela; api adapta; config configura; utils apoia.
"""
