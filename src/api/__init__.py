"""API: camada de borda: formatos externos e validação de schema.

Responsabilidades:
- Validar objetos JSCalendar agregando violações com caminho de campo
- Normalizar componentes iCalendar para o modelo interno
- Construir componentes iCalendar a partir do modelo interno

Subpastas:
- connectors/: fachadas de conversão por formato (iCalendar)
- normalizers/: formato externo -> modelos internos
- payload_builders/: modelos internos -> formato externo
- validators/: validação de schema JSCalendar

NÃO PODE conter: regras de domínio (app/domain) nem leitura de env.
"""
