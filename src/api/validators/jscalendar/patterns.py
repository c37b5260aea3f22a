"""Expressões regulares usadas pelos validadores."""

from __future__ import annotations

import re

from app.domain.duration import DURATION_REGEX

# Mesma gramática do codec de duração (fração aceita em toda unidade)
DURATION_PATTERN = DURATION_REGEX

# Valores CSS: hex, funções rgb/hsl ou nome de cor
COLOR_PATTERN = re.compile(r"^(?:#[0-9a-fA-F]{3,8}|rgb\(|rgba\(|hsl\(|hsla\(|[a-zA-Z]+)")

# Identificador IANA (formato, não existência)
TIMEZONE_PATTERN = re.compile(r"^[A-Za-z0-9/_+-]+$")

GEO_URI_PREFIX = "geo:"
