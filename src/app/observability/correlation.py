"""correlation_id para rastrear um lote de conversão/validação nos logs.

Usa ContextVar: cada thread/contexto tem seu próprio valor, e chamadas
concorrentes sobre lotes distintos não se misturam.

Uso:
    from app.observability import correlation_scope

    with correlation_scope() as correlation_id:
        converter.parse_all(data)  # logs carregam o mesmo correlation_id
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual (ou string vazia)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id; gera UUID se None.

    Returns:
        Token para reset posterior via reset_correlation_id().
    """
    return _correlation_id.set(correlation_id or generate_correlation_id())


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)


def generate_correlation_id() -> str:
    return str(uuid.uuid4())


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """Define um correlation_id pela duração do bloco.

    Reaproveita o id do contexto externo quando já existe um e nenhum
    foi informado.
    """
    value = correlation_id or get_correlation_id() or generate_correlation_id()
    token = _correlation_id.set(value)
    try:
        yield value
    finally:
        _correlation_id.reset(token)
