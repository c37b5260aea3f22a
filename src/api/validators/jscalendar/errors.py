"""Erros de validação do schema JSCalendar.

ValidationError é um par (caminho de campo, mensagem). ValidationErrors
agrega uma lista ordenada desses pares e também é uma exceção, podendo
ser devolvida ou levantada onde um erro único é esperado.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from utils.errors import JSCalendarError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

# Prefixos de mensagem que recebem o nome do campo na frente
_FIELD_PREFIXED_MESSAGES = ("must be", "cannot be", "should be")


class ValidationError(JSCalendarError, ValueError):
    """Violação de schema localizada por caminho de campo.

    Attributes:
        field: Caminho do campo (ex: `participants[bob@x].roles[foo]`).
        message: Mensagem legível.
        value: Valor ofensor, quando relevante.
    """

    def __init__(self, field: str, message: str, value: Any = None) -> None:
        super().__init__(message)
        self.field = field
        self.message = message
        self.value = value

    def with_prefix(self, prefix: str) -> ValidationError:
        """Reescreve o caminho sob o prefixo do objeto pai."""
        field = f"{prefix}.{self.field}" if self.field else prefix
        return ValidationError(field, self.message, self.value)

    def __str__(self) -> str:
        if self.field == "@type":
            return f"{self.field}: {self.message}"
        field_name = "UID" if self.field == "uid" else self.field
        if self.message == "is required" or self.message.startswith(_FIELD_PREFIXED_MESSAGES):
            return f"{field_name} {self.message}"
        return self.message

    def __repr__(self) -> str:
        return f"ValidationError(field={self.field!r}, message={self.message!r})"


class ValidationErrors(JSCalendarError, ValueError):
    """Lista ordenada de ValidationError; vazia significa sucesso."""

    def __init__(self, errors: Iterable[ValidationError] = ()) -> None:
        self.errors: list[ValidationError] = list(errors)
        super().__init__(self.errors)

    def append(self, error: ValidationError) -> None:
        self.errors.append(error)

    def extend(self, errors: Iterable[ValidationError]) -> None:
        self.errors.extend(errors)

    @property
    def fields(self) -> list[str]:
        return [error.field for error in self.errors]

    def raise_if_any(self) -> None:
        """Levanta a própria coleção se houver violações."""
        if self.errors:
            raise self

    def __iter__(self) -> Iterator[ValidationError]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    def __getitem__(self, index: int) -> ValidationError:
        return self.errors[index]

    def __bool__(self) -> bool:
        return bool(self.errors)

    def __str__(self) -> str:
        if not self.errors:
            return "no validation errors"
        if len(self.errors) == 1:
            return str(self.errors[0])
        joined = "; ".join(str(error) for error in self.errors)
        return f"multiple validation errors: {joined}"

    def __repr__(self) -> str:
        return f"ValidationErrors({self.errors!r})"


def prefixed(errors: Iterable[ValidationError], prefix: str) -> list[ValidationError]:
    """Reescreve os caminhos de uma lista de violações sob `prefix`."""
    return [error.with_prefix(prefix) for error in errors]
