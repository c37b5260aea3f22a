"""Variante Group do JSCalendar e união fechada CalendarObject.

As entradas de um Group são decodificadas espiando o campo `@type` de
cada elemento antes de despachar para a variante correspondente.
"""

from __future__ import annotations

from typing import Annotated, Any, TypeAlias, Union

from pydantic import Discriminator, Field, Tag

from app.constants.jscalendar import ObjectType
from app.domain.common import CalendarObjectBase, stamp_new
from app.domain.event import Event
from app.domain.task import Task


def _entry_type(value: Any) -> str | None:
    if isinstance(value, dict):
        return value.get("@type")
    return getattr(value, "type", None)


GroupEntry: TypeAlias = Annotated[
    Union[  # noqa: UP007 - ForwardRef para Group exige Union explicito
        Annotated[Event, Tag("Event")],
        Annotated[Task, Tag("Task")],
        Annotated["Group", Tag("Group")],
    ],
    Discriminator(_entry_type),
]


class Group(CalendarObjectBase):
    """Coleção de Events e Tasks.

    Um Group aninhado é aceito na decodificação para que o validador
    reporte a violação com caminho de campo, em vez de falhar no parse.
    """

    type: str = Field(ObjectType.GROUP, alias="@type")
    entries: list[GroupEntry | None] = Field(default_factory=list)
    source: str | None = None

    def add_entry(self, entry: Event | Task) -> None:
        """Adiciona Event/Task recusando tipo inválido ou UID repetido.

        Raises:
            ValueError: entrada ausente, de tipo inválido ou duplicada.
        """
        if entry is None:
            raise ValueError("cannot add absent entry to group")
        if not isinstance(entry, (Event, Task)):
            raise ValueError(
                f"invalid entry type '{_entry_type(entry)}': must be Event or Task"
            )
        if self.get_entry(entry.uid) is not None:
            raise ValueError(f"entry with UID '{entry.uid}' already exists in group")
        self.entries.append(entry)
        self.touch()

    def remove_entry(self, uid: str) -> None:
        """Remove a entrada pelo UID.

        Raises:
            KeyError: nenhuma entrada com o UID.
        """
        for index, entry in enumerate(self.entries):
            if entry is not None and entry.uid == uid:
                del self.entries[index]
                self.touch()
                return
        raise KeyError(f"entry with UID '{uid}' not found in group")

    def get_entry(self, uid: str) -> Event | Task | Group | None:
        for entry in self.entries:
            if entry is not None and entry.uid == uid:
                return entry
        return None

    def get_events(self) -> list[Event]:
        return [entry for entry in self.entries if isinstance(entry, Event)]

    def get_tasks(self) -> list[Task]:
        return [entry for entry in self.entries if isinstance(entry, Task)]

    def count_entries(self) -> int:
        return len(self.entries)

    def count_events(self) -> int:
        return len(self.get_events())

    def count_tasks(self) -> int:
        return len(self.get_tasks())


Group.model_rebuild()

CalendarObject: TypeAlias = Event | Task | Group


def new_group(uid: str, title: str) -> Group:
    """Cria Group vazio com created/updated e sequence 0."""
    group = Group(uid=uid, title=title)
    stamp_new(group)
    return group
