"""Testes para Event, Task e Group (ciclo de vida e JSON)."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from pydantic import ValidationError as PydanticValidationError

from app.constants.jscalendar import Progress
from app.domain.entities import new_participant
from app.domain.event import Event, new_event
from app.domain.group import Group, new_group
from app.domain.local_datetime import LocalDateTime
from app.domain.task import Task, new_task


class TestEvent:
    """Testes para Event."""

    def test_new_event_is_stamped(self) -> None:
        event = new_event("evt-1", "Reunião")
        assert event.type == "Event"
        assert event.sequence == 0
        assert event.created is not None
        assert event.created == event.updated
        assert event.start is not None

    def test_touch_bumps_sequence_and_updated(self) -> None:
        event = new_event("evt-1", "Reunião")
        before = event.updated
        event.add_participant("bob", new_participant("Bob", "bob@example.com"))
        event.add_category("trabalho")
        assert event.sequence == 2
        assert event.updated >= before
        assert event.categories == {"trabalho": True}

    def test_end_time_from_start_and_duration(self) -> None:
        event = Event(uid="evt-1", start="2025-01-01T23:30:00", duration="PT1H")
        assert event.get_duration() == timedelta(hours=1)
        assert event.get_end_time() == LocalDateTime(2025, 1, 2, 0, 30)

    def test_end_time_absent_without_duration(self) -> None:
        assert Event(uid="evt-1", start="2025-01-01T10:00:00").get_end_time() is None
        assert Event(uid="evt-1").get_end_time() is None

    def test_all_day_and_recurring_flags(self) -> None:
        event = Event(uid="evt-1", showWithoutTime=True)
        assert event.is_all_day() is True
        assert event.is_recurring() is False

    def test_json_uses_camel_case_and_omits_absent(self) -> None:
        event = Event(
            uid="evt-1",
            start=datetime(2025, 3, 1, 9, 0, tzinfo=UTC),
            time_zone="Europe/Lisbon",
            free_busy_status="busy",
        )
        payload = event.to_dict()
        assert payload == {
            "@type": "Event",
            "uid": "evt-1",
            "start": "2025-03-01T09:00:00",
            "timeZone": "Europe/Lisbon",
            "freeBusyStatus": "busy",
        }

    def test_unknown_keys_survive_round_trip(self) -> None:
        event = Event.model_validate({"@type": "Event", "uid": "e", "x-vendor": {"a": 1}})
        assert event.to_dict()["x-vendor"] == {"a": 1}

    def test_clone_is_deep(self) -> None:
        event = new_event("evt-1", "Reunião")
        event.add_keyword("k1")
        copy = event.clone()
        copy.keywords["k2"] = True
        assert event.keywords == {"k1": True}

    def test_patch_objects_accept_arbitrary_json(self) -> None:
        event = Event.model_validate(
            {
                "@type": "Event",
                "uid": "e",
                "recurrenceOverrides": {
                    "2025-01-08T10:00:00": {"title": "Movida", "excluded": False, "n": [1, None]}
                },
            }
        )
        override = event.recurrence_overrides["2025-01-08T10:00:00"]
        assert override == {"title": "Movida", "excluded": False, "n": [1, None]}


class TestTask:
    """Testes para Task."""

    def test_new_task_needs_action(self) -> None:
        task = new_task("task-1", "Relatório")
        assert task.type == "Task"
        assert task.progress == Progress.NEEDS_ACTION
        assert task.sequence == 0
        assert task.is_completed() is False

    def test_set_progress_touches(self) -> None:
        task = new_task("task-1", "Relatório")
        task.set_progress(Progress.COMPLETED, 100)
        assert task.is_completed() is True
        assert task.percent_complete == 100
        assert task.progress_updated is not None
        assert task.sequence == 1

    def test_overdue(self) -> None:
        task = Task(uid="t", due="2025-01-01T12:00:00")
        assert task.is_overdue(datetime(2025, 1, 2, tzinfo=UTC)) is True
        assert task.is_overdue(datetime(2024, 12, 31, tzinfo=UTC)) is False

    def test_completed_task_is_never_overdue(self) -> None:
        task = Task(uid="t", due="2020-01-01T00:00:00", progress="completed")
        assert task.is_overdue() is False

    def test_time_to_complete(self) -> None:
        task = Task(uid="t", estimated_duration="PT10H", percent_complete=40)
        assert task.get_estimated_duration() == timedelta(hours=10)
        assert task.get_time_to_complete() == timedelta(hours=6)
        assert Task(uid="t").get_time_to_complete() is None

    def test_due_serialized_as_local_datetime(self) -> None:
        task = Task(uid="t", due="2025-06-30T17:00:00+02:00")
        assert task.to_dict()["due"] == "2025-06-30T17:00:00"


class TestGroup:
    """Testes para Group."""

    def test_add_and_query_entries(self) -> None:
        group = new_group("grp-1", "Projeto")
        group.add_entry(new_event("evt-1", "Kickoff"))
        group.add_entry(new_task("task-1", "Escopo"))

        assert group.count_entries() == 2
        assert group.count_events() == 1
        assert group.count_tasks() == 1
        assert group.get_entry("task-1").title == "Escopo"
        assert group.get_entry("nope") is None
        assert group.sequence == 2

    def test_add_entry_rejects_duplicates_and_bad_types(self) -> None:
        group = new_group("grp-1", "Projeto")
        group.add_entry(new_event("evt-1", "Kickoff"))
        with pytest.raises(ValueError, match="already exists"):
            group.add_entry(new_event("evt-1", "Outro"))
        with pytest.raises(ValueError, match="must be Event or Task"):
            group.add_entry(new_group("grp-2", "Aninhado"))
        with pytest.raises(ValueError, match="absent"):
            group.add_entry(None)

    def test_remove_entry(self) -> None:
        group = new_group("grp-1", "Projeto")
        group.add_entry(new_task("task-1", "Escopo"))
        group.remove_entry("task-1")
        assert group.count_entries() == 0
        with pytest.raises(KeyError):
            group.remove_entry("task-1")

    def test_entries_decoded_by_type_tag(self) -> None:
        group = Group.model_validate(
            {
                "@type": "Group",
                "uid": "grp-1",
                "entries": [
                    {"@type": "Event", "uid": "evt-1", "start": "2025-01-01T09:00:00"},
                    {"@type": "Task", "uid": "task-1"},
                ],
            }
        )
        event, task = group.entries
        assert isinstance(event, Event)
        assert isinstance(task, Task)
        assert event.start == LocalDateTime(2025, 1, 1, 9)

    def test_unknown_entry_type_fails_decode(self) -> None:
        with pytest.raises(PydanticValidationError):
            Group.model_validate(
                {"@type": "Group", "uid": "g", "entries": [{"@type": "Note", "uid": "n"}]}
            )
