# ruff: noqa: INP001
from __future__ import annotations

from datetime import datetime

import pytest
from pydantic import ValidationError

from taskboard.core.opaque_ids import get_id_codec
from taskboard.models.tasks import TaskPriority, TaskStatus
from taskboard.schemas.common import INVALID_DATE_FORMAT
from taskboard.schemas.dashboards import DashboardCreate, DashboardRead, DashboardUpdate
from taskboard.schemas.tasks import TaskCreate, TaskRead, TaskReorder, TaskUpdate


def _messages(exc: ValidationError) -> list[str]:
    return [str(err["msg"]) for err in exc.errors()]


def test_task_create_accepts_full_payload() -> None:
    token = get_id_codec().encode(3)
    payload = TaskCreate.model_validate(
        {
            "title": "Write docs",
            "description": "Cover the reorder endpoint",
            "priority": "HIGH",
            "due_date": "2024-12-31T23:59:59Z",
            "dashboard_id": token,
            "status": "IN_PROGRESS",
        },
    )

    assert payload.dashboard_id == 3
    assert payload.priority == TaskPriority.HIGH
    assert payload.status == TaskStatus.IN_PROGRESS
    assert payload.due_date == datetime(2024, 12, 31, 23, 59, 59)


def test_task_create_defaults_status_to_todo() -> None:
    payload = TaskCreate.model_validate(
        {"title": "Minimal", "dashboard_id": get_id_codec().encode(1)},
    )
    assert payload.status == TaskStatus.TODO
    assert payload.description is None
    assert payload.priority is None
    assert payload.due_date is None


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2024-06-01T12:00:00Z", datetime(2024, 6, 1, 12, 0, 0)),
        ("2024-06-01T12:00:00.250Z", datetime(2024, 6, 1, 12, 0, 0, 250000)),
    ],
)
def test_task_create_due_date_is_stored_as_naive_utc(value: str, expected: datetime) -> None:
    payload = TaskCreate.model_validate(
        {"title": "Due", "dashboard_id": get_id_codec().encode(1), "due_date": value},
    )
    assert payload.due_date == expected
    assert payload.due_date.tzinfo is None


@pytest.mark.parametrize(
    "value",
    [
        "2024-12-31",
        "tomorrow",
        "2024-12-31T23:59:59",
        "31/12/2024",
        "2024-12-31T23:59:59+02:00",
        "2024-12-31T23:59:59-05:00",
        "2024-12-31T23:59:59+00:00",
    ],
)
def test_task_create_rejects_non_iso_due_dates(value: str) -> None:
    with pytest.raises(ValidationError) as exc_info:
        TaskCreate.model_validate(
            {"title": "Bad date", "dashboard_id": get_id_codec().encode(1), "due_date": value},
        )
    assert INVALID_DATE_FORMAT in _messages(exc_info.value)


@pytest.mark.parametrize("title", ["", "x" * 256])
def test_task_create_title_length_bounds(title: str) -> None:
    with pytest.raises(ValidationError):
        TaskCreate.model_validate({"title": title, "dashboard_id": get_id_codec().encode(1)})


def test_task_create_description_length_bound() -> None:
    token = get_id_codec().encode(1)
    TaskCreate.model_validate({"title": "ok", "dashboard_id": token, "description": "d" * 1000})
    with pytest.raises(ValidationError):
        TaskCreate.model_validate(
            {"title": "ok", "dashboard_id": token, "description": "d" * 1001},
        )


def test_task_create_rejects_unknown_enum_values() -> None:
    token = get_id_codec().encode(1)
    with pytest.raises(ValidationError):
        TaskCreate.model_validate({"title": "ok", "dashboard_id": token, "status": "BLOCKED"})
    with pytest.raises(ValidationError):
        TaskCreate.model_validate({"title": "ok", "dashboard_id": token, "priority": "URGENT"})


@pytest.mark.parametrize("value", ["abc-123", "test@id", "id#123", "test id", "id_123", 5])
def test_task_create_rejects_malformed_dashboard_ids(value: object) -> None:
    with pytest.raises(ValidationError) as exc_info:
        TaskCreate.model_validate({"title": "ok", "dashboard_id": value})
    assert _messages(exc_info.value) == ["Invalid ID format"]


def test_task_create_rejects_corrupted_dashboard_id() -> None:
    with pytest.raises(ValidationError) as exc_info:
        TaskCreate.model_validate(
            {"title": "ok", "dashboard_id": "InvalidHashThatCannotBeDecoded"},
        )
    assert _messages(exc_info.value) == ["Invalid or corrupted ID"]


def test_task_create_requires_dashboard_id() -> None:
    with pytest.raises(ValidationError):
        TaskCreate.model_validate({"title": "ok"})


def test_task_update_tracks_only_provided_fields() -> None:
    payload = TaskUpdate.model_validate({"title": "Renamed", "description": None})
    assert payload.model_dump(exclude_unset=True) == {"title": "Renamed", "description": None}


@pytest.mark.parametrize("field", ["title", "status", "dashboard_id"])
def test_task_update_rejects_explicit_null_for_required_fields(field: str) -> None:
    with pytest.raises(ValidationError, match=f"{field} cannot be null"):
        TaskUpdate.model_validate({field: None})


def test_task_reorder_decodes_all_ids() -> None:
    codec = get_id_codec()
    payload = TaskReorder.model_validate(
        {
            "task_id": codec.encode(1),
            "prev_id": codec.encode(2),
            "next_id": codec.encode(3),
            "target_status": "DONE",
        },
    )
    assert (payload.task_id, payload.prev_id, payload.next_id) == (1, 2, 3)
    assert payload.target_status == TaskStatus.DONE


def test_task_reorder_neighbours_are_optional() -> None:
    payload = TaskReorder.model_validate({"task_id": get_id_codec().encode(9)})
    assert payload.prev_id is None
    assert payload.next_id is None
    assert payload.target_status is None


def test_task_reorder_rejects_raw_integer_task_id() -> None:
    with pytest.raises(ValidationError) as exc_info:
        TaskReorder.model_validate({"task_id": 9})
    assert _messages(exc_info.value) == ["Invalid ID format"]


def test_task_read_serializes_ids_as_tokens() -> None:
    codec = get_id_codec()
    now = datetime(2024, 1, 1, 12, 0, 0)
    read = TaskRead(
        id=11,
        dashboard_id=4,
        title="t",
        status=TaskStatus.TODO,
        position=1024,
        created_at=now,
        updated_at=now,
    )

    dumped = read.model_dump(mode="json")
    assert dumped["id"] == codec.encode(11)
    assert dumped["dashboard_id"] == codec.encode(4)
    assert dumped["position"] == 1024

    # FastAPI re-validates dumped responses; tokens must round-trip.
    assert TaskRead.model_validate(dumped).id == 11


def test_dashboard_schemas() -> None:
    assert DashboardCreate.model_validate({"title": "Sprint"}).title == "Sprint"
    with pytest.raises(ValidationError):
        DashboardCreate.model_validate({"title": ""})
    with pytest.raises(ValidationError, match="title cannot be null"):
        DashboardUpdate.model_validate({"title": None})
    assert DashboardUpdate.model_validate({}).model_dump(exclude_unset=True) == {}

    now = datetime(2024, 1, 1)
    read = DashboardRead(id=2, title="Sprint", created_at=now, updated_at=now)
    assert read.model_dump(mode="json")["id"] == get_id_codec().encode(2)
