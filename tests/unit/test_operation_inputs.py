from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from buddy_core.db import schemas


def test_inputs_accept_camel_case_keys():
    payload = schemas.TaskCreate.model_validate(
        {"associationId": 1, "title": "Setup laptop", "usefulLink": "https://wiki.example/laptop"}
    )
    assert payload.association_id == 1
    assert payload.useful_link == "https://wiki.example/laptop"
    assert payload.status == "pending"


def test_ids_must_be_integers():
    for bad in ("1", 1.5, True, None):
        with pytest.raises(ValidationError):
            schemas.IdInput.model_validate({"id": bad})


def test_unknown_keys_are_rejected():
    with pytest.raises(ValidationError):
        schemas.BuddyCreate.model_validate({"userId": 1, "role": "admin"})


def test_status_must_be_in_closed_set():
    with pytest.raises(ValidationError):
        schemas.BuddyCreate.model_validate({"userId": 1, "status": "busy"})
    with pytest.raises(ValidationError):
        schemas.TaskUpdate.model_validate({"id": 1, "status": "in_progress"})
    assert schemas.TaskUpdate.model_validate({"id": 1, "status": "inProgress"}).status == "inProgress"


def test_dates_must_parse():
    with pytest.raises(ValidationError):
        schemas.AssociationCreate.model_validate({"buddyId": 1, "newHireId": 1, "startDate": "next tuesday"})
    ok = schemas.AssociationCreate.model_validate(
        {"buddyId": 1, "newHireId": 1, "startDate": "2025-01-06T09:00:00Z"}
    )
    assert ok.start_date.year == 2025


def test_task_title_must_not_be_empty():
    with pytest.raises(ValidationError):
        schemas.TaskCreate.model_validate({"associationId": 1, "title": ""})


def test_field_length_limits():
    with pytest.raises(ValidationError):
        schemas.BuddyCreate.model_validate({"userId": 1, "level": "x" * 51})
    with pytest.raises(ValidationError):
        schemas.TaskCreate.model_validate({"associationId": 1, "title": "t", "usefulLink": "x" * 501})


def test_update_changes_only_include_sent_keys():
    update = schemas.TaskUpdate.model_validate({"id": 3, "description": None, "dueDate": "2025-02-01T00:00:00Z"})
    changes = update.changes()
    assert set(changes) == {"description", "due_date"}
    assert changes["description"] is None


def test_required_columns_cannot_be_nulled():
    with pytest.raises(ValidationError):
        schemas.TaskUpdate.model_validate({"id": 3, "title": None})
    with pytest.raises(ValidationError):
        schemas.AssociationUpdate.model_validate({"id": 3, "status": None})
    with pytest.raises(ValidationError):
        schemas.MeetingUpdate.model_validate({"id": 3, "scheduledAt": None})


def test_meeting_note_create_has_no_author_field():
    with pytest.raises(ValidationError):
        schemas.MeetingNoteCreate.model_validate({"meetingId": 1, "content": "x", "userId": 99})


@pytest.mark.parametrize("raw", [12345, 1736150400.5, "12345", True])
def test_dates_reject_epoch_numbers(raw):
    with pytest.raises(ValidationError):
        schemas.AssociationCreate.model_validate({"buddyId": 1, "newHireId": 1, "startDate": raw})
    with pytest.raises(ValidationError):
        schemas.MeetingUpdate.model_validate({"id": 1, "completedAt": raw})


def test_input_dates_are_normalised_to_utc():
    payload = schemas.MeetingCreate.model_validate(
        {"associationId": 1, "scheduledAt": "2025-01-07T12:00:00+02:00"}
    )
    assert payload.scheduled_at == datetime(2025, 1, 7, 10, 0, tzinfo=timezone.utc)
    assert payload.scheduled_at.utcoffset() == timedelta(0)

    naive = schemas.TaskCreate.model_validate({"associationId": 1, "title": "t", "dueDate": "2025-01-08T17:00:00"})
    assert naive.due_date.tzinfo is not None


def test_records_render_naive_store_values_as_utc():
    record = schemas.Meeting.model_validate(
        {
            "id": 1,
            "associationId": 1,
            "scheduledAt": datetime(2025, 1, 7, 10, 0),
            "createdAt": datetime(2025, 1, 1),
            "updatedAt": datetime(2025, 1, 1),
        }
    )
    dumped = record.model_dump(by_alias=True, mode="json")
    assert dumped["scheduledAt"] == "2025-01-07T10:00:00Z"
    assert dumped["completedAt"] is None
