from datetime import datetime, timezone

import pytest

from notes_client.errors import NetworkFailure
from notes_client.models import Closed, Creating, Editing, Note, NoteCollection

RECORD = {
    "id": "n1",
    "title": "Hello",
    "content": "World",
    "createdAt": "2024-03-01T12:00:00Z",
    "updatedAt": "2024-03-01T12:05:00.123Z",
}


def test_note_from_dict():
    note = Note.from_dict(RECORD)

    assert note.id == "n1"
    assert note.created_at == datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)
    assert note.updated_at.microsecond == 123000


@pytest.mark.parametrize("broken", [
    {k: v for k, v in RECORD.items() if k != "content"},
    dict(RECORD, updatedAt="yesterday"),
    dict(RECORD, createdAt=None),
])
def test_malformed_record(broken):
    with pytest.raises(NetworkFailure):
        Note.from_dict(broken)


def test_collection_upsert_replaces_by_id():
    first = Note.from_dict(RECORD)
    second = Note.from_dict(dict(RECORD, title="Changed"))
    notes = NoteCollection([first])

    notes.upsert(second)

    assert len(notes) == 1
    assert notes.get("n1") is second


def test_collection_remove():
    notes = NoteCollection([Note.from_dict(RECORD)])

    notes.remove("n1")
    notes.remove("n1")

    assert "n1" not in notes
    assert list(notes) == []


def test_editor_states():
    note = Note.from_dict(RECORD)

    assert Editing(note) == Editing(note)
    assert Closed() != Creating()
    assert Editing(note).note.id == "n1"


@pytest.mark.parametrize("field", ["title", "content"])
def test_null_text_field_is_rejected(field):
    with pytest.raises(NetworkFailure):
        Note.from_dict(dict(RECORD, **{field: None}))


def test_timestamp_without_offset_is_read_as_utc():
    note = Note.from_dict(dict(RECORD, updatedAt="2024-03-01T13:00:00"))

    assert note.updated_at == datetime(2024, 3, 1, 13, 0, tzinfo=timezone.utc)
    # Comparable with offset-aware values from other records
    assert note.updated_at > Note.from_dict(RECORD).updated_at
