from dataclasses import dataclass
from datetime import datetime, timezone

from notes_client.errors import NetworkFailure


def _timestamp(value) -> datetime:
    """Parse an ISO-8601 timestamp; values without an offset are taken as UTC."""
    stamp = datetime.fromisoformat(value)
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    return stamp


@dataclass(frozen=True)
class Note:
    id: str
    title: str
    content: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_dict(cls, item: dict) -> "Note":
        """Build a note from the server's JSON record."""
        if not isinstance(item, dict) or item.get("id") is None:
            raise NetworkFailure(f"Malformed note record: {item!r}")
        if not isinstance(item.get("title"), str) or not isinstance(item.get("content"), str):
            raise NetworkFailure(f"Note {item['id']!r} has a non-text title or content")
        try:
            return cls(
                id=str(item["id"]),
                title=item["title"],
                content=item["content"],
                created_at=_timestamp(item["createdAt"]),
                updated_at=_timestamp(item["updatedAt"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise NetworkFailure(f"Malformed note record: {item!r}") from exc


# Editor states. Only Editing carries a note.
@dataclass(frozen=True)
class Closed:
    pass


@dataclass(frozen=True)
class Creating:
    pass


@dataclass(frozen=True)
class Editing:
    note: Note


EditorState = Closed | Creating | Editing


class NoteCollection:
    """Notes known to the client, keyed by id."""

    def __init__(self, notes=()):
        self._notes: dict[str, Note] = {}
        self.replace_all(notes)

    def replace_all(self, notes):
        self._notes = {n.id: n for n in notes}

    def get(self, note_id: str) -> Note | None:
        return self._notes.get(note_id)

    def upsert(self, note: Note):
        self._notes[note.id] = note

    def remove(self, note_id: str):
        self._notes.pop(note_id, None)

    def __contains__(self, note_id) -> bool:
        return note_id in self._notes

    def __iter__(self):
        return iter(list(self._notes.values()))

    def __len__(self) -> int:
        return len(self._notes)
