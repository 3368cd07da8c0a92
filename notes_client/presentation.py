"""Pure helpers shared by the controller and the list view."""
from datetime import datetime
from html import escape

from notes_client.models import Note

ELLIPSIS = "..."


def sort_notes(notes) -> list[Note]:
    """Most recently updated first."""
    return sorted(notes, key=lambda n: n.updated_at, reverse=True)


def filter_notes(notes, query: str) -> list[Note]:
    """Notes whose title or content contains query, ignoring case. Blank query keeps all."""
    if not query.strip():
        return sort_notes(notes)
    needle = query.lower()
    return sort_notes(
        n for n in notes
        if needle in n.title.lower() or needle in n.content.lower()
    )


def preview(content: str, limit: int = 100) -> str:
    if len(content) > limit:
        return content[:limit] + ELLIPSIS
    return content


def format_date(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone()
    return value.strftime("%d.%m.%Y %H:%M")


def note_meta(note: Note) -> str:
    return f"Створено: {format_date(note.created_at)} | Оновлено: {format_date(note.updated_at)}"


def item_html(note: Note, limit: int = 100) -> str:
    """Rich-text body of a list entry. Title and preview are escaped."""
    return (
        f"<b>{escape(note.title)}</b><br>"
        f"{escape(preview(note.content, limit))}<br>"
        f"<small>{format_date(note.updated_at)}</small>"
    )
