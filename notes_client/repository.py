from urllib.parse import quote

import httpx

from notes_client.errors import NetworkFailure
from notes_client.log import get_logger
from notes_client.models import Note

log = get_logger(__name__)

NOTES_PATH = "/api/notes"


def _note_path(note_id: str) -> str:
    return f"{NOTES_PATH}/{quote(note_id, safe='')}"


class NoteRepository:
    """Remote notes collection reached over HTTP."""

    def __init__(self, base_url="http://localhost:3000", timeout=10.0, transport=None):
        self.client = httpx.Client(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )

    def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            response = self.client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise NetworkFailure(f"{method} {url} failed: {exc}") from exc
        if not response.is_success:
            raise NetworkFailure(
                f"{method} {url} returned {response.status_code}",
                status_code=response.status_code,
            )
        log.debug("%s %s -> %s", method, url, response.status_code)
        return response

    def _json(self, response: httpx.Response):
        try:
            return response.json()
        except ValueError as exc:
            raise NetworkFailure(f"Invalid JSON from {response.request.url}") from exc

    def load(self) -> list[Note]:
        raw = self._json(self._request("GET", NOTES_PATH))
        if not isinstance(raw, list):
            raise NetworkFailure(f"Expected a list of notes, got {type(raw).__name__}")
        return [Note.from_dict(item) for item in raw]

    def add(self, title: str, content: str) -> Note:
        response = self._request("POST", NOTES_PATH, json={"title": title, "content": content})
        return Note.from_dict(self._json(response))

    def update(self, note_id: str, title: str, content: str) -> Note:
        response = self._request(
            "PUT", _note_path(note_id), json={"title": title, "content": content}
        )
        return Note.from_dict(self._json(response))

    def delete(self, note_id: str):
        self._request("DELETE", _note_path(note_id))

    def close(self):
        self.client.close()
