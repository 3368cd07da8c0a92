"""Pytest fixtures for testing."""
import itertools
import json
import os
from datetime import datetime, timedelta, timezone
from urllib.parse import unquote

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import httpx
import pytest
from PyQt6.QtWidgets import QApplication

from notes_client.config import Settings
from notes_client.controller import NotesController
from notes_client.repository import NoteRepository
from notes_client.views.main_window import MainWindow

BASE_URL = "http://notes.test"
CLOCK_START = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


class FakeNotesServer:
    """In-memory notes collection speaking the /api/notes protocol."""

    def __init__(self):
        self.notes: dict[str, dict] = {}
        self.requests: list[httpx.Request] = []
        self.fail = False
        self._ids = itertools.count(1)
        self._ticks = itertools.count(1)

    def _now(self) -> str:
        stamp = CLOCK_START + timedelta(minutes=next(self._ticks))
        return stamp.strftime("%Y-%m-%dT%H:%M:%S.000Z")

    def seed(self, note_id, title, content, updated_at):
        self.notes[note_id] = {
            "id": note_id,
            "title": title,
            "content": content,
            "createdAt": "2024-01-01T08:00:00.000Z",
            "updatedAt": updated_at,
        }
        return self.notes[note_id]

    def mutations(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method != "GET"]

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail:
            return httpx.Response(500, json={"error": "boom"})

        path = request.url.path
        if path == "/api/notes" and request.method == "GET":
            return httpx.Response(200, json=list(self.notes.values()))
        if path == "/api/notes" and request.method == "POST":
            body = json.loads(request.content)
            now = self._now()
            note = {
                "id": f"n{next(self._ids)}",
                "title": body["title"],
                "content": body["content"],
                "createdAt": now,
                "updatedAt": now,
            }
            self.notes[note["id"]] = note
            return httpx.Response(201, json=note)

        raw_path = request.url.raw_path.decode().split("?", 1)[0]
        note_id = unquote(raw_path.removeprefix("/api/notes/"))
        if note_id not in self.notes:
            return httpx.Response(404, json={"error": "Note not found"})
        if request.method == "PUT":
            body = json.loads(request.content)
            note = dict(self.notes[note_id], **body, updatedAt=self._now())
            self.notes[note_id] = note
            return httpx.Response(200, json=note)
        if request.method == "DELETE":
            del self.notes[note_id]
            return httpx.Response(204)
        return httpx.Response(405)


class ImmediateRunner:
    """Runs each request inline so completions happen before submit() returns."""

    def submit(self, fn, on_success, on_failure):
        try:
            result = fn()
        except Exception as exc:
            on_failure(exc)
        else:
            on_success(result)


class DeferredRunner:
    """Holds requests until run_all() is called, to interleave user actions."""

    def __init__(self):
        self.queue = []

    def submit(self, fn, on_success, on_failure):
        self.queue.append((fn, on_success, on_failure))

    def run_all(self):
        queue, self.queue = self.queue, []
        for fn, on_success, on_failure in queue:
            ImmediateRunner().submit(fn, on_success, on_failure)


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def server() -> FakeNotesServer:
    return FakeNotesServer()


@pytest.fixture
def repo(server):
    repository = NoteRepository(BASE_URL, transport=httpx.MockTransport(server.handle))
    yield repository
    repository.close()


@pytest.fixture
def settings() -> Settings:
    return Settings(base_url=BASE_URL, autosave_delay_ms=200, notification_ms=3000)


@pytest.fixture
def window(qapp):
    win = MainWindow()
    yield win
    win.close()
    win.deleteLater()


@pytest.fixture
def make_controller(window, repo, settings):
    made = []

    def make(runner=None):
        controller = NotesController(window, repo, runner or ImmediateRunner(), settings)
        made.append(controller)
        return controller

    yield make
    # Stops pending auto-save timers before the window goes away
    for controller in made:
        controller.close()


@pytest.fixture
def controller(make_controller):
    return make_controller()


@pytest.fixture
def deferred_runner() -> DeferredRunner:
    return DeferredRunner()
