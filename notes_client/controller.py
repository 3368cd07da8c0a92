from functools import partial

from PyQt6.QtCore import QObject, QTimer

from notes_client.errors import NotesError, ValidationFailure
from notes_client.log import get_logger
from notes_client.models import Closed, Creating, Editing, EditorState, NoteCollection
from notes_client.presentation import filter_notes, note_meta

log = get_logger(__name__)


class NotesController(QObject):
    """Keeps the note list, the editor and the remote collection in sync.

    Notes only enter or change in ``self.notes`` when the server confirms a
    request. All callbacks, including request completions delivered by the
    runner, execute on the GUI thread.
    """

    def __init__(self, window, repo, runner, settings):
        super().__init__(window)
        self.window = window
        self.repo = repo
        self.runner = runner
        self.notes = NoteCollection()
        self.state: EditorState = Closed()
        self.query = ""
        self._busy = 0

        self._autosave_timer = QTimer(self)
        self._autosave_timer.setSingleShot(True)
        self._autosave_timer.setInterval(settings.autosave_delay_ms)
        self._autosave_timer.timeout.connect(self._on_autosave_timeout)

        self._connect()

    def _connect(self):
        w = self.window
        w.btn_new.clicked.connect(self.create_new)
        w.btn_save.clicked.connect(lambda: self.save())
        w.btn_delete.clicked.connect(self.delete)
        w.btn_cancel.clicked.connect(self.cancel_edit)
        w.search.textChanged.connect(self.search)
        w.noteActivated.connect(self.select_note)
        w.title_edit.textChanged.connect(self._on_field_edited)
        w.content_edit.textChanged.connect(self._on_field_edited)

    # ─── LIFECYCLE ───
    def start(self):
        self.window.show_placeholder()
        self._render_list()
        self.load()

    def close(self):
        self._autosave_timer.stop()
        self.repo.close()

    # ─── OPERATIONS ───
    def load(self):
        self._begin(silent=False)
        self.runner.submit(self.repo.load, self._on_loaded, self._on_load_failed)

    def search(self, query: str):
        """Filter the rendered list. Does not touch notes or the editor."""
        self.query = query
        return self._render_list()

    def select_note(self, note_id: str):
        note = self.notes.get(note_id)
        if note is None:
            return
        self._autosave_timer.stop()
        self.state = Editing(note)
        self.window.show_editor()
        self._populate_editor(note)
        self._render_list()

    def create_new(self):
        self._autosave_timer.stop()
        self.state = Creating()
        self.window.show_editor()
        self.window.set_fields("", "")
        self.window.set_meta("")
        self.window.set_delete_visible(False)
        self.window.title_edit.setFocus()
        self._render_list()

    def save(self, silent=False):
        state = self.state
        if isinstance(state, Closed):
            return
        try:
            title, content = self._read_editor()
        except ValidationFailure as exc:
            log.debug("Save skipped: %s", exc)
            if not silent:
                self.window.notify("Заголовок і текст обов'язкові", "error")
            return

        if isinstance(state, Editing):
            request = partial(self.repo.update, state.note.id, title, content)
        else:
            request = partial(self.repo.add, title, content)
        self._begin(silent)
        self.runner.submit(
            request,
            partial(self._on_saved, state, silent),
            partial(self._on_save_failed, silent),
        )

    def delete(self):
        state = self.state
        if not isinstance(state, Editing):
            return
        # The dialog runs its own event loop, so the timer must not fire under it
        self._autosave_timer.stop()
        if not self.window.confirm("Ви впевнені, що хочете видалити цю нотатку?"):
            return
        self._begin(silent=False)
        self.runner.submit(
            partial(self.repo.delete, state.note.id),
            partial(self._on_deleted, state.note.id),
            self._on_delete_failed,
        )

    def cancel_edit(self):
        self._autosave_timer.stop()
        if isinstance(self.state, Editing):
            self._populate_editor(self.state.note)
        elif isinstance(self.state, Creating):
            self._close_editor()

    # ─── COMPLETIONS ───
    def _on_loaded(self, notes):
        self._end(silent=False)
        self.notes.replace_all(notes)
        log.info("Loaded %d note(s)", len(self.notes))
        self._render_list()

    def _on_load_failed(self, exc):
        self._end(silent=False)
        self._check_expected(exc)
        log.error("Error loading notes: %s", exc)
        self.window.notify("Не вдалося завантажити нотатки", "error")

    def _on_saved(self, origin, silent, note):
        self._end(silent)
        self.notes.upsert(note)
        if self._still_on(origin):
            self.state = Editing(note)
            self.window.set_meta(note_meta(note))
            self.window.set_delete_visible(True)
        self._render_list()
        if not silent:
            self.window.notify("Нотатку збережено", "success")

    def _on_save_failed(self, silent, exc):
        self._end(silent)
        self._check_expected(exc)
        if silent:
            log.warning("Auto-save failed: %s", exc)
            return
        log.error("Error saving note: %s", exc)
        self.window.notify("Не вдалося зберегти нотатку", "error")

    def _on_deleted(self, note_id, _result):
        self._end(silent=False)
        self.notes.remove(note_id)
        self._close_editor()
        self.window.notify("Нотатку видалено", "success")

    def _on_delete_failed(self, exc):
        self._end(silent=False)
        self._check_expected(exc)
        log.error("Error deleting note: %s", exc)
        self.window.notify("Не вдалося видалити нотатку", "error")

    # ─── AUTO-SAVE ───
    def _on_field_edited(self, *_):
        if isinstance(self.state, Editing):
            self._autosave_timer.start()

    def _on_autosave_timeout(self):
        if isinstance(self.state, Editing):
            self.save(silent=True)

    # ─── HELPERS ───
    def visible_notes(self):
        return filter_notes(self.notes, self.query)

    def _render_list(self):
        notes = self.visible_notes()
        active_id = self.state.note.id if isinstance(self.state, Editing) else None
        self.window.render_notes(notes, active_id)
        return notes

    def _read_editor(self):
        title, content = (value.strip() for value in self.window.fields())
        if not title or not content:
            raise ValidationFailure("Title and content are required")
        return title, content

    def _populate_editor(self, note):
        self.window.set_fields(note.title, note.content)
        self.window.set_meta(note_meta(note))
        self.window.set_delete_visible(True)

    def _close_editor(self):
        self.state = Closed()
        self.window.show_placeholder()
        self._render_list()

    def _still_on(self, origin) -> bool:
        """Whether the editor still shows what the finished request was saving."""
        if isinstance(origin, Editing):
            return isinstance(self.state, Editing) and self.state.note.id == origin.note.id
        return self.state is origin

    def _begin(self, silent):
        if not silent:
            self._busy += 1
            self.window.set_busy(True)

    def _end(self, silent):
        if not silent:
            self._busy = max(0, self._busy - 1)
            self.window.set_busy(self._busy > 0)

    @staticmethod
    def _check_expected(exc):
        if not isinstance(exc, NotesError):
            raise exc
