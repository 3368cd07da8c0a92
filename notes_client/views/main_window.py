# notes_client/views/main_window.py

from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QListWidget, QListWidgetItem, QPlainTextEdit,
    QPushButton, QLineEdit, QSplitter, QStackedWidget,
    QProgressBar, QMessageBox, QSizePolicy
)
from PyQt6.QtCore import Qt, QSize, pyqtSignal

from notes_client.presentation import item_html
from notes_client.views.toast import Toast

NOTE_ID_ROLE = Qt.ItemDataRole.UserRole


class MainWindow(QMainWindow):
    """Widgets only. State lives in NotesController."""

    noteActivated = pyqtSignal(str)

    def __init__(self, notification_ms=3000, preview_length=100):
        super().__init__()
        self.setWindowTitle("Нотатки")
        self.preview_length = preview_length
        self._build_ui()
        self.toast = Toast(self, notification_ms)

    def _build_ui(self):
        outer = QSplitter(Qt.Orientation.Horizontal)
        outer.setHandleWidth(1)

        # ─── NAVIGATION ───
        nav = QWidget()
        nav_lyt = QVBoxLayout(nav)
        nav_lyt.setContentsMargins(8, 8, 8, 8)

        lbl_title = QLabel("Нотатки")
        lbl_title.setStyleSheet("font-size:18px; font-weight:bold;")
        nav_lyt.addWidget(lbl_title)

        self.search = QLineEdit()
        self.search.setPlaceholderText("Пошук…")
        nav_lyt.addWidget(self.search)

        self.btn_new = QPushButton("+ Новий запис")
        self.btn_new.setObjectName("newNoteButton")
        self.btn_new.setFixedHeight(28)
        self.btn_new.setSizePolicy(
            QSizePolicy.Policy.Expanding,
            QSizePolicy.Policy.Fixed
        )
        self.btn_new.setStyleSheet("""
            background-color: #2a2a2a;
            border: none;
            border-radius: 4px;
            color: #E0E0E0;
            font-size: 14px;
        """)
        nav_lyt.addWidget(self.btn_new)

        nav_lyt.addSpacing(12)
        self.note_list = QListWidget()
        self.note_list.setStyleSheet("font-size:14px;")
        self.note_list.setIconSize(QSize(24, 24))
        self.note_list.currentItemChanged.connect(self._on_current_changed)
        nav_lyt.addWidget(self.note_list, stretch=1)

        self.loading = QProgressBar()
        self.loading.setRange(0, 0)
        self.loading.setTextVisible(False)
        self.loading.setFixedHeight(4)
        self.loading.setVisible(False)
        nav_lyt.addWidget(self.loading)

        outer.addWidget(nav)

        # ─── EDITOR ───
        self.stack = QStackedWidget()

        self.empty_state = QLabel("Оберіть нотатку або створіть нову")
        self.empty_state.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.empty_state.setStyleSheet("color:#7f8c8d; font-style:italic;")
        self.stack.addWidget(self.empty_state)

        self.form = QWidget()
        self.form.setStyleSheet("background-color: #121212;")
        flyt = QVBoxLayout(self.form)
        flyt.setContentsMargins(8, 8, 8, 8)

        self.title_edit = QLineEdit()
        self.title_edit.setPlaceholderText("Заголовок")
        self.title_edit.setStyleSheet("font-size:16px; font-weight:600;")
        flyt.addWidget(self.title_edit)

        self.lbl_meta = QLabel()
        self.lbl_meta.setStyleSheet("color:#9e9e9e; font-size:12px;")
        flyt.addWidget(self.lbl_meta)

        self.content_edit = QPlainTextEdit()
        self.content_edit.setPlaceholderText("Текст нотатки…")
        flyt.addWidget(self.content_edit, stretch=1)

        buttons = QHBoxLayout()
        buttons.addStretch()
        self.btn_cancel = QPushButton("Скасувати")
        self.btn_delete = QPushButton("Видалити")
        self.btn_save = QPushButton("Зберегти")
        for btn in (self.btn_cancel, self.btn_delete, self.btn_save):
            buttons.addWidget(btn)
        flyt.addLayout(buttons)

        self.stack.addWidget(self.form)
        outer.addWidget(self.stack)

        outer.setSizes([300, 600])
        self.setCentralWidget(outer)

    def _on_current_changed(self, current, previous):
        """Clicks and arrow keys both land here; render_notes blocks it while rebuilding."""
        note_id = current.data(NOTE_ID_ROLE) if current else None
        if note_id:
            self.noteActivated.emit(note_id)

    # ─── LIST ───
    def render_notes(self, notes, active_id=None):
        """Rebuild the list from already sorted notes and mark active_id as current."""
        self.note_list.blockSignals(True)
        self.note_list.clear()
        if not notes:
            item = QListWidgetItem("Нотаток не знайдено")
            item.setFlags(Qt.ItemFlag.NoItemFlags)
            self.note_list.addItem(item)
        for note in notes:
            item = QListWidgetItem()
            item.setData(NOTE_ID_ROLE, note.id)
            label = QLabel(item_html(note, self.preview_length))
            label.setTextFormat(Qt.TextFormat.RichText)
            label.setContentsMargins(6, 4, 6, 4)
            item.setSizeHint(label.sizeHint())
            self.note_list.addItem(item)
            self.note_list.setItemWidget(item, label)
            if note.id == active_id:
                self.note_list.setCurrentItem(item)
        if active_id is None:
            self.note_list.setCurrentRow(-1)
        self.note_list.blockSignals(False)

    def listed_note_ids(self) -> list[str]:
        ids = []
        for i in range(self.note_list.count()):
            note_id = self.note_list.item(i).data(NOTE_ID_ROLE)
            if note_id:
                ids.append(note_id)
        return ids

    def active_note_id(self):
        item = self.note_list.currentItem()
        return item.data(NOTE_ID_ROLE) if item else None

    # ─── EDITOR ───
    def show_editor(self):
        self.stack.setCurrentWidget(self.form)

    def show_placeholder(self):
        self.stack.setCurrentWidget(self.empty_state)

    def editor_visible(self) -> bool:
        return self.stack.currentWidget() is self.form

    def set_fields(self, title: str, content: str):
        """Fill the editor without emitting change signals."""
        for widget in (self.title_edit, self.content_edit):
            widget.blockSignals(True)
        self.title_edit.setText(title)
        self.content_edit.setPlainText(content)
        for widget in (self.title_edit, self.content_edit):
            widget.blockSignals(False)

    def fields(self) -> tuple[str, str]:
        return self.title_edit.text(), self.content_edit.toPlainText()

    def set_meta(self, text: str):
        self.lbl_meta.setText(text)

    def set_delete_visible(self, visible: bool):
        self.btn_delete.setVisible(visible)

    # ─── FEEDBACK ───
    def set_busy(self, busy: bool):
        self.loading.setVisible(busy)

    def notify(self, message: str, kind: str = "success"):
        self.toast.show_message(message, kind)

    def confirm(self, question: str) -> bool:
        reply = QMessageBox.question(
            self,
            "Підтвердження",
            question,
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No,
        )
        return reply == QMessageBox.StandardButton.Yes
