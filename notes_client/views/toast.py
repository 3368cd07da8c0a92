from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtWidgets import QLabel

COLORS = {"success": "#27ae60", "error": "#e74c3c"}


class Toast(QLabel):
    """Notification pinned to the top-right corner of its parent, hidden after a delay."""

    def __init__(self, parent, duration_ms=3000):
        super().__init__(parent)
        self.duration_ms = duration_ms
        self.kind = None
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setWordWrap(True)
        self.setMaximumWidth(360)
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self.hide)
        self.hide()

    def show_message(self, message: str, kind: str = "success"):
        self.kind = kind
        self.setText(message)
        self.setStyleSheet(f"""
            background-color: {COLORS.get(kind, COLORS['error'])};
            color: white;
            font-weight: 500;
            border-radius: 4px;
            padding: 12px 18px;
        """)
        self.adjustSize()
        parent = self.parentWidget()
        self.move(parent.width() - self.width() - 20, 20)
        self.raise_()
        self.show()
        self._timer.start(self.duration_ms)
