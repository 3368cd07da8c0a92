import sys

from PyQt6.QtWidgets import QApplication

from notes_client.config import get_settings
from notes_client.controller import NotesController
from notes_client.log import get_logger, set_level
from notes_client.repository import NoteRepository
from notes_client.tasks import ThreadPoolRunner
from notes_client.views.main_window import MainWindow

log = get_logger(__name__)


def main():
    settings = get_settings()
    set_level(settings.log_level)

    app = QApplication(sys.argv)
    # load QSS stylesheet
    try:
        with open(settings.stylesheet, "r", encoding="utf-8") as f:
            app.setStyleSheet(f.read())
    except FileNotFoundError:
        log.debug("No stylesheet at %s", settings.stylesheet)

    repo = NoteRepository(settings.base_url, timeout=settings.request_timeout)
    runner = ThreadPoolRunner()
    window = MainWindow(
        notification_ms=settings.notification_ms,
        preview_length=settings.preview_length,
    )
    controller = NotesController(window, repo, runner, settings)
    log.info("Using notes service at %s", settings.base_url)

    window.show()
    controller.start()
    try:
        code = app.exec()
    finally:
        runner.shutdown()
        controller.close()
    sys.exit(code)


if __name__ == "__main__":
    main()
