"""Run repository calls off the GUI thread.

A runner takes a callable plus success and failure callbacks. The callable
runs on a worker; the callbacks always run on the GUI thread, so the
controller's state is only touched there.
"""
from PyQt6.QtCore import QObject, QRunnable, QThreadPool, pyqtSignal, pyqtSlot

from notes_client.log import get_logger

log = get_logger(__name__)


class _TaskSignals(QObject):
    # (task, result) and (task, exception)
    succeeded = pyqtSignal(object, object)
    failed = pyqtSignal(object, object)


class _Task(QRunnable):
    def __init__(self, fn, on_success, on_failure):
        super().__init__()
        self.fn = fn
        self.on_success = on_success
        self.on_failure = on_failure
        self.signals = _TaskSignals()

    def run(self):
        try:
            result = self.fn()
        except Exception as exc:
            self.signals.failed.emit(self, exc)
        else:
            self.signals.succeeded.emit(self, result)


class ThreadPoolRunner(QObject):
    def __init__(self, max_workers: int = 2, parent=None):
        super().__init__(parent)
        self.pool = QThreadPool(self)
        self.pool.setMaxThreadCount(max_workers)
        # Tasks stay referenced until their result has been delivered
        self._pending: set[_Task] = set()

    def submit(self, fn, on_success, on_failure):
        task = _Task(fn, on_success, on_failure)
        task.setAutoDelete(False)
        task.signals.succeeded.connect(self._deliver_success)
        task.signals.failed.connect(self._deliver_failure)
        self._pending.add(task)
        self.pool.start(task)

    @pyqtSlot(object, object)
    def _deliver_success(self, task, result):
        self._pending.discard(task)
        task.on_success(result)

    @pyqtSlot(object, object)
    def _deliver_failure(self, task, exc):
        self._pending.discard(task)
        task.on_failure(exc)

    def shutdown(self, timeout_ms: int = 3000):
        if not self.pool.waitForDone(timeout_ms):
            log.warning("%d request(s) still running at shutdown", self.pool.activeThreadCount())
