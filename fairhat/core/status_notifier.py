from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from PySide6.QtCore import QObject, QTimer, Signal, Slot


DEFAULT_STATUS_TIMEOUT_MS = 1000


class StatusKind(Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class StatusMessage:
    text: str
    kind: StatusKind


class StatusNotifier(QObject):
    """Holds at most one transient status message.

    The notifier owns a single single-shot timer. Showing a message restarts
    it, which drops the pending dismissal of the previous message.
    """

    message_shown = Signal(object)
    message_cleared = Signal()

    def __init__(self, timeout_ms: int = DEFAULT_STATUS_TIMEOUT_MS, parent=None):
        super().__init__(parent)
        self.timeout_ms = max(0, int(timeout_ms))
        self.current: StatusMessage | None = None
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self.clear)

    @property
    def is_pending(self) -> bool:
        return self._timer.isActive()

    def show(self, text: str, kind: StatusKind = StatusKind.SUCCESS) -> StatusMessage:
        self._timer.stop()
        message = StatusMessage(text, kind)
        self.current = message
        self.message_shown.emit(message)
        self._timer.start(self.timeout_ms)
        return message

    def success(self, text: str) -> StatusMessage:
        return self.show(text, StatusKind.SUCCESS)

    def error(self, text: str) -> StatusMessage:
        return self.show(text, StatusKind.ERROR)

    @Slot()
    def clear(self):
        self._timer.stop()
        if self.current is None:
            return
        self.current = None
        self.message_cleared.emit()

    def shutdown(self):
        """Stop the dismiss timer; called when the owning window closes."""
        self._timer.stop()
