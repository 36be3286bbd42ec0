from PySide6.QtCore import Qt
from PySide6.QtWidgets import QLabel

from fairhat.core.status_notifier import StatusKind


_STYLES = {
    StatusKind.SUCCESS: "background-color: rgba(34, 197, 94, 204);",
    StatusKind.ERROR: "background-color: rgba(239, 68, 68, 204);",
}

_BASE_STYLE = (
    "color: white; font-weight: 500; padding: 12px 24px;"
    " border: 1px solid rgba(255, 255, 255, 26); border-radius: 12px;"
)


class ToastLabel(QLabel):
    """Floating label mirroring the notifier's current message."""

    MARGIN_RIGHT = 32
    MARGIN_BOTTOM = 80

    def __init__(self, notifier, parent=None):
        super().__init__(parent)
        self.notifier = notifier
        self.setAlignment(Qt.AlignCenter)
        self.setAttribute(Qt.WA_TransparentForMouseEvents, True)
        self.hide()

        notifier.message_shown.connect(self.show_message)
        notifier.message_cleared.connect(self.hide)

    def show_message(self, message):
        self.setText(message.text)
        self.setStyleSheet(_BASE_STYLE + _STYLES[message.kind])
        self.adjustSize()
        self.reposition()
        self.show()
        self.raise_()

    def reposition(self):
        parent = self.parentWidget()
        if parent is None:
            return
        x = parent.width() - self.width() - self.MARGIN_RIGHT
        y = parent.height() - self.height() - self.MARGIN_BOTTOM
        self.move(max(0, x), max(0, y))
