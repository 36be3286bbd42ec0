from PySide6.QtCore import QEvent, QPointF, QSize, QSizeF, Qt
from PySide6.QtGui import QColor, QCursor, QPainter, QPolygonF
from PySide6.QtWidgets import QSizePolicy, QWidget

from fairhat.commands.gesture_controller import GestureController
from fairhat.core.geometry import resolve_viewport
from fairhat.core.transform import overlay_rect, overlay_transform


CANVAS_BACKGROUND_COLOR = QColor(255, 107, 43, 13)
CANVAS_BORDER_COLOR = QColor(255, 107, 43, 128)

_TOUCH_EVENTS = (
    QEvent.Type.TouchBegin,
    QEvent.Type.TouchUpdate,
    QEvent.Type.TouchEnd,
    QEvent.Type.TouchCancel,
)


class EditorCanvas(QWidget):
    """Interactive preview of the base photo with the overlay on top.

    The widget is the container the overlay pose is measured in: the base
    image is contain-fitted inside it and the overlay rests at its center.
    """

    MAX_WIDTH = 800
    PREFERRED_HEIGHT = 600

    def __init__(self, editor, parent=None):
        super().__init__(parent)
        self.editor = editor
        self.gesture_controller = GestureController(editor)

        self.setAttribute(Qt.WA_AcceptTouchEvents, True)
        self.setMouseTracking(True)
        self.setMinimumSize(320, 240)
        self.setMaximumWidth(self.MAX_WIDTH)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)

        self.editor.transform_changed.connect(self._on_editor_changed)
        self.editor.base_image_changed.connect(self._on_editor_changed)
        self.editor.overlay_changed.connect(self._on_editor_changed)

    def _on_editor_changed(self, *_):
        self.update()

    def sizeHint(self):
        return QSize(self.MAX_WIDTH, self.PREFERRED_HEIGHT)

    # Geometry ------------------------------------------------------------
    def container_size(self) -> QSizeF:
        return QSizeF(self.width(), self.height())

    def overlay_origin(self) -> QPointF:
        return QPointF(self.width() / 2, self.height() / 2)

    def overlay_matrix(self):
        return overlay_transform(self.editor.transform, self.overlay_origin())

    def overlay_bounds(self):
        return overlay_rect(
            QSizeF(self.editor.overlay_image.size()),
            self.editor.overlay_base_width,
        )

    def overlay_contains(self, pos: QPointF) -> bool:
        polygon = self.overlay_matrix().map(QPolygonF(self.overlay_bounds()))
        return polygon.containsPoint(QPointF(pos), Qt.OddEvenFill)

    # Painting ------------------------------------------------------------
    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.SmoothPixmapTransform, True)
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.fillRect(self.rect(), CANVAS_BACKGROUND_COLOR)

        base_image = self.editor.base_image
        dimensions = self.editor.image_dimensions
        if base_image is not None and dimensions is not None and self.width() > 0 and self.height() > 0:
            geometry = resolve_viewport(self.container_size(), dimensions)
            painter.drawImage(geometry.display_rect(), base_image)

        painter.save()
        painter.setTransform(self.overlay_matrix())
        painter.drawImage(self.overlay_bounds(), self.editor.overlay_image)
        painter.restore()

        painter.setPen(CANVAS_BORDER_COLOR)
        painter.setBrush(Qt.NoBrush)
        painter.drawRect(self.rect().adjusted(0, 0, -1, -1))
        painter.end()

    # Input ---------------------------------------------------------------
    def mousePressEvent(self, event):
        hit = self.overlay_contains(event.position())
        if self.gesture_controller.mousePressEvent(event, hit):
            self.setCursor(QCursor(Qt.ClosedHandCursor))
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        if self.gesture_controller.is_dragging:
            self.gesture_controller.mouseMoveEvent(event)
            event.accept()
        self._update_hover_cursor(event.position())

    def mouseReleaseEvent(self, event):
        self.gesture_controller.mouseReleaseEvent(event)
        self._update_hover_cursor(event.position())

    def leaveEvent(self, event):
        self.gesture_controller.leaveEvent(event)
        self.unsetCursor()
        super().leaveEvent(event)

    def event(self, event):
        if event.type() in _TOUCH_EVENTS:
            hit = False
            if event.type() == QEvent.Type.TouchBegin and event.points():
                hit = self.overlay_contains(event.points()[0].position())
            self.gesture_controller.touchEvent(event, hit)
            event.accept()
            return True
        return super().event(event)

    def _update_hover_cursor(self, pos):
        if self.gesture_controller.is_dragging:
            self.setCursor(QCursor(Qt.ClosedHandCursor))
        elif self.overlay_contains(pos):
            self.setCursor(QCursor(Qt.OpenHandCursor))
        else:
            self.unsetCursor()
