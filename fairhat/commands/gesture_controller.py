from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from PySide6.QtCore import QEvent, Qt
from PySide6.QtGui import QEventPoint

from fairhat.core.transform import Position


MOUSE_POINTER_ID = -1


class DragState(Enum):
    IDLE = auto()
    DRAGGING = auto()


@dataclass(frozen=True)
class DragSession:
    anchor: Position
    pointer_id: int


class GestureController:
    """Turns mouse and single-finger touch drags into overlay positions.

    *target* exposes the current ``transform`` and a ``set_position`` method;
    in the application that is the :class:`EditorController`. Only one drag
    session exists at a time. Every terminal event (release, leave, touch end
    or cancel) returns the controller to idle so a lost release cannot leave
    the overlay following the pointer.
    """

    def __init__(self, target):
        self.target = target
        self.session: DragSession | None = None

    @property
    def state(self) -> DragState:
        return DragState.IDLE if self.session is None else DragState.DRAGGING

    @property
    def is_dragging(self) -> bool:
        return self.session is not None

    # ------------------------------------------------------------------
    # Device independent transitions
    # ------------------------------------------------------------------
    def begin(self, pointer_pos: Position, pointer_id: int = MOUSE_POINTER_ID) -> bool:
        if self.session is not None:
            return False
        anchor = pointer_pos - self.target.transform.position
        self.session = DragSession(anchor=anchor, pointer_id=pointer_id)
        return True

    def update(self, pointer_pos: Position, pointer_id: int = MOUSE_POINTER_ID) -> bool:
        session = self.session
        if session is None or session.pointer_id != pointer_id:
            return False
        self.target.set_position(pointer_pos - session.anchor)
        return True

    def end(self, pointer_id: int | None = None) -> bool:
        """Finish the session; with *pointer_id* only if that pointer owns it."""
        session = self.session
        if session is None:
            return False
        if pointer_id is not None and session.pointer_id != pointer_id:
            return False
        self.session = None
        return True

    def cancel(self) -> bool:
        return self.end()

    # ------------------------------------------------------------------
    # Mouse
    # ------------------------------------------------------------------
    def mousePressEvent(self, event, hit: bool = True) -> bool:
        if event.button() != Qt.LeftButton or not hit:
            return False
        return self.begin(Position.from_point(event.position()), MOUSE_POINTER_ID)

    def mouseMoveEvent(self, event) -> bool:
        if self.session is None or self.session.pointer_id != MOUSE_POINTER_ID:
            return False
        if not (event.buttons() & Qt.LeftButton):
            # The release happened somewhere we did not see it.
            self.end(MOUSE_POINTER_ID)
            return False
        return self.update(Position.from_point(event.position()), MOUSE_POINTER_ID)

    def mouseReleaseEvent(self, event) -> bool:
        if event.button() != Qt.LeftButton:
            return False
        return self.end(MOUSE_POINTER_ID)

    def leaveEvent(self, event=None) -> bool:
        return self.end()

    # ------------------------------------------------------------------
    # Touch
    # ------------------------------------------------------------------
    def touchEvent(self, event, hit: bool = True) -> bool:
        """Handle a touch event; returns ``True`` when it was consumed."""

        event_type = event.type()
        points = list(event.points())

        if event_type == QEvent.Type.TouchBegin:
            if len(points) != 1 or not hit:
                return False
            point = points[0]
            return self.begin(Position.from_point(point.position()), point.id())

        if event_type == QEvent.Type.TouchUpdate:
            session = self.session
            if session is None:
                return False
            for point in points:
                if point.id() == session.pointer_id and point.state() == QEventPoint.State.Released:
                    return self.end(session.pointer_id)
            # Extra fingers pause the drag instead of pinching or re-anchoring.
            if len(points) != 1:
                return False
            point = points[0]
            return self.update(Position.from_point(point.position()), point.id())

        if event_type in (QEvent.Type.TouchEnd, QEvent.Type.TouchCancel):
            return self.end()

        return False
