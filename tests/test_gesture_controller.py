"""Unit tests for :mod:`fairhat.commands.gesture_controller`."""

from __future__ import annotations

import pytest
from PySide6.QtCore import QEvent, QPointF, Qt
from PySide6.QtGui import QEventPoint

from fairhat.commands.gesture_controller import (
    MOUSE_POINTER_ID,
    DragState,
    GestureController,
)
from fairhat.core import transform as ops
from fairhat.core.transform import Position, Transform


class FakeMouseEvent:
    """Minimal stand-in for :class:`QMouseEvent`."""

    def __init__(self, x, y, button=Qt.LeftButton, buttons=None):
        self._pos = QPointF(x, y)
        self._button = button
        if buttons is None:
            buttons = Qt.LeftButton if button == Qt.LeftButton else Qt.NoButton
        self._buttons = buttons

    def position(self):
        return self._pos

    def button(self):
        return self._button

    def buttons(self):
        return self._buttons


class FakeEventPoint:
    def __init__(self, point_id, x, y, state=QEventPoint.State.Updated):
        self._id = point_id
        self._pos = QPointF(x, y)
        self._state = state

    def id(self):
        return self._id

    def position(self):
        return self._pos

    def state(self):
        return self._state


class FakeTouchEvent:
    def __init__(self, event_type, points):
        self._type = event_type
        self._points = points

    def type(self):
        return self._type

    def points(self):
        return self._points


class FakeEditor:
    def __init__(self, position=Position()):
        self.transform = Transform(position=position)
        self.positions: list[Position] = []

    def set_position(self, position):
        self.transform = ops.set_position(self.transform, position)
        self.positions.append(position)


@pytest.fixture
def editor() -> FakeEditor:
    return FakeEditor(Position(10, 20))


@pytest.fixture
def controller(editor) -> GestureController:
    return GestureController(editor)


def test_starts_idle(controller):
    assert controller.state is DragState.IDLE
    assert controller.session is None


def test_drag_is_additive_and_anchor_preserving(controller, editor):
    assert controller.mousePressEvent(FakeMouseEvent(100, 100))
    assert controller.state is DragState.DRAGGING
    assert controller.session.anchor == Position(90, 80)

    controller.mouseMoveEvent(FakeMouseEvent(130, 95))
    assert editor.transform.position == Position(40, 15)

    controller.mouseMoveEvent(FakeMouseEvent(100, 100))
    assert editor.transform.position == Position(10, 20)


def test_press_outside_overlay_does_not_start_drag(controller, editor):
    assert not controller.mousePressEvent(FakeMouseEvent(5, 5), hit=False)
    controller.mouseMoveEvent(FakeMouseEvent(50, 50))
    assert controller.state is DragState.IDLE
    assert editor.positions == []


def test_right_button_does_not_start_drag(controller):
    assert not controller.mousePressEvent(FakeMouseEvent(5, 5, button=Qt.RightButton))
    assert controller.state is DragState.IDLE


def test_move_without_press_is_noop(controller, editor):
    assert not controller.mouseMoveEvent(FakeMouseEvent(50, 50))
    assert editor.positions == []


def test_release_returns_to_idle(controller, editor):
    controller.mousePressEvent(FakeMouseEvent(0, 0))
    controller.mouseReleaseEvent(FakeMouseEvent(0, 0))
    assert controller.state is DragState.IDLE

    controller.mouseMoveEvent(FakeMouseEvent(300, 300))
    assert editor.positions == []


def test_leaving_container_ends_drag(controller, editor):
    controller.mousePressEvent(FakeMouseEvent(0, 0))
    controller.leaveEvent(object())
    assert controller.state is DragState.IDLE

    controller.mouseMoveEvent(FakeMouseEvent(300, 300))
    assert editor.positions == []


def test_move_without_held_button_ends_stuck_drag(controller, editor):
    controller.mousePressEvent(FakeMouseEvent(0, 0))
    controller.mouseMoveEvent(FakeMouseEvent(40, 40, button=Qt.NoButton, buttons=Qt.NoButton))
    assert controller.state is DragState.IDLE
    assert editor.positions == []


def test_second_press_does_not_reanchor(controller, editor):
    controller.mousePressEvent(FakeMouseEvent(100, 100))
    anchor = controller.session.anchor
    assert not controller.mousePressEvent(FakeMouseEvent(400, 400))
    assert controller.session.anchor == anchor


def test_drag_can_leave_visible_area(controller, editor):
    controller.mousePressEvent(FakeMouseEvent(10, 20))
    controller.mouseMoveEvent(FakeMouseEvent(-5000, 9000))
    assert editor.transform.position == Position(-5000, 9000)


def test_single_touch_drag(controller, editor):
    begin = FakeTouchEvent(QEvent.Type.TouchBegin, [FakeEventPoint(7, 50, 50, QEventPoint.State.Pressed)])
    assert controller.touchEvent(begin)
    assert controller.session.pointer_id == 7

    controller.touchEvent(FakeTouchEvent(QEvent.Type.TouchUpdate, [FakeEventPoint(7, 60, 45)]))
    assert editor.transform.position == Position(20, 15)

    controller.touchEvent(FakeTouchEvent(QEvent.Type.TouchEnd, [FakeEventPoint(7, 60, 45, QEventPoint.State.Released)]))
    assert controller.state is DragState.IDLE


def test_touch_begin_with_two_points_is_ignored(controller):
    begin = FakeTouchEvent(
        QEvent.Type.TouchBegin,
        [FakeEventPoint(1, 0, 0), FakeEventPoint(2, 10, 10)],
    )
    assert not controller.touchEvent(begin)
    assert controller.state is DragState.IDLE


def test_second_touch_point_does_not_alter_drag(controller, editor):
    controller.touchEvent(FakeTouchEvent(QEvent.Type.TouchBegin, [FakeEventPoint(1, 50, 50)]))
    anchor = controller.session.anchor

    two_fingers = FakeTouchEvent(
        QEvent.Type.TouchUpdate,
        [FakeEventPoint(1, 70, 70), FakeEventPoint(2, 200, 200, QEventPoint.State.Pressed)],
    )
    assert not controller.touchEvent(two_fingers)
    assert controller.session.anchor == anchor
    assert controller.session.pointer_id == 1
    assert editor.positions == []

    controller.touchEvent(FakeTouchEvent(QEvent.Type.TouchUpdate, [FakeEventPoint(1, 55, 52)]))
    assert editor.transform.position == Position(15, 22)


def test_update_from_another_touch_point_is_ignored(controller, editor):
    controller.touchEvent(FakeTouchEvent(QEvent.Type.TouchBegin, [FakeEventPoint(1, 50, 50)]))
    controller.touchEvent(FakeTouchEvent(QEvent.Type.TouchUpdate, [FakeEventPoint(2, 90, 90)]))
    assert editor.positions == []


def test_releasing_originating_touch_point_ends_drag(controller, editor):
    controller.touchEvent(FakeTouchEvent(QEvent.Type.TouchBegin, [FakeEventPoint(1, 50, 50)]))
    controller.touchEvent(
        FakeTouchEvent(
            QEvent.Type.TouchUpdate,
            [FakeEventPoint(1, 50, 50, QEventPoint.State.Released), FakeEventPoint(2, 0, 0)],
        )
    )
    assert controller.state is DragState.IDLE


def test_touch_cancel_ends_drag(controller):
    controller.touchEvent(FakeTouchEvent(QEvent.Type.TouchBegin, [FakeEventPoint(3, 1, 1)]))
    controller.touchEvent(FakeTouchEvent(QEvent.Type.TouchCancel, []))
    assert controller.state is DragState.IDLE


def test_touch_begin_outside_overlay_is_ignored(controller):
    begin = FakeTouchEvent(QEvent.Type.TouchBegin, [FakeEventPoint(1, 0, 0)])
    assert not controller.touchEvent(begin, hit=False)
    assert controller.state is DragState.IDLE


def test_mouse_events_do_not_steal_touch_session(controller, editor):
    controller.touchEvent(FakeTouchEvent(QEvent.Type.TouchBegin, [FakeEventPoint(4, 50, 50)]))
    assert not controller.mouseMoveEvent(FakeMouseEvent(0, 0))
    assert controller.session.pointer_id == 4
    assert editor.positions == []


def test_device_independent_api(controller, editor):
    assert controller.begin(Position(0, 0))
    assert controller.session.pointer_id == MOUSE_POINTER_ID
    assert controller.update(Position(5, 5))
    assert editor.transform.position == Position(15, 25)
    assert not controller.end(pointer_id=99)
    assert controller.cancel()
    assert not controller.cancel()
