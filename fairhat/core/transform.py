"""Overlay pose and the rules for updating it.

Every operation here is a pure function returning a new :class:`Transform`.
:func:`overlay_transform` is the one place that fixes the order in which the
pose is applied (translate, rotate, flip, scale); the preview canvas and the
exporter both build their painter transforms through it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from PySide6.QtCore import QPointF, QRectF, QSizeF
from PySide6.QtGui import QTransform


ROTATION_STEP = 15.0
SCALE_UP_FACTOR = 1.1
SCALE_DOWN_FACTOR = 0.9
MIN_SCALE = 0.1
MAX_SCALE = 7.0


class RotateDirection(Enum):
    LEFT = "left"
    RIGHT = "right"


class ScaleDirection(Enum):
    UP = "up"
    DOWN = "down"


@dataclass(frozen=True)
class Position:
    """Display-space offset of the overlay from its resting center."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Position) -> Position:
        return Position(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Position) -> Position:
        return Position(self.x - other.x, self.y - other.y)

    @classmethod
    def from_point(cls, point) -> Position:
        """Build a position from a ``QPoint``/``QPointF``."""
        return cls(float(point.x()), float(point.y()))


@dataclass(frozen=True)
class Transform:
    position: Position = Position()
    rotation: float = 0.0
    scale: float = 1.0
    flip_x: bool = False

    @property
    def display_rotation(self) -> float:
        """Rotation folded into ``[0, 360)`` for labels."""
        return self.rotation % 360.0


IDENTITY = Transform()


def clamp_scale(value: float) -> float:
    return max(MIN_SCALE, min(MAX_SCALE, value))


def rotate(transform: Transform, direction: RotateDirection) -> Transform:
    step = -ROTATION_STEP if direction is RotateDirection.LEFT else ROTATION_STEP
    return replace(transform, rotation=transform.rotation + step)


def scale_by(transform: Transform, direction: ScaleDirection) -> Transform:
    factor = SCALE_UP_FACTOR if direction is ScaleDirection.UP else SCALE_DOWN_FACTOR
    return replace(transform, scale=clamp_scale(transform.scale * factor))


def set_position(transform: Transform, position: Position) -> Transform:
    # Unbounded: the overlay may be dragged off the visible area.
    return replace(transform, position=position)


def toggle_flip(transform: Transform) -> Transform:
    return replace(transform, flip_x=not transform.flip_x)


def reset() -> Transform:
    return IDENTITY


def overlay_transform(
    transform: Transform,
    origin: QPointF,
    scale_x: float = 1.0,
    scale_y: float = 1.0,
) -> QTransform:
    """Return the painter transform that places the overlay.

    *origin* is the resting center of the overlay in the target surface and
    ``scale_x``/``scale_y`` convert the display-space drag offset into the
    surface's units (``1.0`` for the preview itself).
    """

    matrix = QTransform()
    matrix.translate(
        origin.x() + transform.position.x * scale_x,
        origin.y() + transform.position.y * scale_y,
    )
    matrix.rotate(transform.rotation)
    if transform.flip_x:
        matrix.scale(-1.0, 1.0)
    matrix.scale(transform.scale, transform.scale)
    return matrix


def overlay_rect(overlay_size: QSizeF, base_width: float) -> QRectF:
    """Rectangle the overlay is drawn into, centered on the local origin.

    The width is fixed by *base_width*; the height follows the artwork's own
    aspect ratio so the overlay is never stretched on one axis.
    """

    native_width = overlay_size.width()
    native_height = overlay_size.height()
    width = float(base_width)
    height = width * native_height / native_width if native_width > 0 else 0.0
    return QRectF(-width / 2, -height / 2, width, height)
