from __future__ import annotations

from enum import Enum
from pathlib import Path

from PySide6.QtCore import Qt
from PySide6.QtGui import QImage

from fairhat.core.errors import DecodeError
from fairhat.core.services.image_service import load_image_file


ASSETS_DIR = Path(__file__).resolve().parent.parent / "assets"
DEFAULT_RIGHT_ASSET = ASSETS_DIR / "right.png"
DEFAULT_LEFT_ASSET = ASSETS_DIR / "left.png"


class OverlayVariant(Enum):
    RIGHT_FACING = "right-facing"
    LEFT_FACING = "left-facing"

    @property
    def opposite(self) -> "OverlayVariant":
        if self is OverlayVariant.RIGHT_FACING:
            return OverlayVariant.LEFT_FACING
        return OverlayVariant.RIGHT_FACING


class MirrorMode(Enum):
    """How "Flip" mirrors the overlay.

    ``FLAG`` negates ``Transform.flip_x`` and always draws the right-facing
    artwork. ``ASSET`` swaps to the other artwork file and leaves the flag
    alone.
    """

    FLAG = "flag"
    ASSET = "asset"


class OverlayLibrary:
    """The two decoded artwork variants of the overlay."""

    def __init__(self, right_facing: QImage, left_facing: QImage):
        for variant, image in (
            (OverlayVariant.RIGHT_FACING, right_facing),
            (OverlayVariant.LEFT_FACING, left_facing),
        ):
            if image is None or image.isNull():
                raise DecodeError(f"The {variant.value} overlay artwork has no pixels.")
        self._images = {
            OverlayVariant.RIGHT_FACING: right_facing,
            OverlayVariant.LEFT_FACING: left_facing,
        }

    @classmethod
    def from_files(
        cls,
        right_path: str | Path = DEFAULT_RIGHT_ASSET,
        left_path: str | Path = DEFAULT_LEFT_ASSET,
    ) -> "OverlayLibrary":
        return cls(load_image_file(right_path), load_image_file(left_path))

    @classmethod
    def from_image(cls, right_facing: QImage) -> "OverlayLibrary":
        """Build a library whose left-facing variant is the mirrored artwork."""
        return cls(right_facing, right_facing.flipped(Qt.Orientation.Horizontal))

    def image(self, variant: OverlayVariant) -> QImage:
        return self._images[variant]
