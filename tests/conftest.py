import io
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PIL import Image
from PySide6.QtGui import QColor, QImage

from fairhat.core.editor_controller import EditorController
from fairhat.core.overlay_assets import OverlayLibrary
from fairhat.core.settings_controller import SettingsController


def png_bytes(width, height, color="white", mode="RGB"):
    """Encode a solid image with Pillow."""
    buffer = io.BytesIO()
    Image.new(mode, (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


def solid_qimage(width, height, color):
    image = QImage(width, height, QImage.Format.Format_ARGB32)
    image.fill(QColor(color))
    return image


def split_qimage(width, height, left_color, right_color):
    """Left half in one color, right half in another."""
    image = solid_qimage(width, height, right_color)
    left = QColor(left_color)
    for x in range(width // 2):
        for y in range(height):
            image.setPixelColor(x, y, left)
    return image


def decode_png(data):
    return Image.open(io.BytesIO(data)).convert("RGBA")


@pytest.fixture
def settings(tmp_path):
    """Settings read from a file that does not exist, i.e. all defaults."""
    return SettingsController(str(tmp_path / "missing.ini"))


@pytest.fixture
def overlay_library(qapp):
    return OverlayLibrary.from_image(split_qimage(20, 10, "red", "blue"))


@pytest.fixture
def editor(qapp, settings, overlay_library):
    return EditorController(settings=settings, overlay_library=overlay_library)
