from __future__ import annotations

import io
import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, ImageOps, UnidentifiedImageError
from PySide6.QtCore import QBuffer, QByteArray, QIODevice
from PySide6.QtGui import QImage

from fairhat.core.errors import DecodeError, EncodeError, UnsupportedFormatError
from fairhat.core.geometry import ImageDimensions


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadedImage:
    """A base image that has been fully decoded into pixels."""

    image: QImage
    dimensions: ImageDimensions
    mime_type: str


def is_image_mime_type(mime_type: str | None) -> bool:
    return bool(mime_type) and mime_type.lower().startswith("image/")


def guess_mime_type(path: str | Path) -> str | None:
    mime_type, _ = mimetypes.guess_type(str(path))
    return mime_type


def decode_image(data: bytes) -> QImage:
    """Decode encoded image *data* into an RGBA :class:`QImage`.

    Photos are turned upright from their EXIF orientation, the way a browser
    displays them.
    """

    try:
        with Image.open(io.BytesIO(data)) as source:
            source.load()
            upright = ImageOps.exif_transpose(source)
            if upright.mode == "I" or upright.mode.startswith("I;16"):
                # 16-bit samples; convert() would clip them to 255.
                upright = upright.convert("I").point(lambda v: v / 256).convert("L")
            rgba = upright.convert("RGBA")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise DecodeError(f"Could not decode image data: {e}") from e

    width, height = rgba.size
    if width <= 0 or height <= 0:
        raise DecodeError("Decoded image has no pixels.")

    buffer = rgba.tobytes("raw", "RGBA")
    # ``copy()`` detaches the pixels from the Python buffer.
    image = QImage(buffer, width, height, width * 4, QImage.Format.Format_RGBA8888).copy()
    if image.isNull():
        raise DecodeError("Could not allocate pixels for the decoded image.")
    return image


def load_base_image(data: bytes, mime_type: str | None) -> LoadedImage:
    if not is_image_mime_type(mime_type):
        raise UnsupportedFormatError(f"Declared type {mime_type!r} is not an image.")

    image = decode_image(data)
    dimensions = ImageDimensions(image.width(), image.height())
    logger.info("Decoded %s base image at %dx%d", mime_type, dimensions.width, dimensions.height)
    return LoadedImage(image=image, dimensions=dimensions, mime_type=mime_type)


def read_file(path: str | Path) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise DecodeError(f"Could not read {path}: {e}") from e


def load_image_file(path: str | Path) -> QImage:
    return decode_image(read_file(path))


def encode_png(image: QImage) -> bytes:
    byte_array = QByteArray()
    buffer = QBuffer(byte_array)
    if not buffer.open(QIODevice.OpenModeFlag.WriteOnly):
        raise EncodeError("Could not open an in-memory buffer for encoding.")
    try:
        if not image.save(buffer, "PNG"):
            raise EncodeError("PNG encoding failed.")
    finally:
        buffer.close()
    return bytes(byte_array.data())


def write_artifact(path: str | Path, data: bytes) -> Path:
    target = Path(path)
    try:
        target.write_bytes(data)
    except OSError as e:
        raise EncodeError(f"Could not write {target}: {e}") from e
    return target
