from __future__ import annotations

import logging

from PySide6.QtCore import QPointF, QRectF, QSize, QSizeF, Qt
from PySide6.QtGui import QImage, QPainter

from fairhat.core.errors import DecodeError, PreconditionError
from fairhat.core.geometry import ImageDimensions, resolve_viewport
from fairhat.core.services.image_service import encode_png
from fairhat.core.transform import Transform, overlay_rect, overlay_transform


logger = logging.getLogger(__name__)

OVERLAY_BASE_WIDTH = 100.0


class Compositor:
    """Flattens the base image and the posed overlay at native resolution.

    The preview shows the base image contain-fitted in a container of a
    different size, and the overlay pose is recorded in that container's
    pixels. Export replays the pose on a surface the size of the original
    image, rescaling the drag offset and overlay width by the container to
    image ratio so the result matches what was on screen.
    """

    def __init__(self, overlay_base_width: float = OVERLAY_BASE_WIDTH):
        self.overlay_base_width = float(overlay_base_width)

    def composite(
        self,
        base_image: QImage | None,
        overlay_image: QImage | None,
        transform: Transform,
        image_size: ImageDimensions | None,
        container_size: QSizeF | QSize,
    ) -> QImage:
        if base_image is None or image_size is None:
            raise PreconditionError("No base image has been loaded.")
        if base_image.isNull():
            raise DecodeError("The base image has no decoded pixels.")
        if overlay_image is None or overlay_image.isNull():
            raise DecodeError("The overlay image has no decoded pixels.")

        try:
            geometry = resolve_viewport(container_size, image_size)
        except ValueError as e:
            raise PreconditionError(str(e)) from e

        surface = QImage(image_size.width, image_size.height, QImage.Format.Format_ARGB32)
        if surface.isNull():
            raise PreconditionError(
                f"Could not allocate a {image_size.width}x{image_size.height} output surface."
            )
        surface.fill(Qt.GlobalColor.transparent)

        painter = QPainter()
        if not painter.begin(surface):
            raise PreconditionError("Could not paint on the output surface.")
        try:
            painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform, True)
            painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
            painter.drawImage(
                QRectF(0, 0, image_size.width, image_size.height),
                base_image,
            )

            center = QPointF(image_size.width / 2, image_size.height / 2)
            painter.setTransform(
                overlay_transform(transform, center, geometry.scale_x, geometry.scale_y)
            )
            target = overlay_rect(
                QSizeF(overlay_image.size()),
                self.overlay_base_width * geometry.scale_x,
            )
            painter.drawImage(target, overlay_image)
        finally:
            painter.end()

        logger.debug(
            "Composited %dx%d output (scale %.4f x %.4f) with %s",
            image_size.width,
            image_size.height,
            geometry.scale_x,
            geometry.scale_y,
            transform,
        )
        return surface

    def export(
        self,
        base_image: QImage | None,
        overlay_image: QImage | None,
        transform: Transform,
        image_size: ImageDimensions | None,
        container_size: QSizeF | QSize,
    ) -> bytes:
        """Composite and encode as PNG."""
        surface = self.composite(base_image, overlay_image, transform, image_size, container_size)
        return encode_png(surface)
