from __future__ import annotations

from dataclasses import dataclass

from PySide6.QtCore import QRectF, QSize, QSizeF


@dataclass(frozen=True)
class ImageDimensions:
    """Native pixel size of the loaded base image."""

    width: int
    height: int

    @classmethod
    def from_size(cls, size: QSize) -> ImageDimensions:
        return cls(int(size.width()), int(size.height()))

    def to_size(self) -> QSize:
        return QSize(self.width, self.height)


@dataclass(frozen=True)
class ViewportGeometry:
    """Where a contain-fitted image sits inside its container.

    ``scale_x``/``scale_y`` convert display-space lengths into native image
    pixels.
    """

    container_width: float
    container_height: float
    displayed_width: float
    displayed_height: float
    scale_x: float
    scale_y: float

    @property
    def offset_x(self) -> float:
        return (self.container_width - self.displayed_width) / 2

    @property
    def offset_y(self) -> float:
        return (self.container_height - self.displayed_height) / 2

    def display_rect(self) -> QRectF:
        """Letterboxed rectangle of the image inside the container."""
        return QRectF(
            self.offset_x,
            self.offset_y,
            self.displayed_width,
            self.displayed_height,
        )


def resolve_viewport(container: QSizeF | QSize, image: ImageDimensions) -> ViewportGeometry:
    """Contain-fit *image* into *container*, as the preview displays it."""

    container_width = float(container.width())
    container_height = float(container.height())
    if container_width <= 0 or container_height <= 0:
        raise ValueError(
            f"Container must have a positive size, got {container_width}x{container_height}."
        )
    if image.width <= 0 or image.height <= 0:
        raise ValueError(
            f"Image must have a positive size, got {image.width}x{image.height}."
        )

    container_aspect = container_width / container_height
    image_aspect = image.width / image.height

    if container_aspect > image_aspect:
        displayed_height = container_height
        displayed_width = displayed_height * image_aspect
    else:
        displayed_width = container_width
        displayed_height = displayed_width / image_aspect

    return ViewportGeometry(
        container_width=container_width,
        container_height=container_height,
        displayed_width=displayed_width,
        displayed_height=displayed_height,
        scale_x=image.width / displayed_width,
        scale_y=image.height / displayed_height,
    )
