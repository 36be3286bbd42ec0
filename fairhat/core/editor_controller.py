from __future__ import annotations

import logging

from PySide6.QtCore import QObject, QSize, QSizeF, Signal, Slot
from PySide6.QtGui import QImage

from fairhat.core.compositor import Compositor
from fairhat.core.errors import EditorError, PreconditionError
from fairhat.core.geometry import ImageDimensions
from fairhat.core.overlay_assets import MirrorMode, OverlayLibrary, OverlayVariant
from fairhat.core.services import image_service
from fairhat.core.services.image_service import LoadedImage
from fairhat.core.settings_controller import SettingsController
from fairhat.core.status_notifier import StatusNotifier
from fairhat.core import transform as transform_ops
from fairhat.core.transform import Position, RotateDirection, ScaleDirection, Transform


logger = logging.getLogger(__name__)

MSG_IMAGE_LOADED = "Image loaded successfully"
MSG_IMAGE_SAVED = "Image saved successfully"
MSG_SAVE_FAILED = "Error saving image"


class EditorController(QObject):
    """Owns the editing session: base image, overlay pose and artwork.

    This is the surface the window talks to. Fallible operations catch
    :class:`EditorError`, report it through the status notifier and return
    ``None``/``False``; a failure never leaves the session half updated.
    """

    transform_changed = Signal(object)
    base_image_changed = Signal(object)
    overlay_changed = Signal(object)

    def __init__(
        self,
        settings: SettingsController | None = None,
        overlay_library: OverlayLibrary | None = None,
        notifier: StatusNotifier | None = None,
        compositor: Compositor | None = None,
    ):
        super().__init__()
        self.settings = settings or SettingsController()
        overlay_settings = self.settings.get_overlay_settings()
        status_settings = self.settings.get_status_settings()

        self.notifier = notifier or StatusNotifier(status_settings["timeout_ms"], self)
        self.compositor = compositor or Compositor(overlay_settings["base_width"])
        self.overlay_library = overlay_library or OverlayLibrary.from_files(
            overlay_settings["right_asset"], overlay_settings["left_asset"]
        )
        self.mirror_mode = overlay_settings["mirror_mode"]

        self._transform = transform_ops.reset()
        self._base: LoadedImage | None = None
        self._asset_variant = OverlayVariant.RIGHT_FACING

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------
    @property
    def transform(self) -> Transform:
        return self._transform

    @property
    def base_image(self) -> QImage | None:
        return self._base.image if self._base is not None else None

    @property
    def image_dimensions(self) -> ImageDimensions | None:
        return self._base.dimensions if self._base is not None else None

    @property
    def has_base_image(self) -> bool:
        return self._base is not None

    @property
    def overlay_base_width(self) -> float:
        return self.compositor.overlay_base_width

    @property
    def current_overlay_asset(self) -> OverlayVariant:
        if self.mirror_mode is MirrorMode.FLAG:
            if self._transform.flip_x:
                return OverlayVariant.LEFT_FACING
            return OverlayVariant.RIGHT_FACING
        return self._asset_variant

    @property
    def overlay_image(self) -> QImage:
        """Artwork both renderers draw before ``flip_x`` is applied."""
        if self.mirror_mode is MirrorMode.FLAG:
            return self.overlay_library.image(OverlayVariant.RIGHT_FACING)
        return self.overlay_library.image(self._asset_variant)

    # ------------------------------------------------------------------
    # Base image
    # ------------------------------------------------------------------
    def load_base_image(self, data: bytes, mime_type: str | None) -> ImageDimensions | None:
        try:
            loaded = image_service.load_base_image(data, mime_type)
        except EditorError as e:
            self._report(e)
            return None

        self._base = loaded
        self.base_image_changed.emit(loaded.dimensions)
        self.notifier.success(MSG_IMAGE_LOADED)
        return loaded.dimensions

    def load_base_image_file(self, path) -> ImageDimensions | None:
        mime_type = image_service.guess_mime_type(path)
        if not image_service.is_image_mime_type(mime_type):
            # Rejected before the file is read.
            return self.load_base_image(b"", mime_type)
        try:
            data = image_service.read_file(path)
        except EditorError as e:
            self._report(e)
            return None
        dimensions = self.load_base_image(data, mime_type)
        if dimensions is not None:
            self.settings.remember_directory(path)
        return dimensions

    # ------------------------------------------------------------------
    # Transform operations
    # ------------------------------------------------------------------
    def _apply(self, new_transform: Transform):
        if new_transform == self._transform:
            return
        self._transform = new_transform
        self.transform_changed.emit(new_transform)

    @Slot(object)
    def rotate(self, direction: RotateDirection):
        self._apply(transform_ops.rotate(self._transform, direction))

    @Slot(object)
    def scale_by(self, direction: ScaleDirection):
        self._apply(transform_ops.scale_by(self._transform, direction))

    def set_position(self, position: Position):
        self._apply(transform_ops.set_position(self._transform, position))

    @Slot()
    def reset(self):
        self._apply(transform_ops.reset())

    @Slot()
    def toggle_mirror(self):
        if self.mirror_mode is MirrorMode.FLAG:
            self._apply(transform_ops.toggle_flip(self._transform))
        else:
            self._asset_variant = self._asset_variant.opposite
        self.overlay_changed.emit(self.current_overlay_asset)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------
    def export_composite(self, container_size: QSizeF | QSize) -> bytes | None:
        """Return the flattened PNG, or ``None`` after reporting a failure."""
        try:
            return self._export(container_size)
        except EditorError as e:
            self._report(e, self._export_failure_message(e))
        except Exception:
            logger.exception("Unexpected failure while exporting the composite")
            self.notifier.error(MSG_SAVE_FAILED)
        return None

    def save_composite(self, path, container_size: QSizeF | QSize) -> bool:
        try:
            data = self._export(container_size)
            target = image_service.write_artifact(path, data)
        except EditorError as e:
            self._report(e, self._export_failure_message(e))
            return False
        except Exception:
            logger.exception("Unexpected failure while saving the composite to %s", path)
            self.notifier.error(MSG_SAVE_FAILED)
            return False

        self.settings.remember_directory(target)
        logger.info("Saved composite to %s (%d bytes)", target, len(data))
        self.notifier.success(MSG_IMAGE_SAVED)
        return True

    def default_export_path(self) -> str:
        return self.settings.default_export_path()

    def _export(self, container_size) -> bytes:
        if self._base is None:
            raise PreconditionError("Export requested before a base image was loaded.")
        return self.compositor.export(
            self._base.image,
            self.overlay_image,
            self._transform,
            self._base.dimensions,
            container_size,
        )

    def _export_failure_message(self, error: EditorError) -> str:
        if isinstance(error, PreconditionError) and self._base is None:
            return error.user_message
        return MSG_SAVE_FAILED

    def _report(self, error: EditorError, message: str | None = None):
        logger.warning("%s: %s", type(error).__name__, error)
        self.notifier.error(message or error.user_message)

    def shutdown(self):
        self.notifier.shutdown()
