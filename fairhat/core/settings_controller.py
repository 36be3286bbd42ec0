from PySide6.QtCore import QObject
import configparser
import logging
import os

from fairhat.core.overlay_assets import DEFAULT_LEFT_ASSET, DEFAULT_RIGHT_ASSET, MirrorMode
from fairhat.core.status_notifier import DEFAULT_STATUS_TIMEOUT_MS


logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = 'settings.ini'


class SettingsController(QObject):
    """Reads application settings.

    The settings file is optional and never written; every option falls back
    to its default when missing or malformed.
    """

    DEFAULT_EXPORT_SETTINGS = {
        "filename": "fair-hat.png",
    }

    DEFAULT_OVERLAY_SETTINGS = {
        "base_width": 100.0,
        "mirror_mode": MirrorMode.FLAG,
        "right_asset": str(DEFAULT_RIGHT_ASSET),
        "left_asset": str(DEFAULT_LEFT_ASSET),
    }

    DEFAULT_STATUS_SETTINGS = {
        "timeout_ms": DEFAULT_STATUS_TIMEOUT_MS,
    }

    def __init__(self, path=DEFAULT_SETTINGS_PATH):
        super().__init__()
        self.path = path
        self.config = configparser.ConfigParser(interpolation=None)
        try:
            self.config.read(path)
        except configparser.Error as e:
            logger.warning("Ignoring unreadable settings file %s: %s", path, e)
            self.config = configparser.ConfigParser(interpolation=None)
        for section in ('General', 'Export', 'Overlay', 'Status'):
            if not self.config.has_section(section):
                self.config.add_section(section)

        self.last_directory = self.config.get(
            'General', 'last_directory', fallback=os.path.expanduser("~")
        )

        filename = self.config.get(
            'Export', 'filename', fallback=self.DEFAULT_EXPORT_SETTINGS["filename"]
        ).strip()
        self.export_filename = filename or self.DEFAULT_EXPORT_SETTINGS["filename"]

        try:
            base_width = self.config.getfloat('Overlay', 'base_width')
        except (configparser.NoOptionError, ValueError):
            base_width = self.DEFAULT_OVERLAY_SETTINGS["base_width"]
        self.overlay_base_width = max(1.0, base_width)

        raw_mode = self.config.get(
            'Overlay',
            'mirror_mode',
            fallback=self.DEFAULT_OVERLAY_SETTINGS["mirror_mode"].value,
        )
        try:
            self.mirror_mode = MirrorMode(raw_mode.strip().lower())
        except ValueError:
            self.mirror_mode = MirrorMode.FLAG

        self.right_asset = self._get_asset_path('right_asset')
        self.left_asset = self._get_asset_path('left_asset')

        try:
            timeout_ms = self.config.getint('Status', 'timeout_ms')
        except (configparser.NoOptionError, ValueError):
            timeout_ms = self.DEFAULT_STATUS_SETTINGS["timeout_ms"]
        self.status_timeout_ms = max(0, timeout_ms)

    def _get_asset_path(self, option):
        raw_value = self.config.get('Overlay', option, fallback='').strip()
        if not raw_value:
            return self.DEFAULT_OVERLAY_SETTINGS[option]
        return os.path.expanduser(raw_value)

    def get_overlay_settings(self):
        return {
            'base_width': self.overlay_base_width,
            'mirror_mode': self.mirror_mode,
            'right_asset': self.right_asset,
            'left_asset': self.left_asset,
        }

    def get_status_settings(self):
        return {
            'timeout_ms': self.status_timeout_ms,
        }

    def default_export_path(self):
        return os.path.join(self.last_directory, self.export_filename)

    def remember_directory(self, file_path):
        directory = os.path.dirname(os.fspath(file_path))
        if directory:
            self.last_directory = directory
