import argparse
import logging
import sys

from PySide6.QtWidgets import QApplication

from fairhat.core.editor_controller import EditorController
from fairhat.core.errors import EditorError
from fairhat.core.settings_controller import DEFAULT_SETTINGS_PATH, SettingsController
from fairhat.ui.ui import MainWindow


logger = logging.getLogger(__name__)


def parse_args(argv):
    parser = argparse.ArgumentParser(description='Put the FAIR hat on a photo.')
    parser.add_argument(
        '--settings',
        default=DEFAULT_SETTINGS_PATH,
        help='Path to an INI settings file (default: %(default)s).',
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging.',
    )
    return parser.parse_known_args(argv)


def main(argv=None):
    args, qt_args = parse_args(sys.argv[1:] if argv is None else argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    q_app = QApplication([sys.argv[0], *qt_args])
    try:
        editor = EditorController(SettingsController(args.settings))
    except EditorError as e:
        logger.error("Could not load the overlay artwork: %s", e)
        return 1

    window = MainWindow(editor)
    window.show()
    return q_app.exec()


if __name__ == "__main__":
    sys.exit(main())
