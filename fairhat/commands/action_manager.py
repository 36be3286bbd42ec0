from PySide6.QtGui import QAction, QKeySequence

from fairhat.core.transform import RotateDirection, ScaleDirection


class ActionManager:
    def __init__(self, main_window):
        self.main_window = main_window
        self.editor = main_window.editor

    def setup_actions(self):
        """Create every action the window exposes as a button or shortcut."""
        self._build_file_actions()
        self._build_transform_actions()

    def _build_file_actions(self):
        self.open_action = QAction("&Open Image...", self.main_window)
        self.open_action.setShortcut(QKeySequence.Open)
        self.open_action.triggered.connect(self.main_window.open_image)

        self.save_action = QAction("&Save Image", self.main_window)
        self.save_action.setShortcut(QKeySequence.Save)
        self.save_action.triggered.connect(self.main_window.save_image)

        self.exit_action = QAction("E&xit", self.main_window)
        self.exit_action.setShortcut(QKeySequence.Quit)
        self.exit_action.triggered.connect(self.main_window.close)

    def _build_transform_actions(self):
        self.rotate_left_action = QAction("Rotate Left", self.main_window)
        self.rotate_left_action.setShortcut("[")
        self.rotate_left_action.triggered.connect(
            lambda: self.editor.rotate(RotateDirection.LEFT)
        )

        self.rotate_right_action = QAction("Rotate Right", self.main_window)
        self.rotate_right_action.setShortcut("]")
        self.rotate_right_action.triggered.connect(
            lambda: self.editor.rotate(RotateDirection.RIGHT)
        )

        self.scale_up_action = QAction("Scale Up", self.main_window)
        self.scale_up_action.setShortcuts([QKeySequence("+"), QKeySequence("=")])
        self.scale_up_action.triggered.connect(
            lambda: self.editor.scale_by(ScaleDirection.UP)
        )

        self.scale_down_action = QAction("Scale Down", self.main_window)
        self.scale_down_action.setShortcut("-")
        self.scale_down_action.triggered.connect(
            lambda: self.editor.scale_by(ScaleDirection.DOWN)
        )

        self.flip_action = QAction("Flip", self.main_window)
        self.flip_action.setShortcut("F")
        self.flip_action.triggered.connect(self.editor.toggle_mirror)

        self.reset_action = QAction("Reset", self.main_window)
        self.reset_action.setShortcut("Ctrl+R")
        self.reset_action.triggered.connect(self.editor.reset)

    def control_actions(self):
        """Actions in the order they appear in the control grid."""
        return [
            self.rotate_left_action,
            self.rotate_right_action,
            self.scale_up_action,
            self.scale_down_action,
            self.flip_action,
            self.reset_action,
        ]
