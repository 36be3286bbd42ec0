from PySide6.QtCore import Qt, Slot
from PySide6.QtWidgets import (
    QFileDialog,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QSizePolicy,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

from fairhat.commands.action_manager import ActionManager
from fairhat.ui.canvas import EditorCanvas
from fairhat.ui.toast import ToastLabel


OPEN_FILE_FILTERS = (
    "Images (*.png *.jpg *.jpeg *.bmp *.gif *.webp *.tif *.tiff)",
    "All Files (*)",
)
SAVE_FILE_FILTER = "PNG (*.png)"


class MainWindow(QMainWindow):
    def __init__(self, editor):
        super().__init__()
        self.editor = editor
        self.setWindowTitle("Fair Hat")
        self.resize(1200, 800)

        self.canvas = EditorCanvas(self.editor)

        self.action_manager = ActionManager(self)
        self.action_manager.setup_actions()
        for action in (
            self.action_manager.open_action,
            self.action_manager.save_action,
            self.action_manager.exit_action,
            *self.action_manager.control_actions(),
        ):
            self.addAction(action)

        central_container = QWidget(self)
        central_layout = QHBoxLayout(central_container)
        central_layout.setContentsMargins(16, 16, 16, 16)
        central_layout.setSpacing(32)
        central_layout.addWidget(self._build_controls(), 1)
        central_layout.addWidget(self.canvas, 2, Qt.AlignHCenter)
        self.setCentralWidget(central_container)

        self.toast = ToastLabel(self.editor.notifier, self)

        self.editor.base_image_changed.connect(self._sync_action_state)
        self._sync_action_state()

    def _build_controls(self):
        panel = QWidget(self)
        layout = QVBoxLayout(panel)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(24)

        title = QLabel("Join the <b>F A I R</b> Movement", panel)
        title.setAlignment(Qt.AlignCenter)
        layout.addWidget(title)

        layout.addWidget(self._make_button(self.action_manager.open_action, panel))

        grid = QGridLayout()
        grid.setSpacing(16)
        for index, action in enumerate(self.action_manager.control_actions()):
            grid.addWidget(self._make_button(action, panel), index // 2, index % 2)
        save_row = (len(self.action_manager.control_actions()) + 1) // 2
        grid.addWidget(self._make_button(self.action_manager.save_action, panel), save_row, 0, 1, 2)
        layout.addLayout(grid)
        layout.addStretch(1)
        return panel

    @staticmethod
    def _make_button(action, parent):
        button = QToolButton(parent)
        button.setDefaultAction(action)
        button.setToolButtonStyle(Qt.ToolButtonTextOnly)
        button.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)
        button.setMinimumHeight(40)
        return button

    def _sync_action_state(self, *_):
        self.action_manager.save_action.setEnabled(self.editor.has_base_image)

    @Slot()
    def open_image(self):
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            "Open Image",
            self.editor.settings.last_directory,
            ";;".join(OPEN_FILE_FILTERS),
        )
        if not file_path:
            return
        self.editor.load_base_image_file(file_path)

    @Slot()
    def save_image(self):
        if not self.editor.has_base_image:
            # Reports the missing base image to the user.
            self.editor.export_composite(self.canvas.container_size())
            return

        file_path, _ = QFileDialog.getSaveFileName(
            self,
            "Save Image",
            self.editor.default_export_path(),
            SAVE_FILE_FILTER,
        )
        if not file_path:
            return
        if not file_path.lower().endswith(".png"):
            file_path += ".png"
        self.editor.save_composite(file_path, self.canvas.container_size())

    def resizeEvent(self, event):
        super().resizeEvent(event)
        if self.toast.isVisible():
            self.toast.reposition()

    def closeEvent(self, event):
        self.editor.shutdown()
        super().closeEvent(event)
