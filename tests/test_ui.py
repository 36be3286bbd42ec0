import pytest

from fairhat.core.editor_controller import MSG_IMAGE_LOADED, MSG_IMAGE_SAVED
from fairhat.ui.ui import MainWindow

from conftest import decode_png, png_bytes


@pytest.fixture
def window(editor, qtbot):
    main_window = MainWindow(editor)
    qtbot.addWidget(main_window)
    main_window.show()
    return main_window


def test_save_disabled_until_image_loaded(window, editor):
    assert not window.action_manager.save_action.isEnabled()
    editor.load_base_image(png_bytes(20, 20), "image/png")
    assert window.action_manager.save_action.isEnabled()


def test_control_actions_drive_editor(window, editor):
    actions = window.action_manager
    actions.rotate_right_action.trigger()
    actions.scale_up_action.trigger()
    actions.flip_action.trigger()

    assert editor.transform.rotation == 15
    assert editor.transform.scale == pytest.approx(1.1)
    assert editor.transform.flip_x

    actions.reset_action.trigger()
    assert editor.transform.rotation == 0
    assert not editor.transform.flip_x


def test_save_without_image_shows_error_toast(window, editor):
    window.save_image()
    assert window.toast.text() == "Please upload an image first"
    assert window.toast.isVisible()


def test_open_image_through_dialog(window, editor, tmp_path, monkeypatch):
    photo = tmp_path / "photo.png"
    photo.write_bytes(png_bytes(48, 32))
    monkeypatch.setattr(
        "PySide6.QtWidgets.QFileDialog.getOpenFileName",
        lambda *args, **kwargs: (str(photo), "Images"),
    )

    window.open_image()
    assert editor.image_dimensions.width == 48
    assert window.toast.text() == MSG_IMAGE_LOADED


def test_cancelled_open_dialog_changes_nothing(window, editor, monkeypatch):
    monkeypatch.setattr(
        "PySide6.QtWidgets.QFileDialog.getOpenFileName",
        lambda *args, **kwargs: ("", ""),
    )
    window.open_image()
    assert not editor.has_base_image


def test_save_appends_png_extension(window, editor, tmp_path, monkeypatch):
    editor.load_base_image(png_bytes(48, 32), "image/png")
    target = tmp_path / "with-hat"
    monkeypatch.setattr(
        "PySide6.QtWidgets.QFileDialog.getSaveFileName",
        lambda *args, **kwargs: (str(target), "PNG (*.png)"),
    )

    window.save_image()
    saved = tmp_path / "with-hat.png"
    assert decode_png(saved.read_bytes()).size == (48, 32)
    assert window.toast.text() == MSG_IMAGE_SAVED
