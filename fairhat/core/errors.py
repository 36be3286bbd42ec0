"""Error kinds raised by the editing engine.

Lower layers raise these; :class:`~fairhat.core.editor_controller.EditorController`
catches them at the operation boundary and reports them to the user.
"""


class EditorError(Exception):
    """Base class for recoverable editor failures."""

    user_message = "Something went wrong"


class UnsupportedFormatError(EditorError):
    """The selected file does not declare an image type."""

    user_message = "Please select an image file"


class PreconditionError(EditorError):
    """An operation was attempted before its inputs were available."""

    user_message = "Please upload an image first"


class DecodeError(EditorError):
    """An image resource could not be decoded into pixel data."""

    user_message = "Could not read the selected image"


class EncodeError(EditorError):
    """The composited surface could not be encoded or written."""

    user_message = "Error saving image"
