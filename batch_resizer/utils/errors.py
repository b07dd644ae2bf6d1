"""Error taxonomy raised by the resize pipeline."""


class ResizerError(Exception):
    """Base class for every pipeline failure."""


class NotFoundError(ResizerError, FileNotFoundError):
    """The source directory does not exist."""


class DecodeError(ResizerError):
    """A source file could not be read or is not a valid image."""


class WriteError(ResizerError, OSError):
    """The destination file could not be opened or written."""


class CancelledError(ResizerError):
    """The operation was aborted through its cancellation token."""


class InvalidScaleError(ResizerError, ValueError):
    """The scale factor is not positive or shrinks an image to nothing."""
