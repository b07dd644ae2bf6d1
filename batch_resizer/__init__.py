"""Concurrent batch image resizing."""
from .resizer import BatchResizer, BatchResult, BatchState
from .utils.cancellation import CancellationToken
from .utils.errors import (
    CancelledError,
    DecodeError,
    InvalidScaleError,
    NotFoundError,
    ResizerError,
    WriteError,
)

__version__ = "0.1.0"
