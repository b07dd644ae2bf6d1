from .cancellation import CancellationToken
from .errors import (
    CancelledError,
    DecodeError,
    InvalidScaleError,
    NotFoundError,
    ResizerError,
    WriteError,
)
from .logger import get_logger
