"""Cooperative cancellation shared by every task of one batch."""
import threading

from .errors import CancelledError


class CancellationToken:
    """
    One-way cancellation flag.

    Tasks poll it at their checkpoints; nothing is interrupted preemptively.
    Once cancelled, the token stays cancelled.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def throw_if_cancelled(self) -> None:
        if self._event.is_set():
            raise CancelledError("Operation cancelled")
