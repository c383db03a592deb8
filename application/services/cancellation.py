"""Cooperative cancellation shared between a caller and a running search."""
from __future__ import annotations

import threading

from domain.errors import SearchCancelledError


class CancellationToken:
    """Signals a running search to stop; safe to cancel from another thread."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise SearchCancelledError("search was cancelled")


__all__ = ["CancellationToken"]
