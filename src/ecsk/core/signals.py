"""Process signal handling for cancellation and attached sessions."""

from __future__ import annotations

import signal
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from types import FrameType

CANCEL_SIGNALS = tuple(
    getattr(signal, name) for name in ("SIGHUP", "SIGINT", "SIGTERM", "SIGQUIT") if hasattr(signal, name)
)


@contextmanager
def handle_signals(cancel: threading.Event | None = None) -> Iterator[threading.Event]:
    """Yield an event that is set when the process is asked to terminate.

    Polling loops notice on their next wake; an API call in flight finishes first.
    Previous handlers are restored on exit.
    """
    cancel = cancel or threading.Event()

    def _handler(_signum: int, _frame: FrameType | None) -> None:
        cancel.set()

    previous = {sig: signal.signal(sig, _handler) for sig in CANCEL_SIGNALS}
    try:
        yield cancel
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)


@contextmanager
def ignore_interrupts() -> Iterator[None]:
    """Ignore Ctrl-C while a child process owns the terminal."""
    previous = signal.signal(signal.SIGINT, signal.SIG_IGN)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)
