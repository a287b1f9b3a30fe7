"""Tests for signal handling."""

import os
import signal

import pytest

from ecsk.core.signals import handle_signals, ignore_interrupts


def test_handle_signals_sets_event_and_restores_handlers():
    previous = signal.getsignal(signal.SIGINT)

    with handle_signals() as cancel:
        assert not cancel.is_set()
        os.kill(os.getpid(), signal.SIGINT)
        assert cancel.wait(1)

    assert signal.getsignal(signal.SIGINT) is previous


@pytest.mark.skipif(not hasattr(signal, "SIGTERM"), reason="no SIGTERM")
def test_handle_signals_sigterm():
    with handle_signals() as cancel:
        os.kill(os.getpid(), signal.SIGTERM)
        assert cancel.wait(1)


def test_ignore_interrupts_restores_handler():
    previous = signal.getsignal(signal.SIGINT)

    with ignore_interrupts():
        assert signal.getsignal(signal.SIGINT) is signal.SIG_IGN

    assert signal.getsignal(signal.SIGINT) is previous
