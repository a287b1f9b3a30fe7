"""Exception types raised by ecsk."""

from __future__ import annotations


class EcskError(Exception):
    """Base class for errors reported to the user."""


class WizardCancelled(EcskError):
    """The user aborted parameter selection."""

    def __init__(self, message: str = "Canceled.") -> None:
        super().__init__(message)


class NoResourceError(EcskError):
    """A listing returned nothing to choose from."""

    def __init__(self, resource: str) -> None:
        super().__init__(f"No {resource} exists.")
        self.resource = resource


class TaskFailureError(EcskError):
    """ECS reported failures for a request or a task stopped with a reason."""


class InvalidOverridesError(EcskError):
    """The --overrides value is not valid JSON."""


class SessionError(EcskError):
    """The session-manager-plugin could not be started or exited with an error."""


class UsageError(EcskError):
    """Command-line arguments that argparse cannot validate on its own."""


def format_failures(failures: list[dict]) -> str:
    """Render ECS `failures` entries as a single line."""
    parts = []
    for failure in failures:
        arn = failure.get("arn", "")
        reason = failure.get("reason", "UNKNOWN")
        detail = failure.get("detail")
        text = f"{arn}: {reason}" if arn else reason
        if detail:
            text = f"{text} ({detail})"
        parts.append(text)
    return "; ".join(parts)
