"""Data models for log tailing."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass
class LogEvent:
    """Represents a log event from CloudWatch."""

    timestamp: int | None
    message: str
    log_stream: str = ""
    event_id: str | None = None

    @classmethod
    def from_filtered(cls, event: dict[str, Any]) -> LogEvent:
        event_id = event.get("eventId")
        return cls(
            timestamp=event.get("timestamp"),
            message=str(event.get("message", "")).rstrip(),
            log_stream=event.get("logStreamName", ""),
            event_id=event_id if isinstance(event_id, str) else None,
        )

    @property
    def key(self) -> tuple[Any, ...] | str:
        """Get unique key for deduplication."""
        return self.event_id if self.event_id else (self.log_stream, self.timestamp, self.message)

    def format(self) -> str:
        """Format the log event for display."""
        prefix = f"[{self.log_stream}] " if self.log_stream else ""
        if self.timestamp:
            dt = datetime.fromtimestamp(self.timestamp / 1000)
            return f"{dt.strftime('%Y-%m-%dT%H:%M:%S')} {prefix}{self.message}"
        return f"{prefix}{self.message}"
