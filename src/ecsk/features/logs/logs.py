"""CloudWatch Logs lookup and tailing for ECS tasks."""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Callable, Hashable
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

from ...core.base import BaseAWSService
from ...core.errors import NoResourceError, UsageError
from ...core.types import LogTarget
from ...core.utils import batch_items, console, extract_name_from_arn, paginate_aws_list
from ..container.container import ContainerService
from ..task.task import TaskService
from .models import LogEvent

if TYPE_CHECKING:
    from mypy_boto3_logs.client import CloudWatchLogsClient

logger = logging.getLogger(__name__)

TAIL_INTERVAL = 2  # seconds
# filter_log_events accepts at most this many stream names
MAX_STREAMS_PER_QUERY = 100
DEFAULT_STREAM_PREFIX = "ecs"

_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ms|s|m|h)")
_DURATION_UNITS = {"ms": 0.001, "s": 1, "m": 60, "h": 3600}


def parse_since(value: str, now: datetime | None = None) -> datetime:
    """Parse a relative duration (`30s`, `5m`, `1h30m`) or an ISO-8601 timestamp."""
    now = now or datetime.now(timezone.utc)
    text = value.strip()

    if text and _DURATION_PART.sub("", text) == "":
        seconds = sum(float(amount) * _DURATION_UNITS[unit] for amount, unit in _DURATION_PART.findall(text))
        return now - timedelta(seconds=seconds)

    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError as e:
        raise UsageError(f"Invalid --since value '{value}': use a duration like 5m or an RFC3339 time") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def to_millis(value: datetime) -> int:
    return int(value.timestamp() * 1000)


class SeenEvents:
    """Keys of emitted events, kept only while a poll can still return them."""

    def __init__(self) -> None:
        self._timestamps: dict[Hashable, int] = {}

    def __len__(self) -> int:
        return len(self._timestamps)

    def add(self, event: LogEvent) -> bool:
        """Record `event`; False when it was already emitted."""
        if event.key in self._timestamps:
            return False
        self._timestamps[event.key] = event.timestamp or 0
        return True

    def prune(self, start_time: int) -> None:
        """Forget events older than the next query's start time."""
        self._timestamps = {key: ts for key, ts in self._timestamps.items() if ts >= start_time}


class LogsService(BaseAWSService):
    """Service for finding and reading task logs."""

    def __init__(self, logs_client: CloudWatchLogsClient, task_service: TaskService) -> None:
        super().__init__(logs_client)
        self.task_service = task_service

    def get_log_targets(self, cluster_name: str, tasks: list[str]) -> list[LogTarget]:
        """Resolve the awslogs group and stream of every container in the tasks."""
        targets: list[LogTarget] = []
        definitions: dict[str, dict] = {}
        for task in self.task_service.describe_tasks(cluster_name, tasks):
            task_def_arn = task["taskDefinitionArn"]
            if task_def_arn not in definitions:
                definitions[task_def_arn] = self.task_service.get_task_definition(task_def_arn)

            task_id = extract_name_from_arn(task["taskArn"])
            awslogs = ContainerService.get_awslogs_options(definitions[task_def_arn])
            for container_name, options in awslogs.items():
                stream_prefix = options.get("awslogs-stream-prefix", DEFAULT_STREAM_PREFIX)
                targets.append(
                    {
                        "log_group": options["awslogs-group"],
                        "log_stream": f"{stream_prefix}/{container_name}/{task_id}",
                        "container_name": container_name,
                        "task_id": task_id,
                    }
                )

        if not targets:
            raise NoResourceError("Log Group")
        return targets

    def get_events(self, targets: list[LogTarget], start_time: int) -> list[LogEvent]:
        """Fetch events newer than `start_time` (ms) across all targets, oldest first."""
        streams_by_group: dict[str, list[str]] = {}
        for target in targets:
            streams_by_group.setdefault(target["log_group"], []).append(target["log_stream"])

        events: list[LogEvent] = []
        for group, streams in streams_by_group.items():
            for batch in batch_items(streams, MAX_STREAMS_PER_QUERY):
                raw_events = paginate_aws_list(
                    self.client,
                    "filter_log_events",
                    "events",
                    logGroupName=group,
                    logStreamNames=batch,
                    startTime=start_time,
                )
                events.extend(LogEvent.from_filtered(event) for event in raw_events)

        events.sort(key=lambda event: event.timestamp or 0)
        return events

    def tail(
        self,
        targets: list[LogTarget],
        since: datetime,
        stop: threading.Event,
        interval: float = TAIL_INTERVAL,
        emit: Callable[[LogEvent], None] | None = None,
    ) -> None:
        """Print new events until `stop` is set."""
        emit = emit or _print_event
        start_time = to_millis(since)
        seen = SeenEvents()

        logger.debug("Tailing %d stream(s) from %d", len(targets), start_time)
        while not stop.is_set():
            for event in self.get_events(targets, start_time):
                if event.timestamp and event.timestamp < start_time:
                    continue
                if not seen.add(event):
                    continue
                emit(event)
                if event.timestamp:
                    # Re-query from the newest timestamp; duplicates at that instant are filtered by `seen`
                    start_time = max(start_time, event.timestamp)
            seen.prune(start_time)
            if stop.wait(interval):
                break


def _print_event(event: LogEvent) -> None:
    console.print(event.format(), markup=False, highlight=False)
