"""Type definitions for ecsk."""

from __future__ import annotations

from datetime import datetime
from typing import TypedDict


class TaskSummary(TypedDict):
    task_id: str
    task_arn: str
    task_definition: str
    last_status: str
    created_at: datetime | None
    group: str
    private_ip: str


class LogTarget(TypedDict):
    log_group: str
    log_stream: str
    container_name: str
    task_id: str


class TransferResult(TypedDict):
    keys: list[str]
    failed: list[str]
