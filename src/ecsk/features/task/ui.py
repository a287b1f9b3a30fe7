"""UI components for task and task definition selection."""

from __future__ import annotations

from ...core.base import BaseUIComponent
from ...core.errors import NoResourceError
from ...core.types import TaskSummary
from ...core.utils import format_columns, format_timestamp, show_spinner, truncate
from .task import TaskService

LAUNCH_TYPES = ("FARGATE", "EC2")


def build_task_choices(summaries: list[TaskSummary]) -> list[dict[str, str]]:
    """One aligned row per task: id, definition, status, created, group, IP."""
    rows = [
        [
            summary["task_id"],
            truncate(summary["task_definition"]),
            summary["last_status"],
            format_timestamp(summary["created_at"]),
            truncate(summary["group"]),
            summary["private_ip"],
        ]
        for summary in summaries
    ]
    lines = format_columns(rows)
    return [{"name": line, "value": summary["task_id"]} for line, summary in zip(lines, summaries)]


class TaskUI(BaseUIComponent):
    """UI component for task selection."""

    def __init__(self, task_service: TaskService) -> None:
        super().__init__()
        self.task_service = task_service

    def ask_launch_type(self, can_go_back: bool = False) -> str:
        choices = [{"name": launch_type, "value": launch_type} for launch_type in LAUNCH_TYPES]
        return self.select("Choose Launch Type:", choices, can_go_back)

    def ask_task_definition(self, can_go_back: bool = False) -> str:
        with show_spinner():
            families = self.task_service.get_task_definition_families()

        if not families:
            raise NoResourceError("Task Definition")

        choices = [{"name": family, "value": family} for family in families]
        return self.select("Choose Task Definition:", choices, can_go_back)

    def _load_task_choices(self, cluster_name: str) -> list[dict[str, str]]:
        with show_spinner():
            summaries = self.task_service.get_task_summaries(cluster_name)

        if not summaries:
            raise NoResourceError("Task")

        return build_task_choices(summaries)

    def ask_task(self, cluster_name: str, can_go_back: bool = False) -> str:
        choices = self._load_task_choices(cluster_name)
        return self.select("Choose Task (Already filtered by Cluster):", choices, can_go_back)

    def ask_tasks(self, cluster_name: str) -> list[str]:
        choices = self._load_task_choices(cluster_name)
        return self.select_multiple("Choose Tasks (Already filtered by Cluster):", choices)
