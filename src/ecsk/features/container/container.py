"""Container lookups for ECS tasks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...core.errors import NoResourceError
from ..task.task import TaskService

if TYPE_CHECKING:
    from mypy_boto3_ecs.type_defs import TaskDefinitionTypeDef


class ContainerService:
    """Service for container operations on top of task descriptions."""

    def __init__(self, task_service: TaskService) -> None:
        self.task_service = task_service

    def get_container_names(self, cluster_name: str, task: str) -> list[str]:
        tasks = self.task_service.describe_tasks(cluster_name, [task])
        if not tasks:
            raise NoResourceError("Task")
        return [container["name"] for container in tasks[0].get("containers", [])]

    @staticmethod
    def get_awslogs_options(task_definition: TaskDefinitionTypeDef) -> dict[str, dict[str, str]]:
        """Map container name to its awslogs options, for containers using the awslogs driver."""
        options_by_container = {}
        for container_def in task_definition.get("containerDefinitions", []):
            log_config = container_def.get("logConfiguration") or {}
            if log_config.get("logDriver") != "awslogs":
                continue
            options = log_config.get("options") or {}
            if options.get("awslogs-group"):
                options_by_container[container_def["name"]] = dict(options)
        return options_by_container
