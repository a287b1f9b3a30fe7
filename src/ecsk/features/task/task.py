"""Task operations for ECS."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ...core.base import BaseAWSService
from ...core.errors import TaskFailureError, format_failures
from ...core.types import TaskSummary
from ...core.utils import batch_items, extract_name_from_arn, paginate_aws_list

if TYPE_CHECKING:
    from mypy_boto3_ecs.client import ECSClient
    from mypy_boto3_ecs.type_defs import TaskDefinitionTypeDef, TaskTypeDef

logger = logging.getLogger(__name__)

# describe_tasks accepts at most this many tasks per call
DESCRIBE_TASKS_BATCH_SIZE = 100


class TaskService(BaseAWSService):
    """Service for ECS task operations."""

    def __init__(self, ecs_client: ECSClient) -> None:
        super().__init__(ecs_client)

    def get_task_arns(self, cluster_name: str) -> list[str]:
        return paginate_aws_list(self.client, "list_tasks", "taskArns", cluster=cluster_name)

    def describe_tasks(self, cluster_name: str, tasks: list[str]) -> list[TaskTypeDef]:
        """Describe any number of tasks, batching requests and keeping the input order."""
        described: list[TaskTypeDef] = []
        for batch in batch_items(tasks, DESCRIBE_TASKS_BATCH_SIZE):
            logger.debug("Describing %d task(s) in %s", len(batch), cluster_name)
            response = self.client.describe_tasks(cluster=cluster_name, tasks=batch)
            failures = response.get("failures", [])
            if failures:
                raise TaskFailureError(format_failures(failures))
            described.extend(response.get("tasks", []))
        return described

    def get_task_summaries(self, cluster_name: str) -> list[TaskSummary]:
        task_arns = self.get_task_arns(cluster_name)
        if not task_arns:
            return []
        return [_create_task_summary(task) for task in self.describe_tasks(cluster_name, task_arns)]

    def get_task_definition_families(self) -> list[str]:
        return paginate_aws_list(self.client, "list_task_definition_families", "families", status="ACTIVE")

    def get_task_definition(self, task_definition: str) -> TaskDefinitionTypeDef:
        response = self.client.describe_task_definition(taskDefinition=task_definition)
        return response["taskDefinition"]

    def run_task(
        self,
        cluster_name: str,
        task_definition: str,
        launch_type: str,
        subnets: list[str],
        security_groups: list[str],
        assign_public_ip: bool = False,
        count: int = 1,
        overrides: dict[str, Any] | None = None,
        enable_execute_command: bool = False,
    ) -> list[str]:
        """Start tasks and return their IDs."""
        response = self.client.run_task(
            cluster=cluster_name,
            taskDefinition=task_definition,
            launchType="FARGATE" if launch_type == "FARGATE" else "EC2",
            count=count,
            networkConfiguration={
                "awsvpcConfiguration": {
                    "subnets": subnets,
                    "securityGroups": security_groups,
                    "assignPublicIp": "ENABLED" if assign_public_ip else "DISABLED",
                }
            },
            overrides=overrides or {},
            enableExecuteCommand=enable_execute_command,
        )
        failures = response.get("failures", [])
        if failures:
            raise TaskFailureError(format_failures(failures))
        return [extract_name_from_arn(task["taskArn"]) for task in response.get("tasks", [])]

    def stop_task(self, cluster_name: str, task: str) -> str:
        """Request a stop and return the status reported right after the request."""
        response = self.client.stop_task(cluster=cluster_name, task=task)
        return response["task"].get("lastStatus", "UNKNOWN")

    def get_container_runtime_id(self, cluster_name: str, task: str, container_name: str) -> str:
        tasks = self.describe_tasks(cluster_name, [task])
        for container in tasks[0].get("containers", []) if tasks else []:
            if container.get("name") == container_name:
                return container.get("runtimeId", "")
        return ""


def _get_private_ip(task: TaskTypeDef) -> str:
    ip_address = "-"
    for attachment in task.get("attachments", []):
        for detail in attachment.get("details", []):
            if detail.get("name") == "privateIPv4Address":
                ip_address = detail.get("value", ip_address)
    return ip_address


def _create_task_summary(task: TaskTypeDef) -> TaskSummary:
    """Create a task summary from an AWS task description."""
    return {
        "task_id": extract_name_from_arn(task["taskArn"]),
        "task_arn": task["taskArn"],
        "task_definition": extract_name_from_arn(task.get("taskDefinitionArn", "-")),
        "last_status": task.get("lastStatus", "UNKNOWN"),
        "created_at": task.get("createdAt"),
        "group": task.get("group", "-"),
        "private_ip": _get_private_ip(task),
    }
