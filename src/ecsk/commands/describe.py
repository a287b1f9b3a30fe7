"""`ecsk describe`: show task details like `docker inspect`."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ..aws_service import AWSClients
from ..core.utils import console, show_spinner
from ..core.wizard import ParameterSet, Step, Wizard
from ..features.task.task import TaskService
from .common import Prompts, cluster_tasks_rules


@dataclass
class DescribeOptions:
    cluster: str = ""
    tasks: list[str] = field(default_factory=list)


def build_wizard(prompts: Prompts) -> Wizard:
    return Wizard(cluster_tasks_rules(prompts))


def _json_default(value: Any) -> str:  # noqa: ANN401
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def describe_tasks(task_service: TaskService, cluster_name: str, task_ids: list[str]) -> None:
    with show_spinner():
        tasks = task_service.describe_tasks(cluster_name, task_ids)
    console.print_json(data={"tasks": tasks, "failures": []}, default=_json_default)


def execute(options: DescribeOptions, clients: AWSClients) -> None:
    prompts = Prompts(clients)
    params = ParameterSet({Step.CLUSTER: options.cluster, Step.TASKS: options.tasks})
    build_wizard(prompts).run(
        params,
        lambda resolved: describe_tasks(prompts.task_service, resolved.text(Step.CLUSTER), resolved.items(Step.TASKS)),
    )
