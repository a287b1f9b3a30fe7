"""`ecsk stop`: stop tasks like `docker stop`."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from ..aws_service import AWSClients
from ..core.signals import handle_signals
from ..core.utils import console
from ..core.wizard import ParameterSet, Step, Wizard
from ..features.task.progress import STOP_PROGRESSES, TaskProgressPoller
from ..features.task.task import TaskService
from .common import Prompts, cluster_tasks_rules


@dataclass
class StopOptions:
    cluster: str = ""
    tasks: list[str] = field(default_factory=list)


def build_wizard(prompts: Prompts) -> Wizard:
    return Wizard(cluster_tasks_rules(prompts))


def stop_tasks(task_service: TaskService, cluster_name: str, task_ids: list[str], cancel: threading.Event) -> bool:
    """Request the stop, then report each shutdown phase. False when cancelled."""
    console.print()
    poller = TaskProgressPoller(task_service, cancel)
    if not poller.request_stop(cluster_name, task_ids):
        return False
    return poller.wait_all(cluster_name, task_ids, STOP_PROGRESSES)


def execute(options: StopOptions, clients: AWSClients) -> None:
    prompts = Prompts(clients)
    params = ParameterSet({Step.CLUSTER: options.cluster, Step.TASKS: options.tasks})

    def _stop(resolved: ParameterSet) -> None:
        with handle_signals() as cancel:
            stop_tasks(prompts.task_service, resolved.text(Step.CLUSTER), resolved.items(Step.TASKS), cancel)

    build_wizard(prompts).run(params, _stop)
