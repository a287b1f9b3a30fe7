"""Task lifecycle polling for run and stop."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from ...core.errors import TaskFailureError
from ...core.utils import console, extract_name_from_arn, print_success, show_spinner
from .task import TaskService

logger = logging.getLogger(__name__)

POLL_INTERVAL = 3  # seconds
STOPPED_POLL_INTERVAL = 6  # seconds


@dataclass(frozen=True)
class Progress:
    """One expected status transition and how to report it."""

    status: str
    message: str
    completed: str
    fail_on_error: bool = False


START_PROGRESSES = (
    Progress("PROVISIONING", "Provisioning...", "Provisioned", fail_on_error=True),
    Progress("PENDING", "Pending...", "Pended", fail_on_error=True),
    Progress("ACTIVATING", "Activating...", "Activated", fail_on_error=True),
)

STOP_PROGRESSES = (
    Progress("DEACTIVATING", "Deactivating...", "Deactivated"),
    Progress("STOPPING", "Stopping...", "Stopped"),
    Progress("DEPROVISIONING", "Deprovisioning...", "Deprovisioned"),
)


class TaskProgressPoller:
    """Polls task status until an expected phase has passed.

    Every wait returns False without raising when `cancel` is set.
    """

    def __init__(self, task_service: TaskService, cancel: threading.Event, interval: float = POLL_INTERVAL) -> None:
        self.task_service = task_service
        self.cancel = cancel
        self.interval = interval

    def wait(self, cluster_name: str, task_ids: list[str], progress: Progress) -> bool:
        """Block while any task is still at `progress.status`."""
        with show_spinner(progress.message):
            while True:
                tasks = self.task_service.describe_tasks(cluster_name, task_ids)
                if not any(task.get("lastStatus") == progress.status for task in tasks):
                    break
                logger.debug("Tasks still %s, polling again in %ss", progress.status, self.interval)
                if self.cancel.wait(self.interval):
                    console.print()
                    return False

        if progress.fail_on_error:
            for task in tasks:
                reason = task.get("stoppedReason")
                if reason:
                    raise TaskFailureError(reason)

        print_success(progress.completed)
        return True

    def wait_all(self, cluster_name: str, task_ids: list[str], progresses: tuple[Progress, ...]) -> bool:
        for progress in progresses:
            if not self.wait(cluster_name, task_ids, progress):
                return False
        return True

    def request_stop(self, cluster_name: str, task_ids: list[str]) -> bool:
        """Stop tasks and wait until each one reports a status other than the one seen at request time.

        A task that is already STOPPED counts as transitioned.
        """
        # The status right after stop_task is usually still RUNNING
        with show_spinner("Requesting stop-task..."):
            statuses = {
                extract_name_from_arn(task): self.task_service.stop_task(cluster_name, task) for task in task_ids
            }

            while True:
                tasks = self.task_service.describe_tasks(cluster_name, task_ids)
                unchanged = [
                    task
                    for task in tasks
                    if task.get("lastStatus") != "STOPPED"
                    and task.get("lastStatus") == statuses.get(extract_name_from_arn(task["taskArn"]))
                ]
                if not unchanged:
                    break
                if self.cancel.wait(self.interval):
                    console.print()
                    return False

        print_success("Requested stop-task")
        return True

    def wait_until_stopped(self, cluster_name: str, task_ids: list[str], interval: float = STOPPED_POLL_INTERVAL) -> bool:
        while True:
            tasks = self.task_service.describe_tasks(cluster_name, task_ids)
            if all(task.get("lastStatus") == "STOPPED" for task in tasks):
                return True
            if self.cancel.wait(interval):
                return False
