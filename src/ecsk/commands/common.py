"""Step rules and UI wiring shared by several commands."""

from __future__ import annotations

from functools import cached_property

from ..aws_service import AWSClients
from ..core.wizard import Step, StepRule
from ..features.cluster.cluster import ClusterService
from ..features.cluster.ui import ClusterUI
from ..features.container.container import ContainerService
from ..features.container.ui import ContainerUI
from ..features.network.network import NetworkService
from ..features.network.ui import NetworkUI
from ..features.storage.storage import StorageService
from ..features.storage.ui import BucketUI
from ..features.task.task import TaskService
from ..features.task.ui import TaskUI


class Prompts:
    """UI components and services bound to one set of AWS clients."""

    def __init__(self, clients: AWSClients) -> None:
        self.clients = clients

    @cached_property
    def task_service(self) -> TaskService:
        return TaskService(self.clients.ecs)

    @cached_property
    def storage_service(self) -> StorageService:
        return StorageService(self.clients.s3)

    @cached_property
    def cluster(self) -> ClusterUI:
        return ClusterUI(ClusterService(self.clients.ecs))

    @cached_property
    def task(self) -> TaskUI:
        return TaskUI(self.task_service)

    @cached_property
    def network(self) -> NetworkUI:
        return NetworkUI(NetworkService(self.clients.ec2))

    @cached_property
    def container(self) -> ContainerUI:
        return ContainerUI(ContainerService(self.task_service))

    @cached_property
    def bucket(self) -> BucketUI:
        return BucketUI(self.storage_service)


def cluster_step(prompts: Prompts, back_to: Step | None = None) -> StepRule:
    return StepRule(Step.CLUSTER, lambda _params, can_go_back: prompts.cluster.ask_cluster(can_go_back), back_to)


def task_step(prompts: Prompts) -> StepRule:
    return StepRule(
        Step.TASK,
        lambda params, can_go_back: prompts.task.ask_task(params.text(Step.CLUSTER), can_go_back),
        back_to=Step.CLUSTER,
    )


def tasks_step(prompts: Prompts) -> StepRule:
    return StepRule(
        Step.TASKS,
        lambda params, _can_go_back: prompts.task.ask_tasks(params.text(Step.CLUSTER)),
        back_to=Step.CLUSTER,
    )


def container_step(prompts: Prompts) -> StepRule:
    return StepRule(
        Step.CONTAINER,
        lambda params, can_go_back: prompts.container.ask_container(
            params.text(Step.CLUSTER), params.text(Step.TASK), can_go_back
        ),
        back_to=Step.TASK,
    )


def cluster_tasks_rules(prompts: Prompts) -> list[StepRule]:
    """Cluster → Tasks, used by logs, stop and describe."""
    return [cluster_step(prompts), tasks_step(prompts)]


def cluster_task_container_rules(prompts: Prompts) -> list[StepRule]:
    """Cluster → Task → Container, used by exec and cp."""
    return [cluster_step(prompts), task_step(prompts), container_step(prompts)]
