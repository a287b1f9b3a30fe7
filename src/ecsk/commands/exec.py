"""`ecsk exec`: run a command in a container like `docker exec`."""

from __future__ import annotations

from dataclasses import dataclass

from ..aws_service import AWSClients
from ..core.context import ContainerTarget
from ..core.errors import UsageError
from ..core.wizard import ParameterSet, Step, Wizard
from ..features.session.session import DEFAULT_PLUGIN, SessionService
from .common import Prompts, cluster_task_container_rules


@dataclass
class ExecOptions:
    cluster: str = ""
    task: str = ""
    container: str = ""
    command: str = ""
    interactive: bool = False
    plugin: str = DEFAULT_PLUGIN
    enable_error_checker: bool = True


def build_wizard(prompts: Prompts) -> Wizard:
    return Wizard(cluster_task_container_rules(prompts))


def target_from(params: ParameterSet) -> ContainerTarget:
    return ContainerTarget(params.text(Step.CLUSTER), params.text(Step.TASK), params.text(Step.CONTAINER))


def execute(options: ExecOptions, clients: AWSClients) -> None:
    if not options.command:
        raise UsageError('Need command. Try "ecsk exec --help".')

    prompts = Prompts(clients)
    params = ParameterSet(
        {Step.CLUSTER: options.cluster, Step.TASK: options.task, Step.CONTAINER: options.container}
    )

    def _exec(resolved: ParameterSet) -> None:
        session_service = SessionService(
            clients.ecs, prompts.task_service, clients.region, clients.profile, options.plugin
        )
        session_service.start(
            target_from(resolved),
            options.command,
            interactive=options.interactive,
            error_checker=options.enable_error_checker,
        )

    build_wizard(prompts).run(params, _exec)
