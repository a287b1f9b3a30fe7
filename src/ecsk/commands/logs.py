"""`ecsk logs`: follow task logs like `docker logs -f`."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..aws_service import AWSClients
from ..core.signals import handle_signals
from ..core.utils import print_info, show_spinner
from ..core.wizard import ParameterSet, Step, Wizard
from ..features.logs.logs import LogsService, parse_since
from .common import Prompts, cluster_tasks_rules

DEFAULT_SINCE = "5m"


@dataclass
class LogsOptions:
    cluster: str = ""
    tasks: list[str] = field(default_factory=list)
    since: str = DEFAULT_SINCE


def build_wizard(prompts: Prompts) -> Wizard:
    return Wizard(cluster_tasks_rules(prompts))


def execute(options: LogsOptions, clients: AWSClients) -> None:
    since = parse_since(options.since)
    prompts = Prompts(clients)
    logs_service = LogsService(clients.logs, prompts.task_service)
    params = ParameterSet({Step.CLUSTER: options.cluster, Step.TASKS: options.tasks})

    def _tail(resolved: ParameterSet) -> None:
        with show_spinner():
            targets = logs_service.get_log_targets(resolved.text(Step.CLUSTER), resolved.items(Step.TASKS))
        for target in targets:
            print_info(f"Following {target['log_group']} {target['log_stream']}")
        with handle_signals() as cancel:
            logs_service.tail(targets, since, cancel)

    build_wizard(prompts).run(params, _tail)
