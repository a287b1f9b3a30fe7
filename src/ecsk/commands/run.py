"""`ecsk run`: start tasks like `docker run`."""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass, field
from typing import Any

from botocore.exceptions import ClientError

from ..aws_service import AWSClients
from ..core.context import ContainerTarget
from ..core.errors import InvalidOverridesError, UsageError
from ..core.signals import handle_signals
from ..core.utils import console, print_info, print_warning
from ..core.wizard import ParameterSet, Step, StepRule, Wizard
from ..features.logs.logs import LogsService, parse_since
from ..features.session.session import DEFAULT_PLUGIN, SessionService, is_agent_not_running
from ..features.task.progress import START_PROGRESSES, TaskProgressPoller
from .common import Prompts, cluster_step
from .stop import stop_tasks

logger = logging.getLogger(__name__)

LOG_SINCE = "5m"
EXEC_MAX_ATTEMPTS = 10
EXEC_RETRY_INTERVAL = 3  # seconds
LOG_THREAD_JOIN_TIMEOUT = 5  # seconds


@dataclass
class RunOptions:
    launch_type: str = ""
    cluster: str = ""
    task_definition: str = ""
    vpc: str = ""
    subnets: list[str] = field(default_factory=list)
    security_groups: list[str] = field(default_factory=list)
    assign_public_ip: bool = False
    enable_execute_command: bool = False
    count: int = 1
    overrides: str = "{}"
    rm: bool = False
    detach: bool = False
    container: str = ""
    interactive: bool = False
    command: str = ""
    plugin: str = DEFAULT_PLUGIN


def parse_overrides(value: str) -> dict[str, Any]:
    """Decode --overrides, which must be a JSON object."""
    try:
        overrides = json.loads(value or "{}")
    except json.JSONDecodeError as e:
        raise InvalidOverridesError(f"Invalid --overrides: {e}") from e
    if not isinstance(overrides, dict):
        raise InvalidOverridesError("Invalid --overrides: expected a JSON object")
    return overrides


def _network_chosen(params: ParameterSet) -> bool:
    # Subnets and security groups given up front make the VPC question moot
    return params.is_set(Step.SUBNETS) and params.is_set(Step.SECURITY_GROUPS)


def build_wizard(prompts: Prompts) -> Wizard:
    return Wizard(
        [
            StepRule(Step.LAUNCH_TYPE, lambda _params, can_go_back: prompts.task.ask_launch_type(can_go_back)),
            cluster_step(prompts, back_to=Step.LAUNCH_TYPE),
            StepRule(
                Step.TASK_DEFINITION,
                lambda _params, can_go_back: prompts.task.ask_task_definition(can_go_back),
                back_to=Step.CLUSTER,
            ),
            StepRule(
                Step.VPC,
                lambda _params, can_go_back: prompts.network.ask_vpc(can_go_back),
                back_to=Step.TASK_DEFINITION,
                satisfied=_network_chosen,
            ),
            StepRule(
                Step.SUBNETS,
                lambda params, _can_go_back: prompts.network.ask_subnets(params.text(Step.VPC)),
                back_to=Step.VPC,
            ),
            StepRule(
                Step.SECURITY_GROUPS,
                lambda params, _can_go_back: prompts.network.ask_security_groups(params.text(Step.VPC)),
                back_to=Step.SUBNETS,
            ),
        ]
    )


def follow_logs(logs_service: LogsService, cluster_name: str, task_ids: list[str], finished: threading.Event) -> None:
    """Tail the tasks' logs until `finished` is set; log errors never abort the run."""
    try:
        targets = logs_service.get_log_targets(cluster_name, task_ids)
        logs_service.tail(targets, parse_since(LOG_SINCE), finished)
    except Exception as e:  # noqa: BLE001
        logger.debug("Log tailing stopped: %s", e)
        print_warning(str(e))
        console.print("Wait until tasks stopped...")


def exec_with_retry(
    session_service: SessionService,
    target: ContainerTarget,
    command: str,
    interactive: bool,
    cancel: threading.Event,
    attempts: int = EXEC_MAX_ATTEMPTS,
    interval: float = EXEC_RETRY_INTERVAL,
) -> None:
    """Start a session, retrying while the exec agent of a fresh task is still starting."""
    print_info("Waiting for the execute command agent...")
    for attempt in range(1, attempts + 1):
        try:
            session_service.start(target, command, interactive=interactive)
            return
        except ClientError as e:
            if not is_agent_not_running(e) or attempt == attempts:
                raise
            logger.debug("Exec agent not running yet (attempt %d/%d)", attempt, attempts)
        if cancel.wait(interval):
            return


def start_run(options: RunOptions, overrides: dict[str, Any], params: ParameterSet, prompts: Prompts) -> list[str]:
    clients = prompts.clients
    task_service = prompts.task_service
    cluster_name = params.text(Step.CLUSTER)

    task_ids = task_service.run_task(
        cluster_name,
        params.text(Step.TASK_DEFINITION),
        params.text(Step.LAUNCH_TYPE),
        params.items(Step.SUBNETS),
        params.items(Step.SECURITY_GROUPS),
        assign_public_ip=options.assign_public_ip,
        count=options.count,
        overrides=overrides,
        enable_execute_command=options.enable_execute_command,
    )

    if options.detach:
        for task_id in task_ids:
            console.print(task_id, markup=False, highlight=False)
        return task_ids

    with handle_signals() as cancel:
        poller = TaskProgressPoller(task_service, cancel)
        if not poller.wait_all(cluster_name, task_ids, START_PROGRESSES):
            return task_ids
        console.print(f"Tasks started! {task_ids}", markup=False)

        if options.command:
            session_service = SessionService(clients.ecs, task_service, clients.region, clients.profile, options.plugin)
            target = ContainerTarget(cluster_name, task_ids[0], options.container)
            exec_with_retry(session_service, target, options.command, options.interactive, cancel)
        else:
            finished = threading.Event()
            logs_service = LogsService(clients.logs, task_service)
            log_thread = threading.Thread(
                target=follow_logs, args=(logs_service, cluster_name, task_ids, finished), daemon=True
            )
            log_thread.start()
            try:
                poller.wait_until_stopped(cluster_name, task_ids)
            finally:
                finished.set()
                log_thread.join(timeout=LOG_THREAD_JOIN_TIMEOUT)

    return task_ids


def execute(options: RunOptions, clients: AWSClients) -> None:
    if options.command and not options.container:
        raise UsageError("Need -c or --container to exec command.")
    overrides = parse_overrides(options.overrides)

    prompts = Prompts(clients)
    params = ParameterSet(
        {
            Step.LAUNCH_TYPE: options.launch_type,
            Step.CLUSTER: options.cluster,
            Step.TASK_DEFINITION: options.task_definition,
            Step.VPC: options.vpc,
            Step.SUBNETS: options.subnets,
            Step.SECURITY_GROUPS: options.security_groups,
        }
    )

    def _run(resolved: ParameterSet) -> None:
        task_ids = start_run(options, overrides, resolved, prompts)
        if options.rm and not options.detach and task_ids:
            with handle_signals() as cancel:
                stop_tasks(prompts.task_service, resolved.text(Step.CLUSTER), task_ids, cancel)

    build_wizard(prompts).run(params, _run)
