"""Interactive sessions into containers through session-manager-plugin."""

from __future__ import annotations

import json
import logging
import shutil
import subprocess
from typing import TYPE_CHECKING, Any

from botocore.exceptions import ClientError

from ...core.base import BaseAWSService
from ...core.context import ContainerTarget
from ...core.errors import SessionError
from ...core.signals import ignore_interrupts
from ...core.utils import console, extract_name_from_arn, print_error, print_warning
from ..task.task import TaskService

if TYPE_CHECKING:
    from mypy_boto3_ecs.client import ECSClient

logger = logging.getLogger(__name__)

DEFAULT_PLUGIN = "session-manager-plugin"
ERROR_CHECKER = "check-ecs-exec.sh"
AGENT_NOT_RUNNING_MARKERS = ("execute command agent isn’t running", "execute command agent isn't running")


def is_agent_not_running(error: Exception) -> bool:
    """True for the error ECS returns while the exec agent in a new task is still starting."""
    message = str(error).lower()
    return any(marker in message for marker in AGENT_NOT_RUNNING_MARKERS)


def build_plugin_args(
    plugin: str, session: dict[str, Any], region: str, profile: str, target: str
) -> list[str]:
    """Arguments in the order session-manager-plugin expects them."""
    return [
        plugin,
        json.dumps(session),
        region,
        "StartSession",
        profile,
        json.dumps({"Target": target}),
        f"https://ecs.{region}.amazonaws.com",
    ]


class SessionService(BaseAWSService):
    """Starts ECS Exec sessions."""

    def __init__(
        self,
        ecs_client: ECSClient,
        task_service: TaskService,
        region: str,
        profile: str = "",
        plugin: str = DEFAULT_PLUGIN,
    ) -> None:
        super().__init__(ecs_client)
        self.task_service = task_service
        self.region = region
        self.profile = profile
        self.plugin = plugin

    def start(
        self, target: ContainerTarget, command: str, interactive: bool = True, error_checker: bool = False
    ) -> None:
        """Run `command` in the container and attach the terminal until it exits."""
        try:
            response = self.client.execute_command(
                cluster=target.cluster_name,
                task=target.task,
                container=target.container_name,
                interactive=interactive,
                command=command,
            )
        except ClientError:
            if error_checker:
                self.run_error_checker(target)
            raise

        cluster_name = extract_name_from_arn(response.get("clusterArn", target.cluster_name))
        task_id = extract_name_from_arn(response.get("taskArn", target.task))
        runtime_id = self.task_service.get_container_runtime_id(cluster_name, task_id, target.container_name)
        session_target = ContainerTarget(cluster_name, task_id, target.container_name).session_target(runtime_id)

        args = build_plugin_args(self.plugin, response["session"], self.region, self.profile, session_target)
        logger.debug("Starting %s for %s", self.plugin, session_target)
        with ignore_interrupts():
            try:
                subprocess.run(args, check=True)
            except FileNotFoundError as e:
                raise SessionError(
                    f"{self.plugin} not found. Install the Session Manager plugin or pass --plugin."
                ) from e
            except subprocess.CalledProcessError as e:
                raise SessionError(f"{self.plugin} exited with status {e.returncode}") from e

    def run_error_checker(self, target: ContainerTarget) -> None:
        """Run the ECS Exec checker script to explain why execute_command failed."""
        print_error("Execution failed.")
        console.print("Start error checking...")

        checker = shutil.which(ERROR_CHECKER)
        if checker:
            result = subprocess.run([checker, target.cluster_name, target.task_id], check=False)
            if result.returncode != 0:
                print_warning(f"{ERROR_CHECKER} exited with status {result.returncode}")
        else:
            print_warning(
                f"{ERROR_CHECKER} not found on PATH. "
                "Get it from https://github.com/aws-containers/amazon-ecs-exec-checker"
            )
        console.print("Check completed.")
