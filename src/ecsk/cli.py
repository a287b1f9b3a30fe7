"""Argument parsing and subcommand dispatch."""

from __future__ import annotations

import argparse
import shlex
from collections.abc import Callable
from typing import Any

from .aws_service import AWSClients
from .commands import cp, describe, logs, run, stop
from .commands import exec as exec_command
from .core.config import Settings
from .features.session.session import DEFAULT_PLUGIN
from .features.task.ui import LAUNCH_TYPES


def csv_list(value: str) -> list[str]:
    """Split a comma-separated option value, dropping blanks."""
    return [item.strip() for item in value.split(",") if item.strip()]


def join_command(parts: list[str]) -> str:
    """Join a trailing `-- command args...` into the string ECS Exec expects."""
    if parts and parts[0] == "--":
        parts = parts[1:]
    return shlex.join(parts)


def _add_aws_options(parser: argparse.ArgumentParser, suppress: bool = False) -> None:
    default = argparse.SUPPRESS if suppress else None
    group = parser.add_argument_group("AWS options")
    group.add_argument("--region", default=default, help="AWS region")
    group.add_argument("--profile", default=default, help="AWS profile to use for authentication")
    group.add_argument("--code", default=default, help="MFA token code for assume-role profiles")
    group.add_argument(
        "--debug",
        action="store_true",
        default=default if suppress else False,
        help="Log AWS calls and wizard steps to stderr",
    )


def _common_parser() -> argparse.ArgumentParser:
    # Suppressed defaults so a value given before the subcommand is not reset
    parser = argparse.ArgumentParser(add_help=False)
    _add_aws_options(parser, suppress=True)
    return parser


def _add_cluster(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--cluster", default="", help="ECS cluster name")


def _add_tasks(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--tasks", type=csv_list, default=[], help="Comma-separated task IDs")


def _add_plugin(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--plugin", default=DEFAULT_PLUGIN, help="Path to session-manager-plugin")


def build_parser(version: str) -> argparse.ArgumentParser:
    common = _common_parser()
    parser = argparse.ArgumentParser(prog="ecsk", description="Interactive Docker-like CLI for Amazon ECS")
    parser.add_argument("--version", action="version", version=f"ecsk {version}")
    _add_aws_options(parser)
    subparsers = parser.add_subparsers(dest="subcommand", metavar="COMMAND", required=True)

    p = subparsers.add_parser("run", parents=[common], help="Run tasks like `docker run`")
    p.add_argument("--launch-type", choices=LAUNCH_TYPES, default="", help="Launch type")
    _add_cluster(p)
    p.add_argument("--task-definition", default="", help="Task definition family or ARN")
    p.add_argument("--vpc", default="", help="VPC ID used to filter subnets and security groups")
    p.add_argument("--subnets", type=csv_list, default=[], help="Comma-separated subnet IDs")
    p.add_argument("--security-groups", type=csv_list, default=[], help="Comma-separated security group IDs")
    p.add_argument("--assign-public-ip", action="store_true", help="Assign a public IP to the tasks")
    p.add_argument("-e", "--enable-execute-command", action="store_true", help="Enable ECS Exec")
    p.add_argument("--count", type=int, default=1, help="Number of tasks to run")
    p.add_argument("--overrides", default="{}", help="Task overrides as JSON")
    p.add_argument("--rm", action="store_true", help="Stop the tasks when the command exits")
    p.add_argument("-d", "--detach", action="store_true", help="Print task IDs and exit")
    p.add_argument("-c", "--container", default="", help="Container to exec the command in")
    p.add_argument("-i", "--interactive", action="store_true", help="Run the command interactively")
    _add_plugin(p)
    p.add_argument("command", nargs="*", help="Command to exec after the tasks start (after --)")

    p = subparsers.add_parser("exec", parents=[common], help="Run a command in a container like `docker exec`")
    _add_cluster(p)
    p.add_argument("--task", default="", help="Task ID")
    p.add_argument("--container", default="", help="Container name")
    p.add_argument("-i", "--interactive", action="store_true", help="Run the command interactively")
    _add_plugin(p)
    p.add_argument(
        "--enable-error-checker",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Run check-ecs-exec.sh when execute-command fails",
    )
    p.add_argument("command", nargs="*", help="Command to run (after --)")

    p = subparsers.add_parser("cp", parents=[common], help="Copy files to or from a container like `docker cp`")
    p.add_argument("src", help="Local path or [container]:/absolute/path")
    p.add_argument("dst", help="Local path or [container]:/absolute/path")
    _add_cluster(p)
    p.add_argument("--task", default="", help="Task ID")
    p.add_argument("--container", default="", help="Container name")
    p.add_argument("--bucket", default="", help="S3 bucket used to stage files")
    _add_plugin(p)

    p = subparsers.add_parser("logs", parents=[common], help="Follow task logs like `docker logs -f`")
    _add_cluster(p)
    _add_tasks(p)
    p.add_argument("--since", default=logs.DEFAULT_SINCE, help="Duration like 5m or an RFC3339 time")

    p = subparsers.add_parser("stop", parents=[common], help="Stop tasks like `docker stop`")
    _add_cluster(p)
    _add_tasks(p)

    p = subparsers.add_parser("describe", parents=[common], help="Print tasks as JSON")
    _add_cluster(p)
    _add_tasks(p)

    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    return Settings(region=args.region, profile=args.profile, code=args.code, debug=args.debug)


def _run_options(args: argparse.Namespace) -> run.RunOptions:
    return run.RunOptions(
        launch_type=args.launch_type,
        cluster=args.cluster,
        task_definition=args.task_definition,
        vpc=args.vpc,
        subnets=args.subnets,
        security_groups=args.security_groups,
        assign_public_ip=args.assign_public_ip,
        enable_execute_command=args.enable_execute_command,
        count=args.count,
        overrides=args.overrides,
        rm=args.rm,
        detach=args.detach,
        container=args.container,
        interactive=args.interactive,
        command=join_command(args.command),
        plugin=args.plugin,
    )


def _exec_options(args: argparse.Namespace) -> exec_command.ExecOptions:
    return exec_command.ExecOptions(
        cluster=args.cluster,
        task=args.task,
        container=args.container,
        command=join_command(args.command),
        interactive=args.interactive,
        plugin=args.plugin,
        enable_error_checker=args.enable_error_checker,
    )


def _cp_options(args: argparse.Namespace) -> cp.CpOptions:
    direction, container, src, dst = cp.parse_copy_paths(args.src, args.dst)
    return cp.CpOptions(
        src=src,
        dst=dst,
        direction=direction,
        cluster=args.cluster,
        task=args.task,
        container=args.container or container,
        bucket=args.bucket,
        plugin=args.plugin,
    )


def _logs_options(args: argparse.Namespace) -> logs.LogsOptions:
    return logs.LogsOptions(cluster=args.cluster, tasks=args.tasks, since=args.since)


def _stop_options(args: argparse.Namespace) -> stop.StopOptions:
    return stop.StopOptions(cluster=args.cluster, tasks=args.tasks)


def _describe_options(args: argparse.Namespace) -> describe.DescribeOptions:
    return describe.DescribeOptions(cluster=args.cluster, tasks=args.tasks)


COMMANDS: dict[str, tuple[Callable[[argparse.Namespace], Any], Callable[[Any, AWSClients], None]]] = {
    "run": (_run_options, run.execute),
    "exec": (_exec_options, exec_command.execute),
    "cp": (_cp_options, cp.execute),
    "logs": (_logs_options, logs.execute),
    "stop": (_stop_options, stop.execute),
    "describe": (_describe_options, describe.execute),
}


def build_options(args: argparse.Namespace) -> Any:  # noqa: ANN401
    """Translate parsed arguments into the subcommand's options object."""
    to_options, _execute = COMMANDS[args.subcommand]
    return to_options(args)


def dispatch(subcommand: str, settings: Settings, options: Any, clients: AWSClients | None = None) -> None:  # noqa: ANN401
    """Run a subcommand against clients for `settings` unless clients are given."""
    _to_options, execute = COMMANDS[subcommand]
    execute(options, clients or AWSClients.from_settings(settings))
