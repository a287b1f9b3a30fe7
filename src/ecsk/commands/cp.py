"""`ecsk cp`: copy files between the local machine and a container like `docker cp`.

Files are staged in an S3 bucket under a per-transfer key prefix. The
container side of the transfer runs the AWS CLI through ECS Exec, so the
image needs `aws` installed and the task role needs access to the bucket.
"""

from __future__ import annotations

import os
import posixpath
import shlex
from dataclasses import dataclass

from ..aws_service import AWSClients
from ..core.errors import UsageError
from ..core.utils import print_success, print_warning, show_spinner
from ..core.wizard import ParameterSet, Step, StepRule, Wizard
from ..features.session.session import DEFAULT_PLUGIN, SessionService
from ..features.storage.storage import StorageService, generate_key_prefix
from .common import Prompts, cluster_task_container_rules
from .exec import target_from

UPLOAD = "upload"
DOWNLOAD = "download"

WRONG_FORMAT = 'Wrong format. Try "ecsk cp --help".'
NOT_ABSOLUTE = 'The remote path must be absolute. Try "ecsk cp --help".'


@dataclass
class CpOptions:
    src: str
    dst: str
    direction: str
    cluster: str = ""
    task: str = ""
    container: str = ""
    bucket: str = ""
    plugin: str = DEFAULT_PLUGIN


def parse_copy_paths(src: str, dst: str) -> tuple[str, str, str, str]:
    """Return (direction, container, local/remote src, local/remote dst).

    Exactly one side must look like `[container]:/absolute/path`.
    """
    src_container, src_sep, src_path = src.partition(":")
    dst_container, dst_sep, dst_path = dst.partition(":")

    if src_sep and not dst_sep:
        if not posixpath.isabs(src_path):
            raise UsageError(NOT_ABSOLUTE)
        return DOWNLOAD, src_container, src_path, dst
    if dst_sep and not src_sep:
        if not posixpath.isabs(dst_path):
            raise UsageError(NOT_ABSOLUTE)
        return UPLOAD, dst_container, src, dst_path
    raise UsageError(WRONG_FORMAT)


def container_download_command(bucket: str, prefix: str, dst: str, key: str | None = None) -> str:
    """Command the container runs to fetch staged files into `dst`.

    With `key`, only that object is copied and `dst` names the file itself
    unless it ends in `/` or is an existing directory.
    """
    if key:
        script = f"aws s3 cp --only-show-errors s3://{bucket}/{key} {shlex.quote(dst)}"
    else:
        script = f"aws s3 cp --recursive --only-show-errors s3://{bucket}/{prefix}/ {shlex.quote(dst)}"
    return f"sh -c {shlex.quote(script)}"


def container_upload_command(bucket: str, prefix: str, src: str) -> str:
    """Command the container runs to stage `src` (file or directory) in the bucket."""
    quoted = shlex.quote(src)
    destination = f"s3://{bucket}/{prefix}/"
    script = (
        f"if [ -d {quoted} ]; then aws s3 cp --recursive --only-show-errors {quoted} {destination}; "
        f"else aws s3 cp --only-show-errors {quoted} {destination}; fi"
    )
    return f"sh -c {shlex.quote(script)}"


def build_wizard(prompts: Prompts) -> Wizard:
    bucket_rule = StepRule(
        Step.BUCKET,
        lambda _params, can_go_back: prompts.bucket.ask_bucket(prompts.clients.region, can_go_back),
        back_to=Step.CONTAINER,
    )
    return Wizard([*cluster_task_container_rules(prompts), bucket_rule])


def copy_files(
    options: CpOptions, params: ParameterSet, storage: StorageService, session_service: SessionService
) -> None:
    bucket = params.text(Step.BUCKET)
    target = target_from(params)
    prefix = generate_key_prefix()

    if options.direction == UPLOAD:
        result = storage.upload(bucket, prefix, options.src)
        single_key = result["keys"][0] if os.path.isfile(options.src) and len(result["keys"]) == 1 else None
        command = container_download_command(bucket, prefix, options.dst, single_key)
        session_service.start(target, command, interactive=True)
    else:
        session_service.start(target, container_upload_command(bucket, prefix, options.src), interactive=True)
        file_name = posixpath.basename(options.src.rstrip("/"))
        result = storage.download(bucket, prefix, options.dst, file_name=file_name)
        if not result["keys"]:
            print_warning(f"Nothing was copied from {options.src}")

    with show_spinner("Cleaning up staged files..."):
        deleted = storage.delete_keys(bucket, prefix, result["keys"])
    if result["failed"]:
        print_warning(f"{len(result['failed'])} file(s) failed to transfer")
    print_success(f"Copied {len(result['keys']) - len(result['failed'])} file(s), removed {deleted} staged object(s)")


def execute(options: CpOptions, clients: AWSClients) -> None:
    prompts = Prompts(clients)
    params = ParameterSet(
        {
            Step.CLUSTER: options.cluster,
            Step.TASK: options.task,
            Step.CONTAINER: options.container,
            Step.BUCKET: options.bucket,
        }
    )

    def _copy(resolved: ParameterSet) -> None:
        session_service = SessionService(
            clients.ecs, prompts.task_service, clients.region, clients.profile, options.plugin
        )
        copy_files(options, resolved, prompts.storage_service, session_service)

    build_wizard(prompts).run(params, _copy)
