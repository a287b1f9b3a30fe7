"""S3 staging for file transfers between the local machine and containers."""

from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import TYPE_CHECKING

from botocore.exceptions import BotoCoreError, ClientError

from ...core.base import BaseAWSService
from ...core.types import TransferResult
from ...core.utils import batch_items, console, paginate_aws_list, print_error, print_warning

if TYPE_CHECKING:
    from mypy_boto3_s3.client import S3Client

logger = logging.getLogger(__name__)

KEY_PREFIX = "ecsk_"
DELETE_BATCH_SIZE = 1000
# Regions where create_bucket must not send a LocationConstraint
DEFAULT_BUCKET_REGIONS = {"us-east-1"}


def generate_key_prefix(now: datetime | None = None) -> str:
    """Prefix unique to the second, e.g. `ecsk_20210101120000`."""
    return KEY_PREFIX + (now or datetime.now()).strftime("%Y%m%d%H%M%S")


def filter_deletable_keys(keys: list[str], prefix: str) -> list[str]:
    """Keep only keys that still contain the transfer prefix."""
    deletable = []
    for key in keys:
        if prefix not in key:
            logger.warning("Not deleting %s: it does not contain %s", key, prefix)
            continue
        deletable.append(key)
    return deletable


def _relative_key_path(path: str, src: str) -> str:
    if os.path.isdir(src):
        rel = os.path.relpath(path, src)
    else:
        rel = os.path.relpath(path)
        if rel.startswith(os.pardir):
            rel = os.path.basename(path)
    return rel.replace(os.sep, "/")


class StorageService(BaseAWSService):
    """Service for S3 bucket and object operations."""

    def __init__(self, s3_client: S3Client) -> None:
        super().__init__(s3_client)

    def get_bucket_names(self) -> list[str]:
        response = self.client.list_buckets()
        return [bucket["Name"] for bucket in response.get("Buckets", [])]

    def create_bucket(self, bucket: str, region: str) -> None:
        if region in DEFAULT_BUCKET_REGIONS:
            self.client.create_bucket(Bucket=bucket)
        else:
            self.client.create_bucket(Bucket=bucket, CreateBucketConfiguration={"LocationConstraint": region})

    def upload(self, bucket: str, prefix: str, src: str) -> TransferResult:
        """Upload a file or a directory tree under `prefix/`."""
        if os.path.isdir(src):
            paths = [os.path.join(root, name) for root, _dirs, files in os.walk(src) for name in sorted(files)]
        elif os.path.exists(src):
            paths = [src]
        else:
            raise FileNotFoundError(f"{src}: no such file or directory")

        result: TransferResult = {"keys": [], "failed": []}
        for path in paths:
            rel = _relative_key_path(path, src)
            key = f"{prefix}/{rel}"
            result["keys"].append(key)
            try:
                self.client.upload_file(path, bucket, key)
            except (BotoCoreError, ClientError, OSError) as e:
                print_error(f"{rel}: {e}")
                result["failed"].append(key)
                continue
            console.print(f"Uploaded {rel}", markup=False)
        return result

    def download(self, bucket: str, prefix: str, dst: str, file_name: str = "") -> TransferResult:
        """Download every object under `prefix`, mirroring the key layout below `dst`.

        When the only staged object is `prefix/file_name`, it is written to
        `dst` itself unless `dst` is a directory or ends with a separator.
        """
        objects = paginate_aws_list(self.client, "list_objects_v2", "Contents", Bucket=bucket, Prefix=prefix)
        as_file = (
            bool(file_name)
            and len(objects) == 1
            and objects[0]["Key"] == f"{prefix}/{file_name}"
            and not os.path.isdir(dst)
            and not dst.endswith((os.sep, "/"))
        )

        result: TransferResult = {"keys": [], "failed": []}
        for obj in objects:
            key = obj["Key"]
            rel = key.replace(prefix, "", 1).lstrip("/")
            path = dst if as_file else os.path.join(dst, *rel.split("/"))
            os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
            result["keys"].append(key)
            try:
                self.client.download_file(bucket, key, path)
            except (BotoCoreError, ClientError, OSError) as e:
                print_error(f"{rel}: {e}")
                result["failed"].append(key)
                continue
            console.print(f"Downloaded {rel} {obj.get('Size', 0)} bytes", markup=False)
        return result

    def delete_keys(self, bucket: str, prefix: str, keys: list[str]) -> int:
        """Delete staged objects; keys without `prefix` are never touched."""
        deletable = filter_deletable_keys(keys, prefix)
        deleted = 0
        for batch in batch_items(deletable, DELETE_BATCH_SIZE):
            response = self.client.delete_objects(
                Bucket=bucket, Delete={"Objects": [{"Key": key} for key in batch], "Quiet": False}
            )
            deleted += len(response.get("Deleted", []))
            for error in response.get("Errors", []):
                print_warning(f"Could not delete {error.get('Key')}: {error.get('Message')}")
        return deleted
