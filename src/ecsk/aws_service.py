"""AWS client factory shared by all commands."""

from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING

from .core.config import CLIENT_CONFIG, Settings, create_session

if TYPE_CHECKING:
    import boto3
    from mypy_boto3_ec2.client import EC2Client
    from mypy_boto3_ecs.client import ECSClient
    from mypy_boto3_logs.client import CloudWatchLogsClient
    from mypy_boto3_s3.client import S3Client


class AWSClients:
    """Lazily created clients bound to one session."""

    def __init__(self, session: boto3.Session, settings: Settings | None = None) -> None:
        self.session = session
        self.settings = settings or Settings()

    @classmethod
    def from_settings(cls, settings: Settings) -> AWSClients:
        return cls(create_session(settings), settings)

    @property
    def region(self) -> str:
        return self.session.region_name or self.ecs.meta.region_name

    @property
    def profile(self) -> str:
        return self.settings.profile or ""

    @cached_property
    def ecs(self) -> ECSClient:
        return self.session.client("ecs", config=CLIENT_CONFIG)

    @cached_property
    def ec2(self) -> EC2Client:
        return self.session.client("ec2", config=CLIENT_CONFIG)

    @cached_property
    def s3(self) -> S3Client:
        return self.session.client("s3", config=CLIENT_CONFIG)

    @cached_property
    def logs(self) -> CloudWatchLogsClient:
        return self.session.client("logs", config=CLIENT_CONFIG)
