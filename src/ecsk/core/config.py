"""Runtime settings, AWS session construction and logging setup."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import boto3
import botocore.session
from botocore.config import Config
from rich.logging import RichHandler

from .utils import error_console

CLIENT_CONFIG = Config(
    max_pool_connections=5,
    retries={"max_attempts": 2, "mode": "adaptive"},
)


@dataclass(frozen=True)
class Settings:
    """Options shared by every subcommand."""

    region: str | None = None
    profile: str | None = None
    code: str | None = None
    debug: bool = False


def configure_logging(debug: bool) -> None:
    """Route diagnostics through rich on stderr; quiet unless --debug."""
    level = logging.DEBUG if debug else logging.WARNING
    handler = RichHandler(console=error_console, show_path=False, rich_tracebacks=debug)
    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=[handler], force=True)
    if not debug:
        return
    # botocore is very chatty at DEBUG
    logging.getLogger("botocore").setLevel(logging.INFO)
    logging.getLogger("urllib3").setLevel(logging.INFO)


def create_session(settings: Settings) -> boto3.Session:
    """Create a boto3 session for the profile and region.

    When an MFA code is supplied it answers the assume-role token prompt
    instead of asking on stdin.
    """
    core_session = botocore.session.Session(profile=settings.profile or None)
    if settings.code:
        _use_mfa_code(core_session, settings.code)
    return boto3.Session(botocore_session=core_session, region_name=settings.region or None)


def _use_mfa_code(core_session: botocore.session.Session, code: str) -> None:
    resolver = core_session.get_component("credential_provider")
    provider = resolver.get_provider("assume-role")
    if provider is not None:
        provider._prompter = lambda _prompt: code
