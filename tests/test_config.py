"""Tests for settings, session construction and logging setup."""

import logging
from unittest.mock import Mock, patch

import pytest

from ecsk.aws_service import AWSClients
from ecsk.core.config import CLIENT_CONFIG, Settings, configure_logging, create_session


@pytest.fixture
def aws_config(tmp_path, monkeypatch):
    config_file = tmp_path / "config"
    config_file.write_text(
        "[profile dev]\n"
        "region = eu-west-1\n"
        "\n"
        "[profile admin]\n"
        "role_arn = arn:aws:iam::123456789012:role/admin\n"
        "source_profile = dev\n"
        "mfa_serial = arn:aws:iam::123456789012:mfa/me\n"
    )
    credentials_file = tmp_path / "credentials"
    credentials_file.write_text("[dev]\naws_access_key_id = testing\naws_secret_access_key = testing\n")
    monkeypatch.setenv("AWS_CONFIG_FILE", str(config_file))
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(credentials_file))
    monkeypatch.delenv("AWS_DEFAULT_REGION", raising=False)
    return config_file


def test_create_session_uses_profile_region(aws_config):
    session = create_session(Settings(profile="dev"))

    assert session.profile_name == "dev"
    assert session.region_name == "eu-west-1"


def test_create_session_region_overrides_profile(aws_config):
    session = create_session(Settings(profile="dev", region="ap-northeast-1"))

    assert session.region_name == "ap-northeast-1"


def test_create_session_answers_mfa_prompt_with_code(aws_config):
    session = create_session(Settings(profile="admin", code="123456"))

    resolver = session._session.get_component("credential_provider")
    provider = resolver.get_provider("assume-role")
    assert provider._prompter("Enter MFA code: ") == "123456"


def test_clients_are_created_once_with_shared_config():
    session = Mock()
    session.region_name = "eu-west-1"
    clients = AWSClients(session, Settings(profile="dev"))

    assert clients.ecs is clients.ecs
    session.client.assert_called_once_with("ecs", config=CLIENT_CONFIG)
    assert clients.region == "eu-west-1"
    assert clients.profile == "dev"


def test_clients_profile_defaults_to_empty():
    assert AWSClients(Mock()).profile == ""


def test_client_config_retries():
    assert CLIENT_CONFIG.retries == {"max_attempts": 2, "mode": "adaptive"}
    assert CLIENT_CONFIG.max_pool_connections == 5


@patch("ecsk.core.config.logging.basicConfig")
def test_configure_logging_debug(mock_basic_config):
    configure_logging(True)

    assert mock_basic_config.call_args.kwargs["level"] == logging.DEBUG
    assert logging.getLogger("botocore").level == logging.INFO


@patch("ecsk.core.config.logging.basicConfig")
def test_configure_logging_quiet(mock_basic_config):
    configure_logging(False)

    assert mock_basic_config.call_args.kwargs["level"] == logging.WARNING
