"""Tests for Keeper connection settings."""

import base64
import json

import pytest

from keeper_notation.config import ConfigurationError, KeeperConfig


@pytest.fixture()
def keeper_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KEEPER_CLIENT_ID", "client-id")
    monkeypatch.setenv("KEEPER_PRIVATE_KEY", "private-key")
    monkeypatch.setenv("KEEPER_APP_KEY", "app-key")
    monkeypatch.setenv("KEEPER_HOSTNAME", "keepersecurity.eu")
    monkeypatch.delenv("KEEPER_SERVER_PUBLIC_KEY_ID", raising=False)
    monkeypatch.delenv("KEEPER_ALLOW_UNVERIFIED_CERTIFICATE", raising=False)


def test_from_environment(keeper_env: None):
    config = KeeperConfig.from_environment()
    assert config == KeeperConfig(
        client_id="client-id",
        private_key="private-key",
        app_key="app-key",
        hostname="keepersecurity.eu",
        server_public_key_id=10,
        allow_unverified_certificate=False,
    )


def test_optional_settings(keeper_env: None, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("KEEPER_SERVER_PUBLIC_KEY_ID", "7")
    monkeypatch.setenv("KEEPER_ALLOW_UNVERIFIED_CERTIFICATE", "true")

    config = KeeperConfig.from_environment()

    assert config.server_public_key_id == 7
    assert config.allow_unverified_certificate is True


@pytest.mark.parametrize(
    "name", ["CLIENT_ID", "PRIVATE_KEY", "APP_KEY", "HOSTNAME"]
)
def test_missing_required_setting(
    keeper_env: None, monkeypatch: pytest.MonkeyPatch, name: str
):
    monkeypatch.delenv(f"KEEPER_{name}")
    with pytest.raises(ConfigurationError, match=f"KEEPER_{name} must be set"):
        KeeperConfig.from_environment()


def test_to_ksm_config():
    config = KeeperConfig(
        client_id="client-id",
        private_key="private-key",
        app_key="app-key",
        hostname="keepersecurity.com",
        server_public_key_id=8,
    )
    assert json.loads(base64.b64decode(config.to_ksm_config())) == {
        "clientId": "client-id",
        "privateKey": "private-key",
        "appKey": "app-key",
        "hostname": "keepersecurity.com",
        "serverPublicKeyId": "8",
    }


@pytest.mark.parametrize(
    ("name", "raw"),
    [
        ("SERVER_PUBLIC_KEY_ID", "x"),
        ("ALLOW_UNVERIFIED_CERTIFICATE", "maybe"),
    ],
)
def test_malformed_optional_setting(
    keeper_env: None, monkeypatch: pytest.MonkeyPatch, name: str, raw: str
):
    monkeypatch.setenv(f"KEEPER_{name}", raw)
    with pytest.raises(ConfigurationError, match=f"KEEPER_{name} is invalid") as exc:
        KeeperConfig.from_environment()
    assert isinstance(exc.value.__cause__, ValueError)
