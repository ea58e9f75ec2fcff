"""Connection settings for Keeper Secrets Manager, read from KEEPER_* variables."""

import base64
import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from keeper_notation import environment

DEFAULT_SERVER_PUBLIC_KEY_ID = 10

T = TypeVar("T")


class ConfigurationError(Exception):
    """Raised when a KEEPER_* setting is missing or malformed."""


def _required(name: str) -> str:
    try:
        return environment.get_str(name)
    except KeyError:
        raise ConfigurationError(
            f"KEEPER_{name} must be set to connect to Keeper Secrets Manager"
        ) from None


def optional(read: Callable[[str, T], T], name: str, default: T) -> T:
    """Read an optional KEEPER_* setting with one of the environment helpers."""
    try:
        return read(name, default)
    except ValueError as e:
        raise ConfigurationError(f"KEEPER_{name} is invalid: {e}") from e


@dataclass
class KeeperConfig:
    client_id: str
    private_key: str
    app_key: str
    hostname: str
    server_public_key_id: int = DEFAULT_SERVER_PUBLIC_KEY_ID
    allow_unverified_certificate: bool = False

    @classmethod
    def from_environment(cls) -> "KeeperConfig":
        return cls(
            client_id=_required("CLIENT_ID"),
            private_key=_required("PRIVATE_KEY"),
            app_key=_required("APP_KEY"),
            hostname=_required("HOSTNAME"),
            server_public_key_id=optional(
                environment.get_int,
                "SERVER_PUBLIC_KEY_ID",
                DEFAULT_SERVER_PUBLIC_KEY_ID,
            ),
            allow_unverified_certificate=optional(
                environment.get_bool, "ALLOW_UNVERIFIED_CERTIFICATE", False
            ),
        )

    def to_ksm_config(self) -> str:
        """Render the base64 JSON config the ksm CLI reads from KSM_CONFIG."""
        payload = {
            "clientId": self.client_id,
            "privateKey": self.private_key,
            "appKey": self.app_key,
            "hostname": self.hostname,
            "serverPublicKeyId": str(self.server_public_key_id),
        }
        return base64.b64encode(json.dumps(payload).encode()).decode()
