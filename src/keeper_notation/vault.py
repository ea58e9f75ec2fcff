"""Vault ABC, the Keeper-backed vault, and env resolution helpers."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import timedelta

from keeper_notation import environment
from keeper_notation.cache import DEFAULT_TTL, SecretCache
from keeper_notation.client import VaultClient
from keeper_notation.config import KeeperConfig, optional
from keeper_notation.ksm import KsmCliClient
from keeper_notation.notation import parse
from keeper_notation.resolver import resolve

log = logging.getLogger(__name__)


@dataclass
class SecretEnvRef:
    """A vault secret reference for use as an environment variable value."""

    secret: str


class SecretResolutionError(Exception):
    """Raised when a vault secret cannot be resolved for an env var."""


class Vault(ABC):
    """Abstract base for looking up secrets by name."""

    @abstractmethod
    async def resolve(self, name: str) -> str: ...


class KeeperVault(Vault):
    """Vault that looks up Keeper notations, caching values briefly.

    Notations are parsed before touching the cache, so a malformed one
    raises immediately and is never cached or retried.
    """

    def __init__(self, client: VaultClient, ttl: timedelta = DEFAULT_TTL) -> None:
        self.client = client
        self._cache = SecretCache(ttl)

    def canonicalize(self, name: str) -> str:
        return name

    async def resolve(self, name: str) -> str:
        ref = parse(name)
        return await self._cache.get(
            self.canonicalize(name), lambda: resolve(ref, self.client)
        )


async def resolve_env(
    env: dict[str, str | SecretEnvRef], vault: Vault
) -> dict[str, str]:
    """Resolve an env dict containing a mix of plain strings and vault refs.

    Plain string values pass through unchanged; SecretEnvRef values are
    resolved via the vault.  Raises SecretResolutionError if any secret
    lookup fails.
    """
    resolved: dict[str, str] = {}
    for key, value in env.items():
        if isinstance(value, SecretEnvRef):
            try:
                resolved[key] = await vault.resolve(value.secret)
            except Exception as e:
                raise SecretResolutionError(
                    f"Could not resolve secret '{value.secret}' for ${key}"
                ) from e
        else:
            resolved[key] = value
    return resolved


def create_vault() -> KeeperVault:
    """Build a KeeperVault from KEEPER_* environment variables."""
    config = KeeperConfig.from_environment()
    client = KsmCliClient(config, command=environment.get_str("KSM_COMMAND", "ksm"))
    ttl = optional(environment.get_timedelta, "CACHE_TTL", DEFAULT_TTL)
    log.info("Using Keeper Secrets Manager at %s", config.hostname)
    return KeeperVault(client, ttl=ttl)
