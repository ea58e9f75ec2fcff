"""Keeper Secrets Manager client using the ksm CLI."""

import asyncio
import json
import logging
import os
import tempfile
from collections.abc import Sequence
from pathlib import Path

from keeper_notation.client import VaultClient
from keeper_notation.config import KeeperConfig
from keeper_notation.records import KeeperFile, Record

log = logging.getLogger(__name__)


class KsmCliClient(VaultClient):
    """VaultClient backed by the ksm command-line tool.

    The connection settings are handed to ksm as a base64 JSON document in
    KSM_CONFIG, so no ksm profile needs to exist on disk.
    """

    def __init__(self, config: KeeperConfig, command: str = "ksm") -> None:
        self._config = config
        self._command = command

    def _env(self) -> dict[str, str]:
        env = {**os.environ, "KSM_CONFIG": self._config.to_ksm_config()}
        if self._config.allow_unverified_certificate:
            env["KSM_SKIP_VERIFY"] = "TRUE"
        return env

    async def _run_ksm(self, *args: str) -> bytes:
        """Run a ksm CLI command and return stdout."""
        proc = await asyncio.create_subprocess_exec(
            self._command,
            *args,
            env=self._env(),
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, stderr = await proc.communicate()
        if proc.returncode != 0:
            raise RuntimeError(
                f"ksm {' '.join(args[:2])} failed: "
                f"{stderr.decode(errors='replace').strip()}"
            )
        return stdout

    async def fetch_records(self, uids: Sequence[str]) -> list[Record]:
        args = ["secret", "get"]
        for uid in uids:
            args.extend(["--uid", uid])
        log.debug("Fetching records %s", ", ".join(uids))
        raw = await self._run_ksm(*args, "--json")
        data = json.loads(raw)
        # A single uid prints one object, several print a list
        if isinstance(data, dict):
            return [data]
        return data

    async def download_file(self, file: KeeperFile) -> bytes:
        log.debug("Downloading %r from record %s", file.name, file.record_uid)
        with tempfile.TemporaryDirectory() as scratch:
            target = Path(scratch) / "download"
            await self._run_ksm(
                "secret",
                "download",
                "--uid",
                file.record_uid,
                "--name",
                file.name,
                "--file-output",
                str(target),
            )
            return target.read_bytes()
