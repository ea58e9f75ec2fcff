"""Shared test fixtures for keeper-notation."""

from typing import Any

import pytest

from keeper_notation.testing import MemoryVaultClient

UID = "1ZyJZEY0qBzTTvwo0ZRwJw"


def make_record(uid: str = UID) -> dict[str, Any]:
    return {
        "uid": uid,
        "title": "Prod database",
        "type": "databaseCredentials",
        "fields": [
            {"type": "login", "label": "", "value": ["admin"]},
            {"type": "password", "label": "", "value": ["hunter2"]},
            {
                "type": "phone",
                "label": "Phones",
                "value": [
                    {"region": "US", "number": "555-0100", "type": "Work"},
                    {"region": "US", "number": "555-0199", "type": "Mobile"},
                ],
            },
            {"type": "url", "label": "", "value": []},
        ],
        "custom": [
            {"type": "text", "label": "Region", "value": ["us-east-1"]},
            {"type": "text", "label": "Replicas", "value": ["db-2", "db-3"]},
            {"type": "secret", "label": "Port", "value": [5432]},
        ],
        "files": [],
    }


@pytest.fixture()
def record() -> dict[str, Any]:
    return make_record()


@pytest.fixture()
def client(record: dict[str, Any]) -> MemoryVaultClient:
    client = MemoryVaultClient([record])
    client.add_file(UID, "id_rsa.pub", b"ssh-ed25519 AAAA user@host\n", title="SSH")
    return client
