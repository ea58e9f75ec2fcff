"""Evaluate a parsed notation against fetched record data.

Records are the JSON objects printed by ``ksm secret get --json``::

    {
        "uid": "...",
        "title": "Prod DB",
        "fields": [{"type": "login", "label": "", "value": ["admin"]}],
        "custom": [{"type": "text", "label": "Region", "value": ["us-east"]}],
        "files": [{"uid": "...", "name": "id_rsa", "title": "SSH key"}],
    }
"""

import json
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from keeper_notation.notation import FieldCategory, NotationReference

Record = dict[str, Any]


class RecordLookupError(LookupError):
    """The notation points at something the record doesn't have."""


@dataclass
class KeeperFile:
    """A file attachment on a record, enough to download it later."""

    record_uid: str
    name: str
    title: str = ""
    uid: str = ""


def find_record(records: Sequence[Record], uid: str) -> Record:
    for record in records:
        if record.get("uid") == uid:
            return record
    raise RecordLookupError(f"Record {uid} was not returned by the vault")


def _custom_fields(record: Record) -> list[dict[str, Any]]:
    # ksm prints "custom"; some versions of its JSON output use "custom_fields"
    return record.get("custom") or record.get("custom_fields") or []


def find_field(record: Record, category: FieldCategory, key: str) -> dict[str, Any]:
    """Find a field by type then label (standard) or label then type (custom)."""
    if category is FieldCategory.FIELD:
        fields = record.get("fields") or []
        order = ("type", "label")
    else:
        fields = _custom_fields(record)
        order = ("label", "type")

    for attribute in order:
        for item in fields:
            if item.get(attribute) == key:
                return item

    raise RecordLookupError(
        f"Record {record.get('uid')} has no {category} named {key!r}"
    )


def find_file(record: Record, key: str) -> KeeperFile:
    """Find an attachment by file name, falling back to its title."""
    files = record.get("files") or []
    for attribute in ("name", "title"):
        for item in files:
            if item.get(attribute) == key:
                return KeeperFile(
                    record_uid=record.get("uid", ""),
                    name=item.get("name", ""),
                    title=item.get("title", ""),
                    uid=item.get("uid", item.get("fileUid", "")),
                )
    raise RecordLookupError(f"Record {record.get('uid')} has no file named {key!r}")


def _render(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value)


def extract_value(record: Record, ref: NotationReference) -> str:
    """Apply the reference's key, index and dictionary selectors to a record."""
    if ref.field_category is FieldCategory.FILE:
        raise RecordLookupError("File notations are downloaded, not read as fields")

    values = find_field(record, ref.field_category, ref.field_key).get("value") or []

    if not ref.return_single:
        return json.dumps(values)

    if ref.array_index < 0 or ref.array_index >= len(values):
        raise RecordLookupError(
            f"Index {ref.array_index} is out of range for {ref.field_key!r} "
            f"({len(values)} values)"
        )
    item = values[ref.array_index]

    if ref.dict_key is None:
        return _render(item)

    if not isinstance(item, dict):
        raise RecordLookupError(
            f"Value of {ref.field_key!r} is not a dictionary, "
            f"cannot select {ref.dict_key!r}"
        )
    if ref.dict_key not in item:
        raise RecordLookupError(
            f"Value of {ref.field_key!r} has no key {ref.dict_key!r}"
        )
    return _render(item[ref.dict_key])
