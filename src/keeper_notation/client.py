"""VaultClient ABC: the record-fetching capability the resolver depends on."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from keeper_notation.notation import parse
from keeper_notation.records import (
    KeeperFile,
    Record,
    extract_value,
    find_file,
    find_record,
)


class VaultClient(ABC):
    """Abstract base for talking to a Keeper Secrets Manager vault.

    Subclasses provide transport (fetching records and downloading files).
    Evaluating a notation against fetched records is shared.
    """

    @abstractmethod
    async def fetch_records(self, uids: Sequence[str]) -> list[Record]: ...

    @abstractmethod
    async def download_file(self, file: KeeperFile) -> bytes: ...

    async def locate_file(self, records: Sequence[Record], notation: str) -> KeeperFile:
        ref = parse(notation)
        record = find_record(records, ref.record_uid)
        return find_file(record, ref.field_key)

    async def get_value(self, records: Sequence[Record], notation: str) -> str:
        ref = parse(notation)
        return extract_value(find_record(records, ref.record_uid), ref)
