"""In-memory test doubles, no network and full control."""

from collections.abc import Sequence

from keeper_notation.client import VaultClient
from keeper_notation.records import KeeperFile, Record


class MemoryVaultClient(VaultClient):
    """In-memory VaultClient for tests, no ksm CLI needed."""

    def __init__(
        self,
        records: Sequence[Record] = (),
        files: dict[tuple[str, str], bytes] | None = None,
    ) -> None:
        self.records: dict[str, Record] = {r["uid"]: r for r in records}
        self.files: dict[tuple[str, str], bytes] = dict(files) if files else {}
        self.fetches: list[list[str]] = []
        self.downloads: list[KeeperFile] = []

    def add_file(
        self, record_uid: str, name: str, data: bytes, title: str = ""
    ) -> None:
        """Attach a file to an existing record and store its content."""
        record = self.records[record_uid]
        record.setdefault("files", []).append({"name": name, "title": title})
        self.files[(record_uid, name)] = data

    async def fetch_records(self, uids: Sequence[str]) -> list[Record]:
        self.fetches.append(list(uids))
        missing = [uid for uid in uids if uid not in self.records]
        if missing:
            raise KeyError(", ".join(missing))
        return [self.records[uid] for uid in uids]

    async def download_file(self, file: KeeperFile) -> bytes:
        self.downloads.append(file)
        return self.files[(file.record_uid, file.name)]
