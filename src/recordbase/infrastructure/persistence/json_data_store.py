"""Legacy data store backed by a JSON export.

Holds ``{collection: [record, ...]}`` in memory and speaks the five-verb
async data store contract, so an exported dataset can be fed to the
migration engine. Records are not schema-checked here.
"""

import copy
import json
import uuid
from pathlib import Path
from typing import Any

from recordbase.domain.entities.record import ID_FIELD, Record
from recordbase.domain.exceptions import NotFoundError


def _record_id(record: Record) -> str:
    """Return the record's ID as a string, generating one if it has none."""
    record_id = record.get(ID_FIELD)
    return str(uuid.uuid4()) if record_id is None else str(record_id)


class JsonFileDataStore:
    """In-memory data store loaded from or dumped to a JSON file."""

    def __init__(self, collections: dict[str, list[Record]] | None = None) -> None:
        """Initialize the store.

        Raises:
            ValueError: If two records of one collection share an ID.
        """
        self._collections: dict[str, dict[str, Record]] = {}
        for name, records in (collections or {}).items():
            bucket = self._collections.setdefault(name, {})
            for record in records:
                stored = copy.deepcopy(record)
                stored[ID_FIELD] = _record_id(stored)
                if stored[ID_FIELD] in bucket:
                    raise ValueError(
                        f"Duplicate record ID '{stored[ID_FIELD]}' in collection '{name}'"
                    )
                bucket[stored[ID_FIELD]] = stored

    @classmethod
    def load(cls, path: str | Path) -> "JsonFileDataStore":
        """Load a store from a JSON file shaped ``{collection: [record, ...]}``.

        Raises:
            ValueError: If the file is not a mapping of collection to list, or a
                collection holds two records with the same ID.
        """
        content = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(content, dict) or not all(
            isinstance(records, list) for records in content.values()
        ):
            raise ValueError(
                f"{path}: expected an object mapping collection names to record lists"
            )
        return cls(content)

    def dump(self, path: str | Path) -> None:
        """Write every collection to ``path`` as JSON."""
        Path(path).write_text(
            json.dumps(self.to_dict(), indent=2, default=str) + "\n", encoding="utf-8"
        )

    def to_dict(self) -> dict[str, list[Record]]:
        return {
            name: [copy.deepcopy(record) for record in records.values()]
            for name, records in self._collections.items()
        }

    async def create(self, collection: str, data: dict[str, Any]) -> Record:
        record = copy.deepcopy(data)
        record[ID_FIELD] = _record_id(record)
        self._collections.setdefault(collection, {})[record[ID_FIELD]] = record
        return copy.deepcopy(record)

    async def read(self, collection: str, record_id: str) -> Record | None:
        record = self._collections.get(collection, {}).get(record_id)
        return copy.deepcopy(record) if record is not None else None

    async def list(
        self, collection: str, limit: int | None = None, offset: int | None = None
    ) -> dict[str, Any]:
        records = list(self._collections.get(collection, {}).values())
        start = offset or 0
        end = None if limit is None else start + limit
        return {
            "data": [copy.deepcopy(record) for record in records[start:end]],
            "total": len(records),
        }

    async def update(self, collection: str, record_id: str, data: dict[str, Any]) -> Record:
        records = self._collections.get(collection, {})
        if record_id not in records:
            raise NotFoundError(collection, record_id)
        records[record_id] = {**records[record_id], **copy.deepcopy(data), ID_FIELD: record_id}
        return copy.deepcopy(records[record_id])

    async def delete(self, collection: str, record_id: str) -> bool:
        return self._collections.get(collection, {}).pop(record_id, None) is not None
