"""Legacy data store contract over a ResourceStore.

Wraps a ResourceStore in the five-verb async interface that older code
(and the migration engine's sources) speak. Deprecated: new code should
call ResourceStore directly.
"""

from typing import Any

from recordbase.core.logging import get_logger
from recordbase.domain.entities.record import Record
from recordbase.infrastructure.persistence.resource_store import ResourceStore

logger = get_logger(__name__)


class ResourceStoreAdapter:
    """Async ``create/read/list/update/delete`` facade over a ResourceStore.

    The first call of each method logs a deprecation warning; later calls
    of the same method on the same adapter stay quiet.
    """

    def __init__(self, store: ResourceStore) -> None:
        self.store = store
        self._warned: set[str] = set()

    def _warn_deprecated(self, method: str) -> None:
        if method in self._warned:
            return
        self._warned.add(method)
        logger.warning(
            f"ResourceStoreAdapter.{method}() is deprecated; "
            f"migrate to calling ResourceStore.{method}() directly",
            method=method,
        )

    async def create(self, collection: str, data: dict[str, Any]) -> Record:
        self._warn_deprecated("create")
        return self.store.create(collection, data)

    async def read(self, collection: str, record_id: str) -> Record | None:
        self._warn_deprecated("read")
        return self.store.read(collection, record_id)

    async def list(
        self, collection: str, limit: int | None = None, offset: int | None = None
    ) -> dict[str, Any]:
        self._warn_deprecated("list")
        page = self.store.list(collection, limit=limit, offset=offset or 0)
        return {"data": page.data, "total": page.total}

    async def update(self, collection: str, record_id: str, data: dict[str, Any]) -> Record:
        self._warn_deprecated("update")
        return self.store.update(collection, record_id, data)

    async def delete(self, collection: str, record_id: str) -> bool:
        self._warn_deprecated("delete")
        return self.store.delete(collection, record_id)
