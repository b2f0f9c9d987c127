"""Infrastructure layer - store implementations.

This layer contains the in-memory resource store, the legacy data store
adapter over it, and the JSON-export-backed legacy data store.
"""

from recordbase.infrastructure.persistence.json_data_store import JsonFileDataStore
from recordbase.infrastructure.persistence.resource_store import ResourceHandle, ResourceStore
from recordbase.infrastructure.persistence.store_adapter import ResourceStoreAdapter

__all__ = [
    "JsonFileDataStore",
    "ResourceHandle",
    "ResourceStore",
    "ResourceStoreAdapter",
]
