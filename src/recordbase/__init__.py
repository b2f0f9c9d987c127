"""RecordBase - schema-described in-process record store.

Provides a schema-validated resource store with per-collection CRUD and
query, plus a migration engine that moves records from any legacy data
store into it.
"""

__version__ = "0.1.0"

from recordbase.application.services.data_store_migration import (
    DataStore,
    DataStoreMigrator,
    MigrationOptions,
    MigrationResult,
    migrate_data_store,
)
from recordbase.domain.entities.record import Page, Record
from recordbase.domain.entities.schema import SchemaDefinition
from recordbase.domain.exceptions import (
    MigrationConfigurationError,
    NotFoundError,
    RecordBaseError,
    UnknownResourceError,
    ValidationError,
)
from recordbase.infrastructure.persistence.resource_store import ResourceHandle, ResourceStore

__all__ = [
    "__version__",
    "DataStore",
    "DataStoreMigrator",
    "MigrationConfigurationError",
    "MigrationOptions",
    "MigrationResult",
    "NotFoundError",
    "Page",
    "Record",
    "RecordBaseError",
    "ResourceHandle",
    "ResourceStore",
    "SchemaDefinition",
    "UnknownResourceError",
    "ValidationError",
    "migrate_data_store",
]
