"""Migration of records from a legacy data store into a ResourceStore.

The source only has to speak the five-verb async data store contract.
Records are read page by page, collection by collection, and written into
the target one at a time. A record that cannot be written is reported in
the result and the run carries on with the next one.
"""

import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from recordbase.core.config import get_settings
from recordbase.core.logging import LoggingContext, get_logger
from recordbase.domain.entities.record import ID_FIELD, Record
from recordbase.domain.entities.schema import SchemaDefinition
from recordbase.domain.exceptions import (
    FieldError,
    MigrationConfigurationError,
    UnknownResourceError,
    ValidationError,
)
from recordbase.domain.services.record_validator import RecordValidator
from recordbase.infrastructure.persistence.resource_store import (
    ResourceStore,
    preserved_id_error,
)

logger = get_logger(__name__)

DATA_STORE_METHODS = ("create", "read", "list", "update", "delete")

ProgressCallback = Callable[[int, int], None]


@runtime_checkable
class DataStore(Protocol):
    """Five-verb async contract a migration source must implement.

    ``list`` returns a mapping with ``data`` (the page of records) and
    ``total`` (the size of the whole collection).
    """

    async def create(self, collection: str, data: dict[str, Any]) -> Record: ...

    async def read(self, collection: str, record_id: str) -> Record | None: ...

    async def list(
        self, collection: str, limit: int | None = None, offset: int | None = None
    ) -> dict[str, Any]: ...

    async def update(self, collection: str, record_id: str, data: dict[str, Any]) -> Record: ...

    async def delete(self, collection: str, record_id: str) -> bool: ...


@dataclass
class MigrationOptions:
    """Options for a migration run.

    Attributes:
        dry_run: Count what would be migrated without writing anything.
        collections: Collections to migrate; all schema resources if None.
        batch_size: Records fetched per source page; defaults to the
            configured migration batch size.
        on_progress: Called as ``on_progress(processed, total)`` once per record.
        upsert: Overwrite records that already exist in the target.
        id_mapping: Source record ID to target record ID translations.
    """

    dry_run: bool = False
    collections: list[str] | None = None
    batch_size: int | None = None
    on_progress: ProgressCallback | None = None
    upsert: bool = False
    id_mapping: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.batch_size is None:
            self.batch_size = get_settings().migration_batch_size
        if self.batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {self.batch_size}")


@dataclass
class MigrationResult:
    """Outcome of a migration run.

    ``success`` is False as soon as one record failed, even if every other
    record migrated; inspect ``errors`` for the failures.
    """

    success: bool
    migrated_count: int
    failed_count: int
    skipped_count: int
    by_collection: dict[str, int]
    errors: list[str]
    dry_run: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "migratedCount": self.migrated_count,
            "failedCount": self.failed_count,
            "skippedCount": self.skipped_count,
            "byCollection": dict(self.by_collection),
            "errors": list(self.errors),
            "dryRun": self.dry_run,
        }


class DataStoreMigrator:
    """Moves records from a legacy data store into a ResourceStore."""

    def __init__(
        self,
        source: DataStore,
        target: ResourceStore,
        schema: SchemaDefinition | dict[str, Any],
        options: MigrationOptions | None = None,
    ) -> None:
        """Initialize the migrator.

        Raises:
            MigrationConfigurationError: If the source or target is missing,
                incomplete, or the same object.
            UnknownResourceError: If ``options.collections`` names a
                collection that is not in the schema.
        """
        self._check_endpoint("source", source)
        self._check_endpoint("target", target)
        if source is target:
            raise MigrationConfigurationError("Migration source and target must be distinct")

        self.source = source
        self.target = target
        self.schema = SchemaDefinition.coerce(schema)
        self.options = options or MigrationOptions()

        self.collections = list(
            self.options.collections
            if self.options.collections is not None
            else self.schema.resource_names
        )
        for collection in self.collections:
            if collection not in self.schema.resources:
                raise UnknownResourceError(collection)

        self._reset()

    def _reset(self) -> None:
        self._processed = 0
        self._grand_total = 0
        self._migrated = 0
        self._skipped = 0
        self._errors: list[str] = []
        self._by_collection: dict[str, int] = {}
        # IDs a dry run would have created, per collection
        self._dry_run_ids: dict[str, set[str]] = {}

    @staticmethod
    def _check_endpoint(role: str, endpoint: Any) -> None:
        if endpoint is None:
            raise MigrationConfigurationError(f"Migration {role} is required")
        missing = [
            method for method in DATA_STORE_METHODS
            if not callable(getattr(endpoint, method, None))
        ]
        if missing:
            raise MigrationConfigurationError(
                f"Migration {role} {type(endpoint).__name__} is missing "
                f"method(s): {', '.join(missing)}"
            )

    async def run(self) -> MigrationResult:
        """Run the migration and return its result report."""
        self._reset()
        migration_id = f"mig_{uuid.uuid4().hex[:12]}"

        with LoggingContext(migration_id=migration_id):
            self._grand_total = await self._count_source_records()
            logger.info(
                "Starting data store migration",
                collections=self.collections,
                total=self._grand_total,
                dry_run=self.options.dry_run,
                upsert=self.options.upsert,
            )

            for collection in self.collections:
                await self._migrate_collection(collection)

            result = MigrationResult(
                success=not self._errors,
                migrated_count=self._migrated,
                failed_count=len(self._errors),
                skipped_count=self._skipped,
                by_collection=dict(self._by_collection),
                errors=list(self._errors),
                dry_run=self.options.dry_run,
            )
            logger.info(
                "Data store migration finished",
                success=result.success,
                migrated=result.migrated_count,
                skipped=result.skipped_count,
                failed=result.failed_count,
            )
            return result

    async def _count_source_records(self) -> int:
        total = 0
        for collection in self.collections:
            page = await self.source.list(collection, limit=1)
            total += page["total"]
        return total

    async def _migrate_collection(self, collection: str) -> None:
        self._by_collection[collection] = 0
        offset = 0
        total: int | None = None

        while total is None or offset < total:
            page = await self.source.list(
                collection, limit=self.options.batch_size, offset=offset
            )
            records = page["data"]
            total = page["total"]
            if not records:
                break

            for record in records:
                await self._migrate_record(collection, record)
            offset += len(records)

        logger.info(
            "Collection migrated",
            collection=collection,
            migrated=self._by_collection[collection],
        )

    async def _migrate_record(self, collection: str, record: Record) -> None:
        self._processed += 1
        if self.options.on_progress is not None:
            self.options.on_progress(self._processed, self._grand_total)

        source_id = record.get(ID_FIELD)
        if isinstance(source_id, (int, float)):
            source_id = str(source_id)
            record = {**record, ID_FIELD: source_id}

        try:
            written = self._write_record(collection, source_id, record)
        except Exception as e:
            message = f"{collection}/{source_id}: {e}"
            self._errors.append(message)
            logger.warning(
                "Record migration failed",
                collection=collection,
                source_id=source_id,
                error=str(e),
            )
            return

        if written:
            self._migrated += 1
            self._by_collection[collection] += 1
        else:
            self._skipped += 1

    def _write_record(self, collection: str, source_id: Any, record: Record) -> bool:
        """Write one record into the target. Returns False when skipped."""
        mapped = source_id in self.options.id_mapping
        target_id = self.options.id_mapping[source_id] if mapped else source_id

        if self._exists(collection, target_id):
            if not self.options.upsert:
                return False
            data = {key: value for key, value in record.items() if key != ID_FIELD}
            if self.options.dry_run:
                self._check(collection, data, partial=True)
            else:
                self.target.update(collection, target_id, data)
            return True

        if mapped:
            raise ValidationError([
                FieldError(
                    field=ID_FIELD,
                    message=(
                        f"Mapped target id '{target_id}' does not exist in '{collection}'"
                    ),
                    code="unknown_mapped_id",
                )
            ])

        if self.options.dry_run:
            self._check(collection, record, partial=False)
            error = preserved_id_error(source_id)
            if error:
                raise ValidationError([error])
            if source_id is not None:
                self._dry_run_ids.setdefault(collection, set()).add(source_id)
        else:
            self.target.create(collection, record, preserve_id=True)
        return True

    def _exists(self, collection: str, record_id: Any) -> bool:
        if record_id in self._dry_run_ids.get(collection, ()):
            return True
        return self.target.read(collection, record_id) is not None

    def _check(self, collection: str, data: Record, partial: bool) -> None:
        """Validate without writing, so dry runs report the failures a real run would."""
        errors = RecordValidator.validate(self.schema.resources[collection], data, partial=partial)
        if errors:
            raise ValidationError(errors)


async def migrate_data_store(
    source: DataStore,
    target: ResourceStore,
    schema: SchemaDefinition | dict[str, Any],
    options: MigrationOptions | None = None,
) -> MigrationResult:
    """Migrate records from a legacy data store into a ResourceStore.

    Example:
        result = await migrate_data_store(legacy, store, schema,
                                          MigrationOptions(batch_size=50))
        if not result.success:
            print("\\n".join(result.errors))
    """
    return await DataStoreMigrator(source, target, schema, options).run()
