"""In-memory, schema-validated resource store.

The store owns one collection per resource declared in its schema and is
the only path through which records are created, changed or removed.
Every record handed back to a caller is a deep copy, so callers can never
mutate stored state.
"""

import copy
import uuid
from collections.abc import Callable, Iterator
from datetime import datetime, timedelta, timezone
from typing import Any

from recordbase.core.config import get_settings
from recordbase.core.logging import get_logger
from recordbase.domain.entities.record import (
    CREATED_AT_FIELD,
    ID_FIELD,
    SYSTEM_FIELDS,
    UPDATED_AT_FIELD,
    Page,
    Record,
)
from recordbase.domain.entities.schema import ResourceDefinition, SchemaDefinition
from recordbase.domain.exceptions import (
    FieldError,
    NotFoundError,
    UnknownResourceError,
    ValidationError,
)
from recordbase.domain.services.record_validator import RecordValidator

logger = get_logger(__name__)


class MonotonicClock:
    """UTC clock whose readings strictly increase.

    Two readings inside the same clock tick are separated by one
    microsecond, so ``updatedAt`` always moves forward on update.
    """

    def __init__(self, now: Callable[[], datetime] | None = None) -> None:
        self._now = now or (lambda: datetime.now(timezone.utc))
        self._last: datetime | None = None

    def __call__(self) -> str:
        current = self._now()
        if self._last is not None and current <= self._last:
            current = self._last + timedelta(microseconds=1)
        self._last = current
        return current.isoformat(timespec="microseconds")


class ResourceHandle:
    """CRUD methods bound to one collection of a store.

    Thin sugar over the generic store methods; it never adds behavior.
    """

    def __init__(self, store: "ResourceStore", collection: str) -> None:
        self._store = store
        self.collection = collection

    def create(self, data: dict[str, Any]) -> Record:
        return self._store.create(self.collection, data)

    def read(self, record_id: str) -> Record | None:
        return self._store.read(self.collection, record_id)

    def update(self, record_id: str, data: dict[str, Any]) -> Record:
        return self._store.update(self.collection, record_id, data)

    def delete(self, record_id: str) -> bool:
        return self._store.delete(self.collection, record_id)

    def list(self, limit: int | None = None, offset: int = 0) -> Page:
        return self._store.list(self.collection, limit=limit, offset=offset)

    def query(
        self, where: dict[str, Any] | None = None, limit: int | None = None, offset: int = 0
    ) -> Page:
        return self._store.query(self.collection, where=where, limit=limit, offset=offset)

    def __repr__(self) -> str:
        return f"ResourceHandle({self.collection!r})"


class ResourceStore:
    """Schema-validated CRUD and query engine over in-memory collections.

    Example:
        store = ResourceStore({"name": "app", "resources": {
            "users": {"fields": {"email": {"type": "string", "required": True}}},
        }})
        user = store.create("users", {"email": "a@b.com"})
        same = store["users"].read(user["id"])
    """

    def __init__(
        self,
        schema: SchemaDefinition | dict[str, Any],
        *,
        clock: Callable[[], str] | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            schema: Schema definition (or a mapping that parses into one).
            clock: Optional timestamp source returning ISO 8601 strings.
            id_factory: Optional record ID generator.
        """
        self._schema = SchemaDefinition.coerce(schema)
        self._clock = clock or MonotonicClock()
        self._id_factory = id_factory or (lambda: str(uuid.uuid4()))
        # dicts keep insertion order, which is the list/query order
        self._collections: dict[str, dict[str, Record]] = {
            name: {} for name in self._schema.resources
        }
        self._handles: dict[str, ResourceHandle] = {
            name: ResourceHandle(self, name) for name in self._schema.resources
        }

    @property
    def schema(self) -> SchemaDefinition:
        return self._schema

    @property
    def resources(self) -> list[str]:
        """Resource names in declaration order."""
        return self._schema.resource_names

    def resource(self, collection: str) -> ResourceHandle:
        """Return the handle bound to ``collection``."""
        self._resource_definition(collection)
        return self._handles[collection]

    def __getitem__(self, collection: str) -> ResourceHandle:
        return self.resource(collection)

    def __contains__(self, collection: object) -> bool:
        return collection in self._handles

    def __iter__(self) -> Iterator[str]:
        return iter(self._handles)

    def _resource_definition(self, collection: str) -> ResourceDefinition:
        resource = self._schema.resources.get(collection)
        if resource is None:
            raise UnknownResourceError(collection)
        return resource

    def _validate(
        self, resource: ResourceDefinition, data: dict[str, Any], partial: bool
    ) -> None:
        errors = RecordValidator.validate(resource, data, partial=partial)
        if errors:
            raise ValidationError(errors)

    @staticmethod
    def _page_bounds(limit: int | None, offset: int) -> tuple[int, int]:
        if limit is None:
            limit = get_settings().default_page_limit
        if limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")
        if offset < 0:
            raise ValueError(f"offset must be non-negative, got {offset}")
        return limit, offset

    @staticmethod
    def _paginate(records: list[Record], limit: int, offset: int) -> Page:
        total = len(records)
        data = [copy.deepcopy(record) for record in records[offset:offset + limit]]
        return Page(
            data=data,
            total=total,
            limit=limit,
            offset=offset,
            has_more=offset + len(data) < total,
        )

    def _filter(self, collection: str, where: dict[str, Any] | None) -> list[Record]:
        records = list(self._collections[collection].values())
        if not where:
            return records
        return [
            record
            for record in records
            if all(
                key in record and _strict_equals(record[key], value)
                for key, value in where.items()
            )
        ]

    def create(
        self, collection: str, data: dict[str, Any], *, preserve_id: bool = False
    ) -> Record:
        """Create a record.

        Args:
            collection: Collection name.
            data: Field values. System fields are ignored.
            preserve_id: Keep ``data["id"]`` as the record ID instead of
                generating one. Used to carry identifiers across a migration.

        Returns:
            A copy of the stored record.

        Raises:
            UnknownResourceError: If the collection is not in the schema.
            ValidationError: If required fields are missing, a value has the
                wrong type or enum value, or a preserved ID is already taken.
        """
        resource = self._resource_definition(collection)
        self._validate(resource, data, partial=False)

        records = self._collections[collection]
        record_id = data.get(ID_FIELD) if preserve_id else None
        error = preserved_id_error(record_id)
        if error:
            raise ValidationError([error])
        if record_id is None:
            record_id = self._id_factory()
        if record_id in records:
            raise ValidationError([
                FieldError(
                    field=ID_FIELD,
                    message=f"Record ID '{record_id}' already exists in '{collection}'",
                    code="duplicate_id",
                )
            ])

        now = self._clock()
        record: Record = {ID_FIELD: record_id, CREATED_AT_FIELD: now, UPDATED_AT_FIELD: now}
        for field_name in resource.fields:
            record[field_name] = None
        for field_name, value in data.items():
            if field_name not in SYSTEM_FIELDS:
                record[field_name] = copy.deepcopy(value)

        records[record_id] = record
        logger.debug("Record created", collection=collection, record_id=record_id)
        return copy.deepcopy(record)

    def read(self, collection: str, record_id: str) -> Record | None:
        """Return a copy of the record, or None if it does not exist."""
        self._resource_definition(collection)
        record = self._collections[collection].get(record_id)
        return copy.deepcopy(record) if record is not None else None

    def update(self, collection: str, record_id: str, data: dict[str, Any]) -> Record:
        """Merge ``data`` over an existing record.

        Required fields need not be resupplied. ``id`` and ``createdAt`` are
        kept even if ``data`` carries other values for them.

        Raises:
            UnknownResourceError: If the collection is not in the schema.
            ValidationError: If a supplied value has the wrong type or enum value.
            NotFoundError: If no record has this ID.
        """
        resource = self._resource_definition(collection)
        self._validate(resource, data, partial=True)

        records = self._collections[collection]
        existing = records.get(record_id)
        if existing is None:
            raise NotFoundError(collection, record_id)

        updated = {**existing, **copy.deepcopy(data)}
        updated[ID_FIELD] = existing[ID_FIELD]
        updated[CREATED_AT_FIELD] = existing[CREATED_AT_FIELD]
        updated[UPDATED_AT_FIELD] = self._clock()

        records[record_id] = updated
        logger.debug("Record updated", collection=collection, record_id=record_id)
        return copy.deepcopy(updated)

    def delete(self, collection: str, record_id: str) -> bool:
        """Delete a record. Returns False if it did not exist."""
        self._resource_definition(collection)
        removed = self._collections[collection].pop(record_id, None)
        if removed is None:
            return False
        logger.debug("Record deleted", collection=collection, record_id=record_id)
        return True

    def list(self, collection: str, limit: int | None = None, offset: int = 0) -> Page:
        """List records in insertion order.

        Args:
            collection: Collection name.
            limit: Page size (defaults to the configured page limit, 100).
            offset: Number of records to skip.
        """
        self._resource_definition(collection)
        limit, offset = self._page_bounds(limit, offset)
        return self._paginate(list(self._collections[collection].values()), limit, offset)

    def query(
        self,
        collection: str,
        where: dict[str, Any] | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> Page:
        """List records whose values equal every entry of ``where``.

        Filtering happens before pagination, so ``total`` counts matches.
        """
        self._resource_definition(collection)
        limit, offset = self._page_bounds(limit, offset)
        return self._paginate(self._filter(collection, where), limit, offset)

    def count(self, collection: str, where: dict[str, Any] | None = None) -> int:
        """Count records matching ``where`` (all records if omitted)."""
        self._resource_definition(collection)
        return len(self._filter(collection, where))


def preserved_id_error(record_id: Any) -> FieldError | None:
    """Check an ID supplied for ``create(..., preserve_id=True)``.

    None is allowed (an ID is generated); anything else must be a
    non-empty string.
    """
    if record_id is None or (isinstance(record_id, str) and record_id):
        return None
    return FieldError(
        field=ID_FIELD,
        message="Preserved record ID must be a non-empty string",
        code="invalid_id",
    )


def _strict_equals(left: Any, right: Any) -> bool:
    """Equality that does not conflate bools with numbers (``True != 1``)."""
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    return left == right
