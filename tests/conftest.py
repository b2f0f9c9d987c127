"""Pytest configuration for all tests."""

import copy
import uuid
from typing import Any

import pytest
import structlog

from recordbase.core.config import get_settings
from recordbase.domain.exceptions import NotFoundError
from recordbase.infrastructure.persistence.resource_store import ResourceStore


BLOG_SCHEMA: dict[str, Any] = {
    "name": "Blog",
    "namespace": "blog.example.com",
    "resources": {
        "users": {
            "fields": {
                "email": {"type": "string", "required": True},
                "name": {"type": "string"},
                "role": {"type": "string", "enum": ["admin", "editor", "viewer"]},
                "age": {"type": "number"},
                "active": {"type": "boolean"},
            },
        },
        "posts": {
            "fields": {
                "title": {"type": "string", "required": True},
                "authorId": {"type": "string", "required": True},
                "publishedAt": {"type": "date"},
            },
            "relationships": {
                "author": {"resource": "users", "type": "belongsTo", "foreignKey": "authorId"},
                "comments": {"resource": "comments", "type": "hasMany"},
            },
        },
        "comments": {
            "fields": {
                "body": {"type": "string", "required": True},
                "postId": {"type": "string", "required": True},
                "userId": {"type": "string"},
            },
            "relationships": {
                "post": {"resource": "posts", "type": "belongsTo", "foreignKey": "postId"},
                "user": {"resource": "users", "type": "belongsTo", "foreignKey": "userId"},
            },
        },
    },
}


class InMemoryLegacyStore:
    """Legacy data store used as a migration source in tests.

    Records keep the ids they are created with; ``list_calls`` records every
    ``list`` invocation so paging behavior can be asserted.
    """

    def __init__(self) -> None:
        self.collections: dict[str, dict[str, dict[str, Any]]] = {}
        self.list_calls: list[tuple[str, int | None, int | None]] = []

    async def create(self, collection: str, data: dict[str, Any]) -> dict[str, Any]:
        record = copy.deepcopy(data)
        record.setdefault("id", str(uuid.uuid4()))
        self.collections.setdefault(collection, {})[record["id"]] = record
        return copy.deepcopy(record)

    async def read(self, collection: str, record_id: str) -> dict[str, Any] | None:
        record = self.collections.get(collection, {}).get(record_id)
        return copy.deepcopy(record) if record else None

    async def list(
        self, collection: str, limit: int | None = None, offset: int | None = None
    ) -> dict[str, Any]:
        self.list_calls.append((collection, limit, offset))
        records = list(self.collections.get(collection, {}).values())
        start = offset or 0
        end = None if limit is None else start + limit
        return {"data": copy.deepcopy(records[start:end]), "total": len(records)}

    async def update(
        self, collection: str, record_id: str, data: dict[str, Any]
    ) -> dict[str, Any]:
        records = self.collections.get(collection, {})
        if record_id not in records:
            raise NotFoundError(collection, record_id)
        records[record_id].update(copy.deepcopy(data))
        return copy.deepcopy(records[record_id])

    async def delete(self, collection: str, record_id: str) -> bool:
        return self.collections.get(collection, {}).pop(record_id, None) is not None


@pytest.fixture(autouse=True)
def _reset_state():
    """Reset cached settings and structlog configuration between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()


@pytest.fixture
def blog_schema() -> dict[str, Any]:
    return copy.deepcopy(BLOG_SCHEMA)


@pytest.fixture
def store(blog_schema) -> ResourceStore:
    return ResourceStore(blog_schema)


@pytest.fixture
def legacy_store() -> InMemoryLegacyStore:
    return InMemoryLegacyStore()
