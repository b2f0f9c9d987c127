"""Unit tests for ResourceStoreAdapter."""

import pytest
from structlog.testing import capture_logs

from recordbase.application.services.data_store_migration import DataStore
from recordbase.domain.exceptions import NotFoundError, UnknownResourceError
from recordbase.infrastructure.persistence.store_adapter import ResourceStoreAdapter


@pytest.fixture
def adapter(store):
    return ResourceStoreAdapter(store)


def _deprecations(logs):
    return [entry for entry in logs if entry["log_level"] == "warning"]


def test_adapter_satisfies_data_store_contract(adapter):
    assert isinstance(adapter, DataStore)


@pytest.mark.asyncio
async def test_crud_delegates_to_store(adapter, store):
    created = await adapter.create("users", {"email": "a@b.com"})
    assert store.read("users", created["id"]) == created

    assert await adapter.read("users", created["id"]) == created
    assert await adapter.read("users", "missing") is None

    updated = await adapter.update("users", created["id"], {"name": "Ann"})
    assert updated["name"] == "Ann"

    assert await adapter.delete("users", created["id"]) is True
    assert await adapter.delete("users", created["id"]) is False


@pytest.mark.asyncio
async def test_list_returns_data_and_total(adapter, store):
    for i in range(3):
        store.create("users", {"email": f"u{i}@b.com"})

    page = await adapter.list("users", limit=2, offset=1)

    assert set(page) == {"data", "total"}
    assert [r["email"] for r in page["data"]] == ["u1@b.com", "u2@b.com"]
    assert page["total"] == 3


@pytest.mark.asyncio
async def test_list_without_offset(adapter, store):
    store.create("users", {"email": "a@b.com"})

    page = await adapter.list("users", limit=1, offset=None)

    assert page["total"] == 1
    assert len(page["data"]) == 1


@pytest.mark.asyncio
async def test_store_errors_propagate(adapter):
    with pytest.raises(UnknownResourceError):
        await adapter.read("widgets", "1")
    with pytest.raises(NotFoundError):
        await adapter.update("users", "missing", {"name": "x"})


@pytest.mark.asyncio
async def test_deprecation_warned_once_per_method(adapter):
    with capture_logs() as logs:
        await adapter.create("users", {"email": "a@b.com"})
        await adapter.create("users", {"email": "c@d.com"})
        await adapter.list("users")
        await adapter.list("users")

    warnings = _deprecations(logs)
    assert [w["method"] for w in warnings] == ["create", "list"]
    assert warnings[0]["event"] == (
        "ResourceStoreAdapter.create() is deprecated; "
        "migrate to calling ResourceStore.create() directly"
    )


@pytest.mark.asyncio
async def test_deprecation_tracked_per_instance(store):
    first = ResourceStoreAdapter(store)
    second = ResourceStoreAdapter(store)

    with capture_logs() as logs:
        await first.read("users", "x")
        await second.read("users", "x")
        await first.read("users", "x")

    assert len(_deprecations(logs)) == 2
