"""Unit tests for registry storage."""

import pytest

from infrastructure.registry import LocalRegistryStorage, RegistryStorage, StorageEntry


@pytest.fixture
def storage():
    return LocalRegistryStorage()


@pytest.mark.unit
class TestLocalRegistryStorage:
    """Tests for LocalRegistryStorage."""

    def test_is_registry_storage(self, storage):
        assert isinstance(storage, RegistryStorage)

    @pytest.mark.asyncio
    async def test_set_and_get(self, storage):
        await storage.register({"index": 0})
        await storage.set("page-1", {"index": 0})

        assert await storage.get("page-1") == {"index": 0}
        assert await storage.get("page-2") is None

    @pytest.mark.asyncio
    async def test_set_replaces(self, storage):
        await storage.set("a", 1)
        await storage.set("a", 2)

        assert await storage.get("a") == 2

    @pytest.mark.asyncio
    async def test_remove_returns_value(self, storage):
        await storage.set("a", 1)

        assert await storage.remove("a") == 1
        assert await storage.remove("a") is None
        assert await storage.get("a") is None

    @pytest.mark.asyncio
    async def test_entries(self, storage):
        await storage.set("a", 1)
        await storage.set("b", 2)

        entries = [entry async for entry in storage.entries()]

        assert entries == [StorageEntry("a", 1), StorageEntry("b", 2)]

    @pytest.mark.asyncio
    async def test_entries_allow_removal_while_iterating(self, storage):
        await storage.set("a", 1)
        await storage.set("b", 2)

        async for entry in storage.entries():
            await storage.remove(entry.key)

        assert storage.registry == {}

    def test_unique_identifier_is_stable(self, storage):
        assert storage.construct_unique_identifier("x") == storage.construct_unique_identifier("x")

    @pytest.mark.asyncio
    async def test_unique_identifier_for_unhashable_data(self, storage):
        data = {"index": 0}

        identifier = storage.construct_unique_identifier(data)
        await storage.set(identifier, data)

        assert isinstance(identifier, str) and identifier
        assert await storage.get(identifier) == data
        assert storage.construct_unique_identifier(data) != identifier
