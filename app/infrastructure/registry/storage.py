"""Registry storage for data that outlives a single interaction."""

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import AsyncIterator, Dict, Generic, Optional, TypeVar

K = TypeVar("K")
T = TypeVar("T")


@dataclass(frozen=True)
class StorageEntry(Generic[K, T]):
    """Key/value pair yielded by ``RegistryStorage.entries()``."""

    key: K
    value: T


class RegistryStorage(ABC, Generic[K, T]):
    """Abstract base class for registry storage implementations.

    Registries keep state (for example, paginator or component callbacks)
    keyed by a unique identifier. Implementations may be in-memory or
    shared between bot instances.
    """

    @abstractmethod
    async def register(self, data: T) -> None:
        """Notify the storage that a new kind of data is being tracked.

        Args:
            data: Example value, used by implementations that set up
                schemas or serializers
        """
        pass

    @abstractmethod
    async def set(self, id: K, data: T) -> None:  # pylint: disable=redefined-builtin
        """Store data under an identifier, replacing any previous value."""
        pass

    @abstractmethod
    async def get(self, id: K) -> Optional[T]:  # pylint: disable=redefined-builtin
        """Get stored data, or None if not found."""
        pass

    @abstractmethod
    async def remove(self, id: K) -> Optional[T]:  # pylint: disable=redefined-builtin
        """Remove stored data, returning it, or None if not found."""
        pass

    @abstractmethod
    def entries(self) -> AsyncIterator[StorageEntry[K, T]]:
        """Iterate over every stored entry."""

    @abstractmethod
    def construct_unique_identifier(self, data: T) -> str:
        """Build an identifier for data that has none of its own."""


class LocalRegistryStorage(RegistryStorage[K, T]):
    """In-memory registry storage backed by a dict.

    Example:
        storage: LocalRegistryStorage[str, dict] = LocalRegistryStorage()
        await storage.set("page-1", {"index": 0})
        async for entry in storage.entries():
            print(entry.key, entry.value)
    """

    def __init__(self):
        self.registry: Dict[K, T] = {}

    async def register(self, data: T) -> None:
        return None

    async def set(self, id: K, data: T) -> None:  # pylint: disable=redefined-builtin
        self.registry[id] = data

    async def get(self, id: K) -> Optional[T]:  # pylint: disable=redefined-builtin
        return self.registry.get(id)

    async def remove(self, id: K) -> Optional[T]:  # pylint: disable=redefined-builtin
        return self.registry.pop(id, None)

    async def entries(self) -> AsyncIterator[StorageEntry[K, T]]:
        for key, value in list(self.registry.items()):
            yield StorageEntry(key, value)

    def construct_unique_identifier(self, data: T) -> str:
        """Hash of ``data``, or a random identifier when it is unhashable."""
        try:
            return str(hash(data))
        except TypeError:
            return uuid.uuid4().hex
