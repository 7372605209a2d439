"""Registry storage.

Exports:
    RegistryStorage: Async storage interface
    LocalRegistryStorage: In-memory implementation
    StorageEntry: Key/value pair yielded by ``entries()``
"""

from infrastructure.registry.storage import (
    LocalRegistryStorage,
    RegistryStorage,
    StorageEntry,
)

__all__ = ["RegistryStorage", "LocalRegistryStorage", "StorageEntry"]
