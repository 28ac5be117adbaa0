"""Storage: local filesystem backend.

Factory creates the backend from casework.core.config. Implementations
satisfy StorageProtocol (store, get_public_url, delete, exists).
"""

from casework.infrastructure.external.storage.factory import StorageFactory
from casework.infrastructure.external.storage.protocol import StorageProtocol

__all__ = [
    "StorageFactory",
    "StorageProtocol",
]
