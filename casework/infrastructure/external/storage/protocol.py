"""Storage backend protocol. Implementation: LocalStorageService."""

from typing import Protocol


class StorageProtocol(Protocol):
    """Protocol for blob storage backends; satisfies IStorageService."""

    async def store(self, content: bytes, path: str, content_type: str) -> str:
        """Write content atomically under path and return the storage ref."""
        ...

    async def get_public_url(self, storage_ref: str) -> str:
        """Return the URL under which the file is served."""
        ...

    async def delete(self, storage_ref: str) -> bool:
        """Delete file. Returns True if deleted, False if not found."""
        ...

    async def exists(self, storage_ref: str) -> bool:
        """Return True if file exists."""
        ...
