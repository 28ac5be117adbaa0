"""Storage service factory: creates the configured backend from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from casework.infrastructure.external.storage.protocol import StorageProtocol

if TYPE_CHECKING:
    from casework.core.config import Settings


class StorageFactory:
    """Factory for storage service instances based on configuration."""

    @staticmethod
    def create_storage_service(settings: "Settings | None" = None) -> StorageProtocol:
        """Create storage service from settings.

        Args:
            settings: Application settings; if None, uses get_settings().

        Returns:
            LocalStorageService.

        Raises:
            ValueError: Unknown backend or missing required config.
        """
        from casework.core.config import get_settings

        s = settings or get_settings()
        backend = s.storage_backend.lower()

        if backend == "local":
            from casework.infrastructure.external.storage.local_storage import (
                LocalStorageService,
            )

            if not s.storage_root:
                raise ValueError("STORAGE_ROOT required for local backend")
            return LocalStorageService(
                storage_root=s.storage_root,
                base_url=s.storage_base_url,
            )
        raise ValueError(f"Unknown storage backend: {backend}. Supported: 'local'")
