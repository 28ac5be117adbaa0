"""Local filesystem storage with path validation and atomic writes."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any
from urllib.parse import quote

import aiofiles
import aiofiles.os

from casework.infrastructure.exceptions import (
    StorageDeleteError,
    StoragePermissionError,
    StorageUploadError,
)
from casework.shared.utils.datetime import utc_now


class LocalStorageService:
    """Local filesystem storage with atomic writes and path traversal protection.

    Paths are validated against storage_root. Writes use temp file + rename.
    Content type and size are kept in a .meta.json sidecar.
    """

    def __init__(self, storage_root: str, base_url: str | None = None) -> None:
        """Initialize local storage.

        Args:
            storage_root: Base directory for all files.
            base_url: Base URL files are served from (e.g. https://files.example.com).
        """
        self.storage_root = Path(storage_root).resolve()
        self.base_url = base_url.rstrip("/") if base_url else None
        self.storage_root.mkdir(parents=True, exist_ok=True, mode=0o750)

    def _get_full_path(self, storage_ref: str) -> Path:
        """Resolve and validate path under storage_root. Raises StoragePermissionError if traversal."""
        full_path = (self.storage_root / storage_ref).resolve()
        try:
            full_path.relative_to(self.storage_root)
        except ValueError as e:
            raise StoragePermissionError(storage_ref, "path_validation") from e
        if full_path == self.storage_root:
            raise StoragePermissionError(storage_ref, "path_validation")
        return full_path

    @staticmethod
    def _meta_path(file_path: Path) -> Path:
        return file_path.with_suffix(file_path.suffix + ".meta.json")

    async def _write_metadata(self, file_path: Path, metadata: dict[str, Any]) -> None:
        """Write JSON sidecar."""
        meta_path = self._meta_path(file_path)
        async with aiofiles.open(meta_path, "w") as f:
            await f.write(json.dumps(metadata, indent=2))
        os.chmod(meta_path, 0o640)

    async def store(self, content: bytes, path: str, content_type: str) -> str:
        """Write content to path (temp file + rename). Overwrites an existing file."""
        target_path = self._get_full_path(path)
        try:
            target_path.parent.mkdir(parents=True, exist_ok=True, mode=0o750)
            temp_fd, temp_path = tempfile.mkstemp(
                dir=target_path.parent,
                prefix=".tmp_",
                suffix=target_path.suffix,
            )
            os.close(temp_fd)
            try:
                async with aiofiles.open(temp_path, "wb") as f:
                    await f.write(content)
                os.chmod(temp_path, 0o640)
                os.replace(temp_path, target_path)
            finally:
                if Path(temp_path).exists():
                    os.unlink(temp_path)
            await self._write_metadata(
                target_path,
                {
                    "storage_ref": path,
                    "size": len(content),
                    "content_type": content_type,
                    "stored_at": utc_now().isoformat(),
                },
            )
        except OSError as e:
            raise StorageUploadError(path, str(e)) from e
        return path

    async def get_public_url(self, storage_ref: str) -> str:
        self._get_full_path(storage_ref)
        path = f"/files/{quote(storage_ref)}"
        return f"{self.base_url}{path}" if self.base_url else path

    async def delete(self, storage_ref: str) -> bool:
        """Delete file and metadata, then prune empty parent directories. Returns True if deleted."""
        file_path = self._get_full_path(storage_ref)
        try:
            if not file_path.exists():
                return False
            await aiofiles.os.remove(file_path)
            meta_path = self._meta_path(file_path)
            if meta_path.exists():
                await aiofiles.os.remove(meta_path)
            parent = file_path.parent
            while parent != self.storage_root:
                if any(parent.iterdir()):
                    break
                parent.rmdir()
                parent = parent.parent
            return True
        except OSError as e:
            raise StorageDeleteError(storage_ref, str(e)) from e

    async def exists(self, storage_ref: str) -> bool:
        """Return True if file exists."""
        return self._get_full_path(storage_ref).exists()
