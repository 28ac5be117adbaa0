"""Infrastructure exceptions for storage operations.

Storage errors extend CaseworkException so the API layer can map them
to HTTP responses consistently (502: the collaborator failed, not the caller).
"""

from casework.domain.exceptions import CaseworkException


class StorageException(CaseworkException):
    """Base exception for storage operations."""


class StorageUploadError(StorageException):
    """File upload failed."""

    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(
            f"Failed to store file: {file_path}",
            "STORAGE_UPLOAD_ERROR",
            {"file_path": file_path, "reason": reason},
        )


class StorageDeleteError(StorageException):
    """File deletion failed."""

    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(
            f"Failed to delete file: {file_path}",
            "STORAGE_DELETE_ERROR",
            {"file_path": file_path, "reason": reason},
        )


class StoragePermissionError(StorageException):
    """Path escapes the storage root or the operation is not permitted."""

    def __init__(self, file_path: str, operation: str) -> None:
        super().__init__(
            f"Permission denied for {operation} on {file_path}",
            "STORAGE_PERMISSION_ERROR",
            {"file_path": file_path, "operation": operation},
        )
