"""
goalcache.core.exceptions - Custom Exception Hierarchy
========================================================

Structured exceptions for the goal cache. Each error carries a
machine-readable code and a ``details`` dict so it can be logged with
structlog as key-value pairs instead of a bare string.

Exception Hierarchy:
    GoalCacheError (base)
        ├── ConfigurationError   - Invalid settings file or unknown provider
        ├── StorageError         - Object-storage capability failures
        │     └── ObjectNotFoundError - Requested object does not exist
        └── ArchiveStoreError    - Terminal failure of store/retrieve/delete

Failure Flow in the Archive Store:
    ObjectStorage raises (any exception)
        → do_with_retry retries with backoff
        → retries exhausted: ArchiveStoreError("Failed to <verb> ...")
        → store/delete: logged and swallowed
        → retrieve:     logged and raised (cache-miss signal)

Usage:
    >>> from goalcache.core.exceptions import ArchiveStoreError
    >>> try:
    ...     await archive_store.retrieve(gi, "node-modules", "/tmp/cache.tar.gz")
    ... except ArchiveStoreError as e:
    ...     print(e.object_uri, e.message)
"""

from __future__ import annotations

from typing import Any, Optional


# =============================================================================
# Base Exception
# =============================================================================
class GoalCacheError(Exception):
    """Base exception for all goal cache errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code, UPPER_SNAKE_CASE.
        details: Additional debugging context.
    """

    def __init__(
        self,
        message: str,
        error_code: str = "UNKNOWN_ERROR",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)

        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serialize this exception to a dictionary for structured logging.

        Returns:
            Dictionary with error_type, message, error_code, and details.
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


# =============================================================================
# Configuration Error
# =============================================================================
# Raised at startup for broken settings. Cache configuration resolution
# itself never raises; this covers settings files and backend selection.
# =============================================================================
class ConfigurationError(GoalCacheError):
    """Raised when goal cache settings are invalid.

    Common Causes:
        - Malformed YAML settings file
        - Unknown object-storage provider name

    Example:
        >>> raise ConfigurationError(
        ...     message="Unknown object storage provider: 'ftp'",
        ...     error_code="UNKNOWN_STORAGE_PROVIDER",
        ...     details={"provider": "ftp"},
        ... )
    """

    def __init__(
        self,
        message: str,
        error_code: str = "CONFIG_ERROR",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


# =============================================================================
# Storage Errors
# =============================================================================
class StorageError(GoalCacheError):
    """Raised by an object-storage backend when a request fails.

    Attributes:
        bucket: Bucket the request targeted.
        key: Object key the request targeted.
    """

    def __init__(
        self,
        message: str,
        bucket: str,
        key: str,
        error_code: str = "STORAGE_ERROR",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        enriched_details = details or {}
        enriched_details["bucket"] = bucket
        enriched_details["key"] = key

        super().__init__(message=message, error_code=error_code, details=enriched_details)

        self.bucket = bucket
        self.key = key


class ObjectNotFoundError(StorageError):
    """Raised when the requested object does not exist in the bucket.

    The archive store does not treat this differently from any other
    failure: a missing object on retrieve is a cache miss like any other.
    """

    def __init__(
        self,
        bucket: str,
        key: str,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=f"No such object: {bucket}/{key}",
            bucket=bucket,
            key=key,
            error_code="OBJECT_NOT_FOUND",
            details=details,
        )


# =============================================================================
# Archive Store Error
# =============================================================================
class ArchiveStoreError(GoalCacheError):
    """Terminal failure of a cache archive operation.

    The message has the form
    ``Failed to <operation> cache archive <object_uri>: <original message>``.
    The original exception is chained as ``__cause__``.

    Attributes:
        operation: "store", "retrieve" or "delete".
        object_uri: Fully qualified URI of the cache object.
    """

    def __init__(
        self,
        message: str,
        operation: str,
        object_uri: str,
        error_code: str = "ARCHIVE_STORE_ERROR",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        enriched_details = details or {}
        enriched_details["operation"] = operation
        enriched_details["object_uri"] = object_uri

        super().__init__(message=message, error_code=error_code, details=enriched_details)

        self.operation = operation
        self.object_uri = object_uri
