"""
goalcache.integrations.storage.memory - In-Memory Object Storage
==================================================================

A dict-backed ObjectStorage for tests and local development. No network,
no credentials, deterministic behavior.

Beyond the storage contract it offers:
    - Call tracking: every request is recorded in ``call_history``.
    - Failure injection: ``set_should_fail`` makes every request fail,
      ``fail_next`` makes only the next N requests fail (transient errors).

Usage:
    >>> storage = InMemoryObjectStorage()
    >>> await storage.upload("/tmp/cache.tar.gz", "bucket", "a/cache.tar.gz")
    >>> await storage.exists("bucket", "a/cache.tar.gz")
    True
    >>> storage.fail_next(2)  # next two requests raise StorageError
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import structlog

from goalcache.core.exceptions import ObjectNotFoundError, StorageError
from goalcache.integrations.storage.base import ObjectStorage, PathLike


logger = structlog.get_logger()


class InMemoryObjectStorage(ObjectStorage):
    """Object storage that keeps object bytes in a dict.

    Objects are keyed by ``(bucket, key)``. Data is lost when the process
    exits and is not shared between instances.
    """

    scheme = "memory"

    def __init__(self) -> None:
        self._objects: dict[tuple[str, str], bytes] = {}
        self._call_history: list[dict[str, Any]] = []
        self._should_fail = False
        self._fail_message = "Mock object storage error"
        self._pending_failures = 0
        self._logger = logger.bind(component="in_memory_object_storage")

    # =========================================================================
    # Test Helpers
    # =========================================================================

    @property
    def call_history(self) -> list[dict[str, Any]]:
        """Copy of the recorded requests, oldest first."""
        return list(self._call_history)

    @property
    def call_count(self) -> int:
        return len(self._call_history)

    @property
    def object_count(self) -> int:
        return len(self._objects)

    def set_should_fail(
        self, should_fail: bool, message: str = "Mock object storage error"
    ) -> None:
        """Make every subsequent request fail (or stop failing)."""
        self._should_fail = should_fail
        self._fail_message = message

    def fail_next(self, count: int, message: str = "Mock object storage error") -> None:
        """Make only the next ``count`` requests fail."""
        self._pending_failures = count
        self._fail_message = message

    def get_object(self, bucket: str, key: str) -> Optional[bytes]:
        """Raw bytes of an object, or None if it is absent."""
        return self._objects.get((bucket, key))

    def put_object(self, bucket: str, key: str, data: bytes) -> None:
        """Seed an object directly, bypassing call tracking."""
        self._objects[(bucket, key)] = data

    # =========================================================================
    # ObjectStorage Interface
    # =========================================================================

    async def upload(
        self,
        local_file: PathLike,
        bucket: str,
        key: str,
        *,
        resumable: bool = False,
    ) -> None:
        self._record("upload", bucket, key, local_file=str(local_file), resumable=resumable)
        self._objects[(bucket, key)] = Path(local_file).read_bytes()
        self._logger.debug("object_uploaded", bucket=bucket, key=key)

    async def download(self, bucket: str, key: str, local_file: PathLike) -> None:
        self._record("download", bucket, key, local_file=str(local_file))
        data = self._objects.get((bucket, key))
        if data is None:
            raise ObjectNotFoundError(bucket=bucket, key=key)
        target = Path(local_file)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)

    async def delete(self, bucket: str, key: str) -> None:
        self._record("delete", bucket, key)
        if (bucket, key) not in self._objects:
            raise ObjectNotFoundError(bucket=bucket, key=key)
        del self._objects[(bucket, key)]
        self._logger.debug("object_deleted", bucket=bucket, key=key)

    async def exists(self, bucket: str, key: str) -> bool:
        self._record("exists", bucket, key)
        return (bucket, key) in self._objects

    # =========================================================================
    # Internals
    # =========================================================================

    def _record(self, operation: str, bucket: str, key: str, **extra: Any) -> None:
        """Track the request, then raise if a failure is due."""
        self._call_history.append(
            {"operation": operation, "bucket": bucket, "key": key, **extra}
        )
        if self._should_fail:
            raise StorageError(self._fail_message, bucket=bucket, key=key)
        if self._pending_failures > 0:
            self._pending_failures -= 1
            raise StorageError(self._fail_message, bucket=bucket, key=key)
