"""
goalcache.infrastructure.archive_store - Goal Cache Archive Store
===================================================================

Persists, retrieves and deletes the single compressed archive kept per
(workspace, classifier) in object storage. A generic compress/cache
wrapper in the orchestrator turns directories into archive files and
hands their paths to a GoalCacheArchiveStore; this module only moves
those files to and from storage.

Architecture Context:

    ┌────────────────────┐   archive path   ┌───────────────────────────────┐
    │  Compressing goal  │ ───────────────> │ ObjectStorageGoalCache-       │
    │  cache (external)  │ <─────────────── │ ArchiveStore                  │
    └────────────────────┘   cache miss     │  1. resolve CacheConfig + key │
                             (retrieve      │  2. log start                 │
                              raises)       │  3. storage call w/ retries   │
                                            │  4. log done / failure        │
                                            └───────────────┬───────────────┘
                                                            │
                                                            v
                                                    ObjectStorage (S3, ...)

Failure Policy:
    - store:    failure logged and swallowed. A failed cache write must not
                fail the build; the next run simply misses the cache.
    - delete:   failure logged and swallowed. Deletion is best-effort.
    - retrieve: failure logged and raised. The caller treats ANY retrieval
                error, a missing object included, as a cache miss.

Per-Call State:
    Resolving → InFlight → Succeeded | Failed-Swallowed | Failed-Rethrown

    Configuration and object key are recomputed on every call; the store
    holds no per-call state, so concurrent calls need no locking.

Usage:
    >>> archive_store = ObjectStorageGoalCacheArchiveStore(S3ObjectStorage())
    >>> await archive_store.store(gi, "node-modules", "/tmp/in.tar.gz")
    >>> await archive_store.retrieve(gi, "node-modules", "/tmp/out.tar.gz")
    >>> await archive_store.delete(gi, "node-modules")
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Optional

import structlog

from goalcache.core.config import StorageConfig, resolve_cache_config
from goalcache.core.exceptions import ArchiveStoreError
from goalcache.core.models import GoalInvocation
from goalcache.core.progress_log import ProgressLog
from goalcache.infrastructure.cache_path import DEFAULT_CLASSIFIER, get_cache_path
from goalcache.integrations.storage.base import ObjectStorage, PathLike
from goalcache.integrations.storage.factory import create_object_storage
from goalcache.orchestration.retry import RetryPolicy, SleepFn, do_with_retry


logger = structlog.get_logger()

StorageOp = Callable[[ObjectStorage, str, str], Awaitable[None]]

# operation → (present participle, past tense)
_VERB_FORMS = {
    "store": ("Storing", "Stored"),
    "retrieve": ("Retrieving", "Retrieved"),
    "delete": ("Deleting", "Deleted"),
}

# Operations whose terminal failure propagates to the caller.
_RAISING_OPERATIONS = frozenset({"retrieve"})


# =============================================================================
# Abstract Base Class
# =============================================================================
class GoalCacheArchiveStore(ABC):
    """Pluggable storage of goal cache archives.

    Methods:
        store(gi, classifier, archive_path): Persist a local archive file.
        retrieve(gi, classifier, target_archive_path): Fetch it back.
        delete(gi, classifier): Remove it.
    """

    @abstractmethod
    async def store(self, gi: GoalInvocation, classifier: str, archive_path: PathLike) -> None:
        """Persist the archive at ``archive_path`` under ``classifier``."""
        ...

    @abstractmethod
    async def retrieve(
        self, gi: GoalInvocation, classifier: str, target_archive_path: PathLike
    ) -> None:
        """Fetch the archive for ``classifier`` into ``target_archive_path``.

        Raises:
            Exception: When the archive cannot be retrieved. Callers treat
                this as a cache miss.
        """
        ...

    @abstractmethod
    async def delete(self, gi: GoalInvocation, classifier: str) -> None:
        """Remove the archive for ``classifier``."""
        ...


# =============================================================================
# Object Storage Implementation
# =============================================================================
class ObjectStorageGoalCacheArchiveStore(GoalCacheArchiveStore):
    """Archive store that keeps cache archives in an object-storage bucket.

    All failures are caught and logged. If retrieval fails, the error is
    re-raised as an ArchiveStoreError so cache-miss handling kicks in.

    Attributes:
        storage: The object-storage backend.
        retry_policy: Retry budget for each storage request.
    """

    def __init__(
        self,
        storage: Optional[ObjectStorage] = None,
        *,
        retry_policy: Optional[RetryPolicy] = None,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        """Initialize the archive store.

        Args:
            storage: Object-storage backend. Defaults to S3 with the
                standard boto3 credential chain.
            retry_policy: Retry budget and backoff. Defaults to RetryPolicy().
            sleep: Awaitable used for backoff delays between retries.
        """
        self.storage = storage or create_object_storage(StorageConfig())
        self.retry_policy = retry_policy or RetryPolicy()
        self._sleep = sleep
        self._logger = logger.bind(component="goal_cache_archive_store")

    async def store(self, gi: GoalInvocation, classifier: str, archive_path: PathLike) -> None:
        async def op(storage: ObjectStorage, bucket: str, cache_path: str) -> None:
            await storage.upload(archive_path, bucket, cache_path, resumable=False)

        await self._with_storage(gi, classifier, op, "store")

    async def retrieve(
        self, gi: GoalInvocation, classifier: str, target_archive_path: PathLike
    ) -> None:
        async def op(storage: ObjectStorage, bucket: str, cache_path: str) -> None:
            await storage.download(bucket, cache_path, target_archive_path)

        await self._with_storage(gi, classifier, op, "retrieve")

    async def delete(self, gi: GoalInvocation, classifier: str) -> None:
        async def op(storage: ObjectStorage, bucket: str, cache_path: str) -> None:
            await storage.delete(bucket, cache_path)

        await self._with_storage(gi, classifier, op, "delete")

    async def _with_storage(
        self,
        gi: GoalInvocation,
        classifier: Optional[str],
        op: StorageOp,
        verb: str,
    ) -> None:
        """Resolve the object, run ``op`` with retries, log and apply the failure policy."""
        cache_config = resolve_cache_config(gi)
        cache_path = get_cache_path(gi, classifier or DEFAULT_CLASSIFIER)
        object_uri = self.storage.object_uri(cache_config.bucket, cache_path)
        gerund, past = _VERB_FORMS[verb]
        log = self._logger.bind(operation=verb, object_uri=object_uri)

        try:
            _log_both(log.debug, f"{gerund} cache archive {object_uri}", gi.progress_log)
            await do_with_retry(
                lambda: op(self.storage, cache_config.bucket, cache_path),
                self.retry_policy,
                description=f"{verb} {object_uri}",
                sleep=self._sleep,
            )
            _log_both(log.debug, f"{past} cache archive {object_uri}", gi.progress_log)
        except Exception as exc:
            error = ArchiveStoreError(
                message=f"Failed to {verb} cache archive {object_uri}: {exc}",
                operation=verb,
                object_uri=object_uri,
            )
            _log_both(log.error, error.message, gi.progress_log)
            if verb in _RAISING_OPERATIONS:
                raise error from exc


def _log_both(
    level: Callable[..., object], message: str, progress_log: ProgressLog
) -> None:
    """Write to the goal progress log and the process-wide log."""
    level(message)
    progress_log.write(message)
