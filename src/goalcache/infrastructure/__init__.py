"""
goalcache.infrastructure - Cache Archive Persistence
======================================================

Components:
    - GoalCacheArchiveStore (ABC):        store / retrieve / delete contract
    - ObjectStorageGoalCacheArchiveStore: Implementation on an ObjectStorage
    - get_cache_path:                     Deterministic object key derivation

Usage:
    from goalcache.infrastructure import ObjectStorageGoalCacheArchiveStore
"""

from goalcache.infrastructure.archive_store import (
    GoalCacheArchiveStore,
    ObjectStorageGoalCacheArchiveStore,
)
from goalcache.infrastructure.cache_path import expand_classifier, get_cache_path

__all__ = [
    "GoalCacheArchiveStore",
    "ObjectStorageGoalCacheArchiveStore",
    "expand_classifier",
    "get_cache_path",
]
