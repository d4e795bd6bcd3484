"""
goalcache.core - Foundation Layer
===================================

    - config:       CacheConfig resolution and process-wide settings
    - models:       Goal invocation context (workspace, repo, revision)
    - progress_log: Per-goal progress log sinks
    - exceptions:   Exception hierarchy for structured error handling

Dependency Rule:
    core/ depends on NOTHING else in the goalcache package.
"""

from goalcache.core.config import (
    CacheConfig,
    GoalCacheSettings,
    StorageConfig,
    load_settings,
    resolve_cache_config,
)
from goalcache.core.exceptions import (
    ArchiveStoreError,
    ConfigurationError,
    GoalCacheError,
    ObjectNotFoundError,
    StorageError,
)
from goalcache.core.models import (
    GoalEvent,
    GoalInvocation,
    InvocationContext,
    RepoRef,
    SdmConfiguration,
)
from goalcache.core.progress_log import InMemoryProgressLog, NullProgressLog, ProgressLog

__all__ = [
    # Config
    "CacheConfig",
    "GoalCacheSettings",
    "StorageConfig",
    "load_settings",
    "resolve_cache_config",
    # Models
    "GoalEvent",
    "GoalInvocation",
    "InvocationContext",
    "RepoRef",
    "SdmConfiguration",
    # Progress logs
    "ProgressLog",
    "NullProgressLog",
    "InMemoryProgressLog",
    # Exceptions
    "GoalCacheError",
    "ConfigurationError",
    "StorageError",
    "ObjectNotFoundError",
    "ArchiveStoreError",
]
