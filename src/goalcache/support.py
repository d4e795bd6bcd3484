"""
goalcache.support - Extension Pack Wiring
===========================================

Registers the object-storage archive store as the default goal cache
store of an SDM. Registration only fills gaps: a store the user already
configured, and any explicit bucket/enabled/path settings, are kept.

    configuration.sdm
        └── cache
              ├── bucket / enabled / path   (left as configured)
              └── store                     (defaulted to the archive store)

Usage:
    >>> pack = goal_cache_support(settings=load_settings())
    >>> pack.configure(sdm_configuration)
    >>> sdm_configuration.sdm["cache"]["store"]
    ObjectStorageGoalCacheArchiveStore(...)
"""

from __future__ import annotations

from typing import Any, Callable, Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field

from goalcache import __version__
from goalcache.core.config import GoalCacheSettings
from goalcache.core.models import SdmConfiguration
from goalcache.infrastructure.archive_store import ObjectStorageGoalCacheArchiveStore
from goalcache.integrations.storage.base import ObjectStorage
from goalcache.integrations.storage.factory import create_object_storage
from goalcache.orchestration.retry import RetryPolicy


logger = structlog.get_logger()


class ExtensionPack(BaseModel):
    """Named bundle of configuration applied to an SDM at startup."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    version: str
    description: str = ""
    configure: Callable[[SdmConfiguration], SdmConfiguration] = Field(
        description="Applies the pack to an SDM configuration and returns it",
    )


def _defaults_deep(target: dict[str, Any], defaults: dict[str, Any]) -> dict[str, Any]:
    """Fill keys missing from ``target`` with ``defaults``, recursing into dicts."""
    for key, default in defaults.items():
        current = target.get(key)
        if current is None:
            target[key] = default
        elif isinstance(current, dict) and isinstance(default, dict):
            _defaults_deep(current, default)
    return target


def goal_cache_support(
    storage: Optional[ObjectStorage] = None,
    *,
    retry_policy: Optional[RetryPolicy] = None,
    settings: Optional[GoalCacheSettings] = None,
) -> ExtensionPack:
    """Build the extension pack that defaults the goal cache store.

    Args:
        storage: Object-storage backend for the archive store. Defaults to
            the backend named in ``settings.storage``.
        retry_policy: Retry budget. Defaults to the retry fields of
            ``settings``.
        settings: Process-wide settings. Defaults to GoalCacheSettings().

    Returns:
        An ExtensionPack whose ``configure`` installs the archive store.
    """
    settings = settings or GoalCacheSettings()

    def configure(configuration: SdmConfiguration) -> SdmConfiguration:
        cache = configuration.sdm.get("cache")
        if isinstance(cache, dict) and cache.get("store") is not None:
            logger.debug("goal_cache_store_already_configured", sdm=configuration.name)
            return configuration

        archive_store = ObjectStorageGoalCacheArchiveStore(
            storage or create_object_storage(settings.storage),
            retry_policy=retry_policy or RetryPolicy.from_settings(settings),
        )
        _defaults_deep(configuration.sdm, {"cache": {"store": archive_store}})
        logger.debug(
            "goal_cache_store_configured",
            sdm=configuration.name,
            storage=repr(archive_store.storage),
        )
        return configuration

    return ExtensionPack(
        name="goalcache",
        version=__version__,
        description="Goal cache archive store on object storage",
        configure=configure,
    )
