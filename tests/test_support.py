"""
Tests for goalcache.support
=============================

What's Being Tested:
    - goal_cache_support() pack metadata
    - configure() installing the archive store only where none is set
    - Explicit cache settings surviving configuration
    - Retry policy derived from settings
"""

from goalcache import __version__
from goalcache.core.config import GoalCacheSettings, StorageConfig
from goalcache.core.models import SdmConfiguration
from goalcache.infrastructure.archive_store import ObjectStorageGoalCacheArchiveStore
from goalcache.integrations.storage.memory import InMemoryObjectStorage
from goalcache.orchestration.retry import RetryPolicy
from goalcache.support import goal_cache_support


class TestGoalCacheSupport:
    """Tests for the extension pack."""

    def test_pack_metadata(self, object_storage) -> None:
        pack = goal_cache_support(object_storage)
        assert pack.name == "goalcache"
        assert pack.version == __version__

    def test_configures_store_when_absent(self, object_storage) -> None:
        configuration = SdmConfiguration(name="my-sdm")

        goal_cache_support(object_storage).configure(configuration)

        store = configuration.sdm["cache"]["store"]
        assert isinstance(store, ObjectStorageGoalCacheArchiveStore)
        assert store.storage is object_storage

    def test_keeps_explicit_cache_settings(self, object_storage) -> None:
        configuration = SdmConfiguration(
            name="my-sdm",
            sdm={"cache": {"bucket": "hickory-wind", "enabled": True, "path": "lazy/days"}},
        )

        goal_cache_support(object_storage).configure(configuration)

        cache = configuration.sdm["cache"]
        assert cache["bucket"] == "hickory-wind"
        assert cache["enabled"] is True
        assert cache["path"] == "lazy/days"
        assert isinstance(cache["store"], ObjectStorageGoalCacheArchiveStore)

    def test_does_not_replace_existing_store(self, object_storage) -> None:
        existing = object()
        configuration = SdmConfiguration(name="my-sdm", sdm={"cache": {"store": existing}})

        goal_cache_support(object_storage).configure(configuration)

        assert configuration.sdm["cache"]["store"] is existing

    def test_other_sdm_settings_untouched(self, object_storage) -> None:
        configuration = SdmConfiguration(name="my-sdm", sdm={"goal": {"timeout": 5}})
        goal_cache_support(object_storage).configure(configuration)
        assert configuration.sdm["goal"] == {"timeout": 5}

    def test_storage_from_settings(self) -> None:
        settings = GoalCacheSettings(storage=StorageConfig(provider="memory"))
        configuration = SdmConfiguration(name="my-sdm")

        goal_cache_support(settings=settings).configure(configuration)

        store = configuration.sdm["cache"]["store"]
        assert isinstance(store.storage, InMemoryObjectStorage)

    def test_retry_policy_from_settings(self, object_storage) -> None:
        settings = GoalCacheSettings(max_retries=7, retry_initial_delay=0.1)
        configuration = SdmConfiguration(name="my-sdm")

        goal_cache_support(object_storage, settings=settings).configure(configuration)

        policy = configuration.sdm["cache"]["store"].retry_policy
        assert policy.max_retries == 7
        assert policy.initial_delay == 0.1

    def test_explicit_retry_policy_wins(self, object_storage) -> None:
        policy = RetryPolicy(max_retries=0)
        configuration = SdmConfiguration(name="my-sdm")

        goal_cache_support(object_storage, retry_policy=policy).configure(configuration)

        assert configuration.sdm["cache"]["store"].retry_policy is policy
