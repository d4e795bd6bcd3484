"""
goalcache.integrations.storage.factory - Object Storage Factory
=================================================================

Maps the configured provider name to a concrete ObjectStorage.

Usage:
    >>> from goalcache.core.config import StorageConfig
    >>> storage = create_object_storage(StorageConfig(provider="memory"))
    >>> type(storage)  # InMemoryObjectStorage
"""

from __future__ import annotations

from goalcache.core.config import StorageConfig
from goalcache.core.exceptions import ConfigurationError
from goalcache.integrations.storage.base import ObjectStorage

AVAILABLE_PROVIDERS = ("memory", "s3")


def create_object_storage(config: StorageConfig) -> ObjectStorage:
    """Create an object-storage client from configuration.

    Provider mapping:
        - "memory" → InMemoryObjectStorage (no credentials needed)
        - "s3"     → S3ObjectStorage

    Args:
        config: Storage configuration with the provider name and, for S3,
            endpoint, region and optional credentials.

    Returns:
        A ready-to-use ObjectStorage.

    Raises:
        ConfigurationError: If the provider name is not recognized.
    """
    provider_name = config.provider.lower()

    if provider_name == "memory":
        from goalcache.integrations.storage.memory import InMemoryObjectStorage
        return InMemoryObjectStorage()

    if provider_name == "s3":
        from goalcache.integrations.storage.s3 import S3ObjectStorage
        return S3ObjectStorage(config)

    raise ConfigurationError(
        message=(
            f"Unknown object storage provider: '{provider_name}'. "
            f"Available providers: {', '.join(AVAILABLE_PROVIDERS)}."
        ),
        error_code="UNKNOWN_STORAGE_PROVIDER",
        details={"provider": provider_name},
    )
