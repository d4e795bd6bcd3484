"""
goalcache.core.config - Configuration Management
==================================================

Two kinds of configuration live here:

    1. CacheConfig: the per-invocation cache settings (bucket, path,
       enabled) resolved from the SDM configuration of a goal invocation
       by ``resolve_cache_config``. Resolution is a pure function of its
       input and never fails.

    2. GoalCacheSettings: process-wide settings (object-storage backend,
       retry budget, log level) loaded with the following priority
       (highest first):

           1. Explicit constructor arguments and YAML file values
              (goal-cache.yaml)
           2. Environment variables (prefixed with GOAL_CACHE_)
           3. Default values defined in the models below

Bucket Name Defaulting:
    When no bucket is configured, the bucket is derived from the workspace
    and SDM name:

        "sdm-" + workspace_id + "-" + sdm_name + "-goal-cache"
            → lower-cased
            → every character outside [-a-z0-9] removed
            → runs of "-" collapsed to a single "-"

    e.g. workspace "TH3BY4D5", name "@Sweetheart/of--the-Rodeo-"
        → "sdm-th3by4d5-sweetheartof-the-rodeo-goal-cache"

Usage:
    >>> cache_config = resolve_cache_config(gi)
    >>> cache_config.bucket
    'sdm-th3by4d5-sweetheart-of-the-rodeo-goal-cache'

    >>> settings = load_settings("goal-cache.yaml")
    >>> settings.storage.provider
    's3'

Environment Variables:
    GOAL_CACHE_LOG_LEVEL=DEBUG
    GOAL_CACHE_MAX_RETRIES=5
    GOAL_CACHE_STORAGE__PROVIDER=s3
    GOAL_CACHE_STORAGE__ENDPOINT_URL=https://minio.internal:9000
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings

from goalcache.core.exceptions import ConfigurationError

if TYPE_CHECKING:
    from goalcache.core.models import GoalInvocation


DEFAULT_CACHE_PATH = "goal-cache"
DEFAULT_SETTINGS_FILE = "goal-cache.yaml"

_INVALID_BUCKET_CHARS = re.compile(r"[^-a-z0-9]")
_REPEATED_DASHES = re.compile(r"--+")


# =============================================================================
# Per-Invocation Cache Configuration
# =============================================================================
class CacheConfig(BaseModel):
    """Fully resolved cache settings for one goal invocation.

    Constructed fresh on every archive operation and never mutated.

    Attributes:
        bucket: Object-storage bucket holding the cache archives.
        enabled: Whether the orchestrator should use the cache at all.
            The archive store does not enforce this flag.
        path: Object key prefix.
    """

    model_config = ConfigDict(frozen=True)

    bucket: str = Field(min_length=1, description="Bucket for cache archives")
    enabled: bool = Field(default=False, description="Goal caching enabled")
    path: str = Field(
        default=DEFAULT_CACHE_PATH,
        min_length=1,
        description="Object key prefix",
    )


def default_bucket_name(workspace_id: str, sdm_name: str) -> str:
    """Derive a storage-safe per-workspace, per-SDM bucket name.

    Args:
        workspace_id: Workspace identifier.
        sdm_name: Name of the running SDM; may contain scopes and slashes.

    Returns:
        Lower-case bucket name containing only letters, digits and single
        dashes.
    """
    raw = f"sdm-{workspace_id}-{sdm_name}-goal-cache".lower()
    return _REPEATED_DASHES.sub("-", _INVALID_BUCKET_CHARS.sub("", raw))


def resolve_cache_config(gi: GoalInvocation) -> CacheConfig:
    """Resolve the cache configuration of a goal invocation.

    Defaulting is per field and only kicks in for absent or falsy values,
    so explicit user settings always win. The raw cache block is left
    untouched; keys other than bucket/enabled/path are ignored.

    Args:
        gi: The goal invocation whose ``configuration.sdm["cache"]`` holds
            the partial, user-supplied cache block.

    Returns:
        A CacheConfig with every field populated.
    """
    raw: dict[str, Any] = gi.configuration.sdm.get("cache") or {}
    return CacheConfig(
        bucket=raw.get("bucket") or default_bucket_name(
            gi.context.workspace_id, gi.configuration.name
        ),
        enabled=bool(raw.get("enabled") or False),
        path=raw.get("path") or DEFAULT_CACHE_PATH,
    )


# =============================================================================
# Object Storage Backend Configuration
# =============================================================================
class StorageConfig(BaseModel):
    """Which object-storage backend to use and how to reach it.

    Supported Providers:
        - "s3":     Amazon S3 or any S3-compatible service (MinIO, R2, ...)
        - "memory": In-process dict store, for tests and local development

    Attributes:
        provider: Backend name, mapped to an ObjectStorage implementation
            by ``create_object_storage``.
        endpoint_url: Custom endpoint for S3-compatible services. None uses
            the AWS default endpoint.
        region: Region name passed to the S3 client.
        access_key_id: Optional explicit access key. When unset, boto3's
            standard credential chain is used.
        secret_access_key: Optional explicit secret key.
    """

    provider: str = Field(
        default="s3",
        description="Object storage provider: 's3' or 'memory'",
    )
    endpoint_url: Optional[str] = Field(
        default=None,
        description="Endpoint URL for S3-compatible services",
    )
    region: Optional[str] = Field(
        default=None,
        description="Region name for the S3 client",
    )
    access_key_id: Optional[str] = Field(
        default=None,
        description="Access key (None = boto3 credential chain)",
    )
    secret_access_key: Optional[str] = Field(
        default=None,
        description="Secret key (None = boto3 credential chain)",
    )


# =============================================================================
# Process-Wide Settings
# =============================================================================
class GoalCacheSettings(BaseSettings):
    """Top-level settings for the goal cache.

    Attributes:
        log_level: Logging level name.
        max_retries: Retries of a failed storage request before the
            operation is treated as failed.
        retry_initial_delay: Delay in seconds before the first retry.
        retry_max_delay: Cap on the backoff delay in seconds.
        storage: Object-storage backend configuration.

    Example:
        >>> settings = GoalCacheSettings(
        ...     max_retries=5,
        ...     storage=StorageConfig(provider="memory"),
        ... )
    """

    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    max_retries: int = Field(
        default=3,
        ge=0,
        le=20,
        description="Retries of a failed storage request",
    )
    retry_initial_delay: float = Field(
        default=1.0,
        gt=0,
        le=30.0,
        description="Delay in seconds before the first retry",
    )
    retry_max_delay: float = Field(
        default=60.0,
        gt=0,
        le=300.0,
        description="Maximum backoff delay in seconds",
    )
    storage: StorageConfig = Field(
        default_factory=StorageConfig,
        description="Object storage backend configuration",
    )

    # GOAL_CACHE_STORAGE__ENDPOINT_URL maps to settings.storage.endpoint_url
    model_config = {
        "env_prefix": "GOAL_CACHE_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
    }


def load_settings(path: Optional[str] = None) -> GoalCacheSettings:
    """Load goal cache settings from a YAML file and environment variables.

    Args:
        path: Path to a YAML settings file. If None, 'goal-cache.yaml' in
            the current directory is used when it exists; otherwise only
            defaults and environment variables apply.

    Returns:
        A validated GoalCacheSettings instance.

    Raises:
        FileNotFoundError: If an explicit path does not exist.
        ConfigurationError: If the YAML file cannot be parsed.
    """
    if path is None:
        default_path = Path(DEFAULT_SETTINGS_FILE)
        if default_path.exists():
            path = str(default_path)

    yaml_data: dict[str, Any] = {}
    if path is not None:
        settings_path = Path(path)
        if not settings_path.exists():
            raise FileNotFoundError(f"Settings file not found: {path}")

        with open(settings_path) as f:
            try:
                raw_data = yaml.safe_load(f)
            except yaml.YAMLError as exc:
                raise ConfigurationError(
                    message=f"Invalid settings file {path}: {exc}",
                    error_code="INVALID_SETTINGS_FILE",
                    details={"path": path},
                ) from exc
            if isinstance(raw_data, dict):
                yaml_data = raw_data

    return GoalCacheSettings(**yaml_data)
