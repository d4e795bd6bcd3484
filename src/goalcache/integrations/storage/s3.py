"""
goalcache.integrations.storage.s3 - S3 Object Storage
=======================================================

ObjectStorage backed by a boto3 S3 client. Works against Amazon S3 and
S3-compatible services (MinIO, Cloudflare R2, ...) via ``endpoint_url``.

boto3 is synchronous, so every request runs in the event loop's default
executor; the coroutine only suspends while the request is in flight.

Non-resumable uploads are sent as a single PUT: the multipart threshold
is raised to the largest single-part object S3 accepts, so the transfer
manager never splits the archive into resumable chunks.

Credentials:
    Explicit keys from StorageConfig when given, otherwise boto3's
    standard chain (environment, shared config, instance profile).
"""

from __future__ import annotations

import asyncio
import functools
from pathlib import Path
from typing import Any, Callable, Optional

import boto3
import structlog
from boto3.s3.transfer import TransferConfig
from botocore.exceptions import ClientError

from goalcache.core.config import StorageConfig
from goalcache.core.exceptions import ObjectNotFoundError
from goalcache.integrations.storage.base import ObjectStorage, PathLike


logger = structlog.get_logger()

# Largest object S3 accepts in a single PUT request (5 GiB).
SINGLE_PART_MAX_BYTES = 5 * 1024 ** 3

_NOT_FOUND_CODES = frozenset({"404", "NoSuchKey", "NotFound"})


def _is_not_found(exc: ClientError) -> bool:
    return exc.response.get("Error", {}).get("Code") in _NOT_FOUND_CODES


class S3ObjectStorage(ObjectStorage):
    """Object storage on S3 or an S3-compatible service.

    Attributes:
        endpoint_url: Custom endpoint, or None for AWS.
        region: Region name passed to the client.
    """

    scheme = "s3"

    def __init__(
        self,
        config: Optional[StorageConfig] = None,
        *,
        client: Any = None,
    ) -> None:
        """Initialize the S3 storage.

        Args:
            config: Backend configuration. Defaults to StorageConfig().
            client: Pre-built boto3 S3 client. When None, one is created
                from ``config``.
        """
        config = config or StorageConfig()
        self.endpoint_url = config.endpoint_url
        self.region = config.region

        if client is None:
            client_kwargs: dict[str, Any] = {}
            if config.endpoint_url:
                client_kwargs["endpoint_url"] = config.endpoint_url
            if config.region:
                client_kwargs["region_name"] = config.region
            if config.access_key_id and config.secret_access_key:
                client_kwargs["aws_access_key_id"] = config.access_key_id
                client_kwargs["aws_secret_access_key"] = config.secret_access_key
            client = boto3.client("s3", **client_kwargs)

        self._client = client
        self._logger = logger.bind(component="s3_object_storage")

    async def upload(
        self,
        local_file: PathLike,
        bucket: str,
        key: str,
        *,
        resumable: bool = False,
    ) -> None:
        transfer_config = None
        if not resumable:
            transfer_config = TransferConfig(multipart_threshold=SINGLE_PART_MAX_BYTES)
        await self._run(
            self._client.upload_file,
            str(local_file),
            bucket,
            key,
            Config=transfer_config,
        )
        self._logger.debug("object_uploaded", bucket=bucket, key=key, resumable=resumable)

    async def download(self, bucket: str, key: str, local_file: PathLike) -> None:
        target = Path(local_file)
        target.parent.mkdir(parents=True, exist_ok=True)
        try:
            await self._run(self._client.download_file, bucket, key, str(target))
        except ClientError as exc:
            if _is_not_found(exc):
                raise ObjectNotFoundError(bucket=bucket, key=key) from exc
            raise

    async def delete(self, bucket: str, key: str) -> None:
        await self._run(self._client.delete_object, Bucket=bucket, Key=key)
        self._logger.debug("object_deleted", bucket=bucket, key=key)

    async def exists(self, bucket: str, key: str) -> bool:
        try:
            await self._run(self._client.head_object, Bucket=bucket, Key=key)
        except ClientError as exc:
            if _is_not_found(exc):
                return False
            raise
        return True

    async def _run(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Run a blocking boto3 call in the default executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, functools.partial(fn, *args, **kwargs))
