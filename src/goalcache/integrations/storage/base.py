"""
goalcache.integrations.storage.base - Object Storage Capability
=================================================================

The archive store talks to object storage only through this interface.
Implementations wrap a concrete client (boto3 for S3, a dict for tests)
and expose four single-request operations:

    upload(local_file, bucket, key, resumable=False)
    download(bucket, key, local_file)
    delete(bucket, key)
    exists(bucket, key) -> bool

Errors raised by implementations are treated as opaque by the archive
store: only their message text ends up in logs.

Example:
    >>> class MyStorage(ObjectStorage):
    ...     scheme = "my"
    ...     async def upload(self, local_file, bucket, key, *, resumable=False): ...
    ...     async def download(self, bucket, key, local_file): ...
    ...     async def delete(self, bucket, key): ...
    ...     async def exists(self, bucket, key): ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]


class ObjectStorage(ABC):
    """Abstract object-storage client.

    Attributes:
        scheme: URI scheme of this backend, used to render object URIs
            such as ``s3://bucket/key`` in log messages.
    """

    scheme: str = "object"

    def object_uri(self, bucket: str, key: str) -> str:
        """Fully qualified URI of an object in this backend."""
        return f"{self.scheme}://{bucket}/{key}"

    @abstractmethod
    async def upload(
        self,
        local_file: PathLike,
        bucket: str,
        key: str,
        *,
        resumable: bool = False,
    ) -> None:
        """Upload a local file, overwriting any existing object at ``key``.

        Args:
            local_file: Path of the file to upload. Must exist.
            bucket: Destination bucket.
            key: Destination object key.
            resumable: Whether a chunked, resumable transfer may be used.
                False forces a single-shot request.
        """
        ...

    @abstractmethod
    async def download(self, bucket: str, key: str, local_file: PathLike) -> None:
        """Download an object to a local file, creating or overwriting it.

        Raises:
            Exception: Any failure, including a missing object.
        """
        ...

    @abstractmethod
    async def delete(self, bucket: str, key: str) -> None:
        """Delete an object."""
        ...

    @abstractmethod
    async def exists(self, bucket: str, key: str) -> bool:
        """Check whether an object exists."""
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(scheme={self.scheme!r})"
