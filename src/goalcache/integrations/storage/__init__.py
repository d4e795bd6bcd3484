"""
goalcache.integrations.storage - Object Storage Backends
==========================================================

Components:
    - ObjectStorage:          Abstract upload/download/delete/exists capability
    - InMemoryObjectStorage:  Dict-backed backend for tests and development
    - S3ObjectStorage:        boto3-backed backend for S3-compatible services
    - create_object_storage:  Factory mapping a provider name to a backend

Usage:
    from goalcache.integrations.storage import create_object_storage
"""

from goalcache.integrations.storage.base import ObjectStorage
from goalcache.integrations.storage.factory import create_object_storage
from goalcache.integrations.storage.memory import InMemoryObjectStorage
from goalcache.integrations.storage.s3 import S3ObjectStorage

__all__ = [
    "ObjectStorage",
    "InMemoryObjectStorage",
    "S3ObjectStorage",
    "create_object_storage",
]
