"""
goalcache - Remote Goal Cache Archive Store
=============================================

Keeps one compressed archive per (workspace, classifier) in object
storage so that recurring pipeline runs can skip recomputing build and
test outputs.

Layers (top to bottom):
    1. support          - Extension pack that wires the store into an SDM
    2. infrastructure   - Archive store and object key derivation
    3. orchestration    - Retry policy for storage requests
    4. integrations     - Object storage backends (S3, in-memory)
    5. core             - Config, invocation context models, exceptions

Quick Start:
    >>> from goalcache.infrastructure import ObjectStorageGoalCacheArchiveStore
    >>> archive_store = ObjectStorageGoalCacheArchiveStore()
    >>> await archive_store.store(gi, "node-modules", "/tmp/cache.tar.gz")
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
