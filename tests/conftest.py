"""
Shared Test Fixtures for the Goal Cache
=========================================

Fixtures are organized by layer:

    1. Invocation context fixtures (GoalInvocation, progress log)
    2. Storage fixtures (InMemoryObjectStorage)
    3. Archive store fixtures (zero-delay retries)
"""

from __future__ import annotations

import pytest

from goalcache.core.models import (
    GoalEvent,
    GoalInvocation,
    InvocationContext,
    RepoRef,
    SdmConfiguration,
)
from goalcache.core.progress_log import InMemoryProgressLog
from goalcache.infrastructure.archive_store import ObjectStorageGoalCacheArchiveStore
from goalcache.integrations.storage.memory import InMemoryObjectStorage
from goalcache.orchestration.retry import RetryPolicy


def make_invocation(
    *,
    name: str = "@byrds/sweetheart-of-the-rodeo",
    cache: dict | None = None,
    workspace_id: str = "TH3BY4D5",
    progress_log: InMemoryProgressLog | None = None,
) -> GoalInvocation:
    """Build a goal invocation with the standard test repository."""
    sdm = {} if cache is None else {"cache": cache}
    return GoalInvocation(
        configuration=SdmConfiguration(name=name, sdm=sdm),
        context=InvocationContext(workspace_id=workspace_id),
        goal_event=GoalEvent(
            repo=RepoRef(
                provider_id="100yearsfromnow",
                owner="YoureStillOnMyMind",
                name="you-aint-goin-nowhere",
            ),
            branch="the-christian-life",
            sha="808eddb6016a45091e6d53f12ab8ca2d1cd7fb3e",
        ),
        progress_log=progress_log or InMemoryProgressLog(),
    )


class SleepRecorder:
    """Stand-in for asyncio.sleep that records delays instead of waiting."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


# =============================================================================
# Invocation Context
# =============================================================================

@pytest.fixture
def progress_log():
    """Fresh InMemoryProgressLog."""
    return InMemoryProgressLog()


@pytest.fixture
def goal_invocation(progress_log):
    """Invocation with an explicit cache block and the standard test repo."""
    return make_invocation(
        cache={"bucket": "hickory-wind", "enabled": True, "path": "lazy/days"},
        progress_log=progress_log,
    )


# =============================================================================
# Storage
# =============================================================================

@pytest.fixture
def object_storage():
    """Fresh InMemoryObjectStorage."""
    return InMemoryObjectStorage()


# =============================================================================
# Archive Store
# =============================================================================

@pytest.fixture
def sleep_recorder():
    """Records backoff delays without sleeping."""
    return SleepRecorder()


@pytest.fixture
def retry_policy():
    """Two retries, no jitter, so delays are exact."""
    return RetryPolicy(max_retries=2, initial_delay=0.5, jitter=0.0)


@pytest.fixture
def archive_store(object_storage, retry_policy, sleep_recorder):
    """Archive store on in-memory storage with recorded (not real) sleeps."""
    return ObjectStorageGoalCacheArchiveStore(
        object_storage,
        retry_policy=retry_policy,
        sleep=sleep_recorder,
    )


@pytest.fixture
def invocation_factory():
    """The make_invocation builder, for tests that need custom invocations."""
    return make_invocation
