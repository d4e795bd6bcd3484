"""
Tests for goalcache.core.models, progress_log and exceptions
==============================================================

What's Being Tested:
    - GoalInvocation construction and defaults
    - Progress log sinks
    - Exception hierarchy (codes, details, serialization)
"""

import pytest

from goalcache.core.exceptions import (
    ArchiveStoreError,
    ConfigurationError,
    GoalCacheError,
    ObjectNotFoundError,
    StorageError,
)
from goalcache.core.models import (
    GoalInvocation,
    InvocationContext,
    SdmConfiguration,
)
from goalcache.core.progress_log import InMemoryProgressLog, NullProgressLog


# =============================================================================
# Tests: GoalInvocation
# =============================================================================
class TestGoalInvocation:
    """Tests for the invocation context models."""

    def test_minimal_invocation(self) -> None:
        """Goal event and progress log are optional."""
        gi = GoalInvocation(
            configuration=SdmConfiguration(name="my-sdm"),
            context=InvocationContext(workspace_id="T1"),
        )
        assert gi.goal_event is None
        assert isinstance(gi.progress_log, NullProgressLog)
        assert gi.configuration.sdm == {}

    def test_full_invocation(self, goal_invocation) -> None:
        assert goal_invocation.goal_event.repo.owner == "YoureStillOnMyMind"
        assert goal_invocation.goal_event.branch == "the-christian-life"
        assert goal_invocation.configuration.sdm["cache"]["bucket"] == "hickory-wind"

    def test_progress_log_must_be_a_progress_log(self) -> None:
        with pytest.raises(Exception):
            GoalInvocation(
                configuration=SdmConfiguration(name="my-sdm"),
                context=InvocationContext(workspace_id="T1"),
                progress_log="not a log",
            )


# =============================================================================
# Tests: Progress Logs
# =============================================================================
class TestProgressLogs:
    """Tests for the progress log sinks."""

    def test_in_memory_records_lines(self) -> None:
        log = InMemoryProgressLog()
        log.write("one")
        log.write("two")
        assert log.lines == ["one", "two"]
        assert log.log == "one\ntwo"

    def test_in_memory_clear(self) -> None:
        log = InMemoryProgressLog()
        log.write("one")
        log.clear()
        assert log.lines == []

    def test_null_log_discards(self) -> None:
        assert NullProgressLog().write("ignored") is None


# =============================================================================
# Tests: Exceptions
# =============================================================================
class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_base_error_to_dict(self) -> None:
        e = GoalCacheError("boom", error_code="X", details={"a": 1})
        assert e.to_dict() == {
            "error_type": "GoalCacheError",
            "message": "boom",
            "error_code": "X",
            "details": {"a": 1},
        }
        assert str(e) == "boom"

    def test_configuration_error_default_code(self) -> None:
        assert ConfigurationError("bad").error_code == "CONFIG_ERROR"

    def test_storage_error_carries_location(self) -> None:
        e = StorageError("nope", bucket="b", key="k")
        assert e.bucket == "b"
        assert e.details == {"bucket": "b", "key": "k"}

    def test_object_not_found_is_storage_error(self) -> None:
        e = ObjectNotFoundError(bucket="b", key="k")
        assert isinstance(e, StorageError)
        assert e.error_code == "OBJECT_NOT_FOUND"
        assert "b/k" in e.message

    def test_archive_store_error(self) -> None:
        e = ArchiveStoreError(
            "Failed to retrieve cache archive s3://b/k: gone",
            operation="retrieve",
            object_uri="s3://b/k",
        )
        assert isinstance(e, GoalCacheError)
        assert e.operation == "retrieve"
        assert e.details["object_uri"] == "s3://b/k"
        assert "ArchiveStoreError" in repr(e)
