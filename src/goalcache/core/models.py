"""
goalcache.core.models - Goal Invocation Context
=================================================

Pydantic models describing the ambient context of one goal execution, as
handed to the archive store by the orchestrator. The cache only READS
these objects; it never mutates or keeps them.

Model Relationships:
    GoalInvocation
        ├── configuration: SdmConfiguration
        │       ├── name          → SDM/application name (bucket default)
        │       └── sdm["cache"]  → raw, partial cache block
        ├── context: InvocationContext
        │       └── workspace_id  → bucket default and object key segment
        ├── goal_event: GoalEvent
        │       ├── repo: RepoRef (provider_id, owner, name)
        │       ├── branch
        │       └── sha           → content-addressing component of the key
        └── progress_log: ProgressLog

Usage:
    >>> gi = GoalInvocation(
    ...     configuration=SdmConfiguration(name="my-sdm"),
    ...     context=InvocationContext(workspace_id="T123"),
    ...     goal_event=GoalEvent(
    ...         repo=RepoRef(provider_id="github", owner="acme", name="app"),
    ...         branch="main",
    ...         sha="abc123",
    ...     ),
    ... )
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from goalcache.core.progress_log import NullProgressLog, ProgressLog


# =============================================================================
# Source Repository Metadata
# =============================================================================
class RepoRef(BaseModel):
    """Identifies the source repository a goal runs against.

    Attributes:
        provider_id: SCM provider identifier (e.g. a GitHub installation).
        owner: Repository owner or organization.
        name: Repository name.
    """

    provider_id: str = Field(description="SCM provider identifier")
    owner: str = Field(description="Repository owner or organization")
    name: str = Field(description="Repository name")


class GoalEvent(BaseModel):
    """The goal being executed and the revision it executes on."""

    repo: RepoRef = Field(description="Source repository of the goal")
    branch: str = Field(description="Branch the goal runs on")
    sha: str = Field(description="Commit SHA the goal runs on")


# =============================================================================
# Configuration and Workspace Context
# =============================================================================
class SdmConfiguration(BaseModel):
    """The slice of SDM configuration the cache reads.

    ``sdm`` is kept as a plain dict because it is shared with the rest of
    the orchestrator; the cache only looks at ``sdm["cache"]``.
    """

    name: str = Field(description="Name of the running SDM (application)")
    sdm: dict[str, Any] = Field(
        default_factory=dict,
        description="SDM settings; 'cache' holds bucket/enabled/path/store",
    )


class InvocationContext(BaseModel):
    """Workspace-level context of the invocation."""

    workspace_id: str = Field(description="Workspace identifier")


# =============================================================================
# Goal Invocation
# =============================================================================
class GoalInvocation(BaseModel):
    """Everything the archive store needs to know about one goal execution.

    Attributes:
        configuration: SDM name and settings, including the raw cache block.
        context: Workspace context.
        goal_event: Repository, branch and revision. Required for object
            key derivation; configuration resolution works without it.
        progress_log: Per-goal log sink for human-readable progress.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    configuration: SdmConfiguration
    context: InvocationContext
    goal_event: Optional[GoalEvent] = None
    progress_log: ProgressLog = Field(default_factory=NullProgressLog)
