"""
goalcache.infrastructure.cache_path - Cache Object Key Derivation
===================================================================

Each cache entry lives at a single object key derived from the cache
configuration, the workspace, the source repository and the classifier:

    <path>/<workspace_id>/<provider_id>/<owner>/<repo>/<branch>/<classifier>/<sha>-cache.tar.gz

Including provider, owner, repository, branch and revision keeps entries
of different repositories, branches and commits apart. The same inputs
always yield the same key.

Classifier Templates:
    The classifier may contain placeholders that are replaced with values
    of the current goal event before the key is built:

        ${providerId}  ${owner}  ${repo}  ${branch}  ${sha}

Usage:
    >>> get_cache_path(gi, "node-modules-${branch}")
    'goal-cache/T123/github/acme/app/main/node-modules-main/abc123-cache.tar.gz'
"""

from __future__ import annotations

from goalcache.core.config import resolve_cache_config
from goalcache.core.models import GoalEvent, GoalInvocation

DEFAULT_CLASSIFIER = "default"
ARCHIVE_SUFFIX = "cache.tar.gz"


def expand_classifier(classifier: str, goal_event: GoalEvent) -> str:
    """Replace every classifier placeholder with goal event values."""
    replacements = {
        "${providerId}": goal_event.repo.provider_id,
        "${owner}": goal_event.repo.owner,
        "${repo}": goal_event.repo.name,
        "${branch}": goal_event.branch,
        "${sha}": goal_event.sha,
    }
    for placeholder, value in replacements.items():
        classifier = classifier.replace(placeholder, value)
    return classifier


def get_cache_path(gi: GoalInvocation, classifier: str = DEFAULT_CLASSIFIER) -> str:
    """Construct the unique object key of a cache entry.

    Args:
        gi: Goal invocation providing configuration, workspace and the
            goal event with repository, branch and revision.
        classifier: Logical name of the cache entry; may contain
            placeholders (see module docstring).

    Returns:
        The object key, relative to the bucket.

    Raises:
        ValueError: If the invocation has no goal event.
    """
    if gi.goal_event is None:
        raise ValueError("Goal invocation has no goal event; cannot derive cache path")

    cache_config = resolve_cache_config(gi)
    event = gi.goal_event
    return "/".join([
        cache_config.path,
        gi.context.workspace_id,
        event.repo.provider_id,
        event.repo.owner,
        event.repo.name,
        event.branch,
        expand_classifier(classifier, event),
        f"{event.sha}-{ARCHIVE_SUFFIX}",
    ])
