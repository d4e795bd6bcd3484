"""
Tests for goalcache.infrastructure.cache_path
===============================================

What's Being Tested:
    - Full object key layout
    - Classifier placeholder expansion
    - Determinism and separation of distinct entries
"""

import pytest

from goalcache.core.models import GoalInvocation, InvocationContext, SdmConfiguration
from goalcache.infrastructure.cache_path import expand_classifier, get_cache_path

SHA = "808eddb6016a45091e6d53f12ab8ca2d1cd7fb3e"


class TestGetCachePath:
    """Tests for object key derivation."""

    def test_returns_a_reasonable_path(self, goal_invocation) -> None:
        p = get_cache_path(goal_invocation, "i-am-a-pilgrim")
        assert p == (
            "lazy/days/TH3BY4D5/100yearsfromnow/YoureStillOnMyMind/"
            "you-aint-goin-nowhere/the-christian-life/i-am-a-pilgrim/"
            f"{SHA}-cache.tar.gz"
        )

    def test_default_classifier(self, goal_invocation) -> None:
        p = get_cache_path(goal_invocation)
        assert f"/the-christian-life/default/{SHA}-cache.tar.gz" in p

    def test_default_path_prefix(self, invocation_factory) -> None:
        p = get_cache_path(invocation_factory(), "c")
        assert p.startswith("goal-cache/TH3BY4D5/")

    def test_expands_placeholders(self, goal_invocation) -> None:
        p = get_cache_path(goal_invocation, "deps-${owner}-${branch}")
        assert "/deps-YoureStillOnMyMind-the-christian-life/" in p

    def test_is_deterministic(self, goal_invocation) -> None:
        assert get_cache_path(goal_invocation, "c") == get_cache_path(goal_invocation, "c")

    def test_distinct_revisions_do_not_collide(self, goal_invocation) -> None:
        other = goal_invocation.model_copy(
            update={"goal_event": goal_invocation.goal_event.model_copy(update={"sha": "abc"})}
        )
        assert get_cache_path(goal_invocation, "c") != get_cache_path(other, "c")

    def test_distinct_workspaces_do_not_collide(self, invocation_factory) -> None:
        a = get_cache_path(invocation_factory(workspace_id="A"), "c")
        b = get_cache_path(invocation_factory(workspace_id="B"), "c")
        assert a != b

    def test_requires_goal_event(self) -> None:
        gi = GoalInvocation(
            configuration=SdmConfiguration(name="sdm"),
            context=InvocationContext(workspace_id="T1"),
        )
        with pytest.raises(ValueError):
            get_cache_path(gi, "c")


class TestExpandClassifier:
    """Tests for classifier placeholder substitution."""

    def test_all_placeholders(self, goal_invocation) -> None:
        expanded = expand_classifier(
            "${providerId}|${owner}|${repo}|${branch}|${sha}",
            goal_invocation.goal_event,
        )
        assert expanded == (
            "100yearsfromnow|YoureStillOnMyMind|you-aint-goin-nowhere|"
            f"the-christian-life|{SHA}"
        )

    def test_repeated_placeholders(self, goal_invocation) -> None:
        expanded = expand_classifier("${repo}/${repo}", goal_invocation.goal_event)
        assert expanded == "you-aint-goin-nowhere/you-aint-goin-nowhere"

    def test_plain_classifier_untouched(self, goal_invocation) -> None:
        assert expand_classifier("i-am-a-pilgrim", goal_invocation.goal_event) == "i-am-a-pilgrim"

    def test_unknown_placeholder_left_alone(self, goal_invocation) -> None:
        assert expand_classifier("${other}", goal_invocation.goal_event) == "${other}"
