"""
goalcache.orchestration - Request Resilience
==============================================

    - RetryPolicy:   Bounded retry budget with exponential backoff and jitter
    - do_with_retry: Runs a storage request under a RetryPolicy
"""

from goalcache.orchestration.retry import RetryPolicy, do_with_retry

__all__ = ["RetryPolicy", "do_with_retry"]
