"""
Goal Cache Test Suite
=====================

Test organization mirrors the source code structure:
    tests/
    ├── test_core/           → Tests for goalcache.core (config, models, errors)
    ├── test_orchestration/  → Tests for goalcache.orchestration (retry)
    ├── test_integrations/   → Tests for goalcache.integrations (storage backends)
    ├── test_infrastructure/ → Tests for goalcache.infrastructure (keys, archive store)
    ├── test_support.py      → Tests for the extension pack wiring
    └── conftest.py          → Shared pytest fixtures

Running Tests:
    pytest                              # Run all tests
    pytest tests/test_infrastructure/   # Run only archive store tests
    GOAL_CACHE_TEST_BUCKET=my-bucket pytest -m integration
"""
