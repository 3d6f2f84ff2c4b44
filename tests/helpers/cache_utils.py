"""Cache utilities for test isolation."""
from __future__ import annotations


def reset_modx_caches() -> None:
    """Reset module-level caches and logging state between tests."""
    from modx.core.config.cache import clear_all_caches
    from modx.core.utils.logging import reset_logging_for_tests

    clear_all_caches()
    reset_logging_for_tests()
