"""Diagnostics and debugging utilities for tabsimplex."""

from .core import (
    assert_nonnegative_rhs,
    assert_unit_column,
    is_unit_column,
)
from .debug_mode import (
    DEBUG_ENV_VAR,
    debug_context,
    debug_flag_from_env,
    is_debug_enabled,
    reload_debug_from_env,
    set_debug_enabled,
)

__all__ = [
    "is_unit_column",
    "assert_unit_column",
    "assert_nonnegative_rhs",
    "DEBUG_ENV_VAR",
    "debug_flag_from_env",
    "is_debug_enabled",
    "set_debug_enabled",
    "reload_debug_from_env",
    "debug_context",
]
