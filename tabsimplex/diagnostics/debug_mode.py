"""
Debug mode for the pivot engine.

While debug mode is on, every pivot re-checks the tableau invariants
(unit pivot column, non-negative constraint RHS) and raises ``ValueError``
as soon as one breaks. The initial state comes from ``TABSIMPLEX_DEBUG``.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator, Mapping, Optional

DEBUG_ENV_VAR = "TABSIMPLEX_DEBUG"
_ENABLED_VALUES = frozenset({"1", "true", "yes", "on"})


def debug_flag_from_env(environ: Optional[Mapping[str, str]] = None) -> bool:
    """Interpret ``TABSIMPLEX_DEBUG`` in ``environ`` (default: ``os.environ``)."""
    env = os.environ if environ is None else environ
    return env.get(DEBUG_ENV_VAR, "").strip().lower() in _ENABLED_VALUES


_debug_enabled = debug_flag_from_env()


def is_debug_enabled() -> bool:
    """Return True while pivots check tableau invariants."""
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> bool:
    """
    Turn invariant checking on or off for the whole process.

    Returns:
        The previous setting, so callers can restore it.
    """
    global _debug_enabled
    previous = _debug_enabled
    _debug_enabled = bool(enabled)
    return previous


def reload_debug_from_env() -> bool:
    """Re-read ``TABSIMPLEX_DEBUG`` and apply it; returns the new setting."""
    set_debug_enabled(debug_flag_from_env())
    return _debug_enabled


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Run a block with debug mode forced on (or off).

    Example:
        >>> with debug_context():
        ...     optimize(problem)  # doctest: +SKIP
    """
    previous = set_debug_enabled(enabled)
    try:
        yield
    finally:
        set_debug_enabled(previous)


__all__ = [
    "DEBUG_ENV_VAR",
    "debug_flag_from_env",
    "is_debug_enabled",
    "set_debug_enabled",
    "reload_debug_from_env",
    "debug_context",
]
