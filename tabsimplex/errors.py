"""Exception hierarchy for the tableau Simplex solver."""

from __future__ import annotations


class SimplexError(Exception):
    """Base class for simplex-related errors."""


class MalformedProblemError(SimplexError, ValueError):
    """Raised when a problem definition is structurally invalid."""


class InfeasibleProblemError(SimplexError):
    """Raised when Phase I cannot drive the artificial objective to zero."""

    def __init__(self, message: str, infeasibility: float = float("nan")):
        super().__init__(message)
        self.infeasibility = infeasibility


class UnboundedProblemError(SimplexError):
    """Raised when an entering column has no valid leaving row."""

    def __init__(self, message: str, column: str = ""):
        super().__init__(message)
        self.column = column


class IterationLimitError(SimplexError):
    """Raised when the pivot loop exceeds the configured iteration cap."""

    def __init__(self, message: str, iterations: int = 0):
        super().__init__(message)
        self.iterations = iterations


__all__ = [
    "SimplexError",
    "MalformedProblemError",
    "InfeasibleProblemError",
    "UnboundedProblemError",
    "IterationLimitError",
]
