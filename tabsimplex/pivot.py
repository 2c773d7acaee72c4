"""
Primal Simplex pivot engine.

The engine works on the active objective row (the last tableau row) and treats
a positive coefficient in that row as an improving direction, which is the
sign convention established by :mod:`tabsimplex.compiler` for both goals.

Selection rules:

* entering column: largest positive objective-row coefficient (Dantzig's
  rule), ties resolved to the lowest column index;
* leaving row: minimum ratio ``RHS / a_ij`` over constraint rows with
  ``a_ij > 0``, ties resolved to the lowest row index.

The pivot itself is an in-place Gauss-Jordan elimination applied to every
tableau column, objective and right-hand side included.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional

from .basis import basic_columns
from .core import ColumnRole, Problem, SolverOptions
from .diagnostics import assert_nonnegative_rhs, assert_unit_column, is_debug_enabled
from .errors import IterationLimitError, UnboundedProblemError
from .logging import get_logger
from .matrix import Matrix

logger = get_logger(__name__)

OBJECTIVE_COLUMN = 0


class PivotState(Enum):
    """State of a tableau with respect to the pivot loop."""

    IMPROVABLE = "improvable"
    OPTIMAL = "optimal"
    UNBOUNDED = "unbounded"
    INFEASIBLE = "infeasible"


def objective_row(matrix: Matrix) -> int:
    """Index of the active objective row."""
    return matrix.height - 1


def rhs_column(matrix: Matrix) -> int:
    """Index of the right-hand-side column."""
    return matrix.width - 1


def objective_value(matrix: Matrix) -> float:
    """Current value of the active objective."""
    row = objective_row(matrix)
    return matrix.get(row, rhs_column(matrix)) / matrix.get(row, OBJECTIVE_COLUMN)


def _variable_columns(problem: Problem) -> List[int]:
    return [
        index
        for index, column in enumerate(problem.columns)
        if column.role not in (ColumnRole.OBJECTIVE, ColumnRole.VALUE)
    ]


def is_optimal(problem: Problem, tol: float = 1e-9) -> bool:
    """Return True when no variable column has a positive objective coefficient."""
    return select_pivot_column(problem, tol) is None


def select_pivot_column(problem: Problem, tol: float = 1e-9) -> Optional[int]:
    """
    Select the entering column.

    Returns:
        Index of the column with the largest objective-row coefficient above
        ``tol`` (lowest index on ties), or ``None`` if the tableau is optimal.
    """
    matrix = problem.tableau
    row = matrix.row(objective_row(matrix))
    best: Optional[int] = None
    best_value = tol
    for column in _variable_columns(problem):
        value = row[column]
        if value > best_value:
            best = column
            best_value = value
    return best


def select_pivot_row(problem: Problem, column: int, tol: float = 1e-9) -> Optional[int]:
    """
    Select the leaving row with the minimum-ratio test.

    Only constraint rows whose coefficient in ``column`` exceeds ``tol`` take
    part. A ratio must beat the incumbent by more than ``tol`` to replace it,
    so ties keep the lowest row index.

    Returns:
        The pivot row, or ``None`` when no row qualifies (unbounded).
    """
    matrix = problem.tableau
    rhs = rhs_column(matrix)
    best: Optional[int] = None
    best_ratio = 0.0
    for row in problem.constraint_rows:
        coefficient = matrix.get(row, column)
        if coefficient <= tol:
            continue
        ratio = matrix.get(row, rhs) / coefficient
        if best is None or ratio < best_ratio - tol:
            best = row
            best_ratio = ratio
    return best


def pivot(matrix: Matrix, row: int, column: int) -> None:
    """
    Perform a Gauss-Jordan pivot on ``(row, column)`` in place.

    The pivot row is divided by the pivot value, then the pivot column is
    eliminated from every other row. Dimensions are unchanged.

    Raises:
        ZeroDivisionError: If the pivot value is zero.
        ValueError: In debug mode, if the pivot column is not left as a unit
            column.
    """
    matrix.divide_row(row, matrix.get(row, column))
    for other in range(matrix.height):
        if other != row:
            matrix.add_scaled_row(other, row, matrix.get(other, column))
    if is_debug_enabled():
        assert_unit_column(matrix, row, column)


def pivot_state(problem: Problem, tol: float = 1e-9) -> PivotState:
    """Classify the tableau as improvable, optimal or unbounded."""
    column = select_pivot_column(problem, tol)
    if column is None:
        return PivotState.OPTIMAL
    if select_pivot_row(problem, column, tol) is None:
        return PivotState.UNBOUNDED
    return PivotState.IMPROVABLE


def optimize(problem: Problem, options: Optional[SolverOptions] = None) -> int:
    """
    Pivot ``problem`` until its active objective row is optimal.

    Args:
        problem: Problem whose tableau is mutated in place.
        options: Tolerance and optional iteration cap.

    Returns:
        Number of pivots performed.

    Raises:
        UnboundedProblemError: If an entering column has no leaving row.
        IterationLimitError: If ``options.max_iterations`` pivots did not
            reach optimality.
    """
    options = options or SolverOptions()
    tol = options.tol
    matrix = problem.tableau
    nit = 0

    while True:
        column = select_pivot_column(problem, tol)
        if column is None:
            logger.debug("Optimal after %d pivot(s), objective %.10g", nit, objective_value(matrix))
            return nit

        row = select_pivot_row(problem, column, tol)
        if row is None:
            label = problem.columns[column].label
            logger.info("Column %s has no leaving row: problem is unbounded", label)
            raise UnboundedProblemError(
                f"Unable to select a pivot row for column {label}: the problem is unbounded.",
                column=label,
            )

        if options.max_iterations is not None and nit >= options.max_iterations:
            raise IterationLimitError(
                f"Maximum iterations exceeded ({options.max_iterations})",
                iterations=nit,
            )

        verbose = logger.isEnabledFor(logging.DEBUG)
        if verbose:
            leaving = basic_columns(problem, tol).get(row)
            ratio = matrix.get(row, rhs_column(matrix)) / matrix.get(row, column)

        pivot(matrix, row, column)
        nit += 1

        if verbose:
            logger.debug(
                "Pivot %d: %s enters, %s leaves at row %d (ratio %.10g), objective %.10g",
                nit,
                problem.columns[column].label,
                problem.columns[leaving].label if leaving is not None else "-",
                row,
                ratio,
                objective_value(matrix),
            )

        if is_debug_enabled():
            assert_nonnegative_rhs(matrix, problem.constraint_rows, atol=max(tol, 1e-9))


__all__ = [
    "OBJECTIVE_COLUMN",
    "PivotState",
    "objective_row",
    "rhs_column",
    "objective_value",
    "is_optimal",
    "select_pivot_column",
    "select_pivot_row",
    "pivot",
    "pivot_state",
    "optimize",
]
