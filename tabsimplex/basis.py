"""
Basic-column detection shared by the canonical-form resolver and the
solution extractor.

A column is *basic* for constraint row ``r`` when it holds ``1`` in ``r`` and
``0`` in every other row of the tableau, objective rows included. Every
comparison uses an absolute tolerance.
"""

from __future__ import annotations

from typing import Dict, Optional

from .core import ColumnRole, Problem
from .matrix import Matrix

_NON_VARIABLE_ROLES = (ColumnRole.OBJECTIVE, ColumnRole.VALUE)


def basic_row(
    matrix: Matrix,
    column: int,
    constraint_count: int,
    tol: float = 1e-9,
) -> Optional[int]:
    """
    Return the constraint row in which ``column`` is basic, if any.

    Args:
        matrix: Tableau to inspect.
        column: Column index.
        constraint_count: Number of leading constraint rows; a unit entry in
            an objective row never makes a column basic.
        tol: Absolute tolerance for the ``0`` and ``1`` tests.

    Returns:
        The row index, or ``None`` when the column is not a unit column over
        the constraint rows.
    """
    found: Optional[int] = None
    for row, value in enumerate(matrix.column(column)):
        if abs(value) <= tol:
            continue
        if found is not None or row >= constraint_count or abs(value - 1.0) > tol:
            return None
        found = row
    return found


def basic_columns(problem: Problem, tol: float = 1e-9) -> Dict[int, int]:
    """
    Map each constraint row to the lowest-index column that is basic in it.

    Objective and Value columns are never considered. Rows without a basic
    column are absent from the mapping.
    """
    mapping: Dict[int, int] = {}
    for index, column in enumerate(problem.columns):
        if column.role in _NON_VARIABLE_ROLES:
            continue
        row = basic_row(problem.tableau, index, problem.constraint_count, tol)
        if row is not None and row not in mapping:
            mapping[row] = index
    return mapping


__all__ = ["basic_row", "basic_columns"]
