"""Reading variable values out of a (final) Simplex tableau."""

from __future__ import annotations

from typing import Dict

from .basis import basic_columns
from .core import ColumnRole, Problem


def _clean(value: float, tol: float) -> float:
    return 0.0 if abs(value) <= tol else float(value)


def get_solution(problem: Problem, tol: float = 1e-9) -> Dict[str, float]:
    """
    Interpret a tableau as a mapping from column label to value.

    Objective columns evaluate to ``RHS / coefficient`` of their objective
    row. Every other variable takes the right-hand side of the row where it
    is basic and ``0`` otherwise; when several unit columns claim one row the
    lowest-index column is the basic one. The Value column is skipped.

    Args:
        problem: Problem to read.
        tol: Absolute tolerance for the basic-column test; results within
            ``tol`` of zero are reported as ``0.0``.

    Returns:
        Dictionary in column order, including the objective label(s).
    """
    matrix = problem.tableau
    rhs = matrix.width - 1
    basic_for = {column: row for row, column in basic_columns(problem, tol).items()}

    solution: Dict[str, float] = {}
    for index, column in enumerate(problem.columns):
        if column.role is ColumnRole.VALUE:
            continue
        if column.role is ColumnRole.OBJECTIVE:
            row = problem.objective_row_for(index)
            value = matrix.get(row, rhs) / matrix.get(row, index)
        elif index in basic_for:
            value = matrix.get(basic_for[index], rhs)
        else:
            value = 0.0
        solution[column.label] = _clean(value, tol)
    return solution


def objective_value(problem: Problem, tol: float = 1e-9) -> float:
    """Value of the active objective (column ``0``)."""
    matrix = problem.tableau
    row = problem.objective_row_for(0)
    return _clean(matrix.get(row, matrix.width - 1) / matrix.get(row, 0), tol)


__all__ = ["get_solution", "objective_value"]
