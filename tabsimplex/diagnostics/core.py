"""Invariant checks for Simplex tableaus."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from tabsimplex.matrix import Matrix


def is_unit_column(
    matrix: Matrix,
    row: int,
    column: int,
    atol: float = 1e-9,
) -> bool:
    """
    Check whether ``column`` is the unit vector selecting ``row``.

    Parameters
    ----------
    matrix:
        Tableau to inspect.
    row:
        Row expected to hold the single ``1``.
    column:
        Column to inspect.
    atol:
        Absolute tolerance for the comparisons.

    Returns
    -------
    bool
        True if the cell at ``(row, column)`` is ``1`` and every other cell
        of the column is ``0`` within the tolerance.
    """
    values = np.fromiter(matrix.column(column), dtype=float, count=matrix.height)
    expected = np.zeros(matrix.height)
    expected[row] = 1.0
    return bool(np.allclose(values, expected, atol=atol, rtol=0.0))


def assert_unit_column(
    matrix: Matrix,
    row: int,
    column: int,
    atol: float = 1e-9,
) -> None:
    """
    Assert that ``column`` is the unit vector selecting ``row``.

    Raises
    ------
    ValueError
        If the column is not a unit column within the tolerance.
    """
    if not is_unit_column(matrix, row, column, atol=atol):
        raise ValueError(
            f"Column {column} is not a unit column for row {row} within tolerance {atol}. "
            f"Values found: {list(matrix.column(column))}"
        )


def assert_nonnegative_rhs(
    matrix: Matrix,
    rows: Iterable[int],
    atol: float = 1e-9,
) -> None:
    """
    Assert that the right-hand side of every given constraint row is >= 0.

    A negative right-hand side means the current basis is not primal
    feasible, which a correct ratio test never produces.

    Parameters
    ----------
    matrix:
        Tableau to inspect; the last column holds the right-hand side.
    rows:
        Constraint rows to check.
    atol:
        Absolute tolerance below zero that is still accepted.

    Raises
    ------
    ValueError
        If any right-hand side is below ``-atol``.
    """
    rhs_column = matrix.width - 1
    negative = [row for row in rows if matrix.get(row, rhs_column) < -atol]
    if negative:
        raise ValueError(f"Negative right-hand side in rows {negative}")
