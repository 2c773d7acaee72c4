"""
Canonical-form detection and the Phase I artificial-variable procedure.

A tableau is canonical when every constraint row owns exactly one basic
column, i.e. the tableau exposes an identity sub-matrix and therefore a basic
feasible solution. Tableaus compiled from ``<=`` constraints with
non-negative right-hand sides are canonical out of the box; ``>=`` and ``=``
rows are not, and are seeded with artificial variables.

Phase I layout (``objective_rows == 2``)::

    columns: [ W | Z | decisions | slacks | a_1 ... a_k | RHS ]
    rows:    constraint rows, real objective row, artificial objective row

The artificial objective ``W = sum(a_i)`` is minimized; it is priced out by
adding every artificially covered row to the ``W`` row so that the artificial
columns start with a zero reduced cost.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

from .basis import basic_columns, basic_row
from .core import (
    ARTIFICIAL_OBJECTIVE_LABEL,
    ARTIFICIAL_PREFIX,
    Column,
    ColumnRole,
    Problem,
    SolverOptions,
)
from .errors import InfeasibleProblemError
from .logging import get_logger
from .matrix import Matrix
from .pivot import optimize, pivot
from .solution import get_solution

logger = get_logger(__name__)


def missing_basic_rows(problem: Problem, tol: float = 1e-9) -> List[int]:
    """Constraint rows that no column is currently basic in."""
    covered = basic_columns(problem, tol)
    return [row for row in problem.constraint_rows if row not in covered]


def is_canonical(problem: Problem, tol: float = 1e-9) -> bool:
    """
    Return True when every constraint row has exactly one basic column.

    Objective and Value columns are ignored. A row claimed by two different
    unit columns makes the tableau non-canonical.
    """
    claimed = [False] * problem.constraint_count
    for index, column in enumerate(problem.columns):
        if column.role in (ColumnRole.OBJECTIVE, ColumnRole.VALUE):
            continue
        row = basic_row(problem.tableau, index, problem.constraint_count, tol)
        if row is None:
            continue
        if claimed[row]:
            return False
        claimed[row] = True
    return all(claimed)


def to_canonical_form(problem: Problem, tol: float = 1e-9) -> Problem:
    """
    Build the Phase I tableau for ``problem``.

    One artificial column is added for each constraint row lacking a basic
    column, and the artificial objective column/row are added around the
    original tableau.

    Args:
        problem: Freshly compiled problem (``objective_rows == 1``).
        tol: Absolute tolerance for the basic-column test.

    Returns:
        New Problem with ``objective_rows == 2``. The input is not modified.
    """
    if problem.objective_rows != 1:
        raise ValueError("Phase I expects a problem with a single objective row")

    rows = missing_basic_rows(problem, tol)
    old = problem.tableau.to_numpy()
    height, width = old.shape
    count = len(rows)

    data = np.zeros((height + 1, width + count + 1))
    # Shift the original variable columns right of W; RHS stays last.
    data[:height, 1:width] = old[:, : width - 1]
    data[:height, -1] = old[:, -1]

    artificial_offset = width
    objective = height
    data[objective, 0] = 1.0
    for position, row in enumerate(rows):
        data[row, artificial_offset + position] = 1.0
        data[objective, artificial_offset + position] = -1.0
    for row in rows:
        data[objective, :] += data[row, :]

    columns: List[Column] = [Column(ARTIFICIAL_OBJECTIVE_LABEL, ColumnRole.OBJECTIVE)]
    columns.extend(column for column in problem.columns if column.role is not ColumnRole.VALUE)
    columns.extend(
        Column(f"{ARTIFICIAL_PREFIX}{position + 1}", ColumnRole.ARTIFICIAL)
        for position in range(count)
    )
    columns.append(problem.columns[-1])

    logger.debug("Added %d artificial variable(s) for rows %s", count, rows)
    return Problem(
        columns=tuple(columns),
        tableau=Matrix.from_rows(data),
        goal=problem.goal,
        objective_rows=2,
    )


def _pivot_out_artificial_basics(problem: Problem, tol: float) -> None:
    matrix = problem.tableau
    artificial = set(problem.columns_with_role(ColumnRole.ARTIFICIAL))
    candidates = [
        index
        for index, column in enumerate(problem.columns)
        if column.role in (ColumnRole.DECISION, ColumnRole.SLACK)
    ]
    for column in sorted(artificial):
        row = basic_row(matrix, column, problem.constraint_count, tol)
        if row is None:
            continue
        replacement: Optional[int] = next(
            (index for index in candidates if abs(matrix.get(row, index)) > tol), None
        )
        if replacement is None:
            logger.debug("Row %d is redundant; keeping it as an all-zero row", row)
            continue
        logger.debug(
            "Driving %s out of the basis in favour of %s",
            problem.columns[column].label,
            problem.columns[replacement].label,
        )
        pivot(matrix, row, replacement)


def drop_artificial_variables(problem: Problem, tol: float = 1e-9) -> Problem:
    """
    Strip the Phase I scaffolding from an optimized Phase I problem.

    Artificial variables that remain basic at zero level are first pivoted out
    of the basis. Then the artificial objective row, the ``W`` column and
    every artificial column are removed.

    Returns:
        New Problem (fresh Matrix) with ``objective_rows == 1``.
    """
    if problem.objective_rows != 2:
        raise ValueError("Expected a Phase I problem with two objective rows")

    _pivot_out_artificial_basics(problem, tol)

    keep_columns = [
        index
        for index, column in enumerate(problem.columns)
        if index != 0 and column.role is not ColumnRole.ARTIFICIAL
    ]
    keep_rows = list(range(problem.tableau.height - 1))

    return Problem(
        columns=tuple(problem.columns[index] for index in keep_columns),
        tableau=problem.tableau.select(keep_rows, keep_columns),
        goal=problem.goal,
        objective_rows=1,
    )


def run_phase_one(
    problem: Problem,
    options: Optional[SolverOptions] = None,
) -> Tuple[Problem, int]:
    """
    Bring ``problem`` to canonical form, running Phase I when required.

    Returns:
        Tuple ``(problem, pivots)``: the problem ready for Phase II (the input
        itself when no artificial variable is needed) and the number of
        Phase I pivots.

    Raises:
        InfeasibleProblemError: If the artificial objective cannot reach zero.
        UnboundedProblemError: Propagated from the pivot engine.
        IterationLimitError: Propagated from the pivot engine.
    """
    options = options or SolverOptions()
    tol = options.tol

    if not missing_basic_rows(problem, tol):
        logger.debug("Tableau is canonical, skipping Phase I")
        return problem, 0

    phase_one = to_canonical_form(problem, tol)
    initial = phase_one.tableau.get(phase_one.tableau.height - 1, phase_one.tableau.width - 1)
    logger.info(
        "Phase I: %d artificial variable(s), initial infeasibility %.10g",
        len(phase_one.columns_with_role(ColumnRole.ARTIFICIAL)),
        initial,
    )

    nit = optimize(phase_one, options)

    infeasibility = get_solution(phase_one, tol)[ARTIFICIAL_OBJECTIVE_LABEL]
    if abs(infeasibility) > tol * max(1.0, abs(initial)):
        logger.info("Phase I ended with infeasibility %.10g", infeasibility)
        raise InfeasibleProblemError(
            "Problem has no basic feasible solution "
            f"(artificial objective {infeasibility:.6g} after Phase I)",
            infeasibility=infeasibility,
        )

    logger.info("Phase I reached a feasible basis after %d pivot(s)", nit)
    return drop_artificial_variables(phase_one, tol), nit


def resolve_canonical_form(
    problem: Problem,
    options: Optional[SolverOptions] = None,
) -> Problem:
    """Return ``problem`` in canonical form (see :func:`run_phase_one`)."""
    resolved, _ = run_phase_one(problem, options)
    return resolved


__all__ = [
    "missing_basic_rows",
    "is_canonical",
    "to_canonical_form",
    "drop_artificial_variables",
    "run_phase_one",
    "resolve_canonical_form",
]
