"""
High-level entry points: build a Phase II-ready problem and run a full solve.

Example:
    >>> from tabsimplex import Goal, Relation, Term, constraint, objective, solve
    >>> z = objective(Term(7, "x"), Term(8, "y"), Term(10, "z"))
    >>> c1 = constraint(Term(2, "x"), Term(3, "y"), Term(2, "z"), relation=Relation.LESS_EQUAL, rhs=1000)
    >>> c2 = constraint(Term(1, "x"), Term(1, "y"), Term(2, "z"), relation=Relation.LESS_EQUAL, rhs=800)
    >>> result = solve(z, [c1, c2], goal=Goal.MAXIMIZE)
    >>> result.status
    <Status.OPTIMAL: 'optimal'>
    >>> result.objective
    4400.0
"""

from __future__ import annotations

from typing import Optional, Sequence

from .canonical import run_phase_one
from .compiler import compile_problem
from .core import Expression, Goal, Problem, SolveResult, SolverOptions, Status
from .errors import (
    InfeasibleProblemError,
    IterationLimitError,
    MalformedProblemError,
    SimplexError,
    UnboundedProblemError,
)
from .logging import get_logger
from .pivot import optimize
from .solution import get_solution

logger = get_logger(__name__)

_STATUS_FOR_ERROR = (
    (MalformedProblemError, Status.MALFORMED),
    (InfeasibleProblemError, Status.INFEASIBLE),
    (UnboundedProblemError, Status.UNBOUNDED),
    (IterationLimitError, Status.MAX_ITER),
)


def simplex_problem(
    objective: Expression,
    *constraints: Expression,
    goal: Goal = Goal.MAXIMIZE,
    options: Optional[SolverOptions] = None,
) -> Problem:
    """
    Compile a linear program and bring it to canonical form.

    The returned problem is ready for :func:`tabsimplex.pivot.optimize`
    (Phase II); Phase I has already run when it was needed.

    Raises:
        MalformedProblemError: If the input is structurally invalid.
        InfeasibleProblemError: If the constraints admit no solution.
    """
    problem = compile_problem(objective, constraints, goal)
    resolved, _ = run_phase_one(problem, options)
    return resolved


def solve(
    objective: Expression,
    constraints: Sequence[Expression] = (),
    goal: Goal = Goal.MAXIMIZE,
    options: Optional[SolverOptions] = None,
) -> SolveResult:
    """
    Solve a linear program with the two-phase tableau Simplex method.

    Failures that the algorithm detects (malformed input, infeasibility,
    unboundedness, iteration cap) are reported through ``status`` instead of
    being raised; no partial solution is returned for them.

    Args:
        objective: Objective expression.
        constraints: Constraint expressions.
        goal: Whether to maximize or minimize.
        options: Tolerance and iteration cap.

    Returns:
        SolveResult describing the outcome.
    """
    options = options or SolverOptions()
    nit = 0
    problem: Optional[Problem] = None
    try:
        compiled = compile_problem(objective, constraints, goal)
        problem, nit = run_phase_one(compiled, options)
        nit += optimize(problem, options)
    except SimplexError as exc:
        status = next(
            (status for kind, status in _STATUS_FOR_ERROR if isinstance(exc, kind)),
            Status.MALFORMED,
        )
        if isinstance(exc, IterationLimitError):
            nit += exc.iterations
        logger.info("Solve ended with status %s: %s", status.value, exc)
        return SolveResult(
            status=status,
            problem=None,
            solution=None,
            message=str(exc),
            nit=nit,
            error=exc,
        )

    return SolveResult(
        status=Status.OPTIMAL,
        problem=problem,
        solution=get_solution(problem, options.tol),
        message="Optimal solution found",
        nit=nit,
    )


__all__ = ["simplex_problem", "solve"]
