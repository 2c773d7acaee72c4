"""
Compilation of a structured linear program into an initial Simplex tableau.

Given an objective ``Z = c.x + k`` and constraints ``a_i.x <rel_i> b_i`` the
compiler lays the tableau out as::

    [ Z | x_1 ... x_n (sorted labels) | s_1 ... s_m | RHS ]

with one row per constraint followed by the objective row. Every constraint
owns a slack column: ``+1`` for ``<=``, ``-1`` for ``>=`` and an empty
placeholder for ``=``.

The objective row is written as ``-Z + c.x = -k`` when maximizing and as the
negated equation ``Z - c.x = k`` when minimizing. In both cases a positive
reduced cost means the objective still improves, so the pivot engine needs a
single optimality rule, and ``RHS / row[Z]`` recovers ``Z``.
"""

from __future__ import annotations

import math
import re
from typing import List, Sequence

from .core import (
    ARTIFICIAL_PREFIX,
    OBJECTIVE_LABEL,
    RESERVED_LABELS,
    SLACK_PREFIX,
    VALUE_LABEL,
    Column,
    ColumnRole,
    Expression,
    Goal,
    Problem,
    Relation,
    Term,
)
from .errors import MalformedProblemError
from .logging import get_logger
from .matrix import Matrix

logger = get_logger(__name__)

_SLACK_SIGN = {
    Relation.LESS_EQUAL: 1.0,
    Relation.GREATER_EQUAL: -1.0,
    Relation.EQUAL: 0.0,
}

_FLIPPED = {
    Relation.LESS_EQUAL: Relation.GREATER_EQUAL,
    Relation.GREATER_EQUAL: Relation.LESS_EQUAL,
    Relation.EQUAL: Relation.EQUAL,
}

# Names the tableau generates for slack and artificial columns.
_GENERATED_LABEL_RE = re.compile(rf"^(?:{SLACK_PREFIX}|{ARTIFICIAL_PREFIX})\d+$")


def _validate_expression(expression: Expression, what: str) -> None:
    if not isinstance(expression, Expression):
        raise MalformedProblemError(f"{what} must be an Expression, got {type(expression).__name__}")
    if not isinstance(expression.relation, Relation):
        raise MalformedProblemError(f"{what} has an unrecognized relation: {expression.relation!r}")
    if not math.isfinite(expression.rhs):
        raise MalformedProblemError(f"{what} has a non-finite right-hand side")
    for term in expression.terms:
        if not isinstance(term, Term):
            raise MalformedProblemError(f"{what} contains a non-Term entry: {term!r}")
        if not isinstance(term.label, str) or not term.label:
            raise MalformedProblemError(f"{what} contains a term without a label")
        if term.label in RESERVED_LABELS:
            raise MalformedProblemError(f"{what} uses the reserved label {term.label!r}")
        if _GENERATED_LABEL_RE.match(term.label):
            raise MalformedProblemError(
                f"{what} uses {term.label!r}, which clashes with a generated slack or artificial label"
            )
        if not math.isfinite(term.coefficient):
            raise MalformedProblemError(
                f"{what} has a non-finite coefficient for {term.label!r}"
            )


def normalize_constraint(expression: Expression) -> Expression:
    """
    Return ``expression`` rewritten with a non-negative right-hand side.

    Rows with a negative RHS are multiplied by ``-1``, which also swaps
    ``<=`` and ``>=``.
    """
    if expression.rhs >= 0.0:
        return expression
    return Expression(
        terms=tuple(Term(-term.coefficient, term.label) for term in expression.terms),
        relation=_FLIPPED[expression.relation],
        rhs=-expression.rhs,
    )


def decision_labels(objective: Expression, constraints: Sequence[Expression]) -> List[str]:
    """Distinct variable labels of the whole problem, sorted lexicographically."""
    labels = set(objective.labels())
    for expression in constraints:
        labels.update(expression.labels())
    return sorted(labels)


def compile_problem(
    objective: Expression,
    constraints: Sequence[Expression] = (),
    goal: Goal = Goal.MAXIMIZE,
) -> Problem:
    """
    Build the initial tableau for a linear program.

    Args:
        objective: Objective expression (relation ``EQUAL``, constant as RHS).
        constraints: Constraint expressions, in row order.
        goal: Whether to maximize or minimize the objective.

    Returns:
        Problem holding the column layout and the freshly allocated tableau.

    Raises:
        MalformedProblemError: If any expression is structurally invalid.
    """
    if not isinstance(goal, Goal):
        raise MalformedProblemError(f"Unrecognized goal: {goal!r}")
    _validate_expression(objective, "Objective")
    if objective.relation is not Relation.EQUAL:
        raise MalformedProblemError("Objective relation must be '='")
    constraints = list(constraints)
    for index, expression in enumerate(constraints):
        _validate_expression(expression, f"Constraint {index + 1}")

    rows = [normalize_constraint(expression) for expression in constraints]
    decisions = decision_labels(objective, rows)

    columns: List[Column] = [Column(OBJECTIVE_LABEL, ColumnRole.OBJECTIVE)]
    columns.extend(Column(label, ColumnRole.DECISION) for label in decisions)
    columns.extend(
        Column(f"{SLACK_PREFIX}{index + 1}", ColumnRole.SLACK) for index in range(len(rows))
    )
    columns.append(Column(VALUE_LABEL, ColumnRole.VALUE))

    slack_offset = 1 + len(decisions)
    rhs_column = len(columns) - 1
    tableau = Matrix(len(rows) + 1, len(columns))

    for row, expression in enumerate(rows):
        for offset, label in enumerate(decisions):
            tableau[row, 1 + offset] = expression.coefficient(label)
        sign = _SLACK_SIGN[expression.relation]
        if sign:
            tableau[row, slack_offset + row] = sign
        tableau[row, rhs_column] = expression.rhs

    # Minimization stores the negated objective equation.
    direction = 1.0 if goal is Goal.MAXIMIZE else -1.0
    objective_row = len(rows)
    tableau[objective_row, 0] = -direction
    for offset, label in enumerate(decisions):
        tableau[objective_row, 1 + offset] = direction * objective.coefficient(label)
    tableau[objective_row, rhs_column] = -direction * objective.rhs

    logger.debug(
        "Compiled %d constraint(s) over %d decision variable(s) for %s",
        len(rows),
        len(decisions),
        goal.name.lower(),
    )
    return Problem(columns=tuple(columns), tableau=tableau, goal=goal)


__all__ = ["compile_problem", "decision_labels", "normalize_constraint"]
