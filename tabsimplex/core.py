"""
Core problem, tableau and result dataclasses for the tableau Simplex solver.

A linear program is described by one objective :class:`Expression` and any
number of constraint expressions. The compiler turns them into a
:class:`Problem`: an ordered tuple of :class:`Column` descriptors (each tagged
with a :class:`ColumnRole`) plus the dense tableau :class:`~tabsimplex.matrix.Matrix`.

Tableau layout conventions shared by every module:

* column ``0`` is the active objective column and the last column holds the
  right-hand-side values;
* the last row is the active objective row, and the ``objective_rows`` rows at
  the bottom of the tableau are objective rows; all rows above them are
  constraint rows.

References:
    - Dantzig, *Linear Programming and Extensions* (1963)
    - Bertsimas & Tsitsiklis, *Introduction to Linear Optimization* (1997)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .errors import MalformedProblemError, SimplexError
from .matrix import Matrix

OBJECTIVE_LABEL = "Z"
ARTIFICIAL_OBJECTIVE_LABEL = "W"
VALUE_LABEL = "RHS"
SLACK_PREFIX = "s"
ARTIFICIAL_PREFIX = "a"

RESERVED_LABELS = frozenset({OBJECTIVE_LABEL, ARTIFICIAL_OBJECTIVE_LABEL, VALUE_LABEL})


class Relation(Enum):
    """Relation between the left- and right-hand side of an expression."""

    LESS_EQUAL = "<="
    GREATER_EQUAL = ">="
    EQUAL = "="

    @classmethod
    def from_symbol(cls, symbol: str) -> "Relation":
        for relation in cls:
            if relation.value == symbol:
                return relation
        raise MalformedProblemError(f'Unrecognized operator: "{symbol}"')


class Goal(Enum):
    """Optimization direction."""

    MAXIMIZE = "max"
    MINIMIZE = "min"


class ColumnRole(Enum):
    """Semantic role of a tableau column."""

    OBJECTIVE = "objective"
    DECISION = "decision"
    SLACK = "slack"
    ARTIFICIAL = "artificial"
    VALUE = "value"


class Status(Enum):
    """Outcome of a full solve."""

    OPTIMAL = "optimal"
    INFEASIBLE = "infeasible"
    UNBOUNDED = "unbounded"
    MALFORMED = "malformed"
    MAX_ITER = "max_iter"


@dataclass(frozen=True)
class Term:
    """One summand ``coefficient * label`` of a linear expression."""

    coefficient: float
    label: str


@dataclass(frozen=True)
class Expression:
    """
    Linear expression ``sum(terms) <relation> rhs``.

    When used as an objective the relation is ``EQUAL`` and ``rhs`` holds the
    objective's constant term, i.e. ``Z = sum(terms) + rhs``.

    Duplicate labels are not aggregated: :meth:`coefficient` reports the first
    matching term, so callers must pre-sum repeated variables.
    """

    terms: Tuple[Term, ...]
    relation: Relation
    rhs: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "terms", tuple(self.terms))

    def labels(self) -> List[str]:
        return [term.label for term in self.terms]

    def coefficient(self, label: str) -> float:
        for term in self.terms:
            if term.label == label:
                return float(term.coefficient)
        return 0.0


def constraint(*terms: Term, relation: Relation, rhs: float) -> Expression:
    """Build a constraint ``a1 x1 + ... + an xn <relation> rhs``."""
    return Expression(terms=tuple(terms), relation=relation, rhs=float(rhs))


def objective(*terms: Term, constant: float = 0.0) -> Expression:
    """Build an objective ``Z = a1 x1 + ... + an xn + constant``."""
    return Expression(terms=tuple(terms), relation=Relation.EQUAL, rhs=float(constant))


@dataclass(frozen=True)
class Column:
    """Tableau column descriptor."""

    label: str
    role: ColumnRole


@dataclass(frozen=True)
class Problem:
    """
    Compiled tableau together with its column descriptors.

    Attributes:
        columns: Column descriptors, one per tableau column.
        tableau: Dense tableau, mutated in place by the pivot engine.
        goal: Optimization direction the tableau was compiled for.
        objective_rows: Number of objective rows at the bottom of the
            tableau (``2`` during Phase I, ``1`` otherwise).
    """

    columns: Tuple[Column, ...]
    tableau: Matrix
    goal: Goal
    objective_rows: int = 1

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", tuple(self.columns))
        if len(self.columns) != self.tableau.width:
            raise ValueError(
                f"Problem has {len(self.columns)} columns but the tableau is "
                f"{self.tableau.width} wide"
            )
        if not 1 <= self.objective_rows <= self.tableau.height:
            raise ValueError(f"Invalid objective row count: {self.objective_rows}")

    @property
    def constraint_count(self) -> int:
        return self.tableau.height - self.objective_rows

    @property
    def constraint_rows(self) -> range:
        return range(self.constraint_count)

    @property
    def labels(self) -> List[str]:
        return [column.label for column in self.columns]

    def column_index(self, label: str) -> int:
        for index, column in enumerate(self.columns):
            if column.label == label:
                return index
        raise KeyError(label)

    def columns_with_role(self, role: ColumnRole) -> List[int]:
        return [index for index, column in enumerate(self.columns) if column.role is role]

    def objective_row_for(self, column: int) -> int:
        """
        Return the objective row paired with an objective column.

        Objective columns are stacked at the left and objective rows at the
        bottom in reverse order: column ``0`` pairs with the last row,
        column ``1`` (the real objective during Phase I) with the row above.
        """
        row = self.tableau.height - 1 - column
        if column >= self.objective_rows or self.columns[column].role is not ColumnRole.OBJECTIVE:
            raise ValueError(f"Column {column} is not an objective column")
        return row


@dataclass(frozen=True)
class SolverOptions:
    """
    Configuration for a solve.

    Attributes:
        tol: Absolute tolerance used for every floating-point comparison
            (basic-column detection, optimality, ratio ties, Phase I zero test).
        max_iterations: Optional cap on pivots per phase. ``None`` disables it.
    """

    tol: float = 1e-9
    max_iterations: Optional[int] = None

    def __post_init__(self) -> None:
        if self.tol < 0.0:
            raise ValueError(f"tol must be non-negative, got {self.tol}")
        if self.max_iterations is not None and self.max_iterations <= 0:
            raise ValueError(f"max_iterations must be positive, got {self.max_iterations}")


@dataclass
class SolveResult:
    """
    Tagged result of :func:`tabsimplex.solver.solve`.

    Attributes:
        status: Outcome of the solve.
        problem: Final Phase II problem when the solve reached it, else ``None``.
        solution: Mapping label -> value, only present when ``status`` is
            :attr:`Status.OPTIMAL`.
        message: Human-readable explanation of the status.
        nit: Pivots performed across both phases.
        error: Exception that terminated the solve, if any.
    """

    status: Status
    problem: Optional[Problem]
    solution: Optional[Dict[str, float]]
    message: str
    nit: int = 0
    error: Optional[SimplexError] = field(default=None, repr=False)

    @property
    def ok(self) -> bool:
        return self.status is Status.OPTIMAL

    @property
    def objective(self) -> Optional[float]:
        if self.solution is None:
            return None
        return self.solution.get(OBJECTIVE_LABEL)

    def unwrap(self) -> Dict[str, float]:
        """Return the solution or re-raise the error that ended the solve."""
        if self.ok and self.solution is not None:
            return self.solution
        if self.error is not None:
            raise self.error
        raise SimplexError(self.message)


__all__ = [
    "OBJECTIVE_LABEL",
    "ARTIFICIAL_OBJECTIVE_LABEL",
    "VALUE_LABEL",
    "SLACK_PREFIX",
    "ARTIFICIAL_PREFIX",
    "RESERVED_LABELS",
    "Relation",
    "Goal",
    "ColumnRole",
    "Status",
    "Term",
    "Expression",
    "constraint",
    "objective",
    "Column",
    "Problem",
    "SolverOptions",
    "SolveResult",
]
