"""tabsimplex - a two-phase tableau Simplex solver for linear programs."""

__version__ = "0.1.0"

# Data model
from .matrix import Matrix, MatrixLine
from .core import (
    Column,
    ColumnRole,
    Expression,
    Goal,
    Problem,
    Relation,
    SolveResult,
    SolverOptions,
    Status,
    Term,
    constraint,
    objective,
)
from .errors import (
    InfeasibleProblemError,
    IterationLimitError,
    MalformedProblemError,
    SimplexError,
    UnboundedProblemError,
)

# Tableau engine
from .compiler import compile_problem
from .canonical import (
    drop_artificial_variables,
    is_canonical,
    resolve_canonical_form,
    run_phase_one,
    to_canonical_form,
)
from .pivot import PivotState, is_optimal, optimize, pivot, pivot_state
from .solution import get_solution, objective_value
from .solver import simplex_problem, solve

# Text adapters
from .formatting import format_solution, format_tableau, print_tableau
from .parser import parse_constraint, parse_objective

# Diagnostics and logging
from .diagnostics import debug_context, is_debug_enabled, set_debug_enabled
from .logging import configure_logging, get_logger, set_log_level

__all__ = [
    "__version__",
    # Data model
    "Matrix",
    "MatrixLine",
    "Term",
    "Expression",
    "Relation",
    "Goal",
    "Column",
    "ColumnRole",
    "Problem",
    "Status",
    "SolveResult",
    "SolverOptions",
    "constraint",
    "objective",
    # Errors
    "SimplexError",
    "MalformedProblemError",
    "InfeasibleProblemError",
    "UnboundedProblemError",
    "IterationLimitError",
    # Engine
    "compile_problem",
    "is_canonical",
    "to_canonical_form",
    "drop_artificial_variables",
    "run_phase_one",
    "resolve_canonical_form",
    "PivotState",
    "pivot",
    "pivot_state",
    "is_optimal",
    "optimize",
    "get_solution",
    "objective_value",
    "simplex_problem",
    "solve",
    # Text adapters
    "parse_constraint",
    "parse_objective",
    "format_tableau",
    "format_solution",
    "print_tableau",
    # Diagnostics and logging
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    "get_logger",
    "set_log_level",
    "configure_logging",
]
