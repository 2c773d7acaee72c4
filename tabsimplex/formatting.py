"""Plain-text rendering of tableaus and solutions."""

from __future__ import annotations

import sys
from typing import IO, Dict, List, Optional

from .core import Problem
from .matrix import Matrix

COLUMN_PADDING = 4


def _format_value(value: float, precision: int) -> str:
    text = f"{value:.{precision}f}"
    # Avoid printing "-0.00" for tiny negative values.
    if text.startswith("-") and float(text) == 0.0:
        text = text[1:]
    return text


def _column_widths(matrix: Matrix, precision: int) -> List[int]:
    return [
        max(len(_format_value(value, precision)) for value in matrix.column(column))
        + COLUMN_PADDING
        for column in range(matrix.width)
    ]


def format_matrix(
    matrix: Matrix,
    precision: int = 2,
    objective_rows: int = 1,
    widths: Optional[List[int]] = None,
) -> str:
    """
    Render ``matrix`` as fixed-width text.

    Values use ``precision`` decimals and each column is padded by
    ``COLUMN_PADDING`` spaces. The last column is preceded by ``"| "`` and a
    dashed rule separates the trailing ``objective_rows`` rows.
    """
    widths = widths or _column_widths(matrix, precision)
    total = sum(widths)
    lines: List[str] = []
    first_objective = matrix.height - objective_rows
    for index, row in enumerate(matrix.rows()):
        if index == first_objective:
            lines.append("-" * total)
        cells = []
        for column, width in enumerate(widths):
            prefix = "| " if column == matrix.width - 1 else ""
            cells.append(prefix + _format_value(row[column], precision).ljust(width))
        lines.append("".join(cells).rstrip())
    return "\n".join(lines)


def format_tableau(problem: Problem, precision: int = 2) -> str:
    """Render a problem's tableau with a header line of column labels."""
    matrix = problem.tableau
    widths = _column_widths(matrix, precision)
    # The value column gains the "| " separator on data rows.
    header = "".join(
        ("  " if index == matrix.width - 1 else "") + column.label.ljust(widths[index])
        for index, column in enumerate(problem.columns)
    ).rstrip()
    body = format_matrix(matrix, precision, problem.objective_rows, widths)
    return "\n".join([header, "-" * len(header), body])


def print_tableau(problem: Problem, file: Optional[IO[str]] = None, precision: int = 2) -> None:
    """Write :func:`format_tableau` output to ``file`` (default: stdout)."""
    print(format_tableau(problem, precision), file=file or sys.stdout)


def format_solution(solution: Dict[str, float], precision: int = 2) -> str:
    """Render a solution mapping as ``label: value`` lines."""
    return "\n".join(
        f"{label}: {_format_value(value, precision)}" for label, value in solution.items()
    )


__all__ = ["COLUMN_PADDING", "format_matrix", "format_tableau", "print_tableau", "format_solution"]
