"""
Dense, fixed-size matrix used as the Simplex tableau store.

The matrix is a thin wrapper around a ``float64`` NumPy array that adds strict
bounds checking, restartable row/column views and the elementary row
operations needed by Gauss-Jordan pivoting. Dimensions never change after
creation: reshaping (dropping or adding rows and columns) always produces a
new :class:`Matrix` through :meth:`Matrix.select` or the constructors.

Example:
    >>> from tabsimplex.matrix import Matrix
    >>> m = Matrix(2, 3, lambda row, column: row * 3 + column)
    >>> m[1, 2]
    5.0
    >>> list(m.column(1))
    [1.0, 4.0]
"""

from __future__ import annotations

from typing import Callable, Iterator, Optional, Sequence

import numpy as np

Initializer = Callable[[int, int], float]


class MatrixLine(Sequence[float]):
    """
    Read-only view over one row or one column of a :class:`Matrix`.

    Views are lazy (values are read from the live matrix on access), finite
    and restartable: iterating twice yields the same values as long as the
    matrix was not modified in between.
    """

    __slots__ = ("_matrix", "_index", "_axis")

    def __init__(self, matrix: "Matrix", index: int, axis: int):
        self._matrix = matrix
        self._index = index
        self._axis = axis

    def __len__(self) -> int:
        return self._matrix.width if self._axis == 0 else self._matrix.height

    def __getitem__(self, position):  # type: ignore[override]
        if isinstance(position, slice):
            return [self[i] for i in range(*position.indices(len(self)))]
        if self._axis == 0:
            return self._matrix.get(self._index, position)
        return self._matrix.get(position, self._index)

    def __iter__(self) -> Iterator[float]:
        for position in range(len(self)):
            yield self[position]

    def __repr__(self) -> str:
        kind = "row" if self._axis == 0 else "column"
        return f"MatrixLine({kind}={self._index}, values={list(self)})"


class Matrix:
    """
    Mutable ``height x width`` grid of real numbers.

    Args:
        rows: Number of rows (must be positive).
        columns: Number of columns (must be positive).
        init: Optional callable ``init(row, column) -> float`` used to fill
            every cell. Defaults to zero.

    Raises:
        ValueError: If either dimension is not positive.
    """

    __slots__ = ("_data",)

    def __init__(self, rows: int, columns: int, init: Optional[Initializer] = None):
        if rows <= 0 or columns <= 0:
            raise ValueError(f"Matrix dimensions must be positive, got {rows}x{columns}")
        data = np.zeros((rows, columns), dtype=float)
        if init is not None:
            for row in range(rows):
                for column in range(columns):
                    data[row, column] = float(init(row, column))
        self._data = data

    @classmethod
    def create(cls, rows: int, columns: int, init: Optional[Initializer] = None) -> "Matrix":
        """Alias of the constructor, filling each cell via ``init(row, column)``."""
        return cls(rows, columns, init)

    @classmethod
    def zeros(cls, rows: int, columns: int) -> "Matrix":
        return cls(rows, columns)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> "Matrix":
        """
        Build a matrix from nested sequences.

        Raises:
            ValueError: If the input is empty or ragged.
        """
        arr = np.asarray(rows, dtype=float)
        if arr.ndim != 2 or arr.size == 0:
            raise ValueError("Matrix rows must form a non-empty rectangular grid")
        matrix = cls(arr.shape[0], arr.shape[1])
        matrix._data[:, :] = arr
        return matrix

    @property
    def height(self) -> int:
        """Number of rows."""
        return self._data.shape[0]

    @property
    def width(self) -> int:
        """Number of columns."""
        return self._data.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return self.height, self.width

    def _check(self, row: int, column: int) -> None:
        if not 0 <= row < self.height or not 0 <= column < self.width:
            raise IndexError(
                f"Cell ({row}, {column}) is outside a {self.height}x{self.width} matrix"
            )

    def _check_row(self, row: int) -> None:
        if not 0 <= row < self.height:
            raise IndexError(f"Row {row} is outside a matrix with {self.height} rows")

    def _check_column(self, column: int) -> None:
        if not 0 <= column < self.width:
            raise IndexError(f"Column {column} is outside a matrix with {self.width} columns")

    def get(self, row: int, column: int) -> float:
        """
        Return the value at ``(row, column)``.

        Raises:
            IndexError: If the cell lies outside the matrix. Negative indices
                are rejected rather than wrapped.
        """
        self._check(row, column)
        return float(self._data[row, column])

    def set(self, row: int, column: int, value: float) -> None:
        """
        Store ``value`` at ``(row, column)``.

        Raises:
            IndexError: If the cell lies outside the matrix.
        """
        self._check(row, column)
        self._data[row, column] = float(value)

    def __getitem__(self, key: tuple[int, int]) -> float:
        row, column = key
        return self.get(row, column)

    def __setitem__(self, key: tuple[int, int], value: float) -> None:
        row, column = key
        self.set(row, column, value)

    def row(self, row: int) -> MatrixLine:
        """Return a lazy view over the values of ``row``."""
        self._check_row(row)
        return MatrixLine(self, row, axis=0)

    def column(self, column: int) -> MatrixLine:
        """Return a lazy view over the values of ``column``."""
        self._check_column(column)
        return MatrixLine(self, column, axis=1)

    def rows(self) -> Iterator[MatrixLine]:
        for row in range(self.height):
            yield self.row(row)

    def columns(self) -> Iterator[MatrixLine]:
        for column in range(self.width):
            yield self.column(column)

    def divide_row(self, row: int, divisor: float) -> None:
        """Divide every cell of ``row`` by ``divisor`` in place."""
        self._check_row(row)
        if divisor == 0.0:
            raise ZeroDivisionError(f"Cannot divide row {row} by zero")
        self._data[row, :] /= divisor

    def scale_row(self, row: int, factor: float) -> None:
        """Multiply every cell of ``row`` by ``factor`` in place."""
        self._check_row(row)
        self._data[row, :] *= factor

    def add_scaled_row(self, target: int, source: int, factor: float) -> None:
        """Subtract ``factor * source`` from the ``target`` row in place."""
        self._check_row(target)
        self._check_row(source)
        if factor == 0.0:
            return
        self._data[target, :] -= factor * self._data[source, :]

    def select(self, rows: Sequence[int], columns: Sequence[int]) -> "Matrix":
        """
        Copy the given rows and columns (in the given order) into a new matrix.

        Raises:
            IndexError: If any index is out of range.
            ValueError: If the selection is empty.
        """
        for row in rows:
            self._check_row(row)
        for column in columns:
            self._check_column(column)
        if not rows or not columns:
            raise ValueError("Selection must keep at least one row and one column")
        out = Matrix(len(rows), len(columns))
        out._data[:, :] = self._data[np.ix_(list(rows), list(columns))]
        return out

    def copy(self) -> "Matrix":
        out = Matrix(self.height, self.width)
        out._data[:, :] = self._data
        return out

    def to_numpy(self) -> np.ndarray:
        """Return a copy of the underlying data as a NumPy array."""
        return self._data.copy()

    def allclose(self, other: "Matrix", atol: float = 1e-9) -> bool:
        return self.shape == other.shape and bool(
            np.allclose(self._data, other._data, atol=atol, rtol=0.0)
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Matrix({self.height}x{self.width}, {self._data.tolist()})"


__all__ = ["Matrix", "MatrixLine"]
