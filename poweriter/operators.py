# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Linear operators that power iteration can be run against.

Currently implemented:
- DenseMatrix: 2-D NumPy array
- SparseMatrix: SciPy CSR matrix
- CooMatrix: (row, col, value) triplet accumulator that converts to
  either of the above
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

import numpy as np
from scipy import sparse


class Operator(ABC):
    """Abstract square-or-not linear map with a matrix-vector product."""

    @abstractmethod
    def rows(self) -> int:
        """Number of rows (length of the output vector)."""
        pass

    @abstractmethod
    def cols(self) -> int:
        """Number of columns (length of the input vector)."""
        pass

    @abstractmethod
    def _mult(self, x: np.ndarray) -> np.ndarray:
        pass

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.rows(), self.cols())

    def is_square(self) -> bool:
        return self.rows() == self.cols()

    def multiply(self, x: np.ndarray) -> np.ndarray:
        """
        Return y = A x as a new float64 vector of length rows().

        Raises:
            ValueError: If x is not 1-D of length cols().
        """
        x = np.asarray(x, dtype=float)
        if x.shape != (self.cols(),):
            raise ValueError(
                f"multiply() expects a vector of shape ({self.cols()},), got {x.shape}."
            )
        return np.asarray(self._mult(x), dtype=float).reshape(self.rows())

    def __matmul__(self, x: np.ndarray) -> np.ndarray:
        return self.multiply(x)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(shape={self.shape})"


class DenseMatrix(Operator):
    """
    Dense row-major matrix backed by a float64 ndarray.

    Attributes:
        data: (m, n) ndarray, owned copy of the input.
    """

    def __init__(self, data):
        A = np.array(data, dtype=float)
        if A.ndim != 2:
            raise ValueError("DenseMatrix needs a 2-D array.")
        self.data = A

    def rows(self) -> int:
        return self.data.shape[0]

    def cols(self) -> int:
        return self.data.shape[1]

    def _mult(self, x):
        return self.data @ x

    def to_array(self) -> np.ndarray:
        return self.data.copy()

    def __str__(self) -> str:
        lines = []
        for row in self.data:
            lines.append(" ".join(f"{v:8.2f}" for v in row))
        return "\n".join(lines)

    def print(self, label: str = "") -> None:
        """Write the matrix to stdout, preceded by an optional label."""
        if label:
            print(label)
        print(self)
        print()


class SparseMatrix(Operator):
    """
    Compressed sparse row matrix.

    Accepts any scipy.sparse matrix/array or a dense 2-D array; the data
    is stored as float64 CSR.
    """

    def __init__(self, data):
        if sparse.issparse(data):
            A = sparse.csr_matrix(data, dtype=float)
        else:
            dense = np.asarray(data, dtype=float)
            if dense.ndim != 2:
                raise ValueError("SparseMatrix needs a 2-D input.")
            A = sparse.csr_matrix(dense)
        A.sum_duplicates()
        self.data = A

    def rows(self) -> int:
        return self.data.shape[0]

    def cols(self) -> int:
        return self.data.shape[1]

    @property
    def nnz(self) -> int:
        return self.data.nnz

    def _mult(self, x):
        return self.data @ x

    def to_scipy(self) -> sparse.csr_matrix:
        return self.data.copy()

    def to_dense(self) -> "DenseMatrix":
        return DenseMatrix(self.data.toarray())


class CooMatrix(Operator):
    """
    Coordinate-list (triplet) accumulator.

    Entries are appended with `add` / `add_sym`; repeated (i, j) pairs
    are summed, both when multiplying and when converting.

    Attributes:
        entries: list of (row, col, value) triplets in insertion order.
    """

    def __init__(self, rows: int, cols: Optional[int] = None):
        if cols is None:
            cols = rows
        if rows < 0 or cols < 0:
            raise ValueError("CooMatrix dimensions must be non-negative.")
        self._rows = int(rows)
        self._cols = int(cols)
        self.entries: List[Tuple[int, int, float]] = []

    def rows(self) -> int:
        return self._rows

    def cols(self) -> int:
        return self._cols

    def _check_index(self, i: int, j: int) -> None:
        if not (0 <= i < self._rows and 0 <= j < self._cols):
            raise IndexError(
                f"Entry ({i}, {j}) outside a {self._rows}x{self._cols} matrix."
            )

    def add(self, i: int, j: int, value: float) -> None:
        self._check_index(i, j)
        self.entries.append((i, j, float(value)))

    def add_sym(self, i: int, j: int, value: float) -> None:
        """Add value at (i, j) and, off the diagonal, at (j, i)."""
        self._check_index(i, j)
        self._check_index(j, i)
        self.add(i, j, value)
        if i != j:
            self.add(j, i, value)

    def _triplets(self):
        if not self.entries:
            return (
                np.empty(0, dtype=int),
                np.empty(0, dtype=int),
                np.empty(0, dtype=float),
            )
        i, j, v = zip(*self.entries)
        return np.array(i, dtype=int), np.array(j, dtype=int), np.array(v, dtype=float)

    def _mult(self, x):
        i, j, v = self._triplets()
        y = np.zeros(self._rows)
        # unbuffered, so duplicate rows accumulate
        np.add.at(y, i, v * x[j])
        return y

    def to_dense(self) -> DenseMatrix:
        i, j, v = self._triplets()
        A = np.zeros((self._rows, self._cols))
        np.add.at(A, (i, j), v)
        return DenseMatrix(A)

    def to_sparse(self) -> SparseMatrix:
        i, j, v = self._triplets()
        A = sparse.coo_matrix((v, (i, j)), shape=(self._rows, self._cols))
        return SparseMatrix(A.tocsr())

    @property
    def nnz(self) -> int:
        """Number of stored triplets, duplicates included."""
        return len(self.entries)
