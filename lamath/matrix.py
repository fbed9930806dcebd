# SPDX-License-Identifier: CC-BY-NC-4.0
# Copyright (c) 2025-2026 fumi-engineer

"""Matrix capability: a 2-D tensor with a transpose view.

Every accessor goes through the view before asking the order strategy for
a buffer offset, so ``transpose_view`` is O(1) and never moves data:

    storage (r, c) = (col, row) if transposed else (row, col)

Algebra:
  - add:   A += B               elementwise, shapes must match
  - scale: A *= s               whole buffer, view-independent
  - mul:   C = A B              C[r][c] = sum_k A[r][k] * B[k][c]
"""

from __future__ import annotations

import logging

import numpy as np

from .capability import Capability
from .errors import DimensionalityError, ShapeMismatchError
from .kernels import get_kernel
from .tensor import Tensor
from .transpose import transpose_square

logger = logging.getLogger(__name__)

# Debug format limits: rows/cols at or above the limit are elided
_COL_LIMIT = 10
_COL_EDGE = 4
_ROW_LIMIT = 16
_ROW_EDGE = 7


class Matrix(Capability):
    """Matrix view over a 2-D ``Tensor``."""

    nr_dims_required = 2

    # -- shape --------------------------------------------------------------

    @property
    def nr_rows(self) -> int:
        """Number of rows as seen through the view."""
        return self._t.view.extents(self._t.sizes)[0]

    @property
    def nr_cols(self) -> int:
        """Number of columns as seen through the view."""
        return self._t.view.extents(self._t.sizes)[1]

    @property
    def shape(self) -> tuple[int, int]:
        return self._t.view.extents(self._t.sizes)

    @property
    def is_transposed_view(self) -> bool:
        return self._t.view.transposed

    # -- element access -----------------------------------------------------

    def raw_pos(self, row: int, col: int) -> int:
        """Buffer position of logical (row, col)."""
        r, c = self._t.view.swap(row, col)
        return self._t.order.offset((r, c), self._t.sizes)

    def get(self, row: int, col: int):
        """Value at (row, col)."""
        self._check((row, col), self.shape)
        return self._t.raw()[self.raw_pos(row, col)]

    def set(self, row: int, col: int, val: float) -> Matrix:
        """Store ``val`` at (row, col). Returns self so calls can chain."""
        self._check((row, col), self.shape)
        self._t.raw()[self.raw_pos(row, col)] = val
        return self

    def _at(self, row: int, col: int):
        # Unchecked read for loops whose indices are in range by construction
        return self._t.raw()[self.raw_pos(row, col)]

    # -- transposition ------------------------------------------------------

    def transpose_view(self) -> Matrix:
        """Transpose by flipping the view; the buffer is untouched."""
        self._t.view.toggle()
        return self

    def transpose(self) -> Matrix:
        """Transpose in place, rearranging the buffer.

        Square matrices swap pairs across the diagonal.  Rectangular ones
        swap the stored sizes and run the cycle-leader permutation over the
        storage grid, so no second buffer is allocated.
        """
        rows, cols = self.shape
        if rows == cols:
            logger.debug("square transpose %dx%d", rows, cols)
            transpose_square(self)
            return self
        self._t.transpose_storage()
        return self

    def is_transpose(self, other: Tensor | Matrix) -> bool:
        """True if ``other`` equals the transpose of this matrix (exactly)."""
        other_t = _unwrap(other)
        if other_t.nr_dims != 2:
            return False
        b = Matrix(other_t)
        if self.nr_rows != b.nr_cols or self.nr_cols != b.nr_rows:
            return False
        for i in range(self.nr_rows):
            for j in range(self.nr_cols):
                if self._at(i, j) != b._at(j, i):
                    return False
        return True

    def make_transposed(self) -> Tensor:
        """Return a new matrix C = A^T, i.e. c(j, i) = a(i, j)."""
        rows, cols = self.shape
        at = Tensor.new_matrix(cols, rows, self._t.kind, self._t.dtype)
        m = Matrix(at)
        for i in range(rows):
            for j in range(cols):
                m.set(j, i, self._at(i, j))
        return at

    # -- algebra ------------------------------------------------------------

    def add(self, rhs: Tensor | Matrix) -> Matrix:
        """In-place matrix addition: a(i, j) += b(i, j).

        Raises:
            DimensionalityError: rhs is not 2-D.
            ShapeMismatchError: rows or columns differ.
        """
        b = _as_matrix(rhs, "add")
        if self.shape != b.shape:
            raise ShapeMismatchError("add", self.shape, b.shape)
        rhs_t = b.tensor
        # Flat buffers line up only when both sides are stored the same way
        if (
            not self._t.view.transposed
            and not rhs_t.view.transposed
            and self._t.kind == rhs_t.kind
        ):
            kernel = get_kernel()
            logger.debug("add %dx%d via %s kernel", *self.shape, kernel.name)
            kernel.add(self._t.raw(), rhs_t.raw())
            return self
        logger.debug("add %dx%d via view-aware access", *self.shape)
        if np.shares_memory(self._t.raw(), rhs_t.raw()):
            # Writes below would otherwise feed later reads of rhs
            b = b.clone()
        for i in range(self.nr_rows):
            for j in range(self.nr_cols):
                pos = self.raw_pos(i, j)
                self._t.raw()[pos] = self._t.raw()[pos] + b._at(i, j)
        return self

    def scale(self, factor: float) -> Matrix:
        """Multiply every element by ``factor`` in place."""
        buf = self._t.raw()
        np.multiply(buf, factor, out=buf, casting="unsafe")
        return self

    def mul(self, rhs: Tensor | Matrix) -> Tensor:
        """Matrix product C = A B, a new rows(A) x cols(B) matrix.

        C[r][c] = sum_k A[r][k] * B[k][c], accumulated from zero in the
        element type.

        Raises:
            DimensionalityError: rhs is not 2-D.
            ShapeMismatchError: cols(A) != rows(B).
        """
        b = _as_matrix(rhs, "mul")
        if self.nr_cols != b.nr_rows:
            raise ShapeMismatchError("mul", self.shape, b.shape)
        rows, inner, cols = self.nr_rows, self.nr_cols, b.nr_cols
        logger.debug("mul %dx%d by %dx%d", rows, inner, inner, cols)
        out = Tensor.new_matrix(rows, cols, self._t.kind, self._t.dtype)
        c_m = Matrix(out)
        zero = self._t.dtype.to_numpy().type(0)
        for r in range(rows):
            for c in range(cols):
                acc = zero
                for k in range(inner):
                    acc += self._at(r, k) * b._at(k, c)
                c_m.set(r, c, acc)
        return out

    # -- formatting ---------------------------------------------------------

    def format(self) -> str:
        """Debug layout: ``"{cols}x{rows}"`` header, then one line per row.

        Values are ``%10.3e`` followed by ", ".  Rows with 10 or more
        columns show the first 4 and last 4 values around "... "; matrices
        with 16 or more rows show the first 7 and last 7 rows around a
        "..." line.
        """
        rows, cols = self.shape

        def fmt_row(row: int) -> str:
            if cols < _COL_LIMIT:
                return "".join("%10.3e, " % self._at(row, c) for c in range(cols))
            head = "".join("%10.3e, " % self._at(row, c) for c in range(_COL_EDGE))
            tail = "".join(
                "%10.3e, " % self._at(row, c) for c in range(cols - _COL_EDGE, cols)
            )
            return head + "... " + tail

        lines = []
        if rows < _ROW_LIMIT:
            lines.extend(fmt_row(r) for r in range(rows))
        else:
            lines.extend(fmt_row(r) for r in range(_ROW_EDGE))
            lines.append("...")
            lines.extend(fmt_row(r) for r in range(rows - _ROW_EDGE, rows))
        body = "".join(line + "\n" for line in lines)
        return f"{cols}x{rows}\n{body}"

    # -- operators ----------------------------------------------------------

    def __getitem__(self, key: tuple[int, int]):
        row, col = key
        return self.get(row, col)

    def __setitem__(self, key: tuple[int, int], val: float) -> None:
        row, col = key
        self.set(row, col, val)

    def __add__(self, other: Tensor | Matrix) -> Matrix:
        return self.clone().add(other)

    def __mul__(self, factor: float) -> Matrix:
        if isinstance(factor, (Tensor, Matrix)):
            return NotImplemented
        return self.clone().scale(factor)

    def __rmul__(self, factor: float) -> Matrix:
        return self.__mul__(factor)

    def __matmul__(self, other: Tensor | Matrix) -> Matrix:
        return Matrix(self.mul(other))

    def __repr__(self) -> str:
        return self.format()


def _unwrap(x: Tensor | Matrix) -> Tensor:
    if isinstance(x, Capability):
        return x.tensor
    return x


def _as_matrix(x: Tensor | Matrix, op: str) -> Matrix:
    t = _unwrap(x)
    if t.nr_dims != 2:
        raise DimensionalityError(op, 2, t.nr_dims)
    return Matrix(t)
