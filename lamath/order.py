# SPDX-License-Identifier: CC-BY-NC-4.0
# Copyright (c) 2025-2026 fumi-engineer

"""Index-to-offset strategies.

A tensor stores its elements in one flat buffer.  The ``Order`` picked at
construction maps a multi-index to the position of that element in the
buffer.  The choice depends on the layout kind and the number of
dimensions, and stays fixed for the tensor's lifetime:

    row-major  1-D: i0
               2-D: i0*S1 + i1
               N-D: ((i0*S1 + i1)*S2 + i2)*S3 + ...     (last index fastest)
    col-major  1-D: i0
               2-D: i0 + i1*S0
               N-D: ((iN*S(N-1) + i(N-1))*S(N-2) + ...) (first index fastest)

See https://en.wikipedia.org/wiki/Row-_and_column-major_order
"""

from __future__ import annotations

from enum import Enum
from typing import Sequence


class OrderKind(Enum):
    """Storage layout kind."""

    ROW_MAJOR = "row_major"
    COL_MAJOR = "col_major"


class Order(Enum):
    """Index-to-offset strategy, one variant per (kind, dimensionality)."""

    ROW_MAJOR_1D = "row_major_1d"
    ROW_MAJOR_2D = "row_major_2d"
    ROW_MAJOR_ND = "row_major_nd"
    COL_MAJOR_1D = "col_major_1d"
    COL_MAJOR_2D = "col_major_2d"
    COL_MAJOR_ND = "col_major_nd"

    @classmethod
    def select(cls, kind: OrderKind, nr_dims: int) -> Order:
        """Pick the strategy for a layout kind and dimension count."""
        if kind == OrderKind.ROW_MAJOR:
            if nr_dims == 1:
                return cls.ROW_MAJOR_1D
            if nr_dims == 2:
                return cls.ROW_MAJOR_2D
            return cls.ROW_MAJOR_ND
        if kind == OrderKind.COL_MAJOR:
            if nr_dims == 1:
                return cls.COL_MAJOR_1D
            if nr_dims == 2:
                return cls.COL_MAJOR_2D
            return cls.COL_MAJOR_ND
        raise ValueError(f"unsupported order kind: {kind!r}")

    @property
    def kind(self) -> OrderKind:
        """Layout kind this strategy belongs to."""
        if self.value.startswith("row"):
            return OrderKind.ROW_MAJOR
        return OrderKind.COL_MAJOR

    def offset(self, index: Sequence[int], sizes: Sequence[int]) -> int:
        """Map ``index`` to a flat buffer position.

        No validation is done here; callers check indices against ``sizes``
        when bounds checking is enabled.
        """
        if self is Order.ROW_MAJOR_1D or self is Order.COL_MAJOR_1D:
            return index[0]
        if self is Order.ROW_MAJOR_2D:
            return index[0] * sizes[1] + index[1]
        if self is Order.COL_MAJOR_2D:
            return index[0] + index[1] * sizes[0]
        if self is Order.ROW_MAJOR_ND:
            n = index[0]
            for j in range(1, len(index)):
                n = n * sizes[j] + index[j]
            return n
        # COL_MAJOR_ND: Horner's scheme from the last index down
        last = len(index) - 1
        n = index[last]
        for j in range(last - 1, -1, -1):
            n = n * sizes[j] + index[j]
        return n

    def storage_grid(self, sizes: Sequence[int]) -> tuple[int, int]:
        """Return the (rows, cols) of the row-major grid a 2-D buffer forms.

        A row-major ``r x c`` matrix is stored as an ``r x c`` grid; a
        column-major one is stored as the ``c x r`` grid of its columns.
        """
        if self is Order.COL_MAJOR_2D:
            return sizes[1], sizes[0]
        return sizes[0], sizes[1]
