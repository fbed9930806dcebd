# SPDX-License-Identifier: CC-BY-NC-4.0
# Copyright (c) 2025-2026 fumi-engineer

"""In-place matrix transposition.

Square matrices are transposed by swapping a[i][j] with a[j][i] for all
i < j.  Rectangular matrices need a real permutation of the flat buffer:
element (i, j) of a row-major R x C grid lives at p = i*C + j and must move
to q = j*R + i in the C x R result.  Writing the mapping the other way
round, position q of the result is filled from

    src(q) = (q mod R) * C + (q div R)

The permutation decomposes into disjoint cycles.  The cycle-leader
algorithm walks every cycle once, carrying a single temporary value, so
each element moves exactly once.  The only extra memory is a bitmap of
visited positions (R*C booleans) instead of a second R*C buffer.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from .matrix import Matrix

logger = logging.getLogger(__name__)


def transpose_square(a: Matrix) -> None:
    """Transpose a square matrix in place through its element accessors."""
    n = a.nr_rows
    for i in range(n - 1):
        for j in range(i + 1, n):
            tmp = a.get(j, i)
            a.set(j, i, a.get(i, j))
            a.set(i, j, tmp)


def transpose_rect(buf: NDArray, nr_rows: int, nr_cols: int) -> None:
    """Permute a row-major ``nr_rows x nr_cols`` grid into its transpose.

    Afterwards ``buf`` holds the row-major ``nr_cols x nr_rows`` transpose.
    The first and last positions are fixed points of the permutation and
    are never visited.
    """
    size = nr_rows * nr_cols
    if buf.size != size:
        raise ValueError(
            f"buffer of {buf.size} elements is not a {nr_rows}x{nr_cols} grid"
        )
    if nr_rows <= 1 or nr_cols <= 1:
        # A single row or column has the same flat layout as its transpose
        return

    visited = np.zeros(size, dtype=bool)
    cycles = 0
    for start in range(1, size - 1):
        if visited[start]:
            continue
        cycles += 1
        carried = buf[start]
        q = start
        while True:
            visited[q] = True
            src = (q % nr_rows) * nr_cols + q // nr_rows
            if src == start:
                buf[q] = carried
                break
            buf[q] = buf[src]
            q = src
    logger.debug(
        "cycle-leader transpose %dx%d: %d cycles", nr_rows, nr_cols, cycles
    )


def cycle_lengths(nr_rows: int, nr_cols: int) -> list[int]:
    """Lengths of the cycles of the rectangular transpose permutation.

    Fixed points count as cycles of length 1, so the lengths always sum to
    ``nr_rows * nr_cols``.
    """
    size = nr_rows * nr_cols
    visited = np.zeros(size, dtype=bool)
    lengths = []
    for start in range(size):
        if visited[start]:
            continue
        length = 0
        q = start
        while not visited[q]:
            visited[q] = True
            length += 1
            q = (q % nr_rows) * nr_cols + q // nr_rows
        lengths.append(length)
    return lengths
