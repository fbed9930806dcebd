# SPDX-License-Identifier: CC-BY-NC-4.0
# Copyright (c) 2025-2026 fumi-engineer

"""Logical views over a tensor.

A view changes how a caller sees the tensor without touching its buffer.
The only view is transposition: with ``transposed`` set, the matrix
capability swaps (row, col) before asking the order strategy for an
offset, and reports swapped extents.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass
class View:
    """Transposition flag for a 2-D tensor."""

    transposed: bool = False

    def toggle(self) -> None:
        """Flip the transposition flag. Two toggles restore the original."""
        self.transposed = not self.transposed

    def swap(self, row: int, col: int) -> tuple[int, int]:
        """Return the storage (row, col) for a logical (row, col)."""
        if self.transposed:
            return col, row
        return row, col

    def extents(self, sizes: Sequence[int]) -> tuple[int, int]:
        """Return the logical (nr_rows, nr_cols) for stored ``sizes``."""
        if self.transposed:
            return sizes[1], sizes[0]
        return sizes[0], sizes[1]

    def copy(self) -> View:
        return View(self.transposed)
