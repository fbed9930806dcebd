# SPDX-License-Identifier: CC-BY-NC-4.0
# Copyright (c) 2025-2026 fumi-engineer

"""Error types raised by the tensor engine.

Shape errors from the matrix algebra are always raised to the caller;
nothing is silently truncated or broadcast.  Index errors are raised by
checked element access (see ``Config.check_bounds``).
"""

from __future__ import annotations

from typing import Sequence


class TensorError(Exception):
    """Base class for all lamath errors."""

    pass


class DimensionalityError(TensorError):
    """Operand has the wrong number of dimensions."""

    def __init__(self, op: str, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        self.op = op
        super().__init__(
            f"{op}: expected {expected}-D operand, got {actual}-D"
        )


class ShapeMismatchError(TensorError):
    """Operand shapes are incompatible for the requested operation."""

    def __init__(self, op: str, lhs: Sequence[int], rhs: Sequence[int]):
        self.op = op
        self.lhs = tuple(lhs)
        self.rhs = tuple(rhs)
        super().__init__(
            f"{op}: incompatible shapes {_fmt_shape(self.lhs)} "
            f"and {_fmt_shape(self.rhs)}"
        )


class IndexOutOfBoundsError(TensorError, IndexError):
    """Element index outside the tensor extents."""

    def __init__(self, index: Sequence[int], sizes: Sequence[int]):
        self.index = tuple(index)
        self.sizes = tuple(sizes)
        super().__init__(
            f"index {self.index} out of bounds for sizes {self.sizes}"
        )


class KernelError(TensorError):
    """Vector kernel lookup or invocation failed."""

    pass


def _fmt_shape(shape: tuple[int, ...]) -> str:
    return "x".join(str(s) for s in shape)
