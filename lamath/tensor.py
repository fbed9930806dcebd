# SPDX-License-Identifier: CC-BY-NC-4.0
# Copyright (c) 2025-2026 fumi-engineer

"""Dense N-dimensional tensor container.

A ``Tensor`` owns one flat numpy buffer plus the metadata needed to read
it: the per-dimension sizes, the index-to-offset ``Order`` and a ``View``.
Higher capabilities (``Vector``, ``Matrix``) are thin wrappers that share
the tensor's buffer; narrowing never copies.

Design notes:
- The buffer is always 1-D, float32 or float64, and exclusively owned.
  The public constructor copies the buffer it is given; only the
  internal ``_wrap`` takes ownership of a freshly allocated one.
- The order strategy is stateless, so ``clone`` re-selects it from the
  layout kind and dimensionality instead of copying it.
- Algebra beyond 2-D is not implemented; N-D tensors support dimension
  introspection and element access only.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Sequence

import numpy as np

from .config import get_config
from .dtype import DType
from .errors import DimensionalityError, IndexOutOfBoundsError
from .order import Order, OrderKind
from .transpose import transpose_rect
from .view import View

if TYPE_CHECKING:
    from .matrix import Matrix
    from .vector import Vector


class Tensor:
    """N-dimensional tensor over a flat, zero-initialized buffer."""

    def __init__(
        self,
        buffer: np.ndarray,
        sizes: Sequence[int],
        kind: OrderKind | None = None,
        view: View | None = None,
    ):
        """Build a tensor over a copy of the flat ``buffer``.

        ``buffer`` must be 1-D, float32 or float64, and hold exactly
        ``prod(sizes)`` elements laid out in the requested order.

        Raises:
            ValueError: wrong rank, length or element type.
        """
        buffer = np.asarray(buffer)
        if not DType.is_supported(buffer.dtype):
            raise ValueError(
                f"unsupported element type {buffer.dtype}; expected float32 or float64"
            )
        self._setup(
            buffer.copy(), sizes, kind, view.copy() if view is not None else None
        )

    @classmethod
    def _wrap(
        cls,
        buffer: np.ndarray,
        sizes: Sequence[int],
        kind: OrderKind | None = None,
        view: View | None = None,
    ) -> Tensor:
        # Takes ownership of a buffer nobody else references
        t = cls.__new__(cls)
        t._setup(buffer, sizes, kind, view)
        return t

    def _setup(
        self,
        buffer: np.ndarray,
        sizes: Sequence[int],
        kind: OrderKind | None,
        view: View | None,
    ) -> None:
        sizes = _check_sizes(sizes)
        if buffer.ndim != 1 or buffer.size != math.prod(sizes):
            raise ValueError(
                f"buffer of {buffer.size} elements does not match sizes {sizes}"
            )
        if kind is None:
            kind = get_config().order
        self._buffer = buffer
        self._sizes = sizes
        self._order = Order.select(kind, len(sizes))
        self._view = view if view is not None else View()
        self._dtype = DType.from_numpy(buffer.dtype)

    # -- construction -------------------------------------------------------

    @classmethod
    def new_tensor(
        cls,
        sizes: Sequence[int],
        kind: OrderKind | None = None,
        dtype: DType | None = None,
    ) -> Tensor:
        """Create a zero-filled tensor with the given per-dimension sizes."""
        sizes = _check_sizes(sizes)
        if dtype is None:
            dtype = get_config().dtype
        buffer = np.zeros(math.prod(sizes), dtype=dtype.to_numpy())
        return cls._wrap(buffer, sizes, kind)

    @classmethod
    def new_matrix(
        cls,
        nr_rows: int,
        nr_cols: int,
        kind: OrderKind | None = None,
        dtype: DType | None = None,
    ) -> Tensor:
        """Create a zero-filled ``nr_rows x nr_cols`` matrix."""
        return cls.new_tensor((nr_rows, nr_cols), kind, dtype)

    @classmethod
    def new_vector(
        cls,
        size: int,
        kind: OrderKind | None = None,
        dtype: DType | None = None,
    ) -> Tensor:
        """Create a zero-filled vector of ``size`` elements."""
        return cls.new_tensor((size,), kind, dtype)

    @classmethod
    def from_numpy(
        cls,
        arr: np.ndarray,
        kind: OrderKind | None = None,
        dtype: DType | None = None,
    ) -> Tensor:
        """Create a tensor holding a copy of ``arr`` in the requested order."""
        arr = np.asarray(arr)
        if arr.ndim == 0:
            raise ValueError("cannot build a tensor from a 0-d array")
        if kind is None:
            kind = get_config().order
        if dtype is None:
            if DType.is_supported(arr.dtype):
                dtype = DType.from_numpy(arr.dtype)
            else:
                dtype = get_config().dtype
        np_order = "F" if kind == OrderKind.COL_MAJOR else "C"
        buffer = np.array(arr.ravel(order=np_order), dtype=dtype.to_numpy())
        return cls._wrap(buffer, arr.shape, kind)

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Sequence[float]],
        kind: OrderKind | None = None,
        dtype: DType | None = None,
    ) -> Tensor:
        """Create a matrix from a sequence of equally long rows."""
        arr = np.asarray(rows, dtype=(dtype or get_config().dtype).to_numpy())
        if arr.ndim != 2:
            raise DimensionalityError("from_rows", 2, arr.ndim)
        return cls.from_numpy(arr, kind, dtype)

    def clone(self) -> Tensor:
        """Deep copy: new buffer, same sizes, view and order kind."""
        return Tensor._wrap(
            self._buffer.copy(), self._sizes, self._order.kind, self._view.copy()
        )

    # -- introspection ------------------------------------------------------

    @property
    def nr_dims(self) -> int:
        """Number of dimensions."""
        return len(self._sizes)

    @property
    def sizes(self) -> tuple[int, ...]:
        """Size of every dimension, in storage order."""
        return self._sizes

    def dim(self, dim_index: int) -> int | None:
        """Size of one dimension, or ``None`` past the last one."""
        if 0 <= dim_index < len(self._sizes):
            return self._sizes[dim_index]
        return None

    @property
    def size(self) -> int:
        """Total number of elements."""
        return self._buffer.size

    @property
    def dtype(self) -> DType:
        return self._dtype

    @property
    def order(self) -> Order:
        """Active index-to-offset strategy."""
        return self._order

    @property
    def kind(self) -> OrderKind:
        return self._order.kind

    @property
    def view(self) -> View:
        return self._view

    def raw(self) -> np.ndarray:
        """Return the flat storage buffer (not a copy)."""
        return self._buffer

    def transpose_storage(self) -> None:
        """Transpose a 2-D tensor's storage in place.

        Swaps the stored sizes and permutes the buffer over its storage grid
        (see ``Order.storage_grid``) with the cycle-leader algorithm.  The
        view is left alone, so the logical matrix also becomes its
        transpose.  Used by ``Matrix.transpose`` for rectangular matrices.
        """
        if self.nr_dims != 2:
            raise DimensionalityError("transpose", 2, self.nr_dims)
        grid_rows, grid_cols = self._order.storage_grid(self._sizes)
        self._sizes = (self._sizes[1], self._sizes[0])
        transpose_rect(self._buffer, grid_rows, grid_cols)

    # -- element access -----------------------------------------------------

    def offset(self, index: Sequence[int]) -> int:
        """Buffer position of a storage ``index`` (the view is not applied)."""
        if get_config().check_bounds:
            self._check_index(index)
        return self._order.offset(index, self._sizes)

    def get_at(self, index: Sequence[int]):
        """Value at a storage index; ignores the transpose view."""
        return self._buffer[self.offset(index)]

    def set_at(self, index: Sequence[int], val: float) -> Tensor:
        """Store ``val`` at a storage index; ignores the transpose view."""
        self._buffer[self.offset(index)] = val
        return self

    def _check_index(self, index: Sequence[int]) -> None:
        if len(index) != len(self._sizes):
            raise IndexOutOfBoundsError(index, self._sizes)
        for i, n in zip(index, self._sizes):
            if not 0 <= i < n:
                raise IndexOutOfBoundsError(index, self._sizes)

    def to_numpy(self) -> np.ndarray:
        """Return a copy shaped like the logical tensor (view applied)."""
        np_order = "F" if self._order.kind == OrderKind.COL_MAJOR else "C"
        arr = self._buffer.reshape(self._sizes, order=np_order)
        if self.nr_dims == 2 and self._view.transposed:
            arr = arr.T
        return arr.copy()

    # -- capabilities -------------------------------------------------------

    def as_vector(self) -> Vector:
        """Narrow to the vector capability (shares the buffer)."""
        from .vector import Vector

        return Vector(self)

    def as_matrix(self) -> Matrix:
        """Narrow to the matrix capability (shares the buffer)."""
        from .matrix import Matrix

        return Matrix(self)

    # -- dunder -------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tensor):
            return NotImplemented
        a, b = self.to_numpy(), other.to_numpy()
        return a.shape == b.shape and bool(np.array_equal(a, b))

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"Tensor(sizes={self._sizes}, dtype={self._dtype.name}, "
            f"order={self._order.name}, transposed={self._view.transposed})"
        )


def _check_sizes(sizes: Sequence[int]) -> tuple[int, ...]:
    sizes = tuple(int(s) for s in sizes)
    if not sizes:
        raise ValueError("a tensor needs at least one dimension")
    if any(s < 0 for s in sizes):
        raise ValueError(f"negative dimension size in {sizes}")
    return sizes


def new_vector(size: int, kind: OrderKind | None = None, dtype: DType | None = None) -> Tensor:
    """Create a zero-filled vector."""
    return Tensor.new_vector(size, kind, dtype)


def new_matrix(
    nr_rows: int, nr_cols: int, kind: OrderKind | None = None, dtype: DType | None = None
) -> Tensor:
    """Create a zero-filled matrix."""
    return Tensor.new_matrix(nr_rows, nr_cols, kind, dtype)


def new_tensor(
    sizes: Sequence[int], kind: OrderKind | None = None, dtype: DType | None = None
) -> Tensor:
    """Create a zero-filled N-dimensional tensor."""
    return Tensor.new_tensor(sizes, kind, dtype)
