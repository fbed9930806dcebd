# SPDX-License-Identifier: CC-BY-NC-4.0
# Copyright (c) 2025-2026 fumi-engineer

"""Capability base class.

A capability is a named set of operations over a ``Tensor`` of a given
dimensionality.  Capabilities hold a reference to the tensor, never a copy,
so several capabilities (or the tensor itself) can work on the same buffer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from .config import get_config
from .errors import DimensionalityError, IndexOutOfBoundsError
from .tensor import Tensor


class Capability(ABC):
    """Base class for Vector and Matrix."""

    #: Dimension count the wrapped tensor must have
    nr_dims_required: int = 0

    def __init__(self, tensor: Tensor):
        if tensor.nr_dims != self.nr_dims_required:
            raise DimensionalityError(
                type(self).__name__, self.nr_dims_required, tensor.nr_dims
            )
        self._t = tensor

    @property
    def tensor(self) -> Tensor:
        """The underlying tensor."""
        return self._t

    @property
    def nr_dims(self) -> int:
        return self._t.nr_dims

    @property
    def sizes(self) -> tuple[int, ...]:
        return self._t.sizes

    def dim(self, dim_index: int) -> int | None:
        return self._t.dim(dim_index)

    def raw(self) -> np.ndarray:
        return self._t.raw()

    def clone(self):
        """Deep copy, narrowed to the same capability."""
        return type(self)(self._t.clone())

    def to_numpy(self) -> np.ndarray:
        return self._t.to_numpy()

    def _check(self, index: tuple[int, ...], extents: tuple[int, ...]) -> None:
        if not get_config().check_bounds:
            return
        for i, n in zip(index, extents):
            if not 0 <= i < n:
                raise IndexOutOfBoundsError(index, extents)

    @abstractmethod
    def get(self, *index: int):
        """Value at a logical index."""
        ...

    @abstractmethod
    def set(self, *args):
        """Store a value at a logical index; returns self for chaining."""
        ...
