# SPDX-License-Identifier: CC-BY-NC-4.0
# Copyright (c) 2025-2026 fumi-engineer

"""Vector capability: a 1-D tensor."""

from __future__ import annotations

from .capability import Capability
from .kernels import get_kernel


class Vector(Capability):
    """Vector view over a 1-D ``Tensor``."""

    nr_dims_required = 1

    @property
    def size(self) -> int:
        """Vector length."""
        return self._t.sizes[0]

    def get(self, pos: int):
        """Value at position ``pos``."""
        self._check((pos,), self._t.sizes)
        return self._t.raw()[self._t.order.offset((pos,), self._t.sizes)]

    def set(self, pos: int, val: float) -> Vector:
        """Store ``val`` at position ``pos``."""
        self._check((pos,), self._t.sizes)
        self._t.raw()[self._t.order.offset((pos,), self._t.sizes)] = val
        return self

    def norm(self):
        """Length (magnitude) of the vector, in the element type.

        norm(v) = sqrt(sum(v[i]^2))

        The reduction runs in the configured vector kernel; the result is
        returned as a numpy scalar of the vector's dtype.
        """
        scalar = self._t.dtype.to_numpy().type
        return scalar(get_kernel().norm(self._t.raw()))

    def to_list(self) -> list[float]:
        """Elements as Python floats, in position order."""
        return [float(x) for x in self._t.raw()]

    def __len__(self) -> int:
        return self.size

    def __getitem__(self, pos: int):
        return self.get(pos)

    def __setitem__(self, pos: int, val: float) -> None:
        self.set(pos, val)

    def __repr__(self) -> str:
        return f"Vector(size={self.size}, dtype={self._t.dtype.name})"
