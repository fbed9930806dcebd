# SPDX-License-Identifier: CC-BY-NC-4.0
# Copyright (c) 2025-2026 fumi-engineer

"""Vector kernels used by the tensor engine.

The engine hands flat buffers to a kernel for the two bulk operations it
does not implement itself: elementwise in-place ``add`` and ``norm``
(sqrt of the sum of squares).  Any kernel honouring that contract can be
registered; two ship with the library:

  - ``numpy``: vectorized, dispatches to numpy's SIMD loops (default)
  - ``scalar``: plain Python loop, the naive double-precision reference
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import numpy as np

from .config import get_config
from .errors import KernelError

if TYPE_CHECKING:
    from numpy.typing import NDArray

logger = logging.getLogger(__name__)


class VectorKernel(ABC):
    """Contract for flat-buffer vector operations."""

    name: str = "abstract"

    @abstractmethod
    def add(self, dst: NDArray, src: NDArray) -> None:
        """Elementwise in-place sum: dst[i] += src[i]."""
        ...

    @abstractmethod
    def sum_sq(self, buf: NDArray) -> float:
        """Sum of squares of all elements."""
        ...

    def norm(self, buf: NDArray) -> float:
        """Euclidean norm: sqrt(sum(buf[i]^2))."""
        return math.sqrt(self.sum_sq(buf))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


def _check_lengths(dst: NDArray, src: NDArray) -> None:
    if dst.size != src.size:
        raise KernelError(
            f"add: buffer lengths differ ({dst.size} vs {src.size})"
        )


class NumpyKernel(VectorKernel):
    """Vectorized kernel backed by numpy ufuncs."""

    name = "numpy"

    def add(self, dst: NDArray, src: NDArray) -> None:
        _check_lengths(dst, src)
        np.add(dst, src, out=dst, casting="unsafe")

    def sum_sq(self, buf: NDArray) -> float:
        # Accumulate in float64 even for float32 buffers
        flat = np.asarray(buf, dtype=np.float64).ravel()
        return float(np.dot(flat, flat))


class ScalarKernel(VectorKernel):
    """Reference kernel: one Python float operation per element."""

    name = "scalar"

    def add(self, dst: NDArray, src: NDArray) -> None:
        _check_lengths(dst, src)
        for i in range(dst.size):
            dst[i] = dst[i] + src[i]

    def sum_sq(self, buf: NDArray) -> float:
        acc = 0.0
        for x in buf:
            x = float(x)
            acc += x * x
        return acc


_registry: dict[str, VectorKernel] = {}


def register_kernel(kernel: VectorKernel, name: str | None = None) -> None:
    """Make ``kernel`` selectable by name (defaults to ``kernel.name``)."""
    key = name or kernel.name
    if key in _registry:
        logger.debug("replacing vector kernel %r", key)
    _registry[key] = kernel


def get_kernel(name: str | None = None) -> VectorKernel:
    """Return a registered kernel; ``None`` means the configured one."""
    if name is None:
        name = get_config().kernel
    try:
        return _registry[name]
    except KeyError:
        raise KernelError(
            f"unknown vector kernel {name!r}; "
            f"available: {', '.join(available_kernels())}"
        ) from None


def available_kernels() -> list[str]:
    """Names of all registered kernels."""
    return sorted(_registry)


register_kernel(NumpyKernel())
register_kernel(ScalarKernel())
