# SPDX-License-Identifier: CC-BY-4.0
# Copyright (c) 2025-2026 fumi-engineer

"""Runtime configuration for the tensor engine.

A single process-wide ``Config`` decides the defaults used by the tensor
constructors (element type, storage order) and by the capabilities
(bounds checking, which vector kernel runs ``add``/``norm``).
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Iterator

from .order import OrderKind
from .dtype import DType


@dataclass(frozen=True)
class Config:
    """Engine configuration.

    check_bounds: validate every element index before touching the buffer.
        With it off, callers must pre-validate indices; an out-of-range
        offset still surfaces as numpy's ``IndexError`` but a wrong
        in-range index (e.g. col >= nr_cols on row 0) silently aliases
        another element.
    kernel: name of the registered vector kernel (see ``kernels``).
    dtype: default element type for new tensors.
    order: default storage order for new tensors.
    """

    check_bounds: bool = True
    kernel: str = "numpy"
    dtype: DType = DType.F64
    order: OrderKind = OrderKind.ROW_MAJOR

    @classmethod
    def default(cls) -> Config:
        """Return the default configuration."""
        return cls()

    @classmethod
    def fast(cls) -> Config:
        """Return a configuration with bounds checks disabled."""
        return cls(check_bounds=False)

    @classmethod
    def reference(cls) -> Config:
        """Return a configuration running the scalar reference kernel."""
        return cls(kernel="scalar")

    def with_options(self, **changes) -> Config:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


_active = Config.default()


def get_config() -> Config:
    """Return the active configuration."""
    return _active


def set_config(config: Config) -> Config:
    """Install ``config`` as the active configuration, returning the old one."""
    global _active
    previous = _active
    _active = config
    return previous


@contextmanager
def using_config(config: Config) -> Iterator[Config]:
    """Temporarily activate ``config`` for the duration of a ``with`` block."""
    previous = set_config(config)
    try:
        yield config
    finally:
        set_config(previous)
