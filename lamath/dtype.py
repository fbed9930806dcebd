# SPDX-License-Identifier: CC-BY-NC-4.0
# Copyright (c) 2025-2026 fumi-engineer

"""Element types supported by the tensor engine."""

from __future__ import annotations

from enum import Enum

import numpy as np


class DType(Enum):
    """Supported floating-point element types.

    Maps our enum variants to numpy dtypes.  Only IEEE-754 binary32 and
    binary64 are offered; integer element types are out of scope because
    ``norm`` and ``scale`` need a float result type.
    """

    F32 = "float32"
    F64 = "float64"

    def to_numpy(self) -> np.dtype:
        """Convert to numpy dtype."""
        return np.dtype(self.value)

    @classmethod
    def from_numpy(cls, dtype: np.dtype) -> DType:
        """Map a numpy dtype back to a DType.

        Raises:
            ValueError: dtype is neither float32 nor float64.
        """
        dtype = np.dtype(dtype)
        if dtype == np.float32:
            return cls.F32
        if dtype == np.float64:
            return cls.F64
        raise ValueError(f"unsupported element type {dtype}; expected float32 or float64")

    @classmethod
    def is_supported(cls, dtype: np.dtype) -> bool:
        """True if ``dtype`` maps to a DType."""
        return np.dtype(dtype) in (np.float32, np.float64)
