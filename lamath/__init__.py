# SPDX-License-Identifier: CC-BY-NC-SA-4.0
# Copyright (c) 2025-2026 fumi-engineer

"""Dense N-dimensional tensor engine.

Pure Python + NumPy.  A tensor owns one flat buffer; capabilities narrow
it to a vector or a matrix without copying.

Key components:
  - Order: row-/column-major index-to-offset strategies (order.py)
  - View: O(1) transpose-by-view flag (view.py)
  - Tensor: buffer owner, constructors, N-D introspection (tensor.py)
  - Vector: get/set/norm (vector.py)
  - Matrix: get/set, transpose view, in-place transpose, add/scale/mul,
    debug formatting (matrix.py, transpose.py)
  - Kernels: pluggable flat-buffer add/norm (kernels.py)
  - Config: bounds checking, kernel and default layout (config.py)
"""

from .dtype import DType
from .order import Order, OrderKind
from .view import View
from .config import Config, get_config, set_config, using_config
from .errors import (
    TensorError,
    DimensionalityError,
    ShapeMismatchError,
    IndexOutOfBoundsError,
    KernelError,
)
from .tensor import Tensor, new_vector, new_matrix, new_tensor
from .capability import Capability
from .vector import Vector
from .matrix import Matrix
from .transpose import transpose_square, transpose_rect, cycle_lengths
from .kernels import (
    VectorKernel,
    NumpyKernel,
    ScalarKernel,
    register_kernel,
    get_kernel,
    available_kernels,
)

__version__ = "0.1.0"

__all__ = [
    "DType",
    "Order",
    "OrderKind",
    "View",
    "Config",
    "get_config",
    "set_config",
    "using_config",
    "TensorError",
    "DimensionalityError",
    "ShapeMismatchError",
    "IndexOutOfBoundsError",
    "KernelError",
    "Tensor",
    "new_vector",
    "new_matrix",
    "new_tensor",
    "Capability",
    "Vector",
    "Matrix",
    "transpose_square",
    "transpose_rect",
    "cycle_lengths",
    "VectorKernel",
    "NumpyKernel",
    "ScalarKernel",
    "register_kernel",
    "get_kernel",
    "available_kernels",
]
