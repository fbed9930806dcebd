# SPDX-License-Identifier: CC-BY-NC-4.0
# Copyright (c) 2025-2026 fumi-engineer

"""Tests for the tensor container, vector capability and configuration."""

import math
import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

from lamath import (
    Config,
    DimensionalityError,
    DType,
    IndexOutOfBoundsError,
    Matrix,
    Order,
    OrderKind,
    Tensor,
    Vector,
    get_config,
    new_matrix,
    new_tensor,
    new_vector,
    set_config,
    using_config,
)


# ---------------------------------------------------------------------------
# Tensor
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_new_vector(self):
        t = Tensor.new_vector(10)
        assert t.nr_dims == 1
        assert t.sizes == (10,)
        assert t.size == 10
        assert t.raw().shape == (10,)
        np.testing.assert_array_equal(t.raw(), np.zeros(10))
        assert t.order is Order.ROW_MAJOR_1D

    def test_new_matrix(self):
        t = new_matrix(3, 4)
        assert t.nr_dims == 2
        assert t.sizes == (3, 4)
        assert t.size == 12
        assert np.all(t.raw() == 0.0)
        assert t.order is Order.ROW_MAJOR_2D

    def test_new_tensor(self):
        t = new_tensor([2, 3, 4])
        assert t.nr_dims == 3
        assert t.sizes == (2, 3, 4)
        assert t.size == 24
        assert t.order is Order.ROW_MAJOR_ND

    def test_col_major(self):
        t = new_matrix(2, 5, kind=OrderKind.COL_MAJOR)
        assert t.order is Order.COL_MAJOR_2D
        assert t.kind == OrderKind.COL_MAJOR

    def test_dtype(self):
        assert new_vector(3).dtype == DType.F64
        t = new_vector(3, dtype=DType.F32)
        assert t.dtype == DType.F32
        assert t.raw().dtype == np.float32

    def test_zero_extent(self):
        t = new_matrix(0, 4)
        assert t.size == 0

    def test_invalid_sizes(self):
        with pytest.raises(ValueError):
            new_tensor([])
        with pytest.raises(ValueError):
            new_matrix(-1, 2)

    def test_buffer_length_invariant(self):
        with pytest.raises(ValueError, match="does not match"):
            Tensor(np.zeros(5), (2, 3))

    def test_rejects_integer_buffer(self):
        with pytest.raises(ValueError, match="unsupported element type"):
            Tensor(np.arange(1, 5), (2, 2))

    def test_dtype_from_numpy_rejects_integers(self):
        assert DType.is_supported(np.float32)
        assert not DType.is_supported(np.int64)
        with pytest.raises(ValueError):
            DType.from_numpy(np.int64)

    def test_constructor_copies_buffer(self):
        buf = np.array([1.0, 2.0, 3.0, 4.0])
        a = Tensor(buf, (2, 2))
        b = Tensor(buf, (2, 2))
        buf[0] = 9.0
        a.raw()[1] = 7.0
        assert a.raw()[0] == 1.0
        assert b.raw()[1] == 2.0

    def test_from_numpy_row_major(self):
        arr = np.arange(6.0).reshape(2, 3)
        t = Tensor.from_numpy(arr)
        np.testing.assert_array_equal(t.raw(), [0, 1, 2, 3, 4, 5])
        np.testing.assert_array_equal(t.to_numpy(), arr)

    def test_from_numpy_col_major(self):
        arr = np.arange(6.0).reshape(2, 3)
        t = Tensor.from_numpy(arr, kind=OrderKind.COL_MAJOR)
        np.testing.assert_array_equal(t.raw(), [0, 3, 1, 4, 2, 5])
        np.testing.assert_array_equal(t.to_numpy(), arr)

    def test_from_numpy_copies(self):
        arr = np.ones(4)
        t = Tensor.from_numpy(arr)
        arr[0] = 9.0
        assert t.raw()[0] == 1.0

    def test_from_numpy_int_input(self):
        t = Tensor.from_numpy(np.array([1, 2, 3]))
        assert t.dtype == DType.F64

    def test_from_rows(self):
        t = Tensor.from_rows([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]])
        assert t.sizes == (3, 2)
        assert t.as_matrix().get(2, 1) == 6.0

    def test_from_rows_rejects_flat(self):
        with pytest.raises(DimensionalityError):
            Tensor.from_rows([1.0, 2.0])

    def test_from_numpy_0d(self):
        with pytest.raises(ValueError):
            Tensor.from_numpy(np.float64(1.0))


class TestIntrospection:
    def test_dim(self):
        t = new_vector(2)
        assert t.dim(0) == 2
        assert t.dim(1) is None

    def test_dim_nd(self):
        t = new_tensor((2, 3, 4))
        assert [t.dim(i) for i in range(4)] == [2, 3, 4, None]

    def test_repr(self):
        r = repr(new_matrix(2, 3))
        assert "sizes=(2, 3)" in r
        assert "ROW_MAJOR_2D" in r


class TestElementAccess:
    def test_get_set_at(self):
        t = new_tensor((2, 3, 4))
        t.set_at((1, 2, 3), 7.5)
        assert t.get_at((1, 2, 3)) == 7.5
        assert t.raw()[23] == 7.5

    def test_get_set_at_col_major(self):
        t = new_tensor((2, 3, 4), kind=OrderKind.COL_MAJOR)
        t.set_at((1, 0, 0), 1.0).set_at((0, 1, 0), 2.0)
        assert t.raw()[1] == 1.0
        assert t.raw()[2] == 2.0
        assert t.to_numpy()[0, 1, 0] == 2.0

    def test_out_of_bounds(self):
        t = new_tensor((2, 3, 4))
        with pytest.raises(IndexOutOfBoundsError):
            t.get_at((2, 0, 0))
        with pytest.raises(IndexOutOfBoundsError):
            t.get_at((0, 0))

    def test_out_of_bounds_is_index_error(self):
        with pytest.raises(IndexError):
            new_vector(3).get_at((3,))


class TestClone:
    def test_clone_is_independent(self):
        t1 = new_matrix(2, 3)
        t1.set_at((0, 0), 1.0)
        t2 = t1.clone()
        t1.set_at((0, 0), 99.0)
        assert t2.get_at((0, 0)) == 1.0

    def test_clone_copies_metadata(self):
        t1 = new_matrix(2, 3, kind=OrderKind.COL_MAJOR, dtype=DType.F32)
        t1.as_matrix().transpose_view()
        t2 = t1.clone()
        assert t2.sizes == (2, 3)
        assert t2.order is Order.COL_MAJOR_2D
        assert t2.dtype == DType.F32
        assert t2.view.transposed is True
        assert t2.view is not t1.view

    def test_equality(self):
        a = Tensor.from_rows([[1.0, 2.0], [3.0, 4.0]])
        b = Tensor.from_rows([[1.0, 2.0], [3.0, 4.0]], kind=OrderKind.COL_MAJOR)
        assert a == b
        b.as_matrix().set(0, 0, 0.0)
        assert a != b


class TestNarrowing:
    def test_as_vector(self):
        t = new_vector(4)
        v = t.as_vector()
        assert isinstance(v, Vector)
        assert v.tensor is t

    def test_as_matrix_shares_buffer(self):
        t = new_matrix(2, 2)
        m = t.as_matrix()
        assert isinstance(m, Matrix)
        m.set(1, 1, 3.0)
        assert t.raw()[3] == 3.0

    def test_wrong_dimensionality(self):
        with pytest.raises(DimensionalityError) as exc:
            new_vector(4).as_matrix()
        assert exc.value.expected == 2
        assert exc.value.actual == 1
        with pytest.raises(DimensionalityError):
            new_matrix(2, 2).as_vector()


# ---------------------------------------------------------------------------
# Vector
# ---------------------------------------------------------------------------


class TestVector:
    def test_get_set(self):
        v = Tensor.from_numpy(np.array([1.0, 2.0, 3.0, 4.0, 5.0])).as_vector()
        assert v.get(0) == 1.0
        assert v.get(4) == 5.0
        v.set(1, 2.2)
        assert v.get(1) == 2.2
        assert v[1] == 2.2
        v[2] = 3.3
        assert v.to_list() == [1.0, 2.2, 3.3, 4.0, 5.0]

    def test_fresh_vector_is_zero(self):
        v = new_vector(5).as_vector()
        assert v.get(1) == 0.0
        v.set(1, 7.7)
        assert v.get(1) == 7.7

    def test_size(self):
        v = new_vector(10).as_vector()
        assert v.size == 10
        assert len(v) == 10

    def test_norm_pythagorean(self):
        v = new_vector(2).as_vector()
        v.set(0, 3.0).set(1, 4.0)
        assert v.norm() == pytest.approx(5.0)

    def test_norm(self):
        v = Tensor.from_numpy(np.array([1.1, 2.2, 3.3])).as_vector()
        expected = math.sqrt(1.1 * 1.1 + 2.2 * 2.2 + 3.3 * 3.3)
        assert v.norm() == pytest.approx(expected, rel=1e-15)

    def test_norm_keeps_element_type(self):
        v = Tensor.from_numpy(np.array([3.0, 4.0], dtype=np.float32)).as_vector()
        n = v.norm()
        assert isinstance(n, np.float32)
        assert n == np.float32(5.0)
        assert isinstance(new_vector(2, dtype=DType.F64).as_vector().norm(), np.float64)

    def test_norm_reference_kernel(self):
        v = Tensor.from_numpy(np.array([1.1, 2.2, 3.3])).as_vector()
        with using_config(Config.reference()):
            ref = v.norm()
        assert v.norm() == pytest.approx(ref, rel=1e-15)

    def test_out_of_bounds(self):
        v = new_vector(3).as_vector()
        with pytest.raises(IndexOutOfBoundsError):
            v.get(3)
        with pytest.raises(IndexOutOfBoundsError):
            v.set(-1, 0.0)

    def test_clone(self):
        v = new_vector(3).as_vector()
        w = v.clone()
        assert isinstance(w, Vector)
        w.set(0, 1.0)
        assert v.get(0) == 0.0


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


class TestConfig:
    def test_default(self):
        cfg = Config.default()
        assert cfg.check_bounds is True
        assert cfg.kernel == "numpy"
        assert cfg.dtype == DType.F64
        assert cfg.order == OrderKind.ROW_MAJOR

    def test_presets(self):
        assert Config.fast().check_bounds is False
        assert Config.reference().kernel == "scalar"

    def test_with_options(self):
        cfg = Config.default().with_options(dtype=DType.F32)
        assert cfg.dtype == DType.F32
        assert Config.default().dtype == DType.F64

    def test_using_config_restores(self):
        before = get_config()
        with using_config(Config(order=OrderKind.COL_MAJOR)):
            assert new_matrix(2, 2).kind == OrderKind.COL_MAJOR
        assert get_config() is before
        assert new_matrix(2, 2).kind == OrderKind.ROW_MAJOR

    def test_set_config_returns_previous(self):
        cfg = Config(dtype=DType.F32)
        previous = set_config(cfg)
        try:
            assert new_vector(2).dtype == DType.F32
        finally:
            assert set_config(previous) is cfg

    def test_unchecked_access(self):
        m = Tensor.from_rows([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]).as_matrix()
        with using_config(Config.fast()):
            # In-range offset: the caller's contract, not validated
            assert m.get(0, 4) == m.get(1, 1)
            with pytest.raises(IndexError):
                m.get(5, 5)
        with pytest.raises(IndexOutOfBoundsError):
            m.get(0, 4)
