"""Tests for the tensor helpers."""

import numpy as np
import pytest

from aad_graph.core.tensor import (
    as_scalar, as_vector, into_tensor, ones_like, publish, reduce_to_shape, scalar, sum_all, vector,
)
from aad_graph.core.errors import TensorRankMismatch


class TestCreation:
    def test_from_scalar(self):
        t = scalar(2.5)
        assert t.ndim == 0
        assert t.dtype == np.float64
        assert as_scalar(t) == 2.5

    def test_from_sequence(self):
        t = vector([1, 2, 3])
        assert t.shape == (3,)
        assert t.dtype == np.float64
        np.testing.assert_allclose(t, [1.0, 2.0, 3.0])

    def test_dtype(self):
        assert into_tensor(1, np.float32).dtype == np.float32

    def test_complex_stays_complex(self):
        t = into_tensor(1 + 2j)
        assert t.dtype.kind == "c"

    def test_rejects_non_numeric(self):
        with pytest.raises(TypeError):
            into_tensor("abc")

    def test_published_read_only(self):
        t = vector([1.0, 2.0])
        with pytest.raises(ValueError):
            t[0] = 5.0

    def test_client_buffer_not_aliased(self):
        src = np.array([1.0, 2.0])
        t = into_tensor(src)
        src[0] = 100.0
        np.testing.assert_allclose(t, [1.0, 2.0])


class TestCast:
    def test_as_scalar_rank_mismatch(self):
        with pytest.raises(TensorRankMismatch) as exc:
            as_scalar(vector([1.0, 2.0]))
        assert exc.value.actual == 1
        assert exc.value.desired == 0

    def test_as_vector(self):
        np.testing.assert_allclose(as_vector(vector([3.0, 4.0])), [3.0, 4.0])
        with pytest.raises(TensorRankMismatch) as exc:
            as_vector(scalar(1.0))
        assert (exc.value.actual, exc.value.desired) == (0, 1)


class TestReduction:
    def test_sum_all(self):
        s = sum_all(vector([1.0, 2.0, 3.0]))
        assert s.ndim == 0
        assert as_scalar(s) == 6.0

    def test_ones_like(self):
        np.testing.assert_allclose(ones_like(vector([5.0, 6.0])), [1.0, 1.0])

    def test_reduce_to_scalar_shape(self):
        g = reduce_to_shape(np.array([1.0, 2.0, 3.0]), ())
        assert g.shape == ()
        assert as_scalar(g) == 6.0

    def test_reduce_stretched_axis(self):
        g = reduce_to_shape(np.ones((2, 3)), (1, 3))
        np.testing.assert_allclose(g, [[2.0, 2.0, 2.0]])

    def test_reduce_same_shape_is_noop(self):
        g = np.ones(3)
        assert reduce_to_shape(g, (3,)) is g

    def test_reduce_spreads_lower_rank(self):
        g = reduce_to_shape(np.array(4.0), (2,))
        np.testing.assert_allclose(g, [4.0, 4.0])

    def test_publish_leaves_caller_buffer_writeable(self):
        buf = np.ones(3)
        t = publish(buf)
        assert not t.flags.writeable
        assert buf.flags.writeable
