"""Tests for graph construction, the namespace and the accessors."""

import dataclasses

import numpy as np
import pytest

from aad_graph import (
    DerivUninitialized, DuplicatedName, Graph, GraphConfig, NodeKind, NodeTypeError,
    UndefinedName, ValueUninitialized, as_scalar,
)


class TestConstruction:
    def test_constant_value_is_set(self):
        g = Graph()
        c = g.constant_scalar(4.0)
        assert as_scalar(g.get_value(c)) == 4.0
        assert g[c].kind is NodeKind.CONSTANT

    def test_constant_eval_is_stable(self):
        g = Graph()
        c = g.constant([1.0, 2.0])
        for _ in range(3):
            np.testing.assert_allclose(g.eval_value(c), [1.0, 2.0])

    def test_empty_variable(self):
        g = Graph()
        x = g.empty_variable("x")
        assert g[x].kind is NodeKind.VARIABLE
        assert g.get_index("x") == x
        with pytest.raises(ValueUninitialized) as exc:
            g.get_value(x)
        assert exc.value.index == x

    def test_variable_with_value(self):
        g = Graph()
        x = g.variable("x", 3.0)
        assert as_scalar(g.get_value(x)) == 3.0
        v = g.vector("v", [1.0, 2.0])
        np.testing.assert_allclose(g.get_value(v), [1.0, 2.0])

    def test_duplicated_name(self):
        g = Graph()
        x = g.scalar("x", 1.0)
        with pytest.raises(DuplicatedName) as exc:
            g.scalar("x", 2.0)
        assert exc.value.name == "x"
        assert g.get_index("x") == x
        assert as_scalar(g.get_value(x)) == 1.0
        assert len(g) == 1

    def test_undefined_name(self):
        g = Graph()
        with pytest.raises(UndefinedName) as exc:
            g.get_index("nope")
        assert exc.value.name == "nope"

    def test_lookup_by_name(self):
        g = Graph()
        x = g.scalar("x", 1.0)
        assert g["x"] is g[x]

    def test_set_name_on_operator(self):
        g = Graph()
        x = g.scalar("x", 1.0)
        y = g.square(x)
        assert g.set_name(y, "y") is None
        assert g.get_index("y") == y

    def test_unknown_index(self):
        g = Graph()
        with pytest.raises(IndexError):
            g.neg(5)

    def test_dtype_config(self):
        g = Graph(GraphConfig(dtype=np.float32))
        x = g.scalar("x", 1.0)
        assert g.get_value(x).dtype == np.float32
        gc = Graph(dtype=np.complex128)
        assert gc.get_value(gc.constant_scalar(1.0)).dtype == np.complex128

    def test_config_rejects_integer_dtype(self):
        with pytest.raises(TypeError):
            GraphConfig(dtype=np.int64)

    def test_config_not_shared_between_graphs(self):
        g1, g2 = Graph(), Graph()
        with pytest.raises(dataclasses.FrozenInstanceError):
            g1.config.dtype = np.float32
        assert g2.config.dtype == np.float64


class TestEdges:
    def test_operand_order(self):
        g = Graph()
        a = g.scalar("a", 1.0)
        b = g.scalar("b", 2.0)
        q = g.div(b, a)
        assert g.operands(q) == (b, a)
        assert g.edges() == [(b, q), (a, q)]
        assert g.consumers(a) == (q,)

    def test_same_operand_twice(self):
        g = Graph()
        x = g.scalar("x", 3.0)
        y = g.mul(x, x)
        assert g.operands(y) == (x, x)
        assert as_scalar(g.eval_value(y)) == 9.0
        g.eval_deriv(y)
        assert as_scalar(g.get_deriv(x)) == pytest.approx(6.0)

    def test_sub_adds_negation_node(self):
        g = Graph()
        x = g.scalar("x", 5.0)
        y = g.scalar("y", 2.0)
        n = len(g)
        z = g.sub(x, y)
        assert len(g) == n + 2
        lhs, rhs = g.operands(z)
        assert lhs == x
        assert g[rhs].tag == "neg"
        assert as_scalar(g.eval_value(z)) == 3.0

    def test_leaves_have_no_operands(self):
        g = Graph()
        assert g.operands(g.constant_scalar(1.0)) == ()

    def test_edges_point_forward(self):
        g = Graph()
        x = g.scalar("x", 1.0)
        y = g.exp(g.sin(x))
        g.add(y, x)
        assert all(src < dst for src, dst in g.edges())


class TestSetValue:
    def test_set_value_on_operator_fails(self):
        g = Graph()
        x = g.scalar("x", 1.0)
        y = g.scalar("y", 2.0)
        z = g.add(x, y)
        before = g.eval_value(z)
        with pytest.raises(NodeTypeError) as exc:
            g.set_value(z, 10.0)
        assert exc.value.index == z
        assert g.get_value(z) is before

    def test_set_value_on_constant_fails(self):
        g = Graph()
        c = g.constant_scalar(1.0)
        with pytest.raises(NodeTypeError):
            g.set_value(c, 2.0)
        assert as_scalar(g.get_value(c)) == 1.0

    def test_set_value_on_empty_variable(self):
        g = Graph()
        x = g.empty_variable("x")
        g.set_value(x, 7.0)
        assert as_scalar(g.eval_value(x)) == 7.0


class TestAccessors:
    def test_deriv_before_pass(self):
        g = Graph()
        x = g.scalar("x", 1.0)
        with pytest.raises(DerivUninitialized) as exc:
            g.get_deriv(x)
        assert exc.value.index == x

    def test_operator_value_before_eval(self):
        g = Graph()
        x = g.scalar("x", 1.0)
        y = g.exp(x)
        with pytest.raises(ValueUninitialized):
            g.get_value(y)
