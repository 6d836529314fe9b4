# aad_graph/ops/operator.py
"""
Closed operator catalog.

`Unary` and `Binary` are enums over every operator kind the graph knows. Each
member dispatches to a value rule and a local derivative rule; adding an
operator means adding a member and its pair of rules to the table below.
"""

from __future__ import annotations

from enum import Enum
from typing import Tuple

import numpy as np

from ..core.tensor import Tensor, publish, reduce_to_shape
from . import arithmetic as ar
from . import transcendental as tr


class Unary(Enum):
    NEG = "neg"
    SQUARE = "square"
    EXP = "exp"
    LN = "ln"
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    SINH = "sinh"
    COSH = "cosh"
    TANH = "tanh"

    def eval_value(self, arg: Tensor) -> Tensor:
        """Evaluate the result value of the operator."""
        f, _ = _UNARY_RULES[self]
        return publish(f(arg))

    def eval_deriv(self, arg: Tensor, deriv: Tensor) -> Tensor:
        """
        Evaluate the local derivative of the operator multiplied by the
        derivative received from the consumer side of the graph.
        """
        _, df = _UNARY_RULES[self]
        return publish(df(arg, deriv))


class Binary(Enum):
    ADD = "add"
    MUL = "mul"
    DIV = "div"
    DOT = "dot"

    def eval_value(self, lhs: Tensor, rhs: Tensor) -> Tensor:
        """Evaluate the result value of the operator."""
        f, _ = _BINARY_RULES[self]
        return publish(f(lhs, rhs))

    def eval_deriv(self, lhs: Tensor, rhs: Tensor, deriv: Tensor) -> Tuple[Tensor, Tensor]:
        """
        Return (∂f/∂lhs · deriv, ∂f/∂rhs · deriv), each summed back to the shape
        of its operand when the operator broadcast a scalar against a tensor.
        """
        _, df = _BINARY_RULES[self]
        l_der, r_der = df(lhs, rhs, deriv)
        return (reduce_to_shape(publish(l_der), np.shape(lhs)),
                reduce_to_shape(publish(r_der), np.shape(rhs)))


_UNARY_RULES = {
    Unary.NEG:    (ar.neg_value, ar.neg_deriv),
    Unary.SQUARE: (ar.square_value, ar.square_deriv),
    Unary.EXP:    (tr.exp_value, tr.exp_deriv),
    Unary.LN:     (tr.ln_value, tr.ln_deriv),
    Unary.SIN:    (tr.sin_value, tr.sin_deriv),
    Unary.COS:    (tr.cos_value, tr.cos_deriv),
    Unary.TAN:    (tr.tan_value, tr.tan_deriv),
    Unary.SINH:   (tr.sinh_value, tr.sinh_deriv),
    Unary.COSH:   (tr.cosh_value, tr.cosh_deriv),
    Unary.TANH:   (tr.tanh_value, tr.tanh_deriv),
}

_BINARY_RULES = {
    Binary.ADD: (ar.add_value, ar.add_deriv),
    Binary.MUL: (ar.mul_value, ar.mul_deriv),
    Binary.DIV: (ar.div_value, ar.div_deriv),
    Binary.DOT: (ar.dot_value, ar.dot_deriv),
}
