# aad_graph/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the scalar output and let gradients grow
# backwards through the graph. These helpers build a throwaway graph, so the
# caller only writes the expression.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Any, Callable, Dict, Union

import numpy as np

from .errors import DerivUninitialized, TensorRankMismatch
from .graph import Graph, NodeIndex
from .tensor import Tensor, zeros_like


def value(graph: Graph, node: NodeIndex) -> Tensor:
    """Evaluate `node` and return its tensor value."""
    return graph.eval_value(node)


def _deriv_or_zero(graph: Graph, node: NodeIndex) -> Tensor:
    # An input the output does not depend on has zero gradient
    try:
        return graph.get_deriv(node)
    except DerivUninitialized:
        return zeros_like(graph.get_value(node))


def _run(graph: Graph, y: NodeIndex) -> None:
    out = graph.eval_value(y)
    if np.ndim(out) != 0:
        raise TensorRankMismatch(actual=np.ndim(out), desired=0)
    graph.eval_deriv(y)


# ----------------------------- single-input grad ----------------------------- #
def grad(build: Callable[[Graph, NodeIndex], NodeIndex],
         x0: Any, *, dtype: Any = None) -> Tensor:
    """
    Gradient of a scalar-output expression y = build(g, x) at x0.

    Example
    -------
    grad(lambda g, x: g.square(x), 3.0) -> 6.0
    """
    g = Graph(dtype=dtype)
    x = g.variable("x", x0)
    y = build(g, x)
    _run(g, y)
    return _deriv_or_zero(g, x)


# ----------------------------- multi-input grads ----------------------------- #
def grads(build: Callable[[Graph, Dict[str, NodeIndex]], NodeIndex],
          inputs: Dict[str, Union[float, np.ndarray]],
          *, dtype: Any = None) -> Dict[str, Tensor]:
    """
    Gradient of a scalar-output expression w.r.t. ALL named inputs, from ONE
    reverse pass.

    Parameters
    ----------
    build   : function (graph, {name: NodeIndex}) -> output NodeIndex
    inputs  : dict {name: numeric}

    Returns
    -------
    dict {name: tensor}  # same key order as `inputs`
    """
    g = Graph(dtype=dtype)
    handles = {k: g.variable(k, v) for k, v in inputs.items()}
    y = build(g, handles)
    _run(g, y)
    return {k: _deriv_or_zero(g, handles[k]) for k in inputs.keys()}
