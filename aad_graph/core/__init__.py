# aad_graph/core/__init__.py

"""
Core public API for the graph engine.

Exports:
    Graph          : append-only calculation graph with named variables.
    GraphConfig    : scalar dtype / debug settings of a Graph.
    eval_value     : memoized forward evaluation of a node.
    eval_deriv     : one reverse pass populating every ancestor's gradient.
    zero_derivs    : clear all gradients on a graph.
    grad, grads    : convenience drivers on a throwaway graph.
    value          : evaluate a node and return its tensor.
"""

from .config import GraphConfig
from .graph import Graph, NodeIndex
from .node import Node, NodeKind
from .engine import eval_value, eval_deriv, zero_derivs
from .seeds import grad, grads, value

__all__ = [
    "Graph", "NodeIndex", "GraphConfig",
    "Node", "NodeKind",
    "eval_value", "eval_deriv", "zero_derivs",
    "grad", "grads", "value",
]
