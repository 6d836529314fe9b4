# aad_graph/core/graph.py
"""
Calculation graph.

The graph is an append-only arena: nodes live in a list and are referred to by
their integer index, edges are only ever added from existing nodes to the node
being created. Every edge therefore points from a lower index to a higher one,
so the graph is acyclic by construction.

Typical use:

    g = Graph()
    x = g.scalar("x", 1.0)
    y = g.scalar("y", 3.0)
    z = g.sub(g.add(x, y), g.mul(g.mul(g.constant_scalar(2.0), x), y))
    g.eval_value(z)      # -> -2.0
    g.eval_deriv(z)
    g.get_deriv(x)       # -> -5.0
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from .config import DEFAULT_CONFIG, GraphConfig
from .debug import dbg, enable
from .errors import DerivUninitialized, DuplicatedName, NodeTypeError, UndefinedName, ValueUninitialized
from .node import Node, NodeKind
from .tensor import Tensor, into_tensor
from .tensor import scalar as scalar_tensor, vector as vector_tensor
from ..ops.operator import Binary, Unary

NodeIndex = int

log = dbg("graph")


class Graph:
    """
    Node/edge storage plus the name -> index namespace of variables.

    Parameters
    ----------
    config : GraphConfig, optional
        Scalar dtype and debug switch. Defaults to float64, quiet.
    dtype : numpy dtype, optional
        Shortcut overriding `config.dtype`.
    """

    def __init__(self, config: Optional[GraphConfig] = None, dtype: Any = None):
        if config is None:
            config = DEFAULT_CONFIG
        if dtype is not None:
            config = GraphConfig(dtype=dtype, debug=config.debug)
        self.config = config
        if config.debug:
            enable(True)

        self.nodes: List[Node] = []
        self.namespace: Dict[str, NodeIndex] = {}
        self._edges: List[Tuple[NodeIndex, NodeIndex]] = []
        self._consumers: List[List[NodeIndex]] = []

    # ---------------- storage ---------------- #
    def _add_node(self, node: Node) -> NodeIndex:
        self.nodes.append(node)
        self._consumers.append([])
        idx = len(self.nodes) - 1
        log.debug("add node %d: %s", idx, node.tag)
        return idx

    def _add_edge(self, src: NodeIndex, dst: NodeIndex) -> None:
        self._check(src)
        self.nodes[dst].inputs.append(src)
        self._consumers[src].append(dst)
        self._edges.append((src, dst))

    def _check(self, index: NodeIndex) -> Node:
        # Handles are only produced by this graph; anything else is a caller bug
        if not isinstance(index, (int, np.integer)) or not 0 <= index < len(self.nodes):
            raise IndexError(f"node index {index!r} is not in the graph")
        return self.nodes[index]

    def _to_tensor(self, value: Any) -> Tensor:
        return into_tensor(value, self.config.dtype)

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, key: Union[NodeIndex, str]) -> Node:
        """Read access by index or by variable name."""
        if isinstance(key, str):
            key = self.get_index(key)
        return self._check(key)

    def __repr__(self):
        return f"Graph(nodes={len(self.nodes)}, edges={len(self._edges)}, names={sorted(self.namespace)})"

    def node_indices(self) -> Iterator[NodeIndex]:
        return iter(range(len(self.nodes)))

    def edges(self) -> List[Tuple[NodeIndex, NodeIndex]]:
        """All (operand, consumer) edges in connection order."""
        return list(self._edges)

    def operands(self, index: NodeIndex) -> Tuple[NodeIndex, ...]:
        """
        Operand indices of an operator node, lhs first.

        The most recently connected incoming edge is the right-hand operand.
        """
        node = self._check(index)
        if node.kind is NodeKind.UNARY:
            if len(node.inputs) != 1:
                raise RuntimeError(f"unary node {index} has {len(node.inputs)} operands")
            return (node.inputs[0],)
        if node.kind is NodeKind.BINARY:
            if len(node.inputs) != 2:
                raise RuntimeError(f"binary node {index} has {len(node.inputs)} operands")
            rhs = node.inputs[-1]
            lhs = node.inputs[0]
            return (lhs, rhs)
        return ()

    def consumers(self, index: NodeIndex) -> Tuple[NodeIndex, ...]:
        self._check(index)
        return tuple(self._consumers[index])

    # ---------------- leaves ---------------- #
    def constant(self, value: Any) -> NodeIndex:
        return self._add_node(Node.constant(self._to_tensor(value)))

    def constant_scalar(self, value: Any) -> NodeIndex:
        return self._add_node(Node.constant(scalar_tensor(value, self.config.dtype)))

    def constant_vector(self, value: Sequence[Any]) -> NodeIndex:
        return self._add_node(Node.constant(vector_tensor(value, self.config.dtype)))

    def empty_variable(self, name: str) -> NodeIndex:
        """Create a new variable without a value and register its name."""
        if name in self.namespace:
            raise DuplicatedName(name)
        idx = self._add_node(Node.variable())
        self.namespace[name] = idx
        return idx

    def variable(self, name: str, value: Any) -> NodeIndex:
        """Create a new variable holding `value`."""
        value = self._to_tensor(value)
        var = self.empty_variable(name)
        self.set_value(var, value)
        return var

    def scalar(self, name: str, value: Any) -> NodeIndex:
        """Create a new rank-0 variable."""
        value = scalar_tensor(value, self.config.dtype)
        var = self.empty_variable(name)
        self.set_value(var, value)
        return var

    def vector(self, name: str, value: Sequence[Any]) -> NodeIndex:
        """Create a new rank-1 variable."""
        value = vector_tensor(value, self.config.dtype)
        var = self.empty_variable(name)
        self.set_value(var, value)
        return var

    def set_name(self, node: NodeIndex, name: str) -> Optional[NodeIndex]:
        """Bind `name` to any node; returns the node previously bound to it."""
        self._check(node)
        prev = self.namespace.get(name)
        self.namespace[name] = node
        return prev

    def get_index(self, name: str) -> NodeIndex:
        try:
            return self.namespace[name]
        except KeyError:
            raise UndefinedName(name) from None

    def set_value(self, node: NodeIndex, value: Any) -> None:
        """
        Assign a value to a variable node. Operator and constant nodes raise
        NodeTypeError and are left unchanged.

        Cached values of every operator depending on `node` are dropped so the
        next evaluation sees the new value.
        """
        n = self._check(node)
        if not n.is_variable():
            raise NodeTypeError(node)
        n.value = self._to_tensor(value)
        from .engine import invalidate
        invalidate(self, node)

    # ---------------- accessors ---------------- #
    def get_value(self, node: NodeIndex) -> Tensor:
        value = self._check(node).value
        if value is None:
            raise ValueUninitialized(node)
        return value

    def get_deriv(self, node: NodeIndex) -> Tensor:
        deriv = self._check(node).deriv
        if deriv is None:
            raise DerivUninitialized(node)
        return deriv

    # ---------------- evaluation ---------------- #
    def eval_value(self, node: NodeIndex) -> Tensor:
        """Evaluate (and cache) the value of `node`; see engine.eval_value."""
        from .engine import eval_value
        return eval_value(self, node)

    def eval_deriv(self, node: NodeIndex) -> None:
        """Differentiate `node` w.r.t. every ancestor; see engine.eval_deriv."""
        from .engine import eval_deriv
        eval_deriv(self, node)

    # ---------------- operators ---------------- #
    def _unary(self, op: Unary, arg: NodeIndex) -> NodeIndex:
        self._check(arg)
        n = self._add_node(Node.operator(op))
        self._add_edge(arg, n)
        return n

    def _binary(self, op: Binary, lhs: NodeIndex, rhs: NodeIndex) -> NodeIndex:
        self._check(lhs)
        self._check(rhs)
        p = self._add_node(Node.operator(op))
        # lhs first: operands() reads the last connected edge as rhs
        self._add_edge(lhs, p)
        self._add_edge(rhs, p)
        return p

    def add(self, lhs: NodeIndex, rhs: NodeIndex) -> NodeIndex: return self._binary(Binary.ADD, lhs, rhs)
    def mul(self, lhs: NodeIndex, rhs: NodeIndex) -> NodeIndex: return self._binary(Binary.MUL, lhs, rhs)
    def div(self, lhs: NodeIndex, rhs: NodeIndex) -> NodeIndex: return self._binary(Binary.DIV, lhs, rhs)
    def dot(self, lhs: NodeIndex, rhs: NodeIndex) -> NodeIndex: return self._binary(Binary.DOT, lhs, rhs)

    def neg(self, arg: NodeIndex) -> NodeIndex: return self._unary(Unary.NEG, arg)
    def square(self, arg: NodeIndex) -> NodeIndex: return self._unary(Unary.SQUARE, arg)
    def exp(self, arg: NodeIndex) -> NodeIndex: return self._unary(Unary.EXP, arg)
    def ln(self, arg: NodeIndex) -> NodeIndex: return self._unary(Unary.LN, arg)
    def sin(self, arg: NodeIndex) -> NodeIndex: return self._unary(Unary.SIN, arg)
    def cos(self, arg: NodeIndex) -> NodeIndex: return self._unary(Unary.COS, arg)
    def tan(self, arg: NodeIndex) -> NodeIndex: return self._unary(Unary.TAN, arg)
    def sinh(self, arg: NodeIndex) -> NodeIndex: return self._unary(Unary.SINH, arg)
    def cosh(self, arg: NodeIndex) -> NodeIndex: return self._unary(Unary.COSH, arg)
    def tanh(self, arg: NodeIndex) -> NodeIndex: return self._unary(Unary.TANH, arg)

    def sub(self, lhs: NodeIndex, rhs: NodeIndex) -> NodeIndex:
        """lhs - rhs, built as add(lhs, neg(rhs)); adds an intermediate neg node."""
        m_rhs = self.neg(rhs)
        return self.add(lhs, m_rhs)
