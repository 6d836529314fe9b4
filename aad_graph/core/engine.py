# aad_graph/core/engine.py
"""
Forward evaluation and reverse-mode differentiation over a Graph.

Both passes walk the graph with an explicit stack instead of Python recursion,
so the depth of a graph is not limited by the interpreter's recursion limit.
The visiting order is the one of the natural recursion: operands are evaluated
lhs before rhs, and the backward pass accumulates into a node before it
descends into that node's operands.
"""

from __future__ import annotations

from typing import List, Tuple

from .debug import dbg
from .errors import ValueUninitialized
from .node import NodeKind
from .tensor import Tensor, ones_like, publish

log = dbg("engine")


def eval_value(graph, node: int) -> Tensor:
    """
    Return the value of `node`, computing and caching it if necessary.

    - Variable : cached value, or ValueUninitialized if never assigned.
    - Constant : cached value.
    - Operator : cached value if present; otherwise evaluate the operands
                 (lhs first), apply the operator's value rule and cache.

    A failing operand aborts the evaluation; nodes above it stay uncached.
    """
    target = graph[node]
    if target.value is not None:
        log.debug("cache hit %d (%s)", node, target.tag)
        return target.value

    stack: List[int] = [node]
    while stack:
        idx = stack[-1]
        n = graph.nodes[idx]
        if n.value is not None:
            stack.pop()
            continue
        if n.kind is NodeKind.VARIABLE:
            raise ValueUninitialized(idx)
        if n.kind is NodeKind.CONSTANT:
            raise RuntimeError(f"constant node {idx} has no value")

        args = graph.operands(idx)
        pending = [a for a in args if graph.nodes[a].value is None]
        if pending:
            # reversed so the lhs operand is resolved first
            stack.extend(reversed(pending))
            continue

        values = [graph.nodes[a].value for a in args]
        n.value = n.op.eval_value(*values)
        log.debug("computed %d (%s)", idx, n.tag)
        stack.pop()

    return target.value


def zero_derivs(graph) -> None:
    """Reset the gradient of every node on the graph."""
    for n in graph.nodes:
        n.deriv = None


def eval_deriv(graph, output: int) -> None:
    """
    Run one reverse pass from `output`.

    The output must have been evaluated (its value shapes the seed). Every
    node's gradient is cleared, the output is seeded with ones, and each
    incoming edge carries its own partial contribution down to the leaves:
        node.deriv += incoming
        operand gets op.eval_deriv(operand values, incoming)
    A node reachable through several paths ends up with the sum over all of
    them. Nodes not reachable from `output` keep no gradient.
    """
    root = graph[output]
    if root.value is None:
        raise ValueUninitialized(output)

    zero_derivs(graph)

    stack: List[Tuple[int, Tensor]] = [(output, ones_like(root.value))]
    visits = 0
    while stack:
        idx, der = stack.pop()
        n = graph.nodes[idx]
        visits += 1

        # Accumulate
        n.deriv = der if n.deriv is None else publish(n.deriv + der)

        if n.kind is NodeKind.UNARY:
            (arg,) = graph.operands(idx)
            child_der = n.op.eval_deriv(_value_of(graph, arg), der)
            stack.append((arg, child_der))
        elif n.kind is NodeKind.BINARY:
            lhs, rhs = graph.operands(idx)
            l_der, r_der = n.op.eval_deriv(_value_of(graph, lhs), _value_of(graph, rhs), der)
            # rhs pushed first so lhs is descended into first
            stack.append((rhs, r_der))
            stack.append((lhs, l_der))

    log.debug("backward pass from %d: %d node visits", output, visits)


def _value_of(graph, idx: int) -> Tensor:
    value = graph.nodes[idx].value
    if value is None:
        raise ValueUninitialized(idx)
    return value


def invalidate(graph, node: int) -> None:
    """Drop the cached value of every operator node downstream of `node`."""
    seen = set()
    stack = list(graph.consumers(node))
    while stack:
        idx = stack.pop()
        if idx in seen:
            continue
        seen.add(idx)
        n = graph.nodes[idx]
        if n.is_operator():
            n.value = None
        stack.extend(graph.consumers(idx))
    if seen:
        log.debug("set_value %d: invalidated %d dependents", node, len(seen))
