# aad_graph/core/errors.py
"""
Error taxonomy of the graph engine.

Every public fallible operation raises one of these. They carry the offending
node index / name / ranks as attributes so callers can branch on them.
"""


class GraphError(Exception):
    """Base class of all graph engine errors."""


class ValueUninitialized(GraphError):
    """A value was requested from a node that has none (unset variable, or an
    operator node that has not been evaluated yet)."""

    def __init__(self, index: int):
        self.index = index
        super().__init__(f"Value node is not initialized (Index = {index})")


class DerivUninitialized(GraphError):
    """The last differentiation pass did not reach this node (or none ran)."""

    def __init__(self, index: int):
        self.index = index
        super().__init__(f"Derivative is not initialized (Index = {index})")


class NodeTypeError(GraphError):
    """A value was written to a node that is not a variable."""

    def __init__(self, index: int):
        self.index = index
        super().__init__(f"Node type mismatch (Index = {index})")


class DuplicatedName(GraphError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Duplicated name (name = {name})")


class UndefinedName(GraphError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Variable name is not defined (name = {name})")


class TensorRankMismatch(GraphError):
    def __init__(self, actual: int, desired: int):
        self.actual = actual
        self.desired = desired
        super().__init__(
            f"Tensor rank is mismatched: actual={actual}, desired={desired}"
        )


__all__ = [
    "GraphError",
    "ValueUninitialized",
    "DerivUninitialized",
    "NodeTypeError",
    "DuplicatedName",
    "UndefinedName",
    "TensorRankMismatch",
]
