# aad_graph/core/node.py
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

import numpy as np

from ..ops.operator import Binary, Unary


class NodeKind(Enum):
    CONSTANT = "constant"
    VARIABLE = "variable"
    UNARY = "unary"
    BINARY = "binary"


@dataclass
class Node:
    """
    One vertex of the calculation graph.

    Attributes
    ----------
    kind : NodeKind
        Constant, variable, or unary/binary operator.
    op : Unary | Binary | None
        Operator of an operator node; None for constants and variables.
    value : np.ndarray | None
        Last computed (operators) or assigned (constants/variables) value.
    deriv : np.ndarray | None
        Gradient accumulated by the last differentiation pass that reached
        this node; reset at the start of every pass.
    inputs : List[int]
        Operand node indices in connection order: lhs first, rhs last.
    """
    kind: NodeKind
    op: Optional[Union[Unary, Binary]] = None
    value: Optional[np.ndarray] = None
    deriv: Optional[np.ndarray] = None
    inputs: List[int] = field(default_factory=list)

    @classmethod
    def variable(cls) -> "Node":
        return cls(kind=NodeKind.VARIABLE)

    @classmethod
    def constant(cls, value: np.ndarray) -> "Node":
        return cls(kind=NodeKind.CONSTANT, value=value)

    @classmethod
    def operator(cls, op: Union[Unary, Binary]) -> "Node":
        kind = NodeKind.UNARY if isinstance(op, Unary) else NodeKind.BINARY
        return cls(kind=kind, op=op)

    def is_variable(self) -> bool:
        return self.kind is NodeKind.VARIABLE

    def is_operator(self) -> bool:
        return self.kind in (NodeKind.UNARY, NodeKind.BINARY)

    @property
    def tag(self) -> str:
        """Short label: operator name, or "constant"/"variable"."""
        return self.op.value if self.op is not None else self.kind.value

    def __repr__(self):
        val = "N/A" if self.value is None else repr(self.value)
        der = "N/A" if self.deriv is None else repr(self.deriv)
        return f"Node({self.tag}, value={val}, deriv={der})"
