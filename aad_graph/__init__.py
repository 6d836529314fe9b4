# aad_graph/__init__.py
# Calculation graph with reverse-mode automatic differentiation

from .core.graph import Graph, NodeIndex
from .core.config import GraphConfig
from .core.node import Node, NodeKind
from .core.engine import eval_value, eval_deriv, zero_derivs
from .core.seeds import grad, grads, value
from .core.errors import (
    GraphError,
    ValueUninitialized,
    DerivUninitialized,
    NodeTypeError,
    DuplicatedName,
    UndefinedName,
    TensorRankMismatch,
)
from .core.tensor import Tensor, as_scalar, as_vector
from .ops import Unary, Binary

__all__ = [
    # Graph
    'Graph',
    'NodeIndex',
    'GraphConfig',
    'Node',
    'NodeKind',
    # Engine
    'eval_value',
    'eval_deriv',
    'zero_derivs',
    'grad',
    'grads',
    'value',
    # Operators
    'Unary',
    'Binary',
    # Tensor
    'Tensor',
    'as_scalar',
    'as_vector',
    # Errors
    'GraphError',
    'ValueUninitialized',
    'DerivUninitialized',
    'NodeTypeError',
    'DuplicatedName',
    'UndefinedName',
    'TensorRankMismatch',
]
__version__ = '0.1.0'
