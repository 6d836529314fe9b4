# aad_graph/core/config.py
"""
Graph configuration

Shared settings for Graph instances: which scalar field tensors are coerced
into, and whether debug logging should be switched on when the graph is built.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np


@dataclass(frozen=True)
class GraphConfig:
    """
    Attributes
    ----------
    dtype : numpy dtype
        Scalar field of every tensor created from plain Python numbers or
        sequences. Real (float32/float64) or complex (complex64/complex128).
    debug : bool
        If True, the graph enables the "aad_graph" logger tree on creation.
    """
    dtype: Any = np.float64
    debug: bool = False

    def __post_init__(self):
        kind = np.dtype(self.dtype).kind
        if kind not in ("f", "c"):
            raise TypeError(
                f"GraphConfig.dtype must be a real or complex floating type, "
                f"but got {np.dtype(self.dtype)}"
            )
        object.__setattr__(self, "dtype", np.dtype(self.dtype))


DEFAULT_CONFIG = GraphConfig()
