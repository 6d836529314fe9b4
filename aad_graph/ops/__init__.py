# aad_graph/ops/__init__.py

from .operator import Unary, Binary

__all__ = ["Unary", "Binary"]
