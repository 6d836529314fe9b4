# aad_graph/core/tensor.py
"""
Tensor values held by graph nodes.

A tensor is a plain numpy ndarray of a real or complex floating dtype. Once a
tensor is stored in a node it is published read-only: arithmetic always
produces a fresh array, so sharing a reference between nodes (or handing it to
a client) never lets anyone write through an alias.
"""

from __future__ import annotations

import numbers
from typing import Any, Sequence, Tuple

import numpy as np

from .errors import TensorRankMismatch

Tensor = np.ndarray


def publish(x: Any) -> Tensor:
    """
    Freeze a freshly computed result and return it as an ndarray.

    numpy ufuncs applied to rank-0 arrays hand back numpy scalars, so those are
    wrapped back into rank-0 arrays here.
    """
    t = np.asarray(x)
    if t.flags.writeable:
        # freeze a view: the array itself may still belong to the caller
        t = t.view()
        t.flags.writeable = False
    return t


def into_tensor(val: Any, dtype: Any = np.float64) -> Tensor:
    """
    Convert a client value into a published tensor.

    - int/float/complex  -> rank-0 tensor
    - list/tuple         -> rank-1 (or nested -> rank-n) tensor
    - ndarray            -> copy of the same shape

    Integer and bool data is promoted to `dtype`; complex data stays complex
    even if `dtype` is real.
    """
    if not isinstance(val, (numbers.Number, np.number, list, tuple, np.ndarray)):
        raise TypeError(
            f"Tensor values must be numeric (number, list, tuple, ndarray), "
            f"but got {type(val)}"
        )
    arr = np.array(val)  # copy: the caller keeps ownership of its own buffer
    if arr.dtype.kind not in "biufc":
        raise TypeError(f"Tensor values must be numeric, but got dtype {arr.dtype}")
    target = np.dtype(dtype)
    if arr.dtype.kind == "c" and target.kind != "c":
        target = np.result_type(arr.dtype, target)
    return publish(arr.astype(target, copy=False))


def scalar(a: Any, dtype: Any = np.float64) -> Tensor:
    """Rank-0 tensor from a single number."""
    t = into_tensor(a, dtype)
    if t.ndim != 0:
        raise TensorRankMismatch(actual=t.ndim, desired=0)
    return t


def vector(values: Sequence[Any], dtype: Any = np.float64) -> Tensor:
    """Rank-1 tensor from a flat sequence."""
    t = into_tensor(list(values), dtype)
    if t.ndim != 1:
        raise TensorRankMismatch(actual=t.ndim, desired=1)
    return t


def ones_like(t: Tensor) -> Tensor:
    return publish(np.ones_like(t))


def zeros_like(t: Tensor) -> Tensor:
    return publish(np.zeros_like(t))


def sum_all(t: Tensor) -> Tensor:
    """Sum-reduce every axis down to a rank-0 tensor."""
    return publish(np.sum(t))


def as_scalar(t: Tensor):
    """Return the single element of a rank-0 tensor as a Python number."""
    if np.ndim(t) != 0:
        raise TensorRankMismatch(actual=np.ndim(t), desired=0)
    return np.asarray(t).item()


def as_vector(t: Tensor) -> Tensor:
    if np.ndim(t) != 1:
        raise TensorRankMismatch(actual=np.ndim(t), desired=1)
    return t


def reduce_to_shape(grad: Tensor, shape: Tuple[int, ...]) -> Tensor:
    """
    Bring a gradient to an operand's `shape`: sum away the axes the operand was
    broadcast over, or spread a lower-rank gradient over every element.
    """
    grad = np.asarray(grad)
    if grad.shape == tuple(shape):
        return grad

    # A lower-rank gradient (scalar operand against a tensor) spreads over every element
    if grad.ndim < len(shape):
        return publish(np.broadcast_to(grad, shape))

    # Add singleton dimensions to the front of shape to match grad's ndim
    padded = (1,) * (grad.ndim - len(shape)) + tuple(shape)
    lead = grad.ndim - len(shape)

    # Leading axes were added by broadcasting; inner axes of size 1 were stretched
    sum_axes = tuple(
        i for i, (g_dim, t_dim) in enumerate(zip(grad.shape, padded))
        if i < lead or (t_dim == 1 and g_dim != 1)
    )
    if sum_axes:
        grad = grad.sum(axis=sum_axes, keepdims=True)
    return publish(grad.reshape(shape))


__all__ = [
    "Tensor",
    "publish",
    "into_tensor",
    "scalar",
    "vector",
    "ones_like",
    "zeros_like",
    "sum_all",
    "as_scalar",
    "as_vector",
    "reduce_to_shape",
]
