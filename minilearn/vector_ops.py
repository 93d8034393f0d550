from typing import Any, Callable, TypeVar

import numpy as np
from numba import njit as _njit

from .errors import DimensionMismatchError

# Compiled versions of the small linear-algebra kernels the functor needs.
# Callers go through `as_vector` / `as_matrix` first so the kernels only ever
# see contiguous float64 arrays of the right rank.

Fn = TypeVar("Fn")


def jit(fn: Fn, **kwargs: Any) -> Fn:
    """Jit decorator for the cpu"""
    return _njit(**kwargs)(fn)  # type: ignore


def as_vector(x: Any, name: str = "vector") -> np.ndarray:
    """Coerce `x` to a contiguous 1-D float64 array."""
    v = np.ascontiguousarray(x, dtype=np.float64)
    if v.ndim == 0:
        v = v.reshape(1)
    if v.ndim != 1:
        raise DimensionMismatchError(f"{name} must be 1-D, got shape {v.shape}")
    return v


def as_matrix(x: Any, rows: int, cols: int, name: str = "matrix") -> np.ndarray:
    """Coerce `x` to a contiguous float64 array of shape `rows x cols`.

    A flat array of the right size is accepted for single-row or
    single-column Jacobians.
    """
    m = np.ascontiguousarray(x, dtype=np.float64)
    if m.ndim < 2 and m.size == rows * cols and (rows == 1 or cols == 1):
        m = m.reshape(rows, cols)
    if m.shape != (rows, cols):
        raise DimensionMismatchError(
            f"{name} must have shape {(rows, cols)}, got {m.shape}"
        )
    return m


def check_same_length(v1: np.ndarray, v2: np.ndarray, what: str) -> None:
    if v1.shape[0] != v2.shape[0]:
        raise DimensionMismatchError(
            f"{what}: length {v1.shape[0]} does not match length {v2.shape[0]}"
        )


def _scale(s: float, v: np.ndarray) -> np.ndarray:
    out = np.empty_like(v)
    for i in range(v.shape[0]):
        out[i] = s * v[i]
    return out


def _sub(v1: np.ndarray, v2: np.ndarray) -> np.ndarray:
    out = np.empty_like(v1)
    for i in range(v1.shape[0]):
        out[i] = v1[i] - v2[i]
    return out


def _vjp(jac: np.ndarray, v: np.ndarray) -> np.ndarray:
    out = np.zeros(jac.shape[1])
    for k in range(jac.shape[0]):
        for j in range(jac.shape[1]):
            out[j] += jac[k, j] * v[k]
    return out


_scale_kernel: Callable[[float, np.ndarray], np.ndarray] = jit(_scale)
_sub_kernel: Callable[[np.ndarray, np.ndarray], np.ndarray] = jit(_sub)
_vjp_kernel: Callable[[np.ndarray, np.ndarray], np.ndarray] = jit(_vjp)


def scale(s: float, v: Any) -> np.ndarray:
    """Scalar times vector."""
    return _scale_kernel(float(s), as_vector(v))


def sub(v1: Any, v2: Any) -> np.ndarray:
    """Elementwise `v1 - v2`."""
    a = as_vector(v1)
    b = as_vector(v2)
    check_same_length(a, b, "vector subtraction")
    return _sub_kernel(a, b)


def vjp(jac: Any, v: Any) -> np.ndarray:
    """Jacobian-transpose times vector, $J^T v$.

    This is the chain rule step taking a gradient on the outputs of a
    function to a gradient on its inputs.
    """
    vec = as_vector(v)
    m = np.ascontiguousarray(jac, dtype=np.float64)
    if m.ndim != 2 or m.shape[0] != vec.shape[0]:
        raise DimensionMismatchError(
            f"Jacobian of shape {m.shape} cannot take a vector of length {vec.shape[0]}"
        )
    return _vjp_kernel(m, vec)
