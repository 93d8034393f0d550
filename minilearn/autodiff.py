from __future__ import annotations

from dataclasses import dataclass
from numbers import Number
from typing import Any, Callable, List, Sequence, Tuple

import numpy as np

import minilearn

from .errors import DimensionMismatchError


# Central Difference calculation


def central_difference(f: Any, *vals: Any, arg: int = 0, epsilon: float = 1e-6) -> Any:
    r"""Computes an approximation to the derivative of `f` with respect to one arg.

    See https://en.wikipedia.org/wiki/Finite_difference for more details.

    Args:
    ----
        f : arbitrary function from n-scalar args to one value
        *vals : n-float values $x_0 \ldots x_{n-1}$
        arg : the number $i$ of the arg to compute the derivative
        epsilon : a small constant

    Returns:
    -------
        An approximation of $f'_i(x_0, \ldots, x_{n-1})$

    """
    vals_plus_h = list(vals)
    vals_plus_h[arg] += epsilon
    vals_minus_h = list(vals)
    vals_minus_h[arg] -= epsilon

    f_x_plus_h = f(*vals_plus_h)
    f_x_minus_h = f(*vals_minus_h)

    return (f_x_plus_h - f_x_minus_h) / (2 * epsilon)


@dataclass
class Context:
    """Context class is used by `DualFunction` to store information during the forward pass."""

    saved_values: Tuple[Any, ...] = ()

    def save_for_backward(self, *values: Any) -> None:
        """Store the given `values` if they are needed to compute the derivative."""
        self.saved_values = values


# Forward mode


def _derivative_of(x: Any) -> float:
    # Outputs that never touched a dual are constants.
    if isinstance(x, minilearn.dual.Dual):
        return x.derivative
    return 0.0


def _outputs(ys: Any) -> List[Any]:
    # A lone dual or number is a one-element output.
    if isinstance(ys, (minilearn.dual.Dual, Number)):
        return [ys]
    if isinstance(ys, np.ndarray) and ys.ndim == 0:
        return [ys.item()]
    try:
        return list(ys)
    except TypeError:
        raise DimensionMismatchError(
            f"function output must be a sequence or a scalar, got {type(ys).__name__}"
        ) from None


def derivative(f: Callable[[Any], Any], x: float) -> float:
    """Exact derivative of a one-argument function at `x` using dual numbers.

    Args:
    ----
        f : function written with arithmetic that accepts `Dual` values
        x : point to differentiate at

    Returns:
    -------
        $f'(x)$

    """
    return _derivative_of(f(minilearn.dual.id(float(x))))


def jacobian(f: Callable[[List[Any]], Sequence[Any]], xs: Sequence[float]) -> np.ndarray:
    r"""Forward-mode Jacobian of a vector function.

    One dual pass is made per input component: component `j` is seeded with
    derivative 1 and every other component is a constant.

    Args:
    ----
        f : function from a list of n values to a sequence of m values, or to
            a single value (m = 1)
        xs : point to differentiate at

    Returns:
    -------
        Array of shape m x n with entry (k, j) equal to $\partial f_k / \partial x_j$

    """
    Dual = minilearn.dual.Dual
    point = [float(x) for x in xs]
    columns = []
    for j in range(len(point)):
        seeded = [Dual(x, 1.0 if k == j else 0.0) for k, x in enumerate(point)]
        columns.append([_derivative_of(out) for out in _outputs(f(seeded))])
    if not columns:
        m = len(_outputs(f(point)))
        return np.zeros((m, 0))
    return np.array(columns, dtype=np.float64).T


def derivative_check(f: Any, *vals: float) -> None:
    """Check whether the dual-number derivative matches central difference."""
    err_msg = """

Derivative check error for function %s.

Input %s

Received derivative %f for argument %d,
but was expecting derivative %f from central difference.

"""
    Dual = minilearn.dual.Dual
    for i in range(len(vals)):
        seeded = [Dual(float(x), 1.0 if k == i else 0.0) for k, x in enumerate(vals)]
        received = _derivative_of(f(*seeded))
        check = central_difference(
            lambda *xs: minilearn.dual.value_of(f(*xs)), *vals, arg=i
        )
        np.testing.assert_allclose(
            received,
            check,
            1e-2,
            1e-2,
            err_msg=err_msg % (f, vals, received, i, check),
        )
