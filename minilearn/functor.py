r"""From parameterized differentiable functions to learners.

Given a parameterized function `i(p, a)` on float vectors, an error function
`e(x, y)` and a learning rate, `param_to_learn` builds the learner that

* implements `i` unchanged,
* updates `p` by one step of gradient descent on
  $E(p, a, b) = \sum_k e(i(p, a)_k, b_k)$,
* requests the input obtained by inverting the error gradient at
  $\nabla_a E(p, a, b)$. For quadratic error this is
  $a - \nabla_a E(p, a, b)$.

Example:
    Quadratic Error
    e(x,y) := 0.5 (x-y)^2
    ∂e/∂x(x,y) = x - y
    E(p,a,b) = ∑ 0.5 (i(p,a) - b)^2
    ∇pE = ∑ (i(p,a) - b) * ∂i/∂p

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Sequence

import numpy as np

from . import autodiff, vector_ops
from .errors import DomainError
from .learner import Learner

logger = logging.getLogger(__name__)

Vector = np.ndarray
ParamFn = Callable[[Any, Any], Any]


@dataclass(frozen=True)
class ErrorFunction:
    r"""A per-component error with its derivative and inverse derivative.

    Attributes
    ----------
        e: error between an output `x` and a target `y`
        gradient: $\partial e / \partial x$ at `(x, y)`
        inverse: given `x` and a gradient value `g`, the `y` with
            `gradient(x, y) == g`

    """

    e: Callable[[float, float], float]
    gradient: Callable[[float, float], float]
    inverse: Callable[[float, float], float]


def quadratic_error() -> ErrorFunction:
    """Quadratic error $e(x, y) = 0.5 (x - y)^2$."""
    return ErrorFunction(
        e=lambda x, y: 0.5 * (x - y) ** 2,
        gradient=lambda x, y: x - y,
        inverse=lambda x, g: x - g,
    )


def total_error(
    e: Callable[[float, float], float], i: ParamFn, p: Any, a: Any, b: Any
) -> float:
    """Sum of the per-component error between `i(p, a)` and `b`."""
    out = vector_ops.as_vector(i(vector_ops.as_vector(p), vector_ops.as_vector(a)), "output")
    target = vector_ops.as_vector(b, "target")
    vector_ops.check_same_length(out, target, "output and target")
    return float(sum(e(float(x), float(y)) for x, y in zip(out, target)))


def _finite(v: np.ndarray, what: str) -> np.ndarray:
    if not np.all(np.isfinite(v)):
        raise DomainError(f"{what} is not finite: {v}")
    return v


def param_to_learn(
    rate: float,
    e: Callable[[float, float], float],
    eg: Callable[[float, float], float],
    e_inv: Callable[[float, float], float],
    i: ParamFn,
    iga: ParamFn,
    igp: ParamFn,
) -> Learner[Vector, Vector, Vector]:
    """Action of the functor `Para -> Learn` on a morphism of `Para`.

    Args:
    ----
        rate: learning rate
        e: error function
        eg: error function gradient in its first argument
        e_inv: inverse of `eg` in its second argument
        i: parameterized function
        iga: Jacobian of `i` with respect to `a`, shape `len(b) x len(a)`
        igp: Jacobian of `i` with respect to `p`, shape `len(b) x len(p)`

    Returns:
    -------
        Learner on float vectors performing gradient descent and
        backpropagation

    """

    def implement(p: Any, a: Any) -> Vector:
        return vector_ops.as_vector(i(vector_ops.as_vector(p), vector_ops.as_vector(a)), "output")

    def output_gradient(p: Vector, a: Vector, b: Any) -> Vector:
        out = implement(p, a)
        target = vector_ops.as_vector(b, "target")
        vector_ops.check_same_length(out, target, "output and target")
        return np.array([eg(float(x), float(y)) for x, y in zip(out, target)], dtype=np.float64)

    def error_gradient_p(p: Vector, a: Vector, b: Any) -> Vector:
        """The gradient of E with respect to p. Exists because e is differentiable."""
        g = output_gradient(p, a, b)
        jac = vector_ops.as_matrix(igp(p, a), g.shape[0], p.shape[0], "∂i/∂p")
        return vector_ops.vjp(jac, g)

    def error_gradient_a(p: Vector, a: Vector, b: Any) -> Vector:
        g = output_gradient(p, a, b)
        jac = vector_ops.as_matrix(iga(p, a), g.shape[0], a.shape[0], "∂i/∂a")
        return vector_ops.vjp(jac, g)

    def update(p: Any, a: Any, b: Any) -> Vector:
        pv = vector_ops.as_vector(p, "parameter")
        av = vector_ops.as_vector(a, "input")
        with np.errstate(divide="raise", invalid="raise", over="raise"):
            step = vector_ops.scale(rate, error_gradient_p(pv, av, b))
            new_p = _finite(vector_ops.sub(pv, step), "updated parameter")
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "gradient step: error %s, |step| %s",
                total_error(e, i, pv, av, b),
                float(np.linalg.norm(step)),
            )
        return new_p

    def request(p: Any, a: Any, b: Any) -> Vector:
        pv = vector_ops.as_vector(p, "parameter")
        av = vector_ops.as_vector(a, "input")
        with np.errstate(divide="raise", invalid="raise", over="raise"):
            ga = error_gradient_a(pv, av, b)
            req = np.array(
                [e_inv(float(x), float(g)) for x, g in zip(av, ga)], dtype=np.float64
            )
        return _finite(req, "requested input")

    return Learner(i=implement, u=update, r=request)


def param_to_learn_dual(rate: float, error: ErrorFunction, i: ParamFn) -> Learner[Vector, Vector, Vector]:
    """`param_to_learn` with both Jacobians of `i` computed by dual numbers.

    `i` has to be written with arithmetic that accepts `Dual` elements, e.g.
    with `operators.dot` and the functions of `minilearn.dual`, since it is
    evaluated once per parameter and input component on lists of duals.
    """

    def iga(p: Sequence[float], a: Sequence[float]) -> np.ndarray:
        fixed = [float(x) for x in p]
        return autodiff.jacobian(lambda xs: i(fixed, xs), a)

    def igp(p: Sequence[float], a: Sequence[float]) -> np.ndarray:
        fixed = [float(x) for x in a]
        return autodiff.jacobian(lambda ps: i(ps, fixed), p)

    return param_to_learn(rate, error.e, error.gradient, error.inverse, i, iga, igp)
