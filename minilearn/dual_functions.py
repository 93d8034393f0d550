from __future__ import annotations

from typing import TYPE_CHECKING

import minilearn

from . import operators
from .autodiff import Context

if TYPE_CHECKING:
    from typing import Tuple, Union

    from .dual import Dual

    DualLike = Union[float, int, Dual]


def wrap_tuple(x: float | Tuple[float, ...]) -> Tuple[float, ...]:
    """Turn a possible value into a tuple"""
    if isinstance(x, tuple):
        return x
    return (x,)


class DualFunction:
    r"""A wrapper for a mathematical function lifted to Dual numbers.

    This is a static class and is never instantiated. We use `class`
    here to group together the `forward` code computing the value and the
    `derivative` code returning the partial derivative with respect to each
    input. `apply` combines the partials with the input derivatives by the
    chain rule: $(f(x_1 \ldots x_n))' = \sum_k \partial_k f \cdot x_k'$.
    """

    @classmethod
    def _derivative(cls, ctx: Context) -> Tuple[float, ...]:
        return wrap_tuple(cls.derivative(ctx))  # type: ignore

    @classmethod
    def _forward(cls, ctx: Context, *inps: float) -> float:
        return cls.forward(ctx, *inps)  # type: ignore

    @classmethod
    def apply(cls, *vals: DualLike) -> Dual:
        """Apply the function to the input values and return the result as a Dual."""
        raw_vals = []
        tangents = []
        for v in vals:
            if isinstance(v, minilearn.dual.Dual):
                raw_vals.append(v.value)
                tangents.append(v.derivative)
            else:
                raw_vals.append(float(v))
                tangents.append(0.0)

        # Create the context.
        ctx = Context()

        # Call forward with the values.
        c = cls._forward(ctx, *raw_vals)
        assert isinstance(c, float), "Expected return type float got %s" % (type(c))

        # Constants stay constant, even where the partials are undefined.
        if all(t == 0.0 for t in tangents):
            return minilearn.dual.Dual(c, 0.0)

        d = 0.0
        for partial, t in zip(cls._derivative(ctx), tangents):
            if t != 0.0:
                d += partial * t
        return minilearn.dual.Dual(c, float(d))


class Add(DualFunction):
    """Addition function $f(x, y) = x + y$"""

    @staticmethod
    def forward(ctx: Context, a: float, b: float) -> float:
        """Forward pass for addition."""
        return float(a + b)

    @staticmethod
    def derivative(ctx: Context) -> Tuple[float, ...]:
        """Partial derivatives of addition."""
        return 1.0, 1.0


class Mul(DualFunction):
    """Multiplication function $f(x, y) = x * y$"""

    @staticmethod
    def forward(ctx: Context, a: float, b: float) -> float:
        """Forward pass for multiplication."""
        ctx.save_for_backward(a, b)
        return float(operators.mul(a, b))

    @staticmethod
    def derivative(ctx: Context) -> Tuple[float, ...]:
        """Partial derivatives of multiplication (product rule)."""
        (a, b) = ctx.saved_values
        return float(b), float(a)


class Neg(DualFunction):
    """Negation function $f(x) = -x$"""

    @staticmethod
    def forward(ctx: Context, a: float) -> float:
        """Forward pass for negation."""
        return float(operators.neg(a))

    @staticmethod
    def derivative(ctx: Context) -> float:
        """Derivative of negation."""
        return -1.0


class Inv(DualFunction):
    """Inverse function $f(x) = 1/x$"""

    @staticmethod
    def forward(ctx: Context, a: float) -> float:
        """Forward pass for inverse."""
        ctx.save_for_backward(a)
        return float(operators.inv(a))

    @staticmethod
    def derivative(ctx: Context) -> float:
        """Derivative of inverse."""
        (a,) = ctx.saved_values
        return float(operators.inv_back(a, 1.0))


class Abs(DualFunction):
    """Absolute value $f(x) = |x|$"""

    @staticmethod
    def forward(ctx: Context, a: float) -> float:
        """Forward pass for absolute value."""
        ctx.save_for_backward(a)
        return float(abs(a))

    @staticmethod
    def derivative(ctx: Context) -> float:
        """Derivative of absolute value, 0 at the kink."""
        (a,) = ctx.saved_values
        return float(operators.abs_back(a, 1.0))


class Log(DualFunction):
    """Log function $f(x) = log(x)$"""

    @staticmethod
    def forward(ctx: Context, a: float) -> float:
        """Forward pass for logarithm."""
        ctx.save_for_backward(a)
        return float(operators.log(a))

    @staticmethod
    def derivative(ctx: Context) -> float:
        """Derivative of logarithm."""
        (a,) = ctx.saved_values
        return float(operators.log_back(a, 1.0))


class Exp(DualFunction):
    """Exponential function $f(x) = e^x$"""

    @staticmethod
    def forward(ctx: Context, a: float) -> float:
        """Forward pass for exponential."""
        out = operators.exp(a)
        ctx.save_for_backward(out)
        return float(out)

    @staticmethod
    def derivative(ctx: Context) -> float:
        """Derivative of exponential."""
        (out,) = ctx.saved_values
        return float(out)


class Sqrt(DualFunction):
    r"""Square root $f(x) = \sqrt{x}$"""

    @staticmethod
    def forward(ctx: Context, a: float) -> float:
        """Forward pass for square root."""
        ctx.save_for_backward(a)
        return float(operators.sqrt(a))

    @staticmethod
    def derivative(ctx: Context) -> float:
        """Derivative of square root."""
        (a,) = ctx.saved_values
        return float(operators.sqrt_back(a, 1.0))


class Sin(DualFunction):
    """Sine function $f(x) = sin(x)$"""

    @staticmethod
    def forward(ctx: Context, a: float) -> float:
        """Forward pass for sine."""
        ctx.save_for_backward(a)
        return float(operators.sin(a))

    @staticmethod
    def derivative(ctx: Context) -> float:
        """Derivative of sine."""
        (a,) = ctx.saved_values
        return float(operators.sin_back(a, 1.0))


class Cos(DualFunction):
    """Cosine function $f(x) = cos(x)$"""

    @staticmethod
    def forward(ctx: Context, a: float) -> float:
        """Forward pass for cosine."""
        ctx.save_for_backward(a)
        return float(operators.cos(a))

    @staticmethod
    def derivative(ctx: Context) -> float:
        """Derivative of cosine."""
        (a,) = ctx.saved_values
        return float(operators.cos_back(a, 1.0))


class Asin(DualFunction):
    """Arcsine function $f(x) = asin(x)$"""

    @staticmethod
    def forward(ctx: Context, a: float) -> float:
        """Forward pass for arcsine."""
        ctx.save_for_backward(a)
        return float(operators.asin(a))

    @staticmethod
    def derivative(ctx: Context) -> float:
        """Derivative of arcsine."""
        (a,) = ctx.saved_values
        return float(operators.asin_back(a, 1.0))


class Acos(DualFunction):
    """Arccosine function $f(x) = acos(x)$"""

    @staticmethod
    def forward(ctx: Context, a: float) -> float:
        """Forward pass for arccosine."""
        ctx.save_for_backward(a)
        return float(operators.acos(a))

    @staticmethod
    def derivative(ctx: Context) -> float:
        """Derivative of arccosine."""
        (a,) = ctx.saved_values
        return float(operators.acos_back(a, 1.0))


class Sigmoid(DualFunction):
    """Sigmoid function $f(x) = 1 / (1 + e^{-x})$"""

    @staticmethod
    def forward(ctx: Context, a: float) -> float:
        """Forward pass for sigmoid."""
        ctx.save_for_backward(a)
        return float(operators.sigmoid(a))

    @staticmethod
    def derivative(ctx: Context) -> float:
        """Derivative of sigmoid."""
        (a,) = ctx.saved_values
        return float(operators.sigmoid_back(a, 1.0))


class ReLU(DualFunction):
    """ReLU function $f(x) = max(0, x)$"""

    @staticmethod
    def forward(ctx: Context, a: float) -> float:
        """Forward pass for ReLU."""
        ctx.save_for_backward(a)
        return float(operators.relu(a))

    @staticmethod
    def derivative(ctx: Context) -> float:
        """Derivative of ReLU."""
        (a,) = ctx.saved_values
        return float(operators.relu_back(a, 1.0))
