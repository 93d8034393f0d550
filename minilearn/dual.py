"""Dual numbers: a value together with its derivative.

A `Dual(a, a')` stands for a quantity `a` that depends on some independent
variable `x`, with `a' = da/dx`. Every function in this module maps consistent
pairs to consistent pairs, so evaluating an ordinary expression on
`id(x)` yields both the value of the expression and its exact derivative
at `x`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .dual_functions import (
    Abs,
    Acos,
    Add,
    Asin,
    Cos,
    Exp,
    Inv,
    Log,
    Mul,
    Neg,
    ReLU,
    Sigmoid,
    Sin,
    Sqrt,
)
from .errors import UnsupportedOperationError

DualLike = Union[float, int, "Dual"]


@dataclass(frozen=True)
class Dual:
    """A value and its derivative with respect to a common variable."""

    value: float
    derivative: float = 0.0

    def __repr__(self) -> str:
        return "Dual(%s, %s)" % (self.value, self.derivative)

    def __float__(self) -> float:
        return float(self.value)

    def __add__(self, b: DualLike) -> Dual:
        return add(self, b)

    def __radd__(self, b: DualLike) -> Dual:
        return add(b, self)

    def __sub__(self, b: DualLike) -> Dual:
        return sub(self, b)

    def __rsub__(self, b: DualLike) -> Dual:
        return sub(b, self)

    def __mul__(self, b: DualLike) -> Dual:
        return mul(self, b)

    def __rmul__(self, b: DualLike) -> Dual:
        return mul(b, self)

    def __truediv__(self, b: DualLike) -> Dual:
        return div(self, b)

    def __rtruediv__(self, b: DualLike) -> Dual:
        return div(b, self)

    def __neg__(self) -> Dual:
        return neg(self)

    def __abs__(self) -> Dual:
        return abs(self)

    def exp(self) -> Dual:
        return exp(self)

    def log(self) -> Dual:
        return log(self)

    def sqrt(self) -> Dual:
        return sqrt(self)

    def sin(self) -> Dual:
        return sin(self)

    def cos(self) -> Dual:
        return cos(self)

    def sigmoid(self) -> Dual:
        return sigmoid(self)

    def relu(self) -> Dual:
        return relu(self)

    @classmethod
    def one(cls) -> Dual:
        """There is no generic multiplicative identity; use `konst(1.0)`."""
        raise UnsupportedOperationError(
            "Dual has no generic one; build the constant with konst(1.0)"
        )


def konst(x: float) -> Dual:
    """A constant: derivative zero."""
    return Dual(float(x), 0.0)


def id(x: float) -> Dual:
    """The independent variable itself: derivative one."""
    return Dual(float(x), 1.0)


def value_of(x: DualLike) -> float:
    """The value component of a dual, or the number itself."""
    if isinstance(x, Dual):
        return x.value
    return float(x)


def add(a: DualLike, b: DualLike) -> Dual:
    return Add.apply(a, b)


def sub(a: DualLike, b: DualLike) -> Dual:
    return Add.apply(a, Neg.apply(b))


def mul(a: DualLike, b: DualLike) -> Dual:
    return Mul.apply(a, b)


def div(a: DualLike, b: DualLike) -> Dual:
    return Mul.apply(a, Inv.apply(b))


def neg(a: DualLike) -> Dual:
    return Neg.apply(a)


def inv(a: DualLike) -> Dual:
    return Inv.apply(a)


def abs(a: DualLike) -> Dual:
    return Abs.apply(a)


def sqr(a: DualLike) -> Dual:
    return mul(a, a)


def exp(a: DualLike) -> Dual:
    return Exp.apply(a)


def log(a: DualLike) -> Dual:
    return Log.apply(a)


def sqrt(a: DualLike) -> Dual:
    return Sqrt.apply(a)


def sin(a: DualLike) -> Dual:
    return Sin.apply(a)


def cos(a: DualLike) -> Dual:
    return Cos.apply(a)


def asin(a: DualLike) -> Dual:
    return Asin.apply(a)


def acos(a: DualLike) -> Dual:
    return Acos.apply(a)


def sigmoid(a: DualLike) -> Dual:
    return Sigmoid.apply(a)


def relu(a: DualLike) -> Dual:
    return ReLU.apply(a)
