"""Collection of the core mathematical operators used throughout the code base."""

import math
from typing import Callable, Iterable

from .errors import DomainError

#
# Implementation of a prelude of elementary functions.

# Mathematical functions:
# - mul
# - id
# - add
# - neg
# - is_close
# - sign
# - sigmoid
# - relu
# - log
# - exp
# - sqrt
# - sin, cos, asin, acos
# - inv
#
# and their derivatives times a second arg:
# - log_back, inv_back, sqrt_back, sin_back, cos_back, asin_back,
#   acos_back, abs_back, sigmoid_back, relu_back
#
# For sigmoid calculate as:
# $f(x) =  \frac{1.0}{(1.0 + e^{-x})}$ if x >=0 else $\frac{e^x}{(1.0 + e^{x})}$
# For is_close:
# $f(x) = |x - y| < 1e-2$


def mul(x: float, y: float) -> float:
    """Multiply two numbers."""
    return x * y


def id(x: float) -> float:
    """Return the identity of a number."""
    return x


def add(x: float, y: float) -> float:
    """Add two numbers."""
    return x + y


def neg(x: float) -> float:
    """Negate a number."""
    return -x


def is_close(x: float, y: float) -> bool:
    """Check if two numbers are close."""
    return abs(x - y) < 1e-2


def sign(x: float) -> float:
    """Return -1.0, 0.0 or 1.0 according to the sign of a number."""
    if x > 0:
        return 1.0
    if x < 0:
        return -1.0
    return 0.0


def sigmoid(x: float) -> float:
    """Compute the sigmoid of a number."""
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    else:
        return math.exp(x) / (1.0 + math.exp(x))


def relu(x: float) -> float:
    """Compute the ReLU of a number."""
    return x if x > 0 else 0.0


def log(x: float) -> float:
    """Compute the natural logarithm of a number."""
    if x <= 0:
        raise DomainError(f"log is undefined for {x}")
    return math.log(x)


def exp(x: float) -> float:
    """Compute the exponential of a number."""
    return float(math.exp(x))


def sqrt(x: float) -> float:
    """Compute the square root of a number."""
    if x < 0:
        raise DomainError(f"sqrt is undefined for {x}")
    return math.sqrt(x)


def sin(x: float) -> float:
    """Compute the sine of a number."""
    return math.sin(x)


def cos(x: float) -> float:
    """Compute the cosine of a number."""
    return math.cos(x)


def asin(x: float) -> float:
    """Compute the arcsine of a number in [-1, 1]."""
    if abs(x) > 1:
        raise DomainError(f"asin is undefined for {x}")
    return math.asin(x)


def acos(x: float) -> float:
    """Compute the arccosine of a number in [-1, 1]."""
    if abs(x) > 1:
        raise DomainError(f"acos is undefined for {x}")
    return math.acos(x)


def inv(x: float) -> float:
    """Compute the reciprocal of a number."""
    if x == 0:
        raise DomainError("reciprocal of zero")
    return 1.0 / x


def log_back(x: float, y: float) -> float:
    """Compute the derivative of the log function times a second arg."""
    if x <= 0:
        raise DomainError(f"log derivative is undefined for {x}")
    return y / x


def inv_back(x: float, y: float) -> float:
    """Compute the derivative of the reciprocal function times a second arg."""
    if x == 0:
        raise DomainError("reciprocal derivative is undefined at zero")
    return -y / x**2


def sqrt_back(x: float, y: float) -> float:
    """Compute the derivative of the square root times a second arg."""
    if x <= 0:
        raise DomainError(f"sqrt derivative is undefined for {x}")
    return y / (2.0 * math.sqrt(x))


def sin_back(x: float, y: float) -> float:
    """Compute the derivative of sine times a second arg."""
    return y * math.cos(x)


def cos_back(x: float, y: float) -> float:
    """Compute the derivative of cosine times a second arg."""
    return -y * math.sin(x)


def asin_back(x: float, y: float) -> float:
    """Compute the derivative of arcsine times a second arg."""
    if abs(x) >= 1:
        raise DomainError(f"asin derivative is undefined for {x}")
    return y / math.sqrt(1.0 - x**2)


def acos_back(x: float, y: float) -> float:
    """Compute the derivative of arccosine times a second arg."""
    if abs(x) >= 1:
        raise DomainError(f"acos derivative is undefined for {x}")
    return -y / math.sqrt(1.0 - x**2)


def abs_back(x: float, y: float) -> float:
    """Compute the derivative of abs times a second arg (0 at the kink)."""
    return y * sign(x)


def sigmoid_back(x: float, y: float) -> float:
    """Compute the derivative of the sigmoid times a second arg."""
    s = sigmoid(x)
    return y * s * (1.0 - s)


def relu_back(x: float, y: float) -> float:
    """Compute the derivative of the ReLU function times a second arg."""
    return y if x > 0 else 0.0


# Small library of elementary higher-order functions.
# - zipWith
# - reduce
#
# Used for:
# - addLists : add two lists together
# - sum: sum lists
# - dot: inner product of two lists


def zipWith(
    f: Callable[[float, float], float], ls1: Iterable[float], ls2: Iterable[float]
) -> Iterable[float]:
    """Apply a function to pairs of elements from two lists."""
    return [f(x1, x2) for x1, x2 in zip(ls1, ls2)]


def reduce(
    f: Callable[[float, float], float], ls: Iterable[float], initial: float
) -> float:
    """Reduce a list to a single value using a function."""
    curr: float = initial
    for x in ls:
        curr = f(curr, x)
    return curr


def addLists(ls1: Iterable[float], ls2: Iterable[float]) -> Iterable[float]:
    """Add corresponding elements of two lists."""
    return zipWith(add, ls1, ls2)


def sum(ls: Iterable[float]) -> float:
    """Compute the sum of a list of numbers."""
    return reduce(add, ls, 0.0)


def dot(ls1: Iterable[float], ls2: Iterable[float]) -> float:
    """Compute the inner product of two lists.

    Works on lists of floats and on lists of `Dual` values alike, which is what
    lets a parameterized function be written once and differentiated later.
    """
    return reduce(add, zipWith(mul, ls1, ls2), 0.0)
