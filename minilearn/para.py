"""The category of parameterized differentiable functions on Euclidean spaces.

Objects are Euclidean spaces and morphisms are functions `i(p, a)`. The
functor in `minilearn.functor` takes these to learners.
"""

from typing import Any, Callable

ParamFn = Callable[[Any, Any], Any]


def identity(p: Any, a: Any) -> Any:
    """The identity morphism. Ignores its parameter."""
    return a


def compose(g: ParamFn, f: ParamFn) -> ParamFn:
    """`g` after `f`, both reading the same parameter."""

    def composed(p: Any, a: Any) -> Any:
        return g(p, f(p, a))

    return composed
