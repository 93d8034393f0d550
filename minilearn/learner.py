"""The category of learners.

A learner for a function type `A -> B` parameterized by `P` is a triple of
functions:

* `i(p, a) -> b` implements the current approximation,
* `u(p, a, b) -> p` updates the parameter from a training pair `(a, b)`,
* `r(p, a, b) -> a` requests an input which, under the same parameter, would
  have produced an output closer to `b`. This is the backpropagated signal
  handed to the learner upstream.

Learners are combined sequentially (`compose`), in parallel (`product`), and
by relabeling paired inputs (`braid`). Composite learners carry the pair of
their components' parameters, so the training state is always a plain value
threaded by the caller through successive calls to `u`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Tuple, TypeVar

from .errors import DimensionMismatchError, UnsupportedOperationError

P = TypeVar("P")
Q = TypeVar("Q")
A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")
D = TypeVar("D")

Unit = Tuple[()]


@dataclass(frozen=True)
class Learner(Generic[P, A, B]):
    """A supervised learning algorithm for `A -> B` parameterized by `P`."""

    i: Callable[[P, A], B]
    u: Callable[[P, A, B], P]
    r: Callable[[P, A, B], A]

    def then(self, g: Learner[Q, B, C]) -> Learner[Tuple[P, Q], A, C]:
        """Feed this learner's output into `g`. Same as `compose(g, self)`."""
        return compose(g, self)

    def par(self, other: Learner[Q, C, D]) -> Learner[Tuple[P, Q], Tuple[A, C], Tuple[B, D]]:
        """Run beside `other` on paired inputs. Same as `product(self, other)`."""
        return product(self, other)


def _pair(x: Any, what: str) -> Tuple[Any, Any]:
    if not isinstance(x, tuple) or len(x) != 2:
        raise DimensionMismatchError(f"expected a {what} pair, got {x!r}")
    return x


def identity() -> Learner[Unit, A, A]:
    """The identity learner. Its parameter space is the unit `()`."""
    return Learner(
        i=lambda _, a: a,
        u=lambda _p, _a, _b: (),
        r=lambda _p, a, _b: a,
    )


def compose(g: Learner[Q, B, C], f: Learner[P, A, B]) -> Learner[Tuple[P, Q], A, C]:
    """Creates a learner for `A -> C` given learners for `A -> B` and `B -> C`.

    The update trains `g` first on `(f.i(p, a), c)`, then trains `f` towards
    the input `g` requests. Both `g.u` and `g.r` see the parameter `q` from
    before the update.

    Args:
    ----
        g: learner applied second
        f: learner applied first

    Returns:
    -------
        Learner whose parameter is the pair `(p, q)`

    """

    def i(pq: Tuple[P, Q], a: A) -> C:
        p, q = _pair(pq, "parameter")
        b = f.i(p, a)  # feed inputs to f
        return g.i(q, b)  # feed outputs of f into g

    def u(pq: Tuple[P, Q], a: A, c: C) -> Tuple[P, Q]:
        p, q = _pair(pq, "parameter")
        b = f.i(p, a)  # training pair (b, c) for g
        q_new = g.u(q, b, c)
        b_req = g.r(q, b, c)  # request to train f on (a, b_req)
        p_new = f.u(p, a, b_req)
        return (p_new, q_new)

    def r(pq: Tuple[P, Q], a: A, c: C) -> A:
        p, q = _pair(pq, "parameter")
        b = f.i(p, a)
        b_req = g.r(q, b, c)  # backpropagate from g
        return f.r(p, a, b_req)  # backpropagate from f

    return Learner(i=i, u=u, r=r)


def product(
    l1: Learner[P, A, B], l2: Learner[Q, C, D]
) -> Learner[Tuple[P, Q], Tuple[A, C], Tuple[B, D]]:
    """Monoidal product, aka parallel composition.

    Each branch only ever sees its own half of the parameter, input and
    output, so the two may be evaluated independently.
    """

    def i(pq: Tuple[P, Q], ac: Tuple[A, C]) -> Tuple[B, D]:
        p, q = _pair(pq, "parameter")
        a, c = _pair(ac, "input")
        return l1.i(p, a), l2.i(q, c)

    def u(pq: Tuple[P, Q], ac: Tuple[A, C], bd: Tuple[B, D]) -> Tuple[P, Q]:
        p, q = _pair(pq, "parameter")
        a, c = _pair(ac, "input")
        b, d = _pair(bd, "output")
        return l1.u(p, a, b), l2.u(q, c, d)

    def r(pq: Tuple[P, Q], ac: Tuple[A, C], bd: Tuple[B, D]) -> Tuple[A, C]:
        p, q = _pair(pq, "parameter")
        a, c = _pair(ac, "input")
        b, d = _pair(bd, "output")
        return l1.r(p, a, b), l2.r(q, c, d)

    return Learner(i=i, u=u, r=r)


def _swap(x: Tuple[Any, Any]) -> Tuple[Any, Any]:
    a, b = _pair(x, "input")
    return b, a


def braid(l: Learner[P, Tuple[A, B], C]) -> Learner[P, Tuple[B, A], C]:
    """Swap the order of a learner's paired input.

    The request of the inner learner is in its own `(A, B)` order and is
    swapped back to `(B, A)`. Braiding twice gives back the original behavior.
    """
    return Learner(
        i=lambda p, ba: l.i(p, _swap(ba)),
        u=lambda p, ba, c: l.u(p, _swap(ba), c),
        r=lambda p, ba, c: _swap(l.r(p, _swap(ba), c)),
    )


# Bimonoid


def mult(l1: Learner[Unit, A, A], l2: Learner[Unit, A, A]) -> Learner[Unit, Tuple[A, A], A]:
    """Merge two parameterless endolearners by summing their outputs.

    The request hands the residual `c - a2` to both inputs.
    """

    def i(_: Unit, aa: Tuple[A, A]) -> A:
        a1, a2 = _pair(aa, "input")
        return l1.i((), a1) + l2.i((), a2)

    def r(_: Unit, aa: Tuple[A, A], c: A) -> Tuple[A, A]:
        _a1, a2 = _pair(aa, "input")
        residual = c - a2
        return residual, residual

    return Learner(i=i, u=lambda _p, _a, _b: (), r=r)


def comult(l: Learner[Unit, Tuple[A, A], A]) -> Learner[Unit, A, A]:
    """Feed one input to both sides of a paired learner.

    Only the forward map is defined. There is no agreed way to merge the two
    halves of the inner request back into one input, so `u` and `r` raise.
    """

    def unsupported(*_: Any) -> Any:
        raise UnsupportedOperationError("comult defines no update or request")

    return Learner(i=lambda _, a: l.i((), (a, a)), u=unsupported, r=unsupported)
