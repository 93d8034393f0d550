import math
from typing import Callable

import pytest
from hypothesis import assume, given

import minilearn
from minilearn import Dual, DomainError, UnsupportedOperationError, derivative_check, dual

from .strategies import assert_close, positive_floats, small_floats, unit_floats

one_arg = [
    ("neg", lambda a: -a, small_floats),
    ("sqr", dual.sqr, small_floats),
    ("exp", dual.exp, small_floats),
    ("sin", dual.sin, small_floats),
    ("cos", dual.cos, small_floats),
    ("sigmoid", dual.sigmoid, small_floats),
    ("log", dual.log, positive_floats),
    ("sqrt", dual.sqrt, positive_floats),
    ("inv", dual.inv, positive_floats),
    ("asin", dual.asin, unit_floats),
    ("acos", dual.acos, unit_floats),
    ("compound", lambda a: dual.log(dual.sqr(a) + 1.0) * dual.sin(a), small_floats),
]

two_arg = [
    ("add", lambda a, b: a + b),
    ("sub", lambda a, b: a - b),
    ("mul", lambda a, b: a * b),
    ("div", lambda a, b: a / (dual.sqr(b) + 1.0)),
    ("mixed", lambda a, b: dual.exp(a * 0.1) * dual.cos(b) - 3.0 * a),
]


@pytest.mark.parametrize("name, fn, strategy", one_arg, ids=[t[0] for t in one_arg])
def test_one_arg_derivative(name: str, fn: Callable, strategy) -> None:
    @given(strategy)
    def check(a: float) -> None:
        derivative_check(fn, a)

    check()


@pytest.mark.parametrize("name, fn", two_arg, ids=[t[0] for t in two_arg])
@given(small_floats, small_floats)
def test_two_arg_derivative(name: str, fn: Callable, a: float, b: float) -> None:
    derivative_check(fn, a, b)


@given(small_floats)
def test_kinks_away_from_zero(a: float) -> None:
    assume(abs(a) > 1e-3)
    derivative_check(dual.abs, a)
    derivative_check(dual.relu, a)


def test_sqrt_sin_concrete() -> None:
    x = dual.sqrt(dual.sin(Dual(2.0, 1.0)))
    assert x.value == pytest.approx(math.sqrt(math.sin(2.0)))
    assert x.derivative == pytest.approx(math.cos(2.0) / (2 * math.sqrt(math.sin(2.0))))


def test_konst_and_id() -> None:
    assert dual.konst(3.0) == Dual(3.0, 0.0)
    assert dual.id(3.0) == Dual(3.0, 1.0)
    assert minilearn.konst(2) == Dual(2.0, 0.0)


def test_product_rule() -> None:
    # a' * b' would give 0 here.
    assert dual.mul(Dual(3.0, 1.0), Dual(4.0, 0.0)) == Dual(12.0, 4.0)
    assert dual.mul(Dual(3.0, 2.0), Dual(4.0, 5.0)) == Dual(12.0, 23.0)


@given(small_floats)
def test_square_derivative(x: float) -> None:
    d = dual.id(x) * dual.id(x)
    assert_close(d.value, x * x)
    assert_close(d.derivative, 2 * x)


def test_mixed_with_numbers() -> None:
    x = dual.id(3.0)
    assert 2.0 * x == Dual(6.0, 2.0)
    assert x + 1 == Dual(4.0, 1.0)
    assert 5 - x == Dual(2.0, -1.0)
    assert x - 5 == Dual(-2.0, 1.0)
    assert 1.0 / dual.id(2.0) == Dual(0.5, -0.25)
    assert abs(dual.Dual(-2.0, 1.0)) == Dual(2.0, -1.0)
    assert float(x) == 3.0


def test_methods_match_functions() -> None:
    x = Dual(0.3, 2.0)
    assert x.exp() == dual.exp(x)
    assert x.log() == dual.log(x)
    assert x.sqrt() == dual.sqrt(x)
    assert x.sin() == dual.sin(x)
    assert x.cos() == dual.cos(x)
    assert x.sigmoid() == dual.sigmoid(x)
    assert x.relu() == dual.relu(x)


def test_constants_are_constant() -> None:
    assert dual.exp(1.0) == Dual(math.e, 0.0)
    # Boundary points are fine when nothing depends on the variable.
    assert dual.sqrt(dual.konst(0.0)) == Dual(0.0, 0.0)
    assert dual.asin(dual.konst(1.0)).derivative == 0.0


@pytest.mark.parametrize(
    "fn, x",
    [
        (dual.log, dual.konst(0.0)),
        (dual.log, dual.id(-1.0)),
        (dual.sqrt, dual.id(-4.0)),
        (dual.sqrt, dual.id(0.0)),
        (dual.asin, dual.id(1.5)),
        (dual.asin, dual.id(1.0)),
        (dual.acos, dual.id(-1.0)),
        (dual.inv, dual.id(0.0)),
    ],
)
def test_domain_errors(fn: Callable, x: Dual) -> None:
    with pytest.raises(DomainError):
        fn(x)


def test_no_generic_one() -> None:
    with pytest.raises(UnsupportedOperationError):
        Dual.one()


def test_value_of() -> None:
    assert dual.value_of(Dual(1.5, 3.0)) == 1.5
    assert dual.value_of(2) == 2.0
