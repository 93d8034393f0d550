import math

import numpy as np
import pytest
from hypothesis import given
from hypothesis.strategies import floats, lists

from minilearn import (
    DimensionMismatchError,
    DomainError,
    compose,
    dual,
    operators,
    para,
    param_to_learn,
    param_to_learn_dual,
    quadratic_error,
    total_error,
)

from .strategies import small_vectors

SQ = quadratic_error()
unit_vectors = lists(floats(min_value=-1, max_value=1), min_size=2, max_size=2)


def scale(p, a):
    return [p[0] * a[0]]


def scale_learner(rate: float = 0.1):
    return param_to_learn(
        rate,
        SQ.e,
        SQ.gradient,
        SQ.inverse,
        scale,
        lambda p, a: [[p[0]]],
        lambda p, a: [[a[0]]],
    )


def neuron(p, a):
    return [dual.sigmoid(operators.dot(p[:2], a) + p[2])]


def neuron_jacobians():
    def z(p, a):
        return p[0] * a[0] + p[1] * a[1] + p[2]

    def ds(p, a):
        s = operators.sigmoid(z(p, a))
        return s * (1 - s)

    iga = lambda p, a: [[ds(p, a) * p[0], ds(p, a) * p[1]]]  # noqa: E731
    igp = lambda p, a: [[ds(p, a) * a[0], ds(p, a) * a[1], ds(p, a)]]  # noqa: E731
    return iga, igp


def test_gradient_descent_converges() -> None:
    learner = scale_learner(0.1)
    p = np.array([0.0])
    for _ in range(200):
        p = learner.u(p, [1.0], [2.0])
    assert abs(p[0] - 2.0) < 1e-6
    np.testing.assert_allclose(learner.i(p, [1.0]), [2.0], atol=1e-6)


def test_implementation_passes_through() -> None:
    learner = scale_learner()
    np.testing.assert_allclose(learner.i([3.0], [2.0]), [6.0])


def test_update_is_gradient_step() -> None:
    learner = scale_learner(0.5)
    # E = 0.5 (p a - b)^2, dE/dp = (p a - b) a = (3 * 2 - 1) * 2 = 10
    np.testing.assert_allclose(learner.u([3.0], [2.0], [1.0]), [3.0 - 0.5 * 10.0])


def test_request_is_input_minus_gradient() -> None:
    learner = scale_learner()
    # dE/da = (p a - b) p = (3 * 2 - 1) * 3 = 15
    np.testing.assert_allclose(learner.r([3.0], [2.0], [1.0]), [2.0 - 15.0])


def test_update_does_not_mutate_parameter() -> None:
    learner = scale_learner()
    p = np.array([3.0])
    learner.u(p, [2.0], [1.0])
    assert p[0] == 3.0


@given(small_vectors, unit_vectors, floats(min_value=0.1, max_value=0.9))
def test_update_reduces_error(p2, a, b) -> None:
    p = p2 + [0.0]
    iga, igp = neuron_jacobians()
    learner = param_to_learn(0.1, SQ.e, SQ.gradient, SQ.inverse, neuron, iga, igp)
    before = total_error(SQ.e, neuron, p, a, [b])
    after = total_error(SQ.e, neuron, learner.u(p, a, [b]), a, [b])
    assert after <= before + 1e-12


@given(small_vectors, small_vectors, floats(min_value=0.1, max_value=0.9))
def test_dual_jacobians_match_closed_form(p2, a, b) -> None:
    p = p2 + [0.5]
    iga, igp = neuron_jacobians()
    by_hand = param_to_learn(0.1, SQ.e, SQ.gradient, SQ.inverse, neuron, iga, igp)
    by_dual = param_to_learn_dual(0.1, SQ, neuron)

    np.testing.assert_allclose(by_dual.i(p, a), by_hand.i(p, a))
    np.testing.assert_allclose(by_dual.u(p, a, [b]), by_hand.u(p, a, [b]), atol=1e-9)
    np.testing.assert_allclose(by_dual.r(p, a, [b]), by_hand.r(p, a, [b]), atol=1e-9)


def test_total_error() -> None:
    assert total_error(SQ.e, scale, [3.0], [2.0], [1.0]) == pytest.approx(12.5)


def test_composed_learners_train() -> None:
    error = quadratic_error()
    first = param_to_learn_dual(0.05, error, scale)
    second = param_to_learn_dual(0.05, error, lambda p, a: [a[0] + p[0]])
    net = compose(second, first)

    params = (np.array([0.5]), np.array([0.0]))
    data = [([1.0], [3.0]), ([2.0], [5.0]), ([-1.0], [-1.0])]

    def loss(ps):
        return sum(0.5 * (net.i(ps, a)[0] - b[0]) ** 2 for a, b in data)

    start = loss(params)
    for _ in range(300):
        for a, b in data:
            params = net.u(params, a, b)
    assert loss(params) < 0.01 * start
    # The data is fit by 2 a + 1.
    assert params[0][0] == pytest.approx(2.0, abs=0.05)
    assert params[1][0] == pytest.approx(1.0, abs=0.05)


def test_dual_learner_with_scalar_output() -> None:
    def product(p, a):
        return p[0] * a[0]

    by_hand = param_to_learn(
        0.1,
        SQ.e,
        SQ.gradient,
        SQ.inverse,
        product,
        lambda p, a: [[p[0]]],
        lambda p, a: [[a[0]]],
    )
    by_dual = param_to_learn_dual(0.1, SQ, product)
    np.testing.assert_allclose(by_dual.u([0.0], [1.0], [2.0]), [0.2])
    np.testing.assert_allclose(by_dual.u([0.0], [1.0], [2.0]), by_hand.u([0.0], [1.0], [2.0]))
    np.testing.assert_allclose(by_dual.r([0.0], [1.0], [2.0]), by_hand.r([0.0], [1.0], [2.0]))


def test_output_length_mismatch() -> None:
    learner = scale_learner()
    with pytest.raises(DimensionMismatchError):
        learner.u([1.0], [1.0], [1.0, 2.0])
    with pytest.raises(DimensionMismatchError):
        learner.r([1.0], [1.0], [1.0, 2.0])


def test_jacobian_shape_mismatch() -> None:
    learner = param_to_learn(
        0.1,
        SQ.e,
        SQ.gradient,
        SQ.inverse,
        scale,
        lambda p, a: [[1.0, 2.0]],
        lambda p, a: [[1.0], [2.0]],
    )
    with pytest.raises(DimensionMismatchError):
        learner.u([1.0], [1.0], [1.0])
    with pytest.raises(DimensionMismatchError):
        learner.r([1.0], [1.0], [1.0])


def test_parameter_must_be_a_vector() -> None:
    learner = scale_learner()
    with pytest.raises(DimensionMismatchError):
        learner.u([[1.0]], [1.0], [1.0])


def test_singular_inverse_propagates() -> None:
    learner = param_to_learn(
        0.1,
        SQ.e,
        SQ.gradient,
        lambda x, g: x / g,
        scale,
        lambda p, a: [[p[0]]],
        lambda p, a: [[a[0]]],
    )
    # Exact fit: the error gradient is zero.
    with pytest.raises(ZeroDivisionError):
        learner.r([1.0], [2.0], [2.0])


def test_non_finite_request_raises() -> None:
    learner = param_to_learn(
        0.1,
        SQ.e,
        SQ.gradient,
        lambda x, g: math.inf,
        scale,
        lambda p, a: [[p[0]]],
        lambda p, a: [[a[0]]],
    )
    with pytest.raises(DomainError):
        learner.r([1.0], [2.0], [3.0])


def test_non_finite_update_raises() -> None:
    learner = param_to_learn(
        0.1,
        SQ.e,
        SQ.gradient,
        SQ.inverse,
        scale,
        lambda p, a: [[p[0]]],
        lambda p, a: [[math.inf]],
    )
    with pytest.raises(DomainError):
        learner.u([1.0], [2.0], [3.0])


def test_error_function_domain_errors_propagate() -> None:
    learner = param_to_learn(
        0.1,
        lambda x, y: operators.log(x - y),
        lambda x, y: operators.inv(x - y),
        lambda x, g: x - operators.inv(g),
        scale,
        lambda p, a: [[p[0]]],
        lambda p, a: [[a[0]]],
    )
    with pytest.raises(DomainError):
        learner.u([1.0], [2.0], [2.0])


def test_para_compose() -> None:
    f = para.compose(scale, para.identity)
    assert f([3.0], [2.0]) == [6.0]
    twice = para.compose(scale, scale)
    assert twice([3.0], [2.0]) == [18.0]
