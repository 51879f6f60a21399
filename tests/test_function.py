import math

import mpmath
import numpy as np
import pytest

from dvalue import function as dvf
from dvalue.autodiff import DimensionError, DValue, approx_grad, constant, seed


def test_scalar_evaluation():
    assert pytest.approx(dvf.sin(1.0)) == math.sin(1.0)
    assert pytest.approx(dvf.cos(1)) == math.cos(1.0)
    assert pytest.approx(dvf.atan(2.0)) == math.atan(2.0)
    assert pytest.approx(dvf.sqrt(2.0)) == math.sqrt(2.0)
    assert pytest.approx(dvf.exp(2)) == math.exp(2.0)
    assert pytest.approx(dvf.log(5)) == math.log(5.0)
    assert pytest.approx(dvf.pow(2, -1)) == 0.5
    assert isinstance(dvf.sqrt(mpmath.mpf(2)), mpmath.mpf)
    assert dvf.sin(np.float32(1.0)).dtype == np.float32

    with pytest.raises(TypeError):
        dvf.sin("1.0")

    with pytest.raises(TypeError):
        dvf.pow(2.0, "1.0")


def test_chain_rule():
    x = DValue(0.8, [1.0, -2.0])
    v = np.float64(0.8)

    assert dvf.sin(x) == DValue(np.sin(v), np.cos(v) * x.gradient)
    assert dvf.cos(x) == DValue(np.cos(v), -np.sin(v) * x.gradient)
    assert dvf.atan(x) == DValue(np.arctan(v), 1.0 / (1 + v * v) * x.gradient)
    assert dvf.sqrt(x) == DValue(np.sqrt(v), 1.0 / 2.0 / np.sqrt(v) * x.gradient)
    assert dvf.exp(x) == DValue(np.exp(v), np.exp(v) * x.gradient)
    assert dvf.log(x) == DValue(np.log(v), 1 / v * x.gradient)


@pytest.mark.parametrize(
    "fun",
    [dvf.sin, dvf.cos, dvf.atan, dvf.sqrt, dvf.exp, dvf.log],
    ids=lambda fun: fun.__name__,
)
def test_matches_finite_differences(fun):
    def f(x, y):
        return fun(x * y + 0.25) * y

    x, y = DValue.variable(0.6, 1.3)
    np.testing.assert_allclose(fun(x * y + 0.25).value, fun(0.6 * 1.3 + 0.25))
    np.testing.assert_allclose(f(x, y).gradient, approx_grad(f, 0.6, 1.3), rtol=1e-6)


def test_pow():
    x, y = DValue.variable(1.7, 0.6)

    z = dvf.pow(x, y)
    np.testing.assert_allclose(z.gradient, approx_grad(dvf.pow, 1.7, 0.6), rtol=1e-6)
    assert x**y == z

    w = dvf.pow(2.0, y)
    np.testing.assert_allclose(w.gradient, [0.0, math.log(2.0) * 2.0**0.6])
    assert 2.0**y == w

    u = dvf.pow(x, 3)
    np.testing.assert_allclose(u.gradient, [3 * 1.7**2, 0.0])

    with pytest.raises(DimensionError):
        dvf.pow(x, seed(0, 1.0, 3))


def test_constant_argument():
    c = dvf.sin(constant(1.0, 3))
    np.testing.assert_array_equal(c.gradient, np.zeros(3))


def test_domain_errors_propagate():
    with np.errstate(divide="ignore", invalid="ignore"):
        negative = dvf.sqrt(seed(0, -1.0, 1))
        zero = dvf.sqrt(seed(0, 0.0, 1))
        log = dvf.log(seed(0, 0.0, 1))

    assert np.isnan(negative.value) and np.isnan(negative.gradient[0])
    assert zero.value == 0.0 and zero.gradient[0] == np.inf
    assert log.value == -np.inf and log.gradient[0] == np.inf


def test_domain_errors_warn():
    with pytest.warns(RuntimeWarning):
        dvf.sqrt(-1.0)
