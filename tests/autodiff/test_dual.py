import mpmath
import numpy as np
import pytest

from dvalue import function as dvf
from dvalue.autodiff import DimensionError, DValue, approx_grad, constant, seed


def test_construction():
    gradient = np.array([1.0, 2.0])
    x = DValue(3.0, gradient)
    gradient[0] = 9.0
    assert x.value == 3.0
    assert x.dim == 2
    np.testing.assert_array_equal(x.gradient, [1.0, 2.0])

    y = DValue(1, [1, 0, 0])
    assert y.gradient.dtype == np.float64
    assert isinstance(y.value, np.float64)

    with pytest.raises(ValueError):
        DValue(1.0, [])

    with pytest.raises(ValueError):
        DValue(1.0, [[1.0, 0.0]])


def test_gradient_is_read_only():
    x = seed(0, 1.0, 2)

    with pytest.raises(ValueError):
        x.gradient[1] = 5.0


def test_variable():
    x, y = DValue.variable(1.0, 2.0)
    assert x == DValue(1.0, [1.0, 0.0])
    assert y == DValue(2.0, [0.0, 1.0])


def test_equality():
    x = DValue(1.0, [1.0, 0.0])
    assert x == DValue(1.0, [1.0, 0.0])
    assert x != DValue(1.0, [0.0, 1.0])
    assert x != DValue(2.0, [1.0, 0.0])
    assert x != DValue(1.0, [1.0, 0.0, 0.0])
    assert x != 1.0

    with pytest.raises(TypeError):
        hash(x)


def test_repr():
    x = DValue(mpmath.mpf(1), [mpmath.mpf(0)])
    assert repr(x) == "DValue(value=mpf('1.0'), gradient=[mpf('0.0')])"
    assert str(seed(0, 1.5, 2)) == "DValue(value=1.5, gradient=[1.0, 0.0])"


def test_scalar_arithmetic():
    x = DValue(2.0, [1.0, 3.0])

    assert x + 1.5 == DValue(3.5, [1.0, 3.0])
    assert 1.5 + x == DValue(3.5, [1.0, 3.0])
    assert x - 1.5 == DValue(0.5, [1.0, 3.0])
    assert 1.5 - x == DValue(-0.5, [-1.0, -3.0])
    assert x * 2 == DValue(4.0, [2.0, 6.0])
    assert 2 * x == DValue(4.0, [2.0, 6.0])
    assert x / 2 == DValue(1.0, [0.5, 1.5])
    assert 4 / x == DValue(2.0, [-1.0, -3.0])
    assert -x == DValue(-2.0, [-1.0, -3.0])
    assert +x == x
    assert x**3 == DValue(8.0, [12.0, 36.0])


def test_dual_arithmetic():
    x = DValue(2.0, [1.0, 0.0])
    y = DValue(4.0, [0.0, 1.0])

    assert x + y == DValue(6.0, [1.0, 1.0])
    assert x - y == DValue(-2.0, [1.0, -1.0])
    assert x * y == DValue(8.0, [4.0, 2.0])
    assert x / y == DValue(0.5, [0.25, -0.125])


def test_compound_assignment():
    x = seed(0, 2.0, 2)
    y = seed(1, 4.0, 2)
    z = x

    z += y
    assert z == x + y
    assert x == DValue(2.0, [1.0, 0.0])

    z -= 1.0
    z *= y
    z /= x
    assert z == (x + y - 1.0) * y / x


def test_operators_match_finite_differences():
    def f(x, y):
        return (x * y - 3.0 / y + x / (y - 0.5) - 2.0 * x) / (1.0 + x * x)

    x, y = DValue.variable(0.7, 1.9)
    np.testing.assert_allclose(f(x, y).gradient, approx_grad(f, 0.7, 1.9), rtol=1e-6)


def test_dimension_mismatch():
    x = seed(0, 1.0, 2)
    y = seed(0, 1.0, 3)

    for op in (
        lambda a, b: a + b,
        lambda a, b: a - b,
        lambda a, b: a * b,
        lambda a, b: a / b,
        lambda a, b: a**b,
    ):
        with pytest.raises(DimensionError):
            op(x, y)


def test_unsupported_operand():
    x = seed(0, 1.0, 2)

    with pytest.raises(TypeError):
        x + "1"

    with pytest.raises(TypeError):
        [1.0] * x

    with pytest.raises(TypeError):
        x * 1j


def test_division_by_zero():
    x = seed(0, 1.0, 2)
    zero = seed(1, 0.0, 2)

    with np.errstate(divide="ignore", invalid="ignore"):
        z = x / zero
        w = x / 0.0
        v = 1.0 / constant(0.0, 2)

    assert z.value == np.inf
    assert np.isnan(z.gradient[0]) and z.gradient[1] == -np.inf
    assert w.value == np.inf and w.gradient[0] == np.inf
    assert v.value == np.inf


def test_numpy_scalars():
    x = seed(0, 1.5, 2)
    assert isinstance(np.float64(2.0) * x, DValue)
    assert np.float64(2.0) * x == 2.0 * x
    assert x + np.int64(1) == DValue(2.5, [1.0, 0.0])


def test_numpy_arrays():
    x, y = DValue.variable(1.0, 2.0)

    scaled = x * np.array([1.0, 2.0])
    assert scaled.dtype == object
    assert scaled[1] == DValue(2.0, [2.0, 0.0])
    assert (np.array([1.0, 2.0]) * x)[1] == scaled[1]

    v = np.array([x, y], dtype=object)
    assert np.sin(v)[0] == dvf.sin(x)
    assert np.sqrt(v)[1] == dvf.sqrt(y)
    assert np.arctan(v)[1] == dvf.atan(y)
    assert np.cos(v)[0] == dvf.cos(x)
    assert np.exp(v)[0] == dvf.exp(x)
    assert np.log(v)[1] == dvf.log(y)
    assert v.dot(v) == x * x + y * y
    assert np.vdot(v, v) == x * x + y * y


def test_mpmath():
    x, y = DValue.variable(mpmath.mpf(1), mpmath.mpf(2))
    r = dvf.sqrt(x * x + y * y)
    assert r.value == mpmath.sqrt(5)
    assert r.gradient.dtype == object
    assert pytest.approx(float(r.gradient[0])) == 1 / np.sqrt(5)
    assert pytest.approx(float(r.gradient[1])) == 2 / np.sqrt(5)

    with mpmath.workdps(50):
        z = dvf.sqrt(seed(0, mpmath.mpf(2), 1))
        error = z.gradient[0] - 1 / (2 * mpmath.sqrt(2))
        assert abs(error) < mpmath.mpf(10) ** -45
