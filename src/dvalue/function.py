"""
###############################################
Mathematical functions (:mod:`dvalue.function`)
###############################################

.. currentmodule:: dvalue.function

This module provides mathematical functions. Each function accepts Python and NumPy
real numbers, :mod:`mpmath` numbers, and :class:`~dvalue.autodiff.DValue`; for the
latter, the gradient is propagated by the chain rule.

Trigonometric functions
=======================

.. autosummary::
    :toctree: generated/

    atan
    cos
    sin

Power, exponents, and logarithmic functions
===========================================

.. autosummary::
    :toctree: generated/

    exp
    log
    pow
    sqrt

Notes
-----
Floating-point arguments are evaluated with NumPy, so that arguments outside the
domain yield ``nan`` (with a :class:`RuntimeWarning`) instead of raising.
"""

from typing import Any, overload

import mpmath
import mpmath.ctx_mp_python
import numpy as np

from dvalue.autodiff.autodiff import _defderiv, _primitive
from dvalue.autodiff.dual import DValue


def _asfloat(x):
    return x if isinstance(x, np.floating) else np.float64(x)


@overload
def sin[T](x: DValue[T], /) -> DValue[T]: ...


@overload
def sin(x: float | int, /) -> float: ...


@overload
def sin(x: Any, /) -> Any: ...


@_primitive
def sin(x, /):
    """Sine.

    Examples
    --------
    >>> from dvalue.autodiff import variables
    >>> print(format(sin(1.0), ".6f"))
    0.841471
    >>> x, y = variables(1.0, 2.0)
    >>> w = sin(x)
    >>> print(format(w.value, ".4f"), format(w.gradient[0], ".4f"))
    0.8415 0.5403
    """
    match x:
        case mpmath.ctx_mp_python.mpnumeric():
            return mpmath.sin(x)

        case float() | int() | np.integer() | np.floating():
            return np.sin(_asfloat(x))

        case _:
            raise TypeError(f"unsupported type: {type(x).__name__}")


@overload
def cos[T](x: DValue[T], /) -> DValue[T]: ...


@overload
def cos(x: float | int, /) -> float: ...


@overload
def cos(x: Any, /) -> Any: ...


@_primitive
def cos(x, /):
    """Cosine.

    Examples
    --------
    >>> print(format(cos(1.0), ".6f"))
    0.540302
    """
    match x:
        case mpmath.ctx_mp_python.mpnumeric():
            return mpmath.cos(x)

        case float() | int() | np.integer() | np.floating():
            return np.cos(_asfloat(x))

        case _:
            raise TypeError(f"unsupported type: {type(x).__name__}")


@overload
def atan[T](x: DValue[T], /) -> DValue[T]: ...


@overload
def atan(x: float | int, /) -> float: ...


@overload
def atan(x: Any, /) -> Any: ...


@_primitive
def atan(x, /):
    """Inverse tangent.

    Examples
    --------
    >>> print(format(atan(2.0), ".6f"))
    1.107149
    """
    match x:
        case mpmath.ctx_mp_python.mpnumeric():
            return mpmath.atan(x)

        case float() | int() | np.integer() | np.floating():
            return np.arctan(_asfloat(x))

        case _:
            raise TypeError(f"unsupported type: {type(x).__name__}")


@overload
def exp[T](x: DValue[T], /) -> DValue[T]: ...


@overload
def exp(x: float | int, /) -> float: ...


@overload
def exp(x: Any, /) -> Any: ...


@_primitive
def exp(x, /):
    """Exponential.

    Examples
    --------
    >>> print(format(exp(2), ".6f"))
    7.389056
    """
    match x:
        case mpmath.ctx_mp_python.mpnumeric():
            return mpmath.exp(x)

        case float() | int() | np.integer() | np.floating():
            return np.exp(_asfloat(x))

        case _:
            raise TypeError(f"unsupported type: {type(x).__name__}")


@overload
def log[T](x: DValue[T], /) -> DValue[T]: ...


@overload
def log(x: float | int, /) -> float: ...


@overload
def log(x: Any, /) -> Any: ...


@_primitive
def log(x, /):
    """Natural logarithm.

    Examples
    --------
    >>> print(format(log(5), ".6f"))
    1.609438
    """
    match x:
        case mpmath.ctx_mp_python.mpnumeric():
            return mpmath.log(x)

        case float() | int() | np.integer() | np.floating():
            return np.log(_asfloat(x))

        case _:
            raise TypeError(f"unsupported type: {type(x).__name__}")


@overload
def pow[T](x: DValue[T] | float | int, y: DValue[T], /) -> DValue[T]: ...


@overload
def pow[T](x: DValue[T], y: float | int, /) -> DValue[T]: ...


@overload
def pow(x: float | int, y: float | int, /) -> float: ...


@overload
def pow(x: Any, y: Any, /) -> Any: ...


@_primitive
def pow(x, y, /):
    """`x` raised to the power `y`.

    Examples
    --------
    >>> print(format(pow(3.25, 1.25), ".6f"))
    4.363693
    """
    mpnumeric = mpmath.ctx_mp_python.mpnumeric

    match x, y:
        case (mpnumeric(), _) | (_, mpnumeric()):
            return mpmath.power(x, y)

        case (
            float() | int() | np.integer() | np.floating(),
            float() | int() | np.integer() | np.floating(),
        ):
            return np.power(_asfloat(x), _asfloat(y))

        case _:
            raise TypeError(
                f"unsupported types: {type(x).__name__} and {type(y).__name__}"
            )


@overload
def sqrt[T](x: DValue[T], /) -> DValue[T]: ...


@overload
def sqrt(x: float | int, /) -> float: ...


@overload
def sqrt(x: Any, /) -> Any: ...


@_primitive
def sqrt(x, /):
    """Square root.

    Examples
    --------
    >>> print(format(sqrt(2.0), ".6f"))
    1.414214
    """
    match x:
        case mpmath.ctx_mp_python.mpnumeric():
            return mpmath.sqrt(x)

        case float() | int() | np.integer() | np.floating():
            return np.sqrt(_asfloat(x))

        case _:
            raise TypeError(f"unsupported type: {type(x).__name__}")


_defderiv(sin, cos)
_defderiv(cos, lambda x: -sin(x))
_defderiv(atan, lambda x: 1.0 / (1 + x * x))
_defderiv(exp, exp)
_defderiv(log, lambda x: 1 / x)
_defderiv(pow, lambda x, y: y * pow(x, y - 1), argnum=0)
_defderiv(pow, lambda x, y: log(x) * pow(x, y), argnum=1)
_defderiv(sqrt, lambda x: 1.0 / 2.0 / sqrt(x))
