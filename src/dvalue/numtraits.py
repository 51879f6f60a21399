"""
#######################################
Scalar traits (:mod:`dvalue.numtraits`)
#######################################

.. currentmodule:: dvalue.numtraits

This module describes scalar types to generic numerical code. Each scalar type is
associated with a :class:`NumTraits` record; :class:`dvalue.autodiff.DValue`
derives its record from the one of its underlying scalar type.

.. autosummary::
    :toctree: generated/

    NumTraits
    numtraits
    register

"""

import dataclasses
from typing import Any

import mpmath
import mpmath.ctx_mp_python
import numpy as np

from dvalue.autodiff.dual import DValue


@dataclasses.dataclass(frozen=True, slots=True)
class NumTraits:
    """Static description of a scalar type.

    Attributes
    ----------
    real : type
        Type of the magnitude of a scalar.
    nonint : type
        Type that results from dividing two scalars.
    is_complex : bool
    is_integer : bool
    is_signed : bool
    require_initialization : bool
        Whether a zero-filled memory block is not a valid scalar.
    read_cost : int
    add_cost : int
    mul_cost : int
        Relative costs of reading, adding, and multiplying scalars. They are rough
        hints; only their order matters.
    epsilon
        Machine epsilon of the type.
    dtype : numpy.dtype
        Data type of NumPy arrays holding the scalars.
    """

    real: type
    nonint: type
    is_complex: bool
    is_integer: bool
    is_signed: bool
    require_initialization: bool
    read_cost: int
    add_cost: int
    mul_cost: int
    epsilon: Any
    dtype: np.dtype


_registry: dict[type, NumTraits] = {}


def register(tp: type, traits: NumTraits) -> None:
    """Associate `traits` with the scalar type `tp`.

    Subclasses of `tp` share the registration unless they are registered
    themselves.
    """
    if tp is DValue:
        raise TypeError("traits of DValue are derived from its scalar type")

    _registry[tp] = traits


def _lookup(tp: type) -> NumTraits:
    for cls in tp.__mro__:
        if (traits := _registry.get(cls)) is not None:
            return traits

    raise TypeError(f"no traits registered for {tp.__name__}")


def numtraits(x: Any) -> NumTraits:
    """Return the traits of a scalar type or of the type of a scalar.

    Parameters
    ----------
    x : type | object
        Scalar type, or scalar. For :class:`~dvalue.autodiff.DValue`, the traits
        depend on the type of its value; the type alone is assumed to hold
        :class:`numpy.float64`.

    Raises
    ------
    TypeError
        If no traits are registered for the type.

    Examples
    --------
    >>> from dvalue.autodiff import DValue
    >>> traits = numtraits(DValue)
    >>> traits.real is DValue, traits.is_complex, traits.require_initialization
    (True, False, True)
    >>> print(traits.read_cost, traits.add_cost, traits.mul_cost)
    1 3 3
    """
    if isinstance(x, DValue):
        base = _lookup(type(x.value))
    elif x is DValue:
        base = _lookup(np.float64)
    elif isinstance(x, type):
        return _lookup(x)
    else:
        return _lookup(type(x))

    return dataclasses.replace(
        base,
        real=DValue,
        nonint=DValue,
        is_complex=False,
        is_integer=False,
        is_signed=True,
        require_initialization=True,
        read_cost=1,
        add_cost=3,
        mul_cost=3,
        dtype=np.dtype(np.object_),
    )


def _floating(tp: type, real: type | None = None) -> NumTraits:
    return NumTraits(
        real=real or tp,
        nonint=real or tp,
        is_complex=False,
        is_integer=False,
        is_signed=True,
        require_initialization=False,
        read_cost=1,
        add_cost=1,
        mul_cost=1,
        epsilon=np.finfo(tp).eps,
        dtype=np.dtype(tp),
    )


register(float, _floating(np.float64, float))
register(np.float16, _floating(np.float16))
register(np.float32, _floating(np.float32))
register(np.float64, _floating(np.float64))
register(np.longdouble, _floating(np.longdouble))
register(
    int,
    dataclasses.replace(
        _floating(np.float64, int),
        nonint=float,
        is_integer=True,
        epsilon=0,
        dtype=np.dtype(np.int64),
    ),
)
register(
    np.integer,
    dataclasses.replace(
        _floating(np.float64, np.int64),
        nonint=np.float64,
        is_integer=True,
        epsilon=0,
        dtype=np.dtype(np.int64),
    ),
)
register(
    mpmath.ctx_mp_python._mpf,
    NumTraits(
        real=mpmath.mpf,
        nonint=mpmath.mpf,
        is_complex=False,
        is_integer=False,
        is_signed=True,
        require_initialization=True,
        read_cost=1,
        add_cost=10,
        mul_cost=10,
        epsilon=mpmath.mp.eps,
        dtype=np.dtype(np.object_),
    ),
)
