"""
#############################
Typing (:mod:`dvalue.typing`)
#############################

This module provides type definitions commonly used between modules.

.. autoclass:: Scalar
    :show-inheritance:
    :no-members:

.. autofunction:: isscalar

"""

import numbers
from abc import abstractmethod
from typing import Protocol, Self

import mpmath
import mpmath.ctx_mp_python
import numpy as np


class Scalar(Protocol):
    """Protocol that ensures scalar-like behavior.

    Objects implementing this protocol must have four arithmetic operations and
    power defined, and four arithmetic operations must be compatible with real
    numbers.
    """

    __slots__ = ()

    @abstractmethod
    def __add__(self, rhs: Self | float) -> Self: ...

    @abstractmethod
    def __sub__(self, rhs: Self | float) -> Self: ...

    @abstractmethod
    def __mul__(self, rhs: Self | float) -> Self: ...

    @abstractmethod
    def __truediv__(self, rhs: Self | float) -> Self: ...

    @abstractmethod
    def __pow__(self, rhs: float) -> Self: ...

    @abstractmethod
    def __radd__(self, lhs: Self | float) -> Self: ...

    @abstractmethod
    def __rsub__(self, lhs: Self | float) -> Self: ...

    @abstractmethod
    def __rmul__(self, lhs: Self | float) -> Self: ...

    @abstractmethod
    def __rtruediv__(self, lhs: Self | float) -> Self: ...

    @abstractmethod
    def __neg__(self) -> Self: ...

    @abstractmethod
    def __pos__(self) -> Self: ...


def isscalar(value: object) -> bool:
    """Return ``True`` if `value` is a real number usable as a coefficient.

    Booleans, complex numbers and arrays are not scalars.

    Examples
    --------
    >>> import numpy as np
    >>> isscalar(1.5), isscalar(np.float32(2)), isscalar(np.array([1.0]))
    (True, True, False)
    """
    if isinstance(value, bool | np.bool_):
        return False

    if isinstance(value, mpmath.ctx_mp_python.mpnumeric):
        return not isinstance(value, mpmath.mpc)

    return isinstance(value, numbers.Real)
