from typing import Any, Self, final

import numpy as np
import numpy.typing as npt

from dvalue.context import getcontext
from dvalue.typing import Scalar, isscalar


class DimensionError(ValueError):
    """Error raised when dual values with different numbers of independent variables
    are combined."""


def _promote(value):
    if isinstance(value, np.floating):
        return value

    if isinstance(value, int | float | np.integer):
        return np.float64(value)

    return value


def _zeros(value, n: int) -> npt.NDArray:
    dtype = np.asarray(value).dtype

    if dtype == np.object_:
        return np.full(n, value * 0, dtype=np.object_)

    return np.zeros(n, np.result_type(dtype, np.float16))


@final
class DValue[T: Scalar](Scalar):
    r"""Value carrying its gradient with respect to independent variables.

    Parameters
    ----------
    value : T
    gradient : ArrayLike
        Partial derivatives of `value`, one for each independent variable.

    Attributes
    ----------
    value : T
        Result of the computation. Python integers and floats are stored as
        :class:`numpy.float64`.
    gradient : ndarray
        Read-only one-dimensional array of partial derivatives.

    Warnings
    --------
    Division by zero and arguments outside the domain of a function are not
    checked. The result follows the semantics of `T`; for floating-point numbers it
    contains ``inf`` or ``nan``.

    See Also
    --------
    dvalue.autodiff.seed, dvalue.autodiff.constant

    Notes
    -----
    Instances of this class behave like elements of the dual number ring

    .. math::

        T[\varepsilon_1,\varepsilon_2,\dotsc,\varepsilon_n]/
        (\varepsilon_i\varepsilon_j\mid i,j\in\{1,2,\dotsc,n\}),

    where :math:`n` is the length of `gradient`. Instances can be stored in NumPy
    arrays of ``dtype=object``; matrix products, dot products, and ufuncs such as
    :func:`numpy.sin` then operate on them elementwise.

    Examples
    --------
    >>> x, y = DValue.variable(1.0, 2.0)
    >>> z = x * y + 3
    >>> print(z.value, z.gradient)
    5.0 [2. 1.]
    """

    __slots__ = ("value", "gradient")
    value: T
    gradient: npt.NDArray

    def __init__(self, value: T, gradient: npt.ArrayLike, **kwargs):
        self.value = _promote(value)

        if kwargs.get("_skipcheck"):
            self.gradient = gradient  # type: ignore
            self.gradient.flags.writeable = False
            return

        tmp = np.array(gradient)

        if tmp.ndim != 1 or len(tmp) == 0:
            raise ValueError("gradient must be a non-empty one-dimensional array")

        if tmp.dtype.kind in "biu":
            tmp = tmp.astype(np.float64)

        tmp.flags.writeable = False
        self.gradient = tmp

    @classmethod
    def constant(cls, value: T, n: int | None = None) -> Self:
        """Return `value` as a dual value with a zero gradient.

        If `n` is omitted, the dimension of the current context is used.
        """
        value = _promote(value)
        return cls(value, _zeros(value, getcontext().resolve(n)), _skipcheck=True)

    @classmethod
    def variable(cls, *args: T) -> tuple[Self, ...]:
        """Return the arguments as independent variables in the order given."""
        result: list[Self] = []

        for argnum, arg in enumerate(args):
            arg = _promote(arg)
            gradient = _zeros(arg, len(args))
            gradient[argnum] = gradient[argnum] + 1
            result.append(cls(arg, gradient, _skipcheck=True))

        return tuple(result)

    @property
    def dim(self) -> int:
        """Number of independent variables."""
        return len(self.gradient)

    def _new(self, value, gradient) -> Self:
        return self.__class__(value, gradient, _skipcheck=True)

    def _checkdim(self, other: "DValue") -> None:
        if len(self.gradient) != len(other.gradient):
            raise DimensionError(
                f"dimensions differ: {len(self.gradient)} and {len(other.gradient)}"
            )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(value={self.value!r}, "
            f"gradient={self.gradient.tolist()!r})"
        )

    def __str__(self) -> str:
        gradient = (", ").join(str(x) for x in self.gradient)
        return f"{type(self).__name__}(value={self.value}, gradient=[{gradient}])"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented

        return bool(other.value == self.value) and np.array_equal(
            other.gradient, self.gradient
        )

    def __add__(self, rhs: Self | T | float) -> Self:
        if isinstance(rhs, DValue):
            self._checkdim(rhs)
            return self._new(self.value + rhs.value, self.gradient + rhs.gradient)

        if not isscalar(rhs):
            return NotImplemented

        return self._new(rhs + self.value, self.gradient)

    def __sub__(self, rhs: Self | T | float) -> Self:
        if isinstance(rhs, DValue):
            self._checkdim(rhs)
            return self._new(self.value - rhs.value, self.gradient - rhs.gradient)

        if not isscalar(rhs):
            return NotImplemented

        return self._new(self.value - rhs, self.gradient)

    def __mul__(self, rhs: Self | T | float) -> Self:
        if isinstance(rhs, DValue):
            self._checkdim(rhs)
            gradient = self.value * rhs.gradient + rhs.value * self.gradient
            return self._new(self.value * rhs.value, gradient)

        if not isscalar(rhs):
            return NotImplemented

        return self._new(rhs * self.value, rhs * self.gradient)

    def __truediv__(self, rhs: Self | T | float) -> Self:
        if isinstance(rhs, DValue):
            self._checkdim(rhs)
            s = rhs.value * rhs.value
            gradient = (rhs.value * self.gradient - self.value * rhs.gradient) / s
            return self._new(self.value / rhs.value, gradient)

        if not isscalar(rhs):
            return NotImplemented

        return self._new(self.value / rhs, self.gradient / rhs)

    def __pow__(self, rhs: Self | T | float) -> Self:
        if isinstance(rhs, DValue):
            from dvalue import function as dvf

            return dvf.pow(self, rhs)

        if not isscalar(rhs):
            return NotImplemented

        gradient = rhs * self.value ** (rhs - 1) * self.gradient
        return self._new(self.value**rhs, gradient)

    def __neg__(self) -> Self:
        return self._new(-self.value, -self.gradient)

    def __pos__(self) -> Self:
        return self._new(+self.value, self.gradient)

    def __radd__(self, lhs: T | float) -> Self:
        if not isscalar(lhs):
            return NotImplemented

        return self._new(lhs + self.value, self.gradient)

    def __rsub__(self, lhs: T | float) -> Self:
        if not isscalar(lhs):
            return NotImplemented

        return self._new(lhs - self.value, -self.gradient)

    def __rmul__(self, lhs: T | float) -> Self:
        if not isscalar(lhs):
            return NotImplemented

        return self._new(lhs * self.value, lhs * self.gradient)

    def __rtruediv__(self, lhs: T | float) -> Self:
        if not isscalar(lhs):
            return NotImplemented

        gradient = -lhs / self.value / self.value * self.gradient
        return self._new(lhs / self.value, gradient)

    def __rpow__(self, lhs: T | float) -> Self:
        if not isscalar(lhs):
            return NotImplemented

        from dvalue import function as dvf

        return dvf.pow(lhs, self)

    # Methods looked up by NumPy ufuncs on arrays of dtype=object.

    def conjugate(self) -> Self:
        return self

    def sin(self) -> Self:
        from dvalue import function as dvf

        return dvf.sin(self)

    def cos(self) -> Self:
        from dvalue import function as dvf

        return dvf.cos(self)

    def arctan(self) -> Self:
        from dvalue import function as dvf

        return dvf.atan(self)

    def sqrt(self) -> Self:
        from dvalue import function as dvf

        return dvf.sqrt(self)

    def exp(self) -> Self:
        from dvalue import function as dvf

        return dvf.exp(self)

    def log(self) -> Self:
        from dvalue import function as dvf

        return dvf.log(self)


def asdvalue(value: Any, n: int | None = None) -> DValue:
    """Return `value` unchanged if it is a :class:`DValue`, otherwise lift it to a
    constant."""
    if isinstance(value, DValue):
        return value

    if not isscalar(value):
        raise TypeError(f"cannot convert {type(value).__name__} to DValue")

    return DValue.constant(value, n)

