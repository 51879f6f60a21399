import functools
import itertools
import logging
from collections.abc import Callable, Iterable
from typing import Any

import numpy as np
import numpy.typing as npt

from dvalue.autodiff.dual import DimensionError, DValue, _promote, _zeros, asdvalue
from dvalue.context import getcontext

logger = logging.getLogger(__name__)


def seed[T](i: int, x: T, n: int | None = None) -> DValue[T]:
    """Return the `i`-th independent variable taking the value `x`.

    Parameters
    ----------
    i : int
        Index of the variable.
    x : T
        Value of the variable.
    n : int, optional
        Number of independent variables. If omitted, the dimension of the current
        context is used.

    Raises
    ------
    IndexError
        If `i` is not in ``range(n)``.

    Examples
    --------
    >>> x = seed(0, 1.0, 2)
    >>> y = seed(1, 2.0, 2)
    >>> print(x.gradient, y.gradient)
    [1. 0.] [0. 1.]
    """
    n = getcontext().resolve(n)

    if not 0 <= i < n:
        raise IndexError(f"variable index {i} is out of range for dimension {n}")

    x = _promote(x)
    gradient = _zeros(x, n)
    gradient[i] = gradient[i] + 1
    return DValue(x, gradient, _skipcheck=True)


def variables[T](*args: T) -> tuple[DValue[T], ...]:
    """Return the arguments as independent variables.

    The number of variables is the number of arguments, and the `i`-th argument
    becomes the `i`-th variable.

    Examples
    --------
    >>> x, y, z = variables(1.0, 2.0, 3.0)
    >>> print(z.gradient)
    [0. 0. 1.]
    """
    if not args:
        raise ValueError("at least one variable is required")

    return DValue.variable(*args)


def constant[T](x: T, n: int | None = None) -> DValue[T]:
    """Return `x` as a dual value whose gradient is zero.

    If `n` is omitted, the dimension of the current context is used.
    """
    return DValue.constant(x, n)


def _items(a: npt.NDArray) -> Iterable[tuple[tuple[int, ...], Any]]:
    for key in itertools.product(*(range(k) for k in a.shape)):
        yield key, a[key]


def lift(a: npt.ArrayLike, n: int | None = None) -> npt.NDArray | DValue:
    """Convert each element of `a` into a constant dual value.

    Parameters
    ----------
    a : ArrayLike
        Array of scalars. Elements that are already :class:`DValue` are kept.
    n : int, optional
        Number of independent variables. If omitted, the dimension of the current
        context is used.

    Returns
    -------
    ndarray | DValue
        Array of ``dtype=object`` with the same shape as `a`. If `a` is a scalar, a
        single :class:`DValue` is returned.

    Raises
    ------
    DimensionError
        If an element of `a` is a :class:`DValue` of another dimension.

    Examples
    --------
    >>> import numpy as np
    >>> x, y = variables(1.0, 2.0)
    >>> b = lift(np.array([3.0, 4.0]), 2) * x + y
    >>> print(b[1].value, b[1].gradient)
    6.0 [4. 1.]
    """
    n = getcontext().resolve(n)

    if isinstance(a, DValue):
        _checkdim(a, n)
        return a

    tmp = np.asarray(a)

    if tmp.ndim == 0:
        return asdvalue(tmp[()], n)

    logger.debug("lifting array of shape %s to dimension %d", tmp.shape, n)
    result = np.empty(tmp.shape, np.object_)

    for key, x in _items(tmp):
        if isinstance(x, DValue):
            _checkdim(x, n)

        result[key] = asdvalue(x, n)

    return result


def values(a: Any) -> Any:
    """Return the values of dual values in `a`.

    Plain scalars in `a` are returned unchanged. If `a` is a single
    :class:`DValue`, its value is returned.

    Examples
    --------
    >>> x, y = variables(1.0, 2.0)
    >>> print(values([x + y, x * y]))
    [3. 2.]
    """
    if isinstance(a, DValue):
        return a.value

    tmp = np.asarray(a, np.object_)

    if tmp.ndim == 0:
        return tmp[()]

    flat = [x.value if isinstance(x, DValue) else x for _, x in _items(tmp)]
    return np.array(flat).reshape(tmp.shape)


def gradients(a: Any, n: int | None = None) -> npt.NDArray:
    """Return the gradients of dual values in `a` stacked along a new last axis.

    Plain scalars in `a` are treated as constants. The number of independent
    variables is taken from the dual values in `a`, then from `n`, and finally from
    the current context.

    Returns
    -------
    ndarray
        Array of shape ``a.shape + (n,)``.

    Raises
    ------
    DimensionError
        If the dual values in `a` have different dimensions.
    """
    tmp = np.asarray(a, np.object_)
    n = _resolve_dim(tmp.flat, n)
    rows = {key: _lift_checked(x, n).gradient for key, x in _items(tmp)}
    dtype = np.result_type(*(x.dtype for x in rows.values())) if rows else np.float64
    result = np.empty((*tmp.shape, n), dtype)

    for key, row in rows.items():
        result[key] = row

    return result


def jacobian(outputs: npt.ArrayLike | Iterable[Any]) -> npt.NDArray:
    """Return the Jacobian matrix whose `i`-th row is the gradient of ``outputs[i]``.

    Parameters
    ----------
    outputs : ArrayLike | Iterable
        Components of a vector-valued function: a sequence, or an array of shape
        ``(m,)`` or ``(m, 1)``. Plain scalars are treated as constants.

    Returns
    -------
    ndarray
        Matrix of shape ``(m, n)``.

    Raises
    ------
    ValueError
        If `outputs` is empty or not a vector.
    DimensionError
        If the dual values in `outputs` have different dimensions.

    Examples
    --------
    >>> from dvalue import function as dvf
    >>> x, y = variables(1.0, 2.0)
    >>> r = dvf.sqrt(x * x + y * y)
    >>> angle = dvf.atan(y / x)
    >>> print(np.round(jacobian([r, angle]), 4))
    [[ 0.4472  0.8944]
     [-0.4     0.2   ]]
    """
    if isinstance(outputs, DValue):
        raise ValueError("outputs must be a vector, not a single DValue")

    if isinstance(outputs, np.ndarray):
        if not (outputs.ndim == 1 or (outputs.ndim == 2 and outputs.shape[1] == 1)):
            raise ValueError(f"outputs must be a vector, got shape {outputs.shape}")

        items = list(outputs.ravel())
    else:
        items = list(outputs)

    if len(items) == 0:
        raise ValueError("outputs must not be empty")

    n = _resolve_dim(items, None)
    rows = [_lift_checked(x, n).gradient for x in items]
    logger.debug("assembling %dx%d jacobian", len(rows), n)
    result = np.empty((len(rows), n), np.result_type(*(x.dtype for x in rows)))

    for i, row in enumerate(rows):
        result[i] = row

    return result


def deriv(fun: Callable[..., Any]) -> Callable[..., Any]:
    """Return a function that evaluates the derivative of the univariate scalar-valued
    function.

    Parameters
    ----------
    fun : Callable
        Differentiated function.

    Returns
    -------
    Callable
        Derivative of `fun`.

    Warnings
    --------
    `fun` must not contain conditional branches depending on its argument.

    Examples
    --------
    >>> from dvalue import function as dvf
    >>> f = lambda x: x**2 + dvf.sqrt(x + 3)
    >>> df = deriv(f)
    >>> print(format(df(1.2), ".6g"))
    2.64398
    """

    def result(x, /, **kwargs):
        tmp = fun(*DValue.variable(x), **kwargs)
        return _lift_checked(tmp, 1).gradient[0]

    return result


def grad(fun: Callable[..., Any]) -> Callable[..., npt.NDArray]:
    """Return a function that evaluates the gradient of the multivariate scalar-valued
    function.

    Parameters
    ----------
    fun : Callable
        Differentiated function. Each positional argument is an independent
        variable.

    Returns
    -------
    Callable
        Gradient of `fun`.

    Warnings
    --------
    `fun` must not contain conditional branches depending on its arguments.

    Examples
    --------
    >>> from dvalue import function as dvf
    >>> f = lambda x, y: dvf.sqrt(x * y + 3)
    >>> df = grad(f)
    >>> c0 = df(0.5, 1.0)
    >>> print(format(c0[0], ".6g"), format(c0[1], ".6g"))
    0.267261 0.133631
    """

    def result(*args, **kwargs):
        tmp = fun(*variables(*args), **kwargs)
        return _lift_checked(tmp, len(args)).gradient

    return result


def jac(fun: Callable[..., Any]) -> Callable[..., npt.NDArray]:
    """Return a function that evaluates the Jacobian matrix of the multivariate
    vector-valued function.

    Parameters
    ----------
    fun : Callable
        Differentiated function. It must return a vector of the form accepted by
        :func:`jacobian`.

    Returns
    -------
    Callable
        Jacobian of `fun`.

    Warnings
    --------
    `fun` must not contain conditional branches depending on its arguments.
    """

    def result(*args, **kwargs):
        tmp = fun(*variables(*args), **kwargs)
        flat = np.ravel(np.asarray(tmp, np.object_))
        items = [_lift_checked(x, len(args)) for x in flat]
        return jacobian(items)

    return result


def _checkdim(x: DValue, n: int) -> None:
    if x.dim != n:
        raise DimensionError(f"dimensions differ: {x.dim} and {n}")


def _lift_checked(x: Any, n: int) -> DValue:
    if not isinstance(x, DValue):
        if np.ndim(x) != 0:
            raise ValueError("function must return a scalar")

        return asdvalue(x, n)

    _checkdim(x, n)
    return x


def _resolve_dim(items: Iterable[Any], n: int | None) -> int:
    for x in items:
        if isinstance(x, DValue):
            return x.dim

    return getcontext().resolve(n)


def _defderiv(
    fun: Callable[..., Any], deriv: Callable[..., Any], *, argnum: int = 0
) -> None:
    if "_dvalue_is_primitive" not in fun.__dict__:
        raise ValueError(f"{fun.__name__} is not a primitive")

    fun.__dict__["_dvalue_derivs"][argnum] = deriv


def _primitive[T, **P](fun: Callable[P, T]) -> Callable[P, T]:
    derivs: dict[int, Callable] = {}

    @functools.wraps(fun)
    def wrapper(*args, **kwargs):
        if not any(isinstance(x, DValue) for x in args):
            return fun(*args, **kwargs)

        args_real: list = []
        args_dual: list[tuple[int, DValue]] = []

        for argnum, arg in enumerate(args):
            if not isinstance(arg, DValue):
                args_real.append(arg)
                continue

            args_real.append(arg.value)
            args_dual.append((argnum, arg))

        head = args_dual[0]

        for _, arg in args_dual[1:]:
            head[1]._checkdim(arg)

        gradient = derivs[head[0]](*args_real, **kwargs) * head[1].gradient

        for argnum, arg in args_dual[1:]:
            gradient = gradient + derivs[argnum](*args_real, **kwargs) * arg.gradient

        return DValue(fun(*args_real, **kwargs), gradient, _skipcheck=True)

    wrapper.__dict__["_dvalue_is_primitive"] = True
    wrapper.__dict__["_dvalue_derivs"] = derivs
    return wrapper  # type: ignore
