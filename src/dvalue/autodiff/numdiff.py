import logging
from collections.abc import Callable
from typing import Any

import numpy as np
import numpy.typing as npt

from dvalue.autodiff.dual import _promote
from dvalue.numtraits import numtraits

logger = logging.getLogger(__name__)


def _step(x, step):
    if step is not None:
        return step

    return numtraits(x).epsilon ** (1 / 3) * max(1, abs(x))


def _differences(fun: Callable[..., Any], args: tuple, step) -> list:
    args = tuple(_promote(x) for x in args)
    result = []

    for i, x in enumerate(args):
        h = _step(x, step)
        fwd = args[:i] + (x + h,) + args[i + 1 :]
        bwd = args[:i] + (x - h,) + args[i + 1 :]
        result.append((np.asarray(fun(*fwd)) - np.asarray(fun(*bwd))) / (2 * h))

    logger.debug("evaluated %d central differences", len(result))
    return result


def approx_grad(fun: Callable[..., Any], *args: Any, step=None) -> npt.NDArray:
    """Approximate the gradient of a scalar-valued function by central differences.

    Parameters
    ----------
    fun : Callable
        Function of scalar arguments returning a scalar.
    *args
        Point at which the gradient is approximated.
    step : optional
        Step size. By default, ``cbrt(eps) * max(1, abs(x))`` is used for each
        argument `x`, where ``eps`` is the machine epsilon given by
        :func:`dvalue.numtraits.numtraits`.

    Returns
    -------
    ndarray

    See Also
    --------
    dvalue.autodiff.grad

    Examples
    --------
    >>> c = approx_grad(lambda x, y: x * y, 1.0, 2.0)
    >>> print(np.round(c, 6))
    [2. 1.]
    """
    return np.array(_differences(fun, args, step))


def approx_jacobian(fun: Callable[..., Any], *args: Any, step=None) -> npt.NDArray:
    """Approximate the Jacobian matrix of a vector-valued function by central
    differences.

    Parameters
    ----------
    fun : Callable
        Function of scalar arguments returning a sequence of scalars.
    *args
        Point at which the Jacobian matrix is approximated.
    step : optional
        Step size (cf. :func:`approx_grad`).

    Returns
    -------
    ndarray
        Matrix whose ``(i, j)`` entry approximates the partial derivative of the
        `i`-th output with respect to the `j`-th argument.

    See Also
    --------
    dvalue.autodiff.jac
    """
    return np.stack(_differences(fun, args, step), axis=-1)
