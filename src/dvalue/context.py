"""
#####################################
Configuration (:mod:`dvalue.context`)
#####################################

.. currentmodule:: dvalue.context

This module provides the context that holds default settings of a computation.

.. autosummary::
    :toctree: generated/

    Context
    getcontext
    localcontext
    setcontext

"""

import contextlib
import contextvars
import logging
from typing import Self

logger = logging.getLogger(__name__)


class Context:
    """Create a new context.

    Parameters
    ----------
    dim : int | None, default=None
        Number of independent variables assumed by :func:`dvalue.autodiff.seed`,
        :func:`dvalue.autodiff.constant`, and :func:`dvalue.autodiff.lift` when the
        dimension is not given explicitly.

    Examples
    --------
    >>> from dvalue.autodiff import constant
    >>> with localcontext(dim=3):
    ...     c = constant(1.5)
    >>> c.dim
    3
    """

    __slots__ = ("_dim",)
    _dim: int | None

    def __init__(self, dim: int | None = None):
        if dim is not None and dim <= 0:
            raise ValueError("dimension must be positive")

        self._dim = dim

    @property
    def dim(self) -> int | None:
        return self._dim

    def copy(self) -> Self:
        return self.__class__(self._dim)

    def resolve(self, dim: int | None) -> int:
        """Return `dim` if given, otherwise the dimension of the context.

        Raises
        ------
        ValueError
            If neither `dim` nor the context specifies a dimension.
        """
        if dim is not None:
            return dim

        if self._dim is None:
            raise ValueError("dimension is specified neither explicitly nor by context")

        return self._dim

    def __repr__(self) -> str:
        return f"{type(self).__name__}(dim={self._dim!r})"

    def __copy__(self) -> Self:
        return self.copy()


_var: contextvars.ContextVar[Context] = contextvars.ContextVar("dvalue")


def getcontext() -> Context:
    """Return the current context for the active thread."""
    if context := _var.get(None):
        return context

    context = Context()
    _var.set(context)
    return context


def setcontext(ctx: Context) -> None:
    """Set the current context for the active thread to `ctx`."""
    logger.debug("setting context %r", ctx)
    _var.set(ctx)


@contextlib.contextmanager
def localcontext(ctx: Context | None = None, *, dim: int | None = None):
    """Return a context manager that will set the current context for the active thread
    to a copy of `ctx` on entry to the with-statement and restore the previous context
    when exiting the with-statement."""
    if ctx is None:
        ctx = getcontext()

    if dim is None:
        dim = ctx._dim

    ctx = Context(dim)
    token = _var.set(ctx)
    logger.debug("entering local context %r", ctx)

    try:
        yield ctx
    finally:
        _var.reset(token)
