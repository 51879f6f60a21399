"""
##################################################
Automatic differentiation (:mod:`dvalue.autodiff`)
##################################################

.. currentmodule:: dvalue.autodiff

This module provides forward-mode automatic differentiation.

Dual values
-----------

.. autosummary::
    :toctree: generated/

    DValue
    DimensionError
    asdvalue

Independent variables and constants
-----------------------------------

.. autosummary::
    :toctree: generated/

    seed
    variables
    constant

Arrays of dual values
---------------------

.. autosummary::
    :toctree: generated/

    lift
    values
    gradients
    jacobian

Differential operators
----------------------

.. autosummary::
    :toctree: generated/

    deriv
    grad
    jac

Finite differences
------------------

.. autosummary::
    :toctree: generated/

    approx_grad
    approx_jacobian

"""

from .autodiff import (
    constant,
    deriv,
    gradients,
    grad,
    jac,
    jacobian,
    lift,
    seed,
    values,
    variables,
)
from .dual import DimensionError, DValue, asdvalue
from .numdiff import approx_grad, approx_jacobian

__all__ = [
    "constant",
    "deriv",
    "gradients",
    "grad",
    "jac",
    "jacobian",
    "lift",
    "seed",
    "values",
    "variables",
    "DimensionError",
    "DValue",
    "asdvalue",
    "approx_grad",
    "approx_jacobian",
]
