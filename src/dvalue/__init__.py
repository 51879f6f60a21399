from .autodiff import DValue, jacobian, lift, seed, variables
from .context import Context, getcontext, localcontext, setcontext
from .function import atan, cos, exp, log, pow, sin, sqrt

__all__ = [
    "DValue",
    "jacobian",
    "lift",
    "seed",
    "variables",
    "Context",
    "getcontext",
    "localcontext",
    "setcontext",
    "atan",
    "cos",
    "exp",
    "log",
    "pow",
    "sin",
    "sqrt",
]
