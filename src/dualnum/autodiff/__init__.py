"""
###################################################
Automatic differentiation (:mod:`dualnum.autodiff`)
###################################################

.. currentmodule:: dualnum.autodiff

This module provides forward-mode automatic differentiation.

Differential operators
----------------------

.. autosummary::
    :toctree: generated/

    first_derivative
    gradient
    jacobian
    second_derivative
    hessian
    third_derivative
    second_partial_derivative
    partial_hessian
    third_partial_derivative
    third_partial_derivative_vec
    DerivativeResult

Each operator ``f`` has a counterpart ``try_f`` returning :class:`DerivativeResult`.

Implicit differentiation
------------------------

.. autosummary::
    :toctree: generated/

    implicit_derivative
    implicit_derivative_binary
    implicit_derivative_vec
    implicit_derivative_sp

Number systems containing infinitesimals
----------------------------------------

.. autosummary::
    :toctree: generated/

    DualNumber
    Dual
    Dual2
    Dual3
    HyperDual
    HyperHyperDual

"""

from .autodiff import (
    DerivativeResult,
    first_derivative,
    gradient,
    hessian,
    jacobian,
    partial_hessian,
    second_derivative,
    second_partial_derivative,
    third_derivative,
    third_partial_derivative,
    third_partial_derivative_vec,
    try_first_derivative,
    try_gradient,
    try_hessian,
    try_jacobian,
    try_partial_hessian,
    try_second_derivative,
    try_second_partial_derivative,
    try_third_derivative,
    try_third_partial_derivative,
    try_third_partial_derivative_vec,
)
from .dual import Dual, Dual2, Dual3, DualNumber, HyperDual, HyperHyperDual
from .implicit import (
    implicit_derivative,
    implicit_derivative_binary,
    implicit_derivative_sp,
    implicit_derivative_vec,
)

__all__ = [
    "DerivativeResult",
    "first_derivative",
    "gradient",
    "hessian",
    "jacobian",
    "partial_hessian",
    "second_derivative",
    "second_partial_derivative",
    "third_derivative",
    "third_partial_derivative",
    "third_partial_derivative_vec",
    "try_first_derivative",
    "try_gradient",
    "try_hessian",
    "try_jacobian",
    "try_partial_hessian",
    "try_second_derivative",
    "try_second_partial_derivative",
    "try_third_derivative",
    "try_third_partial_derivative",
    "try_third_partial_derivative_vec",
    "implicit_derivative",
    "implicit_derivative_binary",
    "implicit_derivative_sp",
    "implicit_derivative_vec",
    "Dual",
    "Dual2",
    "Dual3",
    "DualNumber",
    "HyperDual",
    "HyperHyperDual",
]
