from .autodiff import (
    Dual,
    Dual2,
    Dual3,
    HyperDual,
    HyperHyperDual,
    first_derivative,
    gradient,
    hessian,
    implicit_derivative,
    implicit_derivative_binary,
    implicit_derivative_sp,
    implicit_derivative_vec,
    jacobian,
    partial_hessian,
    second_derivative,
    second_partial_derivative,
    third_derivative,
    third_partial_derivative,
    third_partial_derivative_vec,
)
from .derivative import Derivative, ShapeMismatchError
from .function import exp, log, pow, sqrt

__all__ = [
    "Dual",
    "Dual2",
    "Dual3",
    "HyperDual",
    "HyperHyperDual",
    "Derivative",
    "ShapeMismatchError",
    "exp",
    "log",
    "pow",
    "sqrt",
    "first_derivative",
    "gradient",
    "hessian",
    "implicit_derivative",
    "implicit_derivative_binary",
    "implicit_derivative_sp",
    "implicit_derivative_vec",
    "jacobian",
    "partial_hessian",
    "second_derivative",
    "second_partial_derivative",
    "third_derivative",
    "third_partial_derivative",
    "third_partial_derivative_vec",
]
