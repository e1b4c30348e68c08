from collections.abc import Callable, Sequence
from typing import Any

import numpy as np

from dualnum.autodiff.autodiff import first_derivative, hessian, jacobian
from dualnum.autodiff.dual import DualNumber
from dualnum.linalg.lu import LU


def _leading(args: Sequence) -> DualNumber | None:
    result = None

    for arg in args:
        if isinstance(arg, np.ndarray):
            items = arg.flat
        elif isinstance(arg, list | tuple):
            items = arg
        else:
            items = (arg,)

        for x in items:
            if isinstance(x, DualNumber) and (
                result is None or x.priority > result.priority
            ):
                result = x

    return result


def _order(like: Any) -> int:
    result = 0

    while isinstance(like, DualNumber):
        result += like.ORDER
        like = like.real

    return result


def _constant(like: Any, value: Any) -> Any:
    if not isinstance(like, DualNumber):
        return value

    return like._lift(_constant(like.real, value))


def implicit_derivative(g: Callable, x: Any, *args: Any) -> Any:
    """Differentiate the root of a univariate equation ``g(x, *args) = 0`` with
    respect to its parameters.

    Parameters
    ----------
    g : Callable
        Residual function.
    x
        Real root of ``g(x, *args) = 0`` for the real parts of `args`, found by any
        external solver.
    *args
        Parameters. Dual numbers among them, possibly inside sequences or arrays,
        determine which derivatives of the root are computed.

    Returns
    -------
    DualNumber
        Root carrying the derivatives with respect to the parameters. If no parameter
        is a dual number, `x` is returned as is.

    Notes
    -----
    Starting from `x`, Newton steps are taken in dual arithmetic. Every step makes one
    more derivative order exact, so the number of steps is the total derivative order
    of the parameters.

    Examples
    --------
    >>> from dualnum.autodiff.dual import Dual2
    >>> y = Dual2(25.0, 1.0)
    >>> x = implicit_derivative(lambda x, y: x**2 - y, 5.0, y)
    >>> print(f"{x.real:.6g} {x.v1.value:.6g} {x.v2.value:.6g}")
    5 0.1 -0.002
    """
    like = _leading(args)
    x = _constant(like, x)

    for _ in range(_order(like)):
        f, df = first_derivative(lambda t: g(t, *args), x)
        x = x - f / df

    return x


def implicit_derivative_binary(g: Callable, x: Any, y: Any, *args: Any) -> tuple:
    """Differentiate the root of a system of two equations ``g(x, y, *args) = 0``
    with respect to its parameters.

    Parameters
    ----------
    g : Callable
        Residual function returning a sequence of two values.
    x, y
        Real root of the system for the real parts of `args`.
    *args
        Parameters.

    Returns
    -------
    tuple
        ``(x, y)`` carrying the derivatives with respect to the parameters.

    Examples
    --------
    >>> from dualnum.autodiff.dual import Dual
    >>> a = Dual(4.0, 1.0)
    >>> x, y = implicit_derivative_binary(
    ...     lambda x, y, a: [x * y - a, x + y - a - 1.0], 1.0, 4.0, a
    ... )
    >>> print(y.real, y.eps.value)
    4.0 1.0
    """
    like = _leading(args)
    x = _constant(like, x)
    y = _constant(like, y)

    for _ in range(_order(like)):
        (f0, f1), jac = jacobian(lambda v: g(v[0], v[1], *args), [x, y])
        det = jac[0, 0] * jac[1, 1] - jac[0, 1] * jac[1, 0]
        x, y = (
            x - (jac[1, 1] * f0 - jac[0, 1] * f1) / det,
            y - (jac[0, 0] * f1 - jac[1, 0] * f0) / det,
        )

    return (x, y)


def implicit_derivative_vec(g: Callable, x: Sequence, *args: Any) -> np.ndarray:
    """Differentiate the root of a system of equations ``g(x, *args) = 0`` with
    respect to its parameters.

    Parameters
    ----------
    g : Callable
        Residual function. It receives a one-dimensional object array of length `n`
        and returns a sequence of `n` values.
    x : Sequence
        Real root of the system for the real parts of `args`.
    *args
        Parameters.

    Returns
    -------
    ndarray
        Root carrying the derivatives with respect to the parameters.

    Raises
    ------
    SingularMatrixError
        If the Jacobian of `g` is singular at the root.
    """
    like = _leading(args)
    x = np.array([_constant(like, v) for v in x])

    for _ in range(_order(like)):
        f, jac = jacobian(lambda v: g(v, *args), x)
        x = x - LU(jac).solve(f)

    return x


def implicit_derivative_sp(g: Callable, x: Sequence, *args: Any) -> np.ndarray:
    """Differentiate a stationary point of a scalar function ``g(x, *args)`` with
    respect to its parameters.

    Parameters
    ----------
    g : Callable
        Scalar function. It receives a one-dimensional object array.
    x : Sequence
        Real stationary point for the real parts of `args`.
    *args
        Parameters.

    Returns
    -------
    ndarray
        Stationary point carrying the derivatives with respect to the parameters.

    Raises
    ------
    SingularMatrixError
        If the Hessian of `g` is singular at the stationary point.
    """
    like = _leading(args)
    x = np.array([_constant(like, v) for v in x])

    for _ in range(_order(like)):
        _, grad, hess = hessian(lambda v: g(v, *args), x)
        x = x - LU(hess).solve(grad)

    return x
