"""
###############################################
Mathematical functions (:mod:`dualnum.function`)
###############################################

.. currentmodule:: dualnum.function

This module provides the elementary functions a differentiable function may call.
Each of them accepts plain reals (``float``, ``int``, NumPy scalars, or mpmath
numbers) as well as dual numbers, so one function definition serves both the plain
and the differentiated evaluation.

Floating-point domain conditions never raise: plain reals are evaluated by NumPy with
all floating-point errors ignored, so ``log(-1.0)`` is ``nan`` and
``reciprocal(0.0)`` is ``inf``. Arbitrary-precision numbers are evaluated by mpmath.

Power, exponents, and logarithmic functions
===========================================

.. autosummary::
    :toctree: generated/

    reciprocal
    exp
    expm1
    exp2
    log
    log_base
    log1p
    log2
    log10
    sqrt
    cbrt
    powi
    powf
    powd
    pow

Trigonometric functions
=======================

.. autosummary::
    :toctree: generated/

    sin
    cos
    tan
    sec
    csc
    cot
    sin_cos
    arcsin
    arccos
    arctan
    arcsec
    arccsc
    arccot
    arctan2

Hyperbolic functions
====================

.. autosummary::
    :toctree: generated/

    sinh
    cosh
    tanh
    sech
    csch
    coth
    arcsinh
    arccosh
    arctanh
    arcsech
    arccsch
    arccoth

Bessel functions
================

.. autosummary::
    :toctree: generated/

    besselj
    bessel_j0
    bessel_j1
    bessel_j2
    sph_j0
    sph_j1
    sph_j2

"""

import math
from typing import Final

import mpmath
import mpmath.ctx_mp_python
import numpy as np

SPH_SERIES_THRESHOLD: Final = 0.5
"""Below this magnitude spherical Bessel functions are evaluated by power series."""

_SPH_SERIES_TERMS: Final = 10
_NUMBER: Final = (float, int, np.floating, np.integer)


def _overload(fun, *args):
    duals = [x for x in args if hasattr(type(x), "_dualnum_overload_")]

    if not duals:
        return NotImplemented

    head = max(duals, key=lambda x: x.priority)

    if (res := head._dualnum_overload_(fun, *args)) is NotImplemented:
        raise TypeError(f"{fun.__name__} is not supported by {type(head).__name__}")

    return res


def _real(x, npfun, mpfun):
    match x:
        case mpmath.ctx_mp_python.mpnumeric():
            return mpfun(x)

        case float() | int() | np.floating() | np.integer():
            with np.errstate(all="ignore"):
                return float(npfun(np.float64(x)))

        case _:
            raise TypeError(f"unsupported operand type: {type(x).__name__}")


def _real2(x, y, npfun, mpfun):
    mpnumeric = mpmath.ctx_mp_python.mpnumeric

    if isinstance(x, mpnumeric) or isinstance(y, mpnumeric):
        return mpfun(x, y)

    if isinstance(x, _NUMBER) and isinstance(y, _NUMBER):
        with np.errstate(all="ignore"):
            return float(npfun(np.float64(x), np.float64(y)))

    raise TypeError(
        f"unsupported operand types: {type(x).__name__}, {type(y).__name__}"
    )


def _mp_reciprocal(x):
    return mpmath.inf if x == 0 else 1 / x


def _float_besselj(n: int, x: float) -> float:
    if math.isnan(x):
        return math.nan

    if math.isinf(x):
        return 0.0

    return float(mpmath.besselj(n, x))


def reciprocal(x, /):
    """Reciprocal.

    Examples
    --------
    >>> reciprocal(4.0)
    0.25
    >>> reciprocal(0.0)
    inf
    """
    if (res := _overload(reciprocal, x)) is not NotImplemented:
        return res

    return _real(x, np.reciprocal, _mp_reciprocal)


def exp(x, /):
    """Exponential.

    Examples
    --------
    >>> print(format(exp(2), ".6f"))
    7.389056
    """
    if (res := _overload(exp, x)) is not NotImplemented:
        return res

    return _real(x, np.exp, mpmath.exp)


def expm1(x, /):
    """``exp(x) - 1``, accurate for small `x`."""
    if (res := _overload(expm1, x)) is not NotImplemented:
        return res

    return _real(x, np.expm1, mpmath.expm1)


def exp2(x, /):
    """Base-2 exponential."""
    if (res := _overload(exp2, x)) is not NotImplemented:
        return res

    return _real(x, np.exp2, lambda v: mpmath.power(2, v))


def log(x, /):
    """Natural logarithm.

    Examples
    --------
    >>> print(format(log(5), ".6f"))
    1.609438
    >>> log(-1.0)
    nan
    """
    if (res := _overload(log, x)) is not NotImplemented:
        return res

    return _real(x, np.log, mpmath.log)


def log_base(x, base, /):
    """Logarithm of `x` to the given `base`.

    Examples
    --------
    >>> print(format(log_base(8.0, 2.0), ".6f"))
    3.000000
    """
    if (res := _overload(log_base, x, base)) is not NotImplemented:
        return res

    return _real2(x, base, lambda v, b: np.log(v) / np.log(b), mpmath.log)


def log1p(x, /):
    """``log(1 + x)``, accurate for small `x`."""
    if (res := _overload(log1p, x)) is not NotImplemented:
        return res

    return _real(x, np.log1p, mpmath.log1p)


def log2(x, /):
    """Base-2 logarithm."""
    if (res := _overload(log2, x)) is not NotImplemented:
        return res

    return _real(x, np.log2, lambda v: mpmath.log(v, 2))


def log10(x, /):
    """Base-10 logarithm."""
    if (res := _overload(log10, x)) is not NotImplemented:
        return res

    return _real(x, np.log10, mpmath.log10)


def sqrt(x, /):
    """Square root.

    Examples
    --------
    >>> print(format(sqrt(2.0), ".6f"))
    1.414214
    """
    if (res := _overload(sqrt, x)) is not NotImplemented:
        return res

    return _real(x, np.sqrt, mpmath.sqrt)


def cbrt(x, /):
    """Cube root. Negative arguments have negative cube roots."""
    if (res := _overload(cbrt, x)) is not NotImplemented:
        return res

    return _real(x, np.cbrt, mpmath.cbrt)


def powi(x, n: int, /):
    """`x` raised to the integer power `n`.

    Examples
    --------
    >>> powi(2.0, -2)
    0.25
    """
    if (res := _overload(powi, x, n)) is not NotImplemented:
        return res

    return _real2(x, n, np.power, mpmath.power)


def powf(x, a, /):
    """`x` raised to the real power `a`."""
    if (res := _overload(powf, x, a)) is not NotImplemented:
        return res

    return _real2(x, a, np.power, mpmath.power)


def powd(x, y, /):
    """`x` raised to the power `y`, where `y` may be a dual number.

    For dual numbers this is ``exp(y * log(x))`` with the real part replaced by
    ``pow(x.re, y.re)``.
    """
    if (res := _overload(powd, x, y)) is not NotImplemented:
        return res

    return powf(x, y)


def pow(x, y, /):
    """`x` raised to the power `y`.

    Integer exponents are dispatched to :func:`powi` and any other exponent to
    :func:`powf`. If either argument is a dual number, this is ``x ** y``.

    Examples
    --------
    >>> print(format(pow(3.25, 1.25), ".6f"))
    4.363693
    """
    if (res := _overload(pow, x, y)) is not NotImplemented:
        return res

    if isinstance(y, int):
        return powi(x, y)

    return powf(x, y)


def sin(x, /):
    """Sine."""
    if (res := _overload(sin, x)) is not NotImplemented:
        return res

    return _real(x, np.sin, mpmath.sin)


def cos(x, /):
    """Cosine."""
    if (res := _overload(cos, x)) is not NotImplemented:
        return res

    return _real(x, np.cos, mpmath.cos)


def tan(x, /):
    """Tangent."""
    if (res := _overload(tan, x)) is not NotImplemented:
        return res

    return _real(x, np.tan, mpmath.tan)


def sec(x, /):
    """Secant."""
    if (res := _overload(sec, x)) is not NotImplemented:
        return res

    return _real(x, lambda v: np.reciprocal(np.cos(v)), mpmath.sec)


def csc(x, /):
    """Cosecant."""
    if (res := _overload(csc, x)) is not NotImplemented:
        return res

    return _real(x, lambda v: np.reciprocal(np.sin(v)), mpmath.csc)


def cot(x, /):
    """Cotangent."""
    if (res := _overload(cot, x)) is not NotImplemented:
        return res

    return _real(x, lambda v: np.reciprocal(np.tan(v)), mpmath.cot)


def sin_cos(x, /):
    """Return ``(sin(x), cos(x))``."""
    return (sin(x), cos(x))


def arcsin(x, /):
    """Inverse sine."""
    if (res := _overload(arcsin, x)) is not NotImplemented:
        return res

    return _real(x, np.arcsin, mpmath.asin)


def arccos(x, /):
    """Inverse cosine."""
    if (res := _overload(arccos, x)) is not NotImplemented:
        return res

    return _real(x, np.arccos, mpmath.acos)


def arctan(x, /):
    """Inverse tangent."""
    if (res := _overload(arctan, x)) is not NotImplemented:
        return res

    return _real(x, np.arctan, mpmath.atan)


def arcsec(x, /):
    """Inverse secant, ``arccos(1 / x)``."""
    if (res := _overload(arcsec, x)) is not NotImplemented:
        return res

    return _real(x, lambda v: np.arccos(np.reciprocal(v)), mpmath.asec)


def arccsc(x, /):
    """Inverse cosecant, ``arcsin(1 / x)``."""
    if (res := _overload(arccsc, x)) is not NotImplemented:
        return res

    return _real(x, lambda v: np.arcsin(np.reciprocal(v)), mpmath.acsc)


def arccot(x, /):
    r"""Inverse cotangent, ``arctan(1 / x)``.

    The range is :math:`(-\pi/2, \pi/2]`, so the function jumps at 0.
    """
    if (res := _overload(arccot, x)) is not NotImplemented:
        return res

    return _real(x, lambda v: np.arctan(np.reciprocal(v)), mpmath.acot)


def arctan2(y, x, /):
    """Inverse tangent of ``y / x`` choosing the quadrant correctly.

    Examples
    --------
    >>> print(format(arctan2(1.0, -1.0), ".6f"))
    2.356194
    """
    if (res := _overload(arctan2, y, x)) is not NotImplemented:
        return res

    return _real2(y, x, np.arctan2, mpmath.atan2)


def sinh(x, /):
    """Hyperbolic sine."""
    if (res := _overload(sinh, x)) is not NotImplemented:
        return res

    return _real(x, np.sinh, mpmath.sinh)


def cosh(x, /):
    """Hyperbolic cosine."""
    if (res := _overload(cosh, x)) is not NotImplemented:
        return res

    return _real(x, np.cosh, mpmath.cosh)


def tanh(x, /):
    """Hyperbolic tangent."""
    if (res := _overload(tanh, x)) is not NotImplemented:
        return res

    return _real(x, np.tanh, mpmath.tanh)


def sech(x, /):
    """Hyperbolic secant."""
    if (res := _overload(sech, x)) is not NotImplemented:
        return res

    return _real(x, lambda v: np.reciprocal(np.cosh(v)), mpmath.sech)


def csch(x, /):
    """Hyperbolic cosecant."""
    if (res := _overload(csch, x)) is not NotImplemented:
        return res

    return _real(x, lambda v: np.reciprocal(np.sinh(v)), mpmath.csch)


def coth(x, /):
    """Hyperbolic cotangent."""
    if (res := _overload(coth, x)) is not NotImplemented:
        return res

    return _real(x, lambda v: np.reciprocal(np.tanh(v)), mpmath.coth)


def arcsinh(x, /):
    """Inverse hyperbolic sine."""
    if (res := _overload(arcsinh, x)) is not NotImplemented:
        return res

    return _real(x, np.arcsinh, mpmath.asinh)


def arccosh(x, /):
    """Inverse hyperbolic cosine."""
    if (res := _overload(arccosh, x)) is not NotImplemented:
        return res

    return _real(x, np.arccosh, mpmath.acosh)


def arctanh(x, /):
    """Inverse hyperbolic tangent."""
    if (res := _overload(arctanh, x)) is not NotImplemented:
        return res

    return _real(x, np.arctanh, mpmath.atanh)


def arcsech(x, /):
    """Inverse hyperbolic secant, ``arccosh(1 / x)``."""
    if (res := _overload(arcsech, x)) is not NotImplemented:
        return res

    return _real(x, lambda v: np.arccosh(np.reciprocal(v)), mpmath.asech)


def arccsch(x, /):
    """Inverse hyperbolic cosecant, ``arcsinh(1 / x)``."""
    if (res := _overload(arccsch, x)) is not NotImplemented:
        return res

    return _real(x, lambda v: np.arcsinh(np.reciprocal(v)), mpmath.acsch)


def arccoth(x, /):
    """Inverse hyperbolic cotangent, ``arctanh(1 / x)``."""
    if (res := _overload(arccoth, x)) is not NotImplemented:
        return res

    return _real(x, lambda v: np.arctanh(np.reciprocal(v)), mpmath.acoth)


def besselj(n: int, x, /):
    """Bessel function of the first kind of integer order `n`.

    Real values are computed by mpmath. Derivatives of dual arguments follow from the
    recurrence :math:`2J_n'=J_{n-1}-J_{n+1}`.

    Examples
    --------
    >>> print(format(besselj(0, 1.5), ".6f"))
    0.511828
    """
    if not isinstance(n, int):
        raise TypeError("order must be an integer")

    if (res := _overload(besselj, n, x)) is not NotImplemented:
        return res

    return _real(x, lambda v: _float_besselj(n, float(v)), lambda v: mpmath.besselj(n, v))


def bessel_j0(x, /):
    """Bessel function of the first kind of order 0."""
    return besselj(0, x)


def bessel_j1(x, /):
    """Bessel function of the first kind of order 1."""
    return besselj(1, x)


def bessel_j2(x, /):
    """Bessel function of the first kind of order 2."""
    return besselj(2, x)


def _sph_coeffs(n: int) -> tuple[float, ...]:
    result = []

    for k in range(_SPH_SERIES_TERMS):
        num = (-1) ** k * 2**n * math.factorial(k + n)
        den = math.factorial(k) * math.factorial(2 * k + 2 * n + 1)
        result.append(num / den)

    return tuple(result)


_SPH_COEFFS: Final = tuple(_sph_coeffs(n) for n in range(3))


def _sph_series(x, n: int):
    z = x * x
    coeffs = _SPH_COEFFS[n]
    result = coeffs[-1]

    for c in reversed(coeffs[:-1]):
        result = result * z + c

    match n:
        case 0:
            return result

        case 1:
            return result * x

        case _:
            return result * z


def sph_j0(x, /):
    """Spherical Bessel function of the first kind of order 0, ``sin(x) / x``.

    Examples
    --------
    >>> print(format(sph_j0(1.2), ".6f"))
    0.776699
    >>> sph_j0(0.0)
    1.0
    """
    if abs(x) < SPH_SERIES_THRESHOLD:
        return _sph_series(x, 0)

    return sin(x) / x


def sph_j1(x, /):
    """Spherical Bessel function of the first kind of order 1."""
    if abs(x) < SPH_SERIES_THRESHOLD:
        return _sph_series(x, 1)

    s, c = sin_cos(x)
    return (s - x * c) / (x * x)


def sph_j2(x, /):
    """Spherical Bessel function of the first kind of order 2."""
    if abs(x) < SPH_SERIES_THRESHOLD:
        return _sph_series(x, 2)

    s, c = sin_cos(x)
    return ((s - x * c) * 3 - x * x * s) / (x * x * x)
