"""Closed-form derivatives of the elementary functions.

Every rule takes the real part `x` of a dual number and the highest derivative order
`n` the caller needs, and returns ``[f(x), f'(x), ..., f^(n)(x)]``. Orders above 3 are
never requested. `x` may itself be a dual number of lower nesting level, so rules are
written with :mod:`dualnum.function` and arithmetic only, and divide through
:func:`~dualnum.function.reciprocal` so that a zero denominator yields ``inf``.
"""

import math

from dualnum import function as vrf


def _const(x, value):
    return type(x.re if _isdual(x) else x)(value)


def _falling(a, k: int):
    result = 1

    for i in range(k):
        result = result * (a - i)

    return result


def _isdual(x) -> bool:
    return hasattr(type(x), "_dualnum_overload_")


def reciprocal(x, n: int) -> list:
    rec = vrf.reciprocal(x)
    result = [rec]

    for k in range(1, n + 1):
        result.append(result[-1] * rec * -k)

    return result


def exp(x, n: int) -> list:
    return [vrf.exp(x)] * (n + 1)


def expm1(x, n: int) -> list:
    result = [vrf.expm1(x)]

    if n >= 1:
        result.extend([vrf.exp(x)] * n)

    return result


def exp2(x, n: int) -> list:
    result = [vrf.exp2(x)]

    if n >= 1:
        ln2 = vrf.log(_const(x, 2))

        for _ in range(n):
            result.append(result[-1] * ln2)

    return result


def _logarithm(f0, x, scale, n: int) -> list:
    result = [f0]

    if n >= 1:
        rec = vrf.reciprocal(x)
        result.append(rec * scale)

        for k in range(2, n + 1):
            result.append(result[-1] * rec * (1 - k))

    return result


def log(x, n: int) -> list:
    return _logarithm(vrf.log(x), x, 1, n)


def log_base(x, n: int, base) -> list:
    if n == 0:
        return [vrf.log_base(x, base)]

    return _logarithm(vrf.log_base(x, base), x, vrf.reciprocal(vrf.log(base)), n)


def log2(x, n: int) -> list:
    if n == 0:
        return [vrf.log2(x)]

    return _logarithm(vrf.log2(x), x, vrf.reciprocal(vrf.log(_const(x, 2))), n)


def log10(x, n: int) -> list:
    if n == 0:
        return [vrf.log10(x)]

    return _logarithm(vrf.log10(x), x, vrf.reciprocal(vrf.log(_const(x, 10))), n)


def log1p(x, n: int) -> list:
    result = [vrf.log1p(x)]

    if n >= 1:
        rec = vrf.reciprocal(x + 1)
        result.append(rec)

        for k in range(2, n + 1):
            result.append(result[-1] * rec * (1 - k))

    return result


def sqrt(x, n: int) -> list:
    f0 = vrf.sqrt(x)
    result = [f0]

    if n >= 1:
        result.append(vrf.reciprocal(f0) * 0.5)

    if n >= 2:
        rec = vrf.reciprocal(x)
        result.append(result[1] * rec * -0.5)

        if n >= 3:
            result.append(result[2] * rec * -1.5)

    return result


def cbrt(x, n: int) -> list:
    f0 = vrf.cbrt(x)
    result = [f0]

    if n >= 1:
        result.append(vrf.reciprocal(f0 * f0) * (1 / 3))

    if n >= 2:
        rec = vrf.reciprocal(x)
        result.append(result[1] * rec * (-2 / 3))

        if n >= 3:
            result.append(result[2] * rec * (-5 / 3))

    return result


def powi(x, n: int, k: int) -> list:
    if k == 0:
        return [vrf.powi(x, 0), 0, 0, 0][: n + 1]

    if k == 1:
        return [x, _const(x, 1), 0, 0][: n + 1]

    result = [vrf.powi(x, k)]

    if n == 0:
        return result

    match k:
        case 2:
            result.extend([x * 2, 2, 0])

        case 3:
            x2 = x * x
            result.extend([x2 * 3, x * 6, 6])

        case 4:
            x2 = x * x
            result.extend([x2 * x * 4, x2 * 12, x * 24])

        case _:
            result.extend(_falling(k, j) * vrf.powi(x, k - j) for j in range(1, n + 1))

    return result[: n + 1]


def powf(x, n: int, a) -> list:
    if not _isdual(a):
        if a == 0:
            return [vrf.powf(x, a), 0, 0, 0][: n + 1]

        if a == 1:
            return [x, _const(x, 1), 0, 0][: n + 1]

        if a == 2:
            return powi(x, n, 2)

    return [_falling(a, j) * vrf.powf(x, a - j) for j in range(n + 1)]


def sin(x, n: int) -> list:
    s = vrf.sin(x)

    if n == 0:
        return [s]

    c = vrf.cos(x)
    return [s, c, -s, -c][: n + 1]


def cos(x, n: int) -> list:
    c = vrf.cos(x)

    if n == 0:
        return [c]

    s = vrf.sin(x)
    return [c, -s, -c, s][: n + 1]


def tan(x, n: int) -> list:
    t = vrf.tan(x)

    if n == 0:
        return [t]

    u = t * t + 1
    return [t, u, t * u * 2, u * (t * t * 3 + 1) * 2][: n + 1]


def sec(x, n: int) -> list:
    s = vrf.sec(x)

    if n == 0:
        return [s]

    t = vrf.tan(x)
    s2 = s * s
    return [s, s * t, s * (s2 * 2 - 1), s * t * (s2 * 6 - 1)][: n + 1]


def csc(x, n: int) -> list:
    c = vrf.csc(x)

    if n == 0:
        return [c]

    ct = vrf.cot(x)
    c2 = c * c
    return [c, -c * ct, c * (c2 * 2 - 1), -c * ct * (c2 * 6 - 1)][: n + 1]


def cot(x, n: int) -> list:
    ct = vrf.cot(x)

    if n == 0:
        return [ct]

    u = ct * ct + 1
    return [ct, -u, ct * u * 2, -u * (ct * ct * 3 + 1) * 2][: n + 1]


def arcsin(x, n: int) -> list:
    result = [vrf.arcsin(x)]

    if n >= 1:
        rec = vrf.reciprocal(1 - x * x)
        f1 = vrf.sqrt(rec)
        result.extend([f1, x * f1 * rec, (x * x * 2 + 1) * f1 * rec * rec][:n])

    return result


def arccos(x, n: int) -> list:
    result = [vrf.arccos(x)]

    if n >= 1:
        result.extend(-f for f in arcsin(x, n)[1:])

    return result


def arctan(x, n: int) -> list:
    result = [vrf.arctan(x)]

    if n >= 1:
        rec = vrf.reciprocal(x * x + 1)
        rec2 = rec * rec
        result.extend([rec, x * rec2 * -2, (x * x * 6 - 2) * rec2 * rec][:n])

    return result


def arccot(x, n: int) -> list:
    result = [vrf.arccot(x)]

    if n >= 1:
        result.extend(-f for f in arctan(x, n)[1:])

    return result


def arcsec(x, n: int) -> list:
    result = [vrf.arcsec(x)]

    if n >= 1:
        x2 = x * x
        u = x2 - 1
        ax = abs(x)
        den = ax * vrf.sqrt(u)
        f1 = vrf.reciprocal(den)
        f2 = -(x2 * 2 - 1) * vrf.reciprocal(den * x * u)
        f3 = (x2 * x2 * 6 - x2 * 5 + 2) * vrf.reciprocal(den * x2 * u * u)
        result.extend([f1, f2, f3][:n])

    return result


def arccsc(x, n: int) -> list:
    result = [vrf.arccsc(x)]

    if n >= 1:
        result.extend(-f for f in arcsec(x, n)[1:])

    return result


def sinh(x, n: int) -> list:
    sh = vrf.sinh(x)

    if n == 0:
        return [sh]

    ch = vrf.cosh(x)
    return [sh, ch, sh, ch][: n + 1]


def cosh(x, n: int) -> list:
    ch = vrf.cosh(x)

    if n == 0:
        return [ch]

    sh = vrf.sinh(x)
    return [ch, sh, ch, sh][: n + 1]


def _tanh_like(y, n: int) -> list:
    # shared by tanh and coth, both of which satisfy y' = 1 - y^2
    u = 1 - y * y
    return [y, u, y * u * -2, u * (1 - y * y * 3) * -2][: n + 1]


def tanh(x, n: int) -> list:
    return _tanh_like(vrf.tanh(x), n)


def coth(x, n: int) -> list:
    return _tanh_like(vrf.coth(x), n)


def sech(x, n: int) -> list:
    s = vrf.sech(x)

    if n == 0:
        return [s]

    th = vrf.tanh(x)
    th2 = th * th
    return [s, -s * th, s * (th2 * 2 - 1), s * th * (5 - th2 * 6)][: n + 1]


def csch(x, n: int) -> list:
    c = vrf.csch(x)

    if n == 0:
        return [c]

    ct = vrf.coth(x)
    ct2 = ct * ct
    return [c, -c * ct, c * (ct2 * 2 - 1), -c * ct * (ct2 * 6 - 5)][: n + 1]


def arcsinh(x, n: int) -> list:
    result = [vrf.arcsinh(x)]

    if n >= 1:
        rec = vrf.reciprocal(x * x + 1)
        f1 = vrf.sqrt(rec)
        result.extend([f1, -x * f1 * rec, (x * x * 2 - 1) * f1 * rec * rec][:n])

    return result


def arccosh(x, n: int) -> list:
    result = [vrf.arccosh(x)]

    if n >= 1:
        rec = vrf.reciprocal(x * x - 1)
        f1 = vrf.sqrt(rec)
        result.extend([f1, -x * f1 * rec, (x * x * 2 + 1) * f1 * rec * rec][:n])

    return result


def _atanh_derivs(x, n: int) -> list:
    rec = vrf.reciprocal(1 - x * x)
    rec2 = rec * rec
    return [rec, x * rec2 * 2, (x * x * 6 + 2) * rec2 * rec][:n]


def arctanh(x, n: int) -> list:
    return [vrf.arctanh(x), *_atanh_derivs(x, n)]


def arccoth(x, n: int) -> list:
    return [vrf.arccoth(x), *_atanh_derivs(x, n)]


def arcsech(x, n: int) -> list:
    result = [vrf.arcsech(x)]

    if n >= 1:
        x2 = x * x
        v = 1 - x2
        den = x * vrf.sqrt(v)
        f1 = -vrf.reciprocal(den)
        f2 = (1 - x2 * 2) * vrf.reciprocal(den * x * v)
        f3 = -(x2 * x2 * 6 - x2 * 5 + 2) * vrf.reciprocal(den * x2 * v * v)
        result.extend([f1, f2, f3][:n])

    return result


def arccsch(x, n: int) -> list:
    result = [vrf.arccsch(x)]

    if n >= 1:
        x2 = x * x
        w = x2 + 1
        den = abs(x) * vrf.sqrt(w)
        f1 = -vrf.reciprocal(den)
        f2 = (x2 * 2 + 1) * vrf.reciprocal(den * x * w)
        f3 = -(x2 * x2 * 6 + x2 * 5 + 2) * vrf.reciprocal(den * x2 * w * w)
        result.extend([f1, f2, f3][:n])

    return result


def besselj(x, n: int, order: int) -> list:
    cache: dict = {}

    def j(m: int):
        if m not in cache:
            cache[m] = vrf.besselj(m, x)

        return cache[m]

    result = []

    for k in range(n + 1):
        tmp = sum((-1) ** i * math.comb(k, i) * j(order - k + 2 * i) for i in range(k + 1))
        result.append(tmp * 0.5**k)

    return result
