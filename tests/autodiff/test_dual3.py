import math

import mpmath
import pytest

from dualnum import function as vrf
from dualnum.autodiff.dual import Dual2, Dual3
from dualnum.derivative import ShapeMismatchError

NAMES = [
    ("reciprocal", (1.2, 0.2, -1.2)),
    ("exp", (1.2, 0.2, -1.2, 0.0)),
    ("expm1", (1.2, 0.2, -1.2)),
    ("exp2", (1.2, 0.2)),
    ("log", (1.2, 0.2, 7.2)),
    ("log2", (1.2, 7.2)),
    ("log10", (1.2, 7.2)),
    ("log1p", (1.2, 0.2)),
    ("sqrt", (1.2, 0.2, 7.2)),
    ("cbrt", (1.2, -1.2)),
    ("sin", (1.2, 0.2, -7.2)),
    ("cos", (1.2, 0.2, -7.2)),
    ("tan", (1.2, 0.2, -1.2)),
    ("sec", (1.2, 0.2)),
    ("csc", (1.2, 0.2)),
    ("cot", (1.2, 0.2)),
    ("arcsin", (0.2, -0.2)),
    ("arccos", (0.2, -0.2)),
    ("arctan", (1.2, 0.2, -7.2)),
    ("arcsec", (1.2, -7.2)),
    ("arccsc", (1.2, 7.2)),
    ("arccot", (1.2, -7.2)),
    ("sinh", (1.2, -1.2)),
    ("cosh", (1.2, -1.2)),
    ("tanh", (1.2, 0.2)),
    ("sech", (1.2, 0.2)),
    ("csch", (1.2, 0.2)),
    ("coth", (1.2, -1.2)),
    ("arcsinh", (1.2, -7.2)),
    ("arccosh", (1.2, 7.2)),
    ("arctanh", (0.2, -0.2)),
    ("arcsech", (0.2, 0.7)),
    ("arccsch", (1.2, -1.2)),
    ("arccoth", (1.2, -7.2)),
    ("sph_j0", (1.2, 7.2, 0.2)),
    ("sph_j1", (1.2, 7.2, 0.2)),
    ("sph_j2", (1.2, 7.2, 0.2)),
]


@pytest.mark.parametrize(("name", "points"), NAMES)
def test_third_derivative(name, points):
    fun = getattr(vrf, name)
    h = 1e-5

    def d2f(x):
        return fun(Dual2(x, 1.0)).v2.value

    for x in points:
        y = fun(Dual3(x, 1.0))
        z = fun(Dual2(x, 1.0))
        assert y.real == z.real
        assert pytest.approx(y.v1.value, 1e-12) == z.v1.value
        assert pytest.approx(y.v2.value, 1e-12) == z.v2.value

        expected = (d2f(x + h) - d2f(x - h)) / (2 * h)
        assert pytest.approx(y.v3.value, rel=1e-5, abs=1e-5) == expected


def test_scenario():
    # cos(t)**3 * sin(t)**2 at t = 1
    def g(t):
        return vrf.cos(t) ** 3 * vrf.sin(t) ** 2

    y = g(Dual3(1.0, 1.0))
    assert pytest.approx(y.v3.value, 1e-12) == 7.358639755305733

    s, c = math.sin(1.0), math.cos(1.0)
    expected = -6 * s**5 + 75 * c**2 * s**3 - 44 * c**4 * s
    assert pytest.approx(y.v3.value, 1e-12) == expected


def test_bessel():
    for n in (0, 1, 2):
        for x in (1.2, 7.2, -1.2):
            y = Dual3(x, 1.0).besselj(n)

            for k, v in enumerate((y.real, y.v1.value, y.v2.value, y.v3.value)):
                expected = float(mpmath.besselj(n, x, derivative=k))
                assert pytest.approx(v, abs=1e-13) == expected


def test_powi():
    for n in (0, 1, 2, 3, 4, 5, -2):
        y = Dual3(1.2, 1.0) ** n
        expected = [1.2**n]

        for k in range(1, 4):
            expected.append(expected[-1] * (n - k + 1) / 1.2)

        values = [y.real, y.v1.value, y.v2.value, y.v3.value]
        assert values == pytest.approx(expected, rel=1e-12, abs=1e-12)


def test_scalar_only():
    with pytest.raises(ShapeMismatchError):
        Dual3(1.0, [1.0, 0.0])
