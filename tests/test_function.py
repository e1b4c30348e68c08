import math

import mpmath
import pytest

from dualnum import function as vrf


def test_domain():
    assert math.isnan(vrf.log(-1.0))
    assert math.isnan(vrf.sqrt(-1.0))
    assert math.isnan(vrf.arcsin(2.0))
    assert vrf.reciprocal(0.0) == math.inf
    assert vrf.exp(1000.0) == math.inf
    assert vrf.log(0.0) == -math.inf
    assert math.isnan(vrf.exp(math.nan))


def test_values():
    assert pytest.approx(vrf.exp(1.2)) == math.exp(1.2)
    assert pytest.approx(vrf.log_base(8.0, 2.0)) == 3.0
    assert pytest.approx(vrf.cbrt(-8.0)) == -2.0
    assert pytest.approx(vrf.pow(3.25, 1.25), 1e-6) == 4.363693
    assert vrf.pow(2.0, 3) == 8.0
    assert vrf.powi(2.0, -2) == 0.25
    assert pytest.approx(vrf.sec(0.3)) == 1 / math.cos(0.3)
    assert pytest.approx(vrf.coth(0.7)) == 1 / math.tanh(0.7)
    assert pytest.approx(vrf.arccoth(2.0)) == math.atanh(0.5)
    assert pytest.approx(vrf.arcsech(0.5)) == math.acosh(2.0)
    assert pytest.approx(vrf.arctan2(1.0, -1.0)) == 3 * math.pi / 4
    assert vrf.sin_cos(0.0) == (0.0, 1.0)


def test_arccot():
    assert pytest.approx(vrf.arccot(1.0)) == math.pi / 4
    assert pytest.approx(vrf.arccot(-1.0)) == -math.pi / 4


def test_mpf():
    with mpmath.workdps(30):
        x = mpmath.mpf(2)
        assert vrf.exp(x) == mpmath.exp(x)
        assert vrf.sqrt(x) == mpmath.sqrt(x)
        assert vrf.besselj(1, x) == mpmath.besselj(1, x)
        assert isinstance(vrf.sin(x), mpmath.mpf)


def test_bessel():
    assert pytest.approx(vrf.bessel_j0(1.5), 1e-12) == float(mpmath.besselj(0, 1.5))
    assert pytest.approx(vrf.bessel_j2(7.2), 1e-12) == float(mpmath.besselj(2, 7.2))
    assert vrf.besselj(0, math.inf) == 0.0

    with pytest.raises(TypeError):
        vrf.besselj(1.5, 1.0)


def test_spherical_bessel():
    assert vrf.sph_j0(0.0) == 1.0
    assert vrf.sph_j1(0.0) == 0.0
    assert pytest.approx(vrf.sph_j0(1.2), 1e-12) == math.sin(1.2) / 1.2

    # both sides of the switch to the power series
    for x in (0.4999999, 0.5):
        s, c = math.sin(x), math.cos(x)
        assert pytest.approx(vrf.sph_j1(x), 1e-12) == (s - x * c) / x**2
        assert pytest.approx(vrf.sph_j2(x), 1e-9) == ((3 - x**2) * s - 3 * x * c) / x**3


def test_unsupported():
    with pytest.raises(TypeError):
        vrf.exp("1.0")
