import math

import numpy as np
import pytest

from dualnum import function as vrf
from dualnum.autodiff.dual import Dual2
from dualnum.derivative import ShapeMismatchError


def test_scalar():
    y = vrf.exp(Dual2(1.2, 1.0) ** 2)
    f = math.exp(1.44)
    assert pytest.approx(y.real) == f
    assert pytest.approx(y.v1.value) == 2.4 * f
    assert pytest.approx(y.v2.value) == (2 + 2.4**2) * f


def test_reciprocal():
    y = Dual2(1.2, 1.0).recip()
    assert pytest.approx(y.v1.value, 1e-12) == -0.694444444444445
    assert pytest.approx(y.v2.value, 1e-12) == 1.15740740740741


def test_vector():
    x = Dual2.from_re(5.0, 2).derivative(0)
    y = Dual2.from_re(4.0, 2).derivative(1)
    assert x.v2.shape == (2, 2)

    z = x**3 * y**2
    assert z.real == 2000.0
    assert np.allclose(z.v1.value, [1200.0, 1000.0])
    assert np.allclose(z.v2.value, [[480.0, 600.0], [600.0, 250.0]])


def test_absent():
    x = Dual2.from_re(1.2, 3)
    y = vrf.sin(x) * x + 1.0
    assert y.v1.is_absent() and y.v2.is_absent()
    assert y.v2.shape == (3, 3)
    assert y.real == vrf.sin(1.2) * 1.2 + 1.0


def test_shape():
    with pytest.raises(ShapeMismatchError):
        Dual2(1.0, [1.0, 0.0], [1.0, 0.0])

    with pytest.raises(ShapeMismatchError):
        Dual2.from_re(1.0, 2).derivative(0) + Dual2.from_re(1.0, 3).derivative(0)
