import numpy as np
import pytest

from dualnum import function as vrf
from dualnum.autodiff.dual import Dual, Dual2, Dual3, HyperDual
from dualnum.autodiff.implicit import (
    implicit_derivative,
    implicit_derivative_binary,
    implicit_derivative_sp,
    implicit_derivative_vec,
)


def test_implicit_derivative():
    y = Dual2.from_re(25.0).derivative()
    x = implicit_derivative(lambda x, y: x**2 - y, 5.0, y)
    expected = vrf.sqrt(y)
    assert pytest.approx(x.real, 1e-15) == expected.real
    assert pytest.approx(x.v1.value, 1e-15) == expected.v1.value
    assert pytest.approx(x.v2.value, 1e-15) == expected.v2.value

    y = Dual(25.0, 1.0)
    x = implicit_derivative(lambda x, y: y - x * x, 5.0, y)
    assert x.real == 5.0
    assert pytest.approx(x.eps.value, 1e-15) == 0.1


def test_higher_order():
    y = Dual3(2.0, 1.0)
    x = implicit_derivative(lambda x, y: vrf.exp(x) - y, vrf.log(2.0), y)
    expected = vrf.log(y)

    for name in ("v1", "v2", "v3"):
        value = getattr(expected, name).value
        assert pytest.approx(getattr(x, name).value, 1e-12) == value

    a = HyperDual(3.0, eps1=1.0)
    b = HyperDual(2.0, eps2=1.0)
    x = implicit_derivative(lambda x, a, b: a * x - b, 2.0 / 3.0, a, b)
    assert pytest.approx(x.eps1.value, 1e-12) == -2.0 / 9.0
    assert pytest.approx(x.eps2.value, 1e-12) == 1.0 / 3.0
    assert pytest.approx(x.eps1eps2.value, 1e-12) == -1.0 / 9.0


def test_real_parameters():
    assert implicit_derivative(lambda x, y: x**2 - y, 5.0, 25.0) == 5.0


def test_implicit_derivative_binary():
    a = Dual.from_re(4.0).derivative()
    x, y = implicit_derivative_binary(
        lambda x, y, a: [x * y - a, x + y - a - 1.0], 1.0, 4.0, a
    )
    assert pytest.approx(x.real, 1e-15) == 1.0
    assert pytest.approx(x.eps.value, abs=1e-15) == 0.0
    assert pytest.approx(y.real, 1e-15) == a.real
    assert pytest.approx(y.eps.value, 1e-15) == a.eps.value


def test_sum_of_squares():
    a = Dual.from_re(25.0).derivative()
    b = Dual.from_re(7.0)

    def g(x, y, a, b):
        return [a - x * x - y * y, b - x - y]

    x, y = implicit_derivative_binary(g, 4.0, 3.0, a, b)
    root = vrf.sqrt(a * 2.0 - b * b)
    assert pytest.approx(x.real) == ((b + root) * 0.5).real
    assert pytest.approx(x.eps.value) == ((b + root) * 0.5).eps.value
    assert pytest.approx(y.real) == ((b - root) * 0.5).real
    assert pytest.approx(y.eps.value) == ((b - root) * 0.5).eps.value


def test_implicit_derivative_vec():
    a = Dual.from_re(4.0).derivative()
    x = implicit_derivative_vec(
        lambda v, a: [v[0] * v[1] - a, v[0] + v[1] - a - 1.0], [1.0, 4.0], a
    )
    assert pytest.approx(x[0].real, 1e-15) == 1.0
    assert pytest.approx(x[0].eps.value, abs=1e-15) == 0.0
    assert pytest.approx(x[1].real, 1e-15) == 4.0
    assert pytest.approx(x[1].eps.value, 1e-15) == 1.0


def test_chain():
    s = Dual.from_re(30.0).derivative()

    def g(v, s):
        res = [v[i] - v[i - 1] - 1.0 for i in range(len(v))]
        res[0] = s - np.sum(v * v)
        return res

    x = implicit_derivative_vec(g, [1.0, 2.0, 3.0, 4.0], s)
    x0 = (vrf.sqrt(s - 5.0) - 5.0) * 0.5

    for i in range(4):
        assert pytest.approx(x[i].real) == x0.real + i + 1
        assert pytest.approx(x[i].eps.value) == x0.eps.value


def test_implicit_derivative_sp():
    a = Dual.from_re(2.0).derivative()

    def g(v, a):
        return (a - v[0]) ** 2 + (v[1] - v[0] * v[0]) ** 2 * 100.0

    x = implicit_derivative_sp(g, [2.0, 4.0], a)
    assert pytest.approx(x[0].real, 1e-13) == a.real
    assert pytest.approx(x[0].eps.value, 1e-13) == a.eps.value
    assert pytest.approx(x[1].real, 1e-13) == (a * a).real
    assert pytest.approx(x[1].eps.value, 1e-13) == (a * a).eps.value
