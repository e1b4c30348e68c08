import numpy as np
import pytest

from dualnum import function as vrf
from dualnum.autodiff import autodiff


def test_first_derivative():
    f, df = autodiff.first_derivative(lambda x: (x + vrf.sin(x**2)) / x, 1.4)
    assert pytest.approx(df, 1e-5) == -1.23095

    out = autodiff.first_derivative(lambda x: [x * x, vrf.exp(x), 3.0], 1.2)
    assert isinstance(out[0], np.ndarray)
    assert np.allclose(out[1], [2.4, np.exp(1.2), 0.0])


def test_second_derivative():
    f, df, d2f = autodiff.second_derivative(lambda x: (x + vrf.sin(x**2)) / x, 1.4)
    assert pytest.approx(df, 1e-5) == -1.23095
    assert pytest.approx(d2f, 1e-5) == -3.96476


def test_third_derivative():
    def g(t):
        return vrf.cos(t) ** 3 * vrf.sin(t) ** 2

    out = autodiff.third_derivative(g, 1.0)
    assert pytest.approx(out[3], 1e-12) == 7.358639755305733


def test_gradient():
    f, grad = autodiff.gradient(lambda v: vrf.pow(v[0], v[1]), [4.5, -2.2])
    assert pytest.approx(grad, 1e-5) == (-0.0178707, 0.0549797)

    f, grad = autodiff.gradient(lambda v: vrf.exp(v[1] / v[0]) + 2, [1.2, 3.5])
    assert pytest.approx(grad, 1e-5) == (-44.9157, 15.3997)

    f, grad = autodiff.gradient(lambda v: np.sum(v * v), [1.0, 2.0, 3.0])
    assert f == 14.0
    assert np.array_equal(grad, [2.0, 4.0, 6.0])


@pytest.mark.filterwarnings("error")
def test_gradient_domain_edge():
    f, grad = autodiff.gradient(lambda v: vrf.sqrt(v[0] * v[1]), [0.0, 0.0])
    assert f == 0.0
    assert np.all(np.isnan(grad))


def test_jacobian():
    def g(v):
        x, y = v
        return (vrf.sin(x * y), x**2 - vrf.cos(y))

    f, jac = autodiff.jacobian(g, [2.0, 3.0])
    assert jac.shape == (2, 2)
    assert pytest.approx(jac[0], 1e-5) == (2.88051, 1.92034)
    assert pytest.approx(jac[1], 1e-5) == (4.00000, 0.14112)


def test_hessian():
    f, grad, hess = autodiff.hessian(lambda v: v[0] ** 3 * v[1] ** 2, [5.0, 4.0])
    assert f == 2000.0
    assert np.array_equal(grad, [1200.0, 1000.0])
    assert np.array_equal(hess, [[480.0, 600.0], [600.0, 250.0]])

    f, grad, hess = autodiff.hessian(lambda v: vrf.sqrt(v[0] ** 2 + v[1] ** 2), [4.0, 3.0])
    assert pytest.approx(f) == 5.0
    assert np.allclose(grad, [0.8, 0.6])
    assert np.allclose(hess, [[0.072, -0.096], [-0.096, 0.128]])

    f, grad, hess = autodiff.hessian(lambda v: 1.0, [4.0, 3.0])
    assert np.array_equal(hess, np.zeros((2, 2)))


def test_second_partial_derivative():
    out = autodiff.second_partial_derivative(lambda x, y: x**3 * y**2, 5.0, 4.0)
    assert out == (2000.0, 1200.0, 1000.0, 600.0)


def test_partial_hessian():
    def g(x, y):
        return x[0] * y[0] + x[1] * y[0] * y[1]

    f, fx, fy, fxy = autodiff.partial_hessian(g, [1.0, 2.0], [3.0, 4.0])
    assert f == 27.0
    assert np.array_equal(fx, [3.0, 12.0])
    assert np.array_equal(fy, [9.0, 6.0])
    assert np.array_equal(fxy, [[1.0, 0.0], [4.0, 3.0]])


def test_third_partial_derivative():
    def g(x, y, z):
        return (x * x + y * y + z * z) ** 3

    out = autodiff.third_partial_derivative(g, 1.0, 2.0, 3.0)
    assert out == (2744.0, 1176.0, 2352.0, 3528.0, 672.0, 1008.0, 2016.0, 288.0)


def test_third_partial_derivative_vec():
    def g(v):
        return v[0] ** 3 * v[1] ** 2

    out = autodiff.third_partial_derivative_vec(g, [1.0, 2.0], 0, 0, 1)
    assert out == (4.0, 12.0, 12.0, 4.0, 24.0, 12.0, 12.0, 24.0)

    out = autodiff.third_partial_derivative_vec(g, [1.0, 2.0], 0, 0, 0)
    assert out[-1] == 24.0

    with pytest.raises(IndexError):
        autodiff.third_partial_derivative_vec(g, [1.0, 2.0], 0, 2, 1)


def test_try():
    r = autodiff.try_hessian(lambda v: v[0] * v[1], [2.0, 3.0])
    assert r.status == "SUCCESS"
    assert np.array_equal(r.unwrap()[2], [[0.0, 1.0], [1.0, 0.0]])

    r = autodiff.try_first_derivative(lambda x: x + "a", 1.0)
    assert r.status == "FAILURE"
    assert r.content is None
    assert isinstance(r.error, TypeError)

    with pytest.raises(TypeError):
        r.unwrap()

    r = autodiff.try_gradient(lambda v: v[2], [1.0, 2.0])
    assert r.status == "FAILURE"
    assert isinstance(r.error, IndexError)
