import numpy as np
import pytest

from dualnum.derivative import Derivative, ShapeMismatchError


def test_absent():
    a = Derivative.absent(2)
    assert a.is_absent()
    assert a.shape == (2,)
    assert (a + a).is_absent()
    assert Derivative.combine(a, 3.0, a, 4.0) is a
    assert np.array_equal(a.unwrap(), np.zeros(2))
    assert Derivative.absent().unwrap() == 0.0
    assert np.array_equal(Derivative.absent().unwrap(3), np.zeros(3))


def test_present():
    a = Derivative.present([1.0, 2.0])
    assert a.shape == (2,)
    assert Derivative(2.5).shape == ()

    with pytest.raises(ValueError):
        Derivative.present(None)

    with pytest.raises(ShapeMismatchError):
        Derivative([1.0, 2.0], shape=3)


def test_combine():
    a = Derivative([1.0, 2.0])
    b = Derivative.absent(2)
    c = Derivative([0.5, -1.0])
    assert np.array_equal(Derivative.combine(a, 3.0, b, 5.0).value, [3.0, 6.0])
    assert np.array_equal(Derivative.combine(b, 3.0, a, 5.0).value, [5.0, 10.0])
    assert np.array_equal(Derivative.combine(a, 2.0, c, 2.0).value, [3.0, 2.0])
    assert np.array_equal((a - c).value, [0.5, 3.0])
    assert np.array_equal((-a).value, [-1.0, -2.0])
    assert np.array_equal((a * 2.0).value, [2.0, 4.0])
    assert np.array_equal((2.0 * a).value, [2.0, 4.0])


def test_shape_mismatch():
    with pytest.raises(ShapeMismatchError):
        Derivative([1.0, 2.0]) + Derivative([1.0, 2.0, 3.0])

    with pytest.raises(ShapeMismatchError):
        Derivative.absent(2) + Derivative.absent(3)

    with pytest.raises(ShapeMismatchError):
        Derivative.combine(Derivative(1.0), 1.0, Derivative([1.0]), 1.0)


def test_dynamic_shape():
    a = Derivative.absent() + Derivative([1.0, 2.0])
    assert a.shape == (2,)
    assert np.array_equal(a.value, [1.0, 2.0])
    assert (Derivative.absent() + Derivative.absent(3)).shape == (3,)


def test_unit():
    assert Derivative.unit().value == 1.0
    assert np.array_equal(Derivative.unit(3, 1).value, [0.0, 1.0, 0.0])
    assert np.array_equal(Derivative.unit((2, 2), (1, 0)).value, [[0, 0], [1, 0]])

    with pytest.raises(ValueError):
        Derivative.unit(3)


def test_outer():
    a = Derivative([1.0, 2.0])
    b = Derivative([3.0, 4.0])
    assert np.array_equal(a.outer(b).value, [[3.0, 4.0], [6.0, 8.0]])
    assert Derivative(2.0).outer(Derivative(3.0)).value == 6.0

    c = a.outer(Derivative.absent(3))
    assert c.is_absent()
    assert c.shape == (2, 3)


def test_eq():
    assert Derivative.absent(2) == Derivative([0.0, 0.0])
    assert Derivative([1.0, 2.0]) != Derivative([1.0, 3.0])
    assert Derivative([1.0, 2.0]) != Derivative([1.0, 2.0, 3.0])


@pytest.mark.filterwarnings("error")
def test_nonfinite_without_warning():
    a = Derivative([0.0, np.inf])
    b = Derivative([np.inf, 1.0])
    assert np.isnan((a * 0.0).value[1])
    assert np.isnan((a - a).value[1])
    assert np.isnan(Derivative.combine(a, np.inf, b, 0.0).value[0])
    assert np.isnan(a.outer(Derivative([0.0])).value[1, 0])
