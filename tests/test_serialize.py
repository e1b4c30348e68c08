import pytest

from dualnum.autodiff.dual import Dual, Dual2, Dual3, HyperDual, HyperHyperDual


def test_to_dict():
    assert Dual(1.2, 3.4).to_dict() == {"re": 1.2, "eps": 3.4}
    assert Dual.from_re(1.2).to_dict() == {"re": 1.2, "eps": None}
    assert Dual2(1.0, 2.0).to_dict() == {"re": 1.0, "v1": 2.0, "v2": None}


def test_round_trip():
    values = [
        Dual(1.2, 3.4),
        Dual2(1.2, 3.4, 5.6),
        Dual3(1.2, 3.4, None, 7.8),
        HyperDual(1.2, 3.4, 5.6, 7.8),
        HyperHyperDual(1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0),
    ]

    for x in values:
        data = x.to_dict()
        y = type(x).from_dict(data)
        assert type(y) is type(x)
        assert y.to_dict() == data


def test_nested():
    x = Dual(Dual(1.0, 2.0), Dual(3.0, 4.0))
    data = x.to_dict()
    assert data == {"re": {"re": 1.0, "eps": 2.0}, "eps": {"re": 3.0, "eps": 4.0}}

    y = Dual.from_dict(data, inner=Dual)
    assert y.priority == 1
    assert y.to_dict() == data

    with pytest.raises(ValueError):
        Dual.from_dict(data)


def test_missing_slot():
    x = HyperDual.from_dict({"re": 2.0, "eps1": 1.0})
    assert x.eps2.is_absent() and x.eps1eps2.is_absent()


def test_vector():
    with pytest.raises(ValueError):
        Dual(1.0, [1.0, 0.0]).to_dict()
