from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from typing import Any, ClassVar, Final, Self, final

import mpmath
import mpmath.ctx_mp_python
import numpy as np

from dualnum import function as vrf
from dualnum.autodiff import _rules
from dualnum.derivative import Derivative, ShapeMismatchError, _asshape
from dualnum.typing import DualScalar, Scalar

_FIELD_TYPES: Final = (int, float, np.number, mpmath.ctx_mp_python.mpnumeric)
_FLOAT_TYPES: Final = (float, int, np.floating, np.integer)
_ABSENT: Final = Derivative.absent()

_UNARY: Final = {
    getattr(vrf, name): name
    for name in (
        "reciprocal",
        "exp",
        "expm1",
        "exp2",
        "log",
        "log1p",
        "log2",
        "log10",
        "sqrt",
        "cbrt",
        "sin",
        "cos",
        "tan",
        "sec",
        "csc",
        "cot",
        "arcsin",
        "arccos",
        "arctan",
        "arcsec",
        "arccsc",
        "arccot",
        "sinh",
        "cosh",
        "tanh",
        "sech",
        "csch",
        "coth",
        "arcsinh",
        "arccosh",
        "arctanh",
        "arcsech",
        "arccsch",
        "arccoth",
    )
}


def _div(a, b):
    if isinstance(a, _FLOAT_TYPES) and isinstance(b, _FLOAT_TYPES):
        with np.errstate(all="ignore"):
            return float(np.true_divide(a, b))

    if isinstance(a, DualNumber) or isinstance(b, DualNumber):
        return a / b

    return a * vrf.reciprocal(b)


def _comparable(value) -> bool:
    return isinstance(value, DualNumber) or isinstance(value, _FIELD_TYPES)


def _re(value):
    return value.re if isinstance(value, DualNumber) else value


def _dump(value):
    return value.to_dict() if isinstance(value, DualNumber) else value


def _seed(current: Derivative, index: Any, size: int | None) -> Derivative:
    if (shape := current.shape) is None:
        if index is None:
            shape = ()
        elif size is None:
            raise ValueError("size is required to seed a dynamically sized derivative")
        else:
            shape = _asshape(size)

    return Derivative.unit(shape, index)


class DualNumber[T: Scalar](DualScalar, ABC):
    r"""Abstract base class for dual numbers.

    Attributes
    ----------
    real : T
        Real part. It may itself be a dual number, in which case the result is a
        nested dual number.

    Warnings
    --------
    Users cannot define classes derived from this.

    See Also
    --------
    Dual, Dual2, Dual3, HyperDual, HyperHyperDual

    Notes
    -----
    Every variant carries a fixed set of derivative slots, each stored as a
    :class:`~dualnum.derivative.Derivative`. An arithmetic operation or elementary
    function applied to a dual number returns a dual number of the same variant whose
    real part is what the operation yields on real parts, and whose slots follow the
    product rule or the chain rule truncated at the order of the variant.

    Comparisons, :func:`abs` and truth testing look at the innermost real part only.

    A dual number whose real part is a dual number of lower nesting level has a
    higher priority. Operations between numbers of different priority embed the lower
    one as a constant, while operations between different variants of the same
    priority raise :class:`TypeError`.
    """

    __slots__ = ("real", "_priority")
    __IS_SEALED: Final = True
    _FIELDS: ClassVar[tuple[str, ...]] = ()
    ORDER: ClassVar[int] = 0
    real: T
    _priority: int

    def _setup(self, real: T, *slots: Any) -> None:
        self.real = real
        self._priority = (real._priority + 1) if isinstance(real, DualNumber) else 0

        for name, value in zip(self._FIELDS, slots, strict=True):
            if not isinstance(value, Derivative):
                value = Derivative(value)

            object.__setattr__(self, name, value)

    @classmethod
    def _new(cls, real: Any, *slots: Derivative) -> Self:
        result = object.__new__(cls)
        result.real = real
        result._priority = (
            (real._priority + 1) if isinstance(real, DualNumber) else 0
        )

        for name, value in zip(cls._FIELDS, slots):
            object.__setattr__(result, name, value)

        return result

    def _slots(self) -> tuple[Derivative, ...]:
        return tuple(getattr(self, name) for name in self._FIELDS)

    def _check_scalar(self) -> None:
        for name in self._FIELDS:
            if getattr(self, name).shape not in ((), None):
                raise ShapeMismatchError(
                    f"{type(self).__name__} only supports scalar derivatives"
                )

    @property
    def priority(self) -> int:
        return self._priority

    @property
    def re(self) -> Any:
        """Innermost real part."""
        tmp = self.real

        while isinstance(tmp, DualNumber):
            tmp = tmp.real

        return tmp

    def is_constant(self) -> bool:
        """Return ``True`` if every derivative slot is absent."""
        return all(getattr(self, name).value is None for name in self._FIELDS)

    def _peer(self, value: object) -> bool | None:
        # True for the same variant and level, False for something embedded as a
        # constant, None if the operation is not ours to handle
        if isinstance(value, DualNumber):
            if value._priority < self._priority:
                return False

            if value._priority > self._priority:
                return None

            if type(value) is not type(self):
                raise TypeError(
                    f"cannot mix {type(self).__name__} and {type(value).__name__}"
                )

            return True

        return False if isinstance(value, _FIELD_TYPES) else None

    def _lift(self, value: Any) -> Self:
        match self._peer(value):
            case True:
                return value

            case False:
                return self._new(value, *(_ABSENT,) * len(self._FIELDS))

            case _:
                raise TypeError(f"unsupported operand type: {type(value).__name__}")

    def _scale(self, value: Any) -> Self:
        return self._new(self.real * value, *(x * value for x in self._slots()))

    def _with_real(self, real: Any) -> Self:
        return self._new(real, *self._slots())

    @abstractmethod
    def _mul(self, rhs: Self) -> Self:
        raise NotImplementedError

    @abstractmethod
    def _chain(self, f: list) -> Self:
        raise NotImplementedError

    def _apply(self, rule: Callable[..., list], *args: Any) -> Self:
        if self.is_constant():
            return self._with_real(rule(self.real, 0, *args)[0])

        return self._chain(rule(self.real, self.ORDER, *args))

    def __repr__(self) -> str:
        items = (f"{x}={getattr(self, x).value!r}" for x in self._FIELDS)
        return f"{type(self).__name__}(real={self.real!r}, {', '.join(items)})"

    def __str__(self) -> str:
        items = (f"{x}={getattr(self, x).value}" for x in self._FIELDS)
        return f"{type(self).__name__}(real={self.real}, {', '.join(items)})"

    def __bool__(self) -> bool:
        return bool(self.re)

    def __eq__(self, other: object) -> bool:
        if not _comparable(other):
            return NotImplemented

        return self.re == _re(other)

    def __ne__(self, other: object) -> bool:
        if not _comparable(other):
            return NotImplemented

        return self.re != _re(other)

    __hash__ = None  # type: ignore

    def __lt__(self, rhs: Any) -> bool:
        if not _comparable(rhs):
            return NotImplemented

        return self.re < _re(rhs)

    def __le__(self, rhs: Any) -> bool:
        if not _comparable(rhs):
            return NotImplemented

        return self.re <= _re(rhs)

    def __gt__(self, rhs: Any) -> bool:
        if not _comparable(rhs):
            return NotImplemented

        return self.re > _re(rhs)

    def __ge__(self, rhs: Any) -> bool:
        if not _comparable(rhs):
            return NotImplemented

        return self.re >= _re(rhs)

    def __add__(self, rhs: Self | T | float | int) -> Self:
        match self._peer(rhs):
            case None:
                return NotImplemented

            case False:
                return self._with_real(self.real + rhs)

        slots = (x + y for x, y in zip(self._slots(), rhs._slots()))  # type: ignore
        return self._new(self.real + rhs.real, *slots)  # type: ignore

    def __sub__(self, rhs: Self | T | float | int) -> Self:
        match self._peer(rhs):
            case None:
                return NotImplemented

            case False:
                return self._with_real(self.real - rhs)

        slots = (x - y for x, y in zip(self._slots(), rhs._slots()))  # type: ignore
        return self._new(self.real - rhs.real, *slots)  # type: ignore

    def __mul__(self, rhs: Self | T | float | int) -> Self:
        match self._peer(rhs):
            case None:
                return NotImplemented

            case False:
                return self._scale(rhs)

        return self._mul(rhs)  # type: ignore

    def __truediv__(self, rhs: Self | T | float | int) -> Self:
        match self._peer(rhs):
            case None:
                return NotImplemented

            case False:
                result = self._scale(vrf.reciprocal(rhs))
                return result._with_real(_div(self.real, rhs))

        result = self._mul(rhs.reciprocal())  # type: ignore
        return result._with_real(_div(self.real, rhs.real))  # type: ignore

    def __pow__(self, rhs: Self | T | float | int) -> Self:
        match self._peer(rhs):
            case None:
                return NotImplemented

            case True:
                return self.powd(rhs)

        if isinstance(rhs, int):
            return self.powi(rhs)

        return self.powf(rhs)

    def __radd__(self, lhs: T | float | int) -> Self:
        if self._peer(lhs) is not False:
            return NotImplemented

        return self._with_real(lhs + self.real)

    def __rsub__(self, lhs: T | float | int) -> Self:
        if self._peer(lhs) is not False:
            return NotImplemented

        return (-self)._with_real(lhs - self.real)

    def __rmul__(self, lhs: T | float | int) -> Self:
        if self._peer(lhs) is not False:
            return NotImplemented

        return self._new(lhs * self.real, *(x * lhs for x in self._slots()))

    def __rtruediv__(self, lhs: T | float | int) -> Self:
        if self._peer(lhs) is not False:
            return NotImplemented

        return self.reciprocal()._scale(lhs)._with_real(_div(lhs, self.real))

    def __rpow__(self, lhs: T | float | int) -> Self:
        if self._peer(lhs) is not False:
            return NotImplemented

        result = (self * vrf.log(lhs)).exp()
        return result._with_real(vrf.pow(lhs, self.real))

    def __neg__(self) -> Self:
        return self._new(-self.real, *(-x for x in self._slots()))

    def __pos__(self) -> Self:
        return self

    def __abs__(self) -> Self:
        return -self if self.re < 0 else self

    def _dualnum_overload_(self, fun, *args):
        match fun:
            case vrf.pow:
                return args[0] ** args[1]

            case vrf.powi | vrf.powf | vrf.powd:
                if args[0] is self:
                    return getattr(self, fun.__name__)(args[1])

                return args[0] ** args[1]

            case vrf.arctan2:
                return self._arctan2(*args)

            case vrf.log_base:
                if args[0] is self:
                    return self.log_base(args[1])

                return vrf.log(args[0]) / vrf.log(args[1])

            case vrf.besselj:
                return args[1].besselj(args[0])

        if (name := _UNARY.get(fun)) is not None:
            return getattr(self, name)()

        return NotImplemented

    def _arctan2(self, y, x) -> Self:
        y = self._lift(y)
        x = self._lift(x)

        if abs(x.re) >= abs(y.re):
            result = (y / x).arctan()
        else:
            result = -(x / y).arctan()

        return result._with_real(vrf.arctan2(y.real, x.real))

    def reciprocal(self) -> Self:
        return self._apply(_rules.reciprocal)

    def recip(self) -> Self:
        """Alias of :meth:`reciprocal`."""
        return self.reciprocal()

    def exp(self) -> Self:
        return self._apply(_rules.exp)

    def expm1(self) -> Self:
        return self._apply(_rules.expm1)

    def exp2(self) -> Self:
        return self._apply(_rules.exp2)

    def log(self) -> Self:
        return self._apply(_rules.log)

    def log_base(self, base: Any) -> Self:
        if isinstance(base, DualNumber):
            return self.log() / vrf.log(base)

        return self._apply(_rules.log_base, base)

    def log1p(self) -> Self:
        return self._apply(_rules.log1p)

    def log2(self) -> Self:
        return self._apply(_rules.log2)

    def log10(self) -> Self:
        return self._apply(_rules.log10)

    def sqrt(self) -> Self:
        return self._apply(_rules.sqrt)

    def cbrt(self) -> Self:
        return self._apply(_rules.cbrt)

    def powi(self, n: int) -> Self:
        """Raise to the integer power `n`."""
        return self._apply(_rules.powi, n)

    def powf(self, a: Any) -> Self:
        """Raise to the power `a`, which is not a dual number of this level."""
        if isinstance(a, DualNumber) and a._priority >= self._priority:
            return self.powd(a)

        return self._apply(_rules.powf, a)

    def powd(self, y: Any) -> Self:
        """Raise to the dual power `y`, as ``exp(y * log(self))``."""
        y = self._lift(y)
        result = (y * self.log()).exp()
        return result._with_real(vrf.pow(self.real, y.real))

    def sin(self) -> Self:
        return self._apply(_rules.sin)

    def cos(self) -> Self:
        return self._apply(_rules.cos)

    def tan(self) -> Self:
        return self._apply(_rules.tan)

    def sec(self) -> Self:
        return self._apply(_rules.sec)

    def csc(self) -> Self:
        return self._apply(_rules.csc)

    def cot(self) -> Self:
        return self._apply(_rules.cot)

    def sin_cos(self) -> tuple[Self, Self]:
        return (self.sin(), self.cos())

    def arcsin(self) -> Self:
        return self._apply(_rules.arcsin)

    def arccos(self) -> Self:
        return self._apply(_rules.arccos)

    def arctan(self) -> Self:
        return self._apply(_rules.arctan)

    def arcsec(self) -> Self:
        return self._apply(_rules.arcsec)

    def arccsc(self) -> Self:
        return self._apply(_rules.arccsc)

    def arccot(self) -> Self:
        return self._apply(_rules.arccot)

    def arctan2(self, x: Any) -> Self:
        """Return ``arctan2(self, x)``."""
        return self._arctan2(self, x)

    def sinh(self) -> Self:
        return self._apply(_rules.sinh)

    def cosh(self) -> Self:
        return self._apply(_rules.cosh)

    def tanh(self) -> Self:
        return self._apply(_rules.tanh)

    def sech(self) -> Self:
        return self._apply(_rules.sech)

    def csch(self) -> Self:
        return self._apply(_rules.csch)

    def coth(self) -> Self:
        return self._apply(_rules.coth)

    def arcsinh(self) -> Self:
        return self._apply(_rules.arcsinh)

    def arccosh(self) -> Self:
        return self._apply(_rules.arccosh)

    def arctanh(self) -> Self:
        return self._apply(_rules.arctanh)

    def arcsech(self) -> Self:
        return self._apply(_rules.arcsech)

    def arccsch(self) -> Self:
        return self._apply(_rules.arccsch)

    def arccoth(self) -> Self:
        return self._apply(_rules.arccoth)

    def besselj(self, n: int) -> Self:
        """Bessel function of the first kind of integer order `n`."""
        if not isinstance(n, int):
            raise TypeError("order must be an integer")

        return self._apply(_rules.besselj, n)

    def bessel_j0(self) -> Self:
        return self.besselj(0)

    def bessel_j1(self) -> Self:
        return self.besselj(1)

    def bessel_j2(self) -> Self:
        return self.besselj(2)

    def sph_j0(self) -> Self:
        return vrf.sph_j0(self)

    def sph_j1(self) -> Self:
        return vrf.sph_j1(self)

    def sph_j2(self) -> Self:
        return vrf.sph_j2(self)

    def to_dict(self) -> dict[str, Any]:
        """Return a mapping of the real part and the derivative slots.

        Absent slots map to ``None`` and nested dual numbers map to nested mappings.

        Raises
        ------
        ValueError
            If a derivative slot is not scalar.
        """
        result = {"re": _dump(self.real)}

        for name in self._FIELDS:
            tmp = getattr(self, name)

            if tmp.shape not in ((), None):
                raise ValueError("only scalar derivatives can be serialized")

            result[name] = None if tmp.value is None else _dump(tmp.value)

        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], inner: type | None = None) -> Self:
        """Rebuild a dual number from the output of :meth:`to_dict`.

        Parameters
        ----------
        data : Mapping[str, Any]
        inner : type | None, default=None
            Variant of the real part if the number is nested. Missing slots are
            treated as absent.
        """

        def load(value):
            if value is None or not isinstance(value, Mapping):
                return value

            if inner is None:
                raise ValueError("inner variant is required for nested dual numbers")

            return inner.from_dict(value)

        return cls(load(data["re"]), *(load(data.get(x)) for x in cls._FIELDS))

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)

        if cls.__IS_SEALED:
            raise RuntimeError("subclassing is forbidden")


DualNumber._DualNumber__IS_SEALED = False  # type: ignore


@final
class Dual[T: Scalar](DualNumber[T]):
    r"""Dual number carrying a first derivative.

    Parameters
    ----------
    real : T
    eps : T | ArrayLike | Derivative | None, default=None
        First derivative. ``None`` means that it is absent.

    Attributes
    ----------
    real : T
    eps : Derivative[T]

    Notes
    -----
    Instances behave like elements of :math:`T[\varepsilon]/(\varepsilon^2)`, where the
    coefficient of :math:`\varepsilon` may be a vector of partial derivatives.

    Examples
    --------
    >>> from dualnum import function as vrf
    >>> x = Dual(1.2, 1.0)
    >>> y = vrf.exp(x * x)
    >>> print(format(y.eps.value, ".6f"))
    10.129963
    """

    __slots__ = ("eps",)
    _FIELDS = ("eps",)
    ORDER = 1
    eps: Derivative[T]

    def __init__(self, real: T, eps: Any = None):
        self._setup(real, eps)

    @classmethod
    def from_re(cls, real: T, shape: int | tuple[int, ...] | None = None) -> Self:
        """Create a constant with an absent derivative of the given shape."""
        return cls._new(real, Derivative.absent(shape))

    def derivative(self, index: Any = None, size: int | None = None) -> Self:
        """Return a copy whose derivative is seeded with a unit perturbation.

        Parameters
        ----------
        index : int | None, default=None
            Position of the one for a vector derivative.
        size : int | None, default=None
            Length of the derivative, required if its shape is not known yet.
        """
        return self._new(self.real, _seed(self.eps, index, size))

    def _mul(self, rhs):
        a, b = self.real, rhs.real
        return self._new(a * b, Derivative.combine(self.eps, b, rhs.eps, a))

    def _chain(self, f):
        return self._new(f[0], self.eps * f[1])


@final
class Dual2[T: Scalar](DualNumber[T]):
    r"""Dual number carrying first and second derivatives.

    Parameters
    ----------
    real : T
    v1 : T | ArrayLike | Derivative | None, default=None
        First derivative, a scalar or a gradient of shape ``(n,)``.
    v2 : T | ArrayLike | Derivative | None, default=None
        Second derivative, a scalar or a Hessian of shape ``(n, n)``.

    Attributes
    ----------
    real : T
    v1 : Derivative[T]
    v2 : Derivative[T]

    Raises
    ------
    ShapeMismatchError
        If the shape of `v2` is not the shape of `v1` twice.
    """

    __slots__ = ("v1", "v2")
    _FIELDS = ("v1", "v2")
    ORDER = 2
    v1: Derivative[T]
    v2: Derivative[T]

    def __init__(self, real: T, v1: Any = None, v2: Any = None):
        self._setup(real, v1, v2)
        s1, s2 = self.v1.shape, self.v2.shape

        if s1 is not None and s2 is not None and s2 != s1 * 2:
            raise ShapeMismatchError(f"second derivative of shape {s2} for {s1}")

    @classmethod
    def from_re(cls, real: T, shape: int | tuple[int, ...] | None = None) -> Self:
        """Create a constant with absent derivatives for `shape` variables."""
        if (shape := _asshape(shape)) is None:
            return cls._new(real, _ABSENT, _ABSENT)

        return cls._new(real, Derivative.absent(shape), Derivative.absent(shape * 2))

    def derivative(self, index: Any = None, size: int | None = None) -> Self:
        """Return a copy whose first derivative is seeded with a unit perturbation."""
        v1 = _seed(self.v1, index, size)
        return self._new(self.real, v1, Derivative.absent(v1.shape * 2))  # type: ignore

    def _mul(self, rhs):
        a, b = self.real, rhs.real
        v1 = Derivative.combine(self.v1, b, rhs.v1, a)
        v2 = Derivative.combine(self.v2, b, rhs.v2, a)
        v2 = v2 + self.v1.outer(rhs.v1) + rhs.v1.outer(self.v1)
        return self._new(a * b, v1, v2)

    def _chain(self, f):
        v1 = self.v1 * f[1]
        v2 = Derivative.combine(self.v2, f[1], self.v1.outer(self.v1), f[2])
        return self._new(f[0], v1, v2)


@final
class Dual3[T: Scalar](DualNumber[T]):
    """Dual number carrying first, second and third derivatives of one variable.

    Parameters
    ----------
    real : T
    v1, v2, v3 : T | Derivative | None, default=None

    Attributes
    ----------
    real : T
    v1, v2, v3 : Derivative[T]

    Raises
    ------
    ShapeMismatchError
        If a derivative is not scalar.
    """

    __slots__ = ("v1", "v2", "v3")
    _FIELDS = ("v1", "v2", "v3")
    ORDER = 3
    v1: Derivative[T]
    v2: Derivative[T]
    v3: Derivative[T]

    def __init__(self, real: T, v1: Any = None, v2: Any = None, v3: Any = None):
        self._setup(real, v1, v2, v3)
        self._check_scalar()

    @classmethod
    def from_re(cls, real: T) -> Self:
        return cls._new(real, _ABSENT, _ABSENT, _ABSENT)

    def derivative(self) -> Self:
        """Return a copy whose first derivative is seeded with one."""
        return self._new(self.real, Derivative.unit(), _ABSENT, _ABSENT)

    def _mul(self, rhs):
        a, b = self.real, rhs.real
        v1 = Derivative.combine(self.v1, b, rhs.v1, a)
        v2 = Derivative.combine(self.v2, b, rhs.v2, a) + self.v1.outer(rhs.v1) * 2
        v3 = (self.v2.outer(rhs.v1) + self.v1.outer(rhs.v2)) * 3
        v3 = Derivative.combine(self.v3, b, rhs.v3, a) + v3
        return self._new(a * b, v1, v2, v3)

    def _chain(self, f):
        v1, v2, v3 = self.v1, self.v2, self.v3
        v11 = v1.outer(v1)
        w3 = v3 * f[1] + v1.outer(v2) * (f[2] * 3) + v11.outer(v1) * f[3]
        return self._new(f[0], v1 * f[1], Derivative.combine(v2, f[1], v11, f[2]), w3)


@final
class HyperDual[T: Scalar](DualNumber[T]):
    r"""Hyper-dual number carrying two independent first derivatives and their cross
    derivative.

    Parameters
    ----------
    real : T
    eps1 : T | ArrayLike | Derivative | None, default=None
    eps2 : T | ArrayLike | Derivative | None, default=None
    eps1eps2 : T | ArrayLike | Derivative | None, default=None
        Cross derivative, whose shape is the concatenation of the shapes of `eps1`
        and `eps2`.

    Attributes
    ----------
    real : T
    eps1, eps2, eps1eps2 : Derivative[T]

    Notes
    -----
    Instances behave like elements of
    :math:`T[\varepsilon_1,\varepsilon_2]/(\varepsilon_1^2,\varepsilon_2^2)`.
    """

    __slots__ = ("eps1", "eps2", "eps1eps2")
    _FIELDS = ("eps1", "eps2", "eps1eps2")
    ORDER = 2
    eps1: Derivative[T]
    eps2: Derivative[T]
    eps1eps2: Derivative[T]

    def __init__(
        self, real: T, eps1: Any = None, eps2: Any = None, eps1eps2: Any = None
    ):
        self._setup(real, eps1, eps2, eps1eps2)
        s1, s2, s12 = self.eps1.shape, self.eps2.shape, self.eps1eps2.shape

        if None not in (s1, s2, s12) and s12 != s1 + s2:  # type: ignore
            raise ShapeMismatchError(f"cross derivative of shape {s12} for {s1}, {s2}")

    @classmethod
    def from_re(
        cls,
        real: T,
        shape1: int | tuple[int, ...] | None = None,
        shape2: int | tuple[int, ...] | None = None,
    ) -> Self:
        s1, s2 = _asshape(shape1), _asshape(shape2)
        s12 = None if s1 is None or s2 is None else s1 + s2
        return cls._new(
            real, Derivative.absent(s1), Derivative.absent(s2), Derivative.absent(s12)
        )

    def derivative1(self, index: Any = None, size: int | None = None) -> Self:
        """Return a copy whose first derivative slot is seeded."""
        eps1 = _seed(self.eps1, index, size)
        s2 = self.eps2.shape
        eps12 = Derivative.absent(None if s2 is None else eps1.shape + s2)  # type: ignore
        return self._new(self.real, eps1, self.eps2, eps12)

    def derivative2(self, index: Any = None, size: int | None = None) -> Self:
        """Return a copy whose second derivative slot is seeded."""
        eps2 = _seed(self.eps2, index, size)
        s1 = self.eps1.shape
        eps12 = Derivative.absent(None if s1 is None else s1 + eps2.shape)  # type: ignore
        return self._new(self.real, self.eps1, eps2, eps12)

    def _mul(self, rhs):
        a, b = self.real, rhs.real
        eps1 = Derivative.combine(self.eps1, b, rhs.eps1, a)
        eps2 = Derivative.combine(self.eps2, b, rhs.eps2, a)
        eps12 = Derivative.combine(self.eps1eps2, b, rhs.eps1eps2, a)
        eps12 = eps12 + self.eps1.outer(rhs.eps2) + rhs.eps1.outer(self.eps2)
        return self._new(a * b, eps1, eps2, eps12)

    def _chain(self, f):
        eps1, eps2 = self.eps1, self.eps2
        eps12 = Derivative.combine(self.eps1eps2, f[1], eps1.outer(eps2), f[2])
        return self._new(f[0], eps1 * f[1], eps2 * f[1], eps12)


@final
class HyperHyperDual[T: Scalar](DualNumber[T]):
    """Dual number carrying three independent first derivatives and all their cross
    derivatives.

    Parameters
    ----------
    real : T
    eps1, eps2, eps3 : T | Derivative | None, default=None
    eps1eps2, eps1eps3, eps2eps3 : T | Derivative | None, default=None
    eps1eps2eps3 : T | Derivative | None, default=None

    Raises
    ------
    ShapeMismatchError
        If a derivative is not scalar.
    """

    __slots__ = (
        "eps1",
        "eps2",
        "eps3",
        "eps1eps2",
        "eps1eps3",
        "eps2eps3",
        "eps1eps2eps3",
    )
    _FIELDS = __slots__
    ORDER = 3
    eps1: Derivative[T]
    eps2: Derivative[T]
    eps3: Derivative[T]
    eps1eps2: Derivative[T]
    eps1eps3: Derivative[T]
    eps2eps3: Derivative[T]
    eps1eps2eps3: Derivative[T]

    def __init__(
        self,
        real: T,
        eps1: Any = None,
        eps2: Any = None,
        eps3: Any = None,
        eps1eps2: Any = None,
        eps1eps3: Any = None,
        eps2eps3: Any = None,
        eps1eps2eps3: Any = None,
    ):
        self._setup(
            real, eps1, eps2, eps3, eps1eps2, eps1eps3, eps2eps3, eps1eps2eps3
        )
        self._check_scalar()

    @classmethod
    def from_re(cls, real: T) -> Self:
        return cls._new(real, *(_ABSENT,) * 7)

    def _seeded(self, k: int) -> Self:
        slots = list(self._slots())
        slots[k] = Derivative.unit()
        return self._new(self.real, *slots)

    def derivative1(self) -> Self:
        return self._seeded(0)

    def derivative2(self) -> Self:
        return self._seeded(1)

    def derivative3(self) -> Self:
        return self._seeded(2)

    def _mul(self, rhs):
        a, b = self.real, rhs.real
        p1, p2, p3, p12, p13, p23, p123 = self._slots()
        q1, q2, q3, q12, q13, q23, q123 = rhs._slots()
        comb = Derivative.combine
        r12 = comb(p12, b, q12, a) + p1.outer(q2) + q1.outer(p2)
        r13 = comb(p13, b, q13, a) + p1.outer(q3) + q1.outer(p3)
        r23 = comb(p23, b, q23, a) + p2.outer(q3) + q2.outer(p3)
        r123 = (
            comb(p123, b, q123, a)
            + p1.outer(q23)
            + p2.outer(q13)
            + p3.outer(q12)
            + q1.outer(p23)
            + q2.outer(p13)
            + q3.outer(p12)
        )
        r1, r2, r3 = comb(p1, b, q1, a), comb(p2, b, q2, a), comb(p3, b, q3, a)
        return self._new(a * b, r1, r2, r3, r12, r13, r23, r123)

    def _chain(self, f):
        e1, e2, e3, e12, e13, e23, e123 = self._slots()
        comb = Derivative.combine
        r123 = (
            e123 * f[1]
            + (e1.outer(e23) + e2.outer(e13) + e3.outer(e12)) * f[2]
            + e1.outer(e2).outer(e3) * f[3]
        )
        return self._new(
            f[0],
            e1 * f[1],
            e2 * f[1],
            e3 * f[1],
            comb(e12, f[1], e1.outer(e2), f[2]),
            comb(e13, f[1], e1.outer(e3), f[2]),
            comb(e23, f[1], e2.outer(e3), f[2]),
            r123,
        )


DualNumber._DualNumber__IS_SEALED = True  # type: ignore
