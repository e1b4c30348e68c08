"""
###############################################
Derivative container (:mod:`dualnum.derivative`)
###############################################

.. currentmodule:: dualnum.derivative

This module provides the storage used for every derivative slot of a dual number.

.. autosummary::
    :toctree: generated/

    Derivative
    ShapeMismatchError

"""

from typing import Any, Self

import numpy as np
import numpy.typing as npt


class ShapeMismatchError(ValueError):
    """Error raised when derivatives of incompatible shapes are combined."""


def _asshape(shape: int | tuple[int, ...] | None) -> tuple[int, ...] | None:
    if shape is None:
        return None

    if isinstance(shape, int):
        return (shape,)

    return tuple(int(n) for n in shape)


class Derivative[T]:
    """Possibly absent partial derivative of fixed shape.

    Parameters
    ----------
    value : T | ndarray | Sequence | None, default=None
        Derivative value. ``None`` creates an absent derivative.
    shape : int | tuple[int, ...] | None, default=None
        Declared shape. If `value` is given, its shape must agree with `shape`.

    Attributes
    ----------
    value : T | ndarray | None
        Derivative value, or ``None`` if absent. A scalar derivative is stored as a
        plain field element, and a vector or matrix derivative as an ndarray.
    shape : tuple[int, ...] | None
        Shape of the derivative. ``None`` means that the shape of an absent
        derivative is not known yet.

    Raises
    ------
    ShapeMismatchError
        If the shape of `value` disagrees with `shape`.

    Notes
    -----
    An absent derivative behaves as zero in every operation but holds no buffer.
    Combining two absent derivatives returns an absent derivative without allocating.

    A derivative constructed with a concrete shape has a static size: its shape is
    checked in every combination, even while it is absent. A derivative constructed
    absent and without a shape has a dynamic size, and takes on the shape of the
    present derivative it is combined with.

    Examples
    --------
    >>> a = Derivative([1.0, 2.0])
    >>> b = Derivative.absent(2)
    >>> Derivative.combine(a, 3.0, b, 5.0)
    Derivative(array([3., 6.]))
    >>> (b + b).is_absent()
    True
    """

    __slots__ = ("value", "shape")
    __array_ufunc__ = None
    value: T | npt.NDArray | None
    shape: tuple[int, ...] | None

    def __init__(self, value: Any = None, shape: int | tuple[int, ...] | None = None):
        shape = _asshape(shape)

        if value is None:
            self.value = None
            self.shape = shape
            return

        if isinstance(value, Derivative):
            raise TypeError("value must not be a Derivative")

        if isinstance(value, list | tuple | np.ndarray):
            value = np.asarray(value)

            if value.ndim == 0:
                value = value[()]

        actual = value.shape if isinstance(value, np.ndarray) else ()

        if shape is not None and shape != actual:
            raise ShapeMismatchError(f"expected shape {shape}, got {actual}")

        self.value = value
        self.shape = actual

    @classmethod
    def _make(cls, value: Any, shape: tuple[int, ...] | None) -> Self:
        result = object.__new__(cls)
        result.value = value
        result.shape = shape
        return result

    @classmethod
    def absent(cls, shape: int | tuple[int, ...] | None = None) -> Self:
        """Create an absent derivative.

        Parameters
        ----------
        shape : int | tuple[int, ...] | None, default=None
            Declared shape. ``None`` creates a dynamically sized derivative.
        """
        return cls._make(None, _asshape(shape))

    @classmethod
    def present(cls, value: Any) -> Self:
        """Create a present derivative holding `value`."""
        if value is None:
            raise ValueError("present derivative requires a value")

        return cls(value)

    @classmethod
    def unit(cls, shape: int | tuple[int, ...] = (), index: Any = None) -> Self:
        """Create a unit perturbation.

        Parameters
        ----------
        shape : int | tuple[int, ...], default=()
            Shape of the derivative.
        index : int | tuple[int, ...] | None, default=None
            Position of the one. Ignored if `shape` is ``()``.
        """
        shape = _asshape(shape)

        if shape == ():
            return cls._make(1.0, ())

        if index is None:
            raise ValueError("index is required for a non-scalar unit perturbation")

        buf = np.zeros(shape)
        buf[index] = 1.0
        return cls._make(buf, shape)

    @staticmethod
    def combine(
        a: "Derivative[T]", sa: Any, b: "Derivative[T]", sb: Any
    ) -> "Derivative[T]":
        """Return the linear combination ``sa * a + sb * b``.

        Absent operands are treated as zero, and no buffer is allocated if both are
        absent.

        Raises
        ------
        ShapeMismatchError
            If the shapes of `a` and `b` are known and different.
        """
        shape = _common_shape(a, b)

        if a.value is None and b.value is None:
            return a if a.shape is not None else b

        with np.errstate(all="ignore"):
            if a.value is None:
                return Derivative._make(b.value * sb, shape)

            if b.value is None:
                return Derivative._make(a.value * sa, shape)

            return Derivative._make(a.value * sa + b.value * sb, shape)

    def is_absent(self) -> bool:
        """Return ``True`` if the derivative is absent."""
        return self.value is None

    def unwrap(self, shape: int | tuple[int, ...] | None = None) -> Any:
        """Return the value, or zeros if the derivative is absent.

        Parameters
        ----------
        shape : int | tuple[int, ...] | None, default=None
            Shape used for an absent derivative whose shape is not known. Scalar if
            omitted.
        """
        if self.value is not None:
            return self.value

        if (tmp := self.shape if self.shape is not None else _asshape(shape)) is None:
            tmp = ()

        return 0.0 if tmp == () else np.zeros(tmp)

    def outer(self, other: "Derivative[T]") -> "Derivative[T]":
        """Return the tensor product of two derivatives.

        The shape of the result is the concatenation of both shapes. For scalar
        derivatives this is the ordinary product.
        """
        if self.shape is None or other.shape is None:
            shape = None
        else:
            shape = self.shape + other.shape

        if self.value is None or other.value is None:
            return Derivative._make(None, shape)

        with np.errstate(all="ignore"):
            if self.shape == () or other.shape == ():
                return Derivative._make(self.value * other.value, shape)

            return Derivative._make(np.multiply.outer(self.value, other.value), shape)

    def __repr__(self) -> str:
        if self.value is None:
            return f"{type(self).__name__}(None, shape={self.shape!r})"

        return f"{type(self).__name__}({self.value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Derivative):
            return NotImplemented

        if self.value is None and other.value is None:
            return True

        if None not in (self.shape, other.shape) and self.shape != other.shape:
            return False

        lhs = self.unwrap(other.shape)
        rhs = other.unwrap(self.shape)
        return bool(np.all(lhs == rhs))

    def __add__(self, rhs: "Derivative[T]") -> "Derivative[T]":
        if not isinstance(rhs, Derivative):
            return NotImplemented

        shape = _common_shape(self, rhs)

        if self.value is None:
            return rhs if rhs.shape == shape else Derivative._make(rhs.value, shape)

        if rhs.value is None:
            return self

        with np.errstate(all="ignore"):
            return Derivative._make(self.value + rhs.value, shape)

    def __sub__(self, rhs: "Derivative[T]") -> "Derivative[T]":
        if not isinstance(rhs, Derivative):
            return NotImplemented

        return self + (-rhs)

    def __mul__(self, rhs: Any) -> "Derivative[T]":
        if isinstance(rhs, Derivative | np.ndarray):
            return NotImplemented

        if self.value is None:
            return self

        with np.errstate(all="ignore"):
            return Derivative._make(self.value * rhs, self.shape)

    def __rmul__(self, lhs: Any) -> "Derivative[T]":
        return self.__mul__(lhs)

    def __neg__(self) -> "Derivative[T]":
        if self.value is None:
            return self

        return Derivative._make(-self.value, self.shape)

    def __pos__(self) -> "Derivative[T]":
        return self


def _common_shape(a: Derivative, b: Derivative) -> tuple[int, ...] | None:
    if a.shape is None:
        return b.shape

    if b.shape is not None and a.shape != b.shape:
        raise ShapeMismatchError(f"cannot combine shapes {a.shape} and {b.shape}")

    return a.shape
