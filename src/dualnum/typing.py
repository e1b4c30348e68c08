"""
##############################
Typing (:mod:`dualnum.typing`)
##############################

This module provides the protocols a number type must satisfy to flow through a
generically written differentiable function.

.. autoclass:: Scalar
    :show-inheritance:
    :no-members:

.. autoclass:: ComparableScalar
    :show-inheritance:
    :no-members:

.. autoclass:: DualScalar
    :show-inheritance:
    :no-members:

"""

from abc import abstractmethod
from typing import Any, Protocol, Self, SupportsAbs


class Scalar(Protocol):
    """Protocol that ensures scalar-like behavior.

    Objects implementing this protocol must have four arithmetic operations and
    integer power defined, and four arithmetic operations must be compatible with
    integers and floats.
    """

    __slots__ = ()

    @abstractmethod
    def __add__(self, rhs: Self | float | int) -> Self: ...

    @abstractmethod
    def __sub__(self, rhs: Self | float | int) -> Self: ...

    @abstractmethod
    def __mul__(self, rhs: Self | float | int) -> Self: ...

    @abstractmethod
    def __truediv__(self, rhs: Self | float | int) -> Self: ...

    @abstractmethod
    def __pow__(self, rhs: int) -> Self: ...

    @abstractmethod
    def __radd__(self, lhs: Self | float | int) -> Self: ...

    @abstractmethod
    def __rsub__(self, lhs: Self | float | int) -> Self: ...

    @abstractmethod
    def __rmul__(self, lhs: Self | float | int) -> Self: ...

    @abstractmethod
    def __rtruediv__(self, lhs: Self | float | int) -> Self: ...

    @abstractmethod
    def __neg__(self) -> Self: ...

    @abstractmethod
    def __pos__(self) -> Self: ...


class ComparableScalar(Scalar, SupportsAbs, Protocol):
    """Protocol for comparable :class:`Scalar`, like a real number."""

    __slots__ = ()

    @abstractmethod
    def __lt__(self, rhs: Any) -> bool: ...

    @abstractmethod
    def __le__(self, rhs: Any) -> bool: ...

    @abstractmethod
    def __gt__(self, rhs: Any) -> bool: ...

    @abstractmethod
    def __ge__(self, rhs: Any) -> bool: ...


class DualScalar(ComparableScalar, Protocol):
    """Protocol for numbers carrying derivative slots.

    Besides the arithmetic of :class:`ComparableScalar`, which compares real parts
    only, a dual scalar implements every elementary function of
    :mod:`dualnum.function` as a method named after the corresponding NumPy ufunc. This
    is what allows ``np.exp`` to be applied to a dual number or to an object array of
    them.

    Functions in :mod:`dualnum.function` reach the implementation through
    ``_dualnum_overload_``, which must return :data:`NotImplemented` for functions the
    type does not support.
    """

    __slots__ = ()

    @property
    @abstractmethod
    def priority(self) -> int: ...

    @property
    @abstractmethod
    def re(self) -> Any: ...

    @abstractmethod
    def _dualnum_overload_(self, fun: Any, *args: Any) -> Any: ...

    @abstractmethod
    def reciprocal(self) -> Self: ...

    @abstractmethod
    def exp(self) -> Self: ...

    @abstractmethod
    def log(self) -> Self: ...

    @abstractmethod
    def sqrt(self) -> Self: ...

    @abstractmethod
    def sin(self) -> Self: ...

    @abstractmethod
    def cos(self) -> Self: ...

    @abstractmethod
    def tan(self) -> Self: ...

    @abstractmethod
    def sinh(self) -> Self: ...

    @abstractmethod
    def cosh(self) -> Self: ...

    @abstractmethod
    def tanh(self) -> Self: ...
