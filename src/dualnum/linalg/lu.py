import logging
from typing import Any, Final

import numpy as np
import numpy.typing as npt

from dualnum.typing import ComparableScalar

logger = logging.getLogger(__name__)

DEFAULT_PIVOT_TOL: Final = 1e-10
"""Pivots smaller than this relative to the largest entry are treated as zero."""


class LinAlgError(ValueError):
    """Error raised by :mod:`dualnum.linalg` functions."""


class SingularMatrixError(LinAlgError):
    """Error raised when a matrix is numerically singular."""


def _re(value: Any) -> Any:
    return value.re if hasattr(type(value), "_dualnum_overload_") else value


def _asmatrix(a: Any) -> npt.NDArray:
    result = np.array(a, dtype=object)

    if result.ndim != 2 or result.shape[0] != result.shape[1]:
        raise LinAlgError("non-square matrix")

    if result.shape[0] == 0:
        raise LinAlgError("empty matrix")

    return result


def _restore(a: npt.NDArray) -> npt.NDArray:
    if all(isinstance(x, float | int) for x in a.flat):
        return a.astype(np.float64)

    return a


def _identity(n: int, like: Any) -> npt.NDArray:
    ZERO = _re(like) * 0
    ONE = ZERO + 1
    result = np.full((n, n), ZERO, dtype=object)

    for i in range(n):
        result[i, i] = ONE

    return result


class LU[T: ComparableScalar]:
    """LU decomposition with partial pivoting.

    Parameters
    ----------
    a : ArrayLike
        Square matrix whose entries are reals or dual numbers.
    tol : float, default=DEFAULT_PIVOT_TOL
        A pivot is regarded as zero unless its magnitude exceeds `tol` times the
        largest magnitude of the entries of `a`.

    Attributes
    ----------
    perm : ndarray
        Row permutation such that ``a[perm] == L @ U``.
    L : ndarray
        Unit lower-triangular factor.
    U : ndarray
        Upper-triangular factor.

    Raises
    ------
    LinAlgError
        If `a` is not square.
    SingularMatrixError
        If a pivot is negligible relative to the entries of `a`.

    Notes
    -----
    Pivots are chosen by the magnitude of their innermost real part, so the pivoting
    sequence for a matrix of dual numbers is the one for its real part. Derivatives of
    the factors and of every quantity computed from them are exact.

    Examples
    --------
    >>> lu = LU([[4.0, 3.0], [6.0, 3.0]])
    >>> print(lu.det())
    -6.0
    >>> print(lu.solve([10.0, 12.0]))
    [1. 2.]
    """

    __slots__ = ("_lu", "_perm", "_sign")
    _lu: npt.NDArray
    _perm: npt.NDArray
    _sign: int

    def __init__(self, a: Any, *, tol: float = DEFAULT_PIVOT_TOL):
        lu = _asmatrix(a)
        n = lu.shape[0]
        perm = np.arange(n)
        sign = 1
        threshold = tol * max(abs(_re(x)) for x in lu.flat)

        for k in range(n):
            p = max(range(k, n), key=lambda i: abs(_re(lu[i, k])))

            if not abs(_re(lu[p, k])) > threshold:
                logger.debug(
                    "pivot %r in column %d is below %g", _re(lu[p, k]), k, threshold
                )
                raise SingularMatrixError("numerically singular matrix")

            if p != k:
                lu[(k, p),] = lu[(p, k),]
                perm[(k, p),] = perm[(p, k),]
                sign = -sign

            for i in range(k + 1, n):
                lu[i, k] = lu[i, k] / lu[k, k]

                for j in range(k + 1, n):
                    lu[i, j] = lu[i, j] - lu[i, k] * lu[k, j]

        self._lu = lu
        self._perm = perm
        self._sign = sign

    @property
    def perm(self) -> npt.NDArray:
        return self._perm.copy()

    @property
    def L(self) -> npt.NDArray:
        n = self._lu.shape[0]
        result = _identity(n, self._lu[0, 0])

        for i in range(n):
            for j in range(i):
                result[i, j] = self._lu[i, j]

        return _restore(result)

    @property
    def U(self) -> npt.NDArray:
        n = self._lu.shape[0]
        result = _identity(n, self._lu[0, 0])

        for i in range(n):
            for j in range(i, n):
                result[i, j] = self._lu[i, j]

        return _restore(result)

    def solve(self, b: Any) -> npt.NDArray:
        """Solve ``a @ x = b``.

        Parameters
        ----------
        b : ArrayLike
            Right-hand side, a vector of shape ``(n,)`` or a matrix of shape
            ``(n, k)``.

        Raises
        ------
        LinAlgError
            If the dimension of `b` does not match.
        """
        lu = self._lu
        n = lu.shape[0]
        b = np.array(b, dtype=object)

        if b.ndim not in (1, 2) or b.shape[0] != n:
            raise LinAlgError("dimension mismatch")

        x = b[self._perm]

        for i in range(n):
            for j in range(i):
                x[i] = x[i] - lu[i, j] * x[j]

        for i in reversed(range(n)):
            for j in range(i + 1, n):
                x[i] = x[i] - lu[i, j] * x[j]

            x[i] = x[i] / lu[i, i]

        return _restore(x)

    def det(self) -> T:
        """Return the determinant."""
        lu = self._lu
        result = lu[0, 0] * self._sign

        for i in range(1, lu.shape[0]):
            result = result * lu[i, i]

        return result

    def inv(self) -> npt.NDArray:
        """Return the inverse."""
        return self.solve(_identity(self._lu.shape[0], self._lu[0, 0]))


def lu(
    a: Any, *, tol: float = DEFAULT_PIVOT_TOL
) -> tuple[npt.NDArray, npt.NDArray, npt.NDArray]:
    """Compute the LU decomposition with partial pivoting.

    Parameters
    ----------
    a : ArrayLike
        Square matrix.
    tol : float, default=DEFAULT_PIVOT_TOL

    Returns
    -------
    perm : ndarray
        Row permutation.
    L : ndarray
        Unit lower-triangular matrix.
    U : ndarray
        Upper-triangular matrix such that ``a[perm] == L @ U``.

    Raises
    ------
    LinAlgError
        If `a` is not square.
    SingularMatrixError
        If `a` is numerically singular.
    """
    tmp = LU(a, tol=tol)
    return (tmp.perm, tmp.L, tmp.U)


def solve(a: Any, b: Any, *, tol: float = DEFAULT_PIVOT_TOL) -> npt.NDArray:
    """Solve a linear equation ``a @ x = b``.

    Raises
    ------
    LinAlgError
        If `a` is not square or the dimension of `b` does not match.
    SingularMatrixError
        If `a` is numerically singular.
    """
    return LU(a, tol=tol).solve(b)


def det(a: Any, *, tol: float = DEFAULT_PIVOT_TOL) -> Any:
    """Compute the determinant.

    A numerically singular matrix raises :class:`SingularMatrixError` rather than
    returning a value close to zero.
    """
    return LU(a, tol=tol).det()


def inv(a: Any, *, tol: float = DEFAULT_PIVOT_TOL) -> npt.NDArray:
    """Compute the inverse of a matrix."""
    return LU(a, tol=tol).inv()
