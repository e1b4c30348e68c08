import logging
from typing import Any, Final

import numpy as np
import numpy.typing as npt

from dualnum import function as vrf
from dualnum.linalg.lu import LinAlgError, _asmatrix, _identity, _re, _restore

logger = logging.getLogger(__name__)

DEFAULT_TOL: Final = 1e-14
"""Relative off-diagonal norm at which the Jacobi iteration stops."""

DEFAULT_MAX_ITER: Final = 200
"""Maximum number of Jacobi sweeps."""


class NonConvergenceError(LinAlgError):
    """Error raised when an iterative method exhausts its budget."""


def _sq(x: Any) -> float:
    tmp = float(_re(x))
    return tmp * tmp


def _offnorm(a: npt.NDArray) -> float:
    n = a.shape[0]
    tmp = sum(_sq(a[i, j]) for i in range(n) for j in range(i + 1, n))
    return (2.0 * tmp) ** 0.5


def _rotate(a: npt.NDArray, v: npt.NDArray, p: int, q: int) -> None:
    n = a.shape[0]
    h = a[q, q] - a[p, p]
    habs = abs(_re(h))

    # t == 1 / (2 * theta) to working precision, and theta**2 overflows
    if habs + 100.0 * abs(_re(a[p, q])) == habs:
        t = a[p, q] / h
    else:
        theta = h / (a[p, q] * 2)
        sgn = 1.0 if theta >= 0 else -1.0
        t = sgn / (abs(theta) + vrf.sqrt(theta * theta + 1))

    c = vrf.reciprocal(vrf.sqrt(t * t + 1))
    s = t * c

    for k in range(n):
        akp, akq = a[k, p], a[k, q]
        a[k, p] = c * akp - s * akq
        a[k, q] = s * akp + c * akq

    for k in range(n):
        apk, aqk = a[p, k], a[q, k]
        a[p, k] = c * apk - s * aqk
        a[q, k] = s * apk + c * aqk

    for k in range(n):
        vkp, vkq = v[k, p], v[k, q]
        v[k, p] = c * vkp - s * vkq
        v[k, q] = s * vkp + c * vkq


def eigen_symmetric(
    a: Any, *, max_iter: int = DEFAULT_MAX_ITER, tol: float = DEFAULT_TOL
) -> tuple[npt.NDArray, npt.NDArray]:
    """Compute the eigendecomposition of a symmetric matrix by the cyclic Jacobi
    method.

    Parameters
    ----------
    a : ArrayLike
        Symmetric matrix whose entries are reals or dual numbers. Only the symmetry of
        the real part is assumed.
    max_iter : int, default=DEFAULT_MAX_ITER
        Maximum number of sweeps.
    tol : float, default=DEFAULT_TOL
        The iteration stops once the Frobenius norm of the off-diagonal part is at
        most `tol` times the Frobenius norm of `a`.

    Returns
    -------
    w : ndarray
        Eigenvalues in ascending order of their real parts.
    v : ndarray
        Matrix whose columns are the corresponding normalized eigenvectors.

    Raises
    ------
    LinAlgError
        If `a` is not square.
    NonConvergenceError
        If the iteration does not converge within `max_iter` sweeps.

    Notes
    -----
    Every rotation is composed of dual-number arithmetic, so derivatives of the
    eigenvalues and eigenvectors are obtained along with them as long as the
    eigenvalues are distinct.

    Examples
    --------
    >>> w, v = eigen_symmetric([[2.0, 2.0], [2.0, 5.0]])
    >>> print(w.round(12))
    [1. 6.]
    """
    a = _asmatrix(a)
    n = a.shape[0]
    v = _identity(n, a[0, 0])
    fro = sum(_sq(x) for x in a.flat) ** 0.5

    for sweep in range(max_iter + 1):
        if _offnorm(a) <= tol * fro:
            logger.debug("jacobi converged after %d sweeps", sweep)
            break

        if sweep == max_iter:
            logger.debug("jacobi did not converge in %d sweeps", max_iter)
            raise NonConvergenceError(f"no convergence after {max_iter} sweeps")

        for p in range(n - 1):
            for q in range(p + 1, n):
                apq = abs(_re(a[p, q]))

                if apq == 0.0:
                    continue

                # negligible against both diagonal entries
                g = 100.0 * apq
                app, aqq = abs(_re(a[p, p])), abs(_re(a[q, q]))

                if sweep > 3 and app + g == app and aqq + g == aqq:
                    a[p, q] = a[p, q] * 0
                    a[q, p] = a[q, p] * 0
                    continue

                _rotate(a, v, p, q)

    order = sorted(range(n), key=lambda i: _re(a[i, i]))
    w = np.empty(n, dtype=object)

    for i, k in enumerate(order):
        w[i] = a[k, k]

    return (_restore(w), _restore(v[:, order]))


def smallest_ev(a: Any) -> tuple[Any, npt.NDArray]:
    """Return the smallest eigenvalue of a symmetric matrix and its eigenvector.

    Matrices of size 1 and 2 are handled in closed form, larger ones by
    :func:`eigen_symmetric`.

    Parameters
    ----------
    a : ArrayLike
        Symmetric matrix.

    Returns
    -------
    w
        Smallest eigenvalue.
    v : ndarray
        Normalized eigenvector.

    Examples
    --------
    >>> w, v = smallest_ev([[2.0, 2.0], [2.0, 5.0]])
    >>> print(round(w, 12))
    1.0
    """
    a = _asmatrix(a)

    match a.shape[0]:
        case 1:
            ONE = _re(a[0, 0]) * 0 + 1
            return (a[0, 0], _restore(np.array([ONE], dtype=object)))

        case 2:
            p, b, d = a[0, 0], a[0, 1], a[1, 1]
            half = (p - d) * 0.5
            w = (p + d) * 0.5 - vrf.sqrt(half * half + b * b)
            ZERO = _re(p) * 0
            ONE = ZERO + 1

            if _re(b) == 0:
                tmp = [ONE, ZERO] if _re(p) <= _re(d) else [ZERO, ONE]
            else:
                u1, u2 = (b, w - p), (w - d, b)
                r1 = _sq(u1[0]) + _sq(u1[1])
                r2 = _sq(u2[0]) + _sq(u2[1])
                x, y = u1 if r1 >= r2 else u2
                norm = vrf.sqrt(x * x + y * y)
                tmp = [x / norm, y / norm]

            v = np.empty(2, dtype=object)
            v[0], v[1] = tmp
            return (w, _restore(v))

    w, v = eigen_symmetric(a)
    return (w[0], v[:, 0])
