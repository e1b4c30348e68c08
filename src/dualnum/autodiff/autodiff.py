import dataclasses
import logging
from collections.abc import Callable, Sequence
from typing import Any, Literal

import numpy as np

from dualnum.autodiff.dual import Dual, Dual2, Dual3, DualNumber, HyperDual, HyperHyperDual
from dualnum.derivative import Derivative

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True, slots=True)
class DerivativeResult[T]:
    """Output of the ``try_*`` drivers.

    Attributes
    ----------
    status : Literal["SUCCESS", "FAILURE"]
    content
        Tuple the corresponding driver returns, or ``None`` on failure.
    message : str
        Report from the driver. Typically a reason for a failure.
    error : Exception | None
        Exception raised while evaluating the function.
    """

    status: Literal["SUCCESS", "FAILURE"]
    content: T | None
    message: str
    error: Exception | None = None

    def unwrap(self) -> T:
        """Return `content`, or raise `error` if the evaluation failed."""
        if self.error is not None:
            raise self.error

        return self.content  # type: ignore


def _zeros(shape: tuple[int, ...]) -> Any:
    return Derivative.absent(shape).unwrap()


def _value(y: Any) -> Any:
    return y.real if isinstance(y, DualNumber) else y


def _slot(y: Any, name: str, shape: tuple[int, ...] = ()) -> Any:
    if isinstance(y, DualNumber):
        return getattr(y, name).unwrap(shape)

    return _zeros(shape)


def _collect(out: Any, extract: Callable[[Any], tuple]) -> tuple:
    if isinstance(out, list | tuple | np.ndarray):
        rows = [extract(y) for y in out]
        return tuple(np.array(col) for col in zip(*rows))

    return extract(out)


def _variables(x: Sequence, seed: Callable[[Any, int], Any]) -> np.ndarray:
    result = np.empty(len(x), dtype=object)

    for i, value in enumerate(x):
        result[i] = seed(value, i)

    return result


def first_derivative(g: Callable, x: Any) -> tuple:
    """Evaluate a univariate function and its derivative.

    Parameters
    ----------
    g : Callable
        Differentiated function. It may return a single value or a sequence of them.
    x
        Point of evaluation.

    Returns
    -------
    tuple
        ``(f, df)``. Each is an ndarray if `g` returns a sequence.

    Examples
    --------
    >>> from dualnum import function as vrf
    >>> f, df = first_derivative(lambda x: x**2 + vrf.sqrt(x + 3), 1.2)
    >>> print(format(df, ".6g"))
    2.64398
    """
    out = g(Dual(x, 1.0))
    return _collect(out, lambda y: (_value(y), _slot(y, "eps")))


def gradient(g: Callable, x: Sequence) -> tuple:
    """Evaluate a multivariate scalar-valued function and its gradient.

    Parameters
    ----------
    g : Callable
        Differentiated function. It receives a one-dimensional object array.
    x : Sequence
        Point of evaluation.

    Returns
    -------
    tuple
        ``(f, grad)``.

    Examples
    --------
    >>> f, grad = gradient(lambda v: v[0] ** 3 * v[1] ** 2, [5.0, 4.0])
    >>> print(f, grad)
    2000.0 [1200. 1000.]
    """
    n = len(x)
    args = _variables(x, lambda v, i: Dual.from_re(v, n).derivative(i))
    return _collect(g(args), lambda y: (_value(y), _slot(y, "eps", (n,))))


def jacobian(g: Callable, x: Sequence) -> tuple:
    """Evaluate a vector-valued function and its Jacobian.

    Parameters
    ----------
    g : Callable
        Differentiated function. It receives a one-dimensional object array and
        returns a sequence of `m` values.
    x : Sequence
        Point of evaluation of length `n`.

    Returns
    -------
    tuple
        ``(f, jac)``, where `f` has shape ``(m,)`` and `jac` has shape ``(m, n)``.
    """
    n = len(x)
    args = _variables(x, lambda v, i: Dual.from_re(v, n).derivative(i))
    out = g(args)

    if not isinstance(out, list | tuple | np.ndarray):
        out = [out]

    return _collect(out, lambda y: (_value(y), _slot(y, "eps", (n,))))


def second_derivative(g: Callable, x: Any) -> tuple:
    """Evaluate a univariate function and its first and second derivatives.

    Returns
    -------
    tuple
        ``(f, df, d2f)``.
    """
    out = g(Dual2(x, 1.0))
    return _collect(out, lambda y: (_value(y), _slot(y, "v1"), _slot(y, "v2")))


def hessian(g: Callable, x: Sequence) -> tuple:
    """Evaluate a multivariate scalar-valued function, its gradient and its Hessian.

    Parameters
    ----------
    g : Callable
        Differentiated function. It receives a one-dimensional object array.
    x : Sequence
        Point of evaluation of length `n`.

    Returns
    -------
    tuple
        ``(f, grad, hess)``, where `hess` has shape ``(n, n)``.

    Examples
    --------
    >>> f, grad, hess = hessian(lambda v: v[0] ** 3 * v[1] ** 2, [5.0, 4.0])
    >>> print(hess)
    [[480. 600.]
     [600. 250.]]
    """
    n = len(x)
    args = _variables(x, lambda v, i: Dual2.from_re(v, n).derivative(i))

    def extract(y):
        return (_value(y), _slot(y, "v1", (n,)), _slot(y, "v2", (n, n)))

    return _collect(g(args), extract)


def third_derivative(g: Callable, x: Any) -> tuple:
    """Evaluate a univariate function and its first three derivatives.

    Returns
    -------
    tuple
        ``(f, df, d2f, d3f)``.
    """
    out = g(Dual3(x, 1.0))
    fields = ("v1", "v2", "v3")
    return _collect(out, lambda y: (_value(y), *(_slot(y, x) for x in fields)))


def second_partial_derivative(g: Callable, x: Any, y: Any) -> tuple:
    """Evaluate ``g(x, y)`` and its partial derivatives up to the mixed one.

    Returns
    -------
    tuple
        ``(f, f_x, f_y, f_xy)``.
    """
    out = g(HyperDual(x, eps1=1.0), HyperDual(y, eps2=1.0))
    fields = HyperDual._FIELDS
    return _collect(out, lambda v: (_value(v), *(_slot(v, x) for x in fields)))


def partial_hessian(g: Callable, x: Sequence, y: Sequence) -> tuple:
    """Evaluate ``g(x, y)`` for two vectors and the block of mixed partials.

    Parameters
    ----------
    g : Callable
        Differentiated function. It receives two one-dimensional object arrays.
    x : Sequence
        First argument of length `m`.
    y : Sequence
        Second argument of length `n`.

    Returns
    -------
    tuple
        ``(f, f_x, f_y, f_xy)``, where `f_xy` has shape ``(m, n)``.
    """
    m, n = len(x), len(y)
    xs = _variables(x, lambda v, i: HyperDual.from_re(v, m, n).derivative1(i))
    ys = _variables(y, lambda v, i: HyperDual.from_re(v, m, n).derivative2(i))

    def extract(v):
        return (
            _value(v),
            _slot(v, "eps1", (m,)),
            _slot(v, "eps2", (n,)),
            _slot(v, "eps1eps2", (m, n)),
        )

    return _collect(g(xs, ys), extract)


def third_partial_derivative(g: Callable, x: Any, y: Any, z: Any) -> tuple:
    """Evaluate ``g(x, y, z)`` and all its partial derivatives up to the triple mixed
    one.

    Returns
    -------
    tuple
        ``(f, f_x, f_y, f_z, f_xy, f_xz, f_yz, f_xyz)``.
    """
    out = g(
        HyperHyperDual(x, eps1=1.0),
        HyperHyperDual(y, eps2=1.0),
        HyperHyperDual(z, eps3=1.0),
    )
    fields = HyperHyperDual._FIELDS
    return _collect(out, lambda v: (_value(v), *(_slot(v, x) for x in fields)))


def third_partial_derivative_vec(g: Callable, x: Sequence, i: int, j: int, k: int) -> tuple:
    """Evaluate a multivariate function and its partial derivatives with respect to
    the components `i`, `j` and `k`.

    The indices may coincide, so ``(0, 0, 0)`` yields the third derivative with
    respect to the first component.

    Returns
    -------
    tuple
        ``(f, f_i, f_j, f_k, f_ij, f_ik, f_jk, f_ijk)``.

    Examples
    --------
    >>> out = third_partial_derivative_vec(lambda v: v[0] ** 3 * v[1] ** 2, [1.0, 2.0], 0, 0, 1)
    >>> print(out[-1])
    24.0
    """
    n = len(x)

    for index in (i, j, k):
        if not -n <= index < n:
            raise IndexError(f"index {index} is out of range for {n} variables")

    i, j, k = i % n, j % n, k % n

    def seed(v, p):
        eps = (1.0 if p == q else None for q in (i, j, k))
        return HyperHyperDual(v, *eps)

    out = g(_variables(x, seed))
    fields = HyperHyperDual._FIELDS
    return _collect(out, lambda v: (_value(v), *(_slot(v, x) for x in fields)))


def _attempt(driver: Callable[..., tuple], *args: Any) -> DerivativeResult[tuple]:
    try:
        content = driver(*args)
    except Exception as exc:
        logger.debug("%s failed: %r", driver.__name__, exc)
        message = str(exc) or type(exc).__name__
        return DerivativeResult("FAILURE", None, message, exc)

    return DerivativeResult("SUCCESS", content, "")


def try_first_derivative(g: Callable, x: Any) -> DerivativeResult[tuple]:
    """Same as :func:`first_derivative`, but reports errors in the result."""
    return _attempt(first_derivative, g, x)


def try_gradient(g: Callable, x: Sequence) -> DerivativeResult[tuple]:
    """Same as :func:`gradient`, but reports errors in the result."""
    return _attempt(gradient, g, x)


def try_jacobian(g: Callable, x: Sequence) -> DerivativeResult[tuple]:
    """Same as :func:`jacobian`, but reports errors in the result."""
    return _attempt(jacobian, g, x)


def try_second_derivative(g: Callable, x: Any) -> DerivativeResult[tuple]:
    """Same as :func:`second_derivative`, but reports errors in the result."""
    return _attempt(second_derivative, g, x)


def try_hessian(g: Callable, x: Sequence) -> DerivativeResult[tuple]:
    """Same as :func:`hessian`, but reports errors in the result."""
    return _attempt(hessian, g, x)


def try_third_derivative(g: Callable, x: Any) -> DerivativeResult[tuple]:
    """Same as :func:`third_derivative`, but reports errors in the result."""
    return _attempt(third_derivative, g, x)


def try_second_partial_derivative(g: Callable, x: Any, y: Any) -> DerivativeResult[tuple]:
    """Same as :func:`second_partial_derivative`, but reports errors in the result."""
    return _attempt(second_partial_derivative, g, x, y)


def try_partial_hessian(g: Callable, x: Sequence, y: Sequence) -> DerivativeResult[tuple]:
    """Same as :func:`partial_hessian`, but reports errors in the result."""
    return _attempt(partial_hessian, g, x, y)


def try_third_partial_derivative(
    g: Callable, x: Any, y: Any, z: Any
) -> DerivativeResult[tuple]:
    """Same as :func:`third_partial_derivative`, but reports errors in the result."""
    return _attempt(third_partial_derivative, g, x, y, z)


def try_third_partial_derivative_vec(
    g: Callable, x: Sequence, i: int, j: int, k: int
) -> DerivativeResult[tuple]:
    """Same as :func:`third_partial_derivative_vec`, but reports errors in the
    result."""
    return _attempt(third_partial_derivative_vec, g, x, i, j, k)
