"""
###################################################
Generic linear algebra (:mod:`dualnum.linalg`)
###################################################

.. currentmodule:: dualnum.linalg

This module provides dense linear algebra written only with arithmetic and the
functions of :mod:`dualnum.function`, so that matrices of dual numbers are handled in
the same way as matrices of reals.

LU decomposition
================

.. autosummary::
    :toctree: generated/

    LU
    lu
    solve
    det
    inv

Symmetric eigenproblems
=======================

.. autosummary::
    :toctree: generated/

    eigen_symmetric
    smallest_ev

Miscellaneous
=============

.. autosummary::
    :toctree: generated/

    LinAlgError
    NonConvergenceError
    SingularMatrixError

"""

from .eigen import NonConvergenceError, eigen_symmetric, smallest_ev
from .lu import LU, LinAlgError, SingularMatrixError, det, inv, lu, solve

__all__ = [
    "LU",
    "LinAlgError",
    "NonConvergenceError",
    "SingularMatrixError",
    "det",
    "eigen_symmetric",
    "inv",
    "lu",
    "smallest_ev",
    "solve",
]
