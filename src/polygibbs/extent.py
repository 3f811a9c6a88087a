"""Computation of the extent of a single coordinate, i.e., the range of values it can
take while all the other coordinates are held fixed and ``A x <= b`` still holds.

With coordinate ``j`` freed, the inequalities reduce to ``A[:, j] t <= residual``, where
``residual = b - A x`` is computed with ``x[j] = 0`` (see
:meth:`polygibbs.util.geometry.ConstraintSystem.residual`). Two methods find the bounds
of ``t``:

- :func:`optimization_extent` solves two one-dimensional LPs, one minimizing and one
  maximizing ``t``. It handles any sign pattern of the coefficients.
- :func:`linalg_extent` divides the residuals by the coefficients directly. It is
  faster, but unreliable: rows with zero coefficients are skipped and near-zero
  coefficients produce huge ratios.
"""

from typing import NamedTuple

import numpy as np
import numpy.typing as npt

from .lp.base import LinearProgramSolver

_NAN = float("nan")
_MIN = np.ones(1)
_MAX = -_MIN


class ExtentRecord(NamedTuple):
    """Extent of a coordinate and the value sampled within it."""

    min: float
    max: float
    value: float = _NAN
    min_success: bool = True
    max_success: bool = True

    @property
    def success(self) -> bool:
        """Gets whether both bounds were computed successfully."""
        return self.min_success and self.max_success


def optimization_extent(
    solver: LinearProgramSolver,
    column: npt.NDArray[np.floating],
    residual: npt.NDArray[np.floating],
) -> ExtentRecord:
    """Computes the extent of a coordinate by solving ``min t`` and ``max t`` subject to
    ``column * t <= residual``.

    Parameters
    ----------
    solver : LinearProgramSolver
        The LP oracle.
    column : array of shape (m,)
        The coefficients of the coordinate in each inequality.
    residual : array of shape (m,)
        The right-hand sides of the reduced inequalities.

    Returns
    -------
    ExtentRecord
        The extent, with each bound flagged by the success of its LP. Failed bounds are
        NaN. If the residual is not finite (e.g., the fixed coordinates contain NaNs),
        no LP is solved and both bounds fail.
    """
    if not np.isfinite(residual).all():
        return ExtentRecord(_NAN, _NAN, min_success=False, max_success=False)
    A = column.reshape(-1, 1)
    lo = solver.solve(_MIN, A, residual)
    hi = solver.solve(_MAX, A, residual)
    return ExtentRecord(
        lo.value, -hi.value, min_success=lo.success, max_success=hi.success
    )


def linalg_extent(
    column: npt.NDArray[np.floating], residual: npt.NDArray[np.floating]
) -> ExtentRecord:
    """Computes the extent of a coordinate from the ratios ``residual / column``: the
    lower bound is the largest ratio among negative coefficients, and the upper bound
    the smallest ratio among positive ones.

    Parameters
    ----------
    column : array of shape (m,)
        The coefficients of the coordinate in each inequality.
    residual : array of shape (m,)
        The right-hand sides of the reduced inequalities.

    Returns
    -------
    ExtentRecord
        The extent. A bound with no inequality to compute it from is infinite and
        flagged as failed.

    Notes
    -----
    Inequalities whose coefficient is zero are ignored, even when they are violated by
    the fixed coordinates, and near-zero coefficients are not guarded against. This
    method should therefore not be relied upon.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        ratio = residual / column
    neg = column < 0
    pos = column > 0
    lo = float(np.max(ratio[neg], initial=-np.inf))
    hi = float(np.min(ratio[pos], initial=np.inf))
    return ExtentRecord(
        lo, hi, min_success=bool(neg.any()), max_success=bool(pos.any())
    )
