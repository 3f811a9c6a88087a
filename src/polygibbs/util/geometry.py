"""A submodule with utilities for polytopes described by linear inequalities, i.e.,
:math:`\\{x : A x \\leq b\\}`."""

from typing import NamedTuple, Optional

import numpy as np
import numpy.typing as npt

from ..core.errors import DimensionalityError


class ConstraintSystem(NamedTuple):
    """An immutable system of linear inequalities ``A x <= b``, where ``A`` has shape
    ``(m, n)`` and ``b`` has shape ``(m,)``. Use :meth:`from_arrays` to build and
    validate one."""

    A: npt.NDArray[np.floating]
    b: npt.NDArray[np.floating]

    @classmethod
    def from_arrays(cls, A: npt.ArrayLike, b: npt.ArrayLike) -> "ConstraintSystem":
        """Builds a constraint system from the given arrays.

        Parameters
        ----------
        A : array-like of shape (m, n)
            Coefficients of the inequalities, including lower and upper bounds.
        b : array-like of shape (m,) or (m, 1)
            Right-hand sides of the inequalities.

        Returns
        -------
        ConstraintSystem
            The validated, read-only constraint system.

        Raises
        ------
        ValueError
            Raises if ``A`` is not 2D, or if ``b`` does not have ``m`` elements.
        DimensionalityError
            Raises if there are less than ``n + 1`` inequalities, which cannot bound a
            region in ``n`` dimensions.
        """
        A = np.array(A, dtype=float)
        b = np.array(b, dtype=float).reshape(-1)
        if A.ndim != 2:
            raise ValueError(f"Expected a 2D constraint matrix; got {A.ndim}D instead.")
        m, n = A.shape
        if b.size != m:
            raise ValueError(
                f"Constraint vector has {b.size} elements; expected {m} instead."
            )
        if m < n + 1:
            raise DimensionalityError(
                f"Only {m} inequalities. At least {n + 1} inequalities required."
            )
        A.flags.writeable = False
        b.flags.writeable = False
        return cls(A, b)

    @property
    def n_constraints(self) -> int:
        """Number of inequalities ``m``."""
        return self.A.shape[0]

    @property
    def n_dims(self) -> int:
        """Dimension ``n`` of the space."""
        return self.A.shape[1]

    def is_feasible(self, x: npt.ArrayLike) -> bool:
        """Checks whether ``A x <= b`` holds for every inequality. The check is strict,
        i.e., any violation, however small, makes the point infeasible."""
        return not np.any(self.A @ x > self.b)

    def violation(self, x: npt.ArrayLike) -> float:
        """Returns the maximum violation ``max(A x - b)`` of the inequalities, which is
        non-positive for feasible points and NaN for points containing NaNs."""
        return float(np.max(self.A @ x - self.b))

    def residual(self, x: npt.NDArray[np.floating], coord: int) -> np.ndarray:
        """Computes ``b - A x`` with the given coordinate of ``x`` set to zero, i.e.,
        the right-hand sides of the inequalities ``A[:, coord] t <= residual`` that
        bound the coordinate when the others are held fixed. ``x`` is not modified."""
        x_fixed = x.copy()
        x_fixed[coord] = 0.0
        return self.b - self.A @ x_fixed

    def validate_point(self, x: Optional[npt.ArrayLike]) -> Optional[np.ndarray]:
        """Validates a candidate point, e.g., the user-supplied start of a chain.

        Parameters
        ----------
        x : array-like, optional
            The candidate point, as a row or column vector of ``n`` elements.

        Returns
        -------
        array of shape (n,) or None
            A flattened copy of the point if it has ``n`` numerical elements and is
            feasible; otherwise, ``None``.
        """
        if x is None:
            return None
        try:
            x = np.array(x, dtype=float).reshape(-1)
        except (TypeError, ValueError):
            return None
        if x.size != self.n_dims or not np.isfinite(x).all():
            return None
        if not self.is_feasible(x):
            return None
        return x


def box_constraints(
    lb: npt.ArrayLike, ub: npt.ArrayLike
) -> tuple[npt.NDArray[np.floating], npt.NDArray[np.floating]]:
    """Creates the inequalities ``lb <= x <= ub`` of an axis-aligned box.

    Parameters
    ----------
    lb : array-like of shape (n,)
        Lower bounds of the box.
    ub : array-like of shape (n,)
        Upper bounds of the box.

    Returns
    -------
    tuple of arrays of shape (2n, n) and (2n,)
        The matrix ``A`` and vector ``b``. Rows alternate between the upper and lower
        bound of each coordinate, i.e., ``x_0 <= ub_0``, ``-x_0 <= -lb_0``, and so on.
    """
    lb = np.reshape(lb, -1).astype(float)
    ub = np.reshape(ub, -1).astype(float)
    n = lb.size
    if ub.size != n:
        raise ValueError("Lower and upper bounds must have the same size.")
    eye = np.eye(n)
    A = np.empty((2 * n, n))
    A[0::2] = eye
    A[1::2] = -eye
    b = np.empty(2 * n)
    b[0::2] = ub
    b[1::2] = -lb
    return A, b
