from abc import ABC, abstractmethod
from enum import IntEnum
from typing import NamedTuple, Optional

import numpy as np
import numpy.typing as npt


class LpStatus(IntEnum):
    """Termination status of an LP solve. The integer codes are aligned with the ones
    returned by :func:`scipy.optimize.linprog`."""

    OPTIMAL = 0
    ITERATION_LIMIT = 1
    INFEASIBLE = 2
    UNBOUNDED = 3
    NUMERICAL = 4


class LpResult(NamedTuple):
    """Outcome of an LP solve.

    When the solve is not successful, ``x`` is filled with NaNs and ``value`` is NaN.
    """

    x: npt.NDArray[np.floating]
    value: float
    status: LpStatus
    message: str = ""

    @property
    def success(self) -> bool:
        """Gets whether the LP was solved to optimality."""
        return self.status == LpStatus.OPTIMAL


class LinearProgramSolver(ABC):
    """Base class for LP oracles, i.e., solvers of

    .. math:: \\min_x c^\\top x \\quad \\text{s.t.} \\quad A x \\leq b,

    where the variables :math:`x` are unbounded. The samplers only rely on
    :meth:`solve`, so that different backends can be swapped seamlessly.

    Parameters
    ----------
    algorithm : str, optional
        The algorithm to be used by the backend. If ``None``, the backend's default is
        used.
    max_iterations : int, optional
        Maximum number of iterations per solve. By default, ``3000``.
    """

    def __init__(
        self, algorithm: Optional[str] = None, max_iterations: int = 3000
    ) -> None:
        self.algorithm = algorithm
        self.max_iterations = max_iterations

    @abstractmethod
    def solve(
        self,
        direction: npt.ArrayLike,
        A: npt.ArrayLike,
        b: npt.ArrayLike,
    ) -> LpResult:
        """Minimizes the given direction over the polyhedron ``A x <= b``.

        Parameters
        ----------
        direction : array-like of shape (n,)
            The cost vector ``c``.
        A : array-like of shape (m, n)
            The inequality constraint matrix.
        b : array-like of shape (m,)
            The inequality constraint vector.

        Returns
        -------
        LpResult
            The optimizer, the optimal value, the termination status and message.
        """

    @staticmethod
    def _failed(n: int, status: LpStatus, message: str) -> LpResult:
        """Internal utility to build the result of an unsuccessful solve."""
        return LpResult(np.full(n, np.nan), float("nan"), status, message)

    def __str__(self) -> str:
        return self.__class__.__name__

    def __repr__(self) -> str:
        cn = self.__class__.__name__
        return f"{cn}(algorithm={self.algorithm},maxiter={self.max_iterations})"
