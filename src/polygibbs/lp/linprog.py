from typing import Optional

import numpy as np
import numpy.typing as npt
from scipy.optimize import linprog as _linprog

from .base import LinearProgramSolver, LpResult, LpStatus


class LinprogSolver(LinearProgramSolver):
    """LP oracle based on :func:`scipy.optimize.linprog`.

    Parameters
    ----------
    algorithm : str, optional
        The ``method`` argument of :func:`scipy.optimize.linprog`, e.g., ``"highs"``,
        ``"highs-ds"`` or ``"highs-ipm"``. By default, ``"highs-ipm"``, i.e., the HiGHS
        interior-point method.
    max_iterations : int, optional
        Maximum number of iterations per solve. By default, ``3000``.
    """

    def __init__(
        self, algorithm: Optional[str] = None, max_iterations: int = 3000
    ) -> None:
        super().__init__(algorithm or "highs-ipm", max_iterations)

    def solve(
        self,
        direction: npt.ArrayLike,
        A: npt.ArrayLike,
        b: npt.ArrayLike,
    ) -> LpResult:
        c = np.reshape(direction, -1).astype(float, copy=False)
        A = np.reshape(A, (-1, c.size)).astype(float, copy=False)
        b = np.reshape(b, -1).astype(float, copy=False)
        res = _linprog(
            c,
            A_ub=A,
            b_ub=b,
            bounds=(None, None),
            method=self.algorithm,
            options={"maxiter": self.max_iterations, "disp": False},
        )
        status = LpStatus(res.status)
        if status != LpStatus.OPTIMAL or res.x is None:
            if status == LpStatus.OPTIMAL:
                status = LpStatus.NUMERICAL
            return self._failed(c.size, status, res.message)
        x = np.asarray(res.x, dtype=float)
        return LpResult(x, float(res.fun), status, res.message)
