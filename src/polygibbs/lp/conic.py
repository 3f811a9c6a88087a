from typing import Any, Optional

import casadi as cs
import numpy as np
import numpy.typing as npt

from .base import LinearProgramSolver, LpResult, LpStatus

_PLUGIN_OPTS = {
    "highs": lambda maxiter: {
        "highs": {"output_flag": False, "simplex_iteration_limit": maxiter}
    },
    "osqp": lambda maxiter: {
        "osqp": {
            "verbose": False,
            "polish": True,
            "eps_abs": 1e-9,
            "eps_rel": 1e-9,
            "eps_prim_inf": 1e-10,
            "eps_dual_inf": 1e-10,
            "max_iter": maxiter,
        }
    },
}


def _status_from_stats(stats: dict[str, Any]) -> LpStatus:
    """Internal utility to map the stats of a :class:`casadi.Function` conic solver to
    an LP status."""
    if stats.get("success", False):
        return LpStatus.OPTIMAL
    status = str(stats.get("return_status", "")).lower()
    if "infeasible" in status:
        return LpStatus.INFEASIBLE
    if "unbounded" in status:
        return LpStatus.UNBOUNDED
    if "iter" in status or "limit" in status:
        return LpStatus.ITERATION_LIMIT
    return LpStatus.NUMERICAL


class ConicSolver(LinearProgramSolver):
    """LP oracle based on the conic solvers interfaced by :func:`casadi.conic`. The LP
    is passed as a QP with an empty hessian sparsity.

    Parameters
    ----------
    algorithm : str, optional
        The name of the casadi conic plugin, e.g., ``"highs"`` or ``"osqp"``. By
        default, ``"highs"``.
    max_iterations : int, optional
        Maximum number of iterations per solve. By default, ``3000``.
    """

    def __init__(
        self, algorithm: Optional[str] = None, max_iterations: int = 3000
    ) -> None:
        super().__init__(algorithm or "highs", max_iterations)

    def _init_solver(self, m: int, n: int) -> cs.Function:
        """Internal utility to create the casadi conic solver for an LP with ``m``
        inequalities and ``n`` variables."""
        lp = {"h": cs.Sparsity(n, n), "a": cs.Sparsity.dense(m, n)}
        opts = {"error_on_fail": False}
        plugin_opts = _PLUGIN_OPTS.get(self.algorithm)
        if plugin_opts is not None:
            opts.update(plugin_opts(self.max_iterations))
        return cs.conic(f"lpsol_{id(self)}", self.algorithm, lp, opts)

    def solve(
        self,
        direction: npt.ArrayLike,
        A: npt.ArrayLike,
        b: npt.ArrayLike,
    ) -> LpResult:
        c = np.reshape(direction, -1).astype(float, copy=False)
        n = c.size
        A = np.reshape(A, (-1, n)).astype(float, copy=False)
        b = np.reshape(b, -1).astype(float, copy=False)
        solver = self._init_solver(A.shape[0], n)
        sol = solver(g=c, a=A, lba=-np.inf, uba=b, lbx=-np.inf, ubx=np.inf)
        stats = solver.stats()
        status = _status_from_stats(stats)
        message = str(stats.get("return_status", ""))
        if status != LpStatus.OPTIMAL:
            return self._failed(n, status, message)
        x = np.asarray(sol["x"].elements(), dtype=float)
        return LpResult(x, float(sol["cost"]), status, message)
