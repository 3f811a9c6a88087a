"""A module with the linear programming oracles used by the samplers to find seed points
and the extents of the coordinates. All oracles derive from
:class:`polygibbs.lp.LinearProgramSolver` and solve LPs of the form

.. math:: \\min_x c^\\top x \\quad \\text{s.t.} \\quad A x \\leq b

with unbounded variables. Two backends are available: :class:`LinprogSolver`, based on
:func:`scipy.optimize.linprog` (the default), and :class:`ConicSolver`, based on the
conic solvers interfaced by :func:`casadi.conic`."""

__all__ = [
    "ConicSolver",
    "LinearProgramSolver",
    "LinprogSolver",
    "LpResult",
    "LpStatus",
]

from .base import LinearProgramSolver, LpResult, LpStatus
from .conic import ConicSolver
from .linprog import LinprogSolver
