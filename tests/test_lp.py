import pickle
import unittest

import numpy as np
from parameterized import parameterized, parameterized_class

from polygibbs.lp import ConicSolver, LinprogSolver, LpResult, LpStatus
from polygibbs.lp.conic import _status_from_stats

UNIT_SQUARE = (
    np.array([[1.0, 0.0], [-1.0, 0.0], [0.0, 1.0], [0.0, -1.0]]),
    np.array([1.0, 0.0, 1.0, 0.0]),
)


@parameterized_class("solver_cls", [(LinprogSolver,), (ConicSolver,)])
class TestSolvers(unittest.TestCase):
    @parameterized.expand(
        [
            ([1, 0], 0.0),
            ([-1, 0], -1.0),
            ([0, -1], -1.0),
            ([1, 1], 0.0),
            ([-1, -1], -2.0),
        ]
    )
    def test_solve__unit_square__finds_optimum(self, direction, value):
        res = self.solver_cls().solve(direction, *UNIT_SQUARE)
        self.assertTrue(res.success)
        self.assertEqual(res.status, LpStatus.OPTIMAL)
        self.assertEqual(res.x.shape, (2,))
        np.testing.assert_allclose(res.value, value, atol=1e-6)
        np.testing.assert_allclose(np.dot(direction, res.x), value, atol=1e-6)

    def test_solve__one_dimensional__finds_extent(self):
        column = np.array([[2.0], [-1.0], [0.0]])
        residual = np.array([4.0, 1.0, 3.0])
        solver = self.solver_cls()
        lo = solver.solve([1.0], column, residual)
        hi = solver.solve([-1.0], column, residual)
        self.assertTrue(lo.success and hi.success)
        np.testing.assert_allclose([lo.value, -hi.value], [-1.0, 2.0], atol=1e-6)

    def test_solve__infeasible__fails(self):
        res = self.solver_cls().solve([1.0], [[1.0], [-1.0]], [-1.0, -1.0])
        self.assertFalse(res.success)
        self.assertTrue(np.isnan(res.value))
        self.assertTrue(np.isnan(res.x).all())

    def test_solve__unbounded__fails(self):
        res = self.solver_cls().solve([1.0], [[1.0], [2.0]], [1.0, 1.0])
        self.assertFalse(res.success)
        self.assertTrue(np.isnan(res.value))

    def test_pickle(self):
        solver = self.solver_cls(max_iterations=42)
        solver_copy = pickle.loads(pickle.dumps(solver))
        self.assertEqual(solver_copy.max_iterations, 42)
        self.assertEqual(solver_copy.algorithm, solver.algorithm)
        self.assertIn(self.solver_cls.__name__, repr(solver_copy))


class TestLinprogSolver(unittest.TestCase):
    def test_init__defaults_to_interior_point(self):
        self.assertEqual(LinprogSolver().algorithm, "highs-ipm")

    def test_solve__infeasible__reports_infeasible_status(self):
        res = LinprogSolver("highs-ds").solve([1.0], [[1.0], [-1.0]], [-1.0, -1.0])
        self.assertEqual(res.status, LpStatus.INFEASIBLE)

    def test_solve__unbounded__reports_unbounded_status(self):
        res = LinprogSolver("highs-ds").solve([1.0], [[1.0], [2.0]], [1.0, 1.0])
        self.assertEqual(res.status, LpStatus.UNBOUNDED)

    @parameterized.expand([("highs",), ("highs-ds",), ("highs-ipm",)])
    def test_solve__with_other_algorithms(self, algorithm: str):
        res = LinprogSolver(algorithm).solve([-1, -1], *UNIT_SQUARE)
        self.assertTrue(res.success)
        np.testing.assert_allclose(res.x, [1.0, 1.0], atol=1e-6)


class TestConicSolver(unittest.TestCase):
    def test_init__defaults_to_highs(self):
        self.assertEqual(ConicSolver().algorithm, "highs")

    @parameterized.expand(
        [
            ({"success": True, "return_status": "Optimal"}, LpStatus.OPTIMAL),
            ({"success": False, "return_status": "Infeasible"}, LpStatus.INFEASIBLE),
            (
                {"success": False, "return_status": "Primal infeasible or unbounded"},
                LpStatus.INFEASIBLE,
            ),
            ({"success": False, "return_status": "Unbounded"}, LpStatus.UNBOUNDED),
            (
                {"success": False, "return_status": "Iteration limit reached"},
                LpStatus.ITERATION_LIMIT,
            ),
            ({"success": False, "return_status": "Solve error"}, LpStatus.NUMERICAL),
            ({}, LpStatus.NUMERICAL),
        ]
    )
    def test_status_from_stats(self, stats, expected):
        self.assertEqual(_status_from_stats(stats), expected)


class TestLpResult(unittest.TestCase):
    @parameterized.expand([(status,) for status in LpStatus])
    def test_success__only_when_optimal(self, status: LpStatus):
        res = LpResult(np.zeros(1), 0.0, status)
        self.assertEqual(res.success, status == LpStatus.OPTIMAL)


if __name__ == "__main__":
    unittest.main()
