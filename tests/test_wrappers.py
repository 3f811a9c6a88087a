import copy
import logging
import os
import pickle
import unittest
from itertools import combinations

import numpy as np
from parameterized import parameterized

from polygibbs import (
    ExtentRecord,
    ExtentWarning,
    PolytopeGibbsSampler,
    SamplerConfig,
    SeedSearchWarning,
)
from polygibbs.util.geometry import box_constraints
from polygibbs.wrappers import Log, RecordExtents, Wrapper


def mk_sampler(ndim: int = 2, seed: int = 0) -> PolytopeGibbsSampler:
    A, b = box_constraints(np.zeros(ndim), np.ones(ndim))
    return PolytopeGibbsSampler(A, b, SamplerConfig(x0=np.full(ndim, 0.5)), seed=seed)


class TestWrapper(unittest.TestCase):
    def test_attr__raises__when_accessing_private_attrs(self):
        wrapped = Wrapper(mk_sampler())
        with self.assertRaisesRegex(
            AttributeError, "Accessing private attribute '_x' is prohibited."
        ):
            wrapped._x

    def test_attr__reroutes_to_sampler(self):
        sampler = mk_sampler()
        wrapped = Wrapper(sampler)
        self.assertEqual(wrapped.name, sampler.name)
        self.assertEqual(wrapped.n_dims, 2)
        self.assertIs(wrapped.constraints, sampler.constraints)

    def test_unwrapped__unwraps_sampler_correctly(self):
        sampler = mk_sampler()
        wrapped = Wrapper(Wrapper(sampler))
        self.assertIs(sampler, wrapped.unwrapped)
        self.assertIs(sampler, sampler.unwrapped)

    def test_str_and_repr(self):
        sampler = mk_sampler()
        wrapped = Wrapper(sampler)
        S = wrapped.__str__()
        self.assertIn(Wrapper.__name__, S)
        self.assertIn(sampler.__str__(), S)
        S = wrapped.__repr__()
        self.assertIn(Wrapper.__name__, S)
        self.assertIn(sampler.__repr__(), S)

    def test_is_wrapped(self):
        sampler = mk_sampler()
        self.assertFalse(sampler.is_wrapped())

        wrapped = RecordExtents(sampler)
        self.assertTrue(wrapped.is_wrapped(RecordExtents))
        self.assertTrue(wrapped.is_wrapped(Wrapper))
        self.assertFalse(wrapped.is_wrapped(Log))

    def test_detach_wrapper(self):
        cp = lambda d: {k: {k_: id(v_) for k_, v_ in v.items()} for k, v in d.items()}
        sampler_0 = mk_sampler()
        sampler_0_hooks = cp(sampler_0._hooks)
        wrapped_1 = RecordExtents(sampler_0)
        wrapped_1_hooks = cp(sampler_0._hooks)
        wrapped_2 = Log(
            wrapped_1, level=logging.DEBUG, log_frequencies={"on_sample_end": 1000}
        )
        wrapped_2_hooks = cp(sampler_0._hooks)
        for d1, d2 in combinations(
            (sampler_0_hooks, wrapped_1_hooks, wrapped_2_hooks), 2
        ):
            with self.assertRaises(AssertionError):
                self.assertDictEqual(d1, d2)

        detached_1 = wrapped_2.detach_wrapper()
        self.assertIs(detached_1, wrapped_1)
        self.assertDictEqual(cp(sampler_0._hooks), wrapped_1_hooks)

        detached_0 = detached_1.detach_wrapper()
        self.assertIs(detached_0, sampler_0)
        self.assertDictEqual(cp(sampler_0._hooks), sampler_0_hooks)

        detached_recursive = wrapped_2.detach_wrapper(recursive=True)
        self.assertIs(detached_recursive, sampler_0)
        self.assertDictEqual(cp(sampler_0._hooks), sampler_0_hooks)

    @parameterized.expand([("deepcopy",), ("pickle",)])
    def test_copy__wrapped_sampler_keeps_sampling(self, method: str):
        sampler = RecordExtents(mk_sampler())
        sampler.sample(2)
        if method == "deepcopy":
            sampler_copy = copy.deepcopy(sampler)
        else:
            sampler_copy = pickle.loads(pickle.dumps(sampler))
        self.assertEqual(len(sampler_copy.extents_history), 2)
        self.assertIsNot(sampler_copy.unwrapped, sampler.unwrapped)
        X = sampler_copy.sample(3)
        self.assertEqual(X.shape, (3, 2))
        self.assertEqual(len(sampler.extents_history), 2)


class TestLog(unittest.TestCase):
    def setUp(self):
        self.sampler = mk_sampler()
        self.record = ExtentRecord(0.0, 1.0, 0.5)
        self.log = None

    def tearDown(self) -> None:
        # remove logging files with name "PolytopeGibbsSampler*.txt"
        if self.log is None:
            return
        for handler in self.log.logger.handlers:
            if isinstance(handler, logging.FileHandler):
                handler.close()
                if os.path.isfile(handler.baseFilename):
                    os.remove(handler.baseFilename)

    def test_init__to_file__creates_log_file(self):
        self.log = Log(self.sampler, to_file=True)
        found = False
        for handler in self.log.logger.handlers:
            if isinstance(
                handler, logging.FileHandler
            ) and handler.baseFilename.endswith(f"{self.sampler.name}.txt"):
                found = True
                break
        self.assertTrue(found)

    def test_init__uses_given_log_name(self):
        self.log = Log(self.sampler, log_name="test_logger")
        self.assertEqual(self.log.logger.name, "test_logger")

    def test_init__establishes_correct_hooks(self):
        log_frequencies = {"on_extent": 2, "on_sample_end": 3, "on_foo": 4}
        exclude_mandatory = ["on_seed_found", "on_sampling_start"]
        self.log = Log(
            self.sampler,
            log_frequencies=log_frequencies,
            exclude_mandatory=exclude_mandatory,
        )

        expected_hooks = {
            "on_extent",
            "on_sample_end",
            "on_seed_failure",
            "on_extent_failure",
            "on_sampling_end",
        }
        actual_hooks = set(self.log.unwrapped._hooks.keys())
        self.assertSetEqual(expected_hooks, actual_hooks)
        self.assertDictEqual(
            self.log.log_frequencies, {"on_extent": 2, "on_sample_end": 3}
        )

    def test_on_sampling_start(self):
        self.log = Log(self.sampler, level=logging.DEBUG)
        with self.assertLogs(self.log.logger, logging.DEBUG):
            self.log.on_sampling_start(10)

    def test_on_seed_found(self):
        self.log = Log(self.sampler)
        with self.assertLogs(self.log.logger, logging.INFO) as cm:
            self.log.on_seed_found(np.array([0.5, 0.5]), True)
        self.assertIn("supplied", cm.output[0])

    @parameterized.expand([(False, "WARNING"), (True, "ERROR")])
    def test_on_seed_failure(self, raises: bool, levelname: str):
        self.log = Log(self.sampler)
        with self.assertLogs(self.log.logger, logging.WARNING) as cm:
            if raises:
                with self.assertRaises(RuntimeError):
                    self.log.on_seed_failure(2, raises)
            else:
                with self.assertWarns(SeedSearchWarning):
                    self.log.on_seed_failure(2, raises)
        self.assertEqual(cm.records[0].levelname, levelname)

    def test_on_extent(self):
        self.log = Log(self.sampler, log_frequencies={"on_extent": 1})
        with self.assertLogs(self.log.logger, logging.DEBUG):
            self.log.on_extent(0, 1, self.record)

    def test_on_extent_failure(self):
        self.log = Log(self.sampler)
        record = ExtentRecord(0.0, float("nan"), max_success=False)
        with self.assertLogs(self.log.logger, logging.WARNING) as cm:
            with self.assertWarns(ExtentWarning):
                self.log.on_extent_failure(3, 1, record)
        self.assertIn("sample 3, coordinate 1", cm.output[0])

    def test_on_sample_end(self):
        self.log = Log(self.sampler, log_frequencies={"on_sample_end": 1})
        with self.assertLogs(self.log.logger, logging.INFO):
            self.log.on_sample_end(0, np.array([0.1, 0.2]))

    def test_on_sample_end__logs_at_default_level(self):
        self.log = Log(
            self.sampler, log_frequencies={"on_sample_end": 1, "on_extent": 1}
        )
        self.assertEqual(self.log.logger.level, logging.INFO)
        with self.assertLogs(self.log.logger, logging.INFO) as cm:
            self.log.sample(3)
        drawn = [r for r in cm.records if "drawn" in r.getMessage()]
        self.assertEqual(len(drawn), 3)
        self.assertTrue(all(r.levelno == logging.INFO for r in drawn))

    def test_on_sampling_end(self):
        self.log = Log(self.sampler)
        samples = np.array([[0.1, 0.2], [np.nan, np.nan], [0.3, 0.4]])
        with self.assertLogs(self.log.logger, logging.INFO) as cm:
            self.log.on_sampling_end(samples)
        self.assertIn("3 samples, 1 of which failed", cm.output[0])

    @parameterized.expand([(1, 6), (2, 3), (4, 2)])
    def test_on_sample_end__logs_with_frequency(self, frequency: int, expected: int):
        self.log = Log(
            self.sampler,
            level=logging.DEBUG,
            log_frequencies={"on_sample_end": frequency},
            exclude_mandatory=["on_sampling_start", "on_seed_found", "on_sampling_end"],
        )
        with self.assertLogs(self.log.logger, logging.DEBUG) as cm:
            self.log.sample(6)
        self.assertEqual(len(cm.records), expected)


class TestRecordExtents(unittest.TestCase):
    @parameterized.expand([(1,), (3,), (20,)])
    def test_sample__records_extents_correctly(self, frequency: int):
        n_samples, ndim = 10, 3
        sampler = RecordExtents(mk_sampler(ndim), frequency=frequency)
        X = sampler.sample(n_samples)

        expected_len = len(range(0, n_samples, frequency))
        self.assertEqual(len(sampler.extents_history), expected_len)
        for k, extents in enumerate(sampler.extents_history):
            self.assertEqual(extents.shape, (3, ndim))
            np.testing.assert_allclose(extents[0], 0.0, atol=1e-9)
            np.testing.assert_allclose(extents[1], 1.0)
            np.testing.assert_array_equal(extents[2], X[k * frequency])

    def test_sample__records_nan__on_extent_failure(self):
        sampler = RecordExtents(mk_sampler())
        record = ExtentRecord(0.0, float("nan"), max_success=False)
        sampler.on_extent(0, 0, ExtentRecord(0.0, 1.0, 0.3))
        with self.assertWarns(ExtentWarning):
            sampler.on_extent_failure(0, 1, record)
        sampler.on_sample_end(0, np.full(2, np.nan))
        extents = sampler.extents_history[0]
        np.testing.assert_array_equal(extents[:, 0], [0.0, 1.0, 0.3])
        np.testing.assert_array_equal(extents[:, 1], [0.0, np.nan, np.nan])


if __name__ == "__main__":
    unittest.main()
