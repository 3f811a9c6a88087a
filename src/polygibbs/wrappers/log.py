import logging
from collections.abc import Iterable
from itertools import chain
from typing import Callable, Optional, Union

import numpy as np
import numpy.typing as npt

from ..core.callbacks import _failure_msg
from ..extent import ExtentRecord
from ..sampler import PolytopeGibbsSampler
from .wrapper import Wrapper

_MANDATORY_CALLBACKS = {
    "on_sampling_start",
    "on_seed_found",
    "on_seed_failure",
    "on_extent_failure",
    "on_sampling_end",
}
_OPTIONAL_CALLBACKS = {"on_extent", "on_sample_end"}


def _generate_method_caller(m: Callable) -> Callable:
    """Returns a method that calls the given method `m`."""

    def method_caller(*args, **kwargs):
        return m(*args, **kwargs)

    return method_caller


class Log(Wrapper):
    """A wrapper class for logging information about a sampler.

    Parameters
    ----------
    sampler : PolytopeGibbsSampler or Wrapper
        Sampler to wrap.
    log_name : str, optional
        Name of the logger. If not provided, the name of the sampler is used.
    level : int, optional
        The logging level, by default :attr:`logging.INFO`.
    to_file : bool, optional
        Whether to write the log also to a file in the current directory. By
        default, ``False``.
    mode : str, optional
        The mode for opening the logging file, in case ``to_file=True``. By default, it
        appends to the file, if already present.
    precision : int, optional
        Precision for printing floats, by default ``3``.
    log_frequencies : dict of (str, int), optional
        A dict containing, for each logging call hook, its corresponding frequency. The
        calls for which a frequency can be set are:

        - ``"on_extent"``
        - ``"on_sample_end"``.

        If this dictionary does not contain an entry for a specific call, the call is
        assumed to be never logged.
    exclude_mandatory : iterable of str, optional
        An iterable of strings that contains the default mandatory callbacks to be
        excluded. These mandatory callbacks that can be excluded are:

        - ``"on_sampling_start"``
        - ``"on_seed_found"``
        - ``"on_seed_failure"``
        - ``"on_extent_failure"``
        - ``"on_sampling_end"``.
    """

    def __init__(
        self,
        sampler: Union[PolytopeGibbsSampler, Wrapper],
        log_name: Optional[str] = None,
        level: int = logging.INFO,
        to_file: bool = False,
        mode: str = "a",
        precision: int = 3,
        log_frequencies: Optional[dict[str, int]] = None,
        exclude_mandatory: Optional[Iterable[str]] = None,
    ) -> None:
        name = log_name if log_name is not None else sampler.name
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)
        formatter = logging.Formatter(
            fmt="%(name)s@%(asctime)s> %(message)s", datefmt="%Y-%m-%d,%H:%M:%S"
        )
        ch = logging.StreamHandler()
        ch.setLevel(level)
        ch.setFormatter(formatter)
        self.logger.addHandler(ch)
        if to_file:
            fh = logging.FileHandler(f"{name}.txt", mode=mode)
            fh.setLevel(level)
            fh.setFormatter(formatter)
            self.logger.addHandler(fh)
        self.precision = precision

        # store excluded-mandatory-callbacks and callbacks-with-frequency
        self.exclude_mandatory: set[str] = (
            set() if exclude_mandatory is None else set(exclude_mandatory)
        )
        self.log_frequencies: dict[str, int] = {}
        if log_frequencies is not None:
            for cbname, freq in log_frequencies.items():
                if cbname in _OPTIONAL_CALLBACKS:
                    self.log_frequencies[cbname] = max(int(freq), 1)
        self._log_counters = dict.fromkeys(self.log_frequencies, 0)
        super().__init__(sampler)

    def _establish_callback_hooks(self) -> None:
        super()._establish_callback_hooks()
        # hook only the callbacks for which a frequency was given + the mandatory ones
        repr_self = repr(self)
        optional_cbs = self.log_frequencies.keys()
        mandatory_cbs = _MANDATORY_CALLBACKS.difference(self.exclude_mandatory)
        for name in chain(optional_cbs, mandatory_cbs):
            method = getattr(self, f"_{name}")
            self._hook_callback(repr_self, name, _generate_method_caller(method))

    def _is_due(self, cbname: str) -> bool:
        """Internal utility to check whether the given callback is due for logging,
        according to its frequency."""
        count = self._log_counters[cbname]
        self._log_counters[cbname] = count + 1
        return count % self.log_frequencies[cbname] == 0

    def _on_sampling_start(self, n_samples: int) -> None:
        self.logger.debug(
            "sampling of %d points from %d inequalities in %d dimensions started.",
            n_samples,
            self.unwrapped.n_constraints,
            self.unwrapped.n_dims,
        )

    def _on_seed_found(self, seed: npt.NDArray[np.floating], supplied: bool) -> None:
        S = np.array2string(seed, precision=self.precision)
        origin = "supplied" if supplied else "searched"
        self.logger.info("chain seeded with %s point %s.", origin, S)

    def _on_seed_failure(self, attempts: int, raises: bool) -> None:
        (self.logger.error if raises else self.logger.warning)(
            "seed search of %s failed after %d attempts.", self.sampler.name, attempts
        )

    def _on_extent(self, sample: int, coord: int, record: ExtentRecord) -> None:
        if self._is_due("on_extent"):
            self.logger.debug(
                "sample %d, coordinate %d: extent=[%.*f, %.*f], value=%.*f.",
                sample,
                coord,
                self.precision,
                record.min,
                self.precision,
                record.max,
                self.precision,
                record.value,
            )

    def _on_extent_failure(
        self, sample: int, coord: int, record: ExtentRecord
    ) -> None:
        self.logger.warning(_failure_msg(self.sampler.name, sample, coord, record))

    def _on_sample_end(self, sample: int, point: npt.NDArray[np.floating]) -> None:
        if self._is_due("on_sample_end"):
            S = np.array2string(point, precision=self.precision)
            self.logger.info("sample %d drawn: %s.", sample, S)

    def _on_sampling_end(self, samples: npt.NDArray[np.floating]) -> None:
        n_failed = int(np.isnan(samples).any(axis=1).sum())
        self.logger.info(
            "sampling concluded with %d samples, %d of which failed.",
            samples.shape[0],
            n_failed,
        )
