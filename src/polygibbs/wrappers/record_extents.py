from typing import Optional, Union

import numpy as np
import numpy.typing as npt

from ..extent import ExtentRecord
from ..sampler import PolytopeGibbsSampler
from .wrapper import Wrapper


class RecordExtents(Wrapper):
    """Wrapper for recording the extents found for each coordinate of each sample, as
    well as the values sampled within them.

    For each recorded sample, an array of shape ``(3, n)`` is appended to
    :attr:`extents_history`, whose rows contain, respectively, the lower bounds, the
    upper bounds and the sampled values of each coordinate. Entries of coordinates that
    were not reached (because the sample failed earlier) are NaN, as is the sampled
    value of the coordinate whose extent computation failed.

    Parameters
    ----------
    sampler : PolytopeGibbsSampler or Wrapper
        The sampler whose extents need recording.
    frequency : int, optional
        The frequency of recording the samples. If the frequency is set to ``1``, all
        samples are recorded. If the frequency is set to ``2``, every second sample is
        recorded, starting from the first one, and so on. By default, ``1``.
    """

    def __init__(
        self, sampler: Union[PolytopeGibbsSampler, Wrapper], frequency: int = 1
    ) -> None:
        super().__init__(sampler)
        self.frequency = max(int(frequency), 1)
        self.extents_history: list[npt.NDArray[np.floating]] = []
        self._n_seen = 0
        self._current: Optional[npt.NDArray[np.floating]] = None

    def _current_extents(self) -> npt.NDArray[np.floating]:
        if self._current is None:
            self._current = np.full((3, self.unwrapped.n_dims), np.nan)
        return self._current

    def _on_extent(self, sample: int, coord: int, record: ExtentRecord) -> None:
        self._current_extents()[:, coord] = record.min, record.max, record.value

    def _on_extent_failure(
        self, sample: int, coord: int, record: ExtentRecord
    ) -> None:
        self._current_extents()[:, coord] = record.min, record.max, np.nan

    def _on_sample_end(self, *_, **__) -> None:
        extents = self._current_extents()
        self._current = None
        if self._n_seen % self.frequency == 0:
            self.extents_history.append(extents)
        self._n_seen += 1

    def _establish_callback_hooks(self) -> None:
        super()._establish_callback_hooks()
        # connect the sampler's extent-related callbacks to this wrapper
        repr_self = repr(self)
        self._hook_callback(repr_self, "on_extent", self._on_extent)
        self._hook_callback(repr_self, "on_extent_failure", self._on_extent_failure)
        self._hook_callback(repr_self, "on_sample_end", self._on_sample_end)
