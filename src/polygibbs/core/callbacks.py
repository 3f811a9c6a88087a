"""The sampler derives from mixin classes that define callbacks and manage hooks
attached to these callbacks. These allow wrappers (see :mod:`polygibbs.wrappers`) and
users to observe a sampling run, e.g., to log its progress or to record the extents
found for each coordinate, without touching the sampling algorithm itself."""

from typing import TYPE_CHECKING, Any, Callable, Optional, Union
from warnings import warn

import numpy as np
import numpy.typing as npt

from .errors import ExtentWarning, raise_or_warn_on_seed_failure

if TYPE_CHECKING:
    from ..extent import ExtentRecord


def _failure_msg(name: str, sample: int, coord: int, record: "ExtentRecord") -> str:
    """Internal utility for composing message for extent failures."""
    return (
        f"Extent failure of {name} at sample {sample}, coordinate {coord}, "
        f"min: {record.min} (success: {record.min_success}), "
        f"max: {record.max} (success: {record.max_success})."
    )


class CallbackMixin:
    """A class with the particular purpose of creating, storing and deleting hooks
    attached to callbacks.

    Notes
    -----
    When the state of an instance is got and set (e.g., via :func:`copy.deepcopy` or
    :mod:`pickle`), the hooks are not copied from the old instance, since they are
    likely to point to methods of the old objects. Instead,
    :meth:`_establish_callback_hooks` is automatically called to re-establish them with
    respect to the new object(s).
    """

    def __init__(self) -> None:
        self._hooks: dict[str, dict[str, Callable[..., None]]] = {}

    def __getstate__(self) -> dict[str, Any]:
        state = self.__dict__.copy()
        state.pop("_hooks", None)  # hooks point to methods of other objects
        return state

    def __setstate__(
        self,
        state: Union[
            None, dict[str, Any], tuple[Optional[dict[str, Any]], dict[str, Any]]
        ],
    ) -> None:
        if isinstance(state, tuple) and len(state) == 2:
            state, slotstate = state
        else:
            slotstate = None
        if state is not None:
            # remove hooks (otherwise, new copies will still be calling the old object)
            state["_hooks"] = {}
            self.__dict__.update(state)
        if slotstate is not None:
            for key, value in slotstate.items():
                setattr(self, key, value)
        self._establish_callback_hooks()

    def _run_hooks(self, method_name: str, *args: Any) -> None:
        """Runs the internal hooks attached to the given method."""
        if hooks := self._hooks.get(method_name):
            for hook in hooks.values():
                hook(*args)

    def _establish_callback_hooks(self) -> None:
        """This method must be used to perform the connections between callbacks and any
        invokable method (hook). If the object has no hooks, then this method does
        nothing."""

    def _hook_callback(
        self, attachername: str, callbackname: str, func: Callable[..., None]
    ) -> None:
        """Hooks a function to be called each time a callback is invoked.

        Parameters
        ----------
        attachername : str
            The name of the object requesting the hook. Has only info purposes.
        callbackname : str
            Name of the callback to hook to, i.e., the target of the hooking.
        func : Callable
            function to be called when the callback is invoked. Must accept the same
            input arguments as the callback it is hooked to. The return value is
            discarded.

        Raises
        ------
        ValueError
            If an hook with name ``attachername`` is already attached to this callback.
        """
        hook_dict = self._hooks.setdefault(callbackname, {})
        if attachername in hook_dict:
            raise ValueError(
                f"Hook '{attachername}' already attached to callback '{callbackname}'."
            )
        hook_dict[attachername] = func


class SamplerCallbackMixin(CallbackMixin):
    """Class with callbacks for samplers.

    In particular, this class defines the following callbacks:

    - :meth:`on_sampling_start`, invoked when a call to sample starts
    - :meth:`on_seed_found`, invoked when the seed of the chain is established
    - :meth:`on_seed_failure`, invoked when no seed could be found
    - :meth:`on_extent`, invoked after a coordinate has been sampled within its extent
    - :meth:`on_extent_failure`, invoked when the extent of a coordinate could not be
      computed and the current sample is discarded
    - :meth:`on_sample_end`, invoked when a sample (valid or not) is finalized
    - :meth:`on_sampling_end`, invoked when all the samples have been drawn.
    """

    def on_sampling_start(self, n_samples: int) -> None:
        """Callback called at the beginning of a sampling run.

        Parameters
        ----------
        n_samples : int
            Number of samples requested.
        """
        self._run_hooks("on_sampling_start", n_samples)

    def on_seed_found(self, seed: npt.NDArray[np.floating], supplied: bool) -> None:
        """Callback called when the seed point of the chain has been established.

        Parameters
        ----------
        seed : array of shape (n,)
            The seed point.
        supplied : bool
            ``True`` if the seed is the user-supplied starting point; ``False`` if it
            was found by the seed search.
        """
        self._run_hooks("on_seed_found", seed, supplied)

    def on_seed_failure(self, attempts: int, raises: bool) -> None:
        """Callback in case the seed search fails, i.e., no LP along any of the basis
        directions could be solved successfully.

        Parameters
        ----------
        attempts : int
            Number of LP solves that were attempted.
        raises : bool
            Whether the failure should be raised as exception (``True``) or as a warning
            (``False``).
        """
        name: str = getattr(self, "name", "sampler")
        self._run_hooks("on_seed_failure", attempts, raises)
        raise_or_warn_on_seed_failure(
            f"Seed search of {name} failed after {attempts} attempts: could not "
            "generate an initial point.",
            raises,
        )

    def on_extent(self, sample: int, coord: int, record: "ExtentRecord") -> None:
        """Callback called after a coordinate has been sampled within its extent.

        Parameters
        ----------
        sample : int
            Index of the current sample.
        coord : int
            Index of the coordinate that has been sampled.
        record : ExtentRecord
            The extent of the coordinate and the sampled value.
        """
        self._run_hooks("on_extent", sample, coord, record)

    def on_extent_failure(
        self, sample: int, coord: int, record: "ExtentRecord"
    ) -> None:
        """Callback in case the extent of a coordinate could not be computed. The
        current sample is then discarded, i.e., filled with NaNs.

        Parameters
        ----------
        sample : int
            Index of the current sample.
        coord : int
            Index of the coordinate whose extent computation failed.
        record : ExtentRecord
            The (failed) extent of the coordinate.
        """
        name: str = getattr(self, "name", "sampler")
        warn(_failure_msg(name, sample, coord, record), ExtentWarning)
        self._run_hooks("on_extent_failure", sample, coord, record)

    def on_sample_end(self, sample: int, point: npt.NDArray[np.floating]) -> None:
        """Callback called when a sample has been finalized.

        Parameters
        ----------
        sample : int
            Index of the sample.
        point : array of shape (n,)
            The sample, which is all NaNs if its generation failed.
        """
        self._run_hooks("on_sample_end", sample, point)

    def on_sampling_end(self, samples: npt.NDArray[np.floating]) -> None:
        """Callback called at the end of a sampling run.

        Parameters
        ----------
        samples : array of shape (p, n)
            All the samples drawn in this run.
        """
        self._run_hooks("on_sampling_end", samples)
