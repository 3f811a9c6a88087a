from typing import Any, Callable, Union

from ..core.callbacks import CallbackMixin
from ..sampler import PolytopeGibbsSampler


class Wrapper(CallbackMixin):
    """Wraps an instance of :class:`polygibbs.PolytopeGibbsSampler` to allow a modular
    transformation of its behaviour. This class is the base class for all wrappers. The
    subclass could override some methods to change the behavior of the original sampler
    without touching the original code.

    Parameters
    ----------
    sampler : PolytopeGibbsSampler or Wrapper
        The sampler to wrap.
    """

    def __init__(self, sampler: Union[PolytopeGibbsSampler, "Wrapper"]) -> None:
        CallbackMixin.__init__(self)
        del self._hooks  # keep only one dict of hooks, i.e., the sampler's one
        self.sampler = sampler
        self._hooked_callbacks: dict[str, list[str]] = {}
        self._establish_callback_hooks()

    @property
    def unwrapped(self) -> PolytopeGibbsSampler:
        """Returns the original sampler wrapped by this wrapper."""
        return self.sampler.unwrapped

    def is_wrapped(self, wrapper_type: type["Wrapper"]) -> bool:
        """Gets whether the sampler instance is wrapped or not by the wrapper type.

        Parameters
        ----------
        wrapper_type : type of Wrapper
            Type of wrapper to check if the sampler is wrapped with.

        Returns
        -------
        bool
            ``True`` if wrapped by an instance of ``wrapper_type``; ``False``,
            otherwise.
        """
        if isinstance(self, wrapper_type):
            return True
        return self.sampler.is_wrapped(wrapper_type)

    def _hook_callback(
        self, attachername: str, callbackname: str, func: Callable[..., None]
    ) -> None:
        # store the callback id for later removal via `detach_wrapper`
        self._hooked_callbacks.setdefault(callbackname, []).append(attachername)
        self.unwrapped._hook_callback(attachername, callbackname, func)

    def detach_wrapper(
        self, recursive: bool = False
    ) -> Union[PolytopeGibbsSampler, "Wrapper"]:
        """Detaches the wrapper from the sampler, returning the wrapped sampler. De
        facto, this method detaches all the hooks attached by this wrapper.

        Parameters
        ----------
        recursive : bool, optional
            If ``True``, detaches all the wrappers around the sampler recursively.

        Returns
        -------
        PolytopeGibbsSampler or Wrapper
            Returns the wrapped sampler (or other wrapper) instance. This instance has
            no more active hooks attached by this wrapper. If ``recursive=True``, all
            the wrappers around the sampler and their hooks are detached.
        """
        hooks = self.unwrapped._hooks
        for callbackname, attachernames in self._hooked_callbacks.items():
            hook_group = hooks[callbackname]
            for attachername in attachernames:
                hook_group.pop(attachername)
            if not hook_group:
                hooks.pop(callbackname)
        self._hooked_callbacks.clear()
        if recursive and isinstance(self.sampler, Wrapper):
            return self.sampler.detach_wrapper(True)
        return self.sampler

    def __setstate__(self, state: Any) -> None:
        # hooks are re-established on the copied sampler, so forget the old ones
        if isinstance(state, dict):
            state["_hooked_callbacks"] = {}
        CallbackMixin.__setstate__(self, state)
        del self._hooks

    def __getattr__(self, name: str) -> Any:
        """Reroutes attributes to the wrapped sampler instance."""
        if name.startswith("_"):
            raise AttributeError(f"Accessing private attribute '{name}' is prohibited.")
        return getattr(self.sampler, name)

    def __str__(self) -> str:
        return f"<{self.__class__.__name__}{self.sampler.__str__()}>"

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}{self.sampler.__repr__()}>"
