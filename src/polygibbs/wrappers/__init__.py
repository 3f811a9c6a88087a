"""Wrappers for samplers.

This submodule introduces the base class :class:`polygibbs.wrappers.Wrapper`, which
hooks itself to the callbacks of the wrapped sampler and defines an interface equal to
the sampler's, so that a wrapped sampler can be used as the sampler itself seamlessly.

Outside of this base class, this submodule provides a wrapper for logging information
about the sampling process, and one for recording the extents computed for each
coordinate of each sample.
"""

__all__ = ["Log", "RecordExtents", "Wrapper"]

from .log import Log
from .record_extents import RecordExtents
from .wrapper import Wrapper
