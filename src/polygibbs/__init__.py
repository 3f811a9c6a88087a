r"""**Poly**\tope **Gibbs** sampling (**polygibbs**, for short) is a library for drawing
points approximately uniformly distributed over the interior of a bounded convex polytope
``{x : A x <= b}`` via the maximum-extent Gibbs method, with the extent of each
coordinate found by a linear programming oracle. It is meant to generate many, diverse
near-optimal alternatives in modeling-to-generate-alternatives studies, e.g., for
water resources planning.
"""

__version__ = "1.0.0"

__all__ = [
    "DimensionalityError",
    "ExtentRecord",
    "ExtentWarning",
    "PolytopeGibbsSampler",
    "SamplerConfig",
    "SeedSearchFailure",
    "SeedSearchWarning",
    "lp",
    "sample_polytope",
    "wrappers",
]

from . import lp, wrappers
from .core.config import SamplerConfig
from .core.errors import (
    DimensionalityError,
    ExtentWarning,
    SeedSearchFailure,
    SeedSearchWarning,
)
from .extent import ExtentRecord
from .sampler import PolytopeGibbsSampler, sample_polytope
