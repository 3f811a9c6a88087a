"""Options of the maximum-extent Gibbs sampler.

All the options are collected in the immutable :class:`SamplerConfig`, which is handed
to :class:`polygibbs.PolytopeGibbsSampler` at construction. Every recognized option is
listed below together with its default value, so that no hidden state influences a
sampling run."""

from dataclasses import dataclass, field
from typing import Any, Literal, Optional

import numpy as np
import numpy.typing as npt

ExtentMethod = Literal["optimization", "linalg"]

_LINALG_ALIASES = frozenset(("linalg", "linear-algebra"))
_OPTION_ALIASES = {
    "x0": "x0",
    "extmethod": "extent_method",
    "extent_method": "extent_method",
    "algorithm": "lp_algorithm",
    "lp_algorithm": "lp_algorithm",
    "maxiter": "max_iterations",
    "max_iterations": "max_iterations",
    "raises": "raises",
}


def normalize_extent_method(method: Any) -> ExtentMethod:
    """Returns ``"linalg"`` if the given method names the linear-algebra extent method
    (case insensitive); any other value falls back to ``"optimization"``."""
    if isinstance(method, str) and method.lower() in _LINALG_ALIASES:
        return "linalg"
    return "optimization"


@dataclass(frozen=True)
class SamplerConfig:
    """Configuration of a sampling run.

    Parameters
    ----------
    x0 : array-like of shape (n,), optional
        An optional starting point for the chain. It is used only if it has ``n``
        elements and satisfies all the constraints; otherwise, it is discarded and a
        seed point is searched for via linear programming.
    extent_method : {"optimization", "linalg"}, optional
        How the extent of each coordinate is found. ``"optimization"`` (default) solves
        two one-dimensional LPs per coordinate. ``"linalg"`` computes the extent
        directly from the ratios of residuals and coefficients; it is faster but
        unreliable, since it ignores constraints whose coefficient is zero. Any
        unrecognized value falls back to ``"optimization"``.
    lp_algorithm : str, optional
        The algorithm the LP oracle should use, e.g., ``"highs-ds"`` for
        :func:`scipy.optimize.linprog`. By default, the oracle's default is used.
    max_iterations : int, optional
        Maximum number of iterations of each LP solve. By default, ``3000``.
    raises : bool, optional
        If ``True``, a failed seed search raises a
        :class:`polygibbs.core.errors.SeedSearchFailure`; otherwise, a
        :class:`polygibbs.core.errors.SeedSearchWarning` is issued and an empty result
        is returned. By default, ``False``.
    """

    x0: Optional[npt.ArrayLike] = field(default=None, compare=False)
    extent_method: ExtentMethod = "optimization"
    lp_algorithm: Optional[str] = None
    max_iterations: int = 3000
    raises: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "extent_method", normalize_extent_method(self.extent_method)
        )
        if self.max_iterations <= 0:
            raise ValueError("Maximum number of iterations must be positive.")
        if isinstance(self.x0, np.ndarray):
            x0 = self.x0.copy()
            x0.flags.writeable = False
            object.__setattr__(self, "x0", x0)

    @classmethod
    def from_options(cls, **options: Any) -> "SamplerConfig":
        """Creates a configuration from a plain mapping of options. Next to the names of
        the fields of this class, the keys ``"extmethod"``, ``"Algorithm"`` and
        ``"maxiter"`` are accepted as aliases (case insensitive).

        Raises
        ------
        TypeError
            Raises if an unknown option is given.
        """
        kwargs = {}
        for key, value in options.items():
            name = _OPTION_ALIASES.get(key.lower())
            if name is None:
                raise TypeError(f"Unknown sampler option '{key}'.")
            kwargs[name] = value
        return cls(**kwargs)
