"""The maximum-extent Gibbs sampler, which draws points approximately uniformly
distributed over the interior of a convex polytope ``{x : A x <= b}``.

Starting from a feasible seed point, each sample is generated by cycling through the
coordinates in increasing order. For each coordinate, the extent it can span while the
other coordinates are held fixed is computed (see :mod:`polygibbs.extent`), and a new
value is drawn uniformly within it. The sample so obtained is then the starting point
of the next one, mimicking a Markov Chain Monte Carlo Gibbs sampler.

References
----------
Rosenberg, D.E., 2015. Blended near-optimal alternative generation, visualization, and
interaction for water resources decision making. Water Resources Research, 51(4),
2047-2063. doi:10.1002/2013WR014667.
"""

import logging
from collections.abc import Iterator as _Iterator
from itertools import count as _count
from typing import Any, Optional

import numpy as np
import numpy.typing as npt

from .core.callbacks import SamplerCallbackMixin
from .core.config import SamplerConfig
from .extent import ExtentRecord, linalg_extent, optimization_extent
from .lp.base import LinearProgramSolver
from .lp.linprog import LinprogSolver
from .util.geometry import ConstraintSystem
from .util.seeding import RngType

_LOGGER = logging.getLogger(__name__)


class PolytopeGibbsSampler(SamplerCallbackMixin):
    """Maximum-extent Gibbs sampler over the convex polytope ``A x <= b``.

    Parameters
    ----------
    A : array-like of shape (m, n)
        Coefficients of the inequalities, including lower and upper bounds. At least
        ``n + 1`` inequalities are required.
    b : array-like of shape (m,)
        Right-hand sides of the inequalities.
    config : SamplerConfig, optional
        Options of the sampler. By default, :class:`polygibbs.SamplerConfig` defaults.
    solver : LinearProgramSolver, optional
        The LP oracle used to find the seed and the extents. If ``None``, a
        :class:`polygibbs.lp.LinprogSolver` is created with the algorithm and
        iteration cap given in ``config``; otherwise, those two options are ignored.
    seed : None, int, array of ints, SeedSequence, BitGenerator, Generator
        Seed for the random number generator. By default, ``None``.
    name : str, optional
        Name of the sampler. If ``None``, one is automatically created from a counter
        of the class' instances.

    Raises
    ------
    DimensionalityError
        Raises if ``m < n + 1``, i.e., the inequalities cannot bound the region.

    Notes
    -----
    The extent of the first coordinate is always accepted, even when its computation
    reports a failure, whereas a failure for any other coordinate discards the whole
    sample, which is then returned as a row of NaNs. If the accepted first extent
    leaves the sample with non-finite values, the sample is discarded as well. The next
    sample starts from the last valid sample (or from the seed, if none is valid yet).

    Without an ``x0``, the seed is the optimizer of an LP and therefore usually lies on
    the boundary, often at a vertex. At a vertex of a generic polytope the extent of
    every coordinate has zero width, so the chain cannot move away from it, while the
    tolerance of the LP oracle slowly pushes it outside the polytope until the extent
    computations fail. The default interior-point oracle (``"highs-ipm"``) mitigates
    this in low dimensions; in higher dimensions, pass a strictly interior ``x0``.
    """

    __ids: dict[type, _Iterator[int]] = {}

    def __init__(
        self,
        A: npt.ArrayLike,
        b: npt.ArrayLike,
        config: Optional[SamplerConfig] = None,
        solver: Optional[LinearProgramSolver] = None,
        seed: RngType = None,
        name: Optional[str] = None,
    ) -> None:
        SamplerCallbackMixin.__init__(self)
        cls = self.__class__
        _id = self.__ids.setdefault(cls, _count(0))
        self.name = name or f"{cls.__name__}{next(_id)}"
        self.constraints = ConstraintSystem.from_arrays(A, b)
        if config is None:
            config = SamplerConfig()
        self.config = config
        if solver is None:
            solver = LinprogSolver(config.lp_algorithm, config.max_iterations)
        self.solver = solver
        self.x0 = self.constraints.validate_point(config.x0)
        if config.x0 is not None and self.x0 is None:
            _LOGGER.debug("%s discarded the malformed or infeasible x0.", self.name)
        self.last_seed: Optional[npt.NDArray[np.floating]] = None
        self.reset(seed)

    @property
    def n_dims(self) -> int:
        """Dimension ``n`` of the sampled space."""
        return self.constraints.n_dims

    @property
    def n_constraints(self) -> int:
        """Number of inequalities ``m`` defining the polytope."""
        return self.constraints.n_constraints

    @property
    def unwrapped(self) -> "PolytopeGibbsSampler":
        """Returns the sampler itself, i.e., the unwrapped sampler."""
        return self

    def is_wrapped(self, *args: Any, **kwargs: Any) -> bool:
        """Gets whether the sampler is wrapped or not. Always ``False``, since this is
        the base sampler."""
        return False

    def reset(self, seed: RngType = None) -> None:
        """Resets the random number generator used to draw within the extents."""
        self._np_random = np.random.default_rng(seed)

    def find_seed(self) -> Optional[npt.NDArray[np.floating]]:
        """Searches for a feasible point by minimizing, one at a time, each coordinate
        of ``x`` subject to ``A x <= b``. The optimizer of the first LP that succeeds is
        returned. Any such point is feasible, though it usually lies on the boundary.

        Returns
        -------
        array of shape (n,) or None
            The seed point, or ``None`` if no LP could be solved successfully.
        """
        A, b = self.constraints
        n = self.n_dims
        for k in range(n):
            direction = np.zeros(n)
            direction[k] = 1.0
            res = self.solver.solve(direction, A, b)
            if res.success:
                return res.x
            _LOGGER.debug(
                "%s seed search along coordinate %d failed with status %s: %s",
                self.name,
                k,
                res.status.name,
                res.message,
            )
        return None

    def extent(self, x: npt.ArrayLike, coord: int) -> ExtentRecord:
        """Computes the extent of the given coordinate, i.e., the range of values it
        can take while the others are held fixed at the values in ``x``.

        Parameters
        ----------
        x : array-like of shape (n,)
            The current point. Its value along ``coord`` is disregarded.
        coord : int
            Index of the coordinate.

        Returns
        -------
        ExtentRecord
            The extent of the coordinate and the success of its computation.
        """
        x = np.asarray(x, dtype=float)
        residual = self.constraints.residual(x, coord)
        column = self.constraints.A[:, coord]
        if self.config.extent_method == "linalg":
            return linalg_extent(column, residual)
        return optimization_extent(self.solver, column, residual)

    def sample(self, n_samples: int) -> npt.NDArray[np.floating]:
        """Draws samples from the polytope.

        Parameters
        ----------
        n_samples : int
            Number of samples ``p`` to draw.

        Returns
        -------
        array of shape (p, n)
            The samples, one per row. Samples whose generation failed are rows of NaNs.
            If no seed point could be found (and ``config.raises=False``), an empty
            array of shape ``(0, n)`` is returned instead.

        Raises
        ------
        ValueError
            Raises if the number of samples is negative or not an integer.
        SeedSearchFailure
            Raises if no seed point could be found and ``config.raises=True``.
        """
        p = int(n_samples)
        if p != n_samples or p < 0:
            raise ValueError("Number of samples must be a non-negative integer.")
        n = self.n_dims
        self.on_sampling_start(p)
        if p == 0:
            X = np.empty((0, n))
            self.on_sampling_end(X)
            return X

        supplied = self.x0 is not None
        seed = self.x0.copy() if supplied else self.find_seed()
        if seed is None:
            self.on_seed_failure(n, self.config.raises)
            return np.empty((0, n))
        self.last_seed = seed
        self.on_seed_found(seed, supplied)

        X = np.empty((p, n))
        state = seed
        for i in range(p):
            x = state.copy()
            for j in range(n):
                record = self.extent(x, j)
                if j == 0:
                    first_record = record
                if j == 0 or record.success:
                    u = self._np_random.random()
                    x[j] = record.min + (record.max - record.min) * u
                    self.on_extent(i, j, record._replace(value=x[j]))
                else:
                    x[:] = np.nan
                    self.on_extent_failure(i, j, record)
                    break
            else:
                # a failed first extent that went undetected by later coordinates
                if not np.isfinite(x).all():
                    x[:] = np.nan
                    self.on_extent_failure(i, 0, first_record)
            X[i] = x
            if not np.isnan(x).any():
                state = X[i]
            self.on_sample_end(i, x)

        self.on_sampling_end(X)
        return X

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}: {self.name}>"


def sample_polytope(
    n_samples: int,
    A: npt.ArrayLike,
    b: npt.ArrayLike,
    config: Optional[SamplerConfig] = None,
    solver: Optional[LinearProgramSolver] = None,
    seed: RngType = None,
    **options: Any,
) -> npt.NDArray[np.floating]:
    """Draws samples approximately uniformly distributed over the polytope ``A x <= b``
    via the maximum-extent Gibbs method. See :class:`PolytopeGibbsSampler`.

    Parameters
    ----------
    n_samples : int
        Number of samples ``p`` to draw.
    A : array-like of shape (m, n)
        Coefficients of the inequalities.
    b : array-like of shape (m,)
        Right-hand sides of the inequalities.
    config : SamplerConfig, optional
        Options of the sampler. Cannot be given together with ``options``.
    solver : LinearProgramSolver, optional
        The LP oracle. By default, :class:`polygibbs.lp.LinprogSolver`.
    seed : None, int, array of ints, SeedSequence, BitGenerator, Generator
        Seed for the random number generator. By default, ``None``.
    options
        Options passed to :meth:`polygibbs.SamplerConfig.from_options`, e.g.,
        ``x0=...`` or ``extmethod="linalg"``.

    Returns
    -------
    array of shape (p, n) or (0, n)
        The samples; see :meth:`PolytopeGibbsSampler.sample`.
    """
    if options:
        if config is not None:
            raise ValueError("Cannot specify both a config and options.")
        config = SamplerConfig.from_options(**options)
    return PolytopeGibbsSampler(A, b, config, solver, seed).sample(n_samples)
