r"""
.. _examples_sampling_from_polytopes:

Sampling from a convex polytope
===============================

This example demonstrates how to use the :class:`polygibbs.PolytopeGibbsSampler` to
sample approximately uniformly from the interior of a convex polytope in a N-dimensional
space, given as a set of linear inequalities :math:`A x \leq b`.
"""

import logging

import numpy as np
from scipy.spatial import ConvexHull

from polygibbs import PolytopeGibbsSampler, SamplerConfig
from polygibbs.wrappers import Log, RecordExtents

# %%
# Creating the polytope
# ---------------------
# Let's start by drawing a set of random vertices. Their convex hull is a convex
# polytope, whose facets provide the inequalities :math:`A x \leq b`. Since
# :class:`scipy.spatial.ConvexHull` returns the facets as
# :math:`a_i^\top x + c_i \leq 0`, we just need to flip the sign of the offsets.


def random_polytope(
    ndim: int, nvertices: int = 10, seed: int = 42
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Returns the vertices and the inequalities ``A x <= b`` of the convex hull of
    ``nvertices`` random points in ``ndim`` dimensions."""
    np_random = np.random.default_rng(seed)
    vertices = np_random.gumbel(size=(nvertices, ndim))
    equations = ConvexHull(vertices).equations
    return vertices, equations[:, :-1], -equations[:, -1]


def sample(ndim: int, n_samples: int = 200, seed: int = 42) -> np.ndarray:
    """Samples the random polytope in ``ndim`` dimensions, logging the run and
    recording the extents of each coordinate."""
    _, A, b = random_polytope(ndim, seed=seed)

    # %%
    # Sampling from the polytope
    # --------------------------
    # Once the inequalities have been defined, we can instantiate the sampler, wrap it
    # to log its progress and record the extents, and call
    # :meth:`polygibbs.PolytopeGibbsSampler.sample`. No starting point is given, so the
    # seed of the chain is found via linear programming.

    sampler = PolytopeGibbsSampler(A, b, SamplerConfig(), seed=seed)
    sampler = Log(
        RecordExtents(sampler),
        level=logging.INFO,
        log_frequencies={"on_sample_end": 50},
    )
    samples = sampler.sample(n_samples)

    # %%
    # We can check the validity of the samples by verifying that they lie within the
    # polytope, i.e., that the maximum value of :math:`A x - b` across the inequalities
    # and the samples is not positive.

    print(f"Checks in {ndim}-d")
    print("Interior samples validity:", (samples @ A.T - b).max())
    print("Number of recorded extents:", len(sampler.extents_history))
    return samples


if __name__ == "__main__":
    import matplotlib.pyplot as plt

    for ndim in (2, 3, 7):
        VERTICES, _, _ = random_polytope(ndim)
        samples = sample(ndim)

        # %%
        # Plotting the results
        # --------------------
        # Finally, we can plot the vertices and the samples. They should appear
        # approximately uniformly distributed within the polytope. If not, try
        # increasing the number of samples.

        if ndim == 2:
            fig, ax = plt.subplots(1, 1, constrained_layout=True)
            hull = ConvexHull(VERTICES)
            for simplex in hull.simplices:
                ax.plot(*VERTICES[simplex].T, color="C0", alpha=0.3)
            ax.scatter(*VERTICES.T, c="C0", s=100, alpha=0.3)
            ax.scatter(*samples.T, c="C1", s=1)
            ax.set_xlabel("x")
            ax.set_ylabel("y")
            ax.set_aspect("equal")

        elif ndim == 3:
            fig = plt.figure(constrained_layout=True)
            ax = fig.add_subplot(111, projection="3d")
            ax.scatter(*VERTICES.T, c="C0", s=100)
            ax.scatter(*samples.T, c="C1", s=1)
            ax.set_xlabel("x")
            ax.set_ylabel("y")
            ax.set_zlabel("z")
            ax.set_aspect("equal")

    plt.show()
