import numpy as np

from ..utils import squared_distances, random_latent
from .common import ExpectedOTResult, cast, lattice, uniform


def coincident_points(*, points, eps, weights="uniform", seed=None, **kwargs):
    """Matches a point cloud with itself: the expected transport cost is zero.

    The cost matrix is symmetric with a zero diagonal. Since the dense solver
    honors the weights, we always use the same weights for the source
    and the target measures.

    This example is used by tests/test_scenarios.py.
    """
    points = np.asarray(points, dtype=np.float64)
    N = len(points)

    if weights == "uniform":
        a = uniform(N)
    else:
        a = random_latent(N, seed=seed)

    C = squared_distances(points, points)

    return cast(
        {
            "a": a,
            "b": a.copy(),
            "C": C,
            "sources": points,
            "targets": points.copy(),
            "eps": eps,
            "atol": 1e-3,
            "result": ExpectedOTResult(dist=0.0, marginal_a=a, marginal_b=a),
        },
        **kwargs,
    )


def unit_square_corners(*, eps=0.05, **kwargs):
    """The four corners of the unit square, matched to themselves with uniform weights."""
    corners = np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0], [1.0, 1.0]])
    return coincident_points(points=corners, eps=eps, **kwargs)


def coincident_lattice(*, n, eps, **kwargs):
    """A regular n-by-n lattice, matched to itself."""
    return coincident_points(points=lattice(n), eps=eps, **kwargs)
