import numpy as np

from ..utils import squared_distances
from .common import cast, uniform


def affine_copy(*, N, eps, seed=0, angle=0.1, scale=0.95, shift=(0.02, 0.01), **kwargs):
    """Random points in the unit square, matched to a rotated, scaled and translated copy.

    The transformation is applied around the center of the square and is mild
    enough for the targets to stay in [0,1]^2.
    There is no closed-form ground truth: this example is used to compare
    the solvers with each other.
    """
    rng = np.random.default_rng(seed)
    sources = rng.random((N, 2))

    c, s = np.cos(angle), np.sin(angle)
    R = scale * np.array([[c, -s], [s, c]])
    targets = (sources - 0.5) @ R.T + 0.5 + np.asarray(shift)[None, :]
    targets = np.clip(targets, 0.0, 1.0)

    return cast(
        {
            "a": uniform(N),
            "b": uniform(N),
            "C": squared_distances(sources, targets),
            "sources": sources,
            "targets": targets,
            "eps": eps,
        },
        **kwargs,
    )


def random_problem(*, N, seed=0, **kwargs):
    """Independent random point clouds and random weights, with a squared Euclidean cost."""
    rng = np.random.default_rng(seed)
    sources = rng.random((N, 2))
    targets = rng.random((N, 2))
    a = rng.random(N)
    b = rng.random(N)

    return cast(
        {
            "a": a / a.sum(),
            "b": b / b.sum(),
            "C": squared_distances(sources, targets),
            "sources": sources,
            "targets": targets,
        },
        **kwargs,
    )
