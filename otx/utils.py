import numpy as np

from . import backends as bk


#######################################
# On point clouds
#######################################


def squared_distances(x, y):
    """Returns the (N,M) matrix of squared Euclidean distances between two point clouds.

    We compute the differences x[i] - y[j] explicitly instead of expanding
    |x|^2 - 2<x,y> + |y|^2, so that coincident points get an exact zero cost.

    Args:
        x ((N, D) real-valued Tensor): Source points.
        y ((M, D) real-valued Tensor): Target points.

    Returns:
        (N, M) real-valued Tensor: C[i,j] = |x[i] - y[j]|^2.
    """
    if len(x.shape) != 2 or len(y.shape) != 2:
        raise ValueError(
            "Expected two point clouds of shapes (N,D) and (M,D), "
            f"but received arrays of shapes {tuple(x.shape)} and {tuple(y.shape)}."
        )
    if x.shape[1] != y.shape[1]:
        raise ValueError(
            f"The point clouds live in different spaces: D={x.shape[1]} "
            f"for x and D={y.shape[1]} for y."
        )

    diff = x[:, None, :] - y[None, :, :]  # (N,M,D)
    return bk.sum(diff * diff, axis=2)


def distances(x, y):
    """Returns the (N,M) matrix of Euclidean distances between two point clouds."""
    return bk.sqrt(squared_distances(x, y))


#######################################
# On histograms
#######################################


def normalize(v):
    """Divides a vector of non-negative weights by its sum.

    A vector with zero total mass produces NaN or +-inf values:
    callers must provide a positive mass.
    """
    return v / bk.sum(v)


def random_latent(N, seed=None):
    """Returns a random probability vector of size N, as a NumPy array."""
    rng = np.random.default_rng(seed)
    return normalize(rng.random(N))
