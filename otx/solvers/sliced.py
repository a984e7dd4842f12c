r"""Sliced approximation of the transport cost between two 2D point clouds.

In dimension 1, optimal transport between two uniform measures
with the same number of atoms is solved exactly by sorting:
the k-th smallest source is matched with the k-th smallest target.
We use this property along a few projection directions and average
the resulting 1D costs.

N.B.: This solver only sees the point coordinates. The weights a, b,
      the cost matrix C and the temperature eps are accepted for interface
      parity with the other solvers, but are ignored: the result is
      always the one for uniform weights 1/N.
"""

import math

import numpy as np

from .. import backends as bk
from ..arguments import ArrayProperties, check_points
from ..ot_result import OTResult


def slice_directions(n_slices: int = 5):
    """Returns the (n_slices, 2) unit vectors at the angles 2 * pi * s / n_slices.

    The angles are equally spaced and deterministic.
    """
    angles = 2 * math.pi * np.arange(n_slices) / n_slices
    return np.stack((np.cos(angles), np.sin(angles)), axis=1)


def sliced_wasserstein(a, b, C, eps, sources, targets, *, n_slices=5):
    r"""Averages exact 1D transport costs along equally spaced projection directions.

    For every direction :math:`\theta_s`, we sort the projections
    :math:`\langle x_i, \theta_s \rangle` and :math:`\langle y_j, \theta_s \rangle`
    and compute the 1D cost :math:`\tfrac{1}{N}\sum_k |x_{(k)} - y_{(k)}|`.

    Args:
        a, b, C, eps: Ignored.
        sources ((N,2) real-valued Tensor): Source coordinates.
        targets ((N,2) real-valued Tensor): Target coordinates.
        n_slices (int, optional): Number of projection directions. Defaults to 5.

    Returns:
        OTResult: with `dist` equal to the average of the 1D costs.
            The 1D cost of every slice is stored in `log["slice_costs"]`.
    """
    N = sources.shape[0]
    check_points(sources, targets, N)

    directions = bk.from_numpy(slice_directions(n_slices), like=sources)  # (S,2)

    proj_a = bk.sort(sources @ directions.T, axis=0)  # (N,S)
    proj_b = bk.sort(targets @ directions.T, axis=0)  # (N,S)

    slice_costs = bk.sum(bk.abs(proj_a - proj_b), axis=0) / N  # (S,)
    dist = bk.mean(slice_costs)

    array_properties = ArrayProperties(
        N=N,
        M=N,
        dtype=bk.dtype(sources),
        device=bk.device(sources),
        library=bk.library(sources),
    )
    return OTResult(
        dist=dist,
        array_properties=array_properties,
        log={"slice_costs": slice_costs, "directions": directions},
    )
