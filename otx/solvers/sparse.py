r"""Threshold-pruned, log-domain Sinkhorn solver with momentum.

This is the "accurate and fast" solver of the library. It relies on three ideas:

1. Kernel truncation: since exp(-C[i,j] / eps) is negligible for large costs,
   each source atom only interacts with the targets whose cost lies below
   threshold = 8 * eps (and vice versa). Rows or columns with fewer than 5
   such partners are connected to their 10 cheapest partners instead.

2. Greedy warm start: the first dual potential is initialized with
   f[i] = -min_j C[i,j] over the candidates of row i.

3. Over-relaxation: after a few standard iterations, every update is
   extrapolated with a factor omega = 1.6 > 1.

There is no convergence check: the quality of the result only depends on
max_iter and on the pruning threshold.
"""

import logging

import numpy as np

from .. import backends as bk
from ..typing import NeighborSets, DualPotentials, CostMatrix
from ..arguments import check_eps, check_weights
from ..ot_result import SparseOTResult
from .softmin import neighbor_arrays, softmin_sparse, sparse_cost
from .loop import sinkhorn_loop, momentum_schedule

logger = logging.getLogger(__name__)


def threshold_neighbors(
    C: CostMatrix,
    threshold: float,
    min_candidates: int = 5,
    fallback_candidates: int = 10,
) -> NeighborSets:
    """Selects, for every row of C, the columns whose cost is below a threshold.

    Rows with fewer than `min_candidates` such columns are connected to their
    `fallback_candidates` lowest-cost columns instead, with ties broken by index.
    This guarantees a minimum connectivity and avoids starved rows.

    Args:
        C ((N,M) NumPy array): Cost matrix.
        threshold (float): Costs must be strictly smaller than this value.
        min_candidates (int, optional): Defaults to 5.
        fallback_candidates (int, optional): Defaults to 10.

    Returns:
        NeighborSets: Candidate columns, in increasing index order
            for the thresholded rows and by increasing cost for the fallback ones.
    """
    N, M = C.shape
    mask = C < threshold  # (N,M)
    counts = mask.sum(axis=1)  # (N,)

    starved = counts < min_candidates
    n_fallback = min(fallback_candidates, M)
    counts = np.where(starved, n_fallback, counts)
    K = max(1, int(counts.max())) if N > 0 else 1

    # A stable sort puts the admissible columns first, without reordering them:
    indices = np.argsort(~mask, axis=1, kind="stable")[:, :K]
    # Starved rows are replaced by their lowest-cost columns:
    if starved.any():
        cheapest = np.argsort(C[starved], axis=1, kind="stable")[:, :n_fallback]
        indices[starved, :n_fallback] = cheapest

    valid = np.arange(K)[None, :] < counts[:, None]
    indices = np.where(valid, indices, 0)

    logger.debug(
        "Threshold %g: %.1f candidates per set on average, "
        "%d/%d sets use the fallback on the %d lowest costs.",
        threshold,
        counts.mean() if N > 0 else 0.0,
        int(starved.sum()),
        N,
        n_fallback,
    )
    return NeighborSets(indices=indices, counts=counts)


def sinkhorn_sparse(
    a,
    b,
    C,
    eps,
    max_iter=25,
    *,
    threshold_factor=8.0,
    min_candidates=5,
    fallback_candidates=10,
    warmup=3,
    omega=1.6,
):
    r"""Sparse, stabilized Sinkhorn solver for square problems with uniform masses.

    Args:
        a ((N,) real-valued Tensor): Source weights. Only used for shape checks:
            the solver assumes a uniform mass 1/N on every atom.
        b ((N,) real-valued Tensor): Target weights, also unused beyond checks.
        C ((N,N) real-valued Tensor): Square cost matrix. Rectangular problems
            should be padded by the caller with zero weights and large costs.
        eps (float > 0): Temperature of the entropic regularization.
        max_iter (int, optional): Number of Sinkhorn iterations. Defaults to 25.
        threshold_factor (float, optional): Costs below threshold_factor * eps
            define the candidate sets. Defaults to 8.
        min_candidates (int, optional): Sets with fewer candidates
            use the fallback. Defaults to 5.
        fallback_candidates (int, optional): Size of the fallback sets,
            made of the lowest costs. Defaults to 10.
        warmup (int, optional): Number of iterations without momentum. Defaults to 3.
        omega (float, optional): Relaxation factor after the warmup. Defaults to 1.6.

    Returns:
        SparseOTResult: with `dist` equal to the entropic transport cost
            restricted to the candidate sets of the rows.
    """
    check_eps(eps)
    array_properties = check_weights(a, b, C, square=True)

    # Pruned supports, built once for this call -----------------------------------------
    threshold = threshold_factor * eps
    C_np = bk.to_numpy(C)
    row_neighbors = threshold_neighbors(
        C_np, threshold, min_candidates, fallback_candidates
    )
    col_neighbors = threshold_neighbors(
        C_np.T, threshold, min_candidates, fallback_candidates
    )

    rows = neighbor_arrays(C, row_neighbors)
    cols = neighbor_arrays(C.T, col_neighbors)

    # Greedy warm start: f[i] = -min C[i,j] over the candidates of i -------------------
    f = -bk.amin(bk.where(rows.valid, rows.C_ik, np.inf), axis=1)
    g = bk.zeros_like(f)

    # Accelerated Sinkhorn loop ---------------------------------------------------------
    potentials = sinkhorn_loop(
        softmin=softmin_sparse,
        eps=eps,
        rows=rows,
        cols=cols,
        potentials=DualPotentials(f=f, g=g),
        omega_list=momentum_schedule(max_iter, warmup=warmup, omega=omega),
    )

    dist = sparse_cost(
        eps, rows.C_ik, potentials.f, potentials.g, rows.indices, rows.valid
    )

    return SparseOTResult(
        dist=dist,
        array_properties=array_properties,
        eps=eps,
        n_iter=max_iter,
        potentials=potentials,
        neighbors=row_neighbors,
        costs=rows.C_ik,
        log={"col_neighbors": col_neighbors, "threshold": threshold},
    )
