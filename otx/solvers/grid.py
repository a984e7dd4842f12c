r"""Spatial hashing, log-domain Sinkhorn solver for 2D point clouds.

This is the fastest and coarsest solver of the library.
Instead of thresholding the full cost matrix, we bucket the points of
the unit square [0,1]^2 in a uniform grid of ~sqrt(N)/2 x sqrt(N)/2 cells,
and connect every source point to the target points that lie in its
own cell or in one of the 8 adjacent cells, up to max_neighbors = 20.
We then run exactly 2 log-domain Sinkhorn iterations, without momentum.

The 20 candidates are the first ones that we encounter when scanning
the 3x3 neighborhood, not the 20 nearest ones: the scan order is pinned
(cells by increasing dx then dy, points by increasing index in each cell)
so that results are reproducible.
"""

import logging
import math

import numpy as np

from .. import backends as bk
from ..typing import NeighborSets, GridIndex, DualPotentials, Points2D
from ..arguments import check_eps, check_weights, check_points
from ..ot_result import SparseOTResult
from .softmin import neighbor_arrays, softmin_sparse, sparse_cost
from .loop import sinkhorn_loop

logger = logging.getLogger(__name__)


def default_grid_size(N: int) -> int:
    """Returns the number of cells per axis, max(1, floor(sqrt(N) / 2))."""
    return max(1, int(math.floor(math.sqrt(N) / 2)))


def grid_index(points: Points2D, grid_size: int) -> GridIndex:
    """Buckets a (N,2) NumPy array of points in [0,1]^2 on a uniform grid.

    Coordinates outside of the unit square are clamped to the border cells.
    """
    cxy = np.floor(points * grid_size).astype(np.int64)  # (N,2)
    cxy = np.clip(cxy, 0, grid_size - 1)
    cells = cxy[:, 0] * grid_size + cxy[:, 1]  # (N,)

    # A stable sort keeps the insertion order inside every cell:
    order = np.argsort(cells, kind="stable")
    sizes = np.bincount(cells, minlength=grid_size**2)
    starts = np.cumsum(sizes) - sizes

    return GridIndex(
        grid_size=grid_size,
        cells=cells,
        order=order,
        starts=starts,
        sizes=sizes,
    )


def grid_neighbors(
    source_index: GridIndex,
    target_index: GridIndex,
    max_neighbors: int = 20,
) -> NeighborSets:
    """Lists the targets that lie in the 3x3 cell neighborhood of every source.

    We scan the neighborhood with dx = -1, 0, 1 (outer loop) and dy = -1, 0, 1
    (inner loop) and keep the first `max_neighbors` targets that we encounter.
    """
    grid_size = target_index.grid_size
    N = len(source_index.cells)
    cx, cy = np.divmod(source_index.cells, grid_size)

    indices = np.zeros((N, max_neighbors), dtype=np.int64)
    counts = np.zeros(N, dtype=np.int64)
    rows = np.arange(N)

    for dx in (-1, 0, 1):
        for dy in (-1, 0, 1):
            nx, ny = cx + dx, cy + dy
            inside = (nx >= 0) & (nx < grid_size) & (ny >= 0) & (ny < grid_size)
            cell = np.where(inside, nx * grid_size + ny, 0)

            # Number of targets that we copy from this cell, for every source:
            take = np.where(inside, target_index.sizes[cell], 0)
            take = np.minimum(take, max_neighbors - counts)

            # Flat list of (source, rank in cell) pairs:
            src = np.repeat(rows, take)
            rank = np.arange(len(src)) - np.repeat(np.cumsum(take) - take, take)

            indices[src, counts[src] + rank] = target_index.order[
                target_index.starts[cell[src]] + rank
            ]
            counts += take

    return NeighborSets(indices=indices, counts=counts)


def transpose_neighbors(
    neighbors: NeighborSets, M: int, max_neighbors: int = 20
) -> NeighborSets:
    """Derives column candidates from row candidates.

    The candidates of the column j are the rows that listed j,
    by increasing row index, capped at `max_neighbors`.
    Columns may thus end up with fewer candidates than an independent
    grid search would provide.
    """
    indices, counts = neighbors
    N, K = indices.shape
    valid = np.arange(K)[None, :] < counts[:, None]  # (N,K)

    # (row, column) pairs in row-major order, i.e. by increasing row index:
    src = np.broadcast_to(np.arange(N)[:, None], (N, K))[valid]
    dst = indices[valid]

    # Group the pairs by column, without reordering the rows:
    order = np.argsort(dst, kind="stable")
    src, dst = src[order], dst[order]

    sizes = np.bincount(dst, minlength=M)
    starts = np.cumsum(sizes) - sizes
    rank = np.arange(len(dst)) - starts[dst]
    keep = rank < max_neighbors

    col_indices = np.zeros((M, max_neighbors), dtype=np.int64)
    col_indices[dst[keep], rank[keep]] = src[keep]

    return NeighborSets(
        indices=col_indices,
        counts=np.minimum(sizes, max_neighbors),
    )


def sinkhorn_grid(
    a,
    b,
    C,
    eps,
    sources,
    targets,
    *,
    max_neighbors=20,
    n_iter=2,
):
    r"""Grid-pruned Sinkhorn solver for square problems between 2D point clouds.

    Args:
        a ((N,) real-valued Tensor): Source weights. Only used for shape checks:
            the solver assumes a uniform mass 1/N on every atom.
        b ((N,) real-valued Tensor): Target weights, also unused beyond checks.
        C ((N,N) real-valued Tensor): Square cost matrix between sources and targets.
        eps (float > 0): Temperature of the entropic regularization.
        sources ((N,2) real-valued Tensor): Source coordinates, in [0,1]^2.
        targets ((N,2) real-valued Tensor): Target coordinates, in [0,1]^2.
        max_neighbors (int, optional): Maximum number of candidates
            per row and per column. Defaults to 20.
        n_iter (int, optional): Number of Sinkhorn iterations. Defaults to 2.

    Returns:
        SparseOTResult: with `dist` equal to the entropic transport cost
            restricted to the candidate sets of the rows.
            Rows and columns without candidates keep a zero potential
            and carry no mass.
    """
    check_eps(eps)
    array_properties = check_weights(a, b, C, square=True)
    N = array_properties.N
    check_points(sources, targets, N)

    # Spatial hashing, built once for this call -----------------------------------------
    grid_size = default_grid_size(N)
    source_index = grid_index(bk.to_numpy(sources), grid_size)
    target_index = grid_index(bk.to_numpy(targets), grid_size)

    row_neighbors = grid_neighbors(source_index, target_index, max_neighbors)
    col_neighbors = transpose_neighbors(row_neighbors, N, max_neighbors)

    logger.debug(
        "Grid of %dx%d cells: %d rows and %d columns without candidates.",
        grid_size,
        grid_size,
        int((row_neighbors.counts == 0).sum()),
        int((col_neighbors.counts == 0).sum()),
    )

    rows = neighbor_arrays(C, row_neighbors)
    cols = neighbor_arrays(C.T, col_neighbors)

    # Plain Sinkhorn iterations, starting from zero potentials --------------------------
    f = bk.zeros_like(rows.C_ik[:, 0])
    g = bk.zeros_like(cols.C_ik[:, 0])

    potentials = sinkhorn_loop(
        softmin=softmin_sparse,
        eps=eps,
        rows=rows,
        cols=cols,
        potentials=DualPotentials(f=f, g=g),
        omega_list=[1.0] * n_iter,
    )

    dist = sparse_cost(
        eps, rows.C_ik, potentials.f, potentials.g, rows.indices, rows.valid
    )

    return SparseOTResult(
        dist=dist,
        array_properties=array_properties,
        eps=eps,
        n_iter=n_iter,
        potentials=potentials,
        neighbors=row_neighbors,
        costs=rows.C_ik,
        log={
            "col_neighbors": col_neighbors,
            "grid_size": grid_size,
            "source_index": source_index,
            "target_index": target_index,
        },
    )
