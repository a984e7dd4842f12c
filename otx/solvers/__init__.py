from .dense import sinkhorn_dense
from .sparse import sinkhorn_sparse, threshold_neighbors
from .grid import sinkhorn_grid, grid_index, grid_neighbors, transpose_neighbors
from .sliced import sliced_wasserstein


routines = {
    "dense": sinkhorn_dense,
    "sparse": sinkhorn_sparse,
    "grid": sinkhorn_grid,
    "sliced": sliced_wasserstein,
}


def solve(C, a, b, *, eps, method, **kwargs):
    """Computes an approximate transport cost with the solver named `method`.

    There is no automatic selection: callers pick one of
    "dense", "sparse", "grid" or "sliced" explicitly.
    The "grid" and "sliced" solvers also require the keyword arguments
    `sources` and `targets`, two (N,2) arrays of coordinates in [0,1]^2.
    Other keyword arguments (max_iter, tol, n_slices...) are forwarded to the solver.
    """
    try:
        routine = routines[method]
    except KeyError:
        raise ValueError(
            f"Unknown OT solver '{method}'. "
            f"The supported values are: {', '.join(sorted(routines))}."
        ) from None

    if method in ("grid", "sliced"):
        if "sources" not in kwargs or "targets" not in kwargs:
            raise ValueError(
                f"The '{method}' solver requires 2D coordinates: "
                "please provide the 'sources' and 'targets' keyword arguments."
            )

    return routine(a, b, C, eps, **kwargs)
