import logging

__version__ = "0.1.0"

from .utils import squared_distances, distances, normalize, random_latent
from .ot_result import OTResult
from .solvers import (
    solve,
    routines,
    sinkhorn_dense,
    sinkhorn_sparse,
    sinkhorn_grid,
    sliced_wasserstein,
)

# The library never configures logging by itself:
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = sorted(
    [
        "solve",
        "routines",
        "sinkhorn_dense",
        "sinkhorn_sparse",
        "sinkhorn_grid",
        "sliced_wasserstein",
        "squared_distances",
        "distances",
        "normalize",
        "random_latent",
        "OTResult",
    ]
)
