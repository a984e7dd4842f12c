from typing import Union, List, Any, NamedTuple, Callable
from numpy.typing import ArrayLike


RealTensor = ArrayLike
CostMatrix = Union[RealTensor, Any]
Points2D = RealTensor  # (N, 2) coordinates in [0, 1]^2
IndexArray = ArrayLike  # Integer NumPy array


# A NeighborSets object encodes a sparse adjacency with a fixed width:
# for the row i, the candidate partners are indices[i, :counts[i]],
# in the order in which they were enumerated.
# Entries beyond counts[i] are padding and should never be read.
class NeighborSets(NamedTuple):
    indices: IndexArray  # (N, K) integer array
    counts: IndexArray  # (N,) integer array, 0 <= counts[i] <= K


# Dual potentials of the entropic OT problem. The transport plan is
# implicitly given by P[i,j] = exp((f[i] + g[j] - C[i,j]) / eps).
class DualPotentials(NamedTuple):
    f: RealTensor  # (N,), supported by the source points
    g: RealTensor  # (M,), supported by the target points


# A GridIndex is a flat, array-backed bucketing of 2D points:
# the points that fall in the cell c are order[starts[c] : starts[c] + sizes[c]],
# sorted by increasing index.
class GridIndex(NamedTuple):
    grid_size: int  # Number of cells per axis
    cells: IndexArray  # (N,) cell id of every point, cx * grid_size + cy
    order: IndexArray  # (N,) point indices, sorted by cell id
    starts: IndexArray  # (grid_size**2,) offsets in "order"
    sizes: IndexArray  # (grid_size**2,) number of points per cell


# =================================================================
#             Functions used in the sparse Sinkhorn loops
# =================================================================

# The softmin function is at the heart of any (stable) implementation
# of the Sinkhorn algorithm. On a pruned support, it takes as input:
# - a temperature eps(ilon),
# - the costs C_ik[i,k] = C[i, indices[i,k]], gathered along the neighbor sets,
# - the dual potential h[j] supported by the other measure,
# - the (N,K) candidate indices and the boolean mask of the non-padded ones,
# - the log-mass log(1/N) of every atom,
# - the previous value of the potential, kept for rows without candidates.
#
# It returns a new dual potential:
#   f[i] = eps * (log_mass - log(sum_k exp((h[indices[i,k]] - C_ik[i,k]) / eps)))
#
# In the Sinkhorn loops, we typically use calls like:
#   g = softmin(eps, C_cols, f, col_indices, col_valid, log_mass, g)

SoftMin = Callable[
    [
        float,  # eps
        RealTensor,  # C_ik
        RealTensor,  # h
        RealTensor,  # indices
        RealTensor,  # valid
        float,  # log_mass
        RealTensor,  # previous value
    ],
    RealTensor,  # new potential
]


# A SparseSupport object holds the arrays that the sparse Sinkhorn loops
# actually read, hosted by the same library and device as the cost matrix.
class SparseSupport(NamedTuple):
    C_ik: RealTensor  # (N,K) gathered costs, 0 on padded entries
    indices: RealTensor  # (N,K) integer candidate indices, 0 on padded entries
    valid: RealTensor  # (N,K) boolean mask of the non-padded entries
