r"""Log-domain Sinkhorn updates on a pruned support.

The sparse and grid solvers never look at the full cost matrix during their
iterations. Instead, every row i (resp. column j) only interacts with a fixed
set of candidate partners, encoded as a NeighborSets object. This file
gathers the routines that both solvers share:

- `neighbor_arrays` moves a NeighborSets object next to the cost matrix
  (as NumPy arrays or torch tensors) and gathers the relevant costs,
- `softmin_sparse` is the stabilized soft-C-transform on the pruned support,
- `sparse_cost` is the primal transport cost restricted to the pruned support.
"""

import numpy as np

from .. import backends as bk
from ..typing import NeighborSets, SparseSupport, RealTensor, CostMatrix


def neighbor_mask(neighbors: NeighborSets):
    """Returns the (N,K) boolean mask of the valid entries of a NeighborSets object."""
    K = neighbors.indices.shape[1]
    return np.arange(K)[None, :] < neighbors.counts[:, None]


def neighbor_arrays(C: CostMatrix, neighbors: NeighborSets) -> SparseSupport:
    """Gathers the costs C[i, indices[i,k]] and casts the neighbor sets like C.

    Args:
        C ((N,M) real-valued Tensor): Cost matrix, NumPy array or torch Tensor.
        neighbors (NeighborSets): N candidate sets of column indices, as NumPy arrays.

    Returns:
        SparseSupport: Three Tensors, hosted by the same library and device as C:
            - C_ik ((N,K) real-valued Tensor): gathered costs, 0 on padded entries,
            - indices ((N,K) integer Tensor): candidate indices, 0 on padded entries,
            - valid ((N,K) boolean Tensor): mask of the non-padded entries.
    """
    valid = neighbor_mask(neighbors)
    C_ik = np.take_along_axis(bk.to_numpy(C), neighbors.indices, axis=1)
    # Padded entries may point to sentinel costs: we zero them out.
    C_ik = np.where(valid, C_ik, 0)

    return SparseSupport(
        C_ik=bk.from_numpy(C_ik, like=C),
        indices=bk.from_numpy(neighbors.indices, like=C),
        valid=bk.from_numpy(valid, like=C),
    )


def softmin_sparse(
    eps: float,
    C_ik: RealTensor,
    h: RealTensor,
    indices: RealTensor,
    valid: RealTensor,
    log_mass: float,
    previous: RealTensor,
) -> RealTensor:
    r"""Soft-C-transform restricted to a set of neighbors, in the log domain.

    For every row i with at least one candidate, we return:

    .. math::
        f_i \gets \varepsilon \big[ \log(\text{mass}) - \log \sum_{k} \exp
        \big( (h_{j_k} - C_{i,j_k}) / \varepsilon \big) \big]~,

    where the :math:`j_k`'s are the candidates of row i.
    The log-sum-exp is stabilized by subtracting the row-wise maximum
    before exponentiating. Rows without candidates keep their previous value.

    Args:
        eps (float > 0): Temperature of the Gibbs kernel.
        C_ik ((N,K) real-valued Tensor): Costs gathered along the neighbor sets.
        h ((M,) real-valued Tensor): Dual potential supported by the other measure.
        indices ((N,K) integer Tensor): Candidate indices in [0, M).
        valid ((N,K) boolean Tensor): Mask of the non-padded candidates.
        log_mass (float): Log-weight of every atom, log(1/N) for uniform measures.
        previous ((N,) real-valued Tensor): Current value of the updated potential.

    Returns:
        (N,) real-valued Tensor: Updated dual potential.
    """
    scores = bk.where(valid, (h[indices] - C_ik) / eps, -np.inf)  # (N,K)
    nonempty = bk.any(valid, axis=1)  # (N,)

    m = bk.where(nonempty, bk.amax(scores, axis=1), 0.0)  # (N,)
    s = bk.sum(bk.exp(scores - m[:, None]), axis=1)  # (N,)
    s = bk.where(nonempty, s, 1.0)

    update = eps * (log_mass - (m + bk.log(s)))
    return bk.where(nonempty, update, previous)


def sparse_cost(
    eps: float,
    C_ik: RealTensor,
    f: RealTensor,
    g: RealTensor,
    indices: RealTensor,
    valid: RealTensor,
) -> RealTensor:
    """Returns sum_{i,k} exp((f[i] + g[j_k] - C[i,j_k]) / eps) * C[i,j_k] over the valid entries."""
    log_plan = bk.where(valid, (f[:, None] + g[indices] - C_ik) / eps, -np.inf)
    return bk.sum(bk.exp(log_plan) * C_ik)
