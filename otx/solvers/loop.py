r"""Implements the log-domain Sinkhorn loop that is shared by the pruned solvers.

Both the sparse (threshold-pruned) and grid (spatial hash) solvers alternate
between two half-steps on a fixed support:

    g[j] <- softmin over the column candidates of j, using f,
    f[i] <- softmin over the row candidates of i, using g,

with an optional over-relaxation ("momentum") of the updates:

    value <- omega * update + (1 - omega) * value.

The only required sequencing is between the two half-steps and between
successive iterations: inside a half-step, all rows are updated at once.
"""

import logging
import math

from ..typing import List, SoftMin, SparseSupport, DualPotentials

logger = logging.getLogger(__name__)


def momentum_schedule(n_iter: int, warmup: int = 3, omega: float = 1.6) -> List[float]:
    """Returns the list of relaxation factors: 1.0 for the first `warmup` iterations, `omega` afterwards."""
    return [1.0 if it < warmup else omega for it in range(n_iter)]


def sinkhorn_loop(
    *,
    softmin: SoftMin,
    eps: float,
    rows: SparseSupport,
    cols: SparseSupport,
    potentials: DualPotentials,
    omega_list: List[float],
) -> DualPotentials:
    """Runs len(omega_list) iterations of the relaxed log-domain Sinkhorn loop.

    Args:
        softmin (function): Soft-C-transform on a pruned support,
            e.g. `softmin_sparse`.
        eps (float > 0): Temperature of the Gibbs kernel.
        rows (SparseSupport): Candidate columns of every source atom.
        cols (SparseSupport): Candidate rows of every target atom.
        potentials (DualPotentials): Initial values of f and g.
        omega_list (list of float): Relaxation factor for every iteration.
            1.0 gives the standard Sinkhorn updates.

    Returns:
        DualPotentials: The values of f and g after the last iteration.
    """
    f, g = potentials
    N = f.shape[0]
    log_mass = math.log(1.0 / N)

    for omega in omega_list:
        # Update g from f, on the column candidates:
        gt = softmin(eps, cols.C_ik, f, cols.indices, cols.valid, log_mass, g)
        g = gt if omega == 1.0 else omega * gt + (1 - omega) * g

        # Update f from g, on the row candidates:
        ft = softmin(eps, rows.C_ik, g, rows.indices, rows.valid, log_mass, f)
        f = ft if omega == 1.0 else omega * ft + (1 - omega) * f

    logger.debug("Ran %d log-domain Sinkhorn iterations at eps=%g.", len(omega_list), eps)
    return DualPotentials(f=f, g=g)
