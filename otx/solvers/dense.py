r"""Classic Sinkhorn-Knopp algorithm, with multiplicative updates on dense arrays.

This solver materializes the Gibbs kernel K = exp(-C / eps) and the full
transport plan: it is meant to be used as a ground truth on small problems,
with a temperature eps that is not too small with respect to the costs.

Warning:
    The scaling vectors u and v are not stabilized in the log domain.
    If eps is small relative to the cost values, the kernel entries underflow
    to zero and the output may contain NaN or infinite values.
"""

import logging
import math
import warnings

from .. import backends as bk
from ..arguments import check_eps, check_weights, check_nonnegative, check_marginals
from ..ot_result import DenseOTResult

logger = logging.getLogger(__name__)

# Added to every denominator, to avoid divisions by zero:
STABILITY_GUARD = 1e-30


def sinkhorn_dense(a, b, C, eps, max_iter=1000, tol=1e-9):
    r"""Entropic optimal transport with the vanilla Sinkhorn-Knopp iterations.

    Starting from u = 1 and v = 1, we alternate between:

    .. math::
        v \gets b \,/\, (K^\top u), \qquad u \gets a \,/\, (K v)~,

    until the L1 change of u between two iterations falls below `tol`.

    Args:
        a ((N,) real-valued Tensor): Source weights, non-negative.
        b ((M,) real-valued Tensor): Target weights, non-negative,
            with the same total mass as a.
        C ((N,M) real-valued Tensor): Cost matrix.
        eps (float > 0): Temperature of the Gibbs kernel K = exp(-C / eps).
        max_iter (int, optional): Maximum number of iterations. Defaults to 1000.
        tol (float, optional): Tolerance on the L1 change of u. Defaults to 1e-9.

    Returns:
        DenseOTResult: with the (N,M) transport plan `plan`
            and the transport cost `dist` = sum(plan * C).
            `log["errors"]` lists the L1 changes of u along the iterations.
    """
    check_eps(eps)
    array_properties = check_weights(a, b, C)
    check_nonnegative(a, b)
    check_marginals(float(bk.sum(a)), float(bk.sum(b)))

    # Gibbs kernel, computed once and for all:
    K = bk.exp(-C / eps)  # (N,M)

    u = bk.ones_like(a)  # (N,)
    v = bk.ones_like(b)  # (M,)

    errors = []
    n_iter = 0
    for it in range(max_iter):
        u_prev = u

        v = b / (K.T @ u + STABILITY_GUARD)
        u = a / (K @ v + STABILITY_GUARD)

        n_iter = it + 1
        errors.append(float(bk.sum(bk.abs(u - u_prev))))
        if errors[-1] < tol:
            break

    logger.debug(
        "Sinkhorn-Knopp stopped after %d/%d iterations, L1 change = %g.",
        n_iter,
        max_iter,
        errors[-1] if errors else float("nan"),
    )

    plan = u[:, None] * K * v[None, :]  # (N,M)
    dist = bk.sum(plan * C)

    if not math.isfinite(float(dist)):
        warnings.warn(
            f"The Sinkhorn-Knopp solver returned a non-finite cost ({float(dist)}). "
            f"The temperature eps={eps} is probably too small for costs "
            f"of magnitude up to {float(bk.amax(C))}: consider using a larger eps "
            "or the log-domain solver `sinkhorn_sparse`."
        )

    return DenseOTResult(
        plan=plan,
        u=u,
        v=v,
        dist=dist,
        array_properties=array_properties,
        eps=eps,
        n_iter=n_iter,
        log={"errors": errors},
    )
