import numpy as np
from scipy.sparse import csr_matrix

from . import backends as bk


class OTResult:
    """Abstract class for optimal transport results.

    Every solver returns an object that inherits from OTResult
    (e.g. DenseOTResult) and implements the relevant
    methods (e.g. "plan" for the dense solver, "sparse_plan" for the pruned ones).
    The approximate transport cost is always available as `dist`.
    log is a dictionary containing potential information about the solver.
    """

    def __init__(
        self,
        *,
        dist,
        array_properties,
        eps=None,
        n_iter=None,
        log=None,
    ):
        self._dist = dist
        self._array_properties = array_properties
        self._eps = eps
        self._n_iter = n_iter
        self._log = {} if log is None else log

    # Loss values ========================================================================
    @property
    def dist(self):
        """Approximate transport cost sum(P * C), as a Python float."""
        return float(self._dist)

    # Transport plan =====================================================================
    @property
    def plan(self):
        """Transport plan, encoded as a dense array."""
        return None

    @property
    def sparse_plan(self):
        """Transport plan, encoded as a SciPy sparse matrix."""
        return None

    # Dual potentials ====================================================================
    @property
    def potential_a(self):
        """First dual potential, associated to the source measure `a`."""
        return None

    @property
    def potential_b(self):
        """Second dual potential, associated to the target measure `b`."""
        return None

    # Marginal constraints ===============================================================
    @property
    def marginal_a(self):
        """First marginal of the transport plan, with the same shape as the source weights `a`."""
        return None

    @property
    def marginal_b(self):
        """Second marginal of the transport plan, with the same shape as the target weights `b`."""
        return None

    # Miscellaneous ======================================================================
    @property
    def n_iter(self):
        """Number of Sinkhorn iterations that were performed, None for closed-form solvers."""
        return self._n_iter

    @property
    def log(self):
        return self._log

    def __repr__(self):
        ap = self._array_properties
        return (
            f"{self.__class__.__name__}(dist={self.dist:.6g}, N={ap.N}, M={ap.M}, "
            f"n_iter={self._n_iter}, library={ap.library})"
        )


class DenseOTResult(OTResult):
    """Result of the dense Sinkhorn-Knopp solver, with the plan P = diag(u) @ K @ diag(v)."""

    def __init__(self, *, plan, u, v, **kwargs):
        super().__init__(**kwargs)
        self._plan = plan
        self._u = u
        self._v = v

    @property
    def plan(self):
        return self._plan

    @property
    def potential_a(self):
        # u = exp(f / eps): zero scalings give -inf potentials.
        return self._eps * bk.log(self._u)

    @property
    def potential_b(self):
        return self._eps * bk.log(self._v)

    @property
    def marginal_a(self):
        return bk.sum(self._plan, axis=1)

    @property
    def marginal_b(self):
        return bk.sum(self._plan, axis=0)


class SparseOTResult(OTResult):
    """Result of a log-domain solver that works on a pruned support.

    The transport plan is only defined on the row neighbor sets:
    P[i, j] = exp((f[i] + g[j] - C[i,j]) / eps) if j is a candidate for i, 0 otherwise.
    """

    def __init__(self, *, potentials, neighbors, costs, **kwargs):
        super().__init__(**kwargs)
        self._potentials = potentials
        self._neighbors = neighbors  # NeighborSets, NumPy arrays
        self._costs = costs  # (N,K) gathered costs C[i, indices[i,k]]

    @property
    def neighbors(self):
        """Row candidate sets that support the transport plan."""
        return self._neighbors

    @property
    def potential_a(self):
        return self._potentials.f

    @property
    def potential_b(self):
        return self._potentials.g

    @property
    def sparse_plan(self):
        ap = self._array_properties
        indices, counts = self._neighbors
        f = bk.to_numpy(self._potentials.f)
        g = bk.to_numpy(self._potentials.g)
        C_ik = bk.to_numpy(self._costs)

        valid = np.arange(indices.shape[1])[None, :] < counts[:, None]  # (N,K)
        rows = np.broadcast_to(np.arange(ap.N)[:, None], indices.shape)[valid]
        cols = indices[valid]
        values = np.exp((f[rows] + g[cols] - C_ik[valid]) / self._eps)

        return csr_matrix((values, (rows, cols)), shape=(ap.N, ap.M))

    @property
    def marginal_a(self):
        marginal = np.asarray(self.sparse_plan.sum(axis=1)).ravel()
        return bk.from_numpy(marginal, like=self._potentials.f)

    @property
    def marginal_b(self):
        marginal = np.asarray(self.sparse_plan.sum(axis=0)).ravel()
        return bk.from_numpy(marginal, like=self._potentials.g)
