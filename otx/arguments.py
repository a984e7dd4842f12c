from . import backends as bk
from typing import NamedTuple, Any


class ArrayProperties(NamedTuple):
    N: int  # Number of source samples
    M: int  # Number of target samples
    dtype: Any  # Numerical dtype: may be torch.dtype, a NumPy dtype, etc.
    device: Any  # Physical device: may be a string ("cpu", "cuda:0"...), torch.device...
    library: str  # Underlying framework: one of "numpy", "torch".


def check_library(*args):
    """Checks that all input arrays come from the same library (numpy, torch...)."""

    libraries = set([bk.library(a) for a in args])
    if len(libraries) > 1:
        raise ValueError(
            "The input arrays do not come from the same tensor library: "
            f"received a collection of {libraries}, which is ambiguous. "
            "To fix this error, please cast all arrays using a single library."
        )
    else:
        return libraries.pop()


def check_dtype(*args):
    """Checks that all input arrays have the same numerical dtype."""

    dtypes = set([bk.dtype(a) for a in args])
    if len(dtypes) > 1:
        raise ValueError(
            "The input arrays do not have the same numerical dtype: "
            f"received a collection of {dtypes}, which is ambiguous. "
            "To fix this error, please cast all arrays to the same numerical dtype."
        )
    else:
        return dtypes.pop()


def check_device(*args):
    """Checks that all input arrays are stored on the same device."""

    devices = set([str(bk.device(a)) for a in args])
    if len(devices) > 1:
        raise ValueError(
            "The input arrays are not stored on the same device: "
            f"received a collection of {devices}, which is ambiguous. "
            "To fix this error, please move all arrays to the same RAM or GPU device."
        )
    else:
        return bk.device(args[0])


def check_eps(eps):
    if eps <= 0:
        raise ValueError(
            f"The temperature 'eps' should be > 0. Received {eps}. "
            "Entropic OT solvers require a positive regularization."
        )


def check_weights(a, b, C, square=False):
    """Checks the shapes of the weights and cost matrix, and returns their ArrayProperties.

    Args:
        a ((N,) real-valued Tensor): Source weights.
        b ((M,) real-valued Tensor): Target weights.
        C ((N,M) real-valued Tensor): Cost matrix.
        square (bool, optional): If True, we also require that N == M.
            Defaults to False.

    Raises:
        ValueError: If the arrays do not have compatible shapes, or are not
            hosted by the same library, with the same dtype on the same device.
    """
    if len(C.shape) != 2:
        raise ValueError(
            "The 'cost' matrix should be an array with 2 dimensions. "
            f"Instead, we received an array of shape {tuple(C.shape)}."
        )

    N, M = C.shape[0], C.shape[1]

    if len(a.shape) != 1 or a.shape[0] != N:
        raise ValueError(
            f"The dimension of 'cost' ({N},{M}) "
            f"is not compatible with that of the first marginal 'a' {tuple(a.shape)}. "
            f"We expect a vector of shape ({N},)."
        )

    if len(b.shape) != 1 or b.shape[0] != M:
        raise ValueError(
            f"The dimension of 'cost' ({N},{M}) "
            f"is not compatible with that of the second marginal 'b' {tuple(b.shape)}. "
            f"We expect a vector of shape ({M},)."
        )

    if square and N != M:
        raise ValueError(
            "This solver only supports square cost matrices, "
            f"but received a 'cost' matrix of shape ({N},{M}). "
            "To fix this error, pad the smallest distribution with zero weights "
            "and a large sentinel cost."
        )

    return ArrayProperties(
        N=N,
        M=M,
        dtype=check_dtype(a, b, C),
        device=check_device(a, b, C),
        library=check_library(a, b, C),
    )


def check_nonnegative(a, b):
    """Raises an error if one of the two marginals has negative values."""
    if bk.any(a < 0):
        raise ValueError(
            "The first marginal 'a' contains negative values. "
            "The OT solvers require that a >= 0."
        )

    if bk.any(b < 0):
        raise ValueError(
            "The second marginal 'b' contains negative values. "
            "The OT solvers require that b >= 0."
        )


def check_marginals(sum_a, sum_b, rtol=1e-3):
    """Raises an error if two total masses do not coincide.

    Args:
        sum_a (float): Total mass of the first marginal, >= 0.
        sum_b (float): Total mass of the second marginal, >= 0.
        rtol (float, optional): Relative tolerance. Defaults to 1e-3.

    Raises:
        ValueError: If sum_a and sum_b are too different from each other,
            we let the user know that we cannot use a balanced OT solver.
    """
    total = sum_a + sum_b

    if total > 0 and abs(sum_a - sum_b) / total > rtol:
        raise ValueError(
            "The two arrays of marginal weights 'a' and 'b' "
            f"do not sum up to the same value ({sum_a} != {sum_b}). "
            "As a consequence, the balanced OT problem is not feasible. "
            "To fix this error, please normalize the two marginals "
            "to make sure that their weights sum up to compatible values "
            "(= 1 for probability distributions)."
        )


def check_points(sources, targets, N):
    """Checks that the source and target coordinates are two (N,2) arrays."""
    for name, x in [("sources", sources), ("targets", targets)]:
        if len(x.shape) != 2 or x.shape[0] != N or x.shape[1] != 2:
            raise ValueError(
                f"The '{name}' coordinates should be an array of shape ({N},2), "
                f"but we received an array of shape {tuple(x.shape)}. "
                "This solver only supports 2D point clouds with one point per weight."
            )
    check_library(sources, targets)
