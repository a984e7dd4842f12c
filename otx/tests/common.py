import numpy as np
from typing import NamedTuple, Any

try:
    import torch

    torch_from_numpy = torch.from_numpy
    torch_available = True
    cuda_available = torch.cuda.is_available()

except ImportError:
    torch_from_numpy = None
    torch_available = False
    cuda_available = False


class ExpectedOTResult(NamedTuple):
    """Stores the expected results of an OT solver following the OTResult API."""

    dist: Any = None
    plan: Any = None
    marginal_a: Any = None
    marginal_b: Any = None


def cast(x, *, library="numpy", dtype="float64", device="cpu"):
    """Casts a NumPy array, or a dict of NumPy arrays, to the expected Tensor type.

    Python scalars, strings and ExpectedOTResult objects are returned unchanged:
    expected values are always compared as NumPy arrays.
    """

    if library == "torch" and not torch_available:
        raise ImportError(
            "Could not load PyTorch, so could not create a test case "
            "with torch Tensors."
        )

    if not cuda_available:
        device = "cpu"

    if isinstance(x, np.ndarray):
        x = x.astype(dtype)
        if library == "torch":
            x = torch_from_numpy(x).to(device=device)
        return x

    elif isinstance(x, dict):
        return {
            key: cast(val, library=library, dtype=dtype, device=device)
            for (key, val) in x.items()
        }

    else:
        return x


def lattice(n):
    """Returns the (n*n, 2) centers of a regular n-by-n grid on the unit square."""
    t = (np.arange(n) + 0.5) / n
    X, Y = np.meshgrid(t, t, indexing="ij")
    return np.stack((X.ravel(), Y.ravel()), axis=1)


def uniform(N):
    """Returns the uniform probability vector of size N."""
    return np.full(N, 1.0 / N)
