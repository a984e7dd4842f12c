import numpy as np

from ..typing import RealTensor


def device(a: RealTensor):
    return "cpu"


def dtype(a: RealTensor):
    return a.dtype


def abs(a: RealTensor) -> RealTensor:
    return np.abs(a)


def exp(a: RealTensor) -> RealTensor:
    return np.exp(a)


def log(a: RealTensor) -> RealTensor:
    return np.log(a)


def sqrt(a: RealTensor) -> RealTensor:
    return np.sqrt(a)


def any(x, axis=None, keepdims=False):
    return np.any(x, axis=axis, keepdims=keepdims)


def sum(x, axis=None, keepdims=False):
    return np.sum(x, axis=axis, keepdims=keepdims)


def mean(x, axis=None, keepdims=False):
    return np.mean(x, axis=axis, keepdims=keepdims)


def amin(x, axis=None):
    return np.amin(x, axis)


def amax(x, axis=None):
    return np.amax(x, axis)


def where(condition, x, value):
    return np.where(condition, x, value)


def sort(x, axis=-1):
    return np.sort(x, axis=axis)


def ones_like(x):
    return np.ones_like(x)


def zeros_like(x):
    return np.zeros_like(x)


def to_numpy(x):
    return x


def from_numpy(x, like):
    """Returns a NumPy array x on the same "device" as `like`, keeping integer and boolean dtypes."""
    if x.dtype.kind == "f" and like.dtype.kind == "f":
        return x.astype(like.dtype)
    return x
