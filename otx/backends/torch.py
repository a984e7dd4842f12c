import torch

from ..typing import RealTensor


def device(a: RealTensor):
    return a.device


def dtype(a: RealTensor):
    return a.dtype


def abs(a: RealTensor) -> RealTensor:
    return a.abs()


def exp(a: RealTensor) -> RealTensor:
    return a.exp()


def log(a: RealTensor) -> RealTensor:
    return a.log()


def sqrt(a: RealTensor) -> RealTensor:
    return a.sqrt()


def any(x, axis=None, keepdims=False):
    if axis is None:
        assert keepdims == False
        return x.any()
    else:
        return x.any(dim=axis, keepdim=keepdims)


def sum(x, axis=None, keepdims=False):
    if axis is None:
        return x.sum()
    return x.sum(dim=axis, keepdim=keepdims)


def mean(x, axis=None, keepdims=False):
    if axis is None:
        return x.mean()
    return x.mean(dim=axis, keepdim=keepdims)


def amin(x, axis=None):
    if axis is None:
        return torch.amin(x)
    return torch.amin(x, axis)


def amax(x, axis=None):
    if axis is None:
        return torch.amax(x)
    return torch.amax(x, axis)


def where(condition, x, value):
    if not isinstance(value, torch.Tensor):
        value = torch.full_like(x, value)
    return torch.where(condition, x, value)


def sort(x, axis=-1):
    return torch.sort(x, dim=axis).values


def ones_like(x):
    return torch.ones_like(x)


def zeros_like(x):
    return torch.zeros_like(x)


def to_numpy(x):
    return x.detach().cpu().numpy()


def from_numpy(x, like):
    """Returns a torch copy of the NumPy array x on the same device as `like`, keeping integer and boolean dtypes."""
    out = torch.from_numpy(x).to(device=like.device)
    if out.is_floating_point() and like.is_floating_point():
        out = out.to(dtype=like.dtype)
    return out
