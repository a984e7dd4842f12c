from .common import pick, get_library, torch_available
from . import numpy as bk_numpy

if torch_available:
    from . import torch as bk_torch
else:
    bk_torch = bk_numpy


# Low-level attributes:
library = get_library
device = pick(numpy=bk_numpy.device, torch=bk_torch.device)
dtype = pick(numpy=bk_numpy.dtype, torch=bk_torch.dtype)

# Simple mathematical functions:
abs = pick(numpy=bk_numpy.abs, torch=bk_torch.abs)
exp = pick(numpy=bk_numpy.exp, torch=bk_torch.exp)
log = pick(numpy=bk_numpy.log, torch=bk_torch.log)
sqrt = pick(numpy=bk_numpy.sqrt, torch=bk_torch.sqrt)

# Array manipulations and reductions:
any = pick(numpy=bk_numpy.any, torch=bk_torch.any)
sum = pick(numpy=bk_numpy.sum, torch=bk_torch.sum)
mean = pick(numpy=bk_numpy.mean, torch=bk_torch.mean)
amin = pick(numpy=bk_numpy.amin, torch=bk_torch.amin)
amax = pick(numpy=bk_numpy.amax, torch=bk_torch.amax)
sort = pick(numpy=bk_numpy.sort, torch=bk_torch.sort)

# The mask comes first, but the values decide the library:
where = pick(numpy=bk_numpy.where, torch=bk_torch.where, main_arg=1, arg_name="x")

# Array creation:
ones_like = pick(numpy=bk_numpy.ones_like, torch=bk_torch.ones_like)
zeros_like = pick(numpy=bk_numpy.zeros_like, torch=bk_torch.zeros_like)

# Conversion between NumPy arrays, PyTorch tensors...:
to_numpy = pick(numpy=bk_numpy.to_numpy, torch=bk_torch.to_numpy)
# Index arrays are built with NumPy, then moved next to the data they index:
from_numpy = pick(
    numpy=bk_numpy.from_numpy, torch=bk_torch.from_numpy, main_arg=1, arg_name="like"
)
