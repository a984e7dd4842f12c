import numpy as np

try:
    import torch as pt

    tensor = pt.Tensor
    torch_available = True
except ImportError:
    torch_available = False


def get_library(x):
    if isinstance(x, np.ndarray):
        return "numpy"
    elif torch_available and isinstance(x, tensor):
        return "torch"
    else:
        raise ValueError(
            "Expected a NumPy array or a PyTorch tensor, "
            f"but found {x} "
            f"of type {type(x)}."
        )


def pick(*, numpy, torch, main_arg=0, arg_name=None):
    """Dispatches on the library of the argument at position `main_arg`,
    which may also be passed as the keyword argument `arg_name`."""

    def out_fn(*args, **kwargs):
        if len(args) > main_arg:
            arg = args[main_arg]
        elif arg_name in kwargs:
            arg = kwargs[arg_name]
        else:
            raise TypeError(
                f"Missing argument '{arg_name}' (position {main_arg})."
            )
        if isinstance(arg, np.ndarray):
            return numpy(*args, **kwargs)
        elif torch_available and isinstance(arg, tensor):
            return torch(*args, **kwargs)
        else:
            raise ValueError(
                "Expected a NumPy array or a PyTorch tensor, "
                f"but found {arg} "
                f"of type {type(arg)}."
            )

    return out_fn
