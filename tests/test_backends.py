import numpy as np

import pytest
import pytest_check as check

from otx import backends as bk
from otx.tests.common import cast, torch_available

libraries = ["numpy"] + (["torch"] if torch_available else [])


@pytest.mark.parametrize("library", libraries)
def test_from_numpy_keyword_and_positional(library):
    """The array that decides the library may be passed by position or by keyword."""
    like = cast(np.zeros(3), library=library)
    x = np.arange(3, dtype=np.float32)

    by_keyword = bk.from_numpy(x, like=like)
    by_position = bk.from_numpy(x, like)

    for out in [by_keyword, by_position]:
        check.equal(bk.library(out), library)
        check.equal(bk.dtype(out), bk.dtype(like))
        check.equal(bk.to_numpy(out).tolist(), [0.0, 1.0, 2.0])


@pytest.mark.parametrize("library", libraries)
def test_from_numpy_keeps_index_dtypes(library):
    like = cast(np.zeros(3), library=library)

    indices = bk.from_numpy(np.array([[2, 0], [1, 1]]), like=like)
    mask = bk.from_numpy(np.array([True, False]), like=like)

    check.equal(bk.to_numpy(indices).dtype.kind, "i")
    check.equal(bk.to_numpy(mask).dtype, np.bool_)


@pytest.mark.parametrize("library", libraries)
def test_where_keyword(library):
    x = cast(np.array([1.0, 2.0, 3.0]), library=library)
    cond = x > 1.5

    out = bk.where(cond, x=x, value=0.0)
    check.equal(bk.to_numpy(out).tolist(), [0.0, 2.0, 3.0])


def test_missing_dispatch_argument():
    with pytest.raises(TypeError, match="like"):
        bk.from_numpy(np.zeros(3))


def test_unsupported_type():
    with pytest.raises(ValueError, match="NumPy array or a PyTorch tensor"):
        bk.from_numpy(np.zeros(3), like=[0.0, 1.0])
