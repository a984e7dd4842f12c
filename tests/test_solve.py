import logging

import numpy as np

import pytest
import pytest_check as check

import otx
from otx import solve, routines
from otx.tests import affine_copy
from otx.tests.common import uniform


@pytest.mark.parametrize("method", ["dense", "sparse", "grid", "sliced"])
def test_dispatch(method):
    """solve() forwards its arguments to the solver named `method`."""
    ex = affine_copy(N=25, eps=0.05, seed=0)
    coordinates = {}
    if method in ("grid", "sliced"):
        coordinates = {"sources": ex["sources"], "targets": ex["targets"]}

    us = solve(ex["C"], ex["a"], ex["b"], eps=ex["eps"], method=method, **coordinates)
    expected = routines[method](ex["a"], ex["b"], ex["C"], ex["eps"], **coordinates)

    check.equal(us.dist, expected.dist)


def test_forwards_options():
    ex = affine_copy(N=16, eps=0.1, seed=0)

    us = solve(ex["C"], ex["a"], ex["b"], eps=0.1, method="dense", max_iter=3, tol=0)
    check.equal(us.n_iter, 3)

    us = solve(ex["C"], ex["a"], ex["b"], eps=0.1, method="sparse", max_iter=7)
    check.equal(us.n_iter, 7)


def test_unknown_method():
    a = uniform(3)
    with pytest.raises(ValueError, match="Unknown OT solver 'auto'"):
        solve(np.zeros((3, 3)), a, a, eps=0.1, method="auto")


@pytest.mark.parametrize("method", ["grid", "sliced"])
def test_missing_coordinates(method):
    a = uniform(3)
    with pytest.raises(ValueError, match="sources"):
        solve(np.zeros((3, 3)), a, a, eps=0.1, method=method)


def test_debug_logging(caplog):
    """The solvers report their progress on the 'otx' loggers at the DEBUG level."""
    ex = affine_copy(N=16, eps=0.1, seed=0)

    with caplog.at_level(logging.DEBUG, logger="otx"):
        solve(ex["C"], ex["a"], ex["b"], eps=0.1, method="sparse")
        solve(ex["C"], ex["a"], ex["b"], eps=0.1, method="dense")

    names = {record.name for record in caplog.records}
    check.is_in("otx.solvers.sparse", names)
    check.is_in("otx.solvers.loop", names)
    check.is_in("otx.solvers.dense", names)


def test_public_api():
    for name in otx.__all__:
        check.is_true(hasattr(otx, name), f"otx.{name} is not defined.")
    check.equal(sorted(routines), ["dense", "grid", "sliced", "sparse"])
