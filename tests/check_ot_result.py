import numpy as np
import pytest_check as check

from otx import backends as bk


def check_approx_equal(a, b, atol=1e-3, name=""):
    """Checks that two numerical arrays are nearly the same.

    If b is None, we skip the checks.
    """

    if b is not None:
        a = np.asarray(bk.to_numpy(a)) if not np.isscalar(a) else np.asarray(a)
        b = np.asarray(b)

        # First of all, our arrays should have the same shape:
        check.equal(a.shape, b.shape, f"The shape of `{name}` is not correct.")

        # Also check values, including +-inf and NaN:
        check.is_true(
            np.allclose(a, b, atol=atol, equal_nan=True),
            f"The values of `{name}` are not correct: {a} != {b}.",
        )


def check_ot_result(us, gt, atol=1e-3):
    """Compares an OTResult with an ExpectedOTResult."""

    # Check that the value is correct:
    check_approx_equal(us.dist, gt.dist, atol=atol, name="dist")

    # Check that the transport plans are correct:
    check_approx_equal(us.plan, gt.plan, atol=atol, name="plan")

    # Check that the two marginals are correct:
    check_approx_equal(us.marginal_a, gt.marginal_a, atol=atol, name="marginal_a")
    check_approx_equal(us.marginal_b, gt.marginal_b, atol=atol, name="marginal_b")


def check_valid_dist(us):
    """Checks that a transport cost is a finite, non-negative Python float."""
    check.is_instance(us.dist, float)
    check.is_true(np.isfinite(us.dist), f"The cost {us.dist} is not finite.")
    check.greater_equal(us.dist, 0.0)
