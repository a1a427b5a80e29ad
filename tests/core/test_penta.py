"""
Tests for penta: banded Gaussian elimination for pentadiagonal systems.

The primary law is the residual check: substituting the solution back into
the original bands reproduces the right-hand side.  scipy.linalg.solve_banded
serves as an independent reference.

Tolerances:
    residual / reference : rtol=1e-10, atol=1e-12
"""
import logging

import numpy as np
import pytest
from scipy.linalg import solve_banded

from pentaspline.core.errors import (
    InvalidInputSize,
    SingularSystem,
    SplineError,
    SplineErrorCode,
)
from pentaspline.core.logger import DEBUG3
from pentaspline.core.penta import penta, penta_matvec

RNG = np.random.default_rng(11)

RTOL = 1e-10
ATOL = 1e-12


def _example_bands():
    a1 = np.array([0.0, 0.0, 1.0, 1.0, 1.0])
    a2 = np.array([0.0, 1.0, 1.0, 1.0, 1.0])
    a3 = np.array([2.0, 2.0, 2.0, 2.0, 2.0])
    a4 = np.array([1.0, 1.0, 1.0, 1.0, 0.0])
    a5 = np.array([1.0, 1.0, 1.0, 0.0, 0.0])
    b = np.array([5.0, 5.0, 5.0, 5.0, 5.0])
    return a1, a2, a3, a4, a5, b


def _random_dominant_bands(n):
    a1, a2, a4, a5 = (RNG.uniform(-1.0, 1.0, n) for _ in range(4))
    a1[:2] = 0.0
    a2[0] = 0.0
    a4[-1] = 0.0
    a5[-2:] = 0.0
    a3 = np.abs(a1) + np.abs(a2) + np.abs(a4) + np.abs(a5) + RNG.uniform(0.5, 2.0, n)
    a3 *= RNG.choice([-1.0, 1.0], n)
    b = RNG.normal(size=n)
    return a1, a2, a3, a4, a5, b


def _to_scipy_banded(a1, a2, a3, a4, a5):
    n = a3.size
    ab = np.zeros((5, n))
    ab[0, 2:] = a5[:-2]
    ab[1, 1:] = a4[:-1]
    ab[2] = a3
    ab[3, :-1] = a2[1:]
    ab[4, :-2] = a1[2:]
    return ab


def _dense(a1, a2, a3, a4, a5):
    n = a3.size
    A = np.diag(a3)
    A += np.diag(a2[1:], -1) + np.diag(a4[:-1], 1)
    A += np.diag(a1[2:], -2) + np.diag(a5[:-2], 2)
    return A


# ===================================================================
# Worked example
# ===================================================================

class TestExampleSystem:
    def test_solution(self):
        x = penta(*_example_bands())
        np.testing.assert_allclose(x, [2.5, 1.25, -1.25, 1.25, 2.5], rtol=RTOL, atol=ATOL)

    def test_residual(self):
        original = [band.copy() for band in _example_bands()]
        x = penta(*_example_bands())
        np.testing.assert_allclose(penta_matvec(*original[:5], x), original[5], rtol=RTOL, atol=ATOL)

    def test_returns_fresh_array(self):
        bands = _example_bands()
        x = penta(*bands)
        assert all(x is not band for band in bands)
        assert x.shape == (5,)

    def test_ndarray_inputs_used_as_working_storage(self):
        bands = _example_bands()
        b_before = bands[5].copy()
        penta(*bands)
        assert not np.array_equal(bands[5], b_before)

    def test_list_inputs_untouched(self):
        bands = [band.tolist() for band in _example_bands()]
        snapshot = [list(band) for band in bands]
        penta(*bands)
        assert bands == snapshot

    def test_readonly_inputs(self):
        bands = _example_bands()
        for band in bands:
            band.flags.writeable = False
        x = penta(*bands)
        np.testing.assert_allclose(x, [2.5, 1.25, -1.25, 1.25, 2.5], rtol=RTOL, atol=ATOL)


# ===================================================================
# General systems
# ===================================================================

class TestRandomSystems:
    @pytest.mark.parametrize("n", [2, 3, 4, 5, 17, 200])
    def test_matches_scipy(self, n):
        a1, a2, a3, a4, a5, b = _random_dominant_bands(n)
        expected = solve_banded((2, 2), _to_scipy_banded(a1, a2, a3, a4, a5), b)
        x = penta(a1.copy(), a2.copy(), a3.copy(), a4.copy(), a5.copy(), b.copy())
        np.testing.assert_allclose(x, expected, rtol=RTOL, atol=ATOL)

    @pytest.mark.parametrize("n", [3, 8, 64])
    def test_residual(self, n):
        bands = _random_dominant_bands(n)
        x = penta(*[band.copy() for band in bands])
        np.testing.assert_allclose(penta_matvec(*bands[:5], x), bands[5], rtol=RTOL, atol=1e-10)

    def test_two_by_two(self):
        # [[2, 1], [1, 3]] x = [3, 4]  ->  x = [1, 1]
        x = penta([0.0, 0.0], [0.0, 1.0], [2.0, 3.0], [1.0, 0.0], [0.0, 0.0], [3.0, 4.0])
        np.testing.assert_allclose(x, [1.0, 1.0], rtol=RTOL, atol=ATOL)

    def test_out_of_range_entries_ignored(self):
        clean = _random_dominant_bands(9)
        noisy = [band.copy() for band in clean]
        noisy[0][:2] = 99.0      # a1[0], a1[1]
        noisy[1][0] = -42.0      # a2[0]
        noisy[3][-1] = 13.0      # a4[n-1]
        noisy[4][-2:] = 7.0      # a5[n-2], a5[n-1]
        x_clean = penta(*[band.copy() for band in clean])
        x_noisy = penta(*[band.copy() for band in noisy])
        np.testing.assert_array_equal(x_noisy, x_clean)


# ===================================================================
# penta_matvec
# ===================================================================

class TestMatvec:
    def test_matches_dense_product(self):
        bands = _random_dominant_bands(12)[:5]
        x = RNG.normal(size=12)
        np.testing.assert_allclose(penta_matvec(*bands, x), _dense(*bands) @ x, rtol=RTOL, atol=ATOL)

    def test_length_mismatch(self):
        a = np.ones(4)
        with pytest.raises(InvalidInputSize):
            penta_matvec(a, a, a, a, a, np.ones(5))


# ===================================================================
# Failure conditions
# ===================================================================

class TestPentaErrors:
    def test_zero_diagonal(self):
        z = np.zeros(4)
        with pytest.raises(SingularSystem) as excinfo:
            penta(z.copy(), z.copy(), z.copy(), z.copy(), z.copy(), np.ones(4))
        assert excinfo.value.row == 0
        assert excinfo.value.code == SplineErrorCode.SINGULAR

    def test_rank_deficient(self):
        # [[1, 1], [1, 1]]: elimination leaves a zero in the last pivot
        with pytest.raises(SingularSystem) as excinfo:
            penta([0.0, 0.0], [0.0, 1.0], [1.0, 1.0], [1.0, 0.0], [0.0, 0.0], [1.0, 1.0])
        assert excinfo.value.row == 1
        assert excinfo.value.pivot == 0.0

    def test_singular_is_catchable_as_builtin(self):
        z = np.zeros(3)
        with pytest.raises(ZeroDivisionError):
            penta(z, z, z, z, z, np.ones(3))
        with pytest.raises(SplineError):
            penta(z, z, z, z, z, np.ones(3))

    def test_nan_pivot(self):
        a3 = np.array([np.nan, 1.0, 1.0])
        z = np.zeros(3)
        with pytest.raises(SingularSystem):
            penta(z.copy(), z.copy(), a3, z.copy(), z.copy(), np.ones(3))

    def test_custom_pivot_tolerance(self):
        z = np.zeros(3)
        a3 = np.array([1e-3, 1.0, 1.0])
        x = penta(z.copy(), z.copy(), a3.copy(), z.copy(), z.copy(), np.ones(3))
        np.testing.assert_allclose(x, [1e3, 1.0, 1.0])
        with pytest.raises(SingularSystem):
            penta(z.copy(), z.copy(), a3.copy(), z.copy(), z.copy(), np.ones(3), pivot_tol=1e-2)

    def test_length_mismatch(self):
        a = np.ones(5)
        with pytest.raises(InvalidInputSize):
            penta(a, a, a, a, np.ones(4), a)

    def test_single_row(self):
        a = np.ones(1)
        with pytest.raises(InvalidInputSize):
            penta(a, a, a, a, a, a)

    def test_two_dimensional_band(self):
        a = np.ones(4)
        with pytest.raises(InvalidInputSize):
            penta(a, a, np.ones((2, 2)), a, a, a)

    def test_singular_pivot_logged(self, caplog):
        z = np.zeros(3)
        with caplog.at_level(logging.ERROR, logger="pentaspline"):
            with pytest.raises(SingularSystem):
                penta(z, z, z, z, z, np.ones(3))
        assert any("pivot" in r.getMessage() for r in caplog.records)

    def test_pivots_traced_at_debug3(self, caplog):
        with caplog.at_level(DEBUG3, logger="pentaspline"):
            penta(*_example_bands())
        assert any(r.levelname == "DEBUG3" for r in caplog.records)
