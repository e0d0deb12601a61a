# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging

import numpy as np
import pytest

from poweriter.__main__ import build_example
from poweriter.eigen import estimate_dominant_eigenvalue, power_iterate
from poweriter.errors import DegenerateVector, InvalidOperator, NonConvergence
from poweriter.operators import CooMatrix, DenseMatrix, Operator, SparseMatrix


class CountingOperator(Operator):
    """Wraps a dense matrix and counts multiply calls."""

    def __init__(self, A):
        self.A = np.asarray(A, dtype=float)
        self.calls = 0

    def rows(self):
        return self.A.shape[0]

    def cols(self):
        return self.A.shape[1]

    def _mult(self, x):
        self.calls += 1
        return self.A @ x


def _reference_dominant(A):
    eigvals = np.linalg.eigvals(A)
    return eigvals[np.argmax(np.abs(eigvals))].real


def test_bowtie_example_matches_eigendecomposition():
    coo = build_example()
    A = coo.to_dense().to_array()
    lam_true = np.max(np.linalg.eigvalsh(A))
    assert np.isclose(lam_true, 5.0)

    lam = estimate_dominant_eigenvalue(coo.to_dense(), 100, 1e-6, seed=0)
    assert abs(lam - lam_true) < 1e-4


def test_representations_agree():
    coo = build_example()
    kinds = [coo.to_dense(), coo.to_sparse(), coo]
    estimates = [estimate_dominant_eigenvalue(op, 1000, 1e-6, seed=3) for op in kinds]
    assert np.allclose(estimates, estimates[0], atol=1e-4)

    # different seeds still land on the same eigenvalue
    estimates = [
        estimate_dominant_eigenvalue(op, 1000, 1e-6, seed=s)
        for s, op in enumerate(kinds)
    ]
    assert np.allclose(estimates, 5.0, atol=1e-4)


def test_power_iteration_sym_psd():
    rng = np.random.default_rng(1)
    M = rng.normal(size=(40, 40))
    A = M.T @ M  # symmetric PSD
    result = power_iterate(DenseMatrix(A), max_iterations=5000, tolerance=1e-12, seed=1)
    lam_true = np.max(np.linalg.eigvalsh(A))
    assert np.isclose(result.eigenvalue, lam_true, rtol=1e-6)
    assert np.isclose(np.linalg.norm(result.eigenvector), 1.0)
    resid = np.linalg.norm(A @ result.eigenvector - lam_true * result.eigenvector)
    assert resid < 1e-3 * lam_true


def test_power_iteration_diagonal():
    A = np.diag([5.0, 2.0, -1.0])
    result = power_iterate(DenseMatrix(A), max_iterations=1000, tolerance=1e-12, seed=0)
    assert np.isclose(result.eigenvalue, 5.0, atol=1e-9)
    # eigenvector should align with e1 (up to sign)
    e1 = np.array([1.0, 0.0, 0.0])
    assert np.allclose(np.abs(result.eigenvector), e1, atol=1e-5)


def test_negative_dominant_eigenvalue():
    A = np.diag([-6.0, 2.0, 1.0])
    lam = estimate_dominant_eigenvalue(DenseMatrix(A), 1000, 1e-10, seed=4)
    assert np.isclose(lam, _reference_dominant(A), atol=1e-6)


@pytest.mark.parametrize("n", [5, 20, 60])
def test_random_spd_sparse(n):
    rng = np.random.default_rng(n)
    M = rng.normal(size=(n, n))
    A = M @ M.T + n * np.eye(n)
    lam = estimate_dominant_eigenvalue(SparseMatrix(A), 10000, 1e-12, seed=n)
    assert np.isclose(lam, np.max(np.linalg.eigvalsh(A)), rtol=1e-6)


def test_non_square_raises_before_multiply():
    op = CountingOperator(np.ones((3, 4)))
    with pytest.raises(InvalidOperator) as excinfo:
        estimate_dominant_eigenvalue(op)
    assert excinfo.value.shape == (3, 4)
    assert op.calls == 0
    # also a ValueError, like the rest of the toolkit
    with pytest.raises(ValueError):
        power_iterate(CooMatrix(3, 4))


def test_zero_iterations_returns_seed_estimate():
    op = CountingOperator(np.diag([3.0, 1.0]))
    result = power_iterate(op, max_iterations=0)
    assert result.eigenvalue == 1.0
    assert result.iterations == 0
    assert not result.converged
    assert result.history.shape == (0,)
    assert op.calls == 0


def test_zero_operator_is_degenerate():
    with pytest.raises(DegenerateVector) as excinfo:
        estimate_dominant_eigenvalue(CooMatrix(4, 4))
    assert excinfo.value.iteration == 0


def test_nilpotent_operator_is_degenerate():
    # A^2 = 0, so the second multiply yields the zero vector
    A = DenseMatrix([[0.0, 1.0], [0.0, 0.0]])
    with pytest.raises(DegenerateVector) as excinfo:
        estimate_dominant_eigenvalue(A, seed=0)
    assert excinfo.value.iteration == 1


def test_silent_nonconvergence_returns_last_estimate(caplog):
    # eigenvalue ratio 0.99 is far too slow for 25 passes
    A = DenseMatrix(np.diag([1.0, 0.99, 0.5]))
    with caplog.at_level(logging.WARNING, logger="poweriter.eigen"):
        result = power_iterate(A, max_iterations=25, tolerance=1e-12, seed=7)
    assert not result.converged
    assert result.iterations == 25
    assert result.eigenvalue == result.history[-1]
    assert "did not converge" in caplog.text

    lam = estimate_dominant_eigenvalue(A, max_iterations=25, tolerance=1e-12, seed=7)
    assert lam == result.eigenvalue


def test_nonconvergence_can_raise():
    A = DenseMatrix(np.diag([1.0, 0.99]))
    with pytest.raises(NonConvergence) as excinfo:
        power_iterate(A, max_iterations=3, tolerance=1e-12, seed=0, raise_on_nonconvergence=True)
    assert excinfo.value.result.iterations == 3
    assert not excinfo.value.result.converged


def test_wrapper_matches_result():
    A = DenseMatrix(np.diag([4.0, 1.0, 0.5]))
    result = power_iterate(A, 200, 1e-8, seed=11)
    lam = estimate_dominant_eigenvalue(A, 200, 1e-8, seed=11)
    assert lam == result.eigenvalue


def test_returned_estimate_is_last_pass_rayleigh_quotient():
    A = DenseMatrix(np.diag([3.0, 1.0]))
    result = power_iterate(A, 500, 1e-6, seed=2)
    assert result.converged
    assert result.eigenvalue == result.history[-1]
    # the returned value is not recomputed from the swapped-in vector
    v = result.eigenvector
    assert result.iterations == len(result.history)
    assert abs(result.eigenvalue - v @ A.multiply(v)) < 1e-5


def test_callback_and_history():
    seen = []
    A = DenseMatrix(np.diag([3.0, 1.0, 0.1]))
    result = power_iterate(
        A, 100, 1e-8, seed=5, callback=lambda i, est, rate: seen.append((i, est, rate))
    )
    assert [i for i, _, _ in seen] == list(range(result.iterations))
    np.testing.assert_allclose([est for _, est, _ in seen], result.history)
    assert seen[-1][2] < 1e-8
    assert all(rate >= 1e-8 for _, _, rate in seen[:-1])


def test_verbose_logs_each_iteration(caplog):
    A = DenseMatrix(np.diag([3.0, 1.0]))
    with caplog.at_level(logging.INFO, logger="poweriter.eigen"):
        result = power_iterate(A, 100, 1e-6, verbose=True, seed=0)
    lines = [r.getMessage() for r in caplog.records if r.levelno == logging.INFO]
    assert len(lines) == result.iterations
    assert lines[0].startswith("00: estimate: ")
    assert " rate: " in lines[-1]


def test_quiet_by_default(caplog):
    A = DenseMatrix(np.diag([3.0, 1.0]))
    with caplog.at_level(logging.INFO, logger="poweriter.eigen"):
        power_iterate(A, 100, 1e-6, seed=0)
    assert not [r for r in caplog.records if r.levelno == logging.INFO]


def test_seed_reproducible():
    A = DenseMatrix(np.diag([3.0, 2.5, 1.0]))
    r1 = power_iterate(A, 7, 1e-12, seed=123)
    r2 = power_iterate(A, 7, 1e-12, seed=123)
    np.testing.assert_array_equal(r1.history, r2.history)


@pytest.mark.parametrize(
    "kwargs",
    [{"max_iterations": -1}, {"max_iterations": 2.5}, {"tolerance": 0.0}, {"tolerance": -1e-6}],
)
def test_bad_arguments(kwargs):
    with pytest.raises((ValueError, TypeError)):
        power_iterate(DenseMatrix(np.eye(2)), **kwargs)
