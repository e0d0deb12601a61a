# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Time power iteration on dense, sparse and coo representations of the
same random symmetric matrix and compare against numpy.linalg.eigvalsh.
"""

import time
from typing import Iterable, Optional

import numpy as np
import pandas as pd

from .eigen import estimate_dominant_eigenvalue
from .operators import CooMatrix

REPEATS = 5  # median of 5 runs leads to stable numbers
SIZES = [50, 200, 500]
DENSITY = 0.05


def wall(f, *args, **kwargs):
    t0 = time.perf_counter()
    f(*args, **kwargs)
    return time.perf_counter() - t0


def random_symmetric_coo(n: int, density: float = DENSITY, seed=None) -> CooMatrix:
    """
    Random sparse symmetric matrix with a strictly dominant positive
    eigenvalue, assembled through add_sym.
    """
    rng = np.random.default_rng(seed)
    coo = CooMatrix(n, n)
    # off-diagonal part has spectral norm ~ 1.2, well below the 4.0 spike
    coo.add_sym(0, 0, 4.0)
    for i in range(1, n):
        coo.add_sym(i, i, 1.0)
    scale = 1.0 / np.sqrt(density * n + 1.0)
    n_off = int(density * n * (n - 1) / 2)
    for _ in range(n_off):
        i, j = rng.integers(0, n, size=2)
        if i != j:
            coo.add_sym(int(i), int(j), scale * rng.uniform(-1.0, 1.0))
    return coo


def run_benchmark(
    sizes: Iterable[int] = SIZES,
    repeats: int = REPEATS,
    max_iterations: int = 1000,
    tolerance: float = 1e-10,
    seed: Optional[int] = 0,
) -> pd.DataFrame:
    """
    Returns
    -------
    DataFrame with columns kind, size, sec, estimate, abs_err.
    """
    records = []
    for n in sizes:
        coo = random_symmetric_coo(n, seed=seed)
        dense = coo.to_dense()
        sparse = coo.to_sparse()
        eigvals = np.linalg.eigvalsh(dense.to_array())
        lam_ref = eigvals[np.argmax(np.abs(eigvals))]

        for kind, op in (("dense", dense), ("sparse", sparse), ("coo", coo)):
            t = min(
                wall(
                    estimate_dominant_eigenvalue,
                    op,
                    max_iterations,
                    tolerance,
                    seed=seed,
                )
                for _ in range(repeats)
            )
            lam = estimate_dominant_eigenvalue(op, max_iterations, tolerance, seed=seed)
            records.append((kind, n, t, lam, abs(lam - lam_ref)))

    return pd.DataFrame(records, columns=["kind", "size", "sec", "estimate", "abs_err"])
