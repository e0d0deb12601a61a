# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

from typing import Optional

import numpy as np

from .errors import DegenerateVector


def randomize(
    n: int, low: float = -1.0, high: float = 1.0, seed=None
) -> np.ndarray:
    """
    Return a length-n float64 vector of independent uniform samples
    in [low, high).

    `seed` is anything `np.random.default_rng` accepts, including an
    existing Generator.
    """
    if n < 1:
        raise ValueError("randomize() needs n >= 1.")
    rng = np.random.default_rng(seed)
    return rng.uniform(low, high, size=n)


def normalize(v: np.ndarray, iteration: Optional[int] = None) -> np.ndarray:
    """
    Scale v in place to unit Euclidean norm and return it.

    Raises DegenerateVector if v is exactly zero (or not finite).
    """
    norm = np.linalg.norm(v)
    if norm == 0.0 or not np.isfinite(norm):
        raise DegenerateVector(iteration)
    v /= norm
    return v

