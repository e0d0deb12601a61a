# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
poweriter
=========

Power iteration for the dominant eigenvalue of a square linear operator,
with interchangeable dense, sparse and coordinate-list operators.

Public API
~~~~~~~~~~
- Iterative methods
    - `estimate_dominant_eigenvalue`, `power_iterate`
- Operators
    - `Operator`, `DenseMatrix`, `SparseMatrix`, `CooMatrix`
- Errors
    - `InvalidOperator`, `DegenerateVector`, `NonConvergence`

Everything else lives in sub-modules and is **not** considered part of the
stable interface.

Example
-------
>>> import numpy as np, poweriter as pi
>>> A = pi.DenseMatrix(np.diag([5.0, 2.0, -1.0]))
>>> round(pi.estimate_dominant_eigenvalue(A, seed=0), 4)
5.0
"""

from importlib.metadata import version as _pkg_version

# ---------------------------------------------------------------------
# Re-export the high-level functions users are expected to call.
# Each of these names is implemented in one of the internal sub-modules.
# ---------------------------------------------------------------------
from .eigen import (
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_TOLERANCE,
    PowerIterationResult,
    estimate_dominant_eigenvalue,
    power_iterate,
)
from .errors import (
    DegenerateVector,
    InvalidOperator,
    NonConvergence,
    PowerIterationError,
)
from .operators import CooMatrix, DenseMatrix, Operator, SparseMatrix
from .utils import normalize, randomize

__all__ = [
    "estimate_dominant_eigenvalue",
    "power_iterate",
    "PowerIterationResult",
    "DEFAULT_MAX_ITERATIONS",
    "DEFAULT_TOLERANCE",
    "Operator",
    "DenseMatrix",
    "SparseMatrix",
    "CooMatrix",
    "PowerIterationError",
    "InvalidOperator",
    "DegenerateVector",
    "NonConvergence",
    "randomize",
    "normalize",
]

# ---------------------------------------------------------------------
# Version string (helps “pip show poweriter”, Sphinx, etc.)
# ---------------------------------------------------------------------
try:  # installed via pip / build backend
    __version__ = _pkg_version(__name__)
except Exception:  # running from a checkout
    __version__ = "0.0.0.dev0"

# ---------------------------------------------------------------------
# Optional: lightweight default logging config so users see warnings
# only if they deliberately enable them.
# ---------------------------------------------------------------------
import logging as _logging

_logging.getLogger(__name__).addHandler(_logging.NullHandler())
