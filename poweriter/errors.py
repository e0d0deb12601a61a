# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Exceptions raised by the power-iteration routines.
"""

from typing import Optional, Tuple


class PowerIterationError(Exception):
    """Base class for every error raised by poweriter."""


class InvalidOperator(PowerIterationError, ValueError):
    """The operator is not square, so it has no eigenvalues."""

    def __init__(self, shape: Tuple[int, int]):
        self.shape = tuple(shape)
        super().__init__(
            f"Power iteration requires a square operator, got shape {self.shape}."
        )


class DegenerateVector(PowerIterationError, ArithmeticError):
    """The operator mapped the current iterate to the zero vector."""

    def __init__(self, iteration: Optional[int] = None):
        self.iteration = iteration
        where = "" if iteration is None else f" at iteration {iteration}"
        super().__init__(f"Cannot normalize a zero vector{where}.")


class NonConvergence(PowerIterationError, RuntimeError):
    """The iteration budget ran out before the tolerance was met."""

    def __init__(self, result):
        self.result = result
        super().__init__(
            f"No convergence after {result.iterations} iterations "
            f"(last estimate {result.eigenvalue:.8f})."
        )
