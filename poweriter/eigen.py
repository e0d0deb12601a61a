# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from .errors import InvalidOperator, NonConvergence
from .operators import Operator
from .utils import normalize, randomize

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS: int = 1000
DEFAULT_TOLERANCE: float = 1e-6

# callback(iteration, estimate, rate)
IterationCallback = Callable[[int, float, float], None]


def _relative_change(estimate: float, previous: float) -> float:
    """|1 - estimate / previous|, with 0/0 read as no change."""
    if previous == 0.0:
        return 0.0 if estimate == 0.0 else np.inf
    return abs(1.0 - estimate / previous)


@dataclass(frozen=True)
class PowerIterationResult:
    """
    Outcome of one power-iteration run.

    Attributes:
        eigenvalue: Rayleigh quotient from the last completed pass
            (1.0 if no pass ran).
        eigenvector: Unit-norm iterate after the last pass, or the
            unnormalized seed vector if no pass ran.
        iterations: Number of operator applications performed.
        converged: True if the relative change dropped below tolerance.
        history: (iterations,) array of per-pass estimates.
    """

    eigenvalue: float
    eigenvector: np.ndarray
    iterations: int
    converged: bool
    history: np.ndarray


def power_iterate(
    operator: Operator,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    tolerance: float = DEFAULT_TOLERANCE,
    verbose: bool = False,
    *,
    seed=None,
    callback: Optional[IterationCallback] = None,
    raise_on_nonconvergence: bool = False,
) -> PowerIterationResult:
    """
    Estimate the dominant eigenvalue (by magnitude) of a square operator
    using Power Iteration.

    Each pass computes the Rayleigh quotient of the current iterate,
    then normalizes A v into the next iterate. Stops when
    |1 - estimate / previous_estimate| < `tolerance` or after
    `max_iterations` passes.

    Parameters
    ----------
    operator : Operator
        Square linear map (dense, sparse, coo or any Operator subclass).
    max_iterations : int
        Maximum number of passes; 0 returns the seed estimate 1.0.
    tolerance : float
        Convergence threshold on the relative change of the estimate.
    verbose : bool
        If True, log every pass at INFO level.
    seed : int, Generator or None
        Seed for the random starting vector.
    callback : callable or None
        Called as callback(iteration, estimate, rate) after every pass.
    raise_on_nonconvergence : bool
        If True, raise NonConvergence when the budget runs out.

    Returns
    -------
    PowerIterationResult

    Raises
    ------
    InvalidOperator
        If the operator is not square.
    DegenerateVector
        If the operator maps the iterate to the zero vector.
    """
    if not operator.is_square():
        raise InvalidOperator(operator.shape)
    if isinstance(max_iterations, bool) or not isinstance(
        max_iterations, (int, np.integer)
    ):
        raise TypeError("max_iterations must be an integer.")
    if max_iterations < 0:
        raise ValueError("max_iterations must be non-negative.")
    if not tolerance > 0:
        raise ValueError("tolerance must be positive.")

    n = operator.rows()
    current = randomize(n, seed=seed)

    estimate = 1.0
    previous_estimate = 1.0
    converged = False
    history = []

    iteration = 0
    while iteration < max_iterations:
        nxt = operator.multiply(current)

        # Rayleigh quotient of the pre-multiplication vector
        estimate = float((current @ nxt) / (current @ current))

        normalize(nxt, iteration)
        current, nxt = nxt, current

        rate = _relative_change(estimate, previous_estimate)
        history.append(estimate)

        if verbose:
            logger.info("%.2d: estimate: %.8f rate: %.2e", iteration, estimate, rate)
        if callback is not None:
            callback(iteration, estimate, rate)

        iteration += 1

        if rate < tolerance:
            converged = True
            break

        previous_estimate = estimate

    result = PowerIterationResult(
        eigenvalue=estimate,
        eigenvector=current,
        iterations=iteration,
        converged=converged,
        history=np.array(history),
    )

    if not converged and max_iterations > 0:
        logger.warning(
            "power iteration did not converge in %d iterations (estimate %.8f)",
            iteration,
            estimate,
        )
        if raise_on_nonconvergence:
            raise NonConvergence(result)

    return result


def estimate_dominant_eigenvalue(
    operator: Operator,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    tolerance: float = DEFAULT_TOLERANCE,
    verbose: bool = False,
    *,
    seed=None,
    callback: Optional[IterationCallback] = None,
) -> float:
    """
    Return the dominant eigenvalue estimate of `operator`.

    Thin wrapper over `power_iterate`; the budget running out is not
    reported, the last estimate is returned as-is.
    """
    return power_iterate(
        operator,
        max_iterations,
        tolerance,
        verbose,
        seed=seed,
        callback=callback,
    ).eigenvalue
