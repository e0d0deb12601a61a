#!/usr/bin/python3
# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Demo: dominant eigenvalue of a 5x5 symmetric matrix stored three ways.

    python -m poweriter [--max-iter N] [--tol T] [--seed S] [--quiet]
    python -m poweriter --benchmark
"""

import argparse
import logging
import sys

from .benchmark import run_benchmark
from .eigen import DEFAULT_MAX_ITERATIONS, DEFAULT_TOLERANCE, estimate_dominant_eigenvalue
from .operators import CooMatrix


def build_example() -> CooMatrix:
    """Laplacian of the two-triangle "bowtie" graph; eigenvalues 0, 1, 3, 3, 5."""
    coo = CooMatrix(5, 5)
    coo.add_sym(0, 0, 2)
    coo.add_sym(0, 1, -1)
    coo.add_sym(0, 2, -1)
    coo.add_sym(1, 1, 2)
    coo.add_sym(1, 2, -1)
    coo.add_sym(2, 2, 4)
    coo.add_sym(2, 3, -1)
    coo.add_sym(2, 4, -1)
    coo.add_sym(3, 3, 2)
    coo.add_sym(3, 4, -1)
    coo.add_sym(4, 4, 2)
    return coo


def run_example(max_iterations, tolerance, verbose=True, seed=None) -> dict:
    coo = build_example()
    sparse = coo.to_sparse()
    dense = coo.to_dense()

    dense.print("Input:")

    evals = {}
    for kind, op in (("Dense", dense), ("Sparse", sparse), ("Coo", coo)):
        print(f"Computing {kind} Eval:", flush=True)
        evals[kind] = estimate_dominant_eigenvalue(
            op, max_iterations, tolerance, verbose, seed=seed
        )
        print(f"Max Eval {kind}: {evals[kind]:.2f}")
        print()
    return evals


def main(argv=None):
    ap = argparse.ArgumentParser(
        prog="poweriter",
        description="Estimate a dominant eigenvalue with power iteration.",
    )
    ap.add_argument("--max-iter", type=int, default=DEFAULT_MAX_ITERATIONS)
    ap.add_argument("--tol", type=float, default=DEFAULT_TOLERANCE)
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--quiet", action="store_true", help="no per-iteration log")
    ap.add_argument(
        "--benchmark", action="store_true", help="time dense/sparse/coo instead"
    )
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s", stream=sys.stdout)

    if args.benchmark:
        df = run_benchmark(seed=args.seed)
        print(df.to_markdown(index=False))
        return 0

    run_example(args.max_iter, args.tol, verbose=not args.quiet, seed=args.seed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
