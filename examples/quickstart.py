#!/usr/bin/env python3
"""Quick start example: reconstruct threshold secrets from encoded shares.

Demonstrates the core workflow:
  1. Load share records (JSON)
  2. Decode the k lowest-indexed shares and check they round-trip
  3. Interpolate the constant term exactly
  4. Cross-check with Lagrange interpolation
"""

import logging
from pathlib import Path

from secret_recon.config import ReconstructionConfig, SolverMethod
from secret_recon.reconstruct import reconstruct
from secret_recon.records import load

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

here = Path(__file__).parent

for name in ["testcase1.json", "testcase2.json"]:
    # --- 1. Load the record ---
    record = load(here / name)
    print(f"\n{name}: n={record.params.n}, k={record.params.k}, shares={record.num_shares}")

    # --- 2 & 3. Decode, validate, solve ---
    result = reconstruct(record)
    for diag in result.diagnostics:
        status = "correct" if diag.ok else "WRONG"
        print(f"  Key {diag.x} (base {diag.base}) is {status}")
    print(f"  Secret (c): {result.secret}")

    # --- 4. Independent cross-check ---
    lagrange = reconstruct(record, ReconstructionConfig(method=SolverMethod.LAGRANGE))
    assert lagrange.secret == result.secret
