"""Threshold secret reconstruction.

Recovers the constant term of an integer polynomial from k points whose
values are given as digit strings in bases 2-36, using exact interpolation.
"""

__version__ = "0.1.0"

from secret_recon.codec import decode, encode
from secret_recon.config import ReconstructionConfig, RoundTripPolicy, SolverMethod
from secret_recon.models import EncodedShare, Point, ShareRecord, ThresholdParams
from secret_recon.reconstruct import (
    ReconstructionResult,
    ShareDiagnostic,
    reconstruct,
    reconstruct_many,
    reconstruct_secret,
)
from secret_recon.solver import PolynomialSolver, solve_coefficients, solve_constant_term

__all__ = [
    "EncodedShare",
    "Point",
    "PolynomialSolver",
    "ReconstructionConfig",
    "ReconstructionResult",
    "RoundTripPolicy",
    "ShareDiagnostic",
    "ShareRecord",
    "SolverMethod",
    "ThresholdParams",
    "decode",
    "encode",
    "reconstruct",
    "reconstruct_many",
    "reconstruct_secret",
    "solve_coefficients",
    "solve_constant_term",
]
