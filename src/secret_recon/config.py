"""Reconstruction settings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SolverMethod(Enum):
    GAUSSIAN = "gaussian"
    LAGRANGE = "lagrange"


class RoundTripPolicy(Enum):
    """What to do when a decoded share does not re-encode to its input.

    REPORT logs a warning and keeps the share; ABORT raises RoundTripError.
    """

    REPORT = "report"
    ABORT = "abort"


@dataclass(frozen=True)
class ReconstructionConfig:
    """Options for a reconstruction run.

    Attributes:
        method: Interpolation algorithm.
        roundtrip_policy: Handling of round-trip mismatches.
        max_workers: Worker processes for batch runs (1 = sequential).
    """

    method: SolverMethod = SolverMethod.GAUSSIAN
    roundtrip_policy: RoundTripPolicy = RoundTripPolicy.REPORT
    max_workers: int = 1

    def __post_init__(self) -> None:
        if not isinstance(self.method, SolverMethod):
            raise ValueError(f"method must be a SolverMethod, got {self.method!r}")
        if not isinstance(self.roundtrip_policy, RoundTripPolicy):
            raise ValueError(
                f"roundtrip_policy must be a RoundTripPolicy, got {self.roundtrip_policy!r}"
            )
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
