"""Data models for shares, threshold parameters and input records."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Point:
    """A decoded share (x, y) on the hidden polynomial."""

    x: int
    y: int


@dataclass(frozen=True)
class ThresholdParams:
    """Threshold scheme parameters.

    Attributes:
        n: Total number of shares handed out (informational).
        k: Shares required to reconstruct, i.e. polynomial degree + 1.
    """

    n: int
    k: int

    def __post_init__(self) -> None:
        if self.k < 1:
            raise ValueError(f"k must be >= 1, got {self.k}")
        if self.n < 0:
            raise ValueError(f"n must be >= 0, got {self.n}")

    @property
    def degree(self) -> int:
        return self.k - 1


@dataclass(frozen=True)
class EncodedShare:
    """A share value as it appears in the input: digits in some base."""

    base: int
    value: str


@dataclass
class ShareRecord:
    """A complete reconstruction input.

    Attributes:
        params: Threshold parameters from the record's ``keys`` entry.
        shares: Share index -> encoded share value.
    """

    params: ThresholdParams
    shares: dict[int, EncodedShare] = field(default_factory=dict)

    @property
    def num_shares(self) -> int:
        return len(self.shares)

    def sorted_indices(self) -> list[int]:
        return sorted(self.shares)

    def select(self, k: int | None = None) -> list[tuple[int, EncodedShare]]:
        """Return the k shares with the smallest indices, ascending."""
        if k is None:
            k = self.params.k
        return [(x, self.shares[x]) for x in self.sorted_indices()[:k]]
