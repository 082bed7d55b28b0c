"""Secret reconstruction from a share record.

Selects the k lowest-indexed shares, decodes them, checks each decoded value
re-encodes to its input, and interpolates the constant term.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from typing import Any

from secret_recon.codec import decode, encode
from secret_recon.config import ReconstructionConfig, RoundTripPolicy
from secret_recon.exceptions import InsufficientSharesError, RoundTripError
from secret_recon.models import Point, ShareRecord
from secret_recon.records import loads, parse_record
from secret_recon.solver import PolynomialSolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShareDiagnostic:
    """Round-trip check for one share.

    Attributes:
        x: Share index.
        base: Base the value was given in.
        value: Digit string as supplied.
        reencoded: Decoded value encoded back into ``base``.
        ok: Whether ``reencoded`` matches ``value`` ignoring case.
    """

    x: int
    base: int
    value: str
    reencoded: str
    ok: bool


@dataclass
class ReconstructionResult:
    """Outcome of one reconstruction.

    Attributes:
        secret: The polynomial's constant term.
        points: Decoded points used for interpolation, ascending x.
        diagnostics: Per-point round-trip checks, same order as points.
    """

    secret: int
    points: list[Point]
    diagnostics: list[ShareDiagnostic]

    @property
    def all_valid(self) -> bool:
        return all(d.ok for d in self.diagnostics)


def _log_diagnostic(diag: ShareDiagnostic) -> None:
    if diag.ok:
        logger.info("Share %d round-trip ok", diag.x)
    else:
        logger.warning(
            "Share %d failed round-trip (value likely corrupted or mis-based): "
            "original %r, re-encoded %r",
            diag.x,
            diag.value,
            diag.reencoded,
        )


def _decode_share(
    x: int, base: int, value: str, policy: RoundTripPolicy
) -> tuple[Point, ShareDiagnostic]:
    y = decode(value, base)
    reencoded = encode(y, base)
    diag = ShareDiagnostic(
        x=x, base=base, value=value, reencoded=reencoded, ok=reencoded == value.lower()
    )

    _log_diagnostic(diag)
    if not diag.ok and policy == RoundTripPolicy.ABORT:
        raise RoundTripError(
            f"Share {x} does not round-trip in base {base}: {value!r} -> {reencoded!r}"
        )

    return Point(x=x, y=y), diag


def reconstruct(
    record: ShareRecord,
    config: ReconstructionConfig | None = None,
) -> ReconstructionResult:
    """Reconstruct the secret from the k lowest-indexed shares of a record.

    Args:
        record: Parsed share record.
        config: Solver and validation options (defaults if None).

    Returns:
        ReconstructionResult with the secret and per-share diagnostics.
    """
    if config is None:
        config = ReconstructionConfig()

    k = record.params.k
    if record.num_shares < k:
        raise InsufficientSharesError(
            f"Threshold k={k} needs at least {k} shares, record has {record.num_shares}"
        )
    if record.params.n != record.num_shares:
        logger.debug(
            "Record declares n=%d but carries %d shares", record.params.n, record.num_shares
        )

    points: list[Point] = []
    diagnostics: list[ShareDiagnostic] = []
    for x, share in record.select(k):
        point, diag = _decode_share(x, share.base, share.value, config.roundtrip_policy)
        points.append(point)
        diagnostics.append(diag)

    solver = PolynomialSolver(config.method)
    secret = solver.solve_constant_term(points, record.params.degree)
    logger.info("Reconstructed secret from %d shares (degree %d)", k, record.params.degree)

    return ReconstructionResult(secret=secret, points=points, diagnostics=diagnostics)


def reconstruct_secret(
    data: Mapping[str, Any] | str | bytes,
    config: ReconstructionConfig | None = None,
) -> int:
    """Convenience: secret from a record mapping or its JSON text."""
    record = loads(data) if isinstance(data, (str, bytes)) else parse_record(data)
    return reconstruct(record, config).secret


def _silence_worker() -> None:
    # Forked workers inherit the parent's handlers; spawned ones have none.
    logging.getLogger("secret_recon").setLevel(logging.CRITICAL + 1)


def reconstruct_many(
    records: Iterable[ShareRecord],
    config: ReconstructionConfig | None = None,
) -> list[ReconstructionResult]:
    """Reconstruct several independent records, in input order.

    With ``config.max_workers > 1`` each record is solved in its own worker
    process. Workers do not log; share diagnostics are logged here from the
    returned results, whatever the start method. The first failure propagates.
    """
    if config is None:
        config = ReconstructionConfig()

    records = list(records)
    if config.max_workers == 1 or len(records) <= 1:
        return [reconstruct(r, config) for r in records]

    workers = min(config.max_workers, len(records))
    with ProcessPoolExecutor(max_workers=workers, initializer=_silence_worker) as pool:
        results = list(pool.map(reconstruct, records, [config] * len(records)))

    for result in results:
        for diag in result.diagnostics:
            _log_diagnostic(diag)
    return results
