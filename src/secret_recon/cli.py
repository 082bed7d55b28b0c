"""Command line interface: reconstruct secrets from JSON share records."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict

from secret_recon import __version__
from secret_recon.config import ReconstructionConfig, RoundTripPolicy, SolverMethod
from secret_recon.reconstruct import reconstruct_many
from secret_recon.records import load


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="secret-recon",
        description="Reconstruct a threshold secret from base-encoded polynomial shares",
    )
    parser.add_argument("records", nargs="+", help="JSON share record file(s)")
    parser.add_argument(
        "--method",
        choices=[m.value for m in SolverMethod],
        default=SolverMethod.GAUSSIAN.value,
        help="Interpolation algorithm (default: gaussian)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when a share does not round-trip instead of only warning",
    )
    parser.add_argument("--workers", type=int, default=1, help="Worker processes for batches")
    parser.add_argument("--json", action="store_true", help="Emit results as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = ReconstructionConfig(
            method=SolverMethod(args.method),
            roundtrip_policy=RoundTripPolicy.ABORT if args.strict else RoundTripPolicy.REPORT,
            max_workers=args.workers,
        )
        records = [load(path) for path in args.records]
        results = reconstruct_many(records, config)
    except (ValueError, OSError) as exc:
        print(f"secret-recon: error: {exc}", file=sys.stderr)
        return 1

    if args.json:
        payload = [
            {
                "file": path,
                "secret": str(result.secret),
                "diagnostics": [asdict(d) for d in result.diagnostics],
            }
            for path, result in zip(args.records, results, strict=True)
        ]
        print(json.dumps(payload, indent=2))
    else:
        for path, result in zip(args.records, results, strict=True):
            print(f"{path}:")
            print(f"Secret (c): {result.secret}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
