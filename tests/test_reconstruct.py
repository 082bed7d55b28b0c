"""Tests for secret_recon.reconstruct."""

from __future__ import annotations

import json
import logging
from typing import Any

import pytest

from secret_recon.config import ReconstructionConfig, RoundTripPolicy, SolverMethod
from secret_recon.exceptions import (
    InsufficientSharesError,
    InvalidBaseError,
    InvalidDigitError,
    RoundTripError,
)
from secret_recon.models import EncodedShare, Point, ShareRecord, ThresholdParams
from secret_recon.reconstruct import (
    ShareDiagnostic,
    reconstruct,
    reconstruct_many,
    reconstruct_secret,
)
from secret_recon.records import parse_record

# Exact constant term of the degree-6 polynomial through shares 1-7.
TESTCASE2_SECRET = 79836264049851


class TestReconstruct:
    def test_testcase1(self, testcase1_data: dict[str, Any]):
        result = reconstruct(parse_record(testcase1_data))
        assert result.secret == 3
        assert result.points == [Point(1, 4), Point(2, 7), Point(3, 12)]
        assert result.all_valid

    def test_testcase2(self, testcase2_data: dict[str, Any]):
        result = reconstruct(parse_record(testcase2_data))
        assert result.secret == TESTCASE2_SECRET
        assert [p.x for p in result.points] == [1, 2, 3, 4, 5, 6, 7]
        assert result.points[3].y == 1016509518118225951
        assert result.all_valid

    def test_testcase2_lagrange(self, testcase2_data: dict[str, Any]):
        config = ReconstructionConfig(method=SolverMethod.LAGRANGE)
        assert reconstruct(parse_record(testcase2_data), config).secret == TESTCASE2_SECRET

    def test_uses_lowest_indices(self):
        # Shares 1..3 lie on x^2 + 3; share 9 is garbage and must be ignored.
        record = parse_record({
            "keys": {"n": 4, "k": 3},
            "9": {"base": "10", "value": "1"},
            "3": {"base": "10", "value": "12"},
            "1": {"base": "10", "value": "4"},
            "2": {"base": "10", "value": "7"},
        })
        result = reconstruct(record)
        assert result.secret == 3
        assert [p.x for p in result.points] == [1, 2, 3]

    def test_insufficient_shares(self):
        record = ShareRecord(
            params=ThresholdParams(n=3, k=3),
            shares={1: EncodedShare(10, "4"), 2: EncodedShare(10, "7")},
        )
        with pytest.raises(InsufficientSharesError, match="at least 3 shares"):
            reconstruct(record)

    def test_invalid_digit_propagates(self):
        record = ShareRecord(
            params=ThresholdParams(n=2, k=2),
            shares={1: EncodedShare(2, "102"), 2: EncodedShare(10, "7")},
        )
        with pytest.raises(InvalidDigitError):
            reconstruct(record)

    def test_invalid_base_propagates(self):
        record = ShareRecord(
            params=ThresholdParams(n=1, k=1),
            shares={1: EncodedShare(40, "7")},
        )
        with pytest.raises(InvalidBaseError):
            reconstruct(record)

    def test_threshold_one(self):
        record = ShareRecord(
            params=ThresholdParams(n=2, k=1),
            shares={4: EncodedShare(16, "FF"), 5: EncodedShare(10, "0")},
        )
        assert reconstruct(record).secret == 255


class TestRoundTripDiagnostics:
    @pytest.fixture
    def padded_record(self) -> ShareRecord:
        # "007" decodes fine but re-encodes as "7".
        return ShareRecord(
            params=ThresholdParams(n=3, k=3),
            shares={
                1: EncodedShare(10, "4"),
                2: EncodedShare(10, "007"),
                3: EncodedShare(10, "12"),
            },
        )

    def test_mismatch_reported_not_fatal(self, padded_record: ShareRecord):
        result = reconstruct(padded_record)
        assert result.secret == 3
        assert not result.all_valid
        assert result.diagnostics[1] == ShareDiagnostic(
            x=2, base=10, value="007", reencoded="7", ok=False
        )
        assert result.diagnostics[0].ok
        assert result.diagnostics[2].ok

    def test_mismatch_logged(self, padded_record: ShareRecord, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.INFO, logger="secret_recon"):
            reconstruct(padded_record)
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "Share 2 failed round-trip" in warnings[0].getMessage()
        assert "Share 1 round-trip ok" in caplog.text

    def test_abort_policy(self, padded_record: ShareRecord):
        config = ReconstructionConfig(roundtrip_policy=RoundTripPolicy.ABORT)
        with pytest.raises(RoundTripError, match="'007' -> '7'"):
            reconstruct(padded_record, config)

    def test_uppercase_is_not_a_mismatch(self):
        record = ShareRecord(
            params=ThresholdParams(n=1, k=1),
            shares={1: EncodedShare(36, "HelloWorld")},
        )
        config = ReconstructionConfig(roundtrip_policy=RoundTripPolicy.ABORT)
        result = reconstruct(record, config)
        assert result.all_valid
        assert result.diagnostics[0].reencoded == "helloworld"


    def test_non_ascii_digit_is_rejected(self):
        record = ShareRecord(
            params=ThresholdParams(n=1, k=1),
            shares={1: EncodedShare(36, "\u212a")},
        )
        with pytest.raises(InvalidDigitError):
            reconstruct(record)


class TestReconstructSecret:
    def test_from_mapping(self, testcase1_data: dict[str, Any]):
        assert reconstruct_secret(testcase1_data) == 3

    def test_from_json_text(self, testcase2_data: dict[str, Any]):
        assert reconstruct_secret(json.dumps(testcase2_data)) == TESTCASE2_SECRET


class TestReconstructMany:
    def test_sequential(self, testcase1_data: dict[str, Any], testcase2_data: dict[str, Any]):
        records = [parse_record(testcase1_data), parse_record(testcase2_data)]
        results = reconstruct_many(records)
        assert [r.secret for r in results] == [3, TESTCASE2_SECRET]

    def test_worker_pool(self, testcase1_data: dict[str, Any], testcase2_data: dict[str, Any]):
        records = [parse_record(testcase2_data), parse_record(testcase1_data)] * 2
        results = reconstruct_many(records, ReconstructionConfig(max_workers=2))
        assert [r.secret for r in results] == [TESTCASE2_SECRET, 3, TESTCASE2_SECRET, 3]

    def test_empty(self):
        assert reconstruct_many([]) == []

    def test_failure_propagates(self, testcase1_data: dict[str, Any]):
        bad = ShareRecord(params=ThresholdParams(n=1, k=2), shares={1: EncodedShare(10, "1")})
        with pytest.raises(InsufficientSharesError):
            reconstruct_many([parse_record(testcase1_data), bad])

    def test_worker_pool_logs_mismatches(self, caplog: pytest.LogCaptureFixture):
        padded = ShareRecord(
            params=ThresholdParams(n=2, k=2),
            shares={1: EncodedShare(10, "4"), 2: EncodedShare(10, "07")},
        )
        clean = ShareRecord(
            params=ThresholdParams(n=2, k=2),
            shares={1: EncodedShare(10, "4"), 2: EncodedShare(10, "7")},
        )
        with caplog.at_level(logging.INFO, logger="secret_recon"):
            results = reconstruct_many([padded, clean], ReconstructionConfig(max_workers=2))

        assert [r.secret for r in results] == [1, 1]
        warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "Share 2 failed round-trip" in warnings[0]
        assert "'07'" in warnings[0]
