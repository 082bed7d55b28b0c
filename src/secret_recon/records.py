"""Parse share records from JSON.

Record shape::

    {
        "keys": {"n": 4, "k": 3},
        "1": {"base": "10", "value": "4"},
        "2": {"base": "2", "value": "111"},
        ...
    }
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from os import PathLike
from typing import Any

from secret_recon.exceptions import RecordFormatError
from secret_recon.models import EncodedShare, ShareRecord, ThresholdParams

KEYS_FIELD = "keys"


def _as_int(value: Any, what: str) -> int:
    if isinstance(value, bool):
        raise RecordFormatError(f"{what} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        digits = text[1:] if text[:1] in ("+", "-") else text
        if digits.isascii() and digits.isdigit():
            try:
                return int(text)
            except ValueError as exc:
                raise RecordFormatError(f"{what} is too long: {len(text)} characters") from exc
    raise RecordFormatError(f"{what} must be an integer, got {value!r}")


def parse_params(keys: Any) -> ThresholdParams:
    if not isinstance(keys, Mapping):
        raise RecordFormatError(f"'{KEYS_FIELD}' must be an object, got {type(keys).__name__}")
    try:
        n = _as_int(keys["n"], "keys.n")
        k = _as_int(keys["k"], "keys.k")
    except KeyError as exc:
        raise RecordFormatError(f"'{KEYS_FIELD}' is missing field {exc.args[0]!r}") from exc
    try:
        return ThresholdParams(n=n, k=k)
    except ValueError as exc:
        raise RecordFormatError(str(exc)) from exc


def parse_share(index: int, entry: Any) -> EncodedShare:
    if not isinstance(entry, Mapping):
        raise RecordFormatError(f"Share {index} must be an object, got {type(entry).__name__}")
    if "base" not in entry or "value" not in entry:
        raise RecordFormatError(f"Share {index} needs both 'base' and 'value'")
    base = _as_int(entry["base"], f"share {index} base")
    value = entry["value"]
    if not isinstance(value, str):
        raise RecordFormatError(f"Share {index} value must be a string, got {value!r}")
    return EncodedShare(base=base, value=value)


def parse_record(data: Mapping[str, Any]) -> ShareRecord:
    """Build a ShareRecord from an already-decoded mapping."""
    if not isinstance(data, Mapping):
        raise RecordFormatError(f"Record must be an object, got {type(data).__name__}")
    if KEYS_FIELD not in data:
        raise RecordFormatError(f"Record is missing '{KEYS_FIELD}'")

    params = parse_params(data[KEYS_FIELD])

    shares: dict[int, EncodedShare] = {}
    for key, entry in data.items():
        if key == KEYS_FIELD:
            continue
        index = _as_int(key, f"share index {key!r}")
        if index in shares:
            raise RecordFormatError(f"Duplicate share index {index} (key {key!r})")
        shares[index] = parse_share(index, entry)

    return ShareRecord(params=params, shares=shares)


def _reject_duplicate_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    obj: dict[str, Any] = {}
    for key, value in pairs:
        if key in obj:
            raise RecordFormatError(f"Duplicate key {key!r} in record")
        obj[key] = value
    return obj


def loads(text: str | bytes) -> ShareRecord:
    """Parse a record from JSON text. Repeated keys are rejected, not overwritten."""
    try:
        data = json.loads(text, object_pairs_hook=_reject_duplicate_keys)
    except json.JSONDecodeError as exc:
        raise RecordFormatError(f"Invalid JSON: {exc}") from exc
    return parse_record(data)


def load(path: str | PathLike[str]) -> ShareRecord:
    """Read and parse a JSON record file."""
    with open(path, encoding="utf-8") as f:
        return loads(f.read())


def dump_record(record: ShareRecord) -> dict[str, Any]:
    """Inverse of parse_record, with string-encoded bases as in the input format."""
    data: dict[str, Any] = {KEYS_FIELD: {"n": record.params.n, "k": record.params.k}}
    for index in record.sorted_indices():
        share = record.shares[index]
        data[str(index)] = {"base": str(share.base), "value": share.value}
    return data
