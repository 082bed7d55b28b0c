"""Arbitrary-base digit strings <-> arbitrary-precision integers.

Bases 2-36, digits 0-9 then a-z, case-insensitive on input, lowercase on output.
"""

from __future__ import annotations

from secret_recon.exceptions import InvalidBaseError, InvalidDigitError

DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"
MIN_BASE = 2
MAX_BASE = 36

# ASCII only; str.lower() would map e.g. the Kelvin sign onto "k".
_DIGIT_VALUES = {ch: i for i, ch in enumerate(DIGITS)}
_DIGIT_VALUES.update({ch.upper(): i for i, ch in enumerate(DIGITS) if ch.isalpha()})


def _check_base(base: int) -> None:
    if isinstance(base, bool) or not isinstance(base, int):
        raise InvalidBaseError(f"Base must be an integer, got {base!r}")
    if not MIN_BASE <= base <= MAX_BASE:
        raise InvalidBaseError(f"Base must be in [{MIN_BASE}, {MAX_BASE}], got {base}")


def decode(digits: str, base: int) -> int:
    """Decode a non-negative digit string in the given base."""
    _check_base(base)
    if not digits:
        raise InvalidDigitError(f"Empty digit string for base {base}")

    value = 0
    for pos, ch in enumerate(digits):
        digit = _DIGIT_VALUES.get(ch)
        if digit is None or digit >= base:
            raise InvalidDigitError(
                f"Invalid digit {ch!r} at position {pos} for base {base}"
            )
        value = value * base + digit
    return value


def encode(value: int, base: int) -> str:
    """Encode a non-negative integer as a canonical lowercase digit string."""
    _check_base(base)
    if value < 0:
        raise ValueError(f"Value must be non-negative, got {value}")
    if value == 0:
        return "0"
    out = []
    while value:
        value, rem = divmod(value, base)
        out.append(DIGITS[rem])
    return "".join(reversed(out))
