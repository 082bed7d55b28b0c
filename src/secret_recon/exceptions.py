"""Error types raised while decoding shares and reconstructing secrets."""

from __future__ import annotations


class ReconstructionError(ValueError):
    """Base class for every failure in the reconstruction pipeline."""


class CodecError(ReconstructionError):
    """A share value could not be decoded."""


class InvalidBaseError(CodecError):
    """Base outside the supported range [2, 36]."""


class InvalidDigitError(CodecError):
    """Digit string contains a character that is not a digit of the base."""


class RecordFormatError(ReconstructionError):
    """Input record does not have the expected shape."""


class InsufficientSharesError(ReconstructionError):
    """Fewer shares available than the threshold requires."""


class PointCountError(ReconstructionError):
    """Solver called with a point count other than degree + 1."""


class SingularMatrixError(ReconstructionError, ArithmeticError):
    """Points do not determine a unique polynomial of the requested degree."""


class NonIntegerResultError(ReconstructionError, ArithmeticError):
    """Interpolated constant term is not an integer."""


class RoundTripError(ReconstructionError):
    """Decoded value does not re-encode to its original digit string."""
