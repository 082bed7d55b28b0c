"""Exact polynomial interpolation over the integers.

Given k points on a degree k-1 polynomial, recover its coefficients by solving
the Vandermonde system with Gaussian elimination over exact rationals.
Intermediate values grow far beyond the inputs; Python ints absorb that.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from fractions import Fraction

import numpy as np

from secret_recon.config import SolverMethod
from secret_recon.exceptions import (
    NonIntegerResultError,
    PointCountError,
    SingularMatrixError,
)
from secret_recon.models import Point

logger = logging.getLogger(__name__)


def build_augmented_matrix(points: Sequence[Point], degree: int) -> np.ndarray:
    """Build the k x (k+1) augmented Vandermonde matrix.

    Row i is [x_i^degree, x_i^(degree-1), ..., x_i^0 | y_i]. Entries are
    Fractions in an object array so numpy never coerces them to floats.
    """
    k = degree + 1
    matrix = np.empty((k, k + 1), dtype=object)
    for i, point in enumerate(points):
        for j in range(k):
            matrix[i, j] = Fraction(point.x ** (degree - j))
        matrix[i, k] = Fraction(point.y)
    return matrix


def gaussian_elimination(augmented: np.ndarray) -> list[Fraction]:
    """Solve an augmented system with partial pivoting; returns the solution vector.

    Works on a Fraction copy of the input. Raises SingularMatrixError on a zero pivot.
    """
    n = augmented.shape[0]
    if augmented.shape != (n, n + 1):
        raise ValueError(f"Expected an n x (n+1) matrix, got shape {augmented.shape}")
    m = np.array([[Fraction(v) for v in row] for row in augmented], dtype=object)

    for i in range(n):
        # max() keeps the first row on ties.
        max_row = max(range(i, n), key=lambda r: abs(m[r, i]))
        if max_row != i:
            logger.debug("Pivot column %d: swapping rows %d and %d", i, i, max_row)
            m[[i, max_row]] = m[[max_row, i]]

        pivot = m[i, i]
        if pivot == 0:
            raise SingularMatrixError(f"Singular matrix: zero pivot in column {i}")

        m[i, i:] = m[i, i:] / pivot
        for r in range(i + 1, n):
            factor = m[r, i]
            if factor:
                m[r, i:] = m[r, i:] - factor * m[i, i:]

    x = [Fraction(0)] * n
    for i in range(n - 1, -1, -1):
        x[i] = m[i, n] - sum((m[i, j] * x[j] for j in range(i + 1, n)), Fraction(0))
    return x


def evaluate_polynomial(coefficients: Sequence[Fraction | int], x: int) -> Fraction:
    """Horner evaluation; coefficients are ordered highest degree first."""
    result = Fraction(0)
    for c in coefficients:
        result = result * x + c
    return result


def _to_integer(value: Fraction) -> int:
    if value.denominator != 1:
        raise NonIntegerResultError(
            f"Constant term {value} is not an integer; shares do not lie on an "
            "integer-valued polynomial"
        )
    return value.numerator


class PolynomialSolver:
    """Recovers a polynomial's constant term from degree + 1 points."""

    def __init__(self, method: SolverMethod = SolverMethod.GAUSSIAN) -> None:
        self.method = method

    def solve_coefficients(self, points: Sequence[Point], degree: int) -> list[Fraction]:
        """Coefficient vector, index 0 = highest degree, index degree = constant term."""
        self._check_points(points, degree)
        logger.debug("Solving %dx%d Vandermonde system", degree + 1, degree + 1)
        return gaussian_elimination(build_augmented_matrix(points, degree))

    def solve_constant_term(self, points: Sequence[Point], degree: int) -> int:
        """Interpolate the polynomial through points and return its value at x = 0."""
        if self.method == SolverMethod.LAGRANGE:
            self._check_points(points, degree)
            constant = self._lagrange_interpolate_at_zero(points)
        else:
            constant = self.solve_coefficients(points, degree)[degree]
        return _to_integer(constant)

    def _check_points(self, points: Sequence[Point], degree: int) -> None:
        if degree < 0:
            raise ValueError(f"degree must be >= 0, got {degree}")
        if len(points) != degree + 1:
            raise PointCountError(
                f"Degree {degree} needs exactly {degree + 1} points, got {len(points)}"
            )
        xs = [p.x for p in points]
        if len(set(xs)) != len(xs):
            raise SingularMatrixError(f"Duplicate x values in points: {sorted(xs)}")

    def _lagrange_interpolate_at_zero(self, points: Sequence[Point]) -> Fraction:
        """Sum of y_i * prod_{j != i} x_j / (x_j - x_i), kept as an exact Fraction."""
        secret = Fraction(0)
        for i, pi in enumerate(points):
            numerator = 1
            denominator = 1
            for j, pj in enumerate(points):
                if i == j:
                    continue
                numerator *= -pj.x
                denominator *= pi.x - pj.x
            secret += Fraction(pi.y * numerator, denominator)
        return secret


def solve_constant_term(
    points: Sequence[Point],
    degree: int,
    method: SolverMethod = SolverMethod.GAUSSIAN,
) -> int:
    """Convenience: constant term of the degree-``degree`` polynomial through points."""
    return PolynomialSolver(method).solve_constant_term(points, degree)


def solve_coefficients(points: Sequence[Point], degree: int) -> list[Fraction]:
    """Convenience: full coefficient vector, highest degree first."""
    return PolynomialSolver().solve_coefficients(points, degree)
