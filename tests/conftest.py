"""Shared test fixtures for the secret_recon test suite."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from secret_recon.models import Point


@pytest.fixture
def testcase1_data() -> dict[str, Any]:
    """Four shares, threshold 3; the three used lie on x^2 + 3."""
    return {
        "keys": {"n": 4, "k": 3},
        "1": {"base": "10", "value": "4"},
        "2": {"base": "2", "value": "111"},
        "3": {"base": "10", "value": "12"},
        "6": {"base": "4", "value": "213"},
    }


@pytest.fixture
def testcase2_data() -> dict[str, Any]:
    """Ten mixed-base shares, threshold 7."""
    return {
        "keys": {"n": 10, "k": 7},
        "1": {"base": "6", "value": "13444211440455345511"},
        "2": {"base": "15", "value": "aed7015a346d63"},
        "3": {"base": "15", "value": "6aeeb69631c227c"},
        "4": {"base": "16", "value": "e1b5e05623d881f"},
        "5": {"base": "8", "value": "316034514573652620673"},
        "6": {"base": "3", "value": "2122212201122002221120200210011020220200"},
        "7": {"base": "3", "value": "20120221122211000100210021102001201112121"},
        "8": {"base": "6", "value": "20220554335330240002224253"},
        "9": {"base": "12", "value": "45153788322a1255483"},
        "10": {"base": "7", "value": "1101613130313526312514143"},
    }


@pytest.fixture
def sample_points() -> Callable[[list[int], list[int]], list[Point]]:
    """Sample a polynomial (coefficients highest degree first) at the given xs."""

    def _sample(coeffs: list[int], xs: list[int]) -> list[Point]:
        points = []
        for x in xs:
            y = 0
            for c in coeffs:
                y = y * x + c
            points.append(Point(x=x, y=y))
        return points

    return _sample
