"""Scalar helpers and small three-component vector operations."""

from __future__ import annotations

import math
from typing import Sequence, Tuple

Vector = Tuple[float, float, float]


def log2(x: float) -> float:
    """Base-two logarithm."""
    return math.log(x) / math.log(2)


def absolute(x: float) -> float:
    """Absolute value."""
    return -x if x < 0 else x


def round_half(x: float) -> float:
    """Round by truncating and adding one when the fraction is at least 0.5.

    The fraction is measured after truncation toward zero, so negative
    values never round away from zero.
    """
    whole = int(x)
    if x - whole >= 0.5:
        return float(whole + 1)
    return float(whole)


def floor_int(x: float) -> float:
    """Truncate toward zero."""
    return float(int(x))


def ceil_next(x: float) -> float:
    """Return one more than the truncated value, even for whole numbers."""
    return float(int(x) + 1)


def normalize(v: Sequence[float]) -> Vector:
    """Scale a vector to unit length; a zero vector stays zero."""
    x, y, z = v
    length = math.sqrt(x * x + y * y + z * z)
    factor = 1.0 / length if length > 0 else 0.0
    return (x * factor, y * factor, z * factor)


def subtract(v0: Sequence[float], v1: Sequence[float]) -> Vector:
    """Component-wise difference ``v0 - v1``."""
    return (v0[0] - v1[0], v0[1] - v1[1], v0[2] - v1[2])


def cross(v0: Sequence[float], v1: Sequence[float]) -> Vector:
    """Cross product ``v0 x v1``."""
    return (
        v0[1] * v1[2] - v0[2] * v1[1],
        v0[2] * v1[0] - v0[0] * v1[2],
        v0[0] * v1[1] - v0[1] * v1[0],
    )


def normal(v0: Sequence[float], v1: Sequence[float], v2: Sequence[float]) -> Vector:
    """Unit normal of the triangle ``v0, v1, v2``."""
    return normalize(cross(subtract(v1, v0), subtract(v2, v0)))


def cot(x: float) -> float:
    """Cotangent."""
    return 1.0 / math.tan(x)


def nearest_pow2(x: float) -> float:
    """Smallest power of two that is not below ``x``."""
    exponent = int(log2(x))
    candidate = math.pow(2, exponent)
    if x == candidate:
        return candidate
    return math.pow(2, exponent + 1)