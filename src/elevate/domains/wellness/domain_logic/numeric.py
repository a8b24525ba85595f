"""Small numeric helpers shared by the scoring and projection code."""

from __future__ import annotations

import math


def clamp(value: float, lo: float = 0.0, hi: float = 1.0) -> float:
    """Clamp a value to [lo, hi]."""
    return max(lo, min(hi, value))


def sigmoid(x: float) -> float:
    """Logistic squashing into (0, 1)."""
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    z = math.exp(x)
    return z / (1.0 + z)


def saturation(k: float, x: float) -> float:
    """Diminishing-returns effect ``1 - e^(-k*x)``; 0 at x=0, approaches 1."""
    return 1.0 - math.exp(-k * x)


def finite_or(value: float | None, default: float = 0.0) -> float:
    """Return value when it is a finite number, else default."""
    if value is None:
        return default
    try:
        value = float(value)
    except (TypeError, ValueError):
        return default
    return value if math.isfinite(value) else default
