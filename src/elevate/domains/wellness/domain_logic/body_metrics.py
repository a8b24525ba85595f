"""Derived body-composition and fitness ratios.

Pure functions; every division guards its denominator and returns a
defined value instead of raising.
"""

from __future__ import annotations

import math

from elevate.domains.wellness.domain_logic.models import Grip
from elevate.domains.wellness.domain_logic.numeric import finite_or


def waist_to_height_ratio(waist: float, height: float) -> float:
    """Waist / height rounded to 3 decimals; 0 for non-finite input or height <= 0."""
    if not math.isfinite(waist) or not math.isfinite(height) or height <= 0:
        return 0.0
    return round(waist / height, 3)


def relative_muscle_mass(smm: float, weight: float) -> float:
    """Skeletal muscle mass per kg of body weight (weight floored at 1 kg)."""
    return smm / max(1.0, weight)


def grip_summary(
    left: float,
    right: float,
    weight: float,
    z: float | None = None,
) -> Grip:
    """Combine best-of grip readings into sum and bodyweight-relative grip."""
    left = finite_or(left)
    right = finite_or(right)
    total = round(left + right, 1)
    rel = round(total / weight, 3) if weight and weight > 0 else 0.0
    if z is not None and not math.isfinite(z):
        z = None
    return Grip(left=left, right=right, sum=total, rel=rel, z=z)


def crf_proxy_z(mvpa_min: float, steps: float) -> float:
    """Cardiorespiratory fitness proxy Z from weekly MVPA minutes and daily steps.

    Baselines: 150 MVPA min/week (SD 75) and 8,000 steps/day (SD 3,000).
    """
    mvpa_z = (mvpa_min - 150) / 75
    steps_z = (steps - 8000) / 3000
    return round(0.6 * mvpa_z + 0.4 * steps_z, 2)
