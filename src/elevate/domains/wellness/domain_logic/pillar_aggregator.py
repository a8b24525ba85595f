"""Pillar item aggregation: 0-4 habit answers -> 0-100 pillar scores.

Each pillar score is the weighted mean of its item answers expressed as a
percentage of the maximum (4). Missing items count as 0 and every answer is
clamped to [0, 4] before use. Nutrition receives a bounded multiplicative
food-environment adjustment of at most ``nu_food_env_k``, so it can reach
100 * (1 + k) and is not re-clamped. Peak is the weighted blend of the four
pillars, clamped to [0, 100].
"""

from __future__ import annotations

import logging
from typing import Mapping

from elevate.core.config.weights import DEFAULT_WEIGHTS, PILLAR_KEYS, ElevateWeights
from elevate.domains.wellness.domain_logic.models import PillarScores
from elevate.domains.wellness.domain_logic.numeric import clamp, finite_or

logger = logging.getLogger(__name__)

ITEM_MAX = 4


def _item_value(items: Mapping[str, float], code: str) -> float:
    return clamp(finite_or(items.get(code), 0.0), 0, ITEM_MAX)


def pillar_percentage(
    items: Mapping[str, float],
    codes: tuple[str, ...] | list[str],
    weights: ElevateWeights = DEFAULT_WEIGHTS,
) -> float:
    """Weighted item total as a percentage of the pillar maximum.

    A pillar whose weights sum to 0 scores 0.
    """
    total = 0.0
    weight_sum = 0.0
    for code in codes:
        w = weights.item_weight(code)
        total += _item_value(items, code) * w
        weight_sum += w
    if weight_sum <= 0:
        return 0.0
    return total / (ITEM_MAX * weight_sum) * 100


def food_environment_factor(fe: float) -> float:
    """Nutrition adjustment factor in [0, 1] derived from the 0-8 fe score."""
    return clamp((4 - finite_or(fe, 0.0)) / 4)


def peak_score(
    ex: float,
    nu: float,
    sl: float,
    st: float,
    weights: ElevateWeights = DEFAULT_WEIGHTS,
) -> float:
    """Composite Peak score, clamped to [0, 100] (unrounded)."""
    p = weights.peak
    return clamp(p.ex * ex + p.nu * nu + p.sl * sl + p.st * st, 0, 100)


def make_pillar_scores(
    ex: float,
    nu: float,
    sl: float,
    st: float,
    weights: ElevateWeights = DEFAULT_WEIGHTS,
) -> PillarScores:
    """Clamp the four pillars, derive Peak from them, round to 1 decimal."""
    ex, nu, sl, st = (clamp(v, 0, 100) for v in (ex, nu, sl, st))
    return PillarScores(
        ex=round(ex, 1),
        nu=round(nu, 1),
        sl=round(sl, 1),
        st=round(st, 1),
        peak=round(peak_score(ex, nu, sl, st, weights), 1),
    )


def score_pillars(
    items: Mapping[str, float],
    fe: float,
    weights: ElevateWeights = DEFAULT_WEIGHTS,
) -> PillarScores:
    """Score the four pillars and Peak from item answers and the food environment.

    Args:
        items: Item code -> 0-4 answer. Unknown codes are ignored.
        fe: Food environment score, 0-8.
        weights: Model constants.
    """
    raw = {
        pillar: pillar_percentage(items, weights.pillar_items[pillar], weights)
        for pillar in PILLAR_KEYS
    }
    # Uplifted Nutrition may exceed 100; only Peak is clamped
    nu_adj = raw["nu"] * (1 + weights.nu_food_env_k * food_environment_factor(fe))
    ex, sl, st = (clamp(raw[p], 0, 100) for p in ("ex", "sl", "st"))

    scores = PillarScores(
        ex=round(ex, 1),
        nu=round(nu_adj, 1),
        sl=round(sl, 1),
        st=round(st, 1),
        peak=round(peak_score(ex, nu_adj, sl, st, weights), 1),
    )
    logger.debug(
        "Pillars scored: ex=%.1f nu=%.1f sl=%.1f st=%.1f peak=%.1f",
        scores.ex, scores.nu, scores.sl, scores.st, scores.peak,
    )
    return scores


def pillar_item_averages(
    items: Mapping[str, float],
    weights: ElevateWeights = DEFAULT_WEIGHTS,
) -> dict[str, float | None]:
    """Weighted 0-4 average per pillar (2 decimals), as check-in forms report it.

    A pillar with zero total weight maps to None.
    """
    averages: dict[str, float | None] = {}
    for pillar in PILLAR_KEYS:
        total = 0.0
        weight_sum = 0.0
        for code in weights.pillar_items[pillar]:
            w = weights.item_weight(code)
            total += _item_value(items, code) * w
            weight_sum += w
        averages[pillar] = round(total / weight_sum, 2) if weight_sum > 0 else None
    return averages
