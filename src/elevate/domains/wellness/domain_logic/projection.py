"""Forward projections under "no change" and "with change" scenarios.

The with-change scenario evolves body composition and pillar scores along
diminishing-returns curves driven by effective weekly effort, then re-runs
the risk and health-age models on the simulated state. Inputs are never
mutated; every projection is a new frozen snapshot.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from elevate.core.config.weights import DEFAULT_WEIGHTS, PILLAR_KEYS, ElevateWeights
from elevate.domains.wellness.domain_logic.health_age import compute_health_age
from elevate.domains.wellness.domain_logic.models import (
    HORIZON_MONTHS,
    BehaviorContext,
    ClientState,
    Horizon,
    InBody,
    PillarScores,
    Projection,
    Scenario,
    ScenarioComparison,
    TrajectoryPoint,
)
from elevate.domains.wellness.domain_logic.numeric import clamp, saturation
from elevate.domains.wellness.domain_logic.pillar_aggregator import make_pillar_scores
from elevate.domains.wellness.domain_logic.risk_model import (
    compute_risk_indices,
    risk_features,
)

logger = logging.getLogger(__name__)

# Pillar uplifts are expressed per this many months
_PILLAR_PERIOD_MONTHS = 6


def horizon_to_months(horizon: Horizon | str) -> int:
    """Month count for a horizon. Unknown horizons raise ValueError."""
    return HORIZON_MONTHS[Horizon(horizon)]


def effective_effort(ctx: BehaviorContext) -> float:
    """Weekly workouts discounted by adherence and support multipliers."""
    workouts = clamp(ctx.workouts_per_week, 1, 7)
    return (
        workouts
        * clamp(ctx.adherence, 0, 1)
        * clamp(ctx.protein_support, 0.5, 1)
        * clamp(ctx.sleep_support, 0.5, 1)
    )


def evolve_inbody(
    inbody: InBody,
    effort: float,
    months: float,
    weights: ElevateWeights = DEFAULT_WEIGHTS,
) -> InBody:
    """Body composition after ``months`` of training at ``effort``."""
    rates = weights.body_composition
    effect = saturation(rates.k, effort)
    return replace(
        inbody,
        bf=max(0.0, round(inbody.bf + rates.bf_per_month * effect * months, 1)),
        smm=max(0.0, round(inbody.smm + rates.smm_per_month * effect * months, 1)),
        vat=max(0.0, float(round(inbody.vat + rates.vat_per_month * effect * months))),
    )


def evolve_pillars(
    pillars: PillarScores,
    effort: float,
    months: float,
    weights: ElevateWeights = DEFAULT_WEIGHTS,
) -> PillarScores:
    """Pillar scores after ``months`` of change; Peak is re-derived."""
    periods = months / _PILLAR_PERIOD_MONTHS
    updated = {}
    for pillar in PILLAR_KEYS:
        curve = weights.pillar_projection[pillar]
        current = getattr(pillars, pillar)
        updated[pillar] = min(100.0, current + curve.uplift * saturation(curve.k, effort) * periods)
    return make_pillar_scores(weights=weights, **updated)


def evolve_state(
    state: ClientState,
    ctx: BehaviorContext,
    months: float,
    weights: ElevateWeights = DEFAULT_WEIGHTS,
) -> ClientState:
    """Simulated client state after ``months`` of sustained behaviour change."""
    if months == 0:
        # Nothing elapsed: keep the measured values without re-rounding
        return state
    effort = effective_effort(ctx)
    return replace(
        state,
        inbody=evolve_inbody(state.inbody, effort, months, weights),
        pillars=evolve_pillars(state.pillars, effort, months, weights),
    )


def _snapshot(
    state: ClientState,
    horizon: Horizon,
    scenario: Scenario,
    weights: ElevateWeights,
) -> Projection:
    risks = compute_risk_indices(
        risk_features(state.vitals, state.inbody, state.pillars, state.grip_z),
        weights,
    )
    health_age = compute_health_age(
        state.vitals, state.inbody, state.pillars, state.grip_z, weights
    )
    return Projection(
        horizon=horizon,
        scenario=scenario,
        inbody=state.inbody,
        pillars=state.pillars,
        health_age=health_age,
        risks=risks,
    )


def project_no_change(
    state: ClientState,
    horizon: Horizon | str,
    weights: ElevateWeights = DEFAULT_WEIGHTS,
) -> Projection:
    """Status quo: body composition and pillars held constant."""
    horizon = Horizon(horizon)
    return _snapshot(state, horizon, Scenario.NO_CHANGE, weights)


def project_with_change(
    state: ClientState,
    ctx: BehaviorContext,
    horizon: Horizon | str,
    weights: ElevateWeights = DEFAULT_WEIGHTS,
) -> Projection:
    """Sustained behaviour change at the context's workout frequency."""
    horizon = Horizon(horizon)
    future = evolve_state(state, ctx, horizon_to_months(horizon), weights)
    projection = _snapshot(future, horizon, Scenario.WITH_CHANGE, weights)
    logger.debug(
        "Projected %s at %.2f effective workouts/week: health age %.1f",
        horizon.value, effective_effort(ctx), projection.health_age.age,
    )
    return projection


def compare_scenarios(
    state: ClientState,
    ctx: BehaviorContext,
    horizon: Horizon | str,
    weights: ElevateWeights = DEFAULT_WEIGHTS,
) -> ScenarioComparison:
    """Both projections for one horizon plus what the change buys."""
    no_change = project_no_change(state, horizon, weights)
    with_change = project_with_change(state, ctx, horizon, weights)
    baseline = dict(no_change.risks.items())
    return ScenarioComparison(
        no_change=no_change,
        with_change=with_change,
        health_age_gain=round(no_change.health_age.age - with_change.health_age.age, 1),
        risk_reduction={
            name: baseline[name].score - result.score
            for name, result in with_change.risks.items()
        },
    )


def health_trajectory(
    state: ClientState,
    ctx: BehaviorContext,
    horizons: list[Horizon] | tuple[Horizon, ...] | None = None,
    weights: ElevateWeights = DEFAULT_WEIGHTS,
) -> list[TrajectoryPoint]:
    """Health age under both scenarios, from "Now" through each horizon."""
    chosen = [Horizon(h) for h in horizons] if horizons else list(Horizon)
    chosen.sort(key=lambda h: HORIZON_MONTHS[h])

    now = state.vitals.chron_age
    points = [TrajectoryPoint(label="Now", months=0, no_change_age=now, with_change_age=now)]
    for horizon in chosen:
        comparison = compare_scenarios(state, ctx, horizon, weights)
        points.append(
            TrajectoryPoint(
                label=horizon.value,
                months=HORIZON_MONTHS[horizon],
                no_change_age=comparison.no_change.health_age.age,
                with_change_age=comparison.with_change.health_age.age,
            )
        )
    return points
