"""MCP tools exposing the Elevate scoring and projection engine."""

from __future__ import annotations

import json
import logging
import time
from dataclasses import fields
from typing import Any

from fastmcp import Context, FastMCP

from elevate.core.config.weights import ElevateWeights
from elevate.domains.wellness.domain_logic.assessment import build_assessment
from elevate.domains.wellness.domain_logic.models import (
    AssessmentInputs,
    BehaviorContext,
    FoodEnvironment,
    Horizon,
    InBody,
    ParqScreen,
    Vitals,
)
from elevate.domains.wellness.domain_logic.projection import (
    compare_scenarios,
    effective_effort,
    health_trajectory,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

_HORIZON_VALUES = [h.value for h in Horizon]


def _validate_horizon(value: str | None, default: str) -> Horizon:
    """Validate and default the horizon parameter."""
    if value in (None, ""):
        value = default
    try:
        return Horizon(value)
    except ValueError:
        raise ValueError(
            f"horizon must be one of: {' | '.join(_HORIZON_VALUES)}"
        ) from None


def _build(cls: type, data: dict[str, Any] | None, label: str) -> Any:
    """Construct a dataclass from a tool argument, rejecting unknown keys."""
    data = data or {}
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown {label} field(s): {', '.join(unknown)}")
    return cls(**data)


def _inputs_from_args(
    *,
    items: dict[str, float] | None,
    food: dict[str, Any] | None,
    vitals: dict[str, Any] | None,
    inbody: dict[str, Any] | None,
    grip: dict[str, Any] | None,
    parq: dict[str, Any] | None,
) -> AssessmentInputs:
    grip = dict(grip or {})
    unknown = sorted(set(grip) - {"left", "right", "z"})
    if unknown:
        raise ValueError(f"Unknown grip field(s): {', '.join(unknown)}")
    return AssessmentInputs(
        items={str(code): float(v) for code, v in (items or {}).items()},
        food=_build(FoodEnvironment, food, "food"),
        vitals=_build(Vitals, vitals, "vitals"),
        inbody=_build(InBody, inbody, "inbody"),
        grip_left=float(grip.get("left", 0.0)),
        grip_right=float(grip.get("right", 0.0)),
        grip_z=grip.get("z"),
        parq=_build(ParqScreen, parq, "parq"),
    )


def register_elevate_tools(
    mcp: FastMCP,
    weights: ElevateWeights,
    *,
    default_horizon: str = "6mo",
) -> None:
    """Register the Elevate assessment and projection tools on the MCP server."""

    @mcp.tool
    async def elevate_assessment(
        ctx: Context,
        items: dict[str, float] | None = None,
        food: dict[str, Any] | None = None,
        vitals: dict[str, Any] | None = None,
        inbody: dict[str, Any] | None = None,
        grip: dict[str, Any] | None = None,
        parq: dict[str, Any] | None = None,
    ) -> str:
        """Score a client session: pillars, Peak, condition risks and health age.

        Args:
            items: Pillar item code -> 0-4 answer (e.g. {'ex_mvpa': 3}).
            food: {'cook0_4': int, 'upf0_4': int} home food environment.
            vitals: {'rhr', 'sbp', 'dbp', 'sex', 'chron_age'}; sbp/dbp optional.
            inbody: {'weight', 'bf', 'smm', 'vat', 'waist', 'height'}; zero if unmeasured.
            grip: {'left', 'right', 'z'} best-of grip in kgf; z optional.
            parq: PAR-Q flags, e.g. {'chest_pain': true}.
        """
        start = time.monotonic()
        inputs = _inputs_from_args(
            items=items, food=food, vitals=vitals, inbody=inbody, grip=grip, parq=parq
        )
        assessment = build_assessment(inputs, weights)
        logger.info(
            "elevate_assessment computed in %.1fms", (time.monotonic() - start) * 1000
        )
        return json.dumps({"status": "ok", "assessment": assessment.to_dict()}, indent=2)

    @mcp.tool
    async def elevate_projection(
        ctx: Context,
        items: dict[str, float] | None = None,
        food: dict[str, Any] | None = None,
        vitals: dict[str, Any] | None = None,
        inbody: dict[str, Any] | None = None,
        grip: dict[str, Any] | None = None,
        workouts_per_week: float = 3,
        adherence: float = 0.8,
        protein_support: float = 1.0,
        sleep_support: float = 1.0,
        horizon: str = "",
    ) -> str:
        """Project the client forward with and without sustained behaviour change.

        Args:
            items, food, vitals, inbody, grip: Same as elevate_assessment.
            workouts_per_week: Planned sessions per week (clamped to 1-7).
            adherence: Expected adherence 0-1.
            protein_support: Protein support multiplier (clamped to 0.5-1).
            sleep_support: Sleep support multiplier (clamped to 0.5-1).
            horizon: One of 6mo | 1y | 2y | 3y | 4y | 5y | 10y.
        """
        chosen = _validate_horizon(horizon, default_horizon)
        inputs = _inputs_from_args(
            items=items, food=food, vitals=vitals, inbody=inbody, grip=grip, parq=None
        )
        assessment = build_assessment(inputs, weights)
        behavior = BehaviorContext(
            workouts_per_week=workouts_per_week,
            adherence=adherence,
            protein_support=protein_support,
            sleep_support=sleep_support,
        )
        comparison = compare_scenarios(
            assessment.state(inputs.vitals, inputs.inbody), behavior, chosen, weights
        )
        logger.info("elevate_projection computed for horizon %s", chosen.value)
        return json.dumps(
            {
                "status": "ok",
                "horizon": chosen.value,
                "effective_effort": round(effective_effort(behavior), 3),
                "current": {
                    "pillars": assessment.pillars.to_dict(),
                    "health_age": assessment.health_age.to_dict(),
                    "risks": assessment.risks.to_dict(),
                },
                **comparison.to_dict(),
            },
            indent=2,
        )

    @mcp.tool
    async def elevate_trajectory(
        ctx: Context,
        items: dict[str, float] | None = None,
        food: dict[str, Any] | None = None,
        vitals: dict[str, Any] | None = None,
        inbody: dict[str, Any] | None = None,
        grip: dict[str, Any] | None = None,
        workouts_per_week: float = 3,
        adherence: float = 0.8,
        protein_support: float = 1.0,
        sleep_support: float = 1.0,
    ) -> str:
        """Health age under both scenarios across every projection horizon.

        Args:
            Same as elevate_projection, without a horizon.
        """
        inputs = _inputs_from_args(
            items=items, food=food, vitals=vitals, inbody=inbody, grip=grip, parq=None
        )
        assessment = build_assessment(inputs, weights)
        behavior = BehaviorContext(
            workouts_per_week=workouts_per_week,
            adherence=adherence,
            protein_support=protein_support,
            sleep_support=sleep_support,
        )
        points = health_trajectory(
            assessment.state(inputs.vitals, inputs.inbody), behavior, weights=weights
        )
        return json.dumps(
            {
                "status": "ok",
                "points": [
                    {
                        "t": p.label,
                        "months": p.months,
                        "no_change": p.no_change_age,
                        "with_change": p.with_change_age,
                    }
                    for p in points
                ],
            },
            indent=2,
        )
