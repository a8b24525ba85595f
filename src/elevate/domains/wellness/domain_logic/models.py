"""Elevate assessment models and domain enumerations.

All result types are frozen dataclasses: a new value is built whenever an
input changes, and a projection never mutates the state it started from.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Iterator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Horizon(str, Enum):
    """Forward time windows offered for projections."""

    SIX_MONTHS = "6mo"
    ONE_YEAR = "1y"
    TWO_YEARS = "2y"
    THREE_YEARS = "3y"
    FOUR_YEARS = "4y"
    FIVE_YEARS = "5y"
    TEN_YEARS = "10y"


HORIZON_MONTHS: dict[Horizon, int] = {
    Horizon.SIX_MONTHS: 6,
    Horizon.ONE_YEAR: 12,
    Horizon.TWO_YEARS: 24,
    Horizon.THREE_YEARS: 36,
    Horizon.FOUR_YEARS: 48,
    Horizon.FIVE_YEARS: 60,
    Horizon.TEN_YEARS: 120,
}


class Scenario(str, Enum):
    NO_CHANGE = "no_change"
    WITH_CHANGE = "with_change"


class RiskBand(str, Enum):
    """Qualitative risk bands, ordered Low < Mod < High < Very High."""

    LOW = "Low"
    MOD = "Mod"
    HIGH = "High"
    VERY_HIGH = "Very High"


class RiskDriver(str, Enum):
    """Named features that can drive a condition risk."""

    BODY_FAT = "BF%"
    WAIST_TO_HEIGHT = "Waist:Height"
    NUTRITION = "Nutrition score"
    SYSTOLIC_BP = "SBP"
    RESTING_HR = "RHR"
    VISCERAL_FAT = "VAT"
    LOW_MUSCLE = "Low SMM"
    GRIP_Z = "Grip Z"
    PEAK = "Peak Score"


RISK_CONDITIONS = ("t2d", "osa", "htn", "nafld", "sarcopenia", "lowcrf")


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FoodEnvironment:
    """Home food environment answers (0-4 each)."""

    cook0_4: int = 0    # home-cooking frequency
    upf0_4: int = 0     # ultra-processed food prevalence

    @property
    def fe(self) -> float:
        """Food environment score in [0, 8]; higher is more favourable."""
        cook = max(0, min(4, self.cook0_4))
        upf = max(0, min(4, self.upf0_4))
        return max(0, min(8, (4 - upf) + cook))


@dataclass(frozen=True)
class InBody:
    """Body-composition scan. Unmeasured fields are zero."""

    weight: float = 0.0     # kg
    bf: float = 0.0         # body fat %
    smm: float = 0.0        # skeletal muscle mass, kg
    vat: float = 0.0        # visceral fat index
    waist: float = 0.0      # cm
    height: float = 0.0     # cm


@dataclass(frozen=True)
class Vitals:
    rhr: float = 60.0
    sbp: float | None = None
    dbp: float | None = None
    sex: str = "M"
    chron_age: float = 40.0


@dataclass(frozen=True)
class Grip:
    """Best-of grip strength per hand (kgf) with derived totals."""

    left: float = 0.0
    right: float = 0.0
    sum: float = 0.0
    rel: float = 0.0
    z: float | None = None


@dataclass(frozen=True)
class ParqScreen:
    """PAR-Q pre-exercise readiness answers."""

    chest_pain: bool = False
    dizziness: bool = False
    dx_condition: bool = False
    sob_mild: bool = False
    joint_issue: bool = False
    balance_neuro: bool = False
    recent_surgery: bool = False
    uncontrolled_bp_dm: str | None = None

    def requires_referral(self) -> bool:
        """True when any answer calls for medical clearance before training."""
        flags = (
            self.chest_pain,
            self.dizziness,
            self.dx_condition,
            self.sob_mild,
            self.joint_issue,
            self.balance_neuro,
            self.recent_surgery,
        )
        return any(flags) or bool(self.uncontrolled_bp_dm)


@dataclass(frozen=True)
class BehaviorContext:
    """Sustained behaviour change assumed by the with-change scenario."""

    workouts_per_week: float = 3.0
    adherence: float = 0.8
    protein_support: float = 1.0
    sleep_support: float = 1.0

    @classmethod
    def from_toggles(
        cls,
        workouts_per_week: float,
        *,
        adherent: bool = True,
        protein: bool = True,
        sleep: bool = True,
    ) -> BehaviorContext:
        """Build a context from the coach's on/off support toggles."""
        return cls(
            workouts_per_week=workouts_per_week,
            adherence=0.9 if adherent else 0.6,
            protein_support=1.0 if protein else 0.7,
            sleep_support=1.0 if sleep else 0.7,
        )


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PillarScores:
    """Four pillar scores plus the composite Peak score, 0-100.

    Nutrition can exceed 100 by its food-environment uplift.
    """

    ex: float = 0.0
    nu: float = 0.0
    sl: float = 0.0
    st: float = 0.0
    peak: float = 0.0

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class RiskResult:
    score: int
    band: RiskBand
    drivers: tuple[RiskDriver, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "band": self.band.value,
            "drivers": [d.value for d in self.drivers],
        }


@dataclass(frozen=True)
class RiskMap:
    """Risk results for the six tracked conditions."""

    t2d: RiskResult
    osa: RiskResult
    htn: RiskResult
    nafld: RiskResult
    sarcopenia: RiskResult
    lowcrf: RiskResult

    def items(self) -> Iterator[tuple[str, RiskResult]]:
        for name in RISK_CONDITIONS:
            yield name, getattr(self, name)

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return {name: result.to_dict() for name, result in self.items()}


@dataclass(frozen=True)
class HealthAge:
    """Biological age estimate; positive delta = older than chronological."""

    age: float
    delta: float

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class ClientState:
    """The measured present that projections simulate forward from."""

    vitals: Vitals
    inbody: InBody
    pillars: PillarScores
    grip_z: float = 0.0


@dataclass(frozen=True)
class Projection:
    horizon: Horizon
    scenario: Scenario
    inbody: InBody
    pillars: PillarScores
    health_age: HealthAge
    risks: RiskMap

    def to_dict(self) -> dict[str, Any]:
        return {
            "horizon": self.horizon.value,
            "scenario": self.scenario.value,
            "inbody": asdict(self.inbody),
            "pillars": self.pillars.to_dict(),
            "health_age": self.health_age.to_dict(),
            "risks": self.risks.to_dict(),
        }


@dataclass(frozen=True)
class ScenarioComparison:
    """No-change vs with-change projections for one horizon."""

    no_change: Projection
    with_change: Projection
    health_age_gain: float                  # years younger with change
    risk_reduction: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "no_change": self.no_change.to_dict(),
            "with_change": self.with_change.to_dict(),
            "health_age_gain": self.health_age_gain,
            "risk_reduction": dict(self.risk_reduction),
        }


@dataclass(frozen=True)
class TrajectoryPoint:
    label: str
    months: int
    no_change_age: float
    with_change_age: float


@dataclass(frozen=True)
class AssessmentInputs:
    """Everything the input supplier hands the engine for one session."""

    items: dict[str, float] = field(default_factory=dict)
    food: FoodEnvironment = field(default_factory=FoodEnvironment)
    vitals: Vitals = field(default_factory=Vitals)
    inbody: InBody = field(default_factory=InBody)
    grip_left: float = 0.0
    grip_right: float = 0.0
    grip_z: float | None = None
    parq: ParqScreen = field(default_factory=ParqScreen)


@dataclass(frozen=True)
class Assessment:
    """Current-state report for one client session."""

    pillars: PillarScores
    food_env_score: float
    grip: Grip
    whtr: float
    smm_rel: float
    risks: RiskMap
    health_age: HealthAge
    referral_required: bool

    def state(self, vitals: Vitals, inbody: InBody) -> ClientState:
        """Base state for projections, carrying this report's pillars and grip Z."""
        return ClientState(
            vitals=vitals,
            inbody=inbody,
            pillars=self.pillars,
            grip_z=self.grip.z if self.grip.z is not None else 0.0,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "pillars": self.pillars.to_dict(),
            "food_env_score": self.food_env_score,
            "grip": asdict(self.grip),
            "whtr": self.whtr,
            "smm_rel": self.smm_rel,
            "risks": self.risks.to_dict(),
            "health_age": self.health_age.to_dict(),
            "referral_required": self.referral_required,
        }
