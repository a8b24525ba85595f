"""Shared test fixtures for Elevate tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Test hermeticity
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _force_hermetic_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ELEVATE_WEIGHTS_PATH", "")
    monkeypatch.setenv("ELEVATE_DEFAULT_HORIZON", "6mo")
    monkeypatch.setenv("ELEVATE_LOG_LEVEL", "info")

# Allow running tests without `pip install -e .` by making `src/` importable.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_SRC_DIR = _PROJECT_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from elevate.core.config.weights import DEFAULT_PILLAR_ITEMS, ElevateWeights  # noqa: E402
from elevate.domains.wellness.domain_logic.models import (  # noqa: E402
    AssessmentInputs,
    BehaviorContext,
    ClientState,
    FoodEnvironment,
    InBody,
    PillarScores,
    Vitals,
)

PROFILE_PATH = (
    _SRC_DIR / "elevate" / "domains" / "wellness" / "profiles" / "elevate_weights.v1.yaml"
)


def all_items(score: float) -> dict[str, float]:
    """Every default pillar item answered with the same score."""
    return {code: score for codes in DEFAULT_PILLAR_ITEMS.values() for code in codes}


# ---------------------------------------------------------------------------
# Engine fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def weights() -> ElevateWeights:
    return ElevateWeights()


@pytest.fixture
def sample_vitals() -> Vitals:
    return Vitals(rhr=70, sbp=130, sex="M", chron_age=45)


@pytest.fixture
def sample_inbody() -> InBody:
    return InBody(weight=80, bf=28, smm=30, vat=12, waist=95, height=175)


@pytest.fixture
def sample_inputs(sample_vitals: Vitals, sample_inbody: InBody) -> AssessmentInputs:
    """Mid-range client: every item answered 2, neutral food environment (fe=4)."""
    return AssessmentInputs(
        items=all_items(2),
        food=FoodEnvironment(cook0_4=2, upf0_4=2),
        vitals=sample_vitals,
        inbody=sample_inbody,
        grip_left=24,
        grip_right=26,
        grip_z=0.0,
    )


@pytest.fixture
def sample_state(sample_vitals: Vitals, sample_inbody: InBody) -> ClientState:
    return ClientState(
        vitals=sample_vitals,
        inbody=sample_inbody,
        pillars=PillarScores(ex=50.0, nu=50.0, sl=50.0, st=50.0, peak=50.0),
        grip_z=0.0,
    )


@pytest.fixture
def behavior() -> BehaviorContext:
    return BehaviorContext(workouts_per_week=3, adherence=0.8, protein_support=1.0, sleep_support=1.0)


@pytest.fixture
def tool_args() -> dict:
    """MCP tool arguments matching the sample client."""
    return {
        "items": all_items(2),
        "food": {"cook0_4": 2, "upf0_4": 2},
        "vitals": {"rhr": 70, "sbp": 130, "chron_age": 45},
        "inbody": {"weight": 80, "bf": 28, "smm": 30, "vat": 12, "waist": 95, "height": 175},
        "grip": {"left": 24, "right": 26, "z": 0.0},
    }
