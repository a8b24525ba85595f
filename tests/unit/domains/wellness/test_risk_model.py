"""Unit tests for the condition risk model."""

from __future__ import annotations

from dataclasses import replace

import pytest

from elevate.core.config.weights import ElevateWeights, RiskWeights
from elevate.domains.wellness.domain_logic.assessment import build_assessment
from elevate.domains.wellness.domain_logic.models import (
    RISK_CONDITIONS,
    InBody,
    PillarScores,
    RiskBand,
    RiskDriver,
    Vitals,
)
from elevate.domains.wellness.domain_logic.projection import project_with_change
from elevate.domains.wellness.domain_logic.risk_model import (
    CONDITION_DRIVERS,
    DEFAULT_SBP,
    RiskFeatures,
    band_from_score,
    compute_risk_indices,
    risk_features,
)


def _features(**overrides) -> RiskFeatures:
    base = RiskFeatures(
        bf=22.0,
        waist=85.0,
        height=170.0,
        whtr=0.5,
        nu=60.0,
        sbp=120.0,
        rhr=60.0,
        vat=10.0,
        smm_rel=0.4,
        grip_z=0.0,
        peak=60.0,
    )
    return replace(base, **overrides)


# ===========================================================================
# Banding
# ===========================================================================

class TestBanding:
    @pytest.mark.parametrize(
        "score,band",
        [
            (0, RiskBand.LOW),
            (24.999, RiskBand.LOW),
            (25, RiskBand.MOD),
            (49, RiskBand.MOD),
            (50, RiskBand.HIGH),
            (74.9, RiskBand.HIGH),
            (75, RiskBand.VERY_HIGH),
            (100, RiskBand.VERY_HIGH),
        ],
    )
    def test_boundaries(self, score, band):
        assert band_from_score(score) is band

    def test_band_labels(self):
        assert [b.value for b in RiskBand] == ["Low", "Mod", "High", "Very High"]


# ===========================================================================
# Scores
# ===========================================================================

class TestRiskIndices:
    def test_all_six_conditions_present(self):
        risks = compute_risk_indices(_features())
        assert [name for name, _ in risks.items()] == list(RISK_CONDITIONS)

    def test_scores_are_bounded_integers(self):
        for bf in (5, 22, 40, 70):
            for sbp in (90, 120, 200):
                risks = compute_risk_indices(_features(bf=bf, sbp=sbp, whtr=0.7, vat=30))
                for _, result in risks.items():
                    assert isinstance(result.score, int)
                    assert 0 <= result.score <= 100
                    assert result.band is band_from_score(result.score)

    def test_reference_client_htn_at_midpoint(self):
        # SBP 120 and RHR 60 are the baselines -> logit 0 -> 50
        assert compute_risk_indices(_features()).htn.score == 50

    @pytest.mark.parametrize("condition", ["t2d", "osa", "nafld"])
    def test_body_fat_monotonic(self, condition):
        previous = -1
        for bf in range(5, 60, 3):
            score = getattr(compute_risk_indices(_features(bf=bf)), condition).score
            assert score >= previous
            previous = score

    def test_high_bp_raises_htn(self):
        normal = compute_risk_indices(_features()).htn.score
        high = compute_risk_indices(_features(sbp=160, rhr=85)).htn.score
        assert high > normal
        assert band_from_score(high) is RiskBand.VERY_HIGH

    def test_low_nutrition_bonus_is_a_step(self):
        at_50 = compute_risk_indices(_features(nu=50)).t2d.score
        below = compute_risk_indices(_features(nu=49.9)).t2d.score
        far_below = compute_risk_indices(_features(nu=10)).t2d.score
        assert below > at_50
        assert below == far_below

    def test_t2d_zero_height_does_not_divide_by_zero(self):
        result = compute_risk_indices(_features(height=0, whtr=0)).t2d
        assert 0 <= result.score <= 100

    def test_low_peak_raises_low_crf(self):
        fit = compute_risk_indices(_features(peak=90)).lowcrf.score
        unfit = compute_risk_indices(_features(peak=20)).lowcrf.score
        assert fit < 50 < unfit


class TestSarcopenia:
    def test_no_triggers_is_midpoint(self):
        assert compute_risk_indices(_features()).sarcopenia.score == 50

    def test_low_muscle_only(self):
        assert compute_risk_indices(_features(smm_rel=0.29)).sarcopenia.score == 62

    def test_low_grip_only(self):
        assert compute_risk_indices(_features(grip_z=-1.5)).sarcopenia.score == 65

    def test_both_triggers(self):
        result = compute_risk_indices(_features(smm_rel=0.2, grip_z=-2)).sarcopenia
        assert result.score == 75
        assert result.band is RiskBand.VERY_HIGH

    def test_step_not_continuous_below_threshold(self):
        just_below = compute_risk_indices(_features(smm_rel=0.29)).sarcopenia.score
        far_below = compute_risk_indices(_features(smm_rel=0.05)).sarcopenia.score
        assert just_below == far_below

    def test_grip_threshold_is_strict(self):
        assert compute_risk_indices(_features(grip_z=-1.0)).sarcopenia.score == 50


# ===========================================================================
# Drivers
# ===========================================================================

class TestDrivers:
    def test_driver_table_covers_every_condition(self):
        assert set(CONDITION_DRIVERS) == set(RISK_CONDITIONS)

    def test_drivers_in_fixed_order(self):
        risks = compute_risk_indices(_features())
        assert risks.t2d.drivers == (
            RiskDriver.BODY_FAT,
            RiskDriver.WAIST_TO_HEIGHT,
            RiskDriver.NUTRITION,
        )
        assert risks.nafld.drivers == (RiskDriver.VISCERAL_FAT, RiskDriver.BODY_FAT)
        assert risks.lowcrf.drivers == (RiskDriver.PEAK,)

    def test_to_dict_uses_labels(self):
        data = compute_risk_indices(_features()).to_dict()
        assert data["htn"]["drivers"] == ["SBP", "RHR"]
        assert data["htn"]["band"] == "High"


# ===========================================================================
# Feature assembly
# ===========================================================================

class TestRiskFeatures:
    def test_missing_sbp_defaults(self):
        features = risk_features(
            Vitals(rhr=65),
            InBody(weight=80, bf=20, smm=32, vat=8, waist=85, height=170),
            PillarScores(nu=70, peak=70),
            None,
        )
        assert features.sbp == DEFAULT_SBP
        assert features.grip_z == 0.0
        assert features.whtr == 0.5
        assert features.smm_rel == pytest.approx(0.4)

    def test_unknown_weight_relative_muscle(self):
        features = risk_features(Vitals(), InBody(smm=30), PillarScores(), 0.0)
        assert features.smm_rel == 30.0


# ===========================================================================
# Injected weights
# ===========================================================================

class TestRiskWeights:
    def test_defaults_match_explicit_weights(self):
        features = _features(bf=31, sbp=138, vat=14, smm_rel=0.25, peak=42)
        assert compute_risk_indices(features) == compute_risk_indices(features, ElevateWeights())

    def test_shifted_baseline_moves_score(self):
        stricter = ElevateWeights(risk=RiskWeights(htn_sbp_ref=110.0))
        features = _features(sbp=120)
        assert compute_risk_indices(features).htn.score == 50
        assert compute_risk_indices(features, stricter).htn.score > 50

    def test_step_bonus_configurable(self):
        no_bonus = ElevateWeights(risk=RiskWeights(sarcopenia_low_muscle_bonus=0.0))
        assert compute_risk_indices(_features(smm_rel=0.2), no_bonus).sarcopenia.score == 50

    def test_weights_reach_assessment(self, sample_inputs):
        stricter = ElevateWeights(risk=RiskWeights(lowcrf_peak_ref=80.0))
        default = build_assessment(sample_inputs)
        shifted = build_assessment(sample_inputs, stricter)
        assert shifted.risks.lowcrf.score > default.risks.lowcrf.score
        assert shifted.risks.t2d == default.risks.t2d

    def test_weights_reach_projection(self, sample_state, behavior):
        stricter = ElevateWeights(risk=RiskWeights(nafld_vat_ref=5.0))
        default = project_with_change(sample_state, behavior, "1y")
        shifted = project_with_change(sample_state, behavior, "1y", stricter)
        assert shifted.risks.nafld.score > default.risks.nafld.score
