"""Unit tests for the health-age model."""

from __future__ import annotations

import pytest

from elevate.core.config.weights import ElevateWeights, HealthAgeWeights
from elevate.domains.wellness.domain_logic.health_age import (
    compute_health_age,
    health_age_terms,
)
from elevate.domains.wellness.domain_logic.models import InBody, PillarScores, Vitals

_REFERENCE_VITALS = Vitals(rhr=60, sbp=120, chron_age=45)
_REFERENCE_INBODY = InBody(weight=75, bf=22, smm=32, vat=8, waist=85, height=170)
_PEAK_100 = PillarScores(ex=100, nu=100, sl=100, st=100, peak=100)


class TestHealthAge:
    def test_reference_client_has_zero_delta(self):
        result = compute_health_age(_REFERENCE_VITALS, _REFERENCE_INBODY, _PEAK_100, 0.0)
        assert result.delta == 0.0
        assert result.age == 45.0

    def test_sample_client_is_older(self, sample_vitals, sample_inbody):
        pillars = PillarScores(ex=50, nu=50, sl=50, st=50, peak=50)
        result = compute_health_age(sample_vitals, sample_inbody, pillars, 0.0)
        # Z = .15*10/12 + .15*10/15 + .2*6/8 + .2*0.043/0.05 + .2*50/25 = 0.947
        assert result.delta == pytest.approx(5.2)
        assert result.age == pytest.approx(50.2)
        assert result.age > sample_vitals.chron_age

    def test_strong_grip_lowers_age(self):
        weak = compute_health_age(_REFERENCE_VITALS, _REFERENCE_INBODY, _PEAK_100, -2.0)
        strong = compute_health_age(_REFERENCE_VITALS, _REFERENCE_INBODY, _PEAK_100, 2.0)
        assert strong.delta < 0 < weak.delta
        assert strong.age < 45 < weak.age

    def test_missing_sbp_contributes_nothing(self):
        no_bp = Vitals(rhr=60, sbp=None, chron_age=45)
        result = compute_health_age(no_bp, _REFERENCE_INBODY, _PEAK_100, 0.0)
        assert result.delta == 0.0

    def test_non_finite_grip_treated_as_zero(self):
        result = compute_health_age(
            _REFERENCE_VITALS, _REFERENCE_INBODY, _PEAK_100, float("nan")
        )
        assert result.delta == 0.0

    def test_zero_height_uses_zero_ratio(self):
        inbody = InBody(bf=22, waist=85, height=0)
        terms = health_age_terms(_REFERENCE_VITALS, inbody, _PEAK_100, 0.0)
        assert terms["whtr"] == pytest.approx(-10.0)

    def test_no_clamping_on_extreme_inputs(self):
        extreme = compute_health_age(
            Vitals(rhr=120, sbp=200, chron_age=30),
            InBody(bf=55, waist=140, height=160),
            PillarScores(),
            -3.0,
        )
        assert extreme.delta > 20
        assert extreme.age == pytest.approx(30 + extreme.delta)

    def test_rounded_to_one_decimal(self, sample_vitals, sample_inbody):
        result = compute_health_age(sample_vitals, sample_inbody, PillarScores(peak=37.3), 0.4)
        assert result.delta == round(result.delta, 1)
        assert result.age == round(result.age, 1)

    def test_custom_years_per_z(self, sample_vitals, sample_inbody):
        pillars = PillarScores(peak=50)
        doubled = ElevateWeights(health_age=HealthAgeWeights(years_per_z=11.0))
        base = compute_health_age(sample_vitals, sample_inbody, pillars, 0.0)
        scaled = compute_health_age(sample_vitals, sample_inbody, pillars, 0.0, doubled)
        assert scaled.delta == pytest.approx(base.delta * 2, abs=0.1)
