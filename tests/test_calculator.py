"""
Unit Tests for the Life Expectancy Calculator
"""
import dataclasses

import pytest

from lifespan.calculator import LifeExpectancyCalculator, predict, round_years
from lifespan.models import UserProfile, Disease


@pytest.fixture
def calculator():
    return LifeExpectancyCalculator()


class TestPrediction:
    """End-to-end predictions for known profiles."""

    def test_healthy_profile(self, calculator, healthy_profile):
        assert calculator.predict(healthy_profile) == 76.8

    def test_high_risk_profile_hits_floor(self, calculator, high_risk_profile):
        assert calculator.predict(high_risk_profile) == 45.0

    def test_high_risk_is_lower_than_healthy(self, calculator, healthy_profile, high_risk_profile):
        assert calculator.predict(high_risk_profile) < calculator.predict(healthy_profile)

    def test_unsupported_country_uses_default_tables(self, calculator, unsupported_country_profile):
        assert calculator.predict(unsupported_country_profile) == 76.8

    def test_module_level_predict(self, healthy_profile):
        assert predict(healthy_profile) == 76.8

    def test_is_deterministic(self, calculator, high_risk_profile):
        assert calculator.predict(high_risk_profile) == calculator.predict(high_risk_profile)


class TestFloor:
    """A prediction always leaves at least five years beyond the current age."""

    @pytest.mark.parametrize("age", [1, 18, 40, 65, 85, 100, 120])
    @pytest.mark.parametrize("smoking,alcohol,severities", [
        ("never", "none", []),
        ("heavy", "heavy", ["severe", "severe"]),
        ("former", "moderate", ["mild"]),
    ])
    def test_floor_holds(self, calculator, age, smoking, alcohol, severities):
        profile = UserProfile(
            country="NGA", gender="male", height=160, weight=110, age=age,
            smoking=smoking, alcohol=alcohol,
            diseases=[Disease(name=f"Condition {i}", severity=s) for i, s in enumerate(severities)]
        )
        assert calculator.predict(profile) >= age + 5

    def test_breakdown_reports_floor(self, calculator, high_risk_profile, healthy_profile):
        assert calculator.get_multiplier_breakdown(high_risk_profile)["floor_applied"] is True
        assert calculator.get_multiplier_breakdown(healthy_profile)["floor_applied"] is False

    def test_very_old_profile(self, calculator):
        profile = UserProfile(country="USA", gender="female", height=160, weight=55, age=100)
        assert calculator.predict(profile) == 105.0


class TestSmokingImpact:

    def test_never_is_neutral(self, calculator):
        assert calculator.get_smoking_impact("never") == 1.0

    def test_former_smoker(self, calculator):
        assert calculator.get_smoking_impact("former") == 0.98

    def test_tabulated_levels(self, calculator):
        assert calculator.get_smoking_impact("light") == 0.95
        assert calculator.get_smoking_impact("moderate") == 0.90
        assert calculator.get_smoking_impact("heavy") == 0.80

    def test_case_insensitive(self, calculator):
        assert calculator.get_smoking_impact("HEAVY") == calculator.get_smoking_impact("heavy")
        assert calculator.get_smoking_impact("Former") == 0.98

    def test_unknown_is_neutral(self, calculator):
        assert calculator.get_smoking_impact("sometimes") == 1.0
        assert calculator.get_smoking_impact(None) == 1.0


class TestAlcoholImpact:

    def test_levels(self, calculator):
        assert calculator.get_alcohol_impact("none") == 1.0
        assert calculator.get_alcohol_impact("light") == 0.98
        assert calculator.get_alcohol_impact("moderate") == 0.95
        assert calculator.get_alcohol_impact("heavy") == 0.85

    def test_unknown_is_neutral(self, calculator):
        assert calculator.get_alcohol_impact("weekends") == 1.0


class TestDiseaseImpact:

    def test_empty_list_is_neutral(self, calculator):
        assert calculator.get_disease_impact([]) == 1.0
        assert calculator.get_disease_impact(None) == 1.0

    def test_single_disease(self, calculator):
        assert calculator.get_disease_impact([Disease("Asthma", "moderate")]) == 0.90

    def test_diseases_compound(self, calculator):
        diseases = [Disease("Diabetes", "severe"), Disease("Hypertension", "mild")]
        assert calculator.get_disease_impact(diseases) == pytest.approx(0.80 * 0.95)

    def test_adding_disease_never_increases_impact(self, calculator):
        diseases = []
        previous = calculator.get_disease_impact(diseases)
        for severity in ["mild", "severe", "moderate", "severe", "mild", "severe"]:
            diseases.append(Disease("Condition", severity))
            current = calculator.get_disease_impact(diseases)
            assert current <= previous
            previous = current

    @pytest.mark.parametrize("count", [1, 2, 3])
    def test_rising_severity_never_increases_impact(self, calculator, count):
        impacts = [
            calculator.get_disease_impact([Disease(f"Condition {i}", severity) for i in range(count)])
            for severity in ["mild", "moderate", "severe"]
        ]
        assert impacts == sorted(impacts, reverse=True)
        assert impacts[0] > impacts[2]

    def test_raising_one_severity_never_increases_impact(self, calculator):
        previous = None
        for severity in ["mild", "moderate", "severe"]:
            current = calculator.get_disease_impact([Disease("Asthma", "mild"), Disease("Diabetes", severity)])
            if previous is not None:
                assert current <= previous
            previous = current

    def test_no_lower_bound(self, calculator):
        diseases = [Disease(f"Condition {i}", "severe") for i in range(10)]
        assert calculator.get_disease_impact(diseases) == pytest.approx(0.80 ** 10)

    def test_unknown_severity_is_neutral(self, calculator):
        diseases = [Disease("Migraine", "unbearable"), Disease("Asthma", "MILD")]
        assert calculator.get_disease_impact(diseases) == 0.95


class TestHeightWeightAdjustment:

    def test_tall_normal_bmi(self, calculator):
        assert calculator.get_height_weight_adjustment(180, 75) == pytest.approx(1.02)

    def test_threshold_is_exclusive(self, calculator):
        assert calculator.get_height_weight_adjustment(170, 65) == 1.0

    def test_obese_short(self, calculator):
        assert calculator.get_height_weight_adjustment(160, 90) == pytest.approx(0.90)

    def test_overweight_tall(self, calculator):
        assert calculator.get_height_weight_adjustment(200, 100) == pytest.approx(0.97 * 1.02)


class TestBreakdown:

    def test_keys(self, calculator, healthy_profile):
        breakdown = calculator.get_multiplier_breakdown(healthy_profile)
        assert set(breakdown) == {
            "base_expectancy", "multipliers", "adjusted_expectancy", "floor_applied", "prediction"
        }
        assert list(breakdown["multipliers"]) == [
            "age", "smoking", "alcohol", "diseases", "height_weight", "country"
        ]

    def test_values(self, calculator, healthy_profile):
        breakdown = calculator.get_multiplier_breakdown(healthy_profile)
        assert breakdown["base_expectancy"] == 76.1
        assert breakdown["multipliers"]["age"] == 1.0
        assert breakdown["multipliers"]["country"] == pytest.approx(0.989604)
        assert breakdown["adjusted_expectancy"] == pytest.approx(76.815042, abs=1e-6)
        assert breakdown["prediction"] == 76.8

    def test_young_profile_bonus(self, calculator, healthy_profile):
        young = dataclasses.replace(healthy_profile, age=25)
        assert calculator.get_multiplier_breakdown(young)["multipliers"]["age"] == 1.05

    def test_former_smoker_scales_prediction(self, calculator, healthy_profile):
        former = dataclasses.replace(healthy_profile, smoking="former")
        adjusted = calculator.get_multiplier_breakdown(former)["adjusted_expectancy"]
        assert adjusted == pytest.approx(76.815042 * 0.98, abs=1e-5)

    def test_case_insensitive_profile(self, calculator, high_risk_profile):
        shouting = dataclasses.replace(
            high_risk_profile, gender="MALE", smoking="Heavy", alcohol="HEAVY",
            diseases=[Disease("Heart disease", "SEVERE")]
        )
        assert calculator.predict(shouting) == calculator.predict(high_risk_profile)

    def test_other_gender_uses_combined_baseline(self, calculator, healthy_profile):
        other = dataclasses.replace(healthy_profile, gender="other")
        assert calculator.get_multiplier_breakdown(other)["base_expectancy"] == 78.9


class TestRounding:

    def test_half_rounds_up(self):
        assert round_years(2.25) == 2.3
        assert round_years(76.85) == 76.9

    def test_negative_half_rounds_away_from_zero(self):
        assert round_years(-2.25) == -2.3

    def test_idempotent(self):
        for value in [76.815042, 45.0, -2.6616, 105.04999]:
            once = round_years(value)
            assert round_years(once) == once
