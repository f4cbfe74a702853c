"""
Unit Tests for the Analysis Generator
"""
import dataclasses

import pytest

from lifespan.analysis import AnalysisGenerator, analyze
from lifespan.calculator import predict
from lifespan.models import UserProfile, Disease, RiskLevel


@pytest.fixture
def generator():
    return AnalysisGenerator()


class TestRiskLevel:

    @pytest.mark.parametrize("count,expected", [
        (0, RiskLevel.LOW),
        (1, RiskLevel.MEDIUM),
        (2, RiskLevel.MEDIUM),
        (3, RiskLevel.HIGH),
        (4, RiskLevel.HIGH),
    ])
    def test_from_factor_count(self, count, expected):
        assert RiskLevel.from_factor_count(count) == expected

    def test_healthy_is_low(self, generator, healthy_profile):
        report = generator.analyze(healthy_profile, 76.8)
        assert report.risk_level == "low"
        assert report.factors == []

    def test_high_risk_is_high(self, generator, high_risk_profile):
        report = generator.analyze(high_risk_profile, predict(high_risk_profile))
        assert report.prediction == 45.0
        assert report.risk_level == "high"

    def test_single_factor_is_medium(self, generator, healthy_profile):
        smoker = dataclasses.replace(healthy_profile, smoking="light")
        assert generator.analyze(smoker, 70.0).risk_level == "medium"


class TestFactors:

    def test_order(self, generator):
        profile = UserProfile(
            country="USA", gender="female", height=160, weight=100, age=50,
            smoking="moderate", alcohol="heavy",
            diseases=[Disease("Diabetes", "moderate")]
        )
        report = generator.analyze(profile, 60.0)
        assert [f.name for f in report.factors] == ["Smoking", "Alcohol", "BMI", "Health Conditions"]
        assert all(f.impact == "negative" for f in report.factors)

    def test_former_smoker_is_flagged(self, generator, healthy_profile):
        former = dataclasses.replace(healthy_profile, smoking="former")
        report = generator.analyze(former, 75.0)
        assert [f.name for f in report.factors] == ["Smoking"]
        assert "Consider quitting smoking to improve life expectancy" in report.recommendations

    @pytest.mark.parametrize("alcohol", ["none", "light", "moderate"])
    def test_alcohol_below_heavy_not_flagged(self, generator, healthy_profile, alcohol):
        drinker = dataclasses.replace(healthy_profile, alcohol=alcohol)
        assert generator.analyze(drinker, 76.0).factors == []

    def test_heavy_alcohol_flagged(self, generator, healthy_profile):
        drinker = dataclasses.replace(healthy_profile, alcohol="Heavy")
        report = generator.analyze(drinker, 70.0)
        assert [f.name for f in report.factors] == ["Alcohol"]
        assert report.factors[0].description == "Heavy alcohol consumption affects longevity"

    def test_bmi_description_names_category(self, generator, healthy_profile):
        underweight = dataclasses.replace(healthy_profile, weight=55)
        report = generator.analyze(underweight, 75.0)
        assert report.factors[0].description == "underweight BMI can affect health outcomes"

    def test_one_recommendation_per_factor(self, generator, high_risk_profile):
        report = generator.analyze(high_risk_profile, 80.0)
        assert len(report.recommendations) == len(report.factors)


class TestCountryComparison:

    def test_supported_country(self, generator, healthy_profile):
        report = generator.analyze(healthy_profile, 76.8)
        comparison = report.country_comparison
        assert comparison.country == "USA"
        assert comparison.average == 78.9
        assert comparison.difference == -2.1
        assert comparison.percentage == -2.7

    def test_above_average(self, generator):
        comparison = generator.get_country_comparison("JPN", 90.0)
        assert comparison.difference == 5.3
        assert comparison.percentage == 6.3

    def test_unsupported_country_has_no_comparison(self, generator, unsupported_country_profile):
        prediction = predict(unsupported_country_profile)
        report = generator.analyze(unsupported_country_profile, prediction)
        assert prediction == 76.8
        assert report.country_comparison is None
        assert not any("below the average" in r for r in report.recommendations)

    def test_unified_fallback_compares_with_default(self, unsupported_country_profile):
        generator = AnalysisGenerator(unify_country_fallback=True)
        report = generator.analyze(unsupported_country_profile, 76.8)
        assert report.country_comparison.country == "USA"
        assert report.country_comparison.difference == -2.1

    def test_below_average_recommendation(self, generator, healthy_profile):
        report = generator.analyze(healthy_profile, 76.8)
        assert report.recommendations == [
            "Your prediction is below the average for USA (78.9 years). "
            "Focus on improving lifestyle factors."
        ]

    def test_no_recommendation_when_above_average(self, generator, healthy_profile):
        report = generator.analyze(healthy_profile, 80.0)
        assert report.recommendations == []


class TestReportSerialization:

    def test_to_dict(self, healthy_profile):
        report = analyze(healthy_profile, 76.8)
        data = report.to_dict()
        assert data["prediction"] == 76.8
        assert data["risk_level"] == "low"
        assert data["country_comparison"]["country"] == "USA"
        assert data["factors"] == []
