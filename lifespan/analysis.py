"""
Explanatory report for a prediction: contributing factors, recommendations,
risk level and a comparison against the national average.
"""

from typing import Optional

from .models import (
    UserProfile,
    AnalysisReport,
    Factor,
    CountryComparison,
    Impact,
    RiskLevel,
    SmokingStatus,
    AlcoholConsumption,
    BodyMassCategory,
)
from .classifiers import body_mass_category
from .calculator import round_years
from .reference_data import ReferenceData, REFERENCE_DATA


class AnalysisGenerator:
    """Builds an AnalysisReport from a profile and its prediction.

    The country comparison is a direct lookup with no fallback, so an
    unsupported country yields a prediction but no comparison. Pass
    ``unify_country_fallback=True`` to compare against the default
    country instead, the same way the prediction does.
    """

    def __init__(self, reference_data: ReferenceData = REFERENCE_DATA,
                 unify_country_fallback: bool = False):
        self.reference = reference_data
        self.unify_country_fallback = unify_country_fallback

    def _comparison_country(self, country: str) -> Optional[str]:
        if self.reference.is_supported(country):
            return country
        if self.unify_country_fallback:
            return self.reference.default_country
        return None

    def get_country_comparison(self, country: str, prediction: float) -> Optional[CountryComparison]:
        comparison_country = self._comparison_country(country)
        if comparison_country is None:
            return None

        average = self.reference.country_average(comparison_country)
        difference = prediction - average
        return CountryComparison(
            country=comparison_country,
            average=average,
            difference=round_years(difference),
            percentage=round_years(difference / average * 100),
        )

    def analyze(self, profile: UserProfile, prediction: float) -> AnalysisReport:
        report = AnalysisReport(
            prediction=prediction,
            country_comparison=self.get_country_comparison(profile.country, prediction),
        )

        if SmokingStatus.parse(profile.smoking) != SmokingStatus.NEVER:
            report.factors.append(Factor(
                name="Smoking",
                impact=Impact.NEGATIVE.value,
                description="Smoking reduces life expectancy significantly",
            ))
            report.recommendations.append("Consider quitting smoking to improve life expectancy")

        # Light and moderate drinking are not flagged
        if AlcoholConsumption.parse(profile.alcohol) == AlcoholConsumption.HEAVY:
            report.factors.append(Factor(
                name="Alcohol",
                impact=Impact.NEGATIVE.value,
                description="Heavy alcohol consumption affects longevity",
            ))
            report.recommendations.append("Reduce alcohol consumption to moderate levels")

        category = body_mass_category(profile.weight, profile.height)
        if category != BodyMassCategory.NORMAL:
            report.factors.append(Factor(
                name="BMI",
                impact=Impact.NEGATIVE.value,
                description=f"{category.value} BMI can affect health outcomes",
            ))
            report.recommendations.append("Maintain a healthy BMI through diet and exercise")

        if profile.diseases:
            report.factors.append(Factor(
                name="Health Conditions",
                impact=Impact.NEGATIVE.value,
                description="Existing health conditions require management",
            ))
            report.recommendations.append("Work with healthcare providers to manage existing conditions")

        comparison_country = self._comparison_country(profile.country)
        if comparison_country is not None:
            country_average = self.reference.country_average(comparison_country)
            if prediction < country_average:
                report.recommendations.append(
                    f"Your prediction is below the average for {comparison_country} "
                    f"({country_average} years). Focus on improving lifestyle factors."
                )

        report.risk_level = RiskLevel.from_factor_count(len(report.factors)).value
        return report


_default_generator = AnalysisGenerator()


def analyze(profile: UserProfile, prediction: float) -> AnalysisReport:
    """Analyze with the shared reference tables."""
    return _default_generator.analyze(profile, prediction)
