import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Any, List, Optional

from .models import UserProfile, Disease, SmokingStatus, AlcoholConsumption, Severity
from .classifiers import body_mass_category, age_bracket
from .reference_data import (
    ReferenceData,
    REFERENCE_DATA,
    FORMER_SMOKER_MULTIPLIER,
    TALL_HEIGHT_THRESHOLD_CM,
    TALL_HEIGHT_MULTIPLIER,
    MINIMUM_REMAINING_YEARS,
    NEUTRAL_MULTIPLIER,
)

logger = logging.getLogger(__name__)

PRECISION = Decimal('0.1')


def round_years(value: float) -> float:
    """Round to one decimal place, halves away from zero."""
    return float(Decimal(str(value)).quantize(PRECISION, rounding=ROUND_HALF_UP))


class LifeExpectancyCalculator:
    """Combines a country/gender baseline with every lifestyle multiplier."""

    def __init__(self, reference_data: ReferenceData = REFERENCE_DATA):
        self.reference = reference_data

    def get_smoking_impact(self, smoking: Optional[str]) -> float:
        status = SmokingStatus.parse(smoking)
        if status is None or status == SmokingStatus.NEVER:
            return NEUTRAL_MULTIPLIER
        if status == SmokingStatus.FORMER:
            return FORMER_SMOKER_MULTIPLIER
        return self.reference.multiplier("smoking", status.value)

    def get_alcohol_impact(self, alcohol: Optional[str]) -> float:
        consumption = AlcoholConsumption.parse(alcohol)
        if consumption is None or consumption == AlcoholConsumption.NONE:
            return NEUTRAL_MULTIPLIER
        return self.reference.multiplier("alcohol", consumption.value)

    def get_disease_impact(self, diseases: Optional[List[Disease]]) -> float:
        """Product of the severity multipliers of every disease.

        Multiple diseases compound with no lower bound. An unrecognized
        severity leaves the product unchanged.
        """
        if not diseases:
            return self.reference.multiplier("diseases", "none")

        total_impact = 1.0
        for disease in diseases:
            severity = Severity.parse(disease.severity)
            if severity is not None:
                total_impact *= self.reference.multiplier("diseases", severity.value)
        return total_impact

    def get_height_weight_adjustment(self, height: float, weight: float) -> float:
        category = body_mass_category(weight, height)
        bmi_multiplier = self.reference.multiplier("bmi", category.value)
        height_adjustment = TALL_HEIGHT_MULTIPLIER if height > TALL_HEIGHT_THRESHOLD_CM else 1.0
        return bmi_multiplier * height_adjustment

    def get_country_adjustment(self, country: str) -> float:
        return self.reference.country_composite(country)

    def get_multiplier_breakdown(self, profile: UserProfile) -> Dict[str, Any]:
        """Every intermediate value of a prediction, keyed by name."""
        base = self.reference.base_expectancy(profile.country, profile.gender)
        multipliers = {
            "age": self.reference.age_multiplier(age_bracket(profile.age).value),
            "smoking": self.get_smoking_impact(profile.smoking),
            "alcohol": self.get_alcohol_impact(profile.alcohol),
            "diseases": self.get_disease_impact(profile.diseases),
            "height_weight": self.get_height_weight_adjustment(profile.height, profile.weight),
            "country": self.get_country_adjustment(profile.country),
        }

        adjusted = base
        for value in multipliers.values():
            adjusted *= value

        remaining_years = adjusted - profile.age
        floor_applied = remaining_years < MINIMUM_REMAINING_YEARS
        final = profile.age + max(remaining_years, MINIMUM_REMAINING_YEARS)

        breakdown = {
            "base_expectancy": base,
            "multipliers": multipliers,
            "adjusted_expectancy": adjusted,
            "floor_applied": floor_applied,
            "prediction": round_years(final),
        }
        logger.debug(f"Prediction breakdown for {profile.country}/{profile.gender}: {breakdown}")
        return breakdown

    def predict(self, profile: UserProfile) -> float:
        """Predicted life expectancy in years, rounded to one decimal place."""
        return self.get_multiplier_breakdown(profile)["prediction"]


_default_calculator = LifeExpectancyCalculator()


def predict(profile: UserProfile) -> float:
    """Predict with the shared reference tables."""
    return _default_calculator.predict(profile)
