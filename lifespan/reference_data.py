"""
Reference tables for the life expectancy model.

Baseline life expectancy at birth by country and gender (WHO 2023 data),
risk factor multipliers, age bracket multipliers and per-country health
factors. All tables are wrapped in read-only mappings and bundled into a
single frozen ``ReferenceData`` value that is built once at import time.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, List


DEFAULT_COUNTRY = "USA"

# Multiplier for a former smoker (residual risk after quitting)
FORMER_SMOKER_MULTIPLIER = 0.98

# Taller people tend to live slightly longer
TALL_HEIGHT_THRESHOLD_CM = 170
TALL_HEIGHT_MULTIPLIER = 1.02

# Minimum number of years a prediction leaves beyond the current age
MINIMUM_REMAINING_YEARS = 5

NEUTRAL_MULTIPLIER = 1.0


def _freeze(table: dict) -> Mapping:
    """Wrap a nested dict in read-only mapping proxies."""
    return MappingProxyType({
        key: _freeze(value) if isinstance(value, dict) else value
        for key, value in table.items()
    })


_BASE_LIFE_EXPECTANCY = {
    "USA": {"male": 76.1, "female": 81.1, "both": 78.9},
    "GBR": {"male": 79.4, "female": 83.1, "both": 81.2},
    "CAN": {"male": 80.9, "female": 84.1, "both": 82.4},
    "AUS": {"male": 81.2, "female": 85.1, "both": 83.2},
    "DEU": {"male": 78.9, "female": 83.6, "both": 81.3},
    "FRA": {"male": 79.7, "female": 85.6, "both": 82.7},
    "ITA": {"male": 80.5, "female": 85.2, "both": 82.9},
    "ESP": {"male": 80.1, "female": 86.1, "both": 83.1},
    "JPN": {"male": 81.6, "female": 87.7, "both": 84.7},
    "CHN": {"male": 74.8, "female": 79.0, "both": 76.9},
    "IND": {"male": 67.5, "female": 70.2, "both": 68.8},
    "BRA": {"male": 72.8, "female": 79.1, "both": 75.9},
    "RUS": {"male": 66.5, "female": 77.2, "both": 71.8},
    "MEX": {"male": 72.1, "female": 77.9, "both": 75.1},
    "ZAF": {"male": 61.5, "female": 66.6, "both": 64.1},
    "EGY": {"male": 70.1, "female": 75.3, "both": 72.7},
    "NGA": {"male": 54.7, "female": 55.7, "both": 55.2},
    "TUR": {"male": 75.6, "female": 81.9, "both": 78.8},
    "IRN": {"male": 74.5, "female": 77.7, "both": 76.1},
    "THA": {"male": 71.7, "female": 78.8, "both": 75.3},
    "LKA": {"male": 72.1, "female": 78.9, "both": 75.5},
}

_RISK_MULTIPLIERS = {
    "smoking": {
        "light": 0.95,      # 5% reduction
        "moderate": 0.90,   # 10% reduction
        "heavy": 0.80,      # 20% reduction
    },
    "alcohol": {
        "light": 0.98,
        "moderate": 0.95,
        "heavy": 0.85,
    },
    "bmi": {
        "underweight": 0.95,
        "normal": 1.0,
        "overweight": 0.97,
        "obese": 0.90,
    },
    "diseases": {
        "none": 1.0,
        "mild": 0.95,
        "moderate": 0.90,
        "severe": 0.80,
    },
}

_AGE_MULTIPLIERS = {
    "young": 1.05,      # 5% increase for young adults
    "middle": 1.0,
    "senior": 0.95,
    "elderly": 0.90,
}

_COUNTRY_FACTORS = {
    "USA": {"healthcare": 1.02, "lifestyle": 0.98, "environment": 0.99},
    "GBR": {"healthcare": 1.03, "lifestyle": 0.99, "environment": 1.01},
    "CAN": {"healthcare": 1.04, "lifestyle": 1.01, "environment": 1.02},
    "AUS": {"healthcare": 1.04, "lifestyle": 1.02, "environment": 1.03},
    "DEU": {"healthcare": 1.03, "lifestyle": 1.00, "environment": 1.01},
    "FRA": {"healthcare": 1.04, "lifestyle": 1.01, "environment": 1.02},
    "ITA": {"healthcare": 1.03, "lifestyle": 1.01, "environment": 1.01},
    "ESP": {"healthcare": 1.03, "lifestyle": 1.01, "environment": 1.02},
    "JPN": {"healthcare": 1.05, "lifestyle": 1.03, "environment": 1.04},
    "CHN": {"healthcare": 1.01, "lifestyle": 0.98, "environment": 0.97},
    "IND": {"healthcare": 0.97, "lifestyle": 0.95, "environment": 0.94},
    "BRA": {"healthcare": 0.99, "lifestyle": 0.97, "environment": 0.96},
    "RUS": {"healthcare": 0.96, "lifestyle": 0.93, "environment": 0.92},
    "MEX": {"healthcare": 0.98, "lifestyle": 0.96, "environment": 0.95},
    "ZAF": {"healthcare": 0.94, "lifestyle": 0.91, "environment": 0.90},
    "EGY": {"healthcare": 0.97, "lifestyle": 0.94, "environment": 0.93},
    "NGA": {"healthcare": 0.92, "lifestyle": 0.89, "environment": 0.88},
    "TUR": {"healthcare": 0.99, "lifestyle": 0.96, "environment": 0.95},
    "IRN": {"healthcare": 0.98, "lifestyle": 0.95, "environment": 0.94},
    "THA": {"healthcare": 0.99, "lifestyle": 0.96, "environment": 0.95},
    "LKA": {"healthcare": 0.98, "lifestyle": 0.96, "environment": 0.95},
}

_COUNTRIES = {
    "USA": {"name": "United States", "region": "Americas"},
    "GBR": {"name": "United Kingdom", "region": "Europe"},
    "CAN": {"name": "Canada", "region": "Americas"},
    "AUS": {"name": "Australia", "region": "Western Pacific"},
    "DEU": {"name": "Germany", "region": "Europe"},
    "FRA": {"name": "France", "region": "Europe"},
    "ITA": {"name": "Italy", "region": "Europe"},
    "ESP": {"name": "Spain", "region": "Europe"},
    "JPN": {"name": "Japan", "region": "Western Pacific"},
    "CHN": {"name": "China", "region": "Western Pacific"},
    "IND": {"name": "India", "region": "South-East Asia"},
    "BRA": {"name": "Brazil", "region": "Americas"},
    "RUS": {"name": "Russia", "region": "Europe"},
    "MEX": {"name": "Mexico", "region": "Americas"},
    "ZAF": {"name": "South Africa", "region": "Africa"},
    "EGY": {"name": "Egypt", "region": "Eastern Mediterranean"},
    "NGA": {"name": "Nigeria", "region": "Africa"},
    "TUR": {"name": "Turkey", "region": "Europe"},
    "IRN": {"name": "Iran", "region": "Eastern Mediterranean"},
    "THA": {"name": "Thailand", "region": "South-East Asia"},
    "LKA": {"name": "Sri Lanka", "region": "South-East Asia"},
}


@dataclass(frozen=True)
class ReferenceData:
    """Immutable bundle of every table the scoring engine reads."""
    base_life_expectancy: Mapping[str, Mapping[str, float]]
    risk_multipliers: Mapping[str, Mapping[str, float]]
    age_multipliers: Mapping[str, float]
    country_factors: Mapping[str, Mapping[str, float]]
    countries: Mapping[str, Mapping[str, str]]
    default_country: str = DEFAULT_COUNTRY

    def base_expectancy(self, country: str, gender: Optional[str]) -> float:
        """Baseline years for a country and gender.

        Falls back to the country's "both" value for any gender other than
        male/female, and to the default country when the code is unknown.
        """
        country_data = self.base_life_expectancy.get(country)
        if country_data is None:
            country_data = self.base_life_expectancy[self.default_country]

        gender_key = (gender or "").lower()
        if gender_key in ("male", "female") and gender_key in country_data:
            return country_data[gender_key]
        return country_data["both"]

    def multiplier(self, category: str, level: Optional[str]) -> float:
        """Tabulated multiplier, or the neutral 1.0 for an unrecognized level."""
        levels = self.risk_multipliers.get(category, {})
        return levels.get((level or "").lower(), NEUTRAL_MULTIPLIER)

    def age_multiplier(self, bracket: str) -> float:
        return self.age_multipliers.get(bracket, NEUTRAL_MULTIPLIER)

    def country_composite(self, country: str) -> float:
        """Product of healthcare, lifestyle and environment factors."""
        factors = self.country_factors.get(country)
        if factors is None:
            factors = self.country_factors[self.default_country]
        return factors["healthcare"] * factors["lifestyle"] * factors["environment"]

    def country_average(self, country: str) -> Optional[float]:
        """Direct lookup of the "both" baseline, None when the country is unknown."""
        country_data = self.base_life_expectancy.get(country)
        if country_data is None:
            return None
        return country_data["both"]

    def is_supported(self, country: str) -> bool:
        return country in self.base_life_expectancy

    def supported_countries(self) -> List[str]:
        return list(self.base_life_expectancy.keys())

    def country_name(self, country: str) -> str:
        info = self.countries.get(country)
        return info["name"] if info else country

    def country_region(self, country: str) -> Optional[str]:
        info = self.countries.get(country)
        return info["region"] if info else None


REFERENCE_DATA = ReferenceData(
    base_life_expectancy=_freeze(_BASE_LIFE_EXPECTANCY),
    risk_multipliers=_freeze(_RISK_MULTIPLIERS),
    age_multipliers=_freeze(_AGE_MULTIPLIERS),
    country_factors=_freeze(_COUNTRY_FACTORS),
    countries=_freeze(_COUNTRIES),
)
