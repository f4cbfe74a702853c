"""
Unit Tests for the Reference Data Store
"""
import pytest

from lifespan.reference_data import REFERENCE_DATA, ReferenceData


ALL_PAIRS = [
    (country, gender)
    for country in REFERENCE_DATA.supported_countries()
    for gender in ("male", "female", "both")
]


class TestBaseExpectancy:
    """Tests for the country/gender baseline lookup."""

    @pytest.mark.parametrize("country,gender", ALL_PAIRS)
    def test_returns_tabulated_value(self, country, gender):
        expected = REFERENCE_DATA.base_life_expectancy[country][gender]
        assert REFERENCE_DATA.base_expectancy(country, gender) == expected

    def test_known_constants(self):
        assert REFERENCE_DATA.base_expectancy("USA", "male") == 76.1
        assert REFERENCE_DATA.base_expectancy("JPN", "female") == 87.7
        assert REFERENCE_DATA.base_expectancy("NGA", "both") == 55.2

    def test_gender_is_case_insensitive(self):
        assert REFERENCE_DATA.base_expectancy("FRA", "FEMALE") == 85.6

    def test_other_gender_uses_both(self):
        assert REFERENCE_DATA.base_expectancy("GBR", "other") == 81.2

    def test_missing_gender_uses_both(self):
        assert REFERENCE_DATA.base_expectancy("CAN", None) == 82.4
        assert REFERENCE_DATA.base_expectancy("CAN", "") == 82.4

    def test_unknown_country_uses_default(self):
        assert REFERENCE_DATA.base_expectancy("XYZ", "male") == 76.1
        assert REFERENCE_DATA.base_expectancy("XYZ", "other") == 78.9


class TestMultiplier:
    """Tests for the risk multiplier lookup."""

    def test_tabulated_values(self):
        assert REFERENCE_DATA.multiplier("smoking", "heavy") == 0.80
        assert REFERENCE_DATA.multiplier("alcohol", "light") == 0.98
        assert REFERENCE_DATA.multiplier("bmi", "obese") == 0.90
        assert REFERENCE_DATA.multiplier("diseases", "moderate") == 0.90

    def test_unknown_level_is_neutral(self):
        assert REFERENCE_DATA.multiplier("smoking", "occasionally") == 1.0
        assert REFERENCE_DATA.multiplier("alcohol", None) == 1.0

    def test_unknown_category_is_neutral(self):
        assert REFERENCE_DATA.multiplier("sleep", "poor") == 1.0

    def test_multipliers_within_unit_interval(self):
        for levels in REFERENCE_DATA.risk_multipliers.values():
            for value in levels.values():
                assert 0 < value <= 1.0


class TestCountryTables:
    """Tests for composite factors and the direct country lookup."""

    def test_usa_composite(self):
        assert REFERENCE_DATA.country_composite("USA") == pytest.approx(1.02 * 0.98 * 0.99)

    def test_composite_covers_every_country(self):
        assert set(REFERENCE_DATA.country_factors) == set(REFERENCE_DATA.base_life_expectancy)
        assert len(REFERENCE_DATA.supported_countries()) == 21

    def test_unknown_country_composite_uses_default(self):
        assert REFERENCE_DATA.country_composite("XYZ") == REFERENCE_DATA.country_composite("USA")

    def test_country_average_has_no_fallback(self):
        assert REFERENCE_DATA.country_average("ITA") == 82.9
        assert REFERENCE_DATA.country_average("XYZ") is None

    def test_country_names(self):
        assert REFERENCE_DATA.country_name("LKA") == "Sri Lanka"
        assert REFERENCE_DATA.country_region("EGY") == "Eastern Mediterranean"
        assert REFERENCE_DATA.country_name("XYZ") == "XYZ"
        assert REFERENCE_DATA.country_region("XYZ") is None


class TestImmutability:
    """Reference tables cannot be modified after construction."""

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            REFERENCE_DATA.base_life_expectancy["USA"] = {"male": 1.0}
        with pytest.raises(TypeError):
            REFERENCE_DATA.base_life_expectancy["USA"]["male"] = 1.0
        with pytest.raises(TypeError):
            REFERENCE_DATA.risk_multipliers["smoking"]["heavy"] = 1.0

    def test_dataclass_is_frozen(self):
        with pytest.raises(AttributeError):
            REFERENCE_DATA.default_country = "JPN"

    def test_is_reference_data_instance(self):
        assert isinstance(REFERENCE_DATA, ReferenceData)
