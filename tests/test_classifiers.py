"""
Unit Tests for BMI and age classification
"""
import pytest

from lifespan.classifiers import calculate_bmi, body_mass_category, age_bracket
from lifespan.models import BodyMassCategory, AgeBracket


class TestCalculateBMI:

    def test_bmi_value(self):
        assert calculate_bmi(75, 180) == pytest.approx(23.148, abs=1e-3)

    def test_zero_height_is_rejected(self):
        with pytest.raises(ValueError):
            calculate_bmi(70, 0)

    def test_negative_height_is_rejected(self):
        with pytest.raises(ValueError):
            calculate_bmi(70, -170)


class TestBodyMassCategory:
    """A 200 cm height makes BMI equal to weight / 4."""

    def test_boundary_18_5_is_normal(self):
        assert body_mass_category(74, 200) == BodyMassCategory.NORMAL

    def test_boundary_25_is_overweight(self):
        assert body_mass_category(100, 200) == BodyMassCategory.OVERWEIGHT

    def test_boundary_30_is_obese(self):
        assert body_mass_category(120, 200) == BodyMassCategory.OBESE

    def test_underweight(self):
        assert body_mass_category(73.9, 200) == BodyMassCategory.UNDERWEIGHT

    def test_normal(self):
        assert body_mass_category(75, 180) == BodyMassCategory.NORMAL


class TestAgeBracket:

    @pytest.mark.parametrize("age,expected", [
        (1, AgeBracket.YOUNG),
        (29, AgeBracket.YOUNG),
        (30, AgeBracket.MIDDLE),
        (49, AgeBracket.MIDDLE),
        (50, AgeBracket.SENIOR),
        (69, AgeBracket.SENIOR),
        (70, AgeBracket.ELDERLY),
        (120, AgeBracket.ELDERLY),
    ])
    def test_brackets(self, age, expected):
        assert age_bracket(age) == expected
