"""Bucket raw measurements into the categories the reference tables are keyed by."""

from .models import BodyMassCategory, AgeBracket


def calculate_bmi(weight: float, height: float) -> float:
    """Body mass index from weight in kilograms and height in centimetres."""
    if height is None or height <= 0:
        raise ValueError("Height must be greater than zero")
    height_in_meters = height / 100
    return weight / (height_in_meters * height_in_meters)


def body_mass_category(weight: float, height: float) -> BodyMassCategory:
    """Upper bounds are exclusive: a BMI of exactly 25 is overweight."""
    bmi = calculate_bmi(weight, height)
    if bmi < 18.5:
        return BodyMassCategory.UNDERWEIGHT
    if bmi < 25:
        return BodyMassCategory.NORMAL
    if bmi < 30:
        return BodyMassCategory.OVERWEIGHT
    return BodyMassCategory.OBESE


def age_bracket(age: float) -> AgeBracket:
    if age < 30:
        return AgeBracket.YOUNG
    if age < 50:
        return AgeBracket.MIDDLE
    if age < 70:
        return AgeBracket.SENIOR
    return AgeBracket.ELDERLY
