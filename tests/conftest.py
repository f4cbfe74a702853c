"""Shared fixtures for the life expectancy test suite."""
import pytest

from lifespan.models import UserProfile, Disease


@pytest.fixture
def healthy_profile() -> UserProfile:
    """USA male, 40, normal BMI, no risk factors."""
    return UserProfile(
        country="USA",
        gender="male",
        height=180,
        weight=75,
        age=40,
        smoking="never",
        alcohol="none",
        diseases=[]
    )


@pytest.fixture
def high_risk_profile() -> UserProfile:
    """Same body as the healthy profile, with heavy smoking, heavy drinking and a severe disease."""
    return UserProfile(
        country="USA",
        gender="male",
        height=180,
        weight=75,
        age=40,
        smoking="heavy",
        alcohol="heavy",
        diseases=[Disease(name="Heart disease", severity="severe")]
    )


@pytest.fixture
def unsupported_country_profile() -> UserProfile:
    return UserProfile(
        country="XYZ",
        gender="male",
        height=180,
        weight=75,
        age=40
    )
