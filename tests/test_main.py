"""
Tests for the programmatic entry point helpers
"""
from main import create_example_profile, create_example_report


def test_example_profile():
    profile = create_example_profile()
    assert profile.country == "USA"
    assert profile.diseases == []


def test_example_report():
    report = create_example_report()
    assert report.prediction == 76.8
    assert report.risk_level == "low"
    assert report.country_comparison.percentage == -2.7
