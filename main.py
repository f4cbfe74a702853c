#!/usr/bin/env python3
"""
Life Expectancy Predictor - Main Application Entry Point

This module serves as the main entry point for the life expectancy predictor.
It can be used to run the CLI interface or import the core functionality for
use in other applications.
"""

from lifespan.cli import cli
from lifespan.models import UserProfile, AnalysisReport
from lifespan.calculator import LifeExpectancyCalculator
from lifespan.analysis import AnalysisGenerator


def create_example_profile() -> UserProfile:
    """Create an example profile for demonstration purposes."""
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


def create_example_report() -> AnalysisReport:
    """Predict and analyze the example profile."""
    profile = create_example_profile()
    prediction = LifeExpectancyCalculator().predict(profile)
    return AnalysisGenerator().analyze(profile, prediction)


def main():
    """Main function - runs the CLI interface."""
    cli()


if __name__ == "__main__":
    main()
