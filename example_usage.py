#!/usr/bin/env python3
"""
Example Usage of the Life Expectancy Predictor

This script demonstrates how to use the predictor programmatically to
score profiles, explain the results and export reports.
"""

import asyncio
import json

from lifespan.models import UserProfile, Disease
from lifespan.calculator import LifeExpectancyCalculator
from lifespan.analysis import AnalysisGenerator
from lifespan.exporters import ExcelExporter, WordExporter, PDFExporter
from lifespan.statistics import WHOStatisticsService, top_countries


def create_example_profiles():
    """Three contrasting profiles."""

    healthy = UserProfile(
        country="USA", gender="male", height=180, weight=75, age=40,
        smoking="never", alcohol="none"
    )

    high_risk = UserProfile(
        country="USA", gender="male", height=180, weight=75, age=40,
        smoking="heavy", alcohol="heavy",
        diseases=[Disease(name="Coronary artery disease", severity="severe")]
    )

    # Unsupported country: the prediction falls back to the default
    # country while the national comparison is omitted
    unsupported = UserProfile(
        country="XYZ", gender="male", height=180, weight=75, age=40
    )

    return {"Healthy": healthy, "High risk": high_risk, "Unsupported country": unsupported}


def demonstrate_predictions():
    print("Scoring example profiles...")
    print("=" * 50)

    calculator = LifeExpectancyCalculator()
    generator = AnalysisGenerator()

    for label, profile in create_example_profiles().items():
        prediction = calculator.predict(profile)
        report = generator.analyze(profile, prediction)

        print(f"\n{label}: {prediction} years (risk: {report.risk_level})")
        for factor in report.factors:
            print(f"  ↓ {factor.name}: {factor.description}")
        if report.country_comparison:
            comparison = report.country_comparison
            print(f"  vs {comparison.country} average {comparison.average}: "
                  f"{comparison.difference:+.1f} years ({comparison.percentage:+.1f}%)")
        else:
            print("  No national comparison available")


def demonstrate_breakdown():
    """Show every multiplier behind one prediction."""
    profile = create_example_profiles()["High risk"]
    breakdown = LifeExpectancyCalculator().get_multiplier_breakdown(profile)

    print("\nMultiplier breakdown (high risk profile):")
    print(json.dumps(breakdown, indent=2))


def demonstrate_exports():
    profile = create_example_profiles()["High risk"]
    calculator = LifeExpectancyCalculator()
    report = AnalysisGenerator().analyze(profile, calculator.predict(profile))

    print("\nExporting reports...")
    try:
        ExcelExporter(profile, report, calculator).export("example_report.xlsx")
        print("✓ Excel export: example_report.xlsx")

        WordExporter(profile, report, calculator).export("example_report.docx")
        print("✓ Word export: example_report.docx")

        PDFExporter(profile, report, calculator).export("example_report.pdf")
        print("✓ PDF export: example_report.pdf")
    except OSError as e:
        print(f"✗ Export failed: {e}")


def demonstrate_statistics():
    print("\nFetching WHO statistics...")
    snapshot = asyncio.run(WHOStatisticsService().fetch_dashboard())
    if snapshot.used_sample_data:
        print("(WHO API unavailable, showing sample data)")
    print(top_countries(snapshot.global_stats, 5).to_string(index=False))


if __name__ == "__main__":
    demonstrate_predictions()
    demonstrate_breakdown()
    demonstrate_exports()
    demonstrate_statistics()
