import asyncio
import click
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Tuple
from pydantic import ValidationError

from .models import ProfileConfigModel
from .calculator import LifeExpectancyCalculator
from .analysis import AnalysisGenerator
from .exporters import ExcelExporter, WordExporter, PDFExporter, RISK_LEVEL_TEXT
from .reference_data import REFERENCE_DATA
from .statistics import WHOStatisticsService, top_countries
from .config import get_settings


EXAMPLE_PROFILE = {
    "country": "USA",
    "gender": "male",
    "height": 180,
    "weight": 75,
    "age": 40,
    "smoking": "never",
    "alcohol": "none",
    "diseases": []
}


def _load_profile(config_file: str) -> ProfileConfigModel:
    with open(config_file, 'r') as f:
        config_data = json.load(f)
    return ProfileConfigModel(**config_data)


def _parse_disease(value: str) -> dict:
    name, _, severity = value.rpartition(':')
    if not name:
        return {"name": value, "severity": "mild"}
    return {"name": name, "severity": severity}


def _run_analysis(config_model: ProfileConfigModel):
    settings = get_settings()
    profile = config_model.to_user_profile()
    calculator = LifeExpectancyCalculator()
    prediction = calculator.predict(profile)
    report = AnalysisGenerator(unify_country_fallback=settings.unify_country_fallback).analyze(profile, prediction)
    return profile, calculator, report


def _echo_report(profile, report) -> None:
    click.echo(f"\n❤️  Life Expectancy Prediction for {REFERENCE_DATA.country_name(profile.country)}")
    click.echo("=" * 50)
    click.echo(f"Predicted Life Expectancy: {report.prediction} years")
    click.echo(f"Risk Level:                {RISK_LEVEL_TEXT.get(report.risk_level, 'Unknown')}")

    if report.country_comparison:
        comparison = report.country_comparison
        sign = "+" if comparison.difference >= 0 else ""
        click.echo(f"Country Average:           {comparison.average} years")
        click.echo(f"Difference:                {sign}{comparison.difference:.1f} years ({sign}{comparison.percentage:.1f}%)")

    if report.factors:
        click.echo(f"\n📋 Key Factors:")
        for factor in report.factors:
            click.echo(f"  ↓ {factor.name}: {factor.description}")

    if report.recommendations:
        click.echo(f"\n💡 Recommendations:")
        for recommendation in report.recommendations:
            click.echo(f"  • {recommendation}")


@click.group()
@click.version_option(version="1.0.0")
@click.option('--log-level', default=None, help='Logging level (defaults to LIFESPAN_LOG_LEVEL)')
def cli(log_level: Optional[str]):
    """Life Expectancy Predictor

    Estimates expected lifespan from demographic, body and lifestyle
    attributes using WHO baselines, and explains the estimate.
    """
    logging.basicConfig(level=(log_level or get_settings().log_level).upper())


@cli.command()
@click.option('--country', '-c', default='USA', help='ISO alpha-3 country code')
@click.option('--gender', '-g', required=True, type=click.Choice(['male', 'female', 'other'], case_sensitive=False))
@click.option('--height', '-h', 'height', required=True, type=float, help='Height in cm')
@click.option('--weight', '-w', required=True, type=float, help='Weight in kg')
@click.option('--age', '-a', required=True, type=int, help='Current age')
@click.option('--smoking', '-s', default='never',
              type=click.Choice(['never', 'former', 'light', 'moderate', 'heavy'], case_sensitive=False))
@click.option('--alcohol', '-l', default='none',
              type=click.Choice(['none', 'light', 'moderate', 'heavy'], case_sensitive=False))
@click.option('--disease', '-d', 'diseases', multiple=True, help='Health condition as NAME:SEVERITY (repeatable)')
@click.option('--json', 'as_json', is_flag=True, help='Print the report as JSON')
def predict(country: str, gender: str, height: float, weight: float, age: int,
            smoking: str, alcohol: str, diseases: Tuple[str, ...], as_json: bool):
    """Predict life expectancy for a single profile."""

    try:
        config_model = ProfileConfigModel(
            country=country,
            gender=gender,
            height=height,
            weight=weight,
            age=age,
            smoking=smoking,
            alcohol=alcohol,
            diseases=[_parse_disease(d) for d in diseases]
        )
        profile, calculator, report = _run_analysis(config_model)

        if as_json:
            click.echo(json.dumps(report.to_dict(), indent=2))
        else:
            _echo_report(profile, report)

    except ValidationError as e:
        click.echo(f"✗ Invalid profile: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option('--output', '-o', default='profile_example.json', help='Output profile file')
def create(output: str):
    """Create an example profile file."""

    try:
        ProfileConfigModel(**EXAMPLE_PROFILE)

        with open(output, 'w') as f:
            json.dump(EXAMPLE_PROFILE, f, indent=2)

        click.echo(f"✓ Created profile: {output}")
        click.echo(f"  Country: {EXAMPLE_PROFILE['country']}, age {EXAMPLE_PROFILE['age']}")

    except OSError as e:
        click.echo(f"✗ Error creating profile: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument('config_file', type=click.Path(exists=True))
@click.option('--excel', '-e', help='Export to Excel file')
@click.option('--word', '-w', help='Export to Word document')
@click.option('--pdf', '-p', help='Export to PDF file')
@click.option('--all', '-a', is_flag=True, help='Export to all formats using config filename as base')
@click.option('--show-summary', '-s', is_flag=True, help='Show the report in terminal')
def calculate(config_file: str, excel: Optional[str], word: Optional[str], pdf: Optional[str],
              all: bool, show_summary: bool):
    """Predict from a profile file and export the report."""

    try:
        config_model = _load_profile(config_file)
        profile, calculator, report = _run_analysis(config_model)

        if show_summary:
            _echo_report(profile, report)

        base_name = Path(config_file).stem
        exports_completed = []

        if all or excel:
            excel_file = excel or f"{base_name}_report.xlsx"
            ExcelExporter(profile, report, calculator).export(excel_file)
            exports_completed.append(f"Excel: {excel_file}")

        if all or word:
            word_file = word or f"{base_name}_report.docx"
            WordExporter(profile, report, calculator).export(word_file)
            exports_completed.append(f"Word: {word_file}")

        if all or pdf:
            pdf_file = pdf or f"{base_name}_report.pdf"
            PDFExporter(profile, report, calculator).export(pdf_file)
            exports_completed.append(f"PDF: {pdf_file}")

        if exports_completed:
            click.echo(f"\n✓ Exports completed:")
            for export in exports_completed:
                click.echo(f"  {export}")

        if not (show_summary or exports_completed):
            click.echo("No output options specified. Use --show-summary, --excel, --word, --pdf, or --all")

    except json.JSONDecodeError as e:
        click.echo(f"✗ Invalid JSON in profile file: {e}", err=True)
        sys.exit(1)
    except ValidationError as e:
        click.echo(f"✗ Invalid profile: {e}", err=True)
        sys.exit(1)
    except OSError as e:
        click.echo(f"✗ Error writing report: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument('config_file', type=click.Path(exists=True))
def validate(config_file: str):
    """Validate a profile file."""

    try:
        config_model = _load_profile(config_file)
        profile = config_model.to_user_profile()

        click.echo(f"✓ Profile is valid")
        click.echo(f"  Country: {REFERENCE_DATA.country_name(profile.country)} ({profile.country})")
        click.echo(f"  Age: {profile.age}, gender: {profile.gender}")
        click.echo(f"  Health conditions: {len(profile.diseases)}")

    except json.JSONDecodeError as e:
        click.echo(f"✗ Invalid JSON in profile file: {e}", err=True)
        sys.exit(1)
    except ValidationError as e:
        click.echo(f"✗ Profile validation failed: {e}", err=True)
        sys.exit(1)


@cli.command()
def countries():
    """List supported countries and their baseline life expectancy."""

    click.echo(f"{'Code':<6}{'Country':<18}{'Region':<24}{'Male':>6}{'Female':>8}{'Both':>6}")
    for code in REFERENCE_DATA.supported_countries():
        baseline = REFERENCE_DATA.base_life_expectancy[code]
        click.echo(
            f"{code:<6}{REFERENCE_DATA.country_name(code):<18}{REFERENCE_DATA.country_region(code):<24}"
            f"{baseline['male']:>6}{baseline['female']:>8}{baseline['both']:>6}"
        )


@cli.command()
@click.option('--top', '-n', default=10, type=int, help='Number of countries to show')
def stats(top: int):
    """Show WHO global and regional life expectancy statistics."""

    snapshot = asyncio.run(WHOStatisticsService().fetch_dashboard())

    if snapshot.used_sample_data:
        click.echo("⚠️  Failed to fetch global statistics. Using sample data instead.")

    click.echo(f"\n🌍 Top {top} Countries by Life Expectancy")
    click.echo("=" * 50)
    for _, row in top_countries(snapshot.global_stats, top).iterrows():
        click.echo(f"  {row['Country']:<24}{row['Life Expectancy']:>6.1f}  ({row['Year']})")

    click.echo(f"\n📊 Regional Averages")
    click.echo("=" * 50)
    for region, data in snapshot.regional_stats.items():
        click.echo(f"  {region:<24}{data.average:>6.1f} years  ({data.count} countries)")

    click.echo("\nSource: World Health Organization (WHO) Global Health Observatory")


@cli.command()
def examples():
    """Show an example profile and usage."""

    click.echo("📋 Example Profile:")
    click.echo("=" * 50)
    click.echo(json.dumps(EXAMPLE_PROFILE, indent=2))

    click.echo(f"\n💡 Usage Examples:")
    click.echo("=" * 20)
    click.echo("# Predict directly from options:")
    click.echo("lifespan predict --gender female --height 165 --weight 60 --age 35 --smoking former")
    click.echo()
    click.echo("# Include health conditions:")
    click.echo("lifespan predict -g male -h 180 -w 95 -a 55 -d Diabetes:moderate -d Asthma:mild")
    click.echo()
    click.echo("# Create and validate a profile file:")
    click.echo("lifespan create --output my_profile.json")
    click.echo("lifespan validate my_profile.json")
    click.echo()
    click.echo("# Show the report and export to all formats:")
    click.echo("lifespan calculate my_profile.json --show-summary --all")
    click.echo()
    click.echo("# WHO statistics:")
    click.echo("lifespan stats --top 10")


if __name__ == '__main__':
    cli()
