"""
WHO Global Health Observatory client.

Fetches life expectancy at birth for display alongside a prediction. The
prediction itself never depends on this module: every fetch substitutes a
fixed sample dataset when the WHO API cannot be reached or returns
something unreadable.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional

import pandas as pd
import requests

from .config import get_settings

logger = logging.getLogger(__name__)

# Life expectancy at birth (years)
LIFE_EXPECTANCY_INDICATOR = "WHOSIS_000001"
BOTH_SEXES = "SEX_BTSX"


@dataclass
class GlobalStat:
    country: str
    value: float
    year: str


@dataclass
class RegionalStat:
    average: float
    count: int


@dataclass
class StatisticsSnapshot:
    """Global and regional statistics fetched together."""
    global_stats: List[GlobalStat] = field(default_factory=list)
    regional_stats: Dict[str, RegionalStat] = field(default_factory=dict)
    used_sample_data: bool = False


SAMPLE_GLOBAL_STATS = [
    GlobalStat(country="Japan", value=84.7, year="2020"),
    GlobalStat(country="Switzerland", value=83.8, year="2020"),
    GlobalStat(country="Australia", value=83.2, year="2020"),
    GlobalStat(country="Spain", value=83.1, year="2020"),
    GlobalStat(country="Italy", value=82.9, year="2020"),
    GlobalStat(country="France", value=82.7, year="2020"),
    GlobalStat(country="Canada", value=82.4, year="2020"),
    GlobalStat(country="United Kingdom", value=81.2, year="2020"),
    GlobalStat(country="United States", value=78.9, year="2020"),
    GlobalStat(country="China", value=76.9, year="2020"),
]

SAMPLE_REGIONAL_STATS = {
    "Europe": RegionalStat(average=81.2, count=44),
    "Americas": RegionalStat(average=76.8, count=35),
    "Western Pacific": RegionalStat(average=77.8, count=37),
    "South-East Asia": RegionalStat(average=71.4, count=11),
    "Eastern Mediterranean": RegionalStat(average=72.8, count=21),
    "Africa": RegionalStat(average=64.1, count=47),
}


class StatisticsUnavailable(Exception):
    """The WHO API could not be reached or returned an unreadable payload."""


def get_sample_global_stats() -> List[GlobalStat]:
    return [GlobalStat(s.country, s.value, s.year) for s in SAMPLE_GLOBAL_STATS]


def get_sample_regional_stats() -> Dict[str, RegionalStat]:
    return {region: RegionalStat(s.average, s.count) for region, s in SAMPLE_REGIONAL_STATS.items()}


def _numeric_value(record: Dict[str, Any]) -> Optional[float]:
    value = record.get("NumericValue")
    if value is None:
        value = record.get("Value")
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _year(record: Dict[str, Any]) -> int:
    try:
        return int(record.get("TimeDim"))
    except (TypeError, ValueError):
        return -1


def latest_per_country(records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Collapse the per-year series to the most recent numeric record of each country.

    Countries keep the order in which they first appear.
    """
    latest: Dict[str, Dict[str, Any]] = {}
    for record in records:
        country = record.get("SpatialDim")
        if not country or _numeric_value(record) is None:
            continue
        current = latest.get(country)
        if current is None or _year(record) > _year(current):
            latest[country] = record
    return list(latest.values())


class WHOStatisticsService:
    """Life expectancy statistics from the WHO GHO OData API."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        settings = get_settings()
        self.base_url = (base_url or settings.who_api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.who_api_timeout

    def _get_records(self, odata_filter: str) -> List[Dict[str, Any]]:
        """Blocking GET of indicator records matching an OData filter."""
        params = {"$filter": odata_filter}

        url = f"{self.base_url}/{LIFE_EXPECTANCY_INDICATOR}"
        try:
            response = requests.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            raise StatisticsUnavailable(f"Failed to fetch life expectancy data from WHO: {e}") from e

        if not isinstance(payload, dict):
            raise StatisticsUnavailable("Unexpected WHO response format")
        return payload.get("value") or []

    def _to_global_stats(self, records: List[Dict[str, Any]]) -> List[GlobalStat]:
        stats = []
        for record in records:
            value = _numeric_value(record)
            country = record.get("SpatialDim")
            if value is None or not country:
                continue
            stats.append(GlobalStat(country=country, value=value, year=str(record.get("TimeDim", ""))))
        return stats

    def _group_by_region(self, records: List[Dict[str, Any]]) -> Dict[str, RegionalStat]:
        """Average per WHO region; expects one record per country."""
        totals: Dict[str, List[float]] = {}
        for record in records:
            value = _numeric_value(record)
            if value is None:
                continue
            region = record.get("ParentLocation") or "Unknown"
            totals.setdefault(region, []).append(value)

        return {
            region: RegionalStat(average=sum(values) / len(values), count=len(values))
            for region, values in totals.items()
        }

    async def fetch_global_stats(self, limit: int = 100) -> List[GlobalStat]:
        """Latest life expectancy of the `limit` highest ranked countries, or the sample dataset on failure."""
        try:
            records = await asyncio.to_thread(self._get_records, f"Dim1 eq '{BOTH_SEXES}'")
            stats = self._to_global_stats(latest_per_country(records))
            return sorted(stats, key=lambda s: s.value, reverse=True)[:limit]
        except StatisticsUnavailable as e:
            logger.warning(f"Using sample global statistics: {e}")
            return get_sample_global_stats()

    async def fetch_regional_stats(self) -> Dict[str, RegionalStat]:
        """Average life expectancy per WHO region, or the sample dataset on failure."""
        try:
            records = await asyncio.to_thread(self._get_records, f"Dim1 eq '{BOTH_SEXES}'")
            return self._group_by_region(latest_per_country(records))
        except StatisticsUnavailable as e:
            logger.warning(f"Using sample regional statistics: {e}")
            return get_sample_regional_stats()

    async def fetch_country_stats(self, country: str) -> List[GlobalStat]:
        """Time series for one country code; empty when the WHO API is unavailable."""
        try:
            records = await asyncio.to_thread(
                self._get_records, f"SpatialDim eq '{country}' and Dim1 eq '{BOTH_SEXES}'"
            )
            return self._to_global_stats(records)
        except StatisticsUnavailable as e:
            logger.warning(f"No WHO statistics for {country}: {e}")
            return []

    async def fetch_dashboard(self) -> StatisticsSnapshot:
        """Global and regional statistics derived from a single fetch."""
        try:
            records = await asyncio.to_thread(self._get_records, f"Dim1 eq '{BOTH_SEXES}'")
        except StatisticsUnavailable as e:
            logger.warning(f"Failed to fetch global statistics. Using sample data instead: {e}")
            return StatisticsSnapshot(
                global_stats=get_sample_global_stats(),
                regional_stats=get_sample_regional_stats(),
                used_sample_data=True,
            )

        latest = latest_per_country(records)
        return StatisticsSnapshot(
            global_stats=self._to_global_stats(latest),
            regional_stats=self._group_by_region(latest),
        )


def top_countries(stats: List[GlobalStat], n: int = 10) -> pd.DataFrame:
    """The n highest life expectancies as a DataFrame for charting."""
    df = pd.DataFrame(
        [{"Country": s.country, "Life Expectancy": s.value, "Year": s.year} for s in stats],
        columns=["Country", "Life Expectancy", "Year"],
    )
    return df.sort_values("Life Expectancy", ascending=False).head(n).reset_index(drop=True)
