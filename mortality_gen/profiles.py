"""
Static per-country baselines for the synthetic mortality universe.

One explicit CountryProfile per country code. Baselines are 2010 values;
the generator applies the year progression on top. Codes missing from the
table fall back to DEFAULT_* values so generation stays total.
"""

from __future__ import annotations

import logging
from typing import Dict, List

from . import config
from .errors import UnknownCountryError
from .schemas import CauseBreakdown, CountryProfile

logger = logging.getLogger(__name__)


# ---------------- Cause-of-death profiles ---------------- #

CAUSE_PROFILES: Dict[str, CauseBreakdown] = {
    "US": CauseBreakdown(0.30, 0.22, 0.10, 0.04, 0.02, 0.08, 0.24),
    "MX": CauseBreakdown(0.26, 0.15, 0.08, 0.18, 0.05, 0.10, 0.18),
    "GB": CauseBreakdown(0.28, 0.26, 0.12, 0.02, 0.02, 0.04, 0.26),
    "DE": CauseBreakdown(0.32, 0.24, 0.08, 0.03, 0.02, 0.05, 0.26),
    "IT": CauseBreakdown(0.34, 0.25, 0.09, 0.03, 0.02, 0.04, 0.23),
    "SE": CauseBreakdown(0.30, 0.27, 0.07, 0.02, 0.01, 0.05, 0.28),
    "PL": CauseBreakdown(0.38, 0.22, 0.08, 0.03, 0.03, 0.07, 0.19),
}

# Countries without their own mix borrow the US one
DEFAULT_CAUSES: CauseBreakdown = CAUSE_PROFILES["US"]


# ---------------- Fallback baselines ---------------- #

DEFAULT_POPULATION: int = 5_000_000
DEFAULT_LIFE_EXPECTANCY: float = 78.0
DEFAULT_MORTALITY_RATE: float = 700.0
DEFAULT_HEALTHCARE_SPENDING: int = 3_000
DEFAULT_GDP_PER_CAPITA: int = 30_000
DEFAULT_REGION: str = "Europe"


def _profile(
    name: str,
    code: str,
    region: str,
    lat: float,
    lon: float,
    population: int = DEFAULT_POPULATION,
    life_expectancy: float = DEFAULT_LIFE_EXPECTANCY,
    mortality_rate: float = DEFAULT_MORTALITY_RATE,
    spending: int = DEFAULT_HEALTHCARE_SPENDING,
    gdp: int = DEFAULT_GDP_PER_CAPITA,
) -> CountryProfile:
    return CountryProfile(
        name=name,
        code=code,
        region=region,
        latitude=lat,
        longitude=lon,
        base_population=population,
        base_life_expectancy=life_expectancy,
        base_mortality_rate=mortality_rate,
        base_healthcare_spending=spending,
        base_gdp_per_capita=gdp,
        preventable_fraction=config.PREVENTABLE_FRACTION.get(
            code, config.DEFAULT_PREVENTABLE_FRACTION
        ),
        causes=CAUSE_PROFILES.get(code, DEFAULT_CAUSES),
        aging=code in config.AGING_COUNTRIES,
    )


# ---------------- Country table ---------------- #

NA = "North America"
EU = "Europe"

COUNTRIES: List[CountryProfile] = [
    # North America
    _profile("United States", "US", NA, 37.0902, -95.7129, 310_000_000, 78.5, 850, 11_000, 48_000),
    _profile("Canada", "CA", NA, 56.1304, -106.3468, 34_000_000, 81.2, 700, 5_100, 45_000),
    _profile("Mexico", "MX", NA, 23.6345, -102.5528, 115_000_000, 75.5, 620, 1_100, 9_000),
    # Western Europe
    _profile("United Kingdom", "GB", EU, 55.3781, -3.4360, 62_000_000, 80.5, 920, 4_500, 41_000),
    _profile("France", "FR", EU, 46.2276, 2.2137, 65_000_000, 81.5, 700, 5_200, 40_000),
    _profile("Germany", "DE", EU, 51.1657, 10.4515, 81_000_000, 80.3, 700, 6_000, 46_000),
    _profile("Italy", "IT", EU, 41.8719, 12.5674, 60_000_000, 82.3, 1050, 3_500, 32_000),
    _profile("Spain", "ES", EU, 40.4637, -3.7492, 46_000_000, 82.5, 700, 3_200, 29_000),
    _profile("Netherlands", "NL", EU, 52.1326, 5.2913, 16_500_000, 81.0, 700, 5_600, 52_000),
    _profile("Belgium", "BE", EU, 50.5039, 4.4699),
    _profile("Switzerland", "CH", EU, 46.8182, 8.2275, 7_800_000, 83.0, 700, 9_000, 85_000),
    # Northern Europe
    _profile("Sweden", "SE", EU, 60.1282, 18.6435, 9_400_000, 82.0, 700, 5_800, 51_000),
    _profile("Norway", "NO", EU, 60.4720, 8.4689, 4_900_000, 81.8, 700, 7_000, 75_000),
    _profile("Denmark", "DK", EU, 56.2639, 9.5018, 5_500_000),
    _profile("Finland", "FI", EU, 61.9241, 25.7482, 5_400_000),
    # Eastern Europe
    _profile("Poland", "PL", EU, 51.9194, 19.1451, 38_000_000, 76.5, 1050, 1_800, 15_000),
    _profile("Czech Republic", "CZ", EU, 49.8175, 15.4730, 10_500_000, 78.0, 1080, 2_200, 23_000),
    _profile("Hungary", "HU", EU, 47.1625, 19.5033, 10_000_000, 75.5, 1300),
    _profile("Romania", "RO", EU, 45.9432, 24.9668, 21_000_000, 74.0, 1350),
]

PROFILES: Dict[str, CountryProfile] = {p.code: p for p in COUNTRIES}

REGION_MEMBERS: Dict[str, List[str]] = {
    region: [p.code for p in COUNTRIES if p.region == region]
    for region in config.REGIONS
}


# ---------------- Lookup ---------------- #

def default_profile(code: str) -> CountryProfile:
    """Baseline used for a code that has no entry in the table."""
    return _profile(code, code, DEFAULT_REGION, 0.0, 0.0)


def get_profile(code: str, strict: bool = False) -> CountryProfile:
    """Return the profile for `code`.

    strict=True raises UnknownCountryError for unknown codes; otherwise the
    default baseline is used and a warning is logged.
    """
    try:
        return PROFILES[code]
    except KeyError:
        if strict:
            raise UnknownCountryError(code) from None
    logger.warning("No baseline for country %r, using default profile", code)
    return default_profile(code)


def country_codes() -> List[str]:
    return [p.code for p in COUNTRIES]
