"""
Core synthetic data generators for the mortality universe.

Design goals:
- Fully deterministic: same constants in, same records out. No RNG.
- One record per (country, year) over config.START_YEAR..END_YEAR.
- Linear drift over the window, plus the 2020-2021 pandemic shock.
- Derived counts (deaths, preventable deaths, age bands) stay consistent
  with the rates they are computed from.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from . import config
from .profiles import COUNTRIES, get_profile
from .schemas import AgeGroup, CauseBreakdown, CountryProfile, MortalityRecord

logger = logging.getLogger(__name__)


# ---------------- Utility helpers ---------------- #

def round_half_up(x: float, ndigits: int = 0) -> float:
    """Round halves away from zero for positive values (2.5 -> 3, not 2)."""
    scale = 10.0 ** ndigits
    return float(np.floor(x * scale + 0.5) / scale)


def _round_int(x: float) -> int:
    return int(round_half_up(x))


def year_progress(year: int) -> float:
    """Linear position of `year` in the window: 0 at start, 1 at end."""
    return (year - config.START_YEAR) / (config.END_YEAR - config.START_YEAR)


def years() -> range:
    return range(config.START_YEAR, config.END_YEAR + 1)


# ---------------- Cause & age layers ---------------- #

def generate_cause_breakdown(profile: CountryProfile, year: int) -> CauseBreakdown:
    """Cardiovascular share falls slowly, cancer takes half of it.

    The result is not renormalised, so it sums to roughly (not exactly) 1.
    """
    base = profile.causes
    drift = (year - config.START_YEAR) * config.CARDIOVASCULAR_DRIFT

    return CauseBreakdown(
        cardiovascular=max(config.CARDIOVASCULAR_FLOOR, base.cardiovascular - drift),
        cancer=base.cancer + drift * config.CANCER_DRIFT_SHARE,
        respiratory=base.respiratory,
        diabetes=base.diabetes,
        infectious=base.infectious,
        accidents=base.accidents,
        other=base.other,
    )


def generate_age_groups(total_deaths: int, profile: CountryProfile) -> Tuple[AgeGroup, ...]:
    """Split deaths over six fixed bands; older bands scaled in aging countries."""
    factor = config.AGING_FACTOR if profile.aging else 1.0

    groups = []
    for label, share, pop_millions in config.AGE_BANDS:
        if label in config.AGED_BANDS:
            share *= factor
        groups.append(
            AgeGroup(
                range=label,
                deaths=_round_int(total_deaths * share),
                population=pop_millions * 1_000_000,
            )
        )
    return tuple(groups)


# ---------------- Country-year record ---------------- #

def generate_record(profile: CountryProfile, year: int) -> MortalityRecord:
    p = year_progress(year)

    population = _round_int(profile.base_population * (1 + p * config.POPULATION_GROWTH))

    life_expectancy = profile.base_life_expectancy + p * config.LIFE_EXPECTANCY_GAIN
    if profile.code in config.PANDEMIC_LE_COUNTRIES and year in config.PANDEMIC_YEARS:
        life_expectancy -= config.PANDEMIC_LE_DROP

    mortality_rate = profile.base_mortality_rate * (1 - p * config.MORTALITY_IMPROVEMENT)
    if year in config.PANDEMIC_YEARS:
        mortality_rate *= config.PANDEMIC_MORTALITY_MULTIPLIER

    # deaths come from the unrounded rate
    total_deaths = _round_int(mortality_rate / 100_000 * population)
    preventable_deaths = _round_int(total_deaths * profile.preventable_fraction)

    spending = _round_int(profile.base_healthcare_spending * (1 + p * config.SPENDING_GROWTH))
    gdp = _round_int(profile.base_gdp_per_capita * (1 + p * config.GDP_GROWTH))

    return MortalityRecord(
        country=profile.name,
        country_code=profile.code,
        region=profile.region,
        year=year,
        population=population,
        total_deaths=total_deaths,
        mortality_rate=round_half_up(mortality_rate, 1),
        life_expectancy=round_half_up(life_expectancy, 1),
        cause_breakdown=generate_cause_breakdown(profile, year),
        preventable_deaths=preventable_deaths,
        preventable_percentage=round_half_up(profile.preventable_fraction * 100, 1),
        age_groups=generate_age_groups(total_deaths, profile),
        healthcare_spending_per_capita=spending,
        gdp_per_capita=gdp,
    )


# ---------------- Universe entrypoint ---------------- #

def generate_mortality_data(codes: Optional[Sequence[str]] = None) -> List[MortalityRecord]:
    """
    Generate the full mortality universe.

    Args:
        codes: country codes to generate, in output order. Defaults to the
            full country table. Unknown codes use the default baseline.

    Returns:
        Records grouped by country, each group in ascending year order.
    """
    profiles = COUNTRIES if codes is None else [get_profile(c) for c in codes]

    records = [generate_record(profile, year) for profile in profiles for year in years()]

    logger.debug(
        "Generated %d records for %d countries, %d-%d",
        len(records), len(profiles), config.START_YEAR, config.END_YEAR,
    )
    return records


@lru_cache(maxsize=1)
def load_dataset() -> Tuple[MortalityRecord, ...]:
    """Process-wide read-only dataset, generated on first use."""
    return tuple(generate_mortality_data())


# ---------------- Flat views for export ---------------- #

RECORD_COLUMNS = [
    "country",
    "country_code",
    "region",
    "year",
    "population",
    "total_deaths",
    "mortality_rate",
    "life_expectancy",
    "preventable_deaths",
    "preventable_percentage",
    "healthcare_spending_per_capita",
    "gdp_per_capita",
]


def records_frame(records: Iterable[MortalityRecord]) -> pd.DataFrame:
    """One row per country-year with the scalar fields.

    Columns:
        RECORD_COLUMNS
    """
    rows = [{col: getattr(r, col) for col in RECORD_COLUMNS} for r in records]
    return pd.DataFrame(rows, columns=RECORD_COLUMNS)


def causes_frame(records: Iterable[MortalityRecord]) -> pd.DataFrame:
    """Long table: one row per country-year-cause, with proportion and deaths."""
    rows = []
    for r in records:
        for cause, share in r.cause_breakdown.as_dict().items():
            rows.append(
                {
                    "country_code": r.country_code,
                    "year": r.year,
                    "cause": cause,
                    "proportion": share,
                    "deaths": _round_int(r.total_deaths * share),
                }
            )
    return pd.DataFrame(rows, columns=["country_code", "year", "cause", "proportion", "deaths"])


def age_groups_frame(records: Iterable[MortalityRecord]) -> pd.DataFrame:
    """Long table: one row per country-year-age band."""
    rows = [
        {
            "country_code": r.country_code,
            "year": r.year,
            "age_range": ag.range,
            "deaths": ag.deaths,
            "population": ag.population,
        }
        for r in records
        for ag in r.age_groups
    ]
    return pd.DataFrame(rows, columns=["country_code", "year", "age_range", "deaths", "population"])
