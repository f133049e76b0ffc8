"""
Analytics over generated mortality records.

Every function here is pure: it takes a record collection (the full
dataset or a year/country slice of it) and returns derived values without
keeping state between calls. Metric selection goes through the closed
`Metric` enum; plain names such as "lifeExpectancy" are parsed into it.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from . import config
from .errors import EmptyInputError, UnknownCountryError, UnknownRegionError
from .generators import round_half_up
from .profiles import COUNTRIES, PROFILES, REGION_MEMBERS
from .schemas import (
    CountryProfile,
    CauseDeaths,
    Change,
    CountryTrend,
    Gap,
    Metric,
    MetricSummary,
    MortalityRecord,
    YearlyTrend,
)

logger = logging.getLogger(__name__)

# Metrics where a rising value is an improvement
HIGHER_IS_BETTER = {Metric.LIFE_EXPECTANCY}


# ---------------- Selection helpers ---------------- #

def latest_year(records: Sequence[MortalityRecord]) -> int:
    if not records:
        raise EmptyInputError("No records to take the latest year from")
    return max(r.year for r in records)


def earliest_year(records: Sequence[MortalityRecord]) -> int:
    if not records:
        raise EmptyInputError("No records to take the earliest year from")
    return min(r.year for r in records)


def year_range(records: Iterable[MortalityRecord]) -> List[int]:
    return sorted({r.year for r in records})


def records_for_year(records: Iterable[MortalityRecord], year: int) -> List[MortalityRecord]:
    return [r for r in records if r.year == year]


def records_in_range(
    records: Iterable[MortalityRecord], start_year: int, end_year: int
) -> List[MortalityRecord]:
    """Records with start_year <= year <= end_year, in input order."""
    return [r for r in records if start_year <= r.year <= end_year]


def search_countries(query: str) -> List[CountryProfile]:
    """Countries whose name or code contains `query`, ignoring case.

    An empty query matches every country.
    """
    q = query.strip().lower()
    if not q:
        return list(COUNTRIES)
    return [p for p in COUNTRIES if q in p.name.lower() or q in p.code.lower()]


def country_data_by_year(
    records: Iterable[MortalityRecord], country_code: str, year: int
) -> Optional[MortalityRecord]:
    return next(
        (r for r in records if r.country_code == country_code and r.year == year),
        None,
    )


def country_time_series(
    records: Iterable[MortalityRecord], country_code: str
) -> List[MortalityRecord]:
    """All records of one country, oldest first.

    Raises UnknownCountryError when the code is neither in the slice nor in
    the country table.
    """
    series = sorted(
        (r for r in records if r.country_code == country_code),
        key=lambda r: r.year,
    )
    if not series and country_code not in PROFILES:
        raise UnknownCountryError(country_code)
    return series


# ---------------- Metric summary ---------------- #

def _metric_frame(records: Iterable[MortalityRecord], metric: Metric) -> pd.DataFrame:
    return pd.DataFrame(
        [(r.year, metric.value_of(r)) for r in records],
        columns=["year", "value"],
    )


def summarize(records: Sequence[MortalityRecord], metric) -> MetricSummary:
    """Cross-country average of `metric` for the latest year vs the year before.

    current/previous/change/change_percentage are rounded to 2 dp; the trend
    keeps full precision. If the preceding year is absent from the slice the
    comparison fields are 0.
    """
    metric = Metric.parse(metric)
    if not records:
        raise EmptyInputError(f"Cannot summarize {metric.value} over an empty slice")

    by_year = _metric_frame(records, metric).groupby("year")["value"].mean().sort_index()

    latest = int(by_year.index.max())
    current = float(by_year.loc[latest])

    if latest - 1 in by_year.index:
        previous = float(by_year.loc[latest - 1])
        change = current - previous
        change_pct = change / previous * 100 if previous else 0.0
    else:
        logger.debug("No %d data for %s, comparison left at 0", latest - 1, metric.value)
        previous = change = change_pct = 0.0

    return MetricSummary(
        current=round_half_up(current, 2),
        previous=round_half_up(previous, 2),
        change=round_half_up(change, 2),
        change_percentage=round_half_up(change_pct, 2),
        trend=[YearlyTrend(year=int(y), value=float(v)) for y, v in by_year.items()],
    )


# ---------------- Gap analysis ---------------- #

def _priority(gap: float, cutoffs: Tuple[float, float]) -> str:
    high, medium = cutoffs
    if gap > high:
        return "High"
    if gap > medium:
        return "Medium"
    return "Low"


def benchmarks(records: Iterable[MortalityRecord], year: int) -> Dict[Metric, float]:
    """Best value per gap metric among all countries in `year`."""
    year_data = records_for_year(records, year)
    if not year_data:
        raise EmptyInputError(f"No records for {year}")
    return {
        Metric.LIFE_EXPECTANCY: max(r.life_expectancy for r in year_data),
        Metric.PREVENTABLE_PERCENTAGE: min(r.preventable_percentage for r in year_data),
        Metric.MORTALITY_RATE: min(r.mortality_rate for r in year_data),
    }


def analyze_gaps(records: Iterable[MortalityRecord], year: int) -> List[Gap]:
    """Material gaps to the best performer in `year`, largest impact first.

    A year with no records yields an empty list.
    """
    year_data = records_for_year(records, year)
    if not year_data:
        return []

    bench = benchmarks(year_data, year)
    le_best = bench[Metric.LIFE_EXPECTANCY]
    pp_best = bench[Metric.PREVENTABLE_PERCENTAGE]
    mr_best = bench[Metric.MORTALITY_RATE]

    gaps: List[Gap] = []
    for r in year_data:
        le_gap = le_best - r.life_expectancy
        if le_gap > config.LE_GAP_THRESHOLD:
            gaps.append(Gap(
                country=r.country,
                country_code=r.country_code,
                metric=Metric.LIFE_EXPECTANCY.label,
                current=r.life_expectancy,
                benchmark=le_best,
                gap=le_gap,
                gap_percentage=le_gap / le_best * 100,
                potential_lives_saved=int(round_half_up(
                    r.population / 100_000 * le_gap * config.LE_LIVES_PER_YEAR
                )),
                priority=_priority(le_gap, config.LE_PRIORITY),
            ))

        pp_gap = r.preventable_percentage - pp_best
        if pp_gap > config.PREVENTABLE_GAP_THRESHOLD:
            gaps.append(Gap(
                country=r.country,
                country_code=r.country_code,
                metric=Metric.PREVENTABLE_PERCENTAGE.label,
                current=r.preventable_percentage,
                benchmark=pp_best,
                gap=pp_gap,
                gap_percentage=pp_gap / r.preventable_percentage * 100,
                potential_lives_saved=int(round_half_up(r.total_deaths * pp_gap / 100)),
                priority=_priority(pp_gap, config.PREVENTABLE_PRIORITY),
            ))

        mr_gap = r.mortality_rate - mr_best
        if mr_gap > config.MORTALITY_GAP_THRESHOLD:
            gaps.append(Gap(
                country=r.country,
                country_code=r.country_code,
                metric=Metric.MORTALITY_RATE.label,
                current=r.mortality_rate,
                benchmark=mr_best,
                gap=mr_gap,
                gap_percentage=mr_gap / r.mortality_rate * 100,
                potential_lives_saved=int(round_half_up(r.population / 100_000 * mr_gap)),
                priority=_priority(mr_gap, config.MORTALITY_PRIORITY),
            ))

    gaps.sort(key=lambda g: g.potential_lives_saved, reverse=True)
    logger.debug("%d material gaps in %d", len(gaps), year)
    return gaps


def total_opportunity(gaps: Iterable[Gap]) -> int:
    return sum(g.potential_lives_saved for g in gaps)


# ---------------- Comparison & ranking ---------------- #

def top_countries(
    records: Iterable[MortalityRecord],
    metric,
    year: int,
    limit: int = 5,
    ascending: bool = True,
) -> List[MortalityRecord]:
    metric = Metric.parse(metric)
    ranked = sorted(records_for_year(records, year), key=metric.value_of, reverse=not ascending)
    return ranked[:limit]


def regional_average(
    records: Iterable[MortalityRecord], region: str, metric, year: int
) -> float:
    """Mean of `metric` over the region's countries in `year`, 2 dp. 0.0 if none."""
    metric = Metric.parse(metric)
    if region not in REGION_MEMBERS:
        raise UnknownRegionError(region, list(REGION_MEMBERS))
    members = set(REGION_MEMBERS[region])

    values = [metric.value_of(r) for r in records if r.country_code in members and r.year == year]
    if not values:
        return 0.0
    return round_half_up(sum(values) / len(values), 2)


def sort_records(
    records: Iterable[MortalityRecord], field: str = "country", ascending: bool = True
) -> List[MortalityRecord]:
    """Comparison-table ordering by country name or any metric."""
    if field == "country":
        key = lambda r: r.country
    else:
        key = Metric.parse(field).value_of
    return sorted(records, key=key, reverse=not ascending)


def performance_tier(metric, value: float) -> Optional[str]:
    """'good' / 'average' / 'poor' band for the comparison table.

    Only life expectancy, mortality rate and preventable percentage have
    bands; other metrics return None.
    """
    metric = Metric.parse(metric)
    if metric is Metric.LIFE_EXPECTANCY:
        good, average = config.LE_TIERS
        return "good" if value >= good else "average" if value >= average else "poor"
    if metric is Metric.MORTALITY_RATE:
        good, average = config.MORTALITY_TIERS
    elif metric is Metric.PREVENTABLE_PERCENTAGE:
        good, average = config.PREVENTABLE_TIERS
    else:
        return None
    return "good" if value <= good else "average" if value <= average else "poor"


def metric_bounds(records: Iterable[MortalityRecord], metric, year: int) -> Tuple[float, float]:
    """(min, max) of `metric` in `year`, for colour and marker scales."""
    metric = Metric.parse(metric)
    values = [metric.value_of(r) for r in records_for_year(records, year)]
    if not values:
        raise EmptyInputError(f"No records for {year}")
    return min(values), max(values)


# ---------------- Per-country views ---------------- #

def year_over_year_change(current: float, previous: Optional[float]) -> Optional[Change]:
    """Change vs the previous value; None when there is nothing to compare to."""
    if not previous:
        return None
    change = current - previous
    return Change(change=change, percentage=change / previous * 100)


def cause_deaths_series(
    records: Iterable[MortalityRecord], country_code: str
) -> List[CauseDeaths]:
    """Absolute deaths per cause for each year of one country."""
    return [
        CauseDeaths(
            year=r.year,
            deaths={
                cause: int(round_half_up(r.total_deaths * share))
                for cause, share in r.cause_breakdown.as_dict().items()
            },
        )
        for r in country_time_series(records, country_code)
    ]


def country_trends(
    records: Sequence[MortalityRecord], country_codes: Iterable[str], metric
) -> List[CountryTrend]:
    """Small-multiples view: one series per country with first-to-last change."""
    metric = Metric.parse(metric)

    trends = []
    for code in country_codes:
        series = country_time_series(records, code)
        values = [YearlyTrend(year=r.year, value=metric.value_of(r)) for r in series]
        change = values[-1].value - values[0].value if len(values) > 1 else 0.0
        improving = change > 0 if metric in HIGHER_IS_BETTER else change < 0
        trends.append(CountryTrend(
            country=series[0].country if series else code,
            country_code=code,
            values=values,
            latest=values[-1].value if values else None,
            change=change,
            improving=improving,
        ))
    return trends
