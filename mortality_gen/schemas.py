"""
Schema definitions for core entities in the synthetic mortality universe.

These schemas define the **contract** between:
- data generation
- analytics (summaries, gaps, simulator)
- CSV snapshots written by the CLI

Generated entities are frozen: the dataset is built once and only read
afterwards. Derived entities (summaries, gaps, projections) are plain
dataclasses recomputed on demand.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from operator import attrgetter
from typing import Callable, Dict, List, Optional, Tuple

from .errors import UnknownMetricError


# ---------------- Static country profile ---------------- #

@dataclass(frozen=True)
class CauseBreakdown:
    cardiovascular: float
    cancer: float
    respiratory: float
    diabetes: float
    infectious: float
    accidents: float
    other: float

    def as_dict(self) -> Dict[str, float]:
        return {
            "cardiovascular": self.cardiovascular,
            "cancer": self.cancer,
            "respiratory": self.respiratory,
            "diabetes": self.diabetes,
            "infectious": self.infectious,
            "accidents": self.accidents,
            "other": self.other,
        }

    def total(self) -> float:
        """Sum of proportions. Close to, but not forced to, 1.0."""
        return sum(self.as_dict().values())


@dataclass(frozen=True)
class CountryProfile:
    name: str
    code: str
    region: str                 # "North America" | "Europe"
    latitude: float
    longitude: float
    base_population: int
    base_life_expectancy: float
    base_mortality_rate: float  # per 100,000
    base_healthcare_spending: int
    base_gdp_per_capita: int
    preventable_fraction: float # 0-1, fixed over time
    causes: CauseBreakdown
    aging: bool = False         # older age structure (60+ bands scaled)


# ---------------- Generated record ---------------- #

@dataclass(frozen=True)
class AgeGroup:
    range: str                  # "0-14" ... "75+"
    deaths: int
    population: int


@dataclass(frozen=True)
class MortalityRecord:
    country: str
    country_code: str
    region: str
    year: int
    population: int
    total_deaths: int
    mortality_rate: float       # per 100,000, 1 dp
    life_expectancy: float      # years, 1 dp
    cause_breakdown: CauseBreakdown
    preventable_deaths: int
    preventable_percentage: float  # 0-100, 1 dp
    age_groups: Tuple[AgeGroup, ...]
    healthcare_spending_per_capita: int
    gdp_per_capita: int


# ---------------- Metric selector ---------------- #

class Metric(Enum):
    """Numeric MortalityRecord fields that analytics can select on."""

    POPULATION = "population"
    TOTAL_DEATHS = "total_deaths"
    MORTALITY_RATE = "mortality_rate"
    LIFE_EXPECTANCY = "life_expectancy"
    PREVENTABLE_DEATHS = "preventable_deaths"
    PREVENTABLE_PERCENTAGE = "preventable_percentage"
    HEALTHCARE_SPENDING = "healthcare_spending_per_capita"
    GDP_PER_CAPITA = "gdp_per_capita"

    @classmethod
    def parse(cls, name) -> "Metric":
        """Accept a Metric, its snake_case value or the camelCase field name."""
        if isinstance(name, cls):
            return name
        key = str(name).strip()
        for m in cls:
            if key in (m.value, m.name, m.camel_name):
                return m
        raise UnknownMetricError(name, [m.value for m in cls])

    @property
    def camel_name(self) -> str:
        head, *rest = self.value.split("_")
        return head + "".join(w.capitalize() for w in rest)

    @property
    def label(self) -> str:
        return _LABELS[self]

    def value_of(self, record: MortalityRecord) -> float:
        return _ACCESSORS[self](record)


_ACCESSORS: Dict[Metric, Callable[[MortalityRecord], float]] = {
    Metric.POPULATION: attrgetter("population"),
    Metric.TOTAL_DEATHS: attrgetter("total_deaths"),
    Metric.MORTALITY_RATE: attrgetter("mortality_rate"),
    Metric.LIFE_EXPECTANCY: attrgetter("life_expectancy"),
    Metric.PREVENTABLE_DEATHS: attrgetter("preventable_deaths"),
    Metric.PREVENTABLE_PERCENTAGE: attrgetter("preventable_percentage"),
    Metric.HEALTHCARE_SPENDING: attrgetter("healthcare_spending_per_capita"),
    Metric.GDP_PER_CAPITA: attrgetter("gdp_per_capita"),
}

_LABELS: Dict[Metric, str] = {
    Metric.POPULATION: "Population",
    Metric.TOTAL_DEATHS: "Total Deaths",
    Metric.MORTALITY_RATE: "Mortality Rate",
    Metric.LIFE_EXPECTANCY: "Life Expectancy",
    Metric.PREVENTABLE_DEATHS: "Preventable Death Count",
    Metric.PREVENTABLE_PERCENTAGE: "Preventable Deaths",
    Metric.HEALTHCARE_SPENDING: "Healthcare Spending",
    Metric.GDP_PER_CAPITA: "GDP per Capita",
}


# ---------------- Derived entities ---------------- #

@dataclass
class YearlyTrend:
    year: int
    value: float


@dataclass
class MetricSummary:
    current: float
    previous: float
    change: float
    change_percentage: float
    trend: List[YearlyTrend] = field(default_factory=list)


@dataclass
class Gap:
    country: str
    country_code: str
    metric: str                 # "Life Expectancy" / "Preventable Deaths" / "Mortality Rate"
    current: float
    benchmark: float
    gap: float
    gap_percentage: float
    potential_lives_saved: int
    priority: str               # "High" | "Medium" | "Low"


@dataclass
class ProjectedOutcome:
    preventable_deaths: int
    deaths_avoided: int
    preventable_percentage: float
    healthcare_spending: float
    cost_increase: float
    total_savings: float
    savings_per_capita: float
    roi: Optional[float]        # percent; None when nothing is invested
    total_reduction: float      # percent


@dataclass
class CauseDeaths:
    year: int
    deaths: Dict[str, int]


@dataclass
class CountryTrend:
    country: str
    country_code: str
    values: List[YearlyTrend]
    latest: Optional[float]
    change: float
    improving: bool


@dataclass
class Change:
    change: float
    percentage: float
