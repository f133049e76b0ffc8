"""
Configuration for synthetic mortality universe generation.

These parameters shape a broadly plausible 2010-2023 picture for
North American and European countries: slow population growth,
steady life expectancy gains and a pandemic-era mortality spike.
"""

from pathlib import Path

# ---------------- Time horizon ---------------- #

START_YEAR: int = 2010
END_YEAR: int = 2023  # inclusive


# ---------------- Dimensions & categories ---------------- #

REGIONS = ["North America", "Europe"]

CAUSES = [
    "cardiovascular",
    "cancer",
    "respiratory",
    "diabetes",
    "infectious",
    "accidents",
    "other",
]

# (range label, share of total deaths, population in millions)
AGE_BANDS = [
    ("0-14", 0.01, 15),
    ("15-29", 0.02, 18),
    ("30-44", 0.04, 20),
    ("45-59", 0.12, 22),
    ("60-74", 0.30, 15),
    ("75+", 0.51, 10),
]

# Bands scaled by the aging factor in older-skewed countries
AGED_BANDS = ("60-74", "75+")
AGING_FACTOR: float = 1.3
AGING_COUNTRIES = ("IT", "DE", "ES")


# ---------------- Progression over the window ---------------- #

POPULATION_GROWTH: float = 0.10       # total over the window
LIFE_EXPECTANCY_GAIN: float = 1.5     # years over the window
MORTALITY_IMPROVEMENT: float = 0.10   # total relative decline
SPENDING_GROWTH: float = 0.25
GDP_GROWTH: float = 0.20

# Cause drift per year since START_YEAR
CARDIOVASCULAR_DRIFT: float = 0.002
CARDIOVASCULAR_FLOOR: float = 0.15
CANCER_DRIFT_SHARE: float = 0.5       # cancer rises by half the cardio drop


# ---------------- Pandemic shock ---------------- #

PANDEMIC_YEARS = [2020, 2021]
PANDEMIC_MORTALITY_MULTIPLIER: float = 1.15

# Life expectancy dip, applied only to these countries
PANDEMIC_LE_COUNTRIES = ("US",)
PANDEMIC_LE_DROP: float = 2.0


# ---------------- Preventable deaths ---------------- #

PREVENTABLE_FRACTION = {
    "US": 0.38,
    "MX": 0.45,
    "RO": 0.42,
    "CH": 0.25,
    "NO": 0.25,
    "SE": 0.25,
    "NL": 0.25,
}
DEFAULT_PREVENTABLE_FRACTION: float = 0.32


# ---------------- Gap analysis ---------------- #

# Gaps at or below these are not material
LE_GAP_THRESHOLD: float = 1.0
PREVENTABLE_GAP_THRESHOLD: float = 3.0
MORTALITY_GAP_THRESHOLD: float = 100.0

# (high, medium) priority cut-offs
LE_PRIORITY = (5.0, 3.0)
PREVENTABLE_PRIORITY = (10.0, 5.0)
MORTALITY_PRIORITY = (300.0, 150.0)

# Extra life-years per 100k people converted into lives saved
LE_LIVES_PER_YEAR: float = 10.0


# ---------------- Comparison table bands ---------------- #

# (good, average) limits; beyond average is "poor"
LE_TIERS = (80.0, 75.0)
MORTALITY_TIERS = (700.0, 900.0)
PREVENTABLE_TIERS = (30.0, 35.0)


# ---------------- Intervention simulator ---------------- #

BASELINE_PREVENTABLE_DEATHS: int = 350_000
BASELINE_PREVENTABLE_PERCENTAGE: float = 35.0
BASELINE_HEALTHCARE_SPENDING: float = 5_000.0
SIMULATED_POPULATION: int = 100_000_000

# Maximum reduction in preventable deaths per lever at 100%
MAX_INVESTMENT_EFFECT: float = 0.15
MAX_COVERAGE_EFFECT: float = 0.12
MAX_DETECTION_EFFECT: float = 0.10

MAX_COST_INCREASE: float = 500.0      # USD per capita at 100% investment
SAVINGS_PER_AVOIDED_DEATH: float = 50_000.0

# Dashboard slider defaults
DEFAULT_INVESTMENT: float = 30.0
DEFAULT_COVERAGE: float = 50.0
DEFAULT_DETECTION: float = 40.0


# ---------------- Snapshot output ---------------- #

DATASET_VERSION: str = "v1.0"
OUTPUT_DIR: Path = Path("data") / "raw"
