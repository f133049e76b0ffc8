"""
What-if intervention simulator.

Three independent levers, each a 0-100 intensity:

    investment  -> prevention funding      (up to 15% fewer preventable deaths)
    coverage    -> lifestyle programme reach (up to 12%)
    detection   -> early-detection uplift  (up to 10%)

Effects add linearly and the combined reduction is applied to a fixed
baseline country (config.BASELINE_*), independent of the generated dataset.
"""

from __future__ import annotations

from . import config
from .errors import InvalidLeverError
from .generators import round_half_up
from .schemas import ProjectedOutcome


def _lever_effect(name: str, pct: float, max_effect: float) -> float:
    if not 0 <= pct <= 100:
        raise InvalidLeverError(f"{name} must be within 0-100, got {pct}")
    return pct / 100 * max_effect


def combined_reduction(investment_pct: float, coverage_pct: float, detection_pct: float) -> float:
    """Fraction of preventable deaths removed by the three levers together."""
    return (
        _lever_effect("investment", investment_pct, config.MAX_INVESTMENT_EFFECT)
        + _lever_effect("coverage", coverage_pct, config.MAX_COVERAGE_EFFECT)
        + _lever_effect("detection", detection_pct, config.MAX_DETECTION_EFFECT)
    )


def simulate(
    investment_pct: float = config.DEFAULT_INVESTMENT,
    coverage_pct: float = config.DEFAULT_COVERAGE,
    detection_pct: float = config.DEFAULT_DETECTION,
) -> ProjectedOutcome:
    """Project preventable deaths, spending and ROI for the given levers.

    ROI is (savings per capita - cost increase) / cost increase, in percent.
    With zero investment there is no cost to return on, so roi is None.
    """
    reduction = combined_reduction(investment_pct, coverage_pct, detection_pct)

    baseline_deaths = config.BASELINE_PREVENTABLE_DEATHS
    new_deaths = int(round_half_up(baseline_deaths * (1 - reduction)))
    deaths_avoided = baseline_deaths - new_deaths

    cost_increase = investment_pct / 100 * config.MAX_COST_INCREASE
    total_savings = deaths_avoided * config.SAVINGS_PER_AVOIDED_DEATH
    savings_per_capita = total_savings / config.SIMULATED_POPULATION

    roi = (savings_per_capita - cost_increase) / cost_increase * 100 if cost_increase else None

    return ProjectedOutcome(
        preventable_deaths=new_deaths,
        deaths_avoided=deaths_avoided,
        preventable_percentage=config.BASELINE_PREVENTABLE_PERCENTAGE * (1 - reduction),
        healthcare_spending=config.BASELINE_HEALTHCARE_SPENDING + cost_increase,
        cost_increase=cost_increase,
        total_savings=total_savings,
        savings_per_capita=savings_per_capita,
        roi=roi,
        total_reduction=reduction * 100,
    )
