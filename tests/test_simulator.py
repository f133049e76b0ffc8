"""
    test_simulator
    ~~~~~~~~~~~~~~
    Test `simulator` module of `mortality_gen`.
"""
import pytest

from mortality_gen import config
from mortality_gen.errors import InvalidLeverError
from mortality_gen.simulator import combined_reduction, simulate


def test_default_scenario():
    out = simulate()
    assert out.total_reduction == pytest.approx(14.5)
    assert out.preventable_deaths == 299_250
    assert out.deaths_avoided == 50_750
    assert out.preventable_percentage == pytest.approx(35 * 0.855)
    assert out.cost_increase == pytest.approx(150.0)
    assert out.healthcare_spending == pytest.approx(5_150.0)
    assert out.total_savings == pytest.approx(2_537_500_000)
    assert out.savings_per_capita == pytest.approx(25.375)
    assert out.roi == pytest.approx((25.375 - 150) / 150 * 100)


def test_all_levers_off():
    out = simulate(0, 0, 0)
    assert out.deaths_avoided == 0
    assert out.preventable_deaths == config.BASELINE_PREVENTABLE_DEATHS
    assert out.roi is None


def test_all_levers_maxed():
    assert combined_reduction(100, 100, 100) == pytest.approx(0.37)
    assert simulate(100, 100, 100).deaths_avoided == 129_500


@pytest.mark.parametrize("lever", [0, 1, 2])
def test_deaths_avoided_monotonic(lever):
    previous = -1
    for pct in range(0, 101, 5):
        levers = [30.0, 50.0, 40.0]
        levers[lever] = pct
        avoided = simulate(*levers).deaths_avoided
        assert avoided >= previous
        previous = avoided


@pytest.mark.parametrize("levers", [(-1, 0, 0), (0, 101, 0), (0, 0, 150)])
def test_lever_out_of_range(levers):
    with pytest.raises(InvalidLeverError):
        simulate(*levers)
    with pytest.raises(ValueError):
        simulate(*levers)
