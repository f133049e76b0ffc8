"""
    test_generators
    ~~~~~~~~~~~~~~~
    Test `generators` and `profiles` modules of `mortality_gen`.
"""
import dataclasses
import logging

import pytest

from mortality_gen import config
from mortality_gen.errors import UnknownCountryError
from mortality_gen.generators import (
    age_groups_frame,
    causes_frame,
    generate_mortality_data,
    generate_record,
    load_dataset,
    records_frame,
    round_half_up,
    year_progress,
)
from mortality_gen.profiles import COUNTRIES, PROFILES, REGION_MEMBERS, get_profile

N_YEARS = config.END_YEAR - config.START_YEAR + 1


def test_deterministic(records):
    assert generate_mortality_data() == records


def test_one_record_per_country_year(records):
    assert len(records) == len(COUNTRIES) * N_YEARS
    keys = {(r.country_code, r.year) for r in records}
    assert len(keys) == len(records)
    assert {y for _, y in keys} == set(range(2010, 2024))


def test_grouped_by_country_in_year_order(records):
    for i, profile in enumerate(COUNTRIES):
        block = records[i * N_YEARS:(i + 1) * N_YEARS]
        assert {r.country_code for r in block} == {profile.code}
        assert [r.year for r in block] == list(range(2010, 2024))


def test_derived_fields_consistent(records):
    for r in records:
        expected = r.mortality_rate / 100_000 * r.population
        # stored rate is rounded to 1 dp, deaths use the unrounded one
        assert abs(r.total_deaths - expected) <= r.population * 0.05 / 100_000 + 1
        assert r.preventable_deaths == int(round_half_up(r.total_deaths * r.preventable_percentage / 100))


def test_life_expectancy_bounds(records):
    for r in records:
        base = PROFILES[r.country_code].base_life_expectancy
        assert base - 2.5 <= r.life_expectancy <= base + 1.5 + 1e-9


@pytest.mark.parametrize("year, population, le, rate, deaths", [
    (2010, 310_000_000, 78.5, 850.0, 2_635_000),
    (2020, 333_846_154, 77.7, 902.3, None),
    (2023, 341_000_000, 80.0, 765.0, 2_608_650),
])
def test_united_states_values(by_key, year, population, le, rate, deaths):
    r = by_key[("US", year)]
    assert r.population == population
    assert r.life_expectancy == pytest.approx(le)
    assert r.mortality_rate == pytest.approx(rate)
    if deaths is not None:
        assert r.total_deaths == deaths


def test_us_baseline_economics(by_key):
    first, last = by_key[("US", 2010)], by_key[("US", 2023)]
    assert first.healthcare_spending_per_capita == 11_000
    assert last.healthcare_spending_per_capita == 13_750
    assert first.gdp_per_capita == 48_000
    assert last.gdp_per_capita == 57_600
    assert first.preventable_deaths == 1_001_300


def test_pandemic_spike(by_key):
    for profile in COUNTRIES:
        assert by_key[(profile.code, 2020)].mortality_rate > by_key[(profile.code, 2019)].mortality_rate
        assert by_key[(profile.code, 2022)].mortality_rate < by_key[(profile.code, 2021)].mortality_rate


def test_pandemic_life_expectancy_dip_only_in_us(by_key):
    assert by_key[("US", 2020)].life_expectancy < by_key[("US", 2019)].life_expectancy
    assert by_key[("CA", 2020)].life_expectancy > by_key[("CA", 2019)].life_expectancy


@pytest.mark.parametrize("code, pct", [
    ("US", 38.0), ("MX", 45.0), ("RO", 42.0),
    ("CH", 25.0), ("NO", 25.0), ("SE", 25.0), ("NL", 25.0),
    ("GB", 32.0), ("BE", 32.0),
])
def test_preventable_percentage(by_key, code, pct):
    assert {by_key[(code, y)].preventable_percentage for y in range(2010, 2024)} == {pct}


def test_cause_drift(by_key):
    causes = by_key[("US", 2023)].cause_breakdown
    assert causes.cardiovascular == pytest.approx(0.30 - 0.026)
    assert causes.cancer == pytest.approx(0.22 + 0.013)
    assert causes.respiratory == 0.10
    # not renormalised
    assert causes.total() == pytest.approx(1.0 - 0.013)


def test_cardiovascular_floor():
    profile = get_profile("US")
    low = dataclasses.replace(
        profile, causes=dataclasses.replace(profile.causes, cardiovascular=0.16)
    )
    assert generate_record(low, 2023).cause_breakdown.cardiovascular == 0.15


def test_age_groups(by_key):
    us = by_key[("US", 2023)]
    assert [ag.range for ag in us.age_groups] == ["0-14", "15-29", "30-44", "45-59", "60-74", "75+"]
    assert us.age_groups[-1].deaths == int(round_half_up(us.total_deaths * 0.51))
    assert us.age_groups[0].population == 15_000_000

    it = by_key[("IT", 2023)]
    assert it.age_groups[4].deaths == pytest.approx(it.total_deaths * 0.39, abs=1)
    assert it.age_groups[3].deaths == int(round_half_up(it.total_deaths * 0.12))


def test_unknown_country_uses_default(caplog):
    with caplog.at_level(logging.WARNING):
        records = generate_mortality_data(["US", "ZZ"])
    assert len(records) == 2 * N_YEARS
    zz = [r for r in records if r.country_code == "ZZ"]
    assert zz[0].population == 5_000_000
    assert zz[0].life_expectancy == pytest.approx(78.0)
    assert zz[0].mortality_rate == pytest.approx(700.0)
    assert "ZZ" in caplog.text


def test_strict_profile_lookup():
    with pytest.raises(UnknownCountryError):
        get_profile("ZZ", strict=True)
    assert get_profile("FR", strict=True).name == "France"


def test_region_members():
    assert REGION_MEMBERS["North America"] == ["US", "CA", "MX"]
    assert len(REGION_MEMBERS["Europe"]) == len(COUNTRIES) - 3


@pytest.mark.parametrize("x, ndigits, expected", [
    (2.5, 0, 3.0), (3.5, 0, 4.0), (2.4, 0, 2.0), (77.65, 1, 77.7), (0.125, 2, 0.13),
])
def test_round_half_up(x, ndigits, expected):
    assert round_half_up(x, ndigits) == pytest.approx(expected)


def test_year_progress():
    assert year_progress(2010) == 0
    assert year_progress(2023) == 1


def test_frames(records):
    flat = records_frame(records)
    assert len(flat) == len(records)
    assert flat.loc[0, "country_code"] == "US"
    assert len(causes_frame(records)) == len(records) * 7
    assert len(age_groups_frame(records)) == len(records) * 6


def test_load_dataset_is_cached():
    first = load_dataset()
    assert isinstance(first, tuple)
    assert load_dataset() is first


def test_records_are_immutable(records):
    r = records[0]
    with pytest.raises(dataclasses.FrozenInstanceError):
        r.population = 1
    with pytest.raises(dataclasses.FrozenInstanceError):
        r.cause_breakdown.cardiovascular = 0.0
    with pytest.raises(dataclasses.FrozenInstanceError):
        r.age_groups[0].deaths = 0
    assert isinstance(r.age_groups, tuple)


def test_cause_proportions_non_negative():
    for r in load_dataset():
        assert all(share >= 0 for share in r.cause_breakdown.as_dict().values())
