import pytest

from mortality_gen.generators import generate_mortality_data


@pytest.fixture(scope="session")
def records():
    return generate_mortality_data()


@pytest.fixture
def by_key(records):
    return {(r.country_code, r.year): r for r in records}
