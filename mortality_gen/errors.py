"""
Exceptions raised by the generator and analytics layer.

Everything here is local and synchronous: there is no I/O to retry,
so errors surface straight to the caller.
"""


class MortalityDataError(Exception):
    """Base class for all package errors."""


class EmptyInputError(MortalityDataError, ValueError):
    """A computation needs at least one record and got none."""


class UnknownMetricError(MortalityDataError, KeyError):
    """Metric name is not a numeric field of MortalityRecord."""

    def __init__(self, name, choices=()):
        self.name = name
        self.choices = tuple(choices)
        msg = f"Unknown metric {name!r}"
        if self.choices:
            msg += f". Available={list(self.choices)}"
        super().__init__(msg)

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return self.args[0]


class UnknownCountryError(MortalityDataError, KeyError):
    """Country code has no profile in the static table."""

    def __init__(self, code):
        self.code = code
        super().__init__(f"Unknown country code {code!r}")

    def __str__(self) -> str:
        return self.args[0]


class UnknownRegionError(MortalityDataError, KeyError):
    """Region is not one of config.REGIONS."""

    def __init__(self, region, choices=()):
        self.region = region
        super().__init__(f"Unknown region {region!r}. Available={list(choices)}")

    def __str__(self) -> str:
        return self.args[0]


class InvalidLeverError(MortalityDataError, ValueError):
    """Simulator lever outside the 0-100 range."""
