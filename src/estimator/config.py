"""Estimator parameters and fixed constants.

The four assumptions model a typical consumer-facing service:
  registered users -> daily actives -> peak concurrent -> transactions/sec

Percentages are entered as plain numbers (10 means 10%), not fractions.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Parameters:
    users: float = 1_000_000
    # Share of users active on a given day
    dau_percent: float = 10
    # Share of DAU simultaneously active at the daily peak
    concurrent_percent: float = 2
    # Seconds between a user's successive actions
    think_time_sec: float = 5


DEFAULT_PARAMETERS = Parameters()

# Lower bounds applied to edits. Percentages have no upper bound here;
# the derived rates are clamped instead.
FIELD_FLOORS: dict[str, float] = {
    "users": 0,
    "dau_percent": 0,
    "concurrent_percent": 0,
    "think_time_sec": 0.1,
}

# Persisted record key. Bump the suffix whenever the field set changes.
STORAGE_KEY = "capacity_calc_v1"

# Locale separators (id-ID style: 1.000.000,5)
THOUSANDS_SEPARATOR = "."
DECIMAL_SEPARATOR = ","

# Shown in place of non-finite numbers
PLACEHOLDER = "-"


@dataclass(frozen=True)
class SliderRange:
    field: str
    minimum: float
    maximum: float
    step: float


# What-if sliders
THINK_TIME_SLIDER = SliderRange("think_time_sec", minimum=0.1, maximum=60, step=0.1)
CONCURRENT_SLIDER = SliderRange("concurrent_percent", minimum=0, maximum=10, step=0.1)
