"""Closed-form capacity model.

Metrics are derived in a fixed order from the four parameters:
  users -> dau -> peak_concurrent -> tps

Percentages are clamped only after conversion to rates, so a stored
concurrent_percent of 150 stays 150 but contributes a rate of 1.0.
Everything here is pure: identical parameters always give identical metrics.
"""

from dataclasses import dataclass, replace
from typing import Iterable

from src.estimator.config import Parameters, SliderRange
from src.estimator.numeric import as_float


@dataclass(frozen=True)
class DerivedMetrics:
    dau_rate: float
    concurrent_rate: float
    dau: float
    peak_concurrent: float
    rps_per_user: float
    tps: float


def clamp(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)


def derive(params: Parameters) -> DerivedMetrics:
    """Compute the capacity metrics for one set of assumptions.

    A think time of 0 (or below) yields 0 requests per user rather than a
    division error. Non-finite inputs are carried through untouched; the
    formatting layer masks them for display.
    """
    # Ints past the float range become inf instead of raising OverflowError
    users = as_float(params.users)
    think_time_sec = as_float(params.think_time_sec)
    dau_rate = clamp(as_float(params.dau_percent) / 100, 0, 1)
    concurrent_rate = clamp(as_float(params.concurrent_percent) / 100, 0, 1)
    dau = users * dau_rate
    peak_concurrent = dau * concurrent_rate
    rps_per_user = 1 / think_time_sec if think_time_sec > 0 else 0
    tps = peak_concurrent * rps_per_user
    return DerivedMetrics(
        dau_rate=dau_rate,
        concurrent_rate=concurrent_rate,
        dau=dau,
        peak_concurrent=peak_concurrent,
        rps_per_user=rps_per_user,
        tps=tps,
    )


def sweep(
    params: Parameters,
    field: str,
    values: Iterable[float],
) -> list[tuple[float, DerivedMetrics]]:
    """Re-derive metrics while varying a single parameter.

    All other parameters are held at their current values. Used for the
    what-if sliders.
    """
    return [(value, derive(replace(params, **{field: value}))) for value in values]


def slider_values(slider: SliderRange) -> list[float]:
    """Enumerate the positions of a slider, inclusive of both ends."""
    count = int(round((slider.maximum - slider.minimum) / slider.step))
    # Round each step to the slider precision to avoid 0.30000000000000004
    decimals = max(0, len(repr(slider.step).partition(".")[2]))
    return [round(slider.minimum + i * slider.step, decimals) for i in range(count + 1)]


def slider_samples(slider: SliderRange, count: int = 5) -> list[float]:
    """Pick `count` evenly spaced slider positions, both ends included."""
    values = slider_values(slider)
    if count < 2:
        return values[:1]
    last = len(values) - 1
    return [values[round(i * last / (count - 1))] for i in range(count)]
