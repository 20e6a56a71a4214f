"""Formatted output for the estimator: stat cards, what-if lines, formulas."""

from dataclasses import dataclass

from src.estimator.config import CONCURRENT_SLIDER, THINK_TIME_SLIDER, Parameters
from src.estimator.model import DerivedMetrics, slider_samples, sweep
from src.estimator.numeric import format_decimal, format_integer, format_plain

FORMULAS = (
    ("DAU", "Users × (DAU%)"),
    ("Peak Concurrent", "DAU × (Concurrent%)"),
    ("RPS per User", "1 ÷ Think Time (s)"),
    ("TPS Total", "Peak Concurrent × RPS per User"),
)


@dataclass(frozen=True)
class StatCard:
    title: str
    value: str
    subtitle: str


def stat_cards(metrics: DerivedMetrics) -> list[StatCard]:
    return [
        StatCard(
            "Daily Active Users",
            format_integer(metrics.dau),
            f"= Users × {format_decimal(metrics.dau_rate * 100, 2)}%",
        ),
        StatCard(
            "Peak Concurrent",
            format_integer(metrics.peak_concurrent),
            f"= DAU × {format_decimal(metrics.concurrent_rate * 100, 2)}%",
        ),
        StatCard(
            "RPS per User",
            format_decimal(metrics.rps_per_user, 3),
            "= 1 ÷ Think Time (s)",
        ),
        StatCard(
            "TPS Total (≈ RPS)",
            format_integer(metrics.tps),
            "= Peak Concurrent × RPS/User",
        ),
    ]


def what_if_lines(params: Parameters, metrics: DerivedMetrics) -> list[str]:
    # Slider captions; percent shows the raw entered value, not the clamped rate
    return [
        f"{format_plain(params.think_time_sec)} s -> RPS/User ≈ "
        f"{format_decimal(metrics.rps_per_user, 3)}",
        f"{format_decimal(params.concurrent_percent, 1)}% of DAU -> Peak ≈ "
        f"{format_integer(metrics.peak_concurrent)}",
    ]


def sweep_lines(params: Parameters) -> list[str]:
    """TPS at evenly spaced positions of each what-if slider."""
    lines = []
    for value, metrics in sweep(params, "think_time_sec", slider_samples(THINK_TIME_SLIDER)):
        lines.append(f"Think time {format_plain(value)} s -> TPS ≈ {format_integer(metrics.tps)}")
    for value, metrics in sweep(params, "concurrent_percent", slider_samples(CONCURRENT_SLIDER)):
        lines.append(
            f"Peak concurrent {format_plain(value)}% -> TPS ≈ {format_integer(metrics.tps)}"
        )
    return lines


def render(params: Parameters, metrics: DerivedMetrics) -> str:
    """Plain-text report of the current estimate."""
    lines = ["Assumptions:"]
    lines.append(f"  Registered users:   {format_integer(params.users)}")
    lines.append(f"  Daily active:       {format_decimal(params.dau_percent)}%")
    lines.append(f"  Peak concurrent:    {format_decimal(params.concurrent_percent)}%")
    lines.append(f"  Think time:         {format_decimal(params.think_time_sec)} s")

    lines.append("\nEstimate:")
    for card in stat_cards(metrics):
        lines.append(f"  {card.title:<20} {card.value:>14}  {card.subtitle}")

    lines.append("\nWhat-if:")
    lines.extend(f"  {line}" for line in what_if_lines(params, metrics))
    lines.extend(f"  {line}" for line in sweep_lines(params))

    lines.append("\nFormulas:")
    lines.extend(f"  {name} = {expr}" for name, expr in FORMULAS)
    return "\n".join(lines)
