"""CI validation: verify an exported estimate snapshot is complete and consistent.

Reads the JSON written by `python -m src.estimator.cli --export ...` and
re-checks the parameters against their floors and the metrics against the
capacity formulas. Exits non-zero on any error.

Usage:
    python ci/validate_estimate.py
    python ci/validate_estimate.py --data data/estimate.json
"""

import argparse
import json
import math
import sys
from pathlib import Path

REQUIRED_TOP_KEYS = {"parameters", "metrics"}
PARAMETER_FLOORS = {
    "users": 0,
    "dauPercent": 0,
    "concurrentPercent": 0,
    "thinkTimeSec": 0.1,
}
METRIC_FIELDS = ("dauRate", "concurrentRate", "dau", "peakConcurrent", "rpsPerUser", "tps")
REL_TOL = 1e-9


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check(errors: list[str], name: str, actual: float, expected: float) -> None:
    if not math.isclose(actual, expected, rel_tol=REL_TOL, abs_tol=1e-12):
        errors.append(f"{name} inconsistent: got {actual}, expected {expected}")


def validate(data: dict) -> list[str]:
    """Return a list of validation errors (empty = pass)."""
    errors = []

    # --- Top-level structure ---
    for key in sorted(REQUIRED_TOP_KEYS):
        if key not in data:
            errors.append(f"Missing top-level key: {key}")

    if errors:
        return errors  # Can't continue without structure

    # --- Parameters ---
    params = data["parameters"]
    for name, floor in PARAMETER_FLOORS.items():
        value = params.get(name)
        if not _is_number(value):
            errors.append(f"Parameter {name} missing or not numeric: {value!r}")
        elif value < floor:
            errors.append(f"Parameter {name} below floor {floor}: {value}")

    # --- Metrics ---
    metrics = data["metrics"]
    for name in METRIC_FIELDS:
        if not _is_number(metrics.get(name)):
            errors.append(f"Metric {name} missing or not numeric: {metrics.get(name)!r}")

    if errors:
        return errors  # Can't recompute without numbers

    for rate in ("dauRate", "concurrentRate"):
        if not 0 <= metrics[rate] <= 1:
            errors.append(f"Metric {rate} out of range [0, 1]: {metrics[rate]}")

    _check(errors, "dauRate", metrics["dauRate"], min(max(params["dauPercent"] / 100, 0), 1))
    _check(
        errors, "concurrentRate", metrics["concurrentRate"],
        min(max(params["concurrentPercent"] / 100, 0), 1),
    )
    _check(errors, "dau", metrics["dau"], params["users"] * metrics["dauRate"])
    _check(errors, "peakConcurrent", metrics["peakConcurrent"], metrics["dau"] * metrics["concurrentRate"])
    _check(errors, "rpsPerUser", metrics["rpsPerUser"], 1 / params["thinkTimeSec"])
    _check(errors, "tps", metrics["tps"], metrics["peakConcurrent"] * metrics["rpsPerUser"])

    return errors


def main() -> None:
    parser = argparse.ArgumentParser(description="Validate an exported estimate snapshot")
    parser.add_argument(
        "--data",
        default="data/estimate.json",
        help="Path to exported snapshot JSON",
    )
    opts = parser.parse_args()

    path = Path(opts.data)
    if not path.exists():
        print(f"FAIL: {opts.data} not found. Run 'python -m src.estimator.cli --export {opts.data}' first.")
        sys.exit(1)

    data = json.loads(path.read_text())
    errors = validate(data)

    if errors:
        print(f"FAIL: {len(errors)} validation error(s):")
        for e in errors:
            print(f"  - {e}")
        sys.exit(1)

    params = data["parameters"]
    metrics = data["metrics"]
    print("PASS: Estimate snapshot validated")
    print(f"  Users: {params['users']:,.0f} -> DAU {metrics['dau']:,.0f}")
    print(f"  Peak concurrent: {metrics['peakConcurrent']:,.0f}")
    print(f"  TPS: {metrics['tps']:,.2f}")


if __name__ == "__main__":
    main()
