"""CLI entrypoint: edit the saved assumptions and print the capacity estimate.

Usage:
    python -m src.estimator.cli
    python -m src.estimator.cli --users 2.500.000 --think-time 0,5
    python -m src.estimator.cli --reset --export data/estimate.json
"""

import argparse
import json
from dataclasses import asdict
from pathlib import Path

from pydantic.alias_generators import to_camel

from src.estimator.config import Parameters
from src.estimator.model import DerivedMetrics
from src.estimator.report import render
from src.estimator.session import EstimatorSession
from src.estimator.store import DuckDBStore, InMemoryStore, ParameterStore
from src.warehouse.db import get_connection


def _snapshot(params: Parameters, metrics: DerivedMetrics) -> dict:
    return {
        "parameters": {to_camel(k): v for k, v in asdict(params).items()},
        "metrics": {to_camel(k): v for k, v in asdict(metrics).items()},
    }


def main(args: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Estimate DAU, peak concurrency and TPS")
    parser.add_argument("--users", type=str, help="Registered users, e.g. 1.000.000")
    parser.add_argument("--dau", type=str, help="Daily active users in percent, e.g. 10")
    parser.add_argument("--concurrent", type=str, help="Peak concurrent in percent of DAU, e.g. 2")
    parser.add_argument("--think-time", type=str, help="Seconds between actions, e.g. 0,5")
    parser.add_argument("--reset", action="store_true", help="Restore default assumptions first")
    parser.add_argument("--db", type=str, default="data/estimator.duckdb", help="Database path")
    parser.add_argument("--memory", action="store_true", help="Do not persist assumptions")
    parser.add_argument("--export", type=str, help="Write a JSON snapshot to this path")
    opts = parser.parse_args(args)

    conn = None if opts.memory else get_connection(opts.db)
    try:
        kv = InMemoryStore() if conn is None else DuckDBStore(conn)
        session = EstimatorSession(ParameterStore(kv))
        if opts.reset:
            session.reset_defaults()
        if opts.users is not None:
            session.set_users(opts.users)
        if opts.dau is not None:
            session.set_dau_percent(opts.dau)
        if opts.concurrent is not None:
            session.set_concurrent_percent(opts.concurrent)
        if opts.think_time is not None:
            session.set_think_time_sec(opts.think_time)

        print(render(session.parameters, session.metrics))

        if opts.export:
            path = Path(opts.export)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(_snapshot(session.parameters, session.metrics), indent=2))
            print(f"\nSnapshot written to {path}")
    finally:
        if conn is not None:
            conn.close()


if __name__ == "__main__":
    main()
