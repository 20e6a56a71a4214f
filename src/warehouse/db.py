"""DuckDB-backed key-value storage for estimator state.

A single table holds string values by key. Writes are full overwrites
(upsert), so repeated saves of the same state converge to one row.
"""

from pathlib import Path

import duckdb

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS kv_store (
    record_key VARCHAR PRIMARY KEY,
    value_json VARCHAR NOT NULL,
    updated_at TIMESTAMPTZ NOT NULL
)
"""


def get_connection(db_path: str = "data/estimator.duckdb") -> duckdb.DuckDBPyConnection:
    """Open a connection, creating the parent directory for file databases."""
    if db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    return duckdb.connect(db_path)


def init_db(conn: duckdb.DuckDBPyConnection) -> None:
    conn.execute(SCHEMA_SQL)


def get_value(conn: duckdb.DuckDBPyConnection, key: str) -> str | None:
    row = conn.execute("SELECT value_json FROM kv_store WHERE record_key = ?", [key]).fetchone()
    return row[0] if row else None


def set_value(conn: duckdb.DuckDBPyConnection, key: str, value: str) -> None:
    conn.execute(
        """
        INSERT INTO kv_store (record_key, value_json, updated_at) VALUES (?, ?, current_timestamp)
        ON CONFLICT (record_key) DO UPDATE SET value_json = excluded.value_json, updated_at = excluded.updated_at
        """,
        [key, value],
    )
