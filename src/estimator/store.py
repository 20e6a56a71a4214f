"""Persistence of estimator parameters across sessions.

The parameters live in one JSON record inside an injected key-value store.
Loading and saving are total: a missing, unreadable, or corrupt record means
"use defaults", and a failed write is logged and dropped. Persistence is
opportunistic; the estimator works the same without it.
"""

import logging
from typing import Protocol

import duckdb
from pydantic import ValidationError

from src.estimator.config import DEFAULT_PARAMETERS, STORAGE_KEY, Parameters
from src.estimator.schemas import StoredParameters
from src.warehouse.db import get_value, init_db, set_value

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised by the bundled store adapters when the backing medium fails.

    ParameterStore absorbs any exception from a store, not only this one.
    """


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryStore:
    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class DuckDBStore:
    """Key-value adapter over the warehouse `kv_store` table."""

    def __init__(self, conn: duckdb.DuckDBPyConnection):
        self.conn = conn
        init_db(conn)

    def get(self, key: str) -> str | None:
        try:
            return get_value(self.conn, key)
        except duckdb.Error as exc:
            raise StoreError(f"read of {key!r} failed: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        try:
            set_value(self.conn, key, value)
        except duckdb.Error as exc:
            raise StoreError(f"write of {key!r} failed: {exc}") from exc


class ParameterStore:
    def __init__(self, store: KeyValueStore, key: str = STORAGE_KEY):
        self.store = store
        self.key = key

    def load(self, base: Parameters = DEFAULT_PARAMETERS) -> Parameters | None:
        """Read the stored parameters.

        Returns None when there is no usable record. Otherwise each valid
        stored field overrides the matching field of `base`; invalid fields
        keep the `base` value.
        """
        try:
            raw = self.store.get(self.key)
        except Exception as exc:
            # Injected stores may fail with their own exception types
            logger.warning("Could not read %s, using defaults: %s", self.key, exc)
            return None
        if raw is None:
            return None
        if not isinstance(raw, (str, bytes)):
            logger.warning("Discarding non-text record under %s", self.key)
            return None

        try:
            stored = StoredParameters.model_validate_json(raw)
        except ValidationError:
            logger.warning("Discarding malformed record under %s", self.key)
            return None
        return stored.merge_into(base)

    def save(self, params: Parameters) -> None:
        """Overwrite the record with the full parameter set."""
        payload = StoredParameters.from_parameters(params).model_dump_json(by_alias=True)
        try:
            self.store.set(self.key, payload)
        except Exception as exc:
            logger.warning("Could not save %s: %s", self.key, exc)

    def reset_to_default(self) -> Parameters:
        # Persisting happens on the next save, like any other change
        return DEFAULT_PARAMETERS
