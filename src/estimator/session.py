"""Estimator session: the surface a presentation layer drives.

The session owns the current parameters. Every edit goes through a setter
that parses raw input, applies the field floor, re-derives the metrics and
saves the record. Widgets only hand over raw text or slider values and
render what they read back.
"""

import math
from dataclasses import replace

from src.estimator.config import DEFAULT_PARAMETERS, FIELD_FLOORS, Parameters
from src.estimator.model import DerivedMetrics, derive
from src.estimator.numeric import as_float, parse_number
from src.estimator.store import ParameterStore


class EstimatorSession:
    def __init__(self, store: ParameterStore):
        self.store = store
        self._params = store.load(DEFAULT_PARAMETERS) or DEFAULT_PARAMETERS
        self._metrics = derive(self._params)

    @property
    def parameters(self) -> Parameters:
        return self._params

    @property
    def metrics(self) -> DerivedMetrics:
        return self._metrics

    def set_users(self, raw: str | float) -> DerivedMetrics:
        return self._set("users", raw)

    def set_dau_percent(self, raw: str | float) -> DerivedMetrics:
        return self._set("dau_percent", raw)

    def set_concurrent_percent(self, raw: str | float) -> DerivedMetrics:
        return self._set("concurrent_percent", raw)

    def set_think_time_sec(self, raw: str | float) -> DerivedMetrics:
        return self._set("think_time_sec", raw)

    def reset_defaults(self) -> DerivedMetrics:
        self._apply(self.store.reset_to_default())
        return self._metrics

    def _set(self, field: str, raw: str | float) -> DerivedMetrics:
        floor = FIELD_FLOORS[field]
        value = parse_number(raw)
        if not math.isfinite(as_float(value)):
            value = floor
        self._apply(replace(self._params, **{field: max(floor, value)}))
        return self._metrics

    def _apply(self, params: Parameters) -> None:
        self._params = params
        self._metrics = derive(params)
        self.store.save(params)
