"""Schema of the persisted parameters record.

Stored as one JSON object under a versioned key:
  {"users": 1000000, "dauPercent": 10, "concurrentPercent": 2, "thinkTimeSec": 5}

Fields are validated one at a time. A field that is missing, not a JSON
number, non-finite, or below its floor is dropped (None) instead of
rejecting the whole record.
"""

from dataclasses import replace
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from src.estimator.config import FIELD_FLOORS, Parameters
from src.estimator.numeric import as_float

PARAMETER_FIELDS = ("users", "dau_percent", "concurrent_percent", "think_time_sec")


def _bounded(name: str):
    # JSON numbers only (bools and numeric strings are rejected)
    return Annotated[StrictFloat, Field(ge=FIELD_FLOORS[name], allow_inf_nan=False)]


class StoredParameters(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    users: _bounded("users") | None = None
    dau_percent: _bounded("dau_percent") | None = None
    concurrent_percent: _bounded("concurrent_percent") | None = None
    think_time_sec: _bounded("think_time_sec") | None = None

    @field_validator(*PARAMETER_FIELDS, mode="wrap")
    @classmethod
    def _drop_invalid(cls, value, handler):
        try:
            return handler(value)
        except ValidationError:
            return None

    @classmethod
    def from_parameters(cls, params: Parameters) -> "StoredParameters":
        return cls(**{name: as_float(getattr(params, name)) for name in PARAMETER_FIELDS})

    def merge_into(self, base: Parameters) -> Parameters:
        """Overlay the valid stored fields onto `base`."""
        values = {
            name: getattr(self, name)
            for name in PARAMETER_FIELDS
            if getattr(self, name) is not None
        }
        return replace(base, **values)
