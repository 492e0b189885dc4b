"""Normalized quote and the tagged failure returned instead of raising."""
import math
from datetime import date, datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class Quote(BaseModel):
    """Fresh price observation for one symbol; produced on every poll tick."""

    symbol: str
    price: float
    change_percent: float
    observed_at: date | datetime

    @field_validator("price", "change_percent")
    @classmethod
    def _finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("must be a finite number")
        return value


class FetchFailureKind(str, Enum):
    RATE_LIMITED = "rate_limited"
    UNREACHABLE = "unreachable"
    MALFORMED_RESPONSE = "malformed_response"
    CONFIGURATION_MISSING = "configuration_missing"


class FetchFailure(BaseModel):
    """Why a quote could not be fetched this tick."""

    symbol: str
    kind: FetchFailureKind
    detail: str = ""
    at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def transient(self) -> bool:
        """False only when every later fetch will fail the same way."""
        return self.kind is not FetchFailureKind.CONFIGURATION_MISSING
