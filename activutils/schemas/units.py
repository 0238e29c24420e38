from datetime import datetime, timezone, tzinfo
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UnitSystem(str, Enum):
    """Measurement convention; values are the strings persisted in the preference store"""

    IMPERIAL = "Imperial"
    METRIC = "Metric"


class DateFormatKind(str, Enum):
    IMPERIAL = "Imperial"
    METRIC = "Metric"
    ISO = "Iso"
    BIRTHDAY = "Birthday"


# Day before/after the datetime range so any host offset stays representable
MIN_EPOCH_SECONDS = datetime(1, 1, 2, tzinfo=timezone.utc).timestamp()
MAX_EPOCH_SECONDS = datetime(9999, 12, 30, tzinfo=timezone.utc).timestamp()


class Instant(BaseModel):
    """
    Absolute point in time

    Stored as fractional seconds since the Unix epoch and never carries a
    timezone. A timezone is only applied when converting to a datetime.
    """

    epoch_seconds: float = Field(
        ...,
        ge=MIN_EPOCH_SECONDS,
        le=MAX_EPOCH_SECONDS,
        allow_inf_nan=False,
        description="Seconds since 1970-01-01T00:00:00Z",
    )

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_datetime(cls, value: datetime) -> "Instant":
        """Naive datetimes are taken as system local time"""
        return cls(epoch_seconds=value.timestamp())

    @classmethod
    def now(cls) -> "Instant":
        return cls.from_datetime(datetime.now(timezone.utc))

    def to_datetime(self, tz: Optional[tzinfo] = None) -> datetime:
        """Aware datetime in tz, or in system local time when tz is None"""
        if tz is None:
            return datetime.fromtimestamp(self.epoch_seconds).astimezone()
        return datetime.fromtimestamp(self.epoch_seconds, tz)
