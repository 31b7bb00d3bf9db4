import enum
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Union

from ..core.constants import DEFAULT_MAX_RETRIES
from .auth_session import _as_utc


class Interval(str, enum.Enum):
    Minute_1 = "1m"
    Minute_2 = "2m"
    Minute_5 = "5m"
    Minute_15 = "15m"
    Minute_30 = "30m"
    Minute_60 = "60m"
    Hourly = "1h"
    Minute_90 = "90m"
    Daily = "1d"
    Days_5 = "5d"
    Weekly = "1wk"
    Monthly = "1mo"
    Quarterly = "3mo"

    def __str__(self):
        return self.value

    @classmethod
    def parse(cls, text: Union[str, "Interval"]) -> "Interval":
        if isinstance(text, Interval):
            return text
        normalized = str(text).strip().lower()
        for interval in cls:
            if interval.value == normalized:
                return interval
        valid = ", ".join(i.value for i in cls)
        raise ValueError(f"Invalid interval '{text}'. Valid intervals: {valid}")

    @property
    def is_intraday(self) -> bool:
        return self.value.endswith(("m", "h"))

    @property
    def is_unreliable(self) -> bool:
        # The endpoint frequently returns an error payload for 30m bars
        return self is Interval.Minute_30


@dataclass(frozen=True)
class FetchRequest:
    """Parameters of one historical fetch; the same instance is reused for every attempt."""
    ticker: str
    start: datetime
    end: datetime
    interval: Interval = Interval.Daily
    max_retries: int = DEFAULT_MAX_RETRIES

    def __post_init__(self):
        ticker = (self.ticker or "").strip().upper()
        if not ticker:
            raise ValueError("ticker must not be empty")
        object.__setattr__(self, "ticker", ticker)

        # Naive datetimes are UTC, the same reading the chart client gives them
        if _as_utc(self.start) >= _as_utc(self.end):
            raise ValueError(f"start ({self.start}) must be before end ({self.end})")

        interval = Interval.parse(self.interval)
        object.__setattr__(self, "interval", interval)
        if interval.is_unreliable:
            logging.getLogger(__name__).warning(
                f"Interval {interval} is often rejected by the chart endpoint; consider 15m instead")

        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")

    def __str__(self):
        return f"{self.ticker}|{self.interval}|{self.start:%Y-%m-%d}|{self.end:%Y-%m-%d}"
