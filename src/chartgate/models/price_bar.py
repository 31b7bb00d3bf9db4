from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional

CSV_COLUMNS = ("Date", "Open", "High", "Low", "Close", "AdjustedClose", "Volume")


def _fmt_price(value: Optional[Decimal]) -> str:
    return "N/A" if value is None else f"{value:.2f}"


@dataclass(frozen=True)
class PriceBar:
    """One OHLCV bar. Any price or the volume may be missing (None), never zero-filled."""
    date: datetime
    open: Optional[Decimal] = None
    high: Optional[Decimal] = None
    low: Optional[Decimal] = None
    close: Optional[Decimal] = None
    adjusted_close: Optional[Decimal] = None
    volume: Optional[int] = None

    def __post_init__(self):
        if self.volume is not None and self.volume < 0:
            raise ValueError(f"volume must be non-negative, got {self.volume}")

    @property
    def is_complete(self) -> bool:
        return None not in (self.open, self.high, self.low, self.close, self.volume)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "Date": self.date,
            "Open": self.open,
            "High": self.high,
            "Low": self.low,
            "Close": self.close,
            "AdjustedClose": self.adjusted_close,
            "Volume": self.volume,
        }

    def __str__(self):
        volume = "N/A" if self.volume is None else f"{self.volume:,}"
        return (f"{self.date:%Y-%m-%d} | "
                f"O:{_fmt_price(self.open)} | "
                f"H:{_fmt_price(self.high)} | "
                f"L:{_fmt_price(self.low)} | "
                f"C:{_fmt_price(self.close)} | "
                f"Adj:{_fmt_price(self.adjusted_close)} | "
                f"Vol:{volume}")
