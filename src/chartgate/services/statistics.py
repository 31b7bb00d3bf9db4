"""
Summary statistics over a downloaded price series.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..models.price_bar import PriceBar


@dataclass(frozen=True)
class PriceSummary:
    ticker: str
    first_date: datetime
    last_date: datetime
    period_high: Decimal
    period_low: Decimal
    trading_days: int
    average_volume: Decimal
    start_price: Optional[Decimal] = None
    end_price: Optional[Decimal] = None

    @property
    def price_range(self) -> Decimal:
        return self.period_high - self.period_low

    @property
    def period_return(self) -> Optional[Decimal]:
        if self.start_price is None or self.end_price is None:
            return None
        return self.end_price - self.start_price

    @property
    def period_return_pct(self) -> Optional[Decimal]:
        change = self.period_return
        if change is None or self.start_price == 0:
            return None
        return change / self.start_price * 100


def _reference_price(bar: PriceBar) -> Optional[Decimal]:
    return bar.close if bar.close is not None else bar.adjusted_close


def compute_summary(ticker: str, bars: Sequence[PriceBar]) -> Optional[PriceSummary]:
    """Summarize the bars that carry a high, a low and a volume.

    Returns None when no such bar exists.
    """
    valid = [bar for bar in bars if bar.high is not None and bar.low is not None and bar.volume is not None]
    if not valid:
        return None

    total_volume = sum(bar.volume for bar in valid)
    return PriceSummary(
        ticker=ticker,
        first_date=valid[0].date,
        last_date=valid[-1].date,
        period_high=max(bar.high for bar in valid),
        period_low=min(bar.low for bar in valid),
        trading_days=len(valid),
        average_volume=Decimal(total_volume) / len(valid),
        start_price=_reference_price(valid[0]),
        end_price=_reference_price(valid[-1]),
    )
