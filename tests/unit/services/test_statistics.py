from datetime import datetime
from decimal import Decimal

from chartgate.models import PriceBar
from chartgate.services import compute_summary


def bar(day, high, low, close, volume, adjusted_close=None):
    return PriceBar(
        date=datetime(2024, 12, day),
        open=None if close is None else Decimal(close),
        high=None if high is None else Decimal(high),
        low=None if low is None else Decimal(low),
        close=None if close is None else Decimal(close),
        adjusted_close=None if adjusted_close is None else Decimal(adjusted_close),
        volume=volume,
    )


class TestComputeSummary:
    def test_summary(self):
        bars = [
            bar(20, "255.00", "245.69", "254.49", 100),
            bar(23, "255.65", "253.45", "255.27", 200),
            bar(24, "258.21", "255.29", "258.20", 300),
        ]
        summary = compute_summary("AAPL", bars)

        assert summary.period_high == Decimal("258.21")
        assert summary.period_low == Decimal("245.69")
        assert summary.price_range == Decimal("12.52")
        assert summary.trading_days == 3
        assert summary.average_volume == Decimal(200)
        assert summary.start_price == Decimal("254.49")
        assert summary.end_price == Decimal("258.20")
        assert summary.period_return == Decimal("3.71")
        assert summary.first_date == datetime(2024, 12, 20)
        assert summary.last_date == datetime(2024, 12, 24)

    def test_incomplete_bars_are_skipped(self):
        bars = [
            bar(20, None, None, "254.49", 100),
            bar(23, "255.65", "253.45", "255.27", None),
            bar(24, "258.21", "255.29", "258.20", 300),
        ]
        summary = compute_summary("AAPL", bars)
        assert summary.trading_days == 1
        assert summary.period_return == Decimal(0)

    def test_adjusted_close_used_when_close_missing(self):
        bars = [
            bar(20, "2", "1", None, 10, adjusted_close="1.5"),
            bar(23, "4", "3", "3.0", 10),
        ]
        summary = compute_summary("AAPL", bars)
        assert summary.start_price == Decimal("1.5")
        assert summary.period_return_pct == Decimal(100)

    def test_no_valid_bars(self):
        assert compute_summary("AAPL", [bar(20, None, None, None, None)]) is None
        assert compute_summary("AAPL", []) is None
