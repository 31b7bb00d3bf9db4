import logging
from datetime import datetime, timezone

import pytest

from chartgate.models import FetchRequest, Interval


class TestInterval:
    @pytest.mark.parametrize("text,expected", [
        ("1d", Interval.Daily),
        ("1WK", Interval.Weekly),
        (" 15m ", Interval.Minute_15),
        ("1h", Interval.Hourly),
    ])
    def test_parse(self, text, expected):
        assert Interval.parse(text) is expected

    def test_parse_interval_instance(self):
        assert Interval.parse(Interval.Monthly) is Interval.Monthly

    def test_parse_invalid_lists_valid_values(self):
        with pytest.raises(ValueError) as exc_info:
            Interval.parse("2d")
        assert "1d" in str(exc_info.value)
        assert "3mo" in str(exc_info.value)

    def test_intraday(self):
        assert Interval.Minute_5.is_intraday
        assert Interval.Hourly.is_intraday
        assert Interval.Minute_90.is_intraday
        assert not Interval.Daily.is_intraday
        assert not Interval.Monthly.is_intraday
        assert not Interval.Weekly.is_intraday

    def test_str_is_wire_value(self):
        assert str(Interval.Weekly) == "1wk"


class TestFetchRequest:
    def test_ticker_normalized(self):
        request = FetchRequest(" aapl ", datetime(2024, 1, 1), datetime(2024, 2, 1))
        assert request.ticker == "AAPL"
        assert request.interval is Interval.Daily
        assert request.max_retries == 3

    def test_interval_string_parsed(self):
        request = FetchRequest("MSFT", datetime(2024, 1, 1), datetime(2024, 2, 1), interval="1H")
        assert request.interval is Interval.Hourly

    def test_empty_ticker_rejected(self):
        with pytest.raises(ValueError):
            FetchRequest("  ", datetime(2024, 1, 1), datetime(2024, 2, 1))

    def test_start_must_precede_end(self):
        with pytest.raises(ValueError):
            FetchRequest("AAPL", datetime(2024, 2, 1), datetime(2024, 2, 1))

    def test_mixed_naive_and_aware_bounds(self):
        aware_end = datetime(2024, 2, 1, tzinfo=timezone.utc)
        request = FetchRequest("AAPL", datetime(2024, 1, 1), aware_end)
        assert request.end is aware_end
        with pytest.raises(ValueError, match="must be before end"):
            FetchRequest("AAPL", datetime(2024, 3, 1), aware_end)

    def test_negative_retries_rejected(self):
        with pytest.raises(ValueError):
            FetchRequest("AAPL", datetime(2024, 1, 1), datetime(2024, 2, 1), max_retries=-1)

    def test_zero_retries_allowed(self):
        request = FetchRequest("AAPL", datetime(2024, 1, 1), datetime(2024, 2, 1), max_retries=0)
        assert request.max_retries == 0

    def test_unreliable_interval_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="chartgate.models.fetch_request"):
            FetchRequest("AAPL", datetime(2024, 1, 1), datetime(2024, 1, 2), interval="30m")
        assert "30m" in caplog.text

    def test_str(self):
        request = FetchRequest("aapl", datetime(2024, 1, 1), datetime(2024, 2, 1), interval="1wk")
        assert str(request) == "AAPL|1wk|2024-01-01|2024-02-01"
