"""
Decoding of chart endpoint payloads into PriceBar lists.

The payload carries parallel arrays (timestamps, OHLC, volume, adjusted
close) where any element may be null. Numbers are decoded as Decimal so the
prices are kept exactly as the feed sent them.
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Union

from ....core.constants import PROVIDER_NAME
from ....exceptions.providers import DataProviderError, NoDataError
from ....models.price_bar import PriceBar

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1)
QUOTE_FIELDS = ("open", "high", "low", "close", "volume")


@dataclass(frozen=True)
class ChartMeta:
    symbol: Optional[str] = None
    currency: Optional[str] = None
    exchange_timezone: Optional[str] = None
    data_granularity: Optional[str] = None


def _malformed(reason: str) -> DataProviderError:
    return DataProviderError(PROVIDER_NAME, f"Malformed chart response: {reason}")


def _to_decimal(value: Any, field: str) -> Optional[Decimal]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise _malformed(f"unexpected boolean in '{field}'")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    raise _malformed(f"unexpected value {value!r} in '{field}'")


def _to_volume(value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, Decimal)):
        raise _malformed(f"unexpected value {value!r} in 'volume'")
    return int(value)


def _to_datetime(value: Any) -> datetime:
    if isinstance(value, bool) or not isinstance(value, (int, Decimal)):
        raise _malformed(f"unexpected timestamp {value!r}")
    return EPOCH + timedelta(seconds=int(value))


class ChartResponseParser:
    """Turns a chart payload into bars strictly increasing by date."""

    def parse(self, body: Union[str, bytes]) -> List[PriceBar]:
        result = self._first_result(self._load_chart(body))

        timestamps = result.get("timestamp")
        if not timestamps:
            raise NoDataError(PROVIDER_NAME, self._symbol(result))

        indicators = result.get("indicators") or {}
        quote = self._first(indicators.get("quote"))
        adjclose = self._first(indicators.get("adjclose"))

        size = len(timestamps)
        columns = {name: self._column(quote, name, size) for name in QUOTE_FIELDS}
        columns["adjclose"] = self._column(adjclose, "adjclose", size)

        by_timestamp: Dict[datetime, PriceBar] = {}
        for i, raw_ts in enumerate(timestamps):
            try:
                bar = self._bar(raw_ts, columns, i)
            except (ValueError, OverflowError) as e:
                raise _malformed(f"row {i}: {e}") from e
            # The live bar is repeated at the end of intraday responses; last one wins
            by_timestamp[bar.date] = bar

        bars = [by_timestamp[date] for date in sorted(by_timestamp)]
        if len(bars) != size:
            logger.debug(f"Dropped {size - len(bars)} duplicate timestamps")
        logger.info(f"Received {len(bars)} data points")
        return bars

    def parse_meta(self, body: Union[str, bytes]) -> Optional[ChartMeta]:
        """Descriptive metadata of the first result, or None when the payload has none."""
        try:
            result = self._first_result(self._load_chart(body))
        except (DataProviderError, NoDataError):
            return None
        meta = result.get("meta")
        if not isinstance(meta, dict):
            return None
        return ChartMeta(
            symbol=meta.get("symbol"),
            currency=meta.get("currency"),
            exchange_timezone=meta.get("exchangeTimezoneName"),
            data_granularity=meta.get("dataGranularity"),
        )

    @staticmethod
    def _bar(raw_ts: Any, columns: Dict[str, Sequence[Any]], i: int) -> PriceBar:
        return PriceBar(
            date=_to_datetime(raw_ts),
            open=_to_decimal(columns["open"][i], "open"),
            high=_to_decimal(columns["high"][i], "high"),
            low=_to_decimal(columns["low"][i], "low"),
            close=_to_decimal(columns["close"][i], "close"),
            adjusted_close=_to_decimal(columns["adjclose"][i], "adjclose"),
            volume=_to_volume(columns["volume"][i]),
        )

    @staticmethod
    def _load_chart(body: Union[str, bytes]) -> Dict[str, Any]:
        try:
            payload = json.loads(body, parse_float=Decimal)
        except (json.JSONDecodeError, UnicodeDecodeError, TypeError) as e:
            raise _malformed(f"invalid JSON ({e})") from e

        chart = payload.get("chart") if isinstance(payload, dict) else None
        if not isinstance(chart, dict):
            raise _malformed("missing 'chart' object")

        error = chart.get("error")
        if error is not None:
            if isinstance(error, dict):
                description = error.get("description") or error.get("code") or "unknown error"
                code = error.get("code")
            else:
                description, code = str(error), None
            raise DataProviderError(PROVIDER_NAME, str(description), str(code) if code else None)

        return chart

    def _first_result(self, chart: Dict[str, Any]) -> Dict[str, Any]:
        result = self._first(chart.get("result"))
        if result is None:
            raise NoDataError(PROVIDER_NAME)
        return result

    @staticmethod
    def _first(items: Any) -> Optional[Dict[str, Any]]:
        if isinstance(items, list) and items and isinstance(items[0], dict):
            return items[0]
        return None

    @staticmethod
    def _column(container: Optional[Dict[str, Any]], name: str, size: int) -> Sequence[Any]:
        values = container.get(name) if container else None
        if values is None:
            return [None] * size
        if not isinstance(values, list):
            raise _malformed(f"'{name}' is not an array")
        if len(values) != size:
            raise _malformed(f"'{name}' has {len(values)} values for {size} timestamps")
        return values

    @staticmethod
    def _symbol(result: Dict[str, Any]) -> Optional[str]:
        meta = result.get("meta")
        return meta.get("symbol") if isinstance(meta, dict) else None
