from datetime import datetime
from decimal import Decimal

import pytest

from chartgate.models import PriceBar
from chartgate.models.price_bar import CSV_COLUMNS


class TestPriceBar:
    def test_missing_values_stay_none(self):
        bar = PriceBar(date=datetime(2024, 12, 20), close=Decimal("254.49"))
        assert bar.open is None
        assert bar.volume is None
        assert not bar.is_complete

    def test_complete_bar(self):
        bar = PriceBar(datetime(2024, 12, 20), Decimal("1"), Decimal("2"), Decimal("0.5"), Decimal("1.5"),
                       None, 100)
        assert bar.is_complete

    def test_negative_volume_rejected(self):
        with pytest.raises(ValueError):
            PriceBar(date=datetime(2024, 12, 20), volume=-1)

    def test_zero_volume_allowed(self):
        assert PriceBar(date=datetime(2024, 12, 20), volume=0).volume == 0

    def test_as_dict_uses_csv_columns(self):
        bar = PriceBar(date=datetime(2024, 12, 20), adjusted_close=Decimal("253.87"), volume=5)
        data = bar.as_dict()
        assert tuple(data) == CSV_COLUMNS
        assert data["AdjustedClose"] == Decimal("253.87")
        assert data["Volume"] == 5

    def test_str(self):
        bar = PriceBar(datetime(2024, 12, 20), Decimal("248.04"), Decimal("255"), Decimal("245.69"),
                       Decimal("254.49"), None, 147495300)
        text = str(bar)
        assert text.startswith("2024-12-20 | O:248.04 | H:255.00")
        assert "Adj:N/A" in text
        assert text.endswith("Vol:147,495,300")
