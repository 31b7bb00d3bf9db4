from datetime import datetime
from pathlib import Path

from chartgate.cli.utils.config_utils import (
    default_output_path,
    ensure_csv_suffix,
    get_default_date_range,
    resolve_cache_path,
)
from chartgate.core.config import ChartgateConfig


class TestResolveCachePath:
    def test_configured_path_wins(self, temp_dir):
        config = ChartgateConfig()
        config.auth.cache_file = temp_dir / "mine.json"
        assert resolve_cache_path(config, start=temp_dir) == temp_dir / "mine.json"

    def test_project_root(self, temp_dir):
        (temp_dir / "pyproject.toml").touch()
        nested = temp_dir / "src" / "pkg"
        nested.mkdir(parents=True)
        assert resolve_cache_path(ChartgateConfig(), start=nested) == temp_dir.resolve() / ".yahoo_token_cache.json"


class TestDefaults:
    def test_default_date_range(self):
        start, end = get_default_date_range(datetime(2024, 12, 30, 15, 45))
        assert end == datetime(2024, 12, 30)
        assert start == datetime(2023, 12, 31)

    def test_default_output_path(self):
        path = default_output_path("AAPL", datetime(2024, 1, 1), datetime(2024, 12, 31), Path("data"))
        assert path == Path("data") / "AAPL_20240101_20241231.csv"

    def test_ensure_csv_suffix(self):
        assert ensure_csv_suffix(Path("prices")) == Path("prices.csv")
        assert ensure_csv_suffix(Path("prices.CSV")) == Path("prices.CSV")
        assert ensure_csv_suffix(Path("prices.v2")) == Path("prices.v2.csv")
