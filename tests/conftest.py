"""
Pytest configuration and shared fixtures for chartgate tests.

Nothing here touches the network or starts a browser: authentication goes
through StubAuthenticator and chart requests through ScriptedChartClient.
"""

import json
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import pytest
from freezegun import freeze_time

from chartgate.exceptions import AuthenticationError
from chartgate.infrastructure.providers.yahoo.auth import BrowserCredentials
from chartgate.infrastructure.providers.yahoo.http_client import ChartResponse, ResponseKind
from chartgate.models import Cookie

# 14:30 UTC daily bars for the AAPL trading days between 2024-12-20 and 2024-12-30
AAPL_TIMESTAMPS = [1734703200, 1734962400, 1735048800, 1735221600, 1735308000]


def build_chart_payload(
    timestamps: Sequence[int],
    quote: Optional[Dict[str, List[Any]]] = None,
    adjclose: Optional[List[Any]] = None,
    symbol: str = "AAPL",
) -> Dict[str, Any]:
    """A chart endpoint response body as a dict."""
    size = len(timestamps)
    quote = quote if quote is not None else {
        "open": [100.0 + i for i in range(size)],
        "high": [101.0 + i for i in range(size)],
        "low": [99.0 + i for i in range(size)],
        "close": [100.5 + i for i in range(size)],
        "volume": [1000 * (i + 1) for i in range(size)],
    }
    indicators: Dict[str, Any] = {"quote": [quote]}
    if adjclose is not None:
        indicators["adjclose"] = [{"adjclose": adjclose}]
    return {
        "chart": {
            "result": [{
                "meta": {
                    "symbol": symbol,
                    "currency": "USD",
                    "exchangeTimezoneName": "America/New_York",
                    "dataGranularity": "1d",
                },
                "timestamp": list(timestamps),
                "indicators": indicators,
            }],
            "error": None,
        }
    }


def error_payload(code: str = "Not Found", description: str = "No data found, symbol may be delisted") -> Dict[str, Any]:
    return {"chart": {"result": None, "error": {"code": code, "description": description}}}


def ok_response(payload: Dict[str, Any]) -> ChartResponse:
    return ChartResponse(kind=ResponseKind.OK, status_code=200, body=json.dumps(payload).encode("utf-8"))


def status_response(status_code: int) -> ChartResponse:
    return ChartResponse.from_status(status_code, b"", "status")


class StubAuthenticator:
    """Hands out numbered crumbs; optionally fails."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls: List[bool] = []

    def authenticate(self, headless: bool) -> BrowserCredentials:
        self.calls.append(headless)
        if self.fail:
            raise AuthenticationError("yahoo", "stub browser failure")
        n = len(self.calls)
        return BrowserCredentials(
            cookies=(Cookie("A3", f"cookie-{n}", ".yahoo.com"),),
            crumb=f"crumb{n}",
        )


class ScriptedChartClient:
    """Returns the scripted ChartResponses in order and records every call."""

    def __init__(self, responses: Sequence[ChartResponse]):
        self.responses = list(responses)
        self.calls = []
        self.closed = False

    def request_chart(self, request, auth):
        self.calls.append((request, auth))
        if not self.responses:
            raise AssertionError("no scripted response left")
        return self.responses.pop(0)

    def close(self):
        self.closed = True


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def frozen_time():
    """Freeze time for deterministic testing."""
    with freeze_time("2024-12-30 12:00:00") as frozen:
        yield frozen


@pytest.fixture
def aapl_payload():
    return build_chart_payload(
        AAPL_TIMESTAMPS,
        quote={
            "open": [248.04, 254.77, 255.49, 258.19, 257.83],
            "high": [255.0, 255.65, 258.21, 260.1, 258.7],
            "low": [245.69, 253.45, 255.29, 257.63, 253.06],
            "close": [254.49, 255.27, 258.2, 259.02, 255.59],
            "volume": [147495300, 40858800, 23234700, 27237100, 42355300],
        },
        adjclose=[253.87, 254.66, 257.58, 258.4, 254.97],
    )


@pytest.fixture
def stub_authenticator():
    return StubAuthenticator()


@pytest.fixture
def sample_cookies():
    return (
        Cookie("A1", "value-1", ".yahoo.com", "/", datetime(2025, 12, 30, 12, 0, 0)),
        Cookie("A3", "value-3", ".yahoo.com", "/"),
    )


@pytest.fixture
def clean_environment(monkeypatch):
    """Remove CHARTGATE_* variables so they cannot leak into config tests."""
    import os
    for var in list(os.environ):
        if var.startswith("CHARTGATE_"):
            monkeypatch.delenv(var, raising=False)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests across several components")
    config.addinivalue_line("markers", "slow: Slow tests")
    config.addinivalue_line("markers", "network: Tests that need network access")
