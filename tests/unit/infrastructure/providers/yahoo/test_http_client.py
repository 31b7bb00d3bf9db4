from datetime import datetime, timedelta, timezone
from unittest.mock import Mock, patch

import pytest
import requests

from chartgate.infrastructure.providers.yahoo.http_client import (
    ChartResponse,
    ResponseKind,
    YahooChartHttpClient,
    to_unix_seconds,
)
from chartgate.models import AuthSession, Cookie, FetchRequest


@pytest.fixture
def request_():
    return FetchRequest("AAPL", datetime(2024, 12, 20), datetime(2024, 12, 30), interval="1d")


@pytest.fixture
def auth():
    cookies = (Cookie("A1", "one", ".yahoo.com"), Cookie("A3", "three", ".yahoo.com"))
    return AuthSession.issue("crumb-xyz", cookies, timedelta(hours=1))


class TestChartResponse:
    @pytest.mark.parametrize("status,kind", [
        (200, ResponseKind.OK),
        (429, ResponseKind.RATE_LIMITED),
        (401, ResponseKind.UNAUTHORIZED),
        (403, ResponseKind.UNAUTHORIZED),
        (404, ResponseKind.HTTP_ERROR),
        (500, ResponseKind.HTTP_ERROR),
    ])
    def test_classification(self, status, kind):
        assert ChartResponse.from_status(status, b"").kind is kind

    def test_transport_error(self):
        response = ChartResponse.transport_error("connection reset")
        assert response.kind is ResponseKind.TRANSPORT_ERROR
        assert response.status_code is None
        assert response.detail == "connection reset"


class TestToUnixSeconds:
    def test_naive_is_utc(self):
        assert to_unix_seconds(datetime(2024, 12, 20)) == 1734652800

    def test_aware(self):
        eastern = timezone(timedelta(hours=-5))
        assert to_unix_seconds(datetime(2024, 12, 19, 19, 0, tzinfo=eastern)) == 1734652800


class TestYahooChartHttpClient:
    @pytest.fixture
    def client(self):
        return YahooChartHttpClient(timeout=10)

    def test_build_params(self, client, request_):
        params = client.build_params(request_, "crumb-xyz")
        assert params == {
            "period1": 1734652800,
            "period2": 1735516800,
            "interval": "1d",
            "includePrePost": "false",
            "events": "div,splits,capitalGains",
            "crumb": "crumb-xyz",
        }

    def test_connection_failures_are_not_retried(self, client):
        retry = client.session.get_adapter("https://query2.finance.yahoo.com/v8/finance/chart/AAPL").max_retries
        assert retry.total == 0
        assert retry.connect == 0
        assert retry.status == 0

    def test_include_pre_post(self, request_):
        client = YahooChartHttpClient(include_pre_post=True)
        assert client.build_params(request_, "c")["includePrePost"] == "true"

    def test_chart_path_quotes_symbol(self):
        assert YahooChartHttpClient.chart_path("^GSPC") == "/v8/finance/chart/%5EGSPC"
        assert YahooChartHttpClient.chart_path("BRK.B") == "/v8/finance/chart/BRK.B"

    def test_install_cookies_replaces_jar(self, client, auth):
        client.session.cookies.set("stale", "x", domain=".yahoo.com", path="/")
        client.install_cookies(auth)
        assert {c.name for c in client.session.cookies} == {"A1", "A3"}

    @patch('requests.Session.get')
    def test_request_chart(self, mock_get, client, request_, auth):
        mock_get.return_value = Mock(status_code=200, content=b'{"chart": {}}', reason="OK")

        response = client.request_chart(request_, auth)

        assert response.kind is ResponseKind.OK
        assert response.body == b'{"chart": {}}'
        args, kwargs = mock_get.call_args
        assert args[0] == "https://query2.finance.yahoo.com/v8/finance/chart/AAPL"
        assert kwargs["params"]["crumb"] == "crumb-xyz"
        assert kwargs["timeout"] == 10

    @patch('requests.Session.get')
    def test_rate_limit_is_not_raised(self, mock_get, client, request_, auth):
        mock_get.return_value = Mock(status_code=429, content=b"Too Many Requests", reason="Too Many Requests")
        response = client.request_chart(request_, auth)
        assert response.kind is ResponseKind.RATE_LIMITED
        assert response.status_code == 429

    @patch('requests.Session.get')
    def test_transport_failure(self, mock_get, client, request_, auth):
        mock_get.side_effect = requests.ConnectionError("connection reset")
        response = client.request_chart(request_, auth)
        assert response.kind is ResponseKind.TRANSPORT_ERROR
        assert "connection reset" in response.detail
