from datetime import datetime

import pytest

from chartgate.core.config import ChartgateConfig
from chartgate.exceptions import RateLimitError
from chartgate.infrastructure.providers.yahoo import (
    ResilientFetchEngine,
    SessionManager,
    YahooChartHttpClient,
    YahooFinanceClient,
)
from tests.conftest import ScriptedChartClient, ok_response, status_response


@pytest.fixture
def make_client(stub_authenticator):
    def factory(responses, default_max_retries=3):
        sessions = SessionManager(stub_authenticator, store=None)
        http = ScriptedChartClient(responses)
        engine = ResilientFetchEngine(sessions, http, sleep=lambda seconds: None)
        return YahooFinanceClient(sessions, http, engine, default_max_retries=default_max_retries), http
    return factory


class TestYahooFinanceClient:
    def test_from_config(self, temp_dir, stub_authenticator):
        config = ChartgateConfig()
        config.auth.headless = False
        config.fetch.max_retries = 5
        config.fetch.backoff_base_seconds = 10

        client = YahooFinanceClient.from_config(config, temp_dir / "cache.json",
                                                authenticator=stub_authenticator)

        assert isinstance(client.http_client, YahooChartHttpClient)
        assert client.sessions.headless is False
        assert client.sessions.store.path == temp_dir / "cache.json"
        assert client.engine.backoff_delay(1) == 20
        assert client.default_max_retries == 5
        client.close()

    def test_from_config_without_cache(self, stub_authenticator):
        client = YahooFinanceClient.from_config(ChartgateConfig(), None, authenticator=stub_authenticator)
        assert client.sessions.store is None
        assert not client.sessions.use_cache
        client.close()

    def test_get_historical_prices(self, make_client, aapl_payload):
        client, http = make_client([ok_response(aapl_payload)])

        bars = client.get_historical_prices("aapl", datetime(2024, 12, 20), datetime(2024, 12, 30))

        assert len(bars) == 5
        request = http.calls[0][0]
        assert request.ticker == "AAPL"
        assert request.max_retries == 3

    def test_max_retries_override(self, make_client):
        client, http = make_client([status_response(429)] * 2)
        with pytest.raises(RateLimitError):
            client.get_historical_prices("AAPL", datetime(2024, 12, 20), datetime(2024, 12, 30),
                                         max_retries=1)
        assert len(http.calls) == 2

    def test_authenticate_overrides(self, make_client, stub_authenticator):
        client, http = make_client([])
        session = client.authenticate(headless=False)
        assert session.crumb == "crumb1"
        assert stub_authenticator.calls == [False]
        assert client.authenticate() is session
        assert client.authenticate(force_refresh=True).crumb == "crumb2"

    def test_context_manager_closes(self, make_client):
        client, http = make_client([])
        with client:
            pass
        assert http.closed
