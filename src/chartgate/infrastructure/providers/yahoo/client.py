"""
Yahoo Finance client facade.

Wires the credential store, the browser authenticator, the session manager
and the fetch engine together behind a small API:

    with YahooFinanceClient.from_config(config, cache_path) as client:
        bars = client.get_historical_prices("AAPL", start, end)
"""

import logging
import time
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, List, Optional, Union

from ....core.config.models import ChartgateConfig
from ....models.auth_session import AuthSession
from ....models.fetch_request import FetchRequest, Interval
from ....models.price_bar import PriceBar
from ...storage.credential_store import CredentialStore
from .auth import BrowserAuthenticator, SeleniumAuthenticator
from .engine import FetchOutcome, ResilientFetchEngine
from .http_client import YahooChartHttpClient
from .parser import ChartResponseParser
from .session import SessionManager

logger = logging.getLogger(__name__)


class YahooFinanceClient:
    def __init__(
        self,
        sessions: SessionManager,
        http_client: YahooChartHttpClient,
        engine: Optional[ResilientFetchEngine] = None,
        default_max_retries: int = 3,
    ):
        self.sessions = sessions
        self.http_client = http_client
        self.engine = engine or ResilientFetchEngine(sessions, http_client)
        self.default_max_retries = default_max_retries

    @classmethod
    def from_config(
        cls,
        config: ChartgateConfig,
        cache_path: Optional[Union[str, Path]],
        authenticator: Optional[BrowserAuthenticator] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> "YahooFinanceClient":
        auth_config = config.auth
        fetch_config = config.fetch

        if authenticator is None:
            authenticator = SeleniumAuthenticator(
                page_load_timeout=auth_config.page_load_timeout,
                implicit_wait=auth_config.implicit_wait,
                settle_seconds=auth_config.settle_seconds,
                sleep=sleep,
            )
        store = CredentialStore(cache_path) if cache_path is not None else None
        sessions = SessionManager(
            authenticator,
            store=store,
            use_cache=auth_config.use_cache,
            headless=auth_config.headless,
            valid_for=timedelta(hours=auth_config.session_validity_hours),
        )
        http_client = YahooChartHttpClient(
            timeout=fetch_config.request_timeout,
            include_pre_post=fetch_config.include_pre_post,
        )
        engine = ResilientFetchEngine(
            sessions,
            http_client,
            ChartResponseParser(),
            backoff_base_seconds=fetch_config.backoff_base_seconds,
            sleep=sleep,
        )
        return cls(sessions, http_client, engine, default_max_retries=fetch_config.max_retries)

    def authenticate(self, headless: Optional[bool] = None, use_cache: Optional[bool] = None,
                     force_refresh: bool = False) -> AuthSession:
        """Make sure a session is active, overriding headless/cache settings for this call."""
        if headless is not None:
            self.sessions.headless = headless
        if use_cache is not None:
            self.sessions.use_cache = use_cache and self.sessions.store is not None
        return self.sessions.ensure_session(force_refresh=force_refresh)

    def get_historical_prices(
        self,
        ticker: str,
        start: datetime,
        end: datetime,
        interval: Union[str, Interval] = Interval.Daily,
        max_retries: Optional[int] = None,
    ) -> List[PriceBar]:
        request = FetchRequest(
            ticker=ticker,
            start=start,
            end=end,
            interval=interval,
            max_retries=self.default_max_retries if max_retries is None else max_retries,
        )
        return self.fetch(request)

    def fetch(self, request: FetchRequest) -> List[PriceBar]:
        return self.engine.fetch(request)

    def run(self, request: FetchRequest) -> FetchOutcome:
        return self.engine.run(request)

    def close(self) -> None:
        self.http_client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
