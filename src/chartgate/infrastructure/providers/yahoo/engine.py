"""
Resilient fetch engine.

Drives one FetchRequest to completion as an explicit state machine:

    NEED_AUTH -> REQUESTING -> SUCCESS
                    |  ^
          429       v  |  after sleep
                 BACKOFF            (until the retry budget is spent)
                    |
    REQUESTING --401/403--> NEED_AUTH (forced refresh, at most once)

Any other outcome ends in FAILED with exactly one ProviderError.
"""

import enum
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ....core.constants import DEFAULT_BACKOFF_BASE_SECONDS, PROVIDER_NAME
from ....exceptions.providers import (
    AuthenticationError,
    NetworkError,
    ProviderError,
    RateLimitError,
    UnauthorizedError,
)
from ....logging.performance import TimedOperation
from ....models.fetch_request import FetchRequest
from ....models.price_bar import PriceBar
from .http_client import ChartResponse, ResponseKind, YahooChartHttpClient
from .parser import ChartMeta, ChartResponseParser
from .session import SessionManager

logger = logging.getLogger(__name__)


class FetchState(enum.Enum):
    NEED_AUTH = "need_auth"
    REQUESTING = "requesting"
    BACKOFF = "backoff"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class FetchOutcome:
    state: FetchState
    bars: List[PriceBar] = field(default_factory=list)
    error: Optional[ProviderError] = None
    requests_made: int = 0
    backoff_delays: List[float] = field(default_factory=list)
    reauth_count: int = 0
    meta: Optional[ChartMeta] = None

    @property
    def succeeded(self) -> bool:
        return self.state is FetchState.SUCCESS

    def unwrap(self) -> List[PriceBar]:
        if self.error is not None:
            raise self.error
        return self.bars


class ResilientFetchEngine:
    """Retries rate limits with exponential backoff and re-authenticates once on 401/403."""

    def __init__(
        self,
        sessions: SessionManager,
        http_client: YahooChartHttpClient,
        parser: Optional[ChartResponseParser] = None,
        backoff_base_seconds: float = DEFAULT_BACKOFF_BASE_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.sessions = sessions
        self.http_client = http_client
        self.parser = parser or ChartResponseParser()
        self.backoff_base_seconds = backoff_base_seconds
        self.sleep = sleep

    def backoff_delay(self, attempt: int) -> float:
        """Wait before retry ``attempt`` (1-based): base * 2**attempt."""
        return self.backoff_base_seconds * (2 ** attempt)

    def fetch(self, request: FetchRequest) -> List[PriceBar]:
        return self.run(request).unwrap()

    def run(self, request: FetchRequest) -> FetchOutcome:
        logger.info(f"Fetching {request.ticker} {request.start:%Y-%m-%d} to {request.end:%Y-%m-%d} "
                    f"(interval {request.interval})")
        outcome = FetchOutcome(state=FetchState.REQUESTING)
        state = FetchState.REQUESTING if self.sessions.has_active_session else FetchState.NEED_AUTH
        force_refresh = False
        reauth_used = False
        rate_limit_attempts = 0
        last_response: Optional[ChartResponse] = None

        with TimedOperation("chart_fetch", context={"ticker": request.ticker}):
            while state not in (FetchState.SUCCESS, FetchState.FAILED):
                logger.debug(f"Fetch state: {state.name}")

                if state is FetchState.NEED_AUTH:
                    try:
                        self.sessions.ensure_session(force_refresh=force_refresh)
                    except AuthenticationError as e:
                        outcome.error = e
                        state = FetchState.FAILED
                        continue
                    state = FetchState.REQUESTING

                elif state is FetchState.REQUESTING:
                    session = self.sessions.active_session
                    if session is None:
                        state = FetchState.NEED_AUTH
                        continue
                    outcome.requests_made += 1
                    last_response = self.http_client.request_chart(request, session)
                    logger.debug(f"Chart response: {last_response.kind.name} ({last_response.status_code})")
                    state = self._after_response(last_response, request, outcome, reauth_used)
                    if last_response.kind is ResponseKind.UNAUTHORIZED and state is FetchState.NEED_AUTH:
                        reauth_used = True
                        force_refresh = True
                        outcome.reauth_count += 1

                elif state is FetchState.BACKOFF:
                    rate_limit_attempts += 1
                    if rate_limit_attempts > request.max_retries:
                        last_wait = outcome.backoff_delays[-1] if outcome.backoff_delays else None
                        outcome.error = RateLimitError(PROVIDER_NAME, attempts=outcome.requests_made,
                                                       wait_time=last_wait)
                        state = FetchState.FAILED
                        continue
                    delay = self.backoff_delay(rate_limit_attempts)
                    outcome.backoff_delays.append(delay)
                    logger.warning(f"Rate limited. Waiting {delay:.0f} seconds before retry "
                                   f"{rate_limit_attempts}/{request.max_retries} ...")
                    self.sleep(delay)
                    state = FetchState.REQUESTING

        outcome.state = state
        if state is FetchState.SUCCESS:
            logger.info(f"Fetched {len(outcome.bars)} bars for {request.ticker}")
        else:
            logger.error(f"Fetch for {request.ticker} failed: {outcome.error.message}")
        return outcome

    def _after_response(self, response: ChartResponse, request: FetchRequest,
                        outcome: FetchOutcome, reauth_used: bool) -> FetchState:
        if response.kind is ResponseKind.RATE_LIMITED:
            return FetchState.BACKOFF

        if response.kind is ResponseKind.UNAUTHORIZED:
            rejected = UnauthorizedError(PROVIDER_NAME, response.status_code)
            if not reauth_used:
                logger.warning("Unauthorized - re-authenticating ...")
                self.sessions.invalidate()
                return FetchState.NEED_AUTH
            error = AuthenticationError(PROVIDER_NAME, "session rejected again after re-authentication",
                                        http_code=response.status_code)
            error.__cause__ = rejected
            outcome.error = error
            return FetchState.FAILED

        if response.kind is ResponseKind.TRANSPORT_ERROR:
            outcome.error = NetworkError(PROVIDER_NAME, response.detail)
            return FetchState.FAILED

        if response.kind is ResponseKind.HTTP_ERROR:
            outcome.error = NetworkError(PROVIDER_NAME, response.detail, status_code=response.status_code)
            return FetchState.FAILED

        try:
            outcome.bars = self.parser.parse(response.body)
            outcome.meta = self.parser.parse_meta(response.body)
        except ProviderError as e:
            outcome.error = e
            return FetchState.FAILED
        return FetchState.SUCCESS
