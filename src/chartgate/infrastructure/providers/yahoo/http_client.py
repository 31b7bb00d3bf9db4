"""
Chart endpoint HTTP client.

Builds the chart request and classifies the reply into a tagged
ChartResponse. Nothing here raises for HTTP-level outcomes; the fetch engine
decides what each kind means.
"""

import calendar
import enum
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests

from ....core.constants import (
    CHART_BASE_URL,
    CHART_EVENTS,
    CHART_PATH_TEMPLATE,
    DEFAULT_TIMEOUT_SECONDS,
    HTTP_STATUS_FORBIDDEN,
    HTTP_STATUS_TOO_MANY_REQUESTS,
    HTTP_STATUS_UNAUTHORIZED,
    USER_AGENT,
)
from ....models.auth_session import AuthSession
from ....models.fetch_request import FetchRequest
from ...http.client import HttpClient

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "application/json,text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}


class ResponseKind(enum.Enum):
    OK = "ok"
    RATE_LIMITED = "rate_limited"
    UNAUTHORIZED = "unauthorized"
    HTTP_ERROR = "http_error"
    TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True)
class ChartResponse:
    kind: ResponseKind
    status_code: Optional[int] = None
    body: Optional[bytes] = None
    detail: Optional[str] = None

    @classmethod
    def from_status(cls, status_code: int, body: bytes, reason: Optional[str] = None) -> "ChartResponse":
        if status_code == HTTP_STATUS_TOO_MANY_REQUESTS:
            kind = ResponseKind.RATE_LIMITED
        elif status_code in (HTTP_STATUS_UNAUTHORIZED, HTTP_STATUS_FORBIDDEN):
            kind = ResponseKind.UNAUTHORIZED
        elif 200 <= status_code < 300:
            kind = ResponseKind.OK
        else:
            kind = ResponseKind.HTTP_ERROR
        return cls(kind=kind, status_code=status_code, body=body, detail=reason)

    @classmethod
    def transport_error(cls, detail: str) -> "ChartResponse":
        return cls(kind=ResponseKind.TRANSPORT_ERROR, detail=detail)


def to_unix_seconds(value: datetime) -> int:
    """Naive datetimes are read as UTC, matching how bar timestamps are decoded."""
    if value.tzinfo is None:
        return calendar.timegm(value.timetuple())
    return int(value.astimezone(timezone.utc).timestamp())


class YahooChartHttpClient(HttpClient):
    """HTTP client for the v8 chart endpoint."""

    def __init__(self, session: Optional[requests.Session] = None,
                 timeout: int = DEFAULT_TIMEOUT_SECONDS, include_pre_post: bool = False):
        # One attempt per request; transport failures go straight to the engine
        super().__init__(
            base_url=CHART_BASE_URL,
            session=session,
            timeout=timeout,
            max_retries=0,
            default_headers=DEFAULT_HEADERS,
        )
        self.include_pre_post = include_pre_post

    def build_params(self, request: FetchRequest, crumb: str) -> Dict[str, Any]:
        return {
            "period1": to_unix_seconds(request.start),
            "period2": to_unix_seconds(request.end),
            "interval": request.interval.value,
            "includePrePost": "true" if self.include_pre_post else "false",
            "events": CHART_EVENTS,
            "crumb": crumb,
        }

    @staticmethod
    def chart_path(ticker: str) -> str:
        return CHART_PATH_TEMPLATE.format(ticker=quote(ticker, safe=""))

    def install_cookies(self, auth: AuthSession) -> None:
        """Replace the session cookie jar with the cookies of ``auth``."""
        self.session.cookies.clear()
        for cookie in auth.cookies:
            self.session.cookies.set(cookie.name, cookie.value, domain=cookie.domain, path=cookie.path)

    def request_chart(self, request: FetchRequest, auth: AuthSession) -> ChartResponse:
        self.install_cookies(auth)
        try:
            response = self.get(self.chart_path(request.ticker), params=self.build_params(request, auth.crumb))
        except requests.RequestException as e:
            logger.warning(f"Transport error requesting {request.ticker}: {e}")
            return ChartResponse.transport_error(str(e))
        return ChartResponse.from_status(response.status_code, response.content, response.reason)
