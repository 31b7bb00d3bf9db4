from .auth import BrowserAuthenticator, BrowserCredentials, SeleniumAuthenticator, validate_crumb
from .client import YahooFinanceClient
from .engine import FetchOutcome, FetchState, ResilientFetchEngine
from .http_client import ChartResponse, ResponseKind, YahooChartHttpClient
from .parser import ChartMeta, ChartResponseParser
from .session import SessionManager

__all__ = [
    "BrowserAuthenticator",
    "BrowserCredentials",
    "SeleniumAuthenticator",
    "validate_crumb",
    "YahooFinanceClient",
    "FetchOutcome",
    "FetchState",
    "ResilientFetchEngine",
    "ChartResponse",
    "ResponseKind",
    "YahooChartHttpClient",
    "ChartMeta",
    "ChartResponseParser",
    "SessionManager",
]
