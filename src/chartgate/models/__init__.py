from .auth_session import AuthSession, Cookie, dedupe_cookies
from .fetch_request import FetchRequest, Interval
from .price_bar import CSV_COLUMNS, PriceBar

__all__ = [
    "AuthSession",
    "Cookie",
    "dedupe_cookies",
    "FetchRequest",
    "Interval",
    "PriceBar",
    "CSV_COLUMNS",
]
