"""
chartgate: browser-authenticated historical price downloads from the Yahoo
Finance chart endpoint.
"""

__version__ = "0.1.0"

from .exceptions import ChartgateError
from .models import AuthSession, Cookie, FetchRequest, Interval, PriceBar

__all__ = [
    "__version__",
    "ChartgateError",
    "AuthSession",
    "Cookie",
    "FetchRequest",
    "Interval",
    "PriceBar",
]
