"""
Application-wide constants for chartgate.

Endpoint addresses, browser settings and defaults shared by the provider,
the configuration models and the CLI.
"""

PROVIDER_NAME = "yahoo"

# File size constants (bytes)
BYTES_PER_MB = 1024 * 1024
DEFAULT_LOG_FILE_SIZE_BYTES = 10 * BYTES_PER_MB
MIN_LOG_FILE_SIZE_BYTES = 1024
DEFAULT_LOG_BACKUP_COUNT = 5

# Endpoints
LANDING_URL = "https://finance.yahoo.com"
QUOTE_URL_TEMPLATE = "https://finance.yahoo.com/quote/{ticker}"
CONSENT_WARMUP_TICKER = "AAPL"
CRUMB_URL = "https://query1.finance.yahoo.com/v1/test/getcrumb"
CHART_BASE_URL = "https://query2.finance.yahoo.com"
CHART_PATH_TEMPLATE = "/v8/finance/chart/{ticker}"
CHART_EVENTS = "div,splits,capitalGains"

# Browser
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
BROWSER_WINDOW_SIZE = "1920,1080"
CONSENT_BUTTON_SELECTORS = (
    "button[name='agree']",
    "button.accept-all",
    "button[type='submit']",
)
DEFAULT_PAGE_LOAD_TIMEOUT_SECONDS = 60
DEFAULT_IMPLICIT_WAIT_SECONDS = 15
DEFAULT_SETTLE_SECONDS = 2.0

# Session cache
CACHE_FILE_NAME = ".yahoo_token_cache.json"
DEFAULT_SESSION_VALIDITY_HOURS = 12
PROJECT_ROOT_MARKERS = ("pyproject.toml", "setup.py", "setup.cfg", ".git")
PROJECT_ROOT_MAX_LEVELS = 3

# Fetching
DEFAULT_MAX_RETRIES = 3
MAX_RETRIES_LIMIT = 10
DEFAULT_BACKOFF_BASE_SECONDS = 30
DEFAULT_TIMEOUT_SECONDS = 30
MAX_TIMEOUT_SECONDS = 300
DEFAULT_INTERVAL = "1d"

# HTTP status codes
HTTP_STATUS_UNAUTHORIZED = 401
HTTP_STATUS_FORBIDDEN = 403
HTTP_STATUS_TOO_MANY_REQUESTS = 429

# CLI display
PREVIEW_HEAD_ROWS = 10
PREVIEW_TAIL_ROWS = 5
DEFAULT_LOOKBACK_DAYS = 365
