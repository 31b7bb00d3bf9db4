"""
HTTP client abstraction for separating HTTP concerns from business logic.

Only connection failures are retried here. Status codes are returned to the
caller untouched so that rate limiting and session expiry can be handled by
the fetch engine.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


class HttpClient:
    """Base HTTP client with common functionality for all providers."""

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: int = 30,
        max_retries: int = 2,
        backoff_factor: float = 0.3,
        default_headers: Optional[Dict[str, str]] = None,
    ):
        """Initialize HTTP client with configuration.

        Args:
            base_url: Base URL for all requests
            session: Optional existing session to use
            timeout: Request timeout in seconds
            max_retries: Maximum number of connection retry attempts
            backoff_factor: Backoff factor for connection retries
            default_headers: Headers sent with every request
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

        self.session = session or self._create_session(max_retries, backoff_factor)
        if default_headers:
            self.session.headers.update(default_headers)

    def _create_session(self, max_retries: int, backoff_factor: float) -> requests.Session:
        """Create a session that retries connection errors only."""
        session = requests.Session()

        retry_strategy = Retry(
            total=max_retries,
            connect=max_retries,
            read=0,
            status=0,
            backoff_factor=backoff_factor,
            status_forcelist=[],
            allowed_methods=["HEAD", "GET", "OPTIONS"],
            raise_on_status=False,
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        return session

    def get(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs
    ) -> requests.Response:
        """Perform GET request.

        Args:
            endpoint: API endpoint (relative to base_url) or absolute URL
            params: Query parameters
            headers: Additional headers
            **kwargs: Additional arguments passed to requests

        Returns:
            Response object
        """
        url = self._build_url(endpoint)

        self.logger.debug(f"GET {url}")

        response = self.session.get(
            url,
            params=params,
            headers=headers,
            timeout=kwargs.pop('timeout', self.timeout),
            **kwargs
        )

        self._log_response(response)
        return response

    def _build_url(self, endpoint: str) -> str:
        """Build full URL from endpoint."""
        if endpoint.startswith('http'):
            return endpoint
        return urljoin(self.base_url + '/', endpoint.lstrip('/'))

    def _log_response(self, response: requests.Response) -> None:
        self.logger.debug(
            f"Response: {response.status_code} - "
            f"{len(response.content)} bytes"
        )

    def close(self) -> None:
        """Close the HTTP session."""
        if self.session:
            self.session.close()
