"""
Browser-driven authentication for the Yahoo Finance chart endpoint.

The endpoint only accepts requests carrying a crumb and the cookies of a real
browser session, so a Chrome instance is driven through the landing page and
the crumb endpoint and its cookie jar is harvested.
"""

import logging
import tempfile
import time
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterator, Optional, Protocol, Tuple

from bs4 import BeautifulSoup
from selenium import webdriver
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.chrome.service import Service
from selenium.webdriver.common.by import By
from webdriver_manager.chrome import ChromeDriverManager

from ....core.constants import (
    BROWSER_WINDOW_SIZE,
    CONSENT_BUTTON_SELECTORS,
    CONSENT_WARMUP_TICKER,
    CRUMB_URL,
    DEFAULT_IMPLICIT_WAIT_SECONDS,
    DEFAULT_PAGE_LOAD_TIMEOUT_SECONDS,
    DEFAULT_SETTLE_SECONDS,
    LANDING_URL,
    PROVIDER_NAME,
    QUOTE_URL_TEMPLATE,
    USER_AGENT,
)
from ....exceptions.providers import AuthenticationError
from ....logging.performance import TimedOperation
from ....models.auth_session import Cookie
from ....utils.logging_utils import LoggingConfiguration, LoggingContext
from ....utils.utils import mask_secret

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BrowserCredentials:
    cookies: Tuple[Cookie, ...]
    crumb: str


class BrowserAuthenticator(Protocol):
    """Anything that can produce browser credentials. Raises AuthenticationError on failure."""

    def authenticate(self, headless: bool) -> BrowserCredentials:
        ...


def looks_like_html(text: str) -> bool:
    lowered = text.lower()
    if "<html" in lowered or "<!doctype" in lowered:
        return True
    return BeautifulSoup(text, "html.parser").find() is not None


def validate_crumb(text: Optional[str]) -> str:
    """Return the stripped crumb or raise AuthenticationError when it is unusable."""
    crumb = (text or "").strip()
    if not crumb:
        raise AuthenticationError(PROVIDER_NAME, "crumb endpoint returned an empty body")
    if looks_like_html(crumb):
        raise AuthenticationError(PROVIDER_NAME, "crumb endpoint returned an HTML page instead of a token")
    if any(ch.isspace() for ch in crumb):
        raise AuthenticationError(PROVIDER_NAME, "crumb endpoint returned text that is not a token")
    return crumb


def cookie_from_browser(raw: Dict[str, Any]) -> Cookie:
    """Convert a cookie dict as returned by ``driver.get_cookies()``."""
    expiry = raw.get("expiry")
    expires_at = datetime.fromtimestamp(int(expiry), tz=timezone.utc) if expiry is not None else None
    return Cookie(
        name=raw["name"],
        value=raw.get("value", ""),
        domain=raw.get("domain", ""),
        path=raw.get("path") or "/",
        expires_at=expires_at,
    )


def build_chrome_options(headless: bool, profile_dir: str) -> webdriver.ChromeOptions:
    options = webdriver.ChromeOptions()
    if headless:
        options.add_argument("--headless=new")
    options.add_argument(f"--user-data-dir={profile_dir}")
    options.add_argument("--disable-blink-features=AutomationControlled")
    options.add_argument("--disable-dev-shm-usage")
    options.add_argument("--no-sandbox")
    options.add_argument(f"--window-size={BROWSER_WINDOW_SIZE}")
    options.add_argument(f"--user-agent={USER_AGENT}")
    options.add_experimental_option("excludeSwitches", ["enable-automation"])
    options.add_experimental_option("useAutomationExtension", False)
    return options


def default_driver_factory(options: webdriver.ChromeOptions):
    service = Service(ChromeDriverManager().install())
    return webdriver.Chrome(service=service, options=options)


class SeleniumAuthenticator:
    """Obtains a crumb and session cookies by driving Chrome."""

    def __init__(
        self,
        driver_factory: Callable[[webdriver.ChromeOptions], Any] = default_driver_factory,
        page_load_timeout: int = DEFAULT_PAGE_LOAD_TIMEOUT_SECONDS,
        implicit_wait: int = DEFAULT_IMPLICIT_WAIT_SECONDS,
        settle_seconds: float = DEFAULT_SETTLE_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.driver_factory = driver_factory
        self.page_load_timeout = page_load_timeout
        self.implicit_wait = implicit_wait
        self.settle_seconds = settle_seconds
        self.sleep = sleep

    def authenticate(self, headless: bool) -> BrowserCredentials:
        config = LoggingConfiguration(
            entry_msg=f"Starting browser authentication (headless={headless}) ...",
            success_msg="Browser authentication succeeded",
            failure_msg="Browser authentication failed",
            entry_level=logging.INFO,
            logger=logger,
        )
        try:
            with LoggingContext(config), TimedOperation("browser_authentication"):
                with self._browser(headless) as driver:
                    return self._harvest(driver)
        except AuthenticationError:
            raise
        except WebDriverException as e:
            raise AuthenticationError(PROVIDER_NAME, f"browser error: {e.msg or e}") from e
        except (OSError, ValueError) as e:
            raise AuthenticationError(PROVIDER_NAME, f"could not start the browser: {e}") from e

    @contextmanager
    def _browser(self, headless: bool) -> Iterator[Any]:
        with tempfile.TemporaryDirectory(prefix="chartgate-profile-") as profile_dir:
            driver = self.driver_factory(build_chrome_options(headless, profile_dir))
            try:
                driver.set_page_load_timeout(self.page_load_timeout)
                driver.implicitly_wait(self.implicit_wait)
                yield driver
            finally:
                try:
                    driver.quit()
                except WebDriverException as e:
                    logger.warning(f"Failed to shut down the browser cleanly: {e}")

    def _harvest(self, driver) -> BrowserCredentials:
        logger.info("Navigating to Yahoo Finance ...")
        driver.get(LANDING_URL)
        self.sleep(self.settle_seconds)

        self._dismiss_consent(driver)

        logger.info("Loading quote page to establish session ...")
        driver.get(QUOTE_URL_TEMPLATE.format(ticker=CONSENT_WARMUP_TICKER))
        self.sleep(self.settle_seconds)

        cookies = []
        for raw in driver.get_cookies():
            try:
                cookies.append(cookie_from_browser(raw))
            except (KeyError, TypeError, ValueError, OverflowError) as e:
                logger.warning(f"Skipping unreadable browser cookie {raw.get('name', '?')}: {e}")
        logger.debug(f"Harvested {len(cookies)} cookies: "
                     + ", ".join(f"{c.name}={mask_secret(c.value)}" for c in cookies))

        logger.info("Fetching crumb token ...")
        driver.get(CRUMB_URL)
        self.sleep(self.settle_seconds / 2)
        body = driver.find_element(By.TAG_NAME, "body").text
        crumb = validate_crumb(body)
        logger.info(f"Obtained crumb {mask_secret(crumb)}")

        return BrowserCredentials(cookies=tuple(cookies), crumb=crumb)

    def _dismiss_consent(self, driver) -> None:
        """Click the first usable consent button, if any. Never raises."""
        try:
            buttons = driver.find_elements(By.CSS_SELECTOR, ", ".join(CONSENT_BUTTON_SELECTORS))
        except WebDriverException as e:
            logger.warning(f"Could not look for a consent form: {e}")
            return

        if not buttons:
            logger.debug("No consent form present")
            return

        logger.info("Handling consent form ...")
        for button in buttons:
            try:
                if button.is_displayed() and button.is_enabled():
                    button.click()
                    logger.info("Consent accepted")
                    self.sleep(self.settle_seconds)
                    return
            except WebDriverException as e:
                logger.debug(f"Consent button not clickable: {e}")
        logger.warning("Consent form found but no button could be clicked")
