import logging
from datetime import timedelta
from typing import Optional

from ....core.constants import DEFAULT_SESSION_VALIDITY_HOURS, PROVIDER_NAME
from ....exceptions.providers import AuthenticationError
from ....models.auth_session import AuthSession
from ...storage.credential_store import CredentialStore
from .auth import BrowserAuthenticator

logger = logging.getLogger(__name__)


class SessionManager:
    """Holds the active session and decides where a new one comes from.

    Order: the in-memory session, then the durable cache, then the browser.
    """

    def __init__(
        self,
        authenticator: BrowserAuthenticator,
        store: Optional[CredentialStore] = None,
        use_cache: bool = True,
        headless: bool = True,
        valid_for: timedelta = timedelta(hours=DEFAULT_SESSION_VALIDITY_HOURS),
    ):
        self.authenticator = authenticator
        self.store = store
        self.use_cache = use_cache and store is not None
        self.headless = headless
        self.valid_for = valid_for
        self._active: Optional[AuthSession] = None

    @property
    def active_session(self) -> Optional[AuthSession]:
        return self._active

    @property
    def has_active_session(self) -> bool:
        return self._active is not None

    def ensure_session(self, force_refresh: bool = False) -> AuthSession:
        """Return a usable session, authenticating through the browser when needed.

        ``force_refresh`` skips both the in-memory session and the cache; the
        new session then replaces the cached one.
        """
        if self._active is not None and not force_refresh:
            return self._active

        if self.use_cache and not force_refresh:
            cached = self.store.try_load()
            if cached is not None:
                logger.info("Using cached authentication")
                self._active = cached
                return cached

        try:
            credentials = self.authenticator.authenticate(self.headless)
        except AuthenticationError:
            raise
        except Exception as e:
            # Third-party authenticators are only required to raise AuthenticationError
            raise AuthenticationError(PROVIDER_NAME, str(e)) from e

        session = AuthSession.issue(credentials.crumb, credentials.cookies, self.valid_for)
        self._active = session
        logger.info(f"Authenticated with {len(session.cookies)} cookies, valid until "
                    f"{session.expires_at:%Y-%m-%d %H:%M:%S} UTC")

        if self.use_cache:
            self.store.save(session, self.valid_for)

        return session

    def invalidate(self) -> None:
        """Forget the active session. The durable cache is left alone."""
        if self._active is not None:
            logger.debug("Active session invalidated")
        self._active = None
