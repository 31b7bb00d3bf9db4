"""
Durable storage for a single authenticated session.

The cache file holds exactly one session and is always replaced as a whole.
Every read problem degrades to a cache miss and every write problem to a
warning, so the cache can never fail a fetch.
"""

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

from dateutil.parser import isoparse

from ...exceptions.storage import CacheError
from ...models.auth_session import AuthSession, Cookie
from ...utils.logging_utils import LoggingConfiguration, LoggingContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheStatus:
    path: Path
    saved_at: datetime
    expires_at: datetime
    cookie_count: int
    expired: bool

    @property
    def remaining(self) -> timedelta:
        return self.expires_at - datetime.now(timezone.utc)


@dataclass(frozen=True)
class _CachedRecord:
    session: AuthSession
    saved_at: datetime
    expires_at: datetime


def _parse_timestamp(value: str) -> datetime:
    parsed = isoparse(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _format_timestamp(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat()


class CredentialStore:
    """Persists one AuthSession as JSON at a fixed path."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def save(self, session: AuthSession, valid_for: timedelta) -> bool:
        """Write the session, replacing any previous one. Returns False instead of raising."""
        now = datetime.now(timezone.utc)
        record = {
            "crumb": session.crumb,
            "cookies": [self._cookie_to_dict(cookie) for cookie in session.cookies],
            "timestamp": _format_timestamp(now),
            "expiresAt": _format_timestamp(now + valid_for),
        }
        config = LoggingConfiguration(
            entry_msg=f"Saving session cache to {self.path}",
            success_msg=f"Session cached (valid for {valid_for.total_seconds() / 3600:.1f} hours)",
            logger=logger,
        )
        try:
            with LoggingContext(config):
                self._write_atomically(json.dumps(record, indent=2))
            return True
        except (OSError, TypeError, ValueError) as e:
            error = CacheError("write", self.path, str(e))
            logger.warning(f"Failed to cache authentication: {error.message}")
            return False

    def try_load(self) -> Optional[AuthSession]:
        """Return the cached session, or None when absent, unreadable or expired.

        An expired file is deleted; a malformed one is left in place.
        """
        if not self.path.exists():
            logger.info("No cached authentication found")
            return None

        try:
            record = self._read_record()
        except CacheError as e:
            logger.warning(f"Failed to load cache: {e.message}")
            return None

        now = datetime.now(timezone.utc)
        if now >= record.expires_at:
            logger.info(
                f"Cached authentication expired at {record.expires_at:%Y-%m-%d %H:%M:%S} UTC")
            self.delete()
            return None

        remaining = record.expires_at - now
        logger.info(
            f"Loaded cached authentication (valid for {remaining.total_seconds() / 3600:.1f} more hours)")
        return record.session

    def delete(self) -> None:
        """Remove the cache file. A missing file is fine."""
        try:
            self.path.unlink()
            logger.info(f"Session cache deleted: {self.path}")
        except FileNotFoundError:
            pass
        except OSError as e:
            error = CacheError("delete", self.path, str(e))
            logger.warning(f"Failed to delete cache: {error.message}")

    def is_valid(self) -> bool:
        """True when the file exists, parses and has not expired. No side effects."""
        status = self.describe()
        return status is not None and not status.expired

    def describe(self) -> Optional[CacheStatus]:
        if not self.path.exists():
            return None
        try:
            record = self._read_record()
        except CacheError:
            return None
        return CacheStatus(
            path=self.path,
            saved_at=record.saved_at,
            expires_at=record.expires_at,
            cookie_count=len(record.session.cookies),
            expired=datetime.now(timezone.utc) >= record.expires_at,
        )

    def _read_record(self) -> _CachedRecord:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise CacheError("read", self.path, str(e)) from e

        try:
            saved_at = _parse_timestamp(data["timestamp"])
            expires_at = _parse_timestamp(data["expiresAt"])
            cookies = tuple(self._cookie_from_dict(item) for item in data.get("cookies") or [])
            session = AuthSession(
                crumb=data["crumb"],
                cookies=cookies,
                issued_at=saved_at,
                expires_at=expires_at,
            )
        except (KeyError, TypeError, ValueError, AttributeError, OverflowError) as e:
            raise CacheError("read", self.path, f"invalid cache record: {e}") from e

        return _CachedRecord(session=session, saved_at=saved_at, expires_at=expires_at)

    def _write_atomically(self, content: str) -> None:
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f"{self.path.name}.", suffix=".tmp", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_name, self.path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise

    @staticmethod
    def _cookie_to_dict(cookie: Cookie) -> Dict[str, Any]:
        item = {
            "name": cookie.name,
            "value": cookie.value,
            "domain": cookie.domain,
            "path": cookie.path,
        }
        if cookie.expires_at is not None:
            item["expires"] = _format_timestamp(cookie.expires_at)
        return item

    @staticmethod
    def _cookie_from_dict(item: Dict[str, Any]) -> Cookie:
        expires = item.get("expires")
        return Cookie(
            name=item["name"],
            value=item.get("value", ""),
            domain=item.get("domain", ""),
            path=item.get("path") or "/",
            expires_at=_parse_timestamp(expires) if expires else None,
        )

    def __str__(self):
        return f"CredentialStore({self.path})"
