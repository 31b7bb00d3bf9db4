from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import FrozenSet, Iterable, Optional, Tuple


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class Cookie:
    name: str
    value: str
    domain: str
    path: str = "/"
    expires_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.name:
            raise ValueError("Cookie name must not be empty")
        if self.expires_at is not None:
            object.__setattr__(self, "expires_at", _as_utc(self.expires_at))

    @property
    def key(self) -> Tuple[str, str, str]:
        return self.name, self.domain, self.path

    @property
    def is_session_cookie(self) -> bool:
        return self.expires_at is None


def dedupe_cookies(cookies: Iterable[Cookie]) -> Tuple[Cookie, ...]:
    """Collapse cookies sharing (name, domain, path); the last one wins, first-seen order is kept."""
    by_key = {}
    for cookie in cookies:
        by_key[cookie.key] = cookie
    return tuple(by_key.values())


@dataclass(frozen=True)
class AuthSession:
    """A crumb plus the cookies it was issued with, valid until ``expires_at``.

    The validity window is fixed when the session is issued and is independent
    of the individual cookie expiries.
    """
    crumb: str
    cookies: Tuple[Cookie, ...]
    issued_at: datetime
    expires_at: datetime

    def __post_init__(self):
        if not self.crumb:
            raise ValueError("AuthSession crumb must not be empty")
        object.__setattr__(self, "cookies", dedupe_cookies(self.cookies))
        object.__setattr__(self, "issued_at", _as_utc(self.issued_at))
        object.__setattr__(self, "expires_at", _as_utc(self.expires_at))
        if self.expires_at <= self.issued_at:
            raise ValueError(
                f"expires_at ({self.expires_at.isoformat()}) must be after issued_at ({self.issued_at.isoformat()})")

    @classmethod
    def issue(cls, crumb: str, cookies: Iterable[Cookie], valid_for: timedelta,
              now: Optional[datetime] = None) -> "AuthSession":
        issued_at = _as_utc(now) if now is not None else _utc_now()
        return cls(crumb=crumb, cookies=tuple(cookies), issued_at=issued_at, expires_at=issued_at + valid_for)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        now = _as_utc(now) if now is not None else _utc_now()
        return now >= self.expires_at

    def remaining(self, now: Optional[datetime] = None) -> timedelta:
        now = _as_utc(now) if now is not None else _utc_now()
        return self.expires_at - now

    def cookie_set(self) -> FrozenSet[Cookie]:
        return frozenset(self.cookies)

    def __str__(self):
        return f"AuthSession(cookies={len(self.cookies)}, expires_at={self.expires_at.isoformat()})"
