from datetime import datetime, timedelta, timezone

import pytest

from chartgate.models import AuthSession, Cookie
from chartgate.models.auth_session import dedupe_cookies


class TestCookie:
    def test_naive_expiry_is_read_as_utc(self):
        cookie = Cookie("A1", "v", ".yahoo.com", expires_at=datetime(2025, 1, 1, 12, 0))
        assert cookie.expires_at == datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

    def test_aware_expiry_is_converted_to_utc(self):
        plus_two = timezone(timedelta(hours=2))
        cookie = Cookie("A1", "v", ".yahoo.com", expires_at=datetime(2025, 1, 1, 14, 0, tzinfo=plus_two))
        assert cookie.expires_at == datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError):
            Cookie("", "v", ".yahoo.com")

    def test_session_cookie(self):
        assert Cookie("A3", "v", ".yahoo.com").is_session_cookie
        assert not Cookie("A3", "v", ".yahoo.com", expires_at=datetime(2030, 1, 1)).is_session_cookie

    def test_key_ignores_value(self):
        assert Cookie("A1", "x", ".yahoo.com").key == Cookie("A1", "y", ".yahoo.com").key


class TestDedupeCookies:
    def test_last_duplicate_wins_and_order_is_kept(self):
        cookies = [
            Cookie("A1", "old", ".yahoo.com"),
            Cookie("B", "b", ".yahoo.com"),
            Cookie("A1", "new", ".yahoo.com"),
        ]
        result = dedupe_cookies(cookies)
        assert [c.name for c in result] == ["A1", "B"]
        assert result[0].value == "new"

    def test_different_domain_is_a_different_cookie(self):
        cookies = [Cookie("A1", "x", ".yahoo.com"), Cookie("A1", "y", "finance.yahoo.com")]
        assert len(dedupe_cookies(cookies)) == 2


class TestAuthSession:
    @pytest.fixture
    def issued(self):
        return datetime(2024, 12, 30, 12, 0, tzinfo=timezone.utc)

    def test_issue_sets_validity_window(self, issued, sample_cookies):
        session = AuthSession.issue("abc123", sample_cookies, timedelta(hours=12), now=issued)
        assert session.issued_at == issued
        assert session.expires_at == issued + timedelta(hours=12)
        assert session.crumb == "abc123"
        assert len(session.cookies) == 2

    def test_empty_crumb_rejected(self, issued):
        with pytest.raises(ValueError):
            AuthSession("", (), issued, issued + timedelta(hours=1))

    def test_expiry_must_follow_issue(self, issued):
        with pytest.raises(ValueError):
            AuthSession("abc", (), issued, issued)

    def test_is_expired_boundary(self, issued):
        session = AuthSession.issue("abc", (), timedelta(hours=12), now=issued)
        assert not session.is_expired(issued + timedelta(hours=12) - timedelta(seconds=1))
        assert session.is_expired(issued + timedelta(hours=12))
        assert session.is_expired(issued + timedelta(hours=12, seconds=1))

    def test_remaining(self, issued):
        session = AuthSession.issue("abc", (), timedelta(hours=12), now=issued)
        assert session.remaining(issued + timedelta(hours=2)) == timedelta(hours=10)

    def test_is_expired_uses_current_time(self, frozen_time):
        session = AuthSession.issue("abc", (), timedelta(hours=1))
        assert not session.is_expired()
        frozen_time.tick(timedelta(hours=1))
        assert session.is_expired()

    def test_cookies_are_deduplicated(self, issued):
        cookies = (Cookie("A1", "x", ".yahoo.com"), Cookie("A1", "y", ".yahoo.com"))
        session = AuthSession.issue("abc", cookies, timedelta(hours=1), now=issued)
        assert session.cookie_set() == frozenset({Cookie("A1", "y", ".yahoo.com")})

    def test_str_does_not_leak_crumb(self, issued):
        session = AuthSession.issue("secretcrumb", (), timedelta(hours=1), now=issued)
        assert "secretcrumb" not in str(session)
