import pytest

from portal.application.auth_rate_limit import SoftRateLimiter, login_key
from portal.crud.user import MockUserDirectory
from portal.infra.session_store import InMemorySessionStore
from portal.services.auth_session import AuthSession


class CountingDirectory(MockUserDirectory):
    def __init__(self) -> None:
        super().__init__(delay_seconds=0)
        self.calls = 0

    async def find_by_credentials(self, email, password):
        self.calls += 1
        return await super().find_by_credentials(email, password)


def test_limiter_blocks_after_max_attempts():
    limiter = SoftRateLimiter(max_attempts=2, window_seconds=60)
    key = login_key("ana.clara@antonelly.com")

    limiter.record_failure(key, now=100.0)
    assert limiter.is_limited(key, now=100.0) is False
    limiter.record_failure(key, now=101.0)
    assert limiter.is_limited(key, now=101.0) is True


def test_limiter_window_expires():
    limiter = SoftRateLimiter(max_attempts=1, window_seconds=10)
    limiter.record_failure("k", now=100.0)

    assert limiter.is_limited("k", now=105.0) is True
    assert limiter.is_limited("k", now=111.0) is False


def test_limiter_reset_and_clear():
    limiter = SoftRateLimiter(max_attempts=1, window_seconds=60)
    limiter.record_failure("a", now=1.0)
    limiter.record_failure("b", now=1.0)

    limiter.reset("a")
    assert limiter.is_limited("a", now=2.0) is False
    assert limiter.is_limited("b", now=2.0) is True

    limiter.clear()
    assert limiter.is_limited("b", now=2.0) is False


@pytest.mark.parametrize("max_attempts,window", [(0, 60), (3, 0)])
def test_limiter_rejects_non_positive_settings(max_attempts, window):
    with pytest.raises(ValueError):
        SoftRateLimiter(max_attempts=max_attempts, window_seconds=window)


def test_login_key_normalizes_email_and_hides_it():
    key = login_key("  Ana.Clara@Antonelly.com ")
    assert key == login_key("ana.clara@antonelly.com")
    assert key.startswith("login:")
    assert "antonelly" not in key


@pytest.mark.anyio
async def test_throttled_login_returns_false_without_directory_lookup():
    directory = CountingDirectory()
    auth = AuthSession(
        directory,
        InMemorySessionStore(),
        rate_limiter=SoftRateLimiter(max_attempts=2, window_seconds=60),
    )
    auth.restore()

    assert await auth.login("ana.clara@antonelly.com", "bad") is False
    assert await auth.login("ana.clara@antonelly.com", "bad") is False
    assert await auth.login("ana.clara@antonelly.com", "admin123") is False

    assert directory.calls == 2
    assert auth.current_user is None


@pytest.mark.anyio
async def test_successful_login_resets_failures():
    limiter = SoftRateLimiter(max_attempts=2, window_seconds=60)
    auth = AuthSession(MockUserDirectory(delay_seconds=0), InMemorySessionStore(), rate_limiter=limiter)
    auth.restore()

    assert await auth.login("ana.clara@antonelly.com", "bad") is False
    assert await auth.login("ana.clara@antonelly.com", "admin123") is True
    assert limiter.is_limited(login_key("ana.clara@antonelly.com")) is False

    auth.logout()
    assert await auth.login("ana.clara@antonelly.com", "bad") is False
    assert await auth.login("ana.clara@antonelly.com", "admin123") is True
