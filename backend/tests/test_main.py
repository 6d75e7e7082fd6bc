import logging
from unittest.mock import MagicMock

import pytest

from portal import dependencies
from portal.application.auth_rate_limit import SoftRateLimiter
from portal.config import Settings
from portal.infra.session_store import InMemorySessionStore, RedisSessionStore
from portal.main import _resolve_log_level, create_portal
from portal.schemas.user import User


def make_settings(**overrides) -> Settings:
    values = {"login_delay_seconds": 0.0}
    values.update(overrides)
    return Settings(**values)


def test_create_portal_restores_persisted_user():
    store = InMemorySessionStore()
    user = User(
        id="2",
        name="Carlos Silva",
        email="carlos.silva@antonelly.com",
        role="manager",
        department="Engenharia",
        avatar="CS",
    )
    store.set("session_user", user.model_dump_json())

    portal = create_portal(make_settings(), store=store)

    assert portal.session.is_loading is False
    assert portal.session.current_user == user
    assert portal.permissions.is_manager() is True


def test_create_portal_with_corrupt_record_starts_empty():
    store = InMemorySessionStore()
    store.set("session_user", "}{")

    portal = create_portal(make_settings(), store=store)

    assert portal.session.current_user is None
    assert portal.permissions.has_permission("notices", "read") is False
    assert store.get("session_user") is None


def test_create_portal_uses_environment_settings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("SESSION_KEY", "antonelly_user")
    store = InMemorySessionStore()

    portal = create_portal(store=store)

    assert portal.settings.session_key == "antonelly_user"
    assert portal.session.is_loading is False


@pytest.mark.anyio
async def test_portal_login_flow_end_to_end():
    portal = create_portal(make_settings())

    assert await portal.session.login("ana.clara@antonelly.com", "admin123") is True
    assert portal.permissions.can_delete("users") is True

    portal.session.logout()
    assert portal.permissions.can_read("notices") is False


def test_session_store_selection(monkeypatch: pytest.MonkeyPatch):
    assert isinstance(dependencies.get_session_store(make_settings()), InMemorySessionStore)

    fake_store = MagicMock(spec=RedisSessionStore)
    from_url = MagicMock(return_value=fake_store)
    monkeypatch.setattr(RedisSessionStore, "from_url", from_url)

    store = dependencies.get_session_store(
        make_settings(
            session_backend="redis",
            redis_url="redis://localhost:6379/15",
            session_ttl_seconds=60,
        )
    )

    assert store is fake_store
    from_url.assert_called_once_with("redis://localhost:6379/15", ttl_seconds=60)


def test_redis_backend_without_url_is_rejected():
    with pytest.raises(ValueError, match="REDIS_URL"):
        dependencies.get_session_store(make_settings(session_backend="redis"))


def test_rate_limiter_only_when_configured():
    assert dependencies.get_login_rate_limiter(make_settings()) is None

    limiter = dependencies.get_login_rate_limiter(
        make_settings(login_max_attempts=3, login_window_seconds=30)
    )
    assert isinstance(limiter, SoftRateLimiter)
    assert limiter.max_attempts == 3
    assert limiter.window_seconds == 30


def test_portal_close_closes_store():
    store = MagicMock(spec=RedisSessionStore)
    store.get.return_value = None

    portal = create_portal(make_settings(), store=store)
    portal.close()

    store.close.assert_called_once_with()


def test_resolve_log_level():
    assert _resolve_log_level("debug") == logging.DEBUG
    assert _resolve_log_level("nonsense") == logging.INFO
