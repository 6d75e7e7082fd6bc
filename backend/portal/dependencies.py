from .application.auth_rate_limit import SoftRateLimiter
from .config import Settings
from .crud.user import MockUserDirectory
from .domain.ports.session_store import SessionStore
from .domain.ports.user import UserDirectory
from .infra.session_store import InMemorySessionStore, RedisSessionStore
from .services.auth_session import AuthSession
from .services.permission_service import PermissionService


def get_session_store(settings: Settings) -> SessionStore:
    if settings.session_backend == "redis":
        if not settings.redis_url:
            raise ValueError("REDIS_URL environment variable must be set")
        return RedisSessionStore.from_url(
            settings.redis_url, ttl_seconds=settings.session_ttl_seconds
        )
    return InMemorySessionStore()


def get_user_directory(settings: Settings) -> UserDirectory:
    return MockUserDirectory(delay_seconds=settings.login_delay_seconds)


def get_login_rate_limiter(settings: Settings) -> SoftRateLimiter | None:
    if settings.login_max_attempts <= 0:
        return None
    return SoftRateLimiter(
        max_attempts=settings.login_max_attempts,
        window_seconds=settings.login_window_seconds,
    )


def get_auth_session(
    settings: Settings,
    *,
    store: SessionStore | None = None,
    directory: UserDirectory | None = None,
) -> AuthSession:
    return AuthSession(
        directory if directory is not None else get_user_directory(settings),
        store if store is not None else get_session_store(settings),
        session_key=settings.session_key,
        rate_limiter=get_login_rate_limiter(settings),
    )


def get_permission_service(session: AuthSession) -> PermissionService:
    return PermissionService(session)
