import os
import threading
from urllib.parse import urlparse

from dotenv import load_dotenv
from pydantic import BaseModel, Field


load_dotenv()

SESSION_BACKENDS = frozenset({"memory", "redis"})


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"{name} must be a boolean value")


def _parse_number(name: str, raw: str, kind: type[int] | type[float]) -> int | float:
    try:
        return kind(raw)
    except (TypeError, ValueError) as exc:
        expected = "an integer" if kind is int else "a number"
        raise ValueError(f"{name} must be {expected}") from exc


class Settings(BaseModel):
    app_name: str = Field(default="Antonelly Portal")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    session_backend: str = Field(default="memory")
    redis_url: str | None = Field(default=None)
    session_key: str = Field(default="session_user")
    session_ttl_seconds: int = Field(default=0)
    login_delay_seconds: float = Field(default=1.0)
    login_max_attempts: int = Field(default=0)
    login_window_seconds: int = Field(default=60)

    @classmethod
    def from_env(cls) -> "Settings":
        session_backend = os.getenv(
            "SESSION_BACKEND", cls.model_fields["session_backend"].default
        ).strip().lower()
        if session_backend not in SESSION_BACKENDS:
            raise ValueError(
                f"SESSION_BACKEND must be one of: {', '.join(sorted(SESSION_BACKENDS))}"
            )

        redis_url = os.getenv("REDIS_URL", "").strip() or None
        if session_backend == "redis":
            if not redis_url:
                raise ValueError("REDIS_URL environment variable must be set")
            parsed_redis = urlparse(redis_url)
            if parsed_redis.scheme not in {"redis", "rediss"}:
                raise ValueError("REDIS_URL must start with 'redis://' or 'rediss://'")
            if not parsed_redis.hostname:
                raise ValueError("REDIS_URL must include hostname")

        session_key = os.getenv(
            "SESSION_KEY", cls.model_fields["session_key"].default
        ).strip()
        if not session_key:
            raise ValueError("SESSION_KEY must not be empty")

        session_ttl_seconds = _parse_number(
            "SESSION_TTL_SECONDS",
            os.getenv("SESSION_TTL_SECONDS", str(cls.model_fields["session_ttl_seconds"].default)),
            int,
        )
        if session_ttl_seconds < 0:
            raise ValueError("SESSION_TTL_SECONDS must be greater than or equal to 0")

        login_delay_seconds = _parse_number(
            "LOGIN_DELAY_SECONDS",
            os.getenv("LOGIN_DELAY_SECONDS", str(cls.model_fields["login_delay_seconds"].default)),
            float,
        )
        if login_delay_seconds < 0:
            raise ValueError("LOGIN_DELAY_SECONDS must be greater than or equal to 0")

        login_max_attempts = _parse_number(
            "LOGIN_MAX_ATTEMPTS",
            os.getenv("LOGIN_MAX_ATTEMPTS", str(cls.model_fields["login_max_attempts"].default)),
            int,
        )
        if login_max_attempts < 0:
            raise ValueError("LOGIN_MAX_ATTEMPTS must be greater than or equal to 0")

        login_window_seconds = _parse_number(
            "LOGIN_WINDOW_SECONDS",
            os.getenv("LOGIN_WINDOW_SECONDS", str(cls.model_fields["login_window_seconds"].default)),
            int,
        )
        if login_window_seconds <= 0:
            raise ValueError("LOGIN_WINDOW_SECONDS must be greater than 0")

        return cls(
            app_name=os.getenv("APP_NAME", cls.model_fields["app_name"].default),
            debug=_parse_bool("DEBUG", os.getenv("DEBUG", "false")),
            log_level=os.getenv("LOG_LEVEL", cls.model_fields["log_level"].default).upper(),
            session_backend=session_backend,
            redis_url=redis_url,
            session_key=session_key,
            session_ttl_seconds=session_ttl_seconds,
            login_delay_seconds=login_delay_seconds,
            login_max_attempts=login_max_attempts,
            login_window_seconds=login_window_seconds,
        )


# Settings are built on first access so the module imports without touching
# the environment.
_settings_instance: Settings | None = None
_settings_lock = threading.Lock()


def get_settings() -> Settings:
    """Get settings instance, creating it on first access.

    Uses double-checked locking so concurrent first callers build a single
    instance.

    Returns:
        Settings instance

    Raises:
        ValueError: If environment variables are invalid
    """
    global _settings_instance

    if _settings_instance is not None:
        return _settings_instance

    with _settings_lock:
        if _settings_instance is None:
            _settings_instance = Settings.from_env()

    return _settings_instance


def reset_settings() -> None:
    """Drop the cached settings so the next access re-reads the environment."""
    global _settings_instance
    with _settings_lock:
        _settings_instance = None

