import logging
from dataclasses import dataclass

from .config import Settings, get_settings
from .dependencies import get_auth_session, get_permission_service
from .domain.ports.session_store import SessionStore
from .domain.ports.user import UserDirectory
from .services.auth_session import AuthSession
from .services.permission_service import PermissionService

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

logger = logging.getLogger("portal")


def _resolve_log_level(value: str) -> int:
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level_name: str) -> int:
    log_level = _resolve_log_level(level_name)
    if not logging.getLogger().handlers:
        logging.basicConfig(level=log_level, format=LOG_FORMAT)
    logger.setLevel(log_level)
    return log_level


@dataclass
class Portal:
    settings: Settings
    session: AuthSession
    permissions: PermissionService

    def close(self) -> None:
        close = getattr(self.session.store, "close", None)
        if callable(close):
            close()


def create_portal(
    settings: Settings | None = None,
    *,
    store: SessionStore | None = None,
    directory: UserDirectory | None = None,
) -> Portal:
    """Wire the session and evaluator, then restore any persisted session.

    Args:
        settings: Defaults to the environment-driven settings
        store: Overrides the store selected by ``settings.session_backend``
        directory: Overrides the mock user directory

    Returns:
        Portal whose session has finished restoring
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    logger.info("Starting %s session_backend=%s", settings.app_name, settings.session_backend)
    if settings.debug:
        logger.warning("DEBUG=true; do not use in production")

    session = get_auth_session(settings, store=store, directory=directory)
    session.restore()
    return Portal(
        settings=settings,
        session=session,
        permissions=get_permission_service(session),
    )
