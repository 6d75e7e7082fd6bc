from __future__ import annotations

import logging

from pydantic import ValidationError

from ..application.auth_rate_limit import SoftRateLimiter, login_key
from ..domain.ports.session_store import SessionStore
from ..domain.ports.user import UserDirectory
from ..errors import SessionStoreError
from ..schemas.user import DirectoryUser, User

logger = logging.getLogger("portal.session")

DEFAULT_SESSION_KEY = "session_user"


class AuthSession:
    """Owns the single current-user slot and its lifecycle.

    The slot is written only by ``login``, ``logout`` and ``restore``. Each is
    a complete state transition; the only suspension point is the directory
    lookup inside ``login``.

    ``is_loading`` is True from construction until ``restore`` has run, and
    while a login is in flight. Presentation code disables its login submit
    control on it.
    """

    def __init__(
        self,
        directory: UserDirectory,
        store: SessionStore,
        *,
        session_key: str = DEFAULT_SESSION_KEY,
        rate_limiter: SoftRateLimiter | None = None,
    ) -> None:
        self._directory = directory
        self._store = store
        self._session_key = session_key
        self._rate_limiter = rate_limiter
        self._user: User | None = None
        self._is_loading = True
        self._login_in_flight = False

    @property
    def store(self) -> SessionStore:
        return self._store

    @property
    def current_user(self) -> User | None:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    async def login(self, email: str, password: str) -> bool:
        """Authenticate against the directory and start a session.

        Wrong credentials are not an error: the result is False and the
        current session is left as it was.

        Args:
            email: Login key
            password: Secret, checked by the directory and never retained

        Returns:
            bool: True if the credentials matched and the session now holds
            the user
        """
        # Logs carry the hashed login key, never the address itself.
        attempt_key = login_key(email)
        if self._login_in_flight:
            logger.warning("login_rejected reason=in_flight key=%s", attempt_key)
            return False

        limit_key = attempt_key if self._rate_limiter is not None else None
        if limit_key is not None and self._rate_limiter.is_limited(limit_key):
            logger.warning("login_rejected reason=rate_limited key=%s", attempt_key)
            return False

        self._login_in_flight = True
        self._is_loading = True
        try:
            found = await self._directory.find_by_credentials(email, password)
            if found is None:
                if limit_key is not None:
                    self._rate_limiter.record_failure(limit_key)
                logger.info("login_failed key=%s", attempt_key)
                return False

            user = found.sanitized() if isinstance(found, DirectoryUser) else found
            if limit_key is not None:
                self._rate_limiter.reset(limit_key)
            self._user = user
            self._persist(user)
            logger.info("login_succeeded user_id=%s role=%s", user.id, user.role.value)
            return True
        finally:
            self._login_in_flight = False
            self._is_loading = False

    def logout(self) -> None:
        """Clear the current user and erase the persisted record."""
        user = self._user
        self._user = None
        try:
            self._store.remove(self._session_key)
        except SessionStoreError:
            logger.error("session_remove_failed key=%s", self._session_key)
        if user is not None:
            logger.info("logout user_id=%s", user.id)

    def restore(self) -> User | None:
        """Load a previously persisted user at startup.

        A missing record leaves the session empty. A malformed record is
        removed from the store and also leaves the session empty. Never
        raises.
        """
        try:
            try:
                raw = self._store.get(self._session_key)
            except SessionStoreError:
                logger.warning("session_restore_skipped reason=store_unavailable")
                return None

            if raw is None:
                return None

            try:
                user = User.model_validate_json(raw)
            except ValidationError as exc:
                logger.warning(
                    "session_restore_discarded reason=malformed key=%s errors=%d",
                    self._session_key,
                    exc.error_count(),
                )
                self._discard_persisted()
                return None

            self._user = user
            logger.info("session_restored user_id=%s role=%s", user.id, user.role.value)
            return user
        finally:
            self._is_loading = False

    def _persist(self, user: User) -> None:
        try:
            self._store.set(self._session_key, user.model_dump_json())
        except SessionStoreError:
            logger.error("session_persist_failed key=%s user_id=%s", self._session_key, user.id)

    def _discard_persisted(self) -> None:
        try:
            self._store.remove(self._session_key)
        except SessionStoreError:
            logger.error("session_remove_failed key=%s", self._session_key)
