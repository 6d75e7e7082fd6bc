from __future__ import annotations

import asyncio
import hmac
import logging
from typing import Iterable

from ..auth.rbac_contract import Role
from ..schemas.user import DirectoryUser, User

logger = logging.getLogger("portal.directory")

DEFAULT_LOGIN_DELAY_SECONDS = 1.0

SEED_USERS: tuple[DirectoryUser, ...] = (
    DirectoryUser(
        id="1",
        name="Ana Clara",
        email="ana.clara@antonelly.com",
        password="admin123",
        role=Role.ADMIN,
        department="Administração",
        avatar="AC",
    ),
    DirectoryUser(
        id="2",
        name="Carlos Silva",
        email="carlos.silva@antonelly.com",
        password="manager123",
        role=Role.MANAGER,
        department="Engenharia",
        avatar="CS",
    ),
    DirectoryUser(
        id="3",
        name="Maria Santos",
        email="maria.santos@antonelly.com",
        password="engineer123",
        role=Role.ENGINEER,
        department="Engenharia Civil",
        avatar="MS",
    ),
    DirectoryUser(
        id="4",
        name="João Pereira",
        email="joao.pereira@antonelly.com",
        password="worker123",
        role=Role.WORKER,
        department="Construção",
        avatar="JP",
    ),
)


class MockUserDirectory:
    """In-process user directory standing in for a credential service.

    Every lookup waits ``delay_seconds`` so callers cannot assume a
    synchronous answer.
    """

    def __init__(
        self,
        users: Iterable[DirectoryUser] = SEED_USERS,
        *,
        delay_seconds: float = DEFAULT_LOGIN_DELAY_SECONDS,
    ) -> None:
        self._users: dict[str, DirectoryUser] = {}
        for user in users:
            if user.email in self._users:
                raise ValueError(f"Duplicate directory email '{user.email}'")
            self._users[user.email] = user
        self.delay_seconds = delay_seconds

    async def find_by_credentials(self, email: str, password: str) -> User | None:
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)

        record = self._users.get(email)
        if record is None:
            logger.debug("directory_lookup result=unknown_email")
            return None
        if not hmac.compare_digest(record.password.encode(), password.encode()):
            logger.debug("directory_lookup result=bad_password user_id=%s", record.id)
            return None
        return record.sanitized()
