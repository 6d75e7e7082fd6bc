from __future__ import annotations

from typing import Protocol

from ...schemas.user import User


class UserDirectory(Protocol):
    async def find_by_credentials(self, email: str, password: str) -> User | None:
        ...
