from __future__ import annotations

from typing import TYPE_CHECKING

from ..auth import rbac_contract
from ..auth.rbac_contract import Action, Permission

if TYPE_CHECKING:
    from .auth_session import AuthSession


class PermissionService:
    """Answers access questions for whoever the session currently holds.

    Every check reads the session's current user and the static table in
    ``rbac_contract``; nothing is cached, logged or mutated. All methods are
    total: no user, an unknown role or an unknown resource/action simply
    yields False.
    """

    def __init__(self, session: AuthSession) -> None:
        self.session = session

    @property
    def user_role(self) -> str | None:
        user = self.session.current_user
        return user.role.value if user is not None else None

    def has_permission(self, resource: str, action: str) -> bool:
        """Check if the current user's role grants ``action`` on ``resource``.

        Args:
            resource: Resource name, e.g. "notices"
            action: One of create/read/update/delete; other strings never match

        Returns:
            bool: True only if the pair is listed for the user's role
        """
        role = self.user_role
        if role is None:
            return False
        return Permission(resource, action) in rbac_contract.permissions_for(role)

    def can_create(self, resource: str) -> bool:
        return self.has_permission(resource, Action.CREATE.value)

    def can_read(self, resource: str) -> bool:
        return self.has_permission(resource, Action.READ.value)

    def can_update(self, resource: str) -> bool:
        return self.has_permission(resource, Action.UPDATE.value)

    def can_delete(self, resource: str) -> bool:
        return self.has_permission(resource, Action.DELETE.value)

    # Role elevation checks. These bypass the table on purpose.
    def is_admin(self) -> bool:
        return self.user_role in rbac_contract.ADMIN_ROLES

    def is_manager(self) -> bool:
        return self.user_role in rbac_contract.MANAGER_ROLES

    def is_engineer(self) -> bool:
        return self.user_role in rbac_contract.ENGINEER_ROLES
