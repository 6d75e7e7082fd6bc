"""
RBAC Contract - static role grants for the portal.

This module is the single source of truth for which (resource, action) pairs
each role is granted. It enforces:
- No wildcard permissions
- No negative entries (absence of a grant means denial)
- No implicit hierarchy between roles

The table is fixed at import time and validated before anything can use it.
Changing a grant means editing ROLE_PERMISSIONS below.
"""
from __future__ import annotations

from enum import Enum
from typing import Final, NamedTuple


# ============================================================================
# ROLES - CLOSED SET
# ============================================================================

class Role(str, Enum):
    """Roles a portal user can hold. Declaration order implies nothing."""

    ADMIN = "admin"
    MANAGER = "manager"
    ENGINEER = "engineer"
    WORKER = "worker"

    @property
    def label(self) -> str:
        return ROLE_LABELS[self]


ROLE_LABELS: Final[dict[Role, str]] = {
    Role.ADMIN: "Administrador",
    Role.MANAGER: "Gerente",
    Role.ENGINEER: "Engenheiro(a)",
    Role.WORKER: "Trabalhador(a)",
}

ALL_ROLES: Final[frozenset[str]] = frozenset(role.value for role in Role)


# ============================================================================
# ACTIONS AND RESOURCES
# ============================================================================

class Action(str, Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


ALLOWED_ACTIONS: Final[frozenset[str]] = frozenset(action.value for action in Action)

# Resources granted by the table below. The evaluator does not depend on this
# set: any string is a valid resource, it simply has no grants.
USERS = "users"
NOTICES = "notices"
PROCEDURES = "procedures"
NOTIFICATIONS = "notifications"


class Permission(NamedTuple):
    resource: str
    action: str


def _grants(resource: str, *actions: Action) -> tuple[Permission, ...]:
    return tuple(Permission(resource, action.value) for action in actions)


_CRUD = (Action.CREATE, Action.READ, Action.UPDATE, Action.DELETE)


# ============================================================================
# ROLE-PERMISSION TABLE
# ============================================================================

ROLE_PERMISSIONS: Final[dict[str, tuple[Permission, ...]]] = {
    Role.ADMIN.value: (
        *_grants(USERS, *_CRUD),
        *_grants(NOTICES, *_CRUD),
        *_grants(PROCEDURES, *_CRUD),
        *_grants(NOTIFICATIONS, *_CRUD),
    ),
    Role.MANAGER.value: (
        *_grants(NOTICES, Action.CREATE, Action.READ, Action.UPDATE),
        *_grants(PROCEDURES, Action.CREATE, Action.READ, Action.UPDATE),
        *_grants(NOTIFICATIONS, Action.CREATE, Action.READ),
    ),
    Role.ENGINEER.value: (
        *_grants(NOTICES, Action.READ),
        *_grants(PROCEDURES, Action.READ, Action.CREATE),
        *_grants(NOTIFICATIONS, Action.READ),
    ),
    Role.WORKER.value: (
        *_grants(NOTICES, Action.READ),
        *_grants(PROCEDURES, Action.READ),
        *_grants(NOTIFICATIONS, Action.READ),
    ),
}

# Role elevation policy. These fold higher roles into a lower check and are
# deliberately not derived from ROLE_PERMISSIONS.
ADMIN_ROLES: Final[frozenset[str]] = frozenset({Role.ADMIN.value})
MANAGER_ROLES: Final[frozenset[str]] = frozenset({Role.MANAGER.value, Role.ADMIN.value})
ENGINEER_ROLES: Final[frozenset[str]] = frozenset(
    {Role.ENGINEER.value, Role.MANAGER.value, Role.ADMIN.value}
)


def permissions_for(role: Role | str | None) -> tuple[Permission, ...]:
    """Return the grants for a role, or an empty tuple for any unknown role."""
    if role is None:
        return ()
    key = role.value if isinstance(role, Role) else role
    return ROLE_PERMISSIONS.get(key, ())


# ============================================================================
# CONTRACT VALIDATION
# ============================================================================

def validate_permission(permission: Permission) -> None:
    """
    Validate a single table entry.

    Raises:
        ValueError: If the resource is empty or a wildcard, or the action is
            not one of create/read/update/delete
    """
    resource, action = permission
    if not resource or not resource.strip():
        raise ValueError("Permission resource must be a non-empty string")
    if "*" in resource or "*" in action:
        raise ValueError(
            f"Wildcard permission '{resource}:{action}' is forbidden. "
            "All grants must be explicit."
        )
    if action not in ALLOWED_ACTIONS:
        raise ValueError(
            f"Invalid action '{action}'. "
            f"Must be one of: {', '.join(sorted(ALLOWED_ACTIONS))}"
        )


def _validate_contract() -> None:
    """Validate the entire permission table at module import time."""
    errors = []

    for role, permissions in ROLE_PERMISSIONS.items():
        if role not in ALL_ROLES:
            errors.append(f"Invalid role in table: {role}")
            continue

        seen: set[Permission] = set()
        for permission in permissions:
            try:
                validate_permission(permission)
            except ValueError as e:
                errors.append(f"Role '{role}' has invalid permission: {e}")
            if permission in seen:
                errors.append(f"Role '{role}' lists {permission} more than once")
            seen.add(permission)

    missing = ALL_ROLES - ROLE_PERMISSIONS.keys()
    if missing:
        errors.append(f"Roles without a table entry: {sorted(missing)}")

    if errors:
        raise RuntimeError(
            "RBAC contract validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        )


# Run validation on import
_validate_contract()
