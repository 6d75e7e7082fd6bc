"""
Tests for PermissionService decisions.

Every role is checked against every (resource, action) pair so that both
listed and unlisted grants are covered.
"""
import itertools
from dataclasses import dataclass

import pytest

from portal.auth import rbac_contract
from portal.auth.rbac_contract import Permission, Role
from portal.schemas.user import User
from portal.services.permission_service import PermissionService

RESOURCES = ("users", "notices", "procedures", "notifications", "meetings", "")
ACTIONS = ("create", "read", "update", "delete", "publish", "*")


@dataclass
class FakeSession:
    current_user: User | None = None


def make_user(role: Role) -> User:
    return User(
        id=f"id-{role.value}",
        name=f"{role.value.title()} User",
        email=f"{role.value}@antonelly.com",
        role=role,
        department="Testes",
    )


def service_for(role: Role | None) -> PermissionService:
    return PermissionService(FakeSession(make_user(role) if role is not None else None))


class TestHasPermission:
    @pytest.mark.parametrize("role", list(Role))
    def test_matches_table_for_every_pair(self, role):
        service = service_for(role)
        granted = set(rbac_contract.permissions_for(role))

        for resource, action in itertools.product(RESOURCES, ACTIONS):
            expected = Permission(resource, action) in granted
            assert service.has_permission(resource, action) is expected, (resource, action)

    def test_no_user_denies_everything(self):
        service = service_for(None)

        for resource, action in itertools.product(RESOURCES, ACTIONS):
            assert service.has_permission(resource, action) is False

    def test_unknown_resource_is_denied_not_raised(self):
        service = service_for(Role.ADMIN)
        assert service.has_permission("payroll", "read") is False

    def test_accepts_action_enum(self):
        service = service_for(Role.WORKER)
        assert service.has_permission("notices", rbac_contract.Action.READ) is True

    def test_follows_session_changes(self):
        session = FakeSession(make_user(Role.ADMIN))
        service = PermissionService(session)
        assert service.can_delete("users") is True

        session.current_user = None
        assert service.can_delete("users") is False
        assert service.user_role is None


class TestCrudShortcuts:
    def test_admin_can_delete_users(self):
        assert service_for(Role.ADMIN).can_delete("users") is True

    def test_worker_reads_but_cannot_create_notices(self):
        service = service_for(Role.WORKER)
        assert service.can_read("notices") is True
        assert service.can_create("notices") is False

    def test_manager_creates_and_updates_but_cannot_delete_notices(self):
        service = service_for(Role.MANAGER)
        assert service.can_create("notices") is True
        assert service.can_update("notices") is True
        assert service.can_delete("notices") is False

    def test_engineer_creates_procedures_only(self):
        service = service_for(Role.ENGINEER)
        assert service.can_create("procedures") is True
        assert service.can_update("procedures") is False
        assert service.can_create("notices") is False


class TestRoleElevation:
    @pytest.mark.parametrize(
        "role,admin,manager,engineer",
        [
            (Role.ADMIN, True, True, True),
            (Role.MANAGER, False, True, True),
            (Role.ENGINEER, False, False, True),
            (Role.WORKER, False, False, False),
            (None, False, False, False),
        ],
    )
    def test_elevation_predicates(self, role, admin, manager, engineer):
        service = service_for(role)
        assert service.is_admin() is admin
        assert service.is_manager() is manager
        assert service.is_engineer() is engineer

    def test_user_role_reports_current_role(self):
        assert service_for(Role.ENGINEER).user_role == "engineer"
