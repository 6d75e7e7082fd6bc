from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from ..auth.rbac_contract import NOTICES, NOTIFICATIONS, PROCEDURES, USERS, Action
from ..services.permission_service import PermissionService
from .gating import Guard


@dataclass(frozen=True, slots=True)
class NavItem:
    id: str
    label: str
    guard: Guard | None = None
    badge: int | None = None


NAV_ITEMS: Final[tuple[NavItem, ...]] = (
    NavItem("dashboard", "Início"),
    NavItem("notificacoes", "Notificações", Guard(NOTIFICATIONS), badge=3),
    NavItem("avisos", "Avisos da Empresa", Guard(NOTICES)),
    NavItem("procedimentos", "Procedimentos", Guard(PROCEDURES)),
    NavItem("cadastros", "Cadastros", Guard(NOTICES, Action.CREATE.value)),
    NavItem("usuarios", "Usuários", Guard(USERS)),
)

# Menu entries guarded by these resources are shown to every authenticated
# user regardless of the table. Checked before the table; the table still
# decides create/update/delete inside the sections.
ALWAYS_VISIBLE_RESOURCES: Final[frozenset[str]] = frozenset(
    {NOTIFICATIONS, NOTICES, PROCEDURES}
)


def is_nav_item_visible(evaluator: PermissionService, item: NavItem) -> bool:
    if evaluator.session.current_user is None:
        return False
    if item.guard is None:
        return True
    if item.guard.resource in ALWAYS_VISIBLE_RESOURCES:
        return True
    return item.guard.allows(evaluator)


def compose_navigation(
    evaluator: PermissionService, items: tuple[NavItem, ...] = NAV_ITEMS
) -> tuple[NavItem, ...]:
    """Return the menu entries the current user may see, in menu order."""
    return tuple(item for item in items if is_nav_item_visible(evaluator, item))
