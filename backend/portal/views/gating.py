"""Access gating primitives shared by every view.

Two patterns are supported:
- hide-if-denied: an Affordance is dropped when its predicate fails
- fallback-if-denied: gate_section keeps a section reachable but swaps its
  content for a DeniedNotice
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

from ..auth.rbac_contract import Action
from ..services.permission_service import PermissionService


class GateState(str, Enum):
    CONTENT = "content"
    DENIED = "denied"
    HIDDEN = "hidden"


@dataclass(frozen=True, slots=True)
class Guard:
    resource: str
    action: str = Action.READ.value

    def allows(self, evaluator: PermissionService) -> bool:
        return evaluator.has_permission(self.resource, self.action)


@dataclass(frozen=True, slots=True)
class DeniedNotice:
    title: str
    message: str


DEFAULT_DENIED_NOTICE = DeniedNotice(
    title="Acesso Negado",
    message="Você não tem permissão para acessar esta funcionalidade.",
)


@dataclass(frozen=True, slots=True)
class GateResult:
    state: GateState
    notice: DeniedNotice | None = None

    @property
    def allowed(self) -> bool:
        return self.state is GateState.CONTENT


def gate_section(
    evaluator: PermissionService,
    guard: Guard | None = None,
    fallback: DeniedNotice | None = None,
) -> GateResult:
    """Decide whether a section renders, falls back or disappears.

    Without a current user the section is hidden. With a user, a failing
    guard yields DENIED carrying ``fallback`` (or the default notice).
    """
    if evaluator.session.current_user is None:
        return GateResult(GateState.HIDDEN)
    if guard is not None and not guard.allows(evaluator):
        return GateResult(GateState.DENIED, fallback or DEFAULT_DENIED_NOTICE)
    return GateResult(GateState.CONTENT)


@dataclass(frozen=True, slots=True)
class Affordance:
    """A control or widget that only exists when ``predicate`` passes."""

    id: str
    label: str
    predicate: Callable[[PermissionService], bool] | None = None

    def is_visible(self, evaluator: PermissionService) -> bool:
        if evaluator.session.current_user is None:
            return False
        return self.predicate is None or self.predicate(evaluator)


def visible_affordances(
    evaluator: PermissionService, affordances: Iterable[Affordance]
) -> tuple[Affordance, ...]:
    return tuple(item for item in affordances if item.is_visible(evaluator))
