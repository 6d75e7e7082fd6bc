from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from ..auth.rbac_contract import NOTICES, NOTIFICATIONS, PROCEDURES, USERS, Action
from ..errors import NotFoundError
from ..services.permission_service import PermissionService
from .gating import (
    Affordance,
    DeniedNotice,
    GateResult,
    Guard,
    gate_section,
    visible_affordances,
)


@dataclass(frozen=True, slots=True)
class SectionDefinition:
    id: str
    title: str
    guard: Guard | None = None
    fallback: DeniedNotice | None = None
    # Section-level controls, e.g. "new" buttons and management panels
    actions: tuple[Affordance, ...] = ()
    # Controls repeated on every listed item, e.g. edit/delete
    item_actions: tuple[Affordance, ...] = ()
    # Dashboard cards
    widgets: tuple[Affordance, ...] = ()


@dataclass(frozen=True, slots=True)
class SectionView:
    id: str
    title: str
    gate: GateResult
    actions: tuple[Affordance, ...] = ()
    item_actions: tuple[Affordance, ...] = ()
    widgets: tuple[Affordance, ...] = ()


RESTRICTED_TITLE = "Acesso Restrito"

SECTIONS: Final[dict[str, SectionDefinition]] = {
    section.id: section
    for section in (
        SectionDefinition(
            id="dashboard",
            title="Painel de Início",
            widgets=(
                Affordance("urgent_notifications", "Notificações Urgentes"),
                Affordance("recent_notices", "Avisos Recentes"),
                Affordance("procedures", "Procedimentos"),
                Affordance("active_users", "Usuários Ativos", PermissionService.is_admin),
            ),
        ),
        SectionDefinition(
            id="notificacoes",
            title="Notificações Importantes",
            actions=(
                Affordance(
                    "new_notification",
                    "Nova Notificação",
                    lambda ev: ev.is_manager() and ev.can_create(NOTIFICATIONS),
                ),
            ),
            item_actions=(
                Affordance("edit", "Editar", lambda ev: ev.can_update(NOTIFICATIONS)),
            ),
        ),
        SectionDefinition(
            id="avisos",
            title="Avisos da Empresa",
            actions=(
                Affordance("new_notice", "Novo Aviso", lambda ev: ev.can_create(NOTICES)),
            ),
            item_actions=(
                Affordance("edit", "Editar", lambda ev: ev.can_update(NOTICES)),
                # Delete sits inside the edit controls
                Affordance(
                    "delete",
                    "Excluir",
                    lambda ev: ev.can_update(NOTICES) and ev.can_delete(NOTICES),
                ),
            ),
        ),
        SectionDefinition(
            id="procedimentos",
            title="Procedimentos Internos",
            actions=(
                Affordance(
                    "new_procedure", "Novo Procedimento", lambda ev: ev.can_create(PROCEDURES)
                ),
            ),
        ),
        SectionDefinition(
            id="cadastros",
            title="Cadastros",
            guard=Guard(NOTICES, Action.CREATE.value),
            fallback=DeniedNotice(
                RESTRICTED_TITLE,
                "Apenas gerentes e administradores podem acessar esta seção.",
            ),
            actions=(Affordance("save_notice", "Salvar Aviso"),),
        ),
        SectionDefinition(
            id="usuarios",
            title="Gerenciar Usuários",
            guard=Guard(USERS, Action.READ.value),
            fallback=DeniedNotice(
                RESTRICTED_TITLE,
                "Apenas administradores podem gerenciar usuários.",
            ),
            actions=(
                Affordance("new_user", "Novo Usuário", lambda ev: ev.can_create(USERS)),
            ),
            item_actions=(
                Affordance("edit", "Editar", lambda ev: ev.can_update(USERS)),
                Affordance("delete", "Excluir", lambda ev: ev.can_delete(USERS)),
            ),
        ),
    )
}


def get_section(section_id: str) -> SectionDefinition:
    try:
        return SECTIONS[section_id]
    except KeyError:
        raise NotFoundError(
            f"Unknown section '{section_id}'", details={"section_id": section_id}
        ) from None


def compose_section(evaluator: PermissionService, section_id: str) -> SectionView:
    """Build the view of one section for the current user.

    Raises:
        NotFoundError: If ``section_id`` is not a known section
    """
    definition = get_section(section_id)
    gate = gate_section(evaluator, definition.guard, definition.fallback)
    if not gate.allowed:
        return SectionView(definition.id, definition.title, gate)
    return SectionView(
        id=definition.id,
        title=definition.title,
        gate=gate,
        actions=visible_affordances(evaluator, definition.actions),
        item_actions=visible_affordances(evaluator, definition.item_actions),
        widgets=visible_affordances(evaluator, definition.widgets),
    )
