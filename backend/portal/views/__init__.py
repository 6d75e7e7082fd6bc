from .gating import (
    DEFAULT_DENIED_NOTICE,
    Affordance,
    DeniedNotice,
    GateResult,
    GateState,
    Guard,
    gate_section,
    visible_affordances,
)
from .navigation import ALWAYS_VISIBLE_RESOURCES, NAV_ITEMS, NavItem, compose_navigation
from .page import PageMode, PageView, compose_login_form, compose_page, compose_user_card
from .sections import SECTIONS, SectionView, compose_section

__all__ = [
    "ALWAYS_VISIBLE_RESOURCES",
    "DEFAULT_DENIED_NOTICE",
    "NAV_ITEMS",
    "SECTIONS",
    "Affordance",
    "DeniedNotice",
    "GateResult",
    "GateState",
    "Guard",
    "NavItem",
    "PageMode",
    "PageView",
    "SectionView",
    "compose_login_form",
    "compose_navigation",
    "compose_page",
    "compose_section",
    "compose_user_card",
    "gate_section",
    "visible_affordances",
]
