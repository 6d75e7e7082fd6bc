from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final

from ..crud.user import SEED_USERS
from ..services.auth_session import AuthSession
from ..services.permission_service import PermissionService
from .navigation import NavItem, compose_navigation
from .sections import SectionView, compose_section

LOGIN_ERROR_MESSAGE: Final = "Email ou senha incorretos"


class PageMode(str, Enum):
    LOADING = "loading"
    LOGIN = "login"
    PORTAL = "portal"


@dataclass(frozen=True, slots=True)
class DemoAccount:
    email: str
    password: str
    role_label: str


@dataclass(frozen=True, slots=True)
class LoginFormView:
    submit_disabled: bool
    error: str | None
    demo_accounts: tuple[DemoAccount, ...]


@dataclass(frozen=True, slots=True)
class UserCardView:
    name: str
    department: str
    avatar: str | None
    role_label: str


@dataclass(frozen=True, slots=True)
class HeaderView:
    title: str
    greeting: str
    admin_mode: bool


@dataclass(frozen=True, slots=True)
class PageView:
    mode: PageMode
    login_form: LoginFormView | None = None
    navigation: tuple[NavItem, ...] = ()
    header: HeaderView | None = None
    section: SectionView | None = None
    user_card: UserCardView | None = None


def compose_login_form(session: AuthSession, *, login_failed: bool = False) -> LoginFormView:
    return LoginFormView(
        submit_disabled=session.is_loading,
        error=LOGIN_ERROR_MESSAGE if login_failed else None,
        demo_accounts=tuple(
            DemoAccount(user.email, user.password, user.role.label) for user in SEED_USERS
        ),
    )


def compose_user_card(session: AuthSession) -> UserCardView | None:
    user = session.current_user
    if user is None:
        return None
    return UserCardView(
        name=user.name,
        department=user.department,
        avatar=user.avatar,
        role_label=user.role.label,
    )


def compose_page(
    evaluator: PermissionService,
    active_section: str = "dashboard",
    *,
    login_failed: bool = False,
) -> PageView:
    """Compose the whole screen: spinner, login form or the portal itself.

    Raises:
        NotFoundError: If ``active_section`` is not a known section
    """
    session = evaluator.session
    if session.is_loading:
        return PageView(PageMode.LOADING)

    user = session.current_user
    if user is None:
        return PageView(PageMode.LOGIN, login_form=compose_login_form(session, login_failed=login_failed))

    section = compose_section(evaluator, active_section)
    return PageView(
        mode=PageMode.PORTAL,
        navigation=compose_navigation(evaluator),
        header=HeaderView(
            title=section.title,
            greeting=f"Bem-vindo(a), {user.name}",
            admin_mode=evaluator.is_admin(),
        ),
        section=section,
        user_card=compose_user_card(session),
    )
