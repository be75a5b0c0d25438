"""Route guard for protected console views."""

from dataclasses import dataclass

from shop_admin.domain.identity import Session

LOGIN_PATH = "/login"


@dataclass(frozen=True)
class Allow:
    """Navigation may proceed."""


@dataclass(frozen=True)
class Redirect:
    """Navigation must go elsewhere."""

    location: str


def authorize(session: Session | None) -> Allow | Redirect:
    """Decide whether the session may open a protected view."""
    if session is not None and session.is_valid:
        return Allow()
    return Redirect(LOGIN_PATH)
