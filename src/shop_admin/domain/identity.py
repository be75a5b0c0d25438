"""Domain models for the authenticated admin session."""

from dataclasses import dataclass
from enum import Enum

from shop_admin.domain.base import ApiModel

ADMIN_ROLE = "ADMIN"


class Identity(ApiModel):
    """Backend user record returned by login and profile calls."""

    id: str
    first_name: str
    last_name: str
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


class LoginResult(ApiModel):
    """Payload of a successful credential exchange."""

    token: str
    user: Identity


class ProfileResult(ApiModel):
    """Payload of the profile verification endpoint."""

    user: Identity


class AuthState(Enum):
    """Authentication lifecycle states."""

    UNAUTHENTICATED = "unauthenticated"
    VERIFYING = "verifying"
    AUTHENTICATED = "authenticated"


@dataclass(frozen=True)
class Session:
    """Current bearer token and the identity it was verified for."""

    token: str | None = None
    identity: Identity | None = None

    @property
    def is_valid(self) -> bool:
        """Return True when the session may access admin views."""
        if not self.token or self.identity is None:
            return False
        return self.identity.is_admin
