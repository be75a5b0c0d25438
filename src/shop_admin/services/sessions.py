"""Authentication state machine for the admin console."""

import asyncio
import logging
from dataclasses import dataclass, field

from shop_admin.adapters.admin_api_client import AdminApiClient, TransportConfig
from shop_admin.adapters.token_store import TokenStore
from shop_admin.domain.identity import AuthState, Session
from shop_admin.errors import AdminClientError, AuthError

LOGIN_FAILED = "Login failed"
FORBIDDEN = "forbidden"

logger = logging.getLogger(__name__)


@dataclass
class SessionStore:
    """Owns the admin session, its persisted token and transport config.

    This is the only writer of the bearer token. Every transport update
    swaps in a new immutable ``TransportConfig``, so readers see either the
    old token or the new one.
    """

    api_client: AdminApiClient
    token_store: TokenStore
    base_transport: TransportConfig
    state: AuthState = AuthState.UNAUTHENTICATED
    session: Session = field(default_factory=Session)
    _transport: TransportConfig | None = None
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    @property
    def transport(self) -> TransportConfig:
        """Transport config for outgoing requests."""
        return self._transport or self.base_transport

    @property
    def is_authenticated(self) -> bool:
        return self.state is AuthState.AUTHENTICATED

    async def login(self, email: str, password: str) -> Session:
        """Exchange credentials for an admin session."""
        async with self._lock:
            try:
                result = await self.api_client.login(
                    self.base_transport.with_token(None), email, password
                )
            except AdminClientError as exc:
                self._reset()
                raise AuthError(exc.backend_message or LOGIN_FAILED) from exc

            if not result.user.is_admin:
                logger.info("Rejected login for non-admin role %s", result.user.role)
                self._reset()
                raise AuthError(FORBIDDEN)

            self.token_store.set(result.token)
            self._authenticate(Session(token=result.token, identity=result.user))
            logger.info("Admin %s logged in", result.user.email)
            return self.session

    def logout(self) -> None:
        """Forget the session and its persisted token."""
        was_authenticated = self.is_authenticated
        self._reset()
        if was_authenticated:
            logger.info("Admin logged out")

    async def restore_session(self) -> Session | None:
        """Verify a persisted token and resume its session."""
        async with self._lock:
            token = self.token_store.get()
            if token is None:
                return None

            self.state = AuthState.VERIFYING
            transport = self.base_transport.with_token(token)
            try:
                identity = await self.api_client.get_profile(transport)
            except AdminClientError as exc:
                logger.info("Stored token rejected: %s", exc.message)
                self._reset()
                return None
            except BaseException:
                self._reset()
                raise

            if not identity.is_admin:
                logger.info("Stored token belongs to non-admin role %s", identity.role)
                self._reset()
                return None

            self._authenticate(Session(token=token, identity=identity))
            logger.info("Restored session for %s", identity.email)
            return self.session

    def _authenticate(self, session: Session) -> None:
        self._transport = self.base_transport.with_token(session.token)
        self.session = session
        self.state = AuthState.AUTHENTICATED

    def _reset(self) -> None:
        self.token_store.clear()
        self._transport = None
        self.session = Session()
        self.state = AuthState.UNAUTHENTICATED
