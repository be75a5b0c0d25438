"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from shop_admin.adapters.admin_api_client import (
    AdminApiClient,
    HttpxAdminApiClient,
    TransportConfig,
)
from shop_admin.adapters.token_store import FileTokenStore, TokenStore
from shop_admin.config import Settings
from shop_admin.services.admin import AdminService
from shop_admin.services.invalidation import InvalidationBus
from shop_admin.services.mutations import MutationExecutor
from shop_admin.services.queries import QueryClient
from shop_admin.services.sessions import SessionStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    api_client: AdminApiClient
    token_store: TokenStore
    session_store: SessionStore
    invalidation_bus: InvalidationBus
    query_client: QueryClient
    mutation_executor: MutationExecutor
    admin_service: AdminService
    close_resources: Callable[[], Awaitable[None]]


def build_services(
    settings: Settings,
    api_client: AdminApiClient,
    token_store: TokenStore,
    close_resources: Callable[[], Awaitable[None]],
) -> AppContainer:
    """Wire the core services around the given adapters."""
    session_store = SessionStore(
        api_client=api_client,
        token_store=token_store,
        base_transport=TransportConfig(
            base_url=settings.api_base_url,
            timeout=settings.request_timeout_seconds,
        ),
    )
    invalidation_bus = InvalidationBus()
    query_client = QueryClient(stale_after_seconds=settings.query_stale_seconds)
    invalidation_bus.subscribe(query_client.invalidate)
    mutation_executor = MutationExecutor(invalidation_bus)
    admin_service = AdminService(
        api_client=api_client,
        session_store=session_store,
        query_client=query_client,
        mutation_executor=mutation_executor,
    )
    return AppContainer(
        settings=settings,
        api_client=api_client,
        token_store=token_store,
        session_store=session_store,
        invalidation_bus=invalidation_bus,
        query_client=query_client,
        mutation_executor=mutation_executor,
        admin_service=admin_service,
        close_resources=close_resources,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    api_client = HttpxAdminApiClient.create()
    token_store = FileTokenStore(resolved_settings.resolved_token_store_path())

    async def close_resources() -> None:
        await api_client.close()

    return build_services(
        resolved_settings,
        api_client=api_client,
        token_store=token_store,
        close_resources=close_resources,
    )
