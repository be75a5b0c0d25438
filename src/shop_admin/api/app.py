"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import RedirectResponse

from shop_admin.api.admin import router as admin_router
from shop_admin.api.request_models import LoginRequest
from shop_admin.app_logging import configure_logging
from shop_admin.containers import AppContainer
from shop_admin.errors import AuthError
from shop_admin.services.guard import Allow, authorize


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        session = await state_container.session_store.restore_session()
        if session is None:
            logger.info("No stored admin session, login required")
        yield
        await state_container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/")
    async def index() -> RedirectResponse:
        """Send visitors to the dashboard."""
        return RedirectResponse("/dashboard", status_code=status.HTTP_303_SEE_OTHER)

    @app.get("/login", response_model=None)
    async def login_view(request: Request) -> RedirectResponse | dict[str, str]:
        """Report that a login is required, or skip ahead when logged in."""
        state_container: AppContainer = request.app.state.container
        if isinstance(authorize(state_container.session_store.session), Allow):
            return RedirectResponse(
                "/dashboard", status_code=status.HTTP_303_SEE_OTHER
            )
        return {"status": "login_required"}

    @app.post("/login")
    async def login(body: LoginRequest, request: Request) -> dict[str, object]:
        """Exchange credentials for an admin session."""
        state_container: AppContainer = request.app.state.container
        try:
            session = await state_container.admin_service.login(
                body.email, body.password
            )
        except AuthError as exc:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED, detail=exc.message
            ) from exc
        identity = session.identity
        return {
            "user": identity.model_dump(mode="json", by_alias=True)
            if identity
            else None
        }

    @app.post("/logout")
    async def logout(request: Request) -> dict[str, str]:
        """End the admin session."""
        state_container: AppContainer = request.app.state.container
        state_container.admin_service.logout()
        return {"status": "ok"}

    return app
