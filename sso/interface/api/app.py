"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI

from sso.interface.api.routes import health, sso
from sso.interface.error import register_error_handlers
from sso.util.di.container import create_container, setup_di
from sso.util.observability import instrument_fastapi, instrument_httpx


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to use; defaults to the production container
    """
    # Instrument httpx for outbound provider and avatar requests
    instrument_httpx()

    app_instance = FastAPI(
        title="SSO Bridge",
        description="Reconciles third-party SSO identities with local accounts",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)
    register_error_handlers(app_instance)

    # Settings are loaded from environment automatically
    setup_di(app_instance, container or create_container())

    app_instance.include_router(health.router)
    app_instance.include_router(sso.router)

    return app_instance
