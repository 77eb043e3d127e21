"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from collab.config import Settings
from collab.interface.api.routes import delegates, health, session
from collab.util.di.container import create_container, setup_di
from collab.util.observability import instrument_fastapi


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to use; the production container when omitted
    """
    settings = Settings()

    app_instance = FastAPI(
        title="Collab Delegates API",
        description="Delegate access and invitation linking for brand and creator profiles",
        version="0.1.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        max_age=600,
    )

    setup_di(app_instance, container or create_container())

    app_instance.include_router(health.router)
    app_instance.include_router(session.router)
    app_instance.include_router(delegates.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
app = create_app()
