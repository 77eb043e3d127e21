"""Observability configuration using Logfire.

Usage:
    import logfire

    logfire.info("Invitation activated", delegate_id=str(delegate.id))

    with logfire.span("delegate_service.resolve_access", user_id=str(user_id)):
        ...
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from collab.config import Settings


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for observability.

    Cloud sending is enabled when explicitly requested or when a token is
    present; otherwise output goes to the console only.

    Args:
        settings: Application settings
    """
    if settings.observability.send_to_logfire is not None:
        send_to_logfire = settings.observability.send_to_logfire
    elif settings.observability.logfire_token:
        send_to_logfire = True
    else:
        send_to_logfire = False

    config_kwargs = {
        "service_name": "collab-delegates",
        "service_version": "0.1.0",
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }

    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Instrument FastAPI application with Logfire.

    Args:
        app: FastAPI application instance
    """
    logfire.instrument_fastapi(app, capture_headers=False)
    logfire.info("FastAPI instrumented")


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Instrument SQLAlchemy engine with Logfire.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(
        engine=engine.sync_engine,
        enable_commenter=True,
    )
    logfire.info("SQLAlchemy instrumented")
