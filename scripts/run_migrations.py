#!/usr/bin/env python3
"""Apply the account_delegates schema with Logfire error tracking."""

import sys
import logfire
from alembic import command
from alembic.config import Config

from collab.config import Settings
from collab.util.observability import configure_logfire


def build_alembic_config(settings: Settings) -> Config:
    """Alembic config pointing at the migrations directory and database."""
    alembic_cfg = Config()
    alembic_cfg.set_main_option("script_location", "migrations")
    alembic_cfg.set_main_option("sqlalchemy.url", settings.database_url)
    return alembic_cfg


def main() -> int:
    """Upgrade to head and log any errors to Logfire."""
    settings = Settings()
    configure_logfire(settings)

    try:
        logfire.info("Starting database migrations", environment=settings.environment)
        command.upgrade(build_alembic_config(settings), "head")
        logfire.info("Database migrations completed successfully")
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails and doesn't start with broken schema
        raise


if __name__ == "__main__":
    sys.exit(main())
