#!/usr/bin/env python3
"""Run database migrations with Logfire error tracking.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py a7e24d5c91b3
"""

import sys
import logfire
from alembic import command
from alembic.config import Config
from sqlalchemy.engine import make_url

from port42.config import Settings
from port42.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    """Upgrade the schema to a revision and log any errors to Logfire."""
    settings = Settings()
    target = argv[1] if len(argv) > 1 else "head"

    # Configure Logfire
    configure_logfire(settings)

    database = make_url(settings.database_url)
    with logfire.span(
        "run_migrations",
        target=target,
        database_host=database.host,
        database_name=database.database,
    ):
        try:
            # Create Alembic config; env.py reads the URL from Settings
            alembic_cfg = Config("alembic.ini")
            command.upgrade(alembic_cfg, target)

            logfire.info("Database migrations completed", target=target)
            return 0

        except Exception as e:
            logfire.error(
                "Database migration failed",
                target=target,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Re-raise so the container fails and doesn't start with broken schema
            raise


if __name__ == "__main__":
    sys.exit(main(sys.argv))
