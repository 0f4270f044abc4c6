#!/usr/bin/env python3
"""Apply Alembic migrations for the comments schema.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py --downgrade base
"""

import argparse
import sys

import logfire
from alembic import command
from alembic.config import Config

from ctree.config import Settings
from ctree.persistence.tables import SEARCH_CONFIG
from ctree.util.observability import configure_logfire


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("revision", nargs="?", default="head")
    parser.add_argument("--downgrade", action="store_true")
    args = parser.parse_args(argv)

    settings = Settings()
    configure_logfire(settings)

    # Queries must use the configuration the search column is generated with
    if settings.search.language != SEARCH_CONFIG:
        logfire.warn(
            "Search language differs from the generated search column",
            configured=settings.search.language,
            column=SEARCH_CONFIG,
        )

    alembic_cfg = Config("alembic.ini")
    direction = "downgrade" if args.downgrade else "upgrade"

    with logfire.span("migrations", direction=direction, revision=args.revision):
        try:
            if args.downgrade:
                command.downgrade(alembic_cfg, args.revision)
            else:
                command.upgrade(alembic_cfg, args.revision)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Fail the deploy instead of starting on a broken schema
            raise

    logfire.info("Database migrations completed", revision=args.revision)
    return 0


if __name__ == "__main__":
    sys.exit(main())
