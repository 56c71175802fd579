#!/usr/bin/env python3
"""Apply the users/user_identities schema before the API boots.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py <revision> # upgrade to a specific revision

The container entrypoint runs this first; a failure stops the deploy so the
API never starts against a half-migrated schema.
"""

import sys
from pathlib import Path

import logfire
from alembic import command
from alembic.config import Config

from folio.config import load_settings
from folio.util.observability import configure_logfire

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def main(argv: list[str]) -> int:
    """Upgrade the database and report the outcome to Logfire."""
    settings = load_settings()
    configure_logfire(settings)

    revision = argv[1] if len(argv) > 1 else "head"
    alembic_cfg = Config(str(ALEMBIC_INI))

    with logfire.span(
        "run_migrations", revision=revision, environment=settings.environment
    ):
        try:
            command.upgrade(alembic_cfg, revision)
        except Exception:
            logfire.exception("Database migration failed", revision=revision)
            raise

    logfire.info("Database schema is up to date", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
