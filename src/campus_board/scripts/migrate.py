# src/campus_board/scripts/migrate.py
"""Bring the configured database schema up to date."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

from campus_board.core.settings import settings
from campus_board.db.session import create_tables

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parents[3] / "migrations"


def alembic_config(url: str | None = None) -> Config:
    """Return an Alembic config pointed at the project's migrations and ``url``."""
    cfg = Config(str(MIGRATIONS_DIR / "alembic.ini"))
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    cfg.set_main_option("sqlalchemy.url", url or settings.database_url_sync)
    return cfg


def run_upgrade_head(url: str | None = None) -> None:
    command.upgrade(alembic_config(url), "head")


def main() -> None:
    parser = argparse.ArgumentParser(description="Migrate the Campus Board database")
    parser.add_argument(
        "--create-all",
        action="store_true",
        help="Create tables straight from the models instead of running migrations (local SQLite use).",
    )
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level.upper())
    if args.create_all:
        create_tables()
        logger.info("Created all tables from model metadata")
    else:
        run_upgrade_head()
        logger.info("Database upgraded to head")


if __name__ == "__main__":
    main()
