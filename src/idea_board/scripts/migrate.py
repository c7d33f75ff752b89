# src/idea_board/scripts/migrate.py
from __future__ import annotations
import os
from alembic import command
from alembic.config import Config

from idea_board.core.settings import settings

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", ".."))


def run_upgrade_head() -> None:
    cfg = Config(os.path.join(PROJECT_ROOT, "migrations", "alembic.ini"))
    # DATABASE_URL wins over any url left in alembic.ini.
    cfg.set_main_option("sqlalchemy.url", settings.database_url)
    cfg.set_main_option("script_location", os.path.join(PROJECT_ROOT, "migrations"))
    command.upgrade(cfg, "head")

if __name__ == "__main__":
    run_upgrade_head()
