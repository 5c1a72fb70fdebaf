"""
Alembic 마이그레이션 테스트 (빈 DB → head → base)
"""

from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect, text

from basic_budget.core.database import Base

BACKEND_DIR = Path(__file__).resolve().parents[1]


def _config(url: str) -> Config:
    cfg = Config()
    cfg.set_main_option("script_location", str(BACKEND_DIR / "alembic"))
    cfg.attributes["database_url"] = url
    return cfg


def test_upgrade_creates_schema_and_seeds_settings(tmp_path):
    url = f"sqlite:///{tmp_path / 'migrate.sqlite3'}"
    command.upgrade(_config(url), "head")

    engine = create_engine(url)
    try:
        tables = set(inspect(engine).get_table_names())
        assert set(Base.metadata.tables) <= tables

        with engine.connect() as conn:
            row = conn.execute(text("SELECT cycle_type, week_start, currency, locale FROM settings WHERE id = 1")).one()
        assert tuple(row) == ("monthly", 1, "USD", "en-US")
    finally:
        engine.dispose()


def test_downgrade_to_base(tmp_path):
    url = f"sqlite:///{tmp_path / 'migrate.sqlite3'}"
    cfg = _config(url)
    command.upgrade(cfg, "head")
    command.downgrade(cfg, "base")

    engine = create_engine(url)
    try:
        assert set(inspect(engine).get_table_names()) <= {"alembic_version"}
    finally:
        engine.dispose()
