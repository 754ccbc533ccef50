"""Alembic migration pipeline against a throwaway SQLite file."""

import os

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.exc import IntegrityError

from recruit_crm.db import Base

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


@pytest.fixture
def alembic_cfg(tmp_path):
    cfg = Config(os.path.join(ROOT_DIR, "alembic.ini"))
    cfg.set_main_option("script_location", os.path.join(ROOT_DIR, "recruit_crm", "alembic"))
    cfg.set_main_option("sqlalchemy.url", f"sqlite:///{tmp_path / 'migrations.db'}")
    # Keep pytest's log capture intact
    cfg.attributes["configure_logger"] = False
    return cfg


def test_upgrade_creates_every_table(alembic_cfg):
    command.upgrade(alembic_cfg, "head")

    engine = create_engine(alembic_cfg.get_main_option("sqlalchemy.url"))
    tables = set(inspect(engine).get_table_names())
    engine.dispose()

    assert set(Base.metadata.tables) <= tables
    assert "alembic_version" in tables


def test_primary_index_is_enforced_after_upgrade(alembic_cfg):
    command.upgrade(alembic_cfg, "head")
    engine = create_engine(alembic_cfg.get_main_option("sqlalchemy.url"))

    insert = text(
        "INSERT INTO phones (id, entity_type, entity_id, is_primary, type, phone, is_verified, created_at, updated_at) "
        "VALUES (:id, 'company', 'c1', 1, 'work', '+1 555 0100', 0, '2024-01-01', '2024-01-01')"
    )
    with engine.begin() as conn:
        conn.execute(insert, {"id": "p1"})
    with pytest.raises(IntegrityError):
        with engine.begin() as conn:
            conn.execute(insert, {"id": "p2"})
    engine.dispose()


def test_downgrade_removes_tables(alembic_cfg):
    command.upgrade(alembic_cfg, "head")
    command.downgrade(alembic_cfg, "base")

    engine = create_engine(alembic_cfg.get_main_option("sqlalchemy.url"))
    tables = set(inspect(engine).get_table_names())
    engine.dispose()

    assert tables <= {"alembic_version"}
