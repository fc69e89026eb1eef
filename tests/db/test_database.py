"""Unit tests for arcane_chess/db/database.py"""

import pytest
from sqlalchemy import StaticPool, create_engine, inspect
from sqlalchemy.orm import Session

import arcane_chess.db.database as database


def test_get_db_yields_session() -> None:
    generator = database.get_db()
    session = next(generator)
    assert isinstance(session, Session)
    generator.close()


def test_init_db_creates_tables(monkeypatch: pytest.MonkeyPatch) -> None:
    test_engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    monkeypatch.setattr(database, "engine", test_engine)
    database.init_db()
    assert set(inspect(test_engine).get_table_names()) == {"games", "game_moves"}
