"""Tests for engine setup and schema creation."""

from pathlib import Path

import pytest
from sqlalchemy import inspect, insert, text
from sqlalchemy.exc import IntegrityError

from gavel.infrastructure.database import auctions, init_database


class TestInitDatabase:
    def test_creates_parent_dir_and_tables(self, tmp_path: Path) -> None:
        db_path = tmp_path / "nested" / "gavel.db"
        engine = init_database(db_path)
        try:
            assert db_path.exists()
            tables = set(inspect(engine).get_table_names())
            assert {"users", "auctions"} <= tables
        finally:
            engine.dispose()

    def test_idempotent(self, tmp_path: Path) -> None:
        db_path = tmp_path / "gavel.db"
        init_database(db_path).dispose()
        engine = init_database(db_path)
        engine.dispose()

    def test_wal_mode(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path / "gavel.db")
        try:
            with engine.connect() as conn:
                assert conn.execute(text("PRAGMA journal_mode")).scalar() == "wal"
        finally:
            engine.dispose()

    def test_indexes(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path / "gavel.db")
        try:
            names = {ix["name"] for ix in inspect(engine).get_indexes("auctions")}
            assert {"ix_auctions_is_closed", "ix_auctions_created_at"} <= names
        finally:
            engine.dispose()

    def test_current_bid_check_constraint(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path / "gavel.db")
        try:
            with pytest.raises(IntegrityError), engine.begin() as conn:
                conn.execute(
                    insert(auctions).values(
                        id="65f1c0de0123456789abcdef",
                        item_name="Lamp",
                        description="Brass",
                        starting_bid=100,
                        current_bid=50,
                        closing_time="2030-01-01T00:00:00.000000+00:00",
                        created_at="2029-01-01T00:00:00.000000+00:00",
                    )
                )
        finally:
            engine.dispose()
