"""Tests for campaign schema provisioning."""

from __future__ import annotations

import sqlite3
from pathlib import Path

import aiosqlite
import pytest

from vbam_cma.services.campaign_store.schema import (
    DEFAULT_GROUND_TYPES,
    TABLES,
    provision,
)

pytestmark = pytest.mark.asyncio

EXPECTED_TABLES = [
    "control",
    "empires",
    "systems",
    "fleets",
    "ground_types",
    "ground_units",
    "ship_types",
    "ships",
]


async def _columns(db: aiosqlite.Connection, table: str) -> list[str]:
    cursor = await db.execute(f"PRAGMA table_info({table})")
    return [row[1] for row in await cursor.fetchall()]


class TestProvision:
    """Tests for provision()."""

    async def test_creates_all_tables(self, tmp_path: Path) -> None:
        """Every campaign table exists after provisioning."""
        async with aiosqlite.connect(tmp_path / "test.db") as db:
            await provision(db)

            for table in EXPECTED_TABLES:
                cursor = await db.execute(
                    "SELECT name FROM sqlite_master WHERE type='table' AND name=?",
                    (table,),
                )
                row = await cursor.fetchone()
                assert row is not None, f"Table {table} not created"

    async def test_tables_in_reference_order(self) -> None:
        """Referenced tables come before the tables that reference them."""
        assert [name for name, _ in TABLES] == EXPECTED_TABLES

    async def test_seeds_turn_zero(self, tmp_path: Path) -> None:
        """Control table holds a single turn row set to '0'."""
        async with aiosqlite.connect(tmp_path / "test.db") as db:
            await provision(db)

            cursor = await db.execute("SELECT key, value FROM control")
            rows = await cursor.fetchall()
            assert [tuple(r) for r in rows] == [("turn", "0")]

    async def test_seeds_ground_types(self, tmp_path: Path) -> None:
        """Ground type catalog holds the six default classes in order."""
        async with aiosqlite.connect(tmp_path / "test.db") as db:
            await provision(db)

            cursor = await db.execute(
                "SELECT name, abbr, cost, atk, def FROM ground_types ORDER BY id"
            )
            rows = [tuple(r) for r in await cursor.fetchall()]

        assert rows == list(DEFAULT_GROUND_TYPES)
        assert [r[0] for r in rows] == [
            "Militia",
            "Light Infantry",
            "Mobile Infantry",
            "Light Armor",
            "Mech Infantry",
            "Marines",
        ]

    async def test_second_run_changes_nothing(self, tmp_path: Path) -> None:
        """Provisioning twice neither fails nor duplicates seed rows."""
        async with aiosqlite.connect(tmp_path / "test.db") as db:
            await provision(db)
            await provision(db)

            cursor = await db.execute("SELECT COUNT(*) FROM control")
            assert (await cursor.fetchone())[0] == 1

            cursor = await db.execute("SELECT COUNT(*) FROM ground_types")
            assert (await cursor.fetchone())[0] == len(DEFAULT_GROUND_TYPES)

    async def test_systems_columns(self, tmp_path: Path) -> None:
        """Systems table has the stored attribute columns."""
        async with aiosqlite.connect(tmp_path / "test.db") as db:
            await provision(db)
            columns = await _columns(db, "systems")

        assert columns == [
            "id",
            "name",
            "ptype",
            "raw",
            "cap",
            "pop",
            "mor",
            "ind",
            "dev",
            "fails",
            "owner",
        ]

    async def test_ship_tables_columns(self, tmp_path: Path) -> None:
        """Ship type and ship tables carry the hull and status columns."""
        async with aiosqlite.connect(tmp_path / "test.db") as db:
            await provision(db)
            ship_type_columns = await _columns(db, "ship_types")
            ship_columns = await _columns(db, "ships")

        assert ship_type_columns == [
            "id",
            "class",
            "hull",
            "cost",
            "cr",
            "atk",
            "def",
            "cap",
            "empire",
        ]
        assert ship_columns == ["id", "stype", "fleet", "crip", "moth"]

    async def test_system_defaults(self, tmp_path: Path) -> None:
        """dev and fails default to 0, owner to NULL."""
        async with aiosqlite.connect(tmp_path / "test.db") as db:
            await provision(db)
            await db.execute(
                "INSERT INTO systems (name, ptype, raw, cap, pop, mor, ind) "
                "VALUES ('X', 'HW', 1, 1, 1, 1, 1)"
            )
            cursor = await db.execute("SELECT dev, fails, owner FROM systems")
            row = await cursor.fetchone()

        assert tuple(row) == (0, 0, None)

    async def test_storage_error_propagates(self, tmp_path: Path) -> None:
        """Errors from SQLite are not swallowed."""
        db_path = tmp_path / "test.db"
        async with aiosqlite.connect(db_path):
            pass

        async with aiosqlite.connect(f"{db_path.as_uri()}?mode=ro", uri=True) as db:
            with pytest.raises(sqlite3.OperationalError):
                await provision(db)
