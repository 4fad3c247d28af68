"""
SQLite Campaign Database.

One aiosqlite connection per open campaign. Reads and writes typed records
from models.py and wraps sqlite3 failures in CampaignStorageError.

Every write commits on its own; callers that write several rows get
per-row atomicity only.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path

import aiosqlite

from ...core.logging import get_logger
from .errors import (
    CampaignClosedError,
    CampaignError,
    CampaignParseError,
    CampaignStorageError,
    SystemNotFoundError,
)
from .models import (
    NO_OWNER,
    Empire,
    Fleet,
    GroundType,
    GroundUnit,
    Ship,
    ShipType,
    System,
)
from .schema import TURN_KEY

logger = get_logger(__name__)

# Numeric System fields that must never be negative
SYSTEM_COUNTERS = ("raw", "cap", "pop", "mor", "ind", "dev", "fails", "owner")


@contextmanager
def storage_errors(action: str) -> Iterator[None]:
    """Re-raise sqlite3 errors and out-of-range integers as CampaignStorageError."""
    try:
        yield
    except (sqlite3.Error, OverflowError) as e:
        raise CampaignStorageError(f"Failed to {action}: {e}") from e


def _nullable_id(value: int) -> int | None:
    """Store the 0 = none reference convention as SQL NULL."""
    return value or None


def _check_not_negative(system: System) -> None:
    for attr in SYSTEM_COUNTERS:
        value = getattr(system, attr)
        if value < 0:
            raise CampaignError(f"System {system.name!r} has negative {attr}: {value}")


class CampaignDatabase:
    """
    Persistent storage for one campaign's data.

    Call connect() before any other operation. After close() every
    operation raises CampaignClosedError.
    """

    def __init__(self, db_path: Path | str):
        self.db_path = Path(db_path)
        self._db: aiosqlite.Connection | None = None

    async def connect(self, create: bool = False) -> None:
        """
        Open the database file.

        Args:
            create: Create the file if missing. Without it a missing file
                is a storage error.
        """
        mode = "rwc" if create else "rw"
        uri = f"{self.db_path.resolve().as_uri()}?mode={mode}"

        with storage_errors(f"open {self.db_path.name}"):
            self._db = await aiosqlite.connect(uri, uri=True)
        self._db.row_factory = aiosqlite.Row

        logger.debug("Connected to %s (create=%s)", self.db_path, create)

    async def close(self) -> None:
        """Close the connection. Safe to call more than once."""
        if self._db is not None:
            await self._db.close()
            self._db = None
            logger.debug("Closed %s", self.db_path)

    @property
    def is_open(self) -> bool:
        return self._db is not None

    @property
    def db(self) -> aiosqlite.Connection:
        """Get the database connection, raising if closed."""
        if self._db is None:
            raise CampaignClosedError(f"Campaign database {self.db_path.name} is not open")
        return self._db

    # -------------------------------------------------------------------------
    # Control State
    # -------------------------------------------------------------------------

    async def current_turn(self) -> int:
        """Return the turn number stored in the control table."""
        with storage_errors("read the current turn"):
            cursor = await self.db.execute(
                "SELECT value FROM control WHERE key = ?", (TURN_KEY,)
            )
            row = await cursor.fetchone()

        if row is None:
            raise CampaignStorageError("Campaign has no turn record")

        value = row["value"]
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise CampaignParseError(f"Invalid turn value {value!r}: {e}") from e

    # -------------------------------------------------------------------------
    # Empires
    # -------------------------------------------------------------------------

    async def add_empire(self, name: str) -> int:
        """Insert an empire with zero treasury and tech. Returns its id."""
        with storage_errors(f"add empire {name!r}"):
            cursor = await self.db.execute("INSERT INTO empires (name) VALUES (?)", (name,))
            await self.db.commit()
        return cursor.lastrowid

    async def get_empires(self) -> list[Empire]:
        with storage_errors("read empires"):
            cursor = await self.db.execute(
                "SELECT id, name, treasury, tech FROM empires ORDER BY id"
            )
            rows = await cursor.fetchall()
        return [Empire.from_row(row) for row in rows]

    async def get_empire(self, empire_id: int) -> Empire | None:
        with storage_errors(f"read empire {empire_id}"):
            cursor = await self.db.execute(
                "SELECT id, name, treasury, tech FROM empires WHERE id = ?", (empire_id,)
            )
            row = await cursor.fetchone()
        return Empire.from_row(row) if row is not None else None

    async def get_empire_name(self, owner_id: int) -> str:
        """
        Resolve an owner reference to the empire's name.

        Returns "None" for owner 0 and for an id with no empire row, so a
        system stays readable after its owner is removed.
        """
        if owner_id == 0:
            return NO_OWNER

        with storage_errors(f"read empire {owner_id}"):
            cursor = await self.db.execute(
                "SELECT name FROM empires WHERE id = ?", (owner_id,)
            )
            row = await cursor.fetchone()

        if row is None:
            logger.debug("Owner %d has no empire record", owner_id)
            return NO_OWNER
        return row["name"]

    # -------------------------------------------------------------------------
    # Systems
    # -------------------------------------------------------------------------

    async def insert_system(self, system: System) -> int:
        """
        Insert a new system and return its id.

        Only the name, type and the five core attributes are written; dev,
        fails and owner start at their defaults and are set via
        update_system().
        """
        if system.owner or system.dev or system.fails:
            raise CampaignError(
                f"New system {system.name!r} must start unowned with no development "
                "or failures; set them with an update"
            )
        _check_not_negative(system)

        with storage_errors(f"insert system {system.name!r}"):
            cursor = await self.db.execute(
                """
                INSERT INTO systems (name, ptype, raw, cap, pop, mor, ind)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    system.name,
                    system.ptype,
                    system.raw,
                    system.cap,
                    system.pop,
                    system.mor,
                    system.ind,
                ),
            )
            await self.db.commit()
        return cursor.lastrowid

    async def add_systems(self, systems: Iterable[System]) -> int:
        """Insert systems one at a time. Returns the number inserted."""
        count = 0
        for system in systems:
            await self.insert_system(system)
            count += 1
        return count

    async def select_systems(self) -> list[System]:
        """Return all systems as stored, without owner names."""
        with storage_errors("read systems"):
            cursor = await self.db.execute("SELECT * FROM systems ORDER BY id")
            rows = await cursor.fetchall()
        return [System.from_row(row) for row in rows]

    async def select_system_by_name(self, name: str) -> System | None:
        """Return the first system with this name, without owner name."""
        with storage_errors(f"read system {name!r}"):
            cursor = await self.db.execute(
                "SELECT * FROM systems WHERE name = ? ORDER BY id LIMIT 1", (name,)
            )
            row = await cursor.fetchone()
        return System.from_row(row) if row is not None else None

    async def get_systems(self) -> list[System]:
        """
        Return all systems with owner_name resolved.

        Resolves owners with one query per system. Campaigns hold tens of
        systems; a join would return the same records.
        """
        systems = await self.select_systems()
        for system in systems:
            system.owner_name = await self.get_empire_name(system.owner)
        return systems

    async def get_system_by_name(self, name: str) -> System | None:
        """Return a system by name with owner_name resolved."""
        system = await self.select_system_by_name(name)
        if system is not None:
            system.owner_name = await self.get_empire_name(system.owner)
        return system

    async def update_system(self, system: System) -> None:
        """
        Write every stored field of an existing system.

        Raises:
            SystemNotFoundError: system.id is unset or has no row
            CampaignError: A numeric field is negative
            CampaignStorageError: A value does not fit an SQLite INTEGER
        """
        if system.id <= 0:
            raise SystemNotFoundError(system.id)
        _check_not_negative(system)

        with storage_errors(f"update system {system.name!r}"):
            cursor = await self.db.execute(
                """
                UPDATE systems
                SET name = ?, ptype = ?, raw = ?, cap = ?, pop = ?, mor = ?,
                    ind = ?, dev = ?, fails = ?, owner = ?
                WHERE id = ?
                """,
                (
                    system.name,
                    system.ptype,
                    system.raw,
                    system.cap,
                    system.pop,
                    system.mor,
                    system.ind,
                    system.dev,
                    system.fails,
                    _nullable_id(system.owner),
                    system.id,
                ),
            )
            await self.db.commit()

        if cursor.rowcount == 0:
            raise SystemNotFoundError(system.id)

    async def delete_system(self, system: System) -> None:
        """
        Delete a system by id.

        Fleets and ground units located there keep their reference.

        Raises:
            SystemNotFoundError: system.id is unset or has no row
        """
        if system.id <= 0:
            raise SystemNotFoundError(system.id)

        with storage_errors(f"delete system {system.name!r}"):
            cursor = await self.db.execute("DELETE FROM systems WHERE id = ?", (system.id,))
            await self.db.commit()

        if cursor.rowcount == 0:
            raise SystemNotFoundError(system.id)

    # -------------------------------------------------------------------------
    # Units (read-only)
    # -------------------------------------------------------------------------

    async def _fetch_all(self, table: str) -> list[aiosqlite.Row]:
        with storage_errors(f"read {table.replace('_', ' ')}"):
            cursor = await self.db.execute(f"SELECT * FROM {table} ORDER BY id")
            return list(await cursor.fetchall())

    async def get_ground_types(self) -> list[GroundType]:
        return [GroundType.from_row(row) for row in await self._fetch_all("ground_types")]

    async def get_ground_units(self) -> list[GroundUnit]:
        return [GroundUnit.from_row(row) for row in await self._fetch_all("ground_units")]

    async def get_ship_types(self) -> list[ShipType]:
        return [ShipType.from_row(row) for row in await self._fetch_all("ship_types")]

    async def get_ships(self) -> list[Ship]:
        return [Ship.from_row(row) for row in await self._fetch_all("ships")]

    async def get_fleets(self) -> list[Fleet]:
        return [Fleet.from_row(row) for row in await self._fetch_all("fleets")]
