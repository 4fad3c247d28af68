"""
Campaign Database Schema.

Creates the fixed table set for a new campaign and seeds the reference rows.
Called once from Campaign.create(); opening an existing campaign never runs it.

Tables are created in reference order (referenced tables first). References
between tables are advisory: foreign key enforcement is left off and readers
resolve missing targets to a fallback value.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...core.logging import get_logger

if TYPE_CHECKING:
    import aiosqlite

logger = get_logger(__name__)

CONTROL_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS control (
    key TEXT PRIMARY KEY,
    value TEXT
)
"""

EMPIRES_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS empires (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT,
    treasury INTEGER DEFAULT 0,
    tech INTEGER DEFAULT 0
)
"""

SYSTEMS_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS systems (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT,
    ptype TEXT,
    raw INTEGER,
    cap INTEGER,
    pop INTEGER,
    mor INTEGER,
    ind INTEGER,
    dev INTEGER DEFAULT 0,
    fails INTEGER DEFAULT 0,
    owner INTEGER REFERENCES empires (id)
)
"""

FLEETS_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS fleets (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT,
    owner INTEGER REFERENCES empires (id),
    location INTEGER REFERENCES systems (id)
)
"""

GROUND_TYPES_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS ground_types (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT,
    abbr TEXT,
    cost INTEGER,
    atk INTEGER,
    def INTEGER
)
"""

GROUND_UNITS_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS ground_units (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    gtype INTEGER REFERENCES ground_types (id),
    loc INTEGER REFERENCES systems (id)
)
"""

SHIP_TYPES_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS ship_types (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    class TEXT,
    hull TEXT,
    cost INTEGER,
    cr INTEGER,
    atk INTEGER,
    def INTEGER,
    cap INTEGER DEFAULT 0,
    empire INTEGER REFERENCES empires (id)
)
"""

SHIPS_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS ships (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    stype INTEGER REFERENCES ship_types (id),
    fleet INTEGER REFERENCES fleets (id),
    crip INTEGER DEFAULT 0,
    moth INTEGER DEFAULT 0
)
"""

# (table name, DDL) in creation order
TABLES: tuple[tuple[str, str], ...] = (
    ("control", CONTROL_TABLE_SQL),
    ("empires", EMPIRES_TABLE_SQL),
    ("systems", SYSTEMS_TABLE_SQL),
    ("fleets", FLEETS_TABLE_SQL),
    ("ground_types", GROUND_TYPES_TABLE_SQL),
    ("ground_units", GROUND_UNITS_TABLE_SQL),
    ("ship_types", SHIP_TYPES_TABLE_SQL),
    ("ships", SHIPS_TABLE_SQL),
)

TURN_KEY = "turn"
INITIAL_TURN = "0"

# Playtest ground unit catalog: (name, abbr, cost, atk, def)
DEFAULT_GROUND_TYPES: tuple[tuple[str, str, int, int, int], ...] = (
    ("Militia", "MIL", 2, 4, 4),
    ("Light Infantry", "LI", 3, 4, 4),
    ("Mobile Infantry", "MI", 4, 4, 8),
    ("Light Armor", "LA", 4, 8, 4),
    ("Mech Infantry", "MECH", 8, 8, 8),
    ("Marines", "MAR", 6, 4, 8),
)


async def _seed_control(db: aiosqlite.Connection) -> None:
    await db.execute(
        "INSERT OR IGNORE INTO control (key, value) VALUES (?, ?)",
        (TURN_KEY, INITIAL_TURN),
    )


async def _seed_ground_types(db: aiosqlite.Connection) -> None:
    # Seed only an empty catalog so a second run does not duplicate it
    cursor = await db.execute("SELECT COUNT(*) FROM ground_types")
    row = await cursor.fetchone()
    if row[0]:
        return

    await db.executemany(
        "INSERT INTO ground_types (name, abbr, cost, atk, def) VALUES (?, ?, ?, ?, ?)",
        DEFAULT_GROUND_TYPES,
    )


async def provision(db: aiosqlite.Connection) -> None:
    """
    Create every campaign table and seed the reference rows.

    Table creation is "if not exists" and the seeds are guarded, so running
    this against an already provisioned database changes nothing. Storage
    errors propagate to the caller unchanged.

    Args:
        db: Open connection to the new campaign database
    """
    for table, ddl in TABLES:
        logger.debug("Creating table %s", table)
        await db.execute(ddl)

    await _seed_control(db)
    await _seed_ground_types(db)
    await db.commit()

    logger.debug("Provisioned %d tables", len(TABLES))
