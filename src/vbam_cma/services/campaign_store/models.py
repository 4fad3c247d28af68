"""
Campaign Store Records.

Value objects materialized from campaign database rows. Nothing here holds a
connection; records are rebuilt from queries on every read.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import aiosqlite

# Display value for an unowned system or an owner that no longer resolves
NO_OWNER = "None"


def _owner_id(value: int | None) -> int:
    """Map a nullable owner column to the 0 = unowned convention."""
    return value if value is not None else 0


# =============================================================================
# Star Systems and Empires
# =============================================================================


@dataclass
class System:
    """
    A star system in the campaign.

    id is 0 until the system has been stored. owner is an empire id, 0 when
    unowned. owner_name is resolved at read time and never written back.
    """

    name: str
    ptype: str
    raw: int
    cap: int
    pop: int
    mor: int
    ind: int
    dev: int = 0
    fails: int = 0
    owner: int = 0
    id: int = 0
    owner_name: str = field(default=NO_OWNER, compare=False)

    @property
    def is_owned(self) -> bool:
        return self.owner != 0

    @classmethod
    def from_row(cls, row: aiosqlite.Row) -> System:
        """Build a System from a `systems` row; owner_name is left unresolved."""
        return cls(
            id=row["id"],
            name=row["name"],
            ptype=row["ptype"],
            raw=row["raw"],
            cap=row["cap"],
            pop=row["pop"],
            mor=row["mor"],
            ind=row["ind"],
            dev=row["dev"],
            fails=row["fails"],
            owner=_owner_id(row["owner"]),
        )


@dataclass
class Empire:
    """An empire that may own systems."""

    name: str
    treasury: int = 0
    tech: int = 0
    id: int = 0

    @classmethod
    def from_row(cls, row: aiosqlite.Row) -> Empire:
        return cls(
            id=row["id"],
            name=row["name"],
            treasury=row["treasury"],
            tech=row["tech"],
        )


# =============================================================================
# Units
# =============================================================================


@dataclass
class GroundType:
    """Ground unit class from the seeded catalog."""

    id: int
    name: str
    abbr: str
    cost: int
    atk: int
    defense: int

    @classmethod
    def from_row(cls, row: aiosqlite.Row) -> GroundType:
        return cls(
            id=row["id"],
            name=row["name"],
            abbr=row["abbr"],
            cost=row["cost"],
            atk=row["atk"],
            defense=row["def"],
        )


@dataclass
class GroundUnit:
    """A ground unit of some type stationed at a system."""

    id: int
    gtype: int
    loc: int

    @classmethod
    def from_row(cls, row: aiosqlite.Row) -> GroundUnit:
        return cls(id=row["id"], gtype=row["gtype"], loc=row["loc"] or 0)


@dataclass
class ShipType:
    """
    Ship class definition.

    empire is 0 for the shared catalog, otherwise the empire whose
    customized hull this is.
    """

    id: int
    ship_class: str
    hull: str
    cost: int
    cr: int
    atk: int
    defense: int
    cap: int = 0
    empire: int = 0

    @classmethod
    def from_row(cls, row: aiosqlite.Row) -> ShipType:
        return cls(
            id=row["id"],
            ship_class=row["class"],
            hull=row["hull"],
            cost=row["cost"],
            cr=row["cr"],
            atk=row["atk"],
            defense=row["def"],
            cap=row["cap"],
            empire=row["empire"] or 0,
        )


@dataclass
class Ship:
    """A ship of some type assigned to a fleet."""

    id: int
    stype: int
    fleet: int
    crip: bool = False  # crippled
    moth: bool = False  # mothballed

    @classmethod
    def from_row(cls, row: aiosqlite.Row) -> Ship:
        return cls(
            id=row["id"],
            stype=row["stype"],
            fleet=row["fleet"] or 0,
            crip=bool(row["crip"]),
            moth=bool(row["moth"]),
        )


@dataclass
class Fleet:
    """A named fleet owned by an empire, located at a system."""

    id: int
    name: str
    owner: int = 0
    location: int = 0

    @classmethod
    def from_row(cls, row: aiosqlite.Row) -> Fleet:
        return cls(
            id=row["id"],
            name=row["name"],
            owner=_owner_id(row["owner"]),
            location=row["location"] or 0,
        )
