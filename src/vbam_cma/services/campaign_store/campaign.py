"""
Campaign - the persistence handle for one named campaign.

Usage:
    from vbam_cma.services.campaign_store import Campaign

    campaign = await Campaign.create("Senor Rebellion")
    await campaign.import_systems("systems.csv")
    for system in await campaign.systems():
        print(system.name, system.owner_name)
    await campaign.close()

    async with await Campaign.open("Senor Rebellion") as campaign:
        print(campaign.title)

Only create() provisions the schema; open() expects a provisioned file.
There is no locking between handles or processes: keep one handle open per
campaign at a time.
"""

from __future__ import annotations

from pathlib import Path
from types import TracebackType

from ...core.logging import get_logger
from .database import CampaignDatabase, storage_errors
from .errors import (
    CampaignExistsError,
    CampaignIOError,
    CampaignNotFoundError,
)
from .importer import ImportResult
from .importer import import_systems as _import_systems
from .models import Empire, Fleet, GroundType, GroundUnit, Ship, ShipType, System
from .paths import available_campaigns, campaign_path
from .schema import provision

logger = get_logger(__name__)


class Campaign:
    """
    An open campaign: its name, turn counter and database connection.

    Build one with Campaign.create() or Campaign.open(), never directly.
    """

    def __init__(self, name: str, data: CampaignDatabase, turn: int) -> None:
        self._name = name
        self._data = data
        self._turn = turn

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @classmethod
    async def create(cls, name: str, data_dir: Path | str | None = None) -> Campaign:
        """
        Create a new campaign and provision its database.

        Raises:
            CampaignExistsError: A campaign with the same file name exists
            CampaignStorageError: The database could not be created; no
                file is left behind
        """
        path = campaign_path(name, data_dir)
        if path.exists():
            raise CampaignExistsError(f"Campaign {name!r} already exists")

        data = CampaignDatabase(path)
        await data.connect(create=True)
        try:
            with storage_errors(f"create campaign {name!r}"):
                await provision(data.db)
        except Exception:
            await data.close()
            path.unlink(missing_ok=True)
            raise

        logger.info("Created campaign %r at %s", name, path)
        return cls(name, data, turn=0)

    @classmethod
    async def open(cls, name: str, data_dir: Path | str | None = None) -> Campaign:
        """
        Open an existing campaign.

        Raises:
            CampaignNotFoundError: No campaign with that name
            CampaignParseError: The stored turn is not an integer
        """
        path = campaign_path(name, data_dir)
        if not path.is_file():
            raise CampaignNotFoundError(f"Campaign {name!r} does not exist")

        data = CampaignDatabase(path)
        await data.connect()
        try:
            turn = await data.current_turn()
        except Exception:
            await data.close()
            raise

        logger.info("Opened campaign %r at turn %d", name, turn)
        return cls(name, data, turn)

    async def close(self) -> None:
        """Release the database connection. Later operations raise CampaignClosedError."""
        if self._data.is_open:
            await self._data.close()
            logger.info("Closed campaign %r", self._name)

    @staticmethod
    def delete(name: str, data_dir: Path | str | None = None) -> None:
        """
        Delete a campaign's storage file.

        Close any open handle on the campaign first; the file is removed
        regardless of open connections.

        Raises:
            CampaignNotFoundError: No campaign with that name
            CampaignIOError: The file could not be removed
        """
        path = campaign_path(name, data_dir)
        if not path.is_file():
            raise CampaignNotFoundError(f"Campaign {name!r} does not exist")
        try:
            path.unlink()
        except OSError as e:
            raise CampaignIOError(f"Cannot delete campaign {name!r}: {e}") from e
        logger.info("Deleted campaign %r", name)

    @staticmethod
    def campaigns(data_dir: Path | str | None = None) -> list[str]:
        """Names of the available campaigns. Empty if the folder is unreadable."""
        return available_campaigns(data_dir)

    async def __aenter__(self) -> Campaign:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    # -------------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def turn(self) -> int:
        """Turn number read when the campaign was created or opened."""
        return self._turn

    @property
    def title(self) -> str:
        """Campaign title including turn number."""
        return f"{self._name} Turn {self._turn}"

    @property
    def is_open(self) -> bool:
        return self._data.is_open

    @property
    def data(self) -> CampaignDatabase:
        return self._data

    async def current_turn(self) -> int:
        """Re-read the turn number from storage."""
        return await self._data.current_turn()

    # -------------------------------------------------------------------------
    # Systems
    # -------------------------------------------------------------------------

    async def systems(self) -> list[System]:
        """All systems with owner names resolved."""
        return await self._data.get_systems()

    async def system(self, name: str) -> System | None:
        return await self._data.get_system_by_name(name)

    async def update_system(self, system: System) -> None:
        """Update the given system, which must have a valid id."""
        await self._data.update_system(system)

    async def delete_system(self, system: System) -> None:
        await self._data.delete_system(system)

    async def import_systems(self, path: Path | str) -> ImportResult:
        """Import systems from the given CSV file."""
        return await _import_systems(self._data, path)

    # -------------------------------------------------------------------------
    # Empires and units
    # -------------------------------------------------------------------------

    async def empires(self) -> list[Empire]:
        return await self._data.get_empires()

    async def add_empire(self, name: str) -> int:
        return await self._data.add_empire(name)

    async def ground_types(self) -> list[GroundType]:
        return await self._data.get_ground_types()

    async def ground_units(self) -> list[GroundUnit]:
        return await self._data.get_ground_units()

    async def ship_types(self) -> list[ShipType]:
        return await self._data.get_ship_types()

    async def ships(self) -> list[Ship]:
        return await self._data.get_ships()

    async def fleets(self) -> list[Fleet]:
        return await self._data.get_fleets()
