"""
Campaign Store - Persistent Storage for VBAM Campaigns.

One SQLite file per named campaign, accessed asynchronously through aiosqlite.

Key Components:
- Campaign: lifecycle (create/open/close/delete/list) and per-entity operations
- CampaignDatabase: typed reads and writes against one open connection
- provision: creates the campaign tables and seed rows
- import_systems: loads systems from a CSV file
- Records: System, Empire, Fleet, GroundType, GroundUnit, ShipType, Ship

Usage:
    from vbam_cma.services.campaign_store import Campaign

    campaign = await Campaign.create("Senor Rebellion")
    result = await campaign.import_systems("systems.csv")
    systems = await campaign.systems()
    await campaign.close()
"""

from .campaign import Campaign
from .database import CampaignDatabase
from .errors import (
    CampaignClosedError,
    CampaignError,
    CampaignExistsError,
    CampaignIOError,
    CampaignNotFoundError,
    CampaignParseError,
    CampaignStorageError,
    SystemNotFoundError,
)
from .importer import ImportResult, SkippedRow, import_systems, parse_systems_csv
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
from .schema import provision

__all__ = [
    # Store
    "Campaign",
    "CampaignDatabase",
    "provision",
    # Import
    "ImportResult",
    "SkippedRow",
    "import_systems",
    "parse_systems_csv",
    # Records
    "NO_OWNER",
    "System",
    "Empire",
    "Fleet",
    "GroundType",
    "GroundUnit",
    "ShipType",
    "Ship",
    # Errors
    "CampaignError",
    "CampaignExistsError",
    "CampaignNotFoundError",
    "CampaignParseError",
    "CampaignIOError",
    "CampaignStorageError",
    "CampaignClosedError",
    "SystemNotFoundError",
]
