"""
VBAM Campaign Moderator's Assistant - campaign persistence

Stores the state of a VBAM campaign (star systems, empires, fleets, ground
and space units) in one SQLite database per named campaign.

Usage as library:
    from vbam_cma import Campaign

    campaign = await Campaign.create("Senor Rebellion")
    await campaign.import_systems("systems.csv")
    print(campaign.title)            # "Senor Rebellion Turn 0"
    await campaign.close()

Usage as CLI:
    python -m vbam_cma campaigns
    python -m vbam_cma import-systems "Senor Rebellion" systems.csv

Package structure:
    vbam_cma/
    ├── core/                     # Configuration and logging
    ├── services/campaign_store/  # Campaign persistence layer
    └── commands/                 # CLI command implementations
"""

__version__ = "0.1.0"

from .services.campaign_store import (
    Campaign,
    CampaignError,
    Empire,
    ImportResult,
    System,
)

__all__ = [
    "__version__",
    "Campaign",
    "CampaignError",
    "Empire",
    "ImportResult",
    "System",
]
