"""Fixtures for campaign_store tests."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio

from vbam_cma.services.campaign_store import (
    Campaign,
    CampaignDatabase,
    System,
    provision,
)

SAMPLE_SYSTEMS = (
    ("Senor Prime", "HW", 5, 12, 10, 8, 10),
    ("Kili", "CL", 3, 6, 4, 5, 2),
    ("Loran's Star", "CL", 2, 4, 3, 4, 1),
    ("Jain", "UI", 1, 2, 0, 0, 0),
)

SAMPLE_EMPIRES = ("Senorian", "Human", "Kili", "Loran", "Jain", "Brindaki", "Graal", "Tirelon")


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test_campaign.db"


@pytest_asyncio.fixture
async def database(temp_db_path: Path) -> AsyncGenerator[CampaignDatabase, None]:
    """A provisioned campaign database outside the campaigns folder."""
    database = CampaignDatabase(temp_db_path)
    await database.connect(create=True)
    await provision(database.db)
    yield database
    await database.close()


@pytest_asyncio.fixture
async def campaign(data_dir: Path) -> AsyncGenerator[Campaign, None]:
    """A freshly created campaign in the temporary campaigns folder."""
    campaign = await Campaign.create("Senor Rebellion")
    yield campaign
    await campaign.close()


@pytest.fixture
def sample_systems() -> list[System]:
    """Unsaved systems as an import would build them."""
    return [
        System(name=name, ptype=ptype, raw=raw, cap=cap, pop=pop, mor=mor, ind=ind)
        for name, ptype, raw, cap, pop, mor, ind in SAMPLE_SYSTEMS
    ]


@pytest.fixture
def sample_empires() -> tuple[str, ...]:
    return SAMPLE_EMPIRES


@pytest.fixture
def systems_csv_text() -> str:
    """CSV text for the sample systems, with header."""
    lines = ["NAME,TYPE,RAW,CAP,POP,MOR,IND"]
    lines.extend(",".join(str(v) for v in row) for row in SAMPLE_SYSTEMS)
    return "\n".join(lines) + "\n"


@pytest.fixture
def systems_csv(tmp_path: Path, systems_csv_text: str) -> Path:
    """Sample systems CSV file on disk."""
    path = tmp_path / "systems.csv"
    path.write_text(systems_csv_text, encoding="utf-8")
    return path
