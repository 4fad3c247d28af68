"""
Campaign storage naming.

A campaign named "Senor Rebellion" is stored as Senor_Rebellion.db in the
campaigns folder. The mapping is lossy: "A B" and "A_B" share one file.
"""

from __future__ import annotations

from pathlib import Path

from ...core.config import get_settings
from ...core.logging import get_logger
from .errors import CampaignError, CampaignIOError

logger = get_logger(__name__)

DB_EXTENSION = ".db"


def campaigns_folder(data_dir: Path | str | None = None) -> Path:
    """
    Return the folder holding campaign databases, creating it if needed.

    Args:
        data_dir: Explicit folder. Defaults to the configured campaigns dir.

    Raises:
        CampaignIOError: The folder could not be created
    """
    folder = Path(data_dir) if data_dir is not None else get_settings().campaigns_dir
    try:
        folder.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise CampaignIOError(f"Cannot create campaign folder {folder}: {e}") from e
    return folder


def campaign_file_name(name: str) -> str:
    """Storage file name for a campaign: spaces become underscores."""
    if not name.strip():
        raise CampaignError("Campaign name must not be blank")
    if "/" in name or "\\" in name or name in (".", ".."):
        raise CampaignError(f"Campaign name {name!r} contains a path separator")
    return name.replace(" ", "_") + DB_EXTENSION


def campaign_name(path: Path) -> str:
    """Display name recovered from a storage file."""
    return path.stem.replace("_", " ")


def campaign_path(name: str, data_dir: Path | str | None = None) -> Path:
    """Full path of a campaign's storage file."""
    return campaigns_folder(data_dir) / campaign_file_name(name)


def available_campaigns(data_dir: Path | str | None = None) -> list[str]:
    """
    List campaign names found in the campaigns folder, sorted.

    A folder that cannot be created or read yields an empty list.
    """
    try:
        folder = campaigns_folder(data_dir)
        entries = list(folder.iterdir())
    except (CampaignIOError, OSError) as e:
        logger.warning("Cannot list campaigns: %s", e)
        return []

    return sorted(
        campaign_name(entry)
        for entry in entries
        if entry.suffix == DB_EXTENSION and entry.is_file()
    )
