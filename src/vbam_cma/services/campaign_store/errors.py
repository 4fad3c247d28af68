"""
Campaign Store Errors.

Every failure leaving the store is a CampaignError. Lower-level OSError,
sqlite3.Error and ValueError are chained as __cause__. The message is meant
to be shown to the user as-is.
"""

from __future__ import annotations

from typing import Any


class CampaignError(Exception):
    """Base exception for the campaign persistence layer."""

    kind = "campaign_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert error to JSON-serializable dict."""
        return {"error": self.kind, "message": self.message}


class CampaignExistsError(CampaignError):
    """A campaign with the same storage name already exists."""

    kind = "already_exists"


class CampaignNotFoundError(CampaignError):
    """No campaign storage exists for the requested name."""

    kind = "not_found"


class CampaignParseError(CampaignError):
    """A stored or imported value could not be parsed."""

    kind = "parse_error"


class CampaignIOError(CampaignError):
    """Filesystem failure (directory creation, file removal, unreadable input)."""

    kind = "io_error"


class CampaignStorageError(CampaignError):
    """SQLite failure: connection, statement or constraint."""

    kind = "storage_error"


class CampaignClosedError(CampaignError):
    """The campaign handle was used after close()."""

    kind = "closed"


class SystemNotFoundError(CampaignStorageError):
    """An update or delete referenced a system id with no row."""

    kind = "system_not_found"

    def __init__(self, system_id: int) -> None:
        super().__init__(f"No system with id {system_id}")
        self.system_id = system_id
