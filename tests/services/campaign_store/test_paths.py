"""Tests for campaign storage naming."""

from __future__ import annotations

from pathlib import Path

import pytest

from vbam_cma.services.campaign_store.errors import CampaignError, CampaignIOError
from vbam_cma.services.campaign_store.paths import (
    available_campaigns,
    campaign_file_name,
    campaign_name,
    campaign_path,
    campaigns_folder,
)


class TestCampaignFileName:
    """Tests for campaign_file_name()."""

    def test_spaces_become_underscores(self) -> None:
        assert campaign_file_name("Senor Rebellion") == "Senor_Rebellion.db"

    def test_space_and_underscore_collide(self) -> None:
        assert campaign_file_name("Al pha") == campaign_file_name("Al_pha")

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_name_rejected(self, name: str) -> None:
        with pytest.raises(CampaignError):
            campaign_file_name(name)

    @pytest.mark.parametrize("name", ["../escape", "a/b", "a\\b", ".."])
    def test_path_separators_rejected(self, name: str) -> None:
        with pytest.raises(CampaignError):
            campaign_file_name(name)

    def test_name_recovered_from_path(self) -> None:
        assert campaign_name(Path("/x/Senor_Rebellion.db")) == "Senor Rebellion"


class TestCampaignsFolder:
    """Tests for campaigns_folder()."""

    def test_creates_missing_folder(self, tmp_path: Path) -> None:
        folder = tmp_path / "a" / "b"

        assert campaigns_folder(folder) == folder
        assert folder.is_dir()

    def test_uses_configured_folder(self, data_dir: Path) -> None:
        assert campaigns_folder() == data_dir
        assert data_dir.is_dir()

    def test_folder_is_a_file(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        with pytest.raises(CampaignIOError):
            campaigns_folder(blocker / "campaigns")

    def test_campaign_path(self, data_dir: Path) -> None:
        assert campaign_path("Senor Rebellion") == data_dir / "Senor_Rebellion.db"


class TestAvailableCampaigns:
    """Tests for available_campaigns()."""

    def test_lists_db_files_only(self, tmp_path: Path) -> None:
        (tmp_path / "Senor_Rebellion.db").write_text("")
        (tmp_path / "Alpha.db").write_text("")
        (tmp_path / "notes.txt").write_text("")
        (tmp_path / "Folder.db").mkdir()

        assert available_campaigns(tmp_path) == ["Alpha", "Senor Rebellion"]

    def test_empty_folder(self, tmp_path: Path) -> None:
        assert available_campaigns(tmp_path / "new") == []

    def test_unreadable_folder_yields_empty_list(self, tmp_path: Path) -> None:
        """Listing failures are logged, not raised."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        assert available_campaigns(blocker / "campaigns") == []
