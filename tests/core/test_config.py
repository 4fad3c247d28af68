"""
Tests for centralized configuration module.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from unittest import mock

import pytest

from vbam_cma.core.config import (
    APP_DIR_NAME,
    VbamSettings,
    get_settings,
    reset_settings,
)


@pytest.fixture(autouse=True)
def clean_settings():
    """Reset settings cache before and after each test."""
    reset_settings()
    yield
    reset_settings()


class TestVbamSettings:
    """Test VbamSettings class."""

    def test_default_values(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            settings = VbamSettings()

            assert settings.log_level == "WARNING"
            assert settings.debug is False
            assert settings.log_json is False
            assert settings.data_dir is None

    def test_log_level_case_insensitive(self):
        with mock.patch.dict(os.environ, {"VBAM_LOG_LEVEL": "debug"}, clear=True):
            settings = VbamSettings()
            assert settings.log_level == "DEBUG"
            assert settings.log_level_int == logging.DEBUG

    def test_invalid_log_level(self):
        with mock.patch.dict(os.environ, {"VBAM_LOG_LEVEL": "LOUD"}, clear=True):
            with pytest.raises(ValueError):
                VbamSettings()

    def test_debug_legacy_flag(self):
        with mock.patch.dict(os.environ, {"VBAM_DEBUG": "1"}, clear=True):
            settings = VbamSettings()
            assert settings.effective_log_level == "DEBUG"

    def test_debug_does_not_override_explicit_level(self):
        env = {"VBAM_LOG_LEVEL": "ERROR", "VBAM_DEBUG": "1"}
        with mock.patch.dict(os.environ, env, clear=True):
            settings = VbamSettings()
            assert settings.effective_log_level == "ERROR"

    def test_data_dir_override(self, tmp_path: Path):
        with mock.patch.dict(os.environ, {"VBAM_DATA_DIR": str(tmp_path)}, clear=True):
            settings = VbamSettings()
            assert settings.campaigns_dir == tmp_path

    def test_default_campaigns_dir_under_user_data(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            settings = VbamSettings()
            assert settings.campaigns_dir.name == APP_DIR_NAME


class TestSingleton:
    """Test get_settings caching."""

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_reset_reloads_environment(self):
        with mock.patch.dict(os.environ, {"VBAM_LOG_JSON": "1"}):
            reset_settings()
            assert get_settings().log_json is True

        reset_settings()
        with mock.patch.dict(os.environ, {"VBAM_LOG_LEVEL": "DEBUG"}):
            reset_settings()
            assert get_settings().effective_log_level == "DEBUG"
