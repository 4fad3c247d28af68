"""
VBAM Test Suite - Shared Fixtures and Configuration
"""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """
    Point campaign storage at a temporary folder.

    Sets VBAM_DATA_DIR so code that relies on the configured folder
    (the CLI, Campaign without data_dir) stays inside tmp_path.
    """
    folder = tmp_path / "campaigns"
    monkeypatch.setenv("VBAM_DATA_DIR", str(folder))

    from vbam_cma.core.config import reset_settings

    reset_settings()
    return folder


@pytest.fixture(autouse=True)
def reset_all_singletons():
    """
    Reset module-level singletons between tests.

    Settings first, since logging reads its level from them.
    """

    def do_reset():
        from vbam_cma.core.config import reset_settings
        from vbam_cma.core.logging import reset_logging

        reset_settings()
        reset_logging()

    do_reset()
    yield
    do_reset()
