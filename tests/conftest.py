"""
Pytest configuration for P-touch encoder tests.

Provides bitmap fixtures and an isolated config directory.
"""

import pytest
from PIL import Image


@pytest.fixture
def make_bitmap():
    """Build an RGB bitmap filled with one colour."""

    def _make(width: int, height: int, color=(255, 255, 255)) -> Image.Image:
        return Image.new("RGB", (width, height), color=color)

    return _make


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep saved defaults out of the real home directory."""
    config_dir = tmp_path / ".config" / "ptouchprinter"
    monkeypatch.setattr("ptouchprinter.config.CONFIG_DIR", config_dir)
    monkeypatch.setattr("ptouchprinter.config.DEFAULTS_FILE", config_dir / "defaults")
    return config_dir
