"""
TextShelf Backend - Settings Tests
====================================

What:  Tests for the defaults and validation in app.config.Settings.
How:   Fresh Settings instances built with the .env file disabled, so only
       the defaults and the variables set here apply.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from app.config import BACKEND_DIR, Settings
from app.services.bootstrap import build_store


@pytest.fixture
def clean_settings(monkeypatch):
    """Factory for Settings that ignores .env and path overrides."""
    for name in ("RESOURCES_FILE", "INDEX_PAGE", "PORT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    def _build(**overrides):
        return Settings(_env_file=None, **overrides)

    return _build


class TestDefaultPaths:
    """Bundled data and page are found from any working directory."""

    def test_paths_point_into_backend_dir(self, clean_settings, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        fresh = clean_settings()

        assert Path(fresh.resources_file) == BACKEND_DIR / "data" / "resources.json"
        assert Path(fresh.resources_file).is_file()
        assert Path(fresh.index_page).is_file()

    @pytest.mark.asyncio
    async def test_bundled_file_loads_outside_backend_dir(self, clean_settings, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        store = await build_store(clean_settings().resources_file)

        assert len(store) == 6
        assert store.get("1").id == "1"

    def test_env_override_wins(self, clean_settings, monkeypatch, tmp_path):
        monkeypatch.setenv("RESOURCES_FILE", str(tmp_path / "seed.json"))
        assert clean_settings().resources_file == str(tmp_path / "seed.json")


class TestValidation:
    """Field constraints and the log level validator."""

    def test_defaults(self, clean_settings):
        fresh = clean_settings()
        assert fresh.port == 5000
        assert fresh.log_level == "INFO"

    def test_log_level_is_uppercased(self, clean_settings):
        assert clean_settings(log_level="debug").log_level == "DEBUG"

    @pytest.mark.parametrize("overrides", [{"log_level": "LOUD"}, {"port": 0}, {"port": 70000}])
    def test_invalid_values_rejected(self, clean_settings, overrides):
        with pytest.raises(ValidationError):
            clean_settings(**overrides)
