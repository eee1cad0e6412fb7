"""Tests for SetupService database bootstrap."""

from pathlib import Path

from gavel.config.settings import GavelSettings
from gavel.services.setup import SetupService


class TestInitStore:
    def test_creates_and_stamps(self, tmp_path: Path) -> None:
        settings = GavelSettings.from_cli(data_root=tmp_path, auth={"secret_key": "k"})
        result = SetupService.init_store(settings)
        assert result.ok
        assert result.data["created"] is True
        assert result.data["revision"] == "001_baseline"
        assert Path(result.data["db_path"]).exists()
        assert result.warnings == []

    def test_rerun_is_harmless(self, tmp_path: Path) -> None:
        settings = GavelSettings.from_cli(data_root=tmp_path, auth={"secret_key": "k"})
        SetupService.init_store(settings)
        again = SetupService.init_store(settings)
        assert again.ok
        assert again.data["created"] is False
        assert again.data["revision"] == "001_baseline"

    def test_warns_about_dev_secret(self, tmp_path: Path) -> None:
        result = SetupService.init_store(GavelSettings.from_cli(data_root=tmp_path))
        assert any("secret_key" in w for w in result.warnings)
