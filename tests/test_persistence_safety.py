"""Tests for project persistence (backups, atomic writes, corruption handling)."""

from pathlib import Path

import pytest

from midiforge.exceptions import ConfigFileInvalidError, ConfigValidationError
from midiforge.models import ControllerProject
from midiforge.utils import PydanticPersistence


class TestPersistenceSafety:
    """Test safety features of PydanticPersistence."""

    @pytest.mark.integration
    def test_save_and_load_project(self, tmp_path: Path, full_project):
        path = tmp_path / "deck.json"
        PydanticPersistence.save_json(full_project, path)
        assert PydanticPersistence.load_json(path, ControllerProject) == full_project

    @pytest.mark.integration
    def test_save_creates_backup(self, tmp_path: Path):
        """save_json keeps the previous file as .bak."""
        path = tmp_path / "deck.json"
        PydanticPersistence.save_json(ControllerProject.starter("Old"), path)
        PydanticPersistence.save_json(ControllerProject.starter("New"), path)

        backup = PydanticPersistence.load_json(path.with_suffix(".json.bak"), ControllerProject)
        current = PydanticPersistence.load_json(path, ControllerProject)
        assert backup.config.controller_name == "Old"
        assert current.config.controller_name == "New"

    @pytest.mark.integration
    def test_no_temp_file_left(self, tmp_path: Path):
        path = tmp_path / "deck.json"
        PydanticPersistence.save_json(ControllerProject(), path, backup=False)
        assert sorted(p.name for p in tmp_path.iterdir()) == ["deck.json"]

    @pytest.mark.integration
    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            PydanticPersistence.load_json(tmp_path / "nope.json", ControllerProject)

    @pytest.mark.integration
    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "deck.json"
        path.write_text("   ")
        with pytest.raises(ConfigFileInvalidError) as exc_info:
            PydanticPersistence.load_json(path, ControllerProject)
        assert exc_info.value.user_message == "Configuration file is empty"

    @pytest.mark.integration
    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "deck.json"
        path.write_text('{"ir_mappings": [}')
        with pytest.raises(ConfigFileInvalidError):
            PydanticPersistence.load_json(path, ControllerProject)

    @pytest.mark.integration
    def test_invalid_value_names_field(self, tmp_path: Path):
        path = tmp_path / "deck.json"
        path.write_text('{"buttons": [{"channel": 42}]}')
        with pytest.raises(ConfigValidationError) as exc_info:
            PydanticPersistence.load_json(path, ControllerProject)
        assert exc_info.value.field == "buttons.0.channel"
        assert "MIDI channels are numbered 1-16" in exc_info.value.recovery_hint

    @pytest.mark.integration
    def test_load_or_default_does_not_hide_errors(self, tmp_path: Path):
        path = tmp_path / "deck.json"
        path.write_text("{not json")
        with pytest.raises(ConfigFileInvalidError):
            PydanticPersistence.load_or_default(path, ControllerProject)
