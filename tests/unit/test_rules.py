"""
Rules loading and validation tests.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pytest
import yaml

from vehicle_manager.adapters.rules_port import RulesPortAdapter
from vehicle_manager.app_shell.config import (
    RULES_PATH_ENV,
    configure_logging,
    rules_path_from_env,
)
from vehicle_manager.rules.loader import load_rules
from vehicle_manager.rules.models import Rules


def write_rules(tmp_path: Path, rules: dict[str, Any]) -> Path:
    path = tmp_path / "rules.yaml"
    with open(path, "w") as f:
        yaml.dump(rules, f)
    return path


@pytest.fixture
def rules_dict(project_root: Path) -> dict[str, Any]:
    with open(project_root / "rules.yaml") as f:
        return yaml.safe_load(f)


class TestRulesLoading:
    """Test rules file loading."""

    def test_load_actual_rules_file(self, rules: Rules) -> None:
        """Project rules.yaml loads and validates."""
        assert rules.project.slug == "qb-vehicle-manager"
        assert rules.files.allowed_extensions == [".lua"]
        assert rules.files.export_filename == "vehicles.lua"
        assert rules.codec.table_name == "Vehicles"
        assert rules.codec.warn_on_unsafe_strings is True
        assert rules.catalog.sort_options == ["none", "category"]

    def test_load_nonexistent_file_raises(self) -> None:
        """Loading nonexistent file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_rules(Path("/nonexistent/path/rules.yaml"))

    def test_load_invalid_yaml_raises(self, tmp_path: Path) -> None:
        """Broken YAML is reported as ValueError."""
        path = tmp_path / "rules.yaml"
        path.write_text("invalid: yaml: content: [")

        with pytest.raises(ValueError, match="Invalid YAML"):
            load_rules(path)


class TestRulesSchemaValidation:
    """Test schema validation."""

    def test_missing_section_fails(self, tmp_path: Path, rules_dict: dict[str, Any]) -> None:
        """Every section is required."""
        del rules_dict["files"]
        with pytest.raises(ValueError, match="Rules validation failed"):
            load_rules(write_rules(tmp_path, rules_dict))

    def test_extension_without_dot_fails(self, tmp_path: Path, rules_dict: dict[str, Any]) -> None:
        """Extensions must start with a dot."""
        rules_dict["files"]["allowed_extensions"] = ["lua"]
        with pytest.raises(ValueError, match="must start with"):
            load_rules(write_rules(tmp_path, rules_dict))

    def test_extensions_lowercased(self, tmp_path: Path, rules_dict: dict[str, Any]) -> None:
        """Extensions are normalized to lower case."""
        rules_dict["files"]["allowed_extensions"] = [".LUA"]
        assert load_rules(write_rules(tmp_path, rules_dict)).files.allowed_extensions == [".lua"]

    def test_non_positive_size_limit_fails(self, tmp_path: Path, rules_dict: dict[str, Any]) -> None:
        """Size limit must be positive."""
        rules_dict["files"]["max_input_bytes"] = 0
        with pytest.raises(ValueError):
            load_rules(write_rules(tmp_path, rules_dict))

    def test_unknown_search_field_fails(self, tmp_path: Path, rules_dict: dict[str, Any]) -> None:
        """Search fields must be vehicle fields."""
        rules_dict["catalog"]["search_fields"] = ["hash"]
        with pytest.raises(ValueError):
            load_rules(write_rules(tmp_path, rules_dict))

    def test_table_name_must_be_identifier(self, tmp_path: Path, rules_dict: dict[str, Any]) -> None:
        """The table name must be a Lua identifier."""
        rules_dict["codec"]["table_name"] = "my vehicles"
        with pytest.raises(ValueError, match="Rules validation failed"):
            load_rules(write_rules(tmp_path, rules_dict))

    def test_table_name_defaults(self, tmp_path: Path, rules_dict: dict[str, Any]) -> None:
        """Omitting the table name falls back to Vehicles."""
        del rules_dict["codec"]["table_name"]
        assert load_rules(write_rules(tmp_path, rules_dict)).codec.table_name == "Vehicles"

    def test_unknown_sort_option_fails(self, tmp_path: Path, rules_dict: dict[str, Any]) -> None:
        """Sort options must be known options."""
        rules_dict["catalog"]["sort_options"] = ["price"]
        with pytest.raises(ValueError):
            load_rules(write_rules(tmp_path, rules_dict))

    def test_unknown_log_level_fails(self, tmp_path: Path, rules_dict: dict[str, Any]) -> None:
        """Log level must be a standard level name."""
        rules_dict["logging"]["level"] = "LOUD"
        with pytest.raises(ValueError):
            load_rules(write_rules(tmp_path, rules_dict))


class TestRulesAdapter:
    """Test the rules port adapter."""

    def test_exposes_file_rules(self, rules: Rules) -> None:
        adapter = RulesPortAdapter(rules)
        assert adapter.allowed_extensions() == [".lua"]
        assert adapter.export_filename() == "vehicles.lua"
        assert adapter.encoding() == "utf-8"
        assert adapter.max_input_bytes() == 5242880
        assert adapter.warn_on_unsafe_strings() is True
        assert adapter.table_name() == "Vehicles"


class TestConfig:
    """Test environment and logging config."""

    def test_rules_path_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(RULES_PATH_ENV, raising=False)
        assert rules_path_from_env() == Path("rules.yaml")

    def test_rules_path_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(RULES_PATH_ENV, "/etc/vehicles/rules.yaml")
        assert rules_path_from_env() == Path("/etc/vehicles/rules.yaml")

    def test_configure_logging(self, rules: Rules, monkeypatch: pytest.MonkeyPatch) -> None:
        """basicConfig receives the configured level and format."""
        calls: list[dict[str, Any]] = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))

        configure_logging(rules)

        assert calls == [{"level": logging.INFO, "format": rules.logging.format}]
