"""
Editor context tests.

Full import -> edit -> export flow over a real directory.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from vehicle_manager.app_shell.config import RULES_PATH_ENV
from vehicle_manager.app_shell.context import EditorContext
from vehicle_manager.components.codec import decode_vehicles
from vehicle_manager.rules.models import Rules


@pytest.fixture
def ctx(tmp_path: Path, rules: Rules, sample_lua: str) -> EditorContext:
    (tmp_path / "upload.lua").write_text(sample_lua, encoding="utf-8")
    return EditorContext.create(str(tmp_path), rules)


class TestEditorFlow:
    """Import, edit, export."""

    def test_import_loads_catalog(self, ctx: EditorContext) -> None:
        """A successful import replaces the collection."""
        result = ctx.import_file("upload.lua")

        assert result.success is True
        assert [v.model for v in ctx.catalog.get_all()] == ["adder", "zentorno", "panto"]
        assert ctx.state.error == ""

    def test_failed_import_keeps_catalog(self, ctx: EditorContext, tmp_path: Path) -> None:
        """A bad file sets the error and leaves the collection alone."""
        ctx.import_file("upload.lua")
        (tmp_path / "empty.lua").write_text("   ", encoding="utf-8")

        result = ctx.import_file("empty.lua")

        assert result.success is False
        assert ctx.state.error == "File is empty"
        assert len(ctx.catalog.get_all()) == 3

    def test_edit_and_export(self, ctx: EditorContext, tmp_path: Path) -> None:
        """Edits show up in the exported file."""
        ctx.import_file("upload.lua")
        ctx.catalog.add_blank()
        ctx.catalog.update(0, "model", "t20")
        ctx.catalog.update(0, "price", "2200000")
        ctx.catalog.remove(3)

        result = ctx.export_file()

        assert result.success is True
        written = (tmp_path / "vehicles.lua").read_text(encoding="utf-8")
        assert written == result.text
        models = [v.model for v in decode_vehicles(written).vehicles]
        assert models == ["t20", "adder", "zentorno"]

    def test_export_empty_sets_error(self, ctx: EditorContext) -> None:
        """Nothing to export is reported through the state."""
        result = ctx.export_file()

        assert result.success is False
        assert ctx.state.error == "No vehicles to download"

    def test_paths_outside_root(self, ctx: EditorContext, tmp_path: Path) -> None:
        """Paths escaping the file root set the error instead of raising."""
        (tmp_path.parent / "outside.lua").write_text("x", encoding="utf-8")
        ctx.import_file("upload.lua")

        imported = ctx.import_file("../outside.lua")
        assert imported.success is False
        assert imported.errors[0].code == "invalid_path"
        assert "traversal" in ctx.state.error
        assert len(ctx.catalog.get_all()) == 3

        exported = ctx.export_file("../outside.lua")
        assert exported.success is False
        assert exported.errors[0].code == "invalid_path"
        assert (tmp_path.parent / "outside.lua").read_text(encoding="utf-8") == "x"

    def test_visible_rows(self, ctx: EditorContext) -> None:
        """Search and sort come from the session state."""
        ctx.import_file("upload.lua")
        ctx.state.search_query = "pdm"
        ctx.state.sort_by = "category"

        rows = ctx.visible_rows()

        assert [r.vehicle.model for r in rows] == ["panto", "adder", "zentorno"]

    def test_visible_rows_invalid_sort(self, ctx: EditorContext) -> None:
        """An unknown sort option is surfaced as an error."""
        ctx.state.sort_by = "price"
        assert ctx.visible_rows() == []
        assert "price" in ctx.state.error


class TestFromEnv:
    """Context creation from the environment."""

    def test_from_env(
        self,
        tmp_path: Path,
        project_root: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv(RULES_PATH_ENV, str(project_root / "rules.yaml"))

        ctx = EditorContext.from_env(str(tmp_path))

        assert ctx.rules.files.export_filename == "vehicles.lua"
        assert ctx.catalog.get_all() == []
