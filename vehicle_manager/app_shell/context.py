from __future__ import annotations

import logging
from dataclasses import dataclass, field

from vehicle_manager.adapters.fs.filestore import TextFileStore
from vehicle_manager.adapters.memory_store import InMemoryCatalogStore
from vehicle_manager.adapters.rules_port import RulesPortAdapter
from vehicle_manager.app_shell.config import configure_logging, rules_path_from_env
from vehicle_manager.components.catalog import CatalogRow, CatalogService
from vehicle_manager.components.vehicle_file import (
    ExportFileInput,
    ExportFileOutput,
    ImportFileInput,
    ImportFileOutput,
    run_export,
    run_import,
)
from vehicle_manager.rules.loader import load_rules
from vehicle_manager.rules.models import Rules

logger = logging.getLogger(__name__)


@dataclass
class EditorState:
    search_query: str = ""
    sort_by: str = "none"
    error: str = ""

    def clear_error(self) -> None:
        self.error = ""


@dataclass
class EditorContext:
    catalog: CatalogService
    file_store: TextFileStore
    rules: Rules
    rules_port: RulesPortAdapter
    state: EditorState = field(default_factory=EditorState)

    @classmethod
    def create(cls, fs_path: str, rules: Rules) -> EditorContext:
        # Adapters
        store = InMemoryCatalogStore()
        file_store = TextFileStore(fs_path)
        rules_port = RulesPortAdapter(rules)

        # Services
        catalog = CatalogService(
            store,
            search_fields=rules.catalog.search_fields,
            sort_options=rules.catalog.sort_options,
        )

        return cls(
            catalog=catalog,
            file_store=file_store,
            rules=rules,
            rules_port=rules_port,
        )

    @classmethod
    def from_env(cls, fs_path: str) -> EditorContext:
        rules = load_rules(rules_path_from_env())
        configure_logging(rules)
        return cls.create(fs_path, rules)

    def import_file(self, path: str) -> ImportFileOutput:
        """Import a file; on success it replaces the current collection."""
        self.state.clear_error()
        result = run_import(ImportFileInput(path=path), fs=self.file_store, rules=self.rules_port)
        if result.success:
            self.catalog.load(result.vehicles)
        else:
            self.state.error = "; ".join(e.message for e in result.errors)
        return result

    def export_file(self, filename: str | None = None) -> ExportFileOutput:
        self.state.clear_error()
        result = run_export(
            ExportFileInput(vehicles=self.catalog.get_all(), filename=filename),
            fs=self.file_store,
            rules=self.rules_port,
        )
        if not result.success:
            self.state.error = "; ".join(e.message for e in result.errors)
        return result

    def visible_rows(self) -> list[CatalogRow]:
        """Rows for the current search query and sort option."""
        rows, errors = self.catalog.view(self.state.search_query, self.state.sort_by)
        if errors:
            logger.warning("Invalid view settings: %s", errors[0].message)
            self.state.error = errors[0].message
        return rows
