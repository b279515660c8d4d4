from typing import Literal

from pydantic import BaseModel, Field, field_validator

from vehicle_manager.domain.entities import SortOption, VehicleField


class ProjectRules(BaseModel):
    slug: str
    rules_version: str

class CodecRules(BaseModel):
    table_name: str = Field(default="Vehicles", pattern=r"^[A-Za-z_][A-Za-z0-9_]*$")
    warn_on_unsafe_strings: bool = True

class FilesRules(BaseModel):
    allowed_extensions: list[str]
    export_filename: str
    encoding: str = "utf-8"
    max_input_bytes: int = Field(gt=0)

    @field_validator("allowed_extensions")
    @classmethod
    def _dotted_lowercase(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("at least one extension is required")
        for ext in v:
            if not ext.startswith("."):
                raise ValueError(f"extension must start with '.': {ext}")
        return [ext.lower() for ext in v]

class CatalogRules(BaseModel):
    search_fields: list[VehicleField]
    sort_options: list[SortOption]

class LoggingRules(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

class Rules(BaseModel):
    project: ProjectRules
    codec: CodecRules
    files: FilesRules
    catalog: CatalogRules
    logging: LoggingRules
