"""I/O contracts for Step 01: entity schema graph."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class EntitySchemaInput(BaseModel):
    schema_dir: Optional[Path] = Field(None, description="Override of config.schema_dir")


class EntitySchemaOutput(BaseModel):
    schema_file: Path = Field(..., description="Path to entity_schemas.json (all versions)")
    versions: list[str] = Field(default_factory=list, description="Schema versions loaded")
    num_entities: int = Field(0, description="Entities across all versions")
    tree_dumps: list[Path] = Field(default_factory=list, description="Per-version tree dump files")
    entity_enum_files: list[Path] = Field(default_factory=list, description="Generated entity enum sources")
