"""I/O contracts for Step 04: enumeration emission."""

from pathlib import Path

from pydantic import BaseModel, Field


class EnumEmitInput(BaseModel):
    psets_file: Path = Field(..., description="Path to psets.json from s02")


class EnumEmitOutput(BaseModel):
    enum_files: list[Path] = Field(default_factory=list, description="One generated source per version")
    num_enums: int = Field(0, description="Enumerations written across all versions")
    num_duplicates: int = Field(0, description="Enumerations skipped as already emitted")
