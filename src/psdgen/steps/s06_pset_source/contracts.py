"""I/O contracts for Step 06: pset definition source."""

from pathlib import Path

from pydantic import BaseModel, Field


class PsetSourceInput(BaseModel):
    psets_file: Path = Field(..., description="Path to psets.json from s02")


class PsetSourceOutput(BaseModel):
    source_file: Path = Field(..., description="Generated initializer source")
    num_psets: int = Field(0, description="Init methods written")
    num_entries: int = Field(0, description="Property entries written across all versions")
