"""I/O contracts for Step 02: PSD parsing."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class PsdParseInput(BaseModel):
    psd_root: Optional[Path] = Field(None, description="Override of config.psd_root")


class PsdParseOutput(BaseModel):
    psets_file: Path = Field(..., description="Path to psets.json (pset name -> versioned definitions)")
    versions: list[str] = Field(default_factory=list, description="Schema releases found")
    num_files: int = Field(0, description="PSD files read successfully")
    num_failed: int = Field(0, description="PSD files skipped because they could not be read")
    num_psets: int = Field(0, description="Versioned definitions in the catalog")
    name_dump: Optional[Path] = Field(None, description="Text list of pset names")
