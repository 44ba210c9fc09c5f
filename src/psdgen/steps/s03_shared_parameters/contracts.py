"""I/O contracts for Step 03: shared parameters."""

from pathlib import Path

from pydantic import BaseModel, Field


class SharedParametersInput(BaseModel):
    psets_file: Path = Field(..., description="Path to psets.json from s02")


class SharedParametersOutput(BaseModel):
    instance_file: Path = Field(..., description="Instance shared-parameter file")
    type_file: Path = Field(..., description="Type shared-parameter file")
    num_instance: int = Field(0, description="Rows in the Instance file")
    num_type: int = Field(0, description="Rows in the Type file")
    num_seeded: int = Field(0, description="Rows seeded from earlier files")
    num_merged: int = Field(0, description="Properties merged in this run")
