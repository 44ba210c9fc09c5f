"""I/O contracts for Step 05: applicability resolution."""

from pathlib import Path

from pydantic import BaseModel, Field


class ApplicabilityInput(BaseModel):
    schema_file: Path = Field(..., description="Path to entity_schemas.json from s01")
    psets_file: Path = Field(..., description="Path to psets.json from s02")


class ApplicabilityOutput(BaseModel):
    applicability_file: Path = Field(..., description="JSON dump: per version, entities and psets")
    versions: list[str] = Field(default_factory=list, description="Versions resolved")
    num_entities: int = Field(0, description="Entities listed across versions")
