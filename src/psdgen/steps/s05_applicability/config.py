"""Configuration for Step 05: applicability resolution."""

from pydantic import BaseModel, Field


class ApplicabilityConfig(BaseModel):
    output_name: str = Field("pset_applicability.json", description="JSON dump file name")
    include_unattached: bool = Field(
        True, description="List concrete entities that no pset applies to"
    )
