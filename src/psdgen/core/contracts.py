"""Pipeline-level Pydantic models shared across compiler steps."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class PipelineConfig(BaseModel):
    """Top-level pipeline configuration loaded from pipeline.yaml."""

    project_name: str = "psdgen_project"
    data_root: Path = Path("./data")
    steps: list[StepEntry] = Field(default_factory=list)


class StepEntry(BaseModel):
    """One entry in the pipeline step list.

    ``inputs`` holds explicit input values for the step; they are applied
    on top of whatever the steps in ``depends_on`` produced.
    """

    name: str
    module: str
    config_file: str
    depends_on: list[str] = Field(default_factory=list)
    enabled: bool = True
    inputs: dict[str, Any] = Field(default_factory=dict)


# Fix forward reference
PipelineConfig.model_rebuild()
