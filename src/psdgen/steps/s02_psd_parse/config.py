"""Configuration for Step 02: PSD parsing."""

from pydantic import BaseModel, Field


class PsdParseConfig(BaseModel):
    psd_root: str = Field(
        "raw", description="Root searched for 'psd' folders; a folder's parent names its schema release"
    )
    versions: list[str] = Field(default_factory=list, description="Releases to read; empty = all found")
    include_quantity_sets: bool = Field(True, description="Also read Qto_*.xml quantity set definitions")
    include_predefined_psets: bool = Field(
        True, description="Add door/window lining and panel property sets per release"
    )
    write_name_dump: bool = Field(True, description="Write a text list of all pset names per release")
