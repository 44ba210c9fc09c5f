"""Configuration for Step 04: enumeration emission."""

from typing import Literal

from pydantic import BaseModel, Field


class EnumEmitConfig(BaseModel):
    language: Literal["csharp", "python"] = Field("csharp", description="Generated source language")
    file_stem: str = Field("PropertySet", description="Files are named <stem><VERSION>Enum.<ext>")
    namespace: str = Field(
        "Revit.IFC.Export.Exporter.PropertySet", description="C# namespace prefix; the version is appended"
    )
