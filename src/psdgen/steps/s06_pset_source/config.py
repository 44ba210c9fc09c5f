"""Configuration for Step 06: pset definition source."""

from pydantic import BaseModel, Field


class PsetSourceConfig(BaseModel):
    output_name: str = Field("ExporterInitializer_PsetDef.cs", description="Generated file name")
    namespace: str = Field("Revit.IFC.Export.Exporter", description="Namespace of the initializer class")
    enum_namespace: str = Field(
        "Revit.IFC.Export.Exporter.PropertySet",
        description="Namespace prefix of the enumerations written by enum_emit",
    )
    calculator_namespace: str = Field(
        "Revit.IFC.Export.Exporter.PropertySet.Calculators",
        description="Namespace searched for <Property>Calculator classes",
    )
    calculator_hook: bool = Field(True, description="Emit the calculator lookup after each entry")
