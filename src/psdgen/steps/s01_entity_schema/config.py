"""Configuration for Step 01: entity schema graph."""

from typing import Literal

from pydantic import BaseModel, Field


class EntitySchemaConfig(BaseModel):
    source: Literal["xsd", "ifcopenshell"] = Field(
        "xsd", description="Read ifcXML XSD files or ifcopenshell's bundled schemas"
    )
    schema_dir: str = Field("raw/schemas", description="Folder of <VERSION>.xsd files (relative to data_root)")
    versions: list[str] = Field(
        default_factory=list,
        description="Versions to load; empty = every XSD in schema_dir (ifcopenshell: required)",
    )
    write_tree_dump: bool = Field(True, description="Write an indented entity tree per version")
    write_entity_enum: bool = Field(False, description="Generate an entity-name enumeration per version")
    entity_enum_language: Literal["csharp", "python"] = Field("csharp", description="Entity enum output language")
    entity_enum_root: str = Field("IfcProduct", description="Only entities in this branch go into the enum")
    exclude_deprecated: bool = Field(True, description="Leave deprecated entities out of the entity enum")
