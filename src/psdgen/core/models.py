"""Domain models of the schema compiler.

Property-value shapes are a closed union discriminated on ``kind``. Code
that consumes a :data:`PropertyType` handles every variant explicitly and
raises ``TypeError`` for anything else, so a new variant cannot silently
fall through a classification or emission path.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field


# ── Property types ───────────────────────────────────────────────────


class NameAlias(BaseModel):
    """Localized display name (``lang`` is e.g. ``en-GB`` or ``ja-JP``)."""

    lang: str
    text: str


class EnumItem(BaseModel):
    value: str
    aliases: list[NameAlias] = Field(default_factory=list)


class SingleValue(BaseModel):
    kind: Literal["single_value"] = "single_value"
    data_type: str


class EnumeratedValue(BaseModel):
    kind: Literal["enumerated_value"] = "enumerated_value"
    name: str
    items: list[EnumItem] = Field(default_factory=list)


class ReferenceValue(BaseModel):
    kind: Literal["reference_value"] = "reference_value"
    ref_entity: str


class ListValue(BaseModel):
    kind: Literal["list_value"] = "list_value"
    data_type: str


class BoundedValue(BaseModel):
    kind: Literal["bounded_value"] = "bounded_value"
    data_type: str


class TableValue(BaseModel):
    kind: Literal["table_value"] = "table_value"
    defining_type: Optional[str] = None
    defined_type: Optional[str] = None
    expression: Optional[str] = None


class ComplexProperty(BaseModel):
    """Named group of member properties. Members are never complex themselves."""

    kind: Literal["complex_property"] = "complex_property"
    name: str
    members: list[Property] = Field(default_factory=list)


PropertyType = Annotated[
    Union[
        SingleValue,
        EnumeratedValue,
        ReferenceValue,
        ListValue,
        BoundedValue,
        TableValue,
        ComplexProperty,
    ],
    Field(discriminator="kind"),
]


class Property(BaseModel):
    name: str
    ifd_guid: Optional[str] = Field(None, description="External identifier (32 hex digits or UUID)")
    aliases: list[NameAlias] = Field(default_factory=list)
    property_type: Optional[PropertyType] = Field(
        None, description="None when the PSD carried no usable type data"
    )


ComplexProperty.model_rebuild()


# ── Property set definitions ─────────────────────────────────────────


class PropertySetDefinition(BaseModel):
    name: str
    ifc_version: str = Field(..., description="Normalized version tag, e.g. IFC2X3 or IFC4_ADD2")
    schema_file_version: str = Field(..., description="Folder/schema release the PSD was read for")
    applicable_classes: list[str] = Field(default_factory=list)
    applicable_type_value: Optional[str] = None
    predefined_type: Optional[str] = None
    ifd_guid: Optional[str] = None
    properties: list[Property] = Field(default_factory=list)


class VersionedPropertySetDefinition(BaseModel):
    schema_file_version: str
    definition: PropertySetDefinition


class PsetCatalog(BaseModel):
    """Multimap of pset name to every version-specific definition, sorted by name."""

    definitions: dict[str, list[VersionedPropertySetDefinition]] = Field(default_factory=dict)

    def add(self, schema_file_version: str, pset: PropertySetDefinition) -> None:
        entry = VersionedPropertySetDefinition(schema_file_version=schema_file_version, definition=pset)
        self.definitions.setdefault(pset.name, []).append(entry)
        self.definitions = dict(sorted(self.definitions.items()))

    def iter_definitions(self):
        """Yield every (schema_file_version, definition) in name order."""
        for name in sorted(self.definitions):
            for versioned in self.definitions[name]:
                yield versioned.schema_file_version, versioned.definition

    def for_version(self, schema_file_version: str) -> list[PropertySetDefinition]:
        wanted = schema_file_version.upper()
        return [
            pset
            for version, pset in self.iter_definitions()
            if version.upper() == wanted
        ]

    def __len__(self) -> int:
        return sum(len(v) for v in self.definitions.values())


# ── Shared parameters ────────────────────────────────────────────────


class ParamType(str, Enum):
    TEXT = "TEXT"
    MULTILINETEXT = "MULTILINETEXT"
    INTEGER = "INTEGER"
    LENGTH = "LENGTH"
    AREA = "AREA"
    VOLUME = "VOLUME"
    ANGLE = "ANGLE"
    CURRENCY = "CURRENCY"
    MASS_DENSITY = "MASS_DENSITY"
    URL = "URL"
    YESNO = "YESNO"
    NUMBER = "NUMBER"


class SharedParameterDef(BaseModel):
    name: str
    guid: Optional[str] = Field(None, description="Lower-case hyphenated UUID, assigned when merged")
    param_type: ParamType
    description: str = ""
    data_category: str = ""
    group_id: int = 2
    visible: bool = True
    user_modifiable: bool = True
    owning_pset: Optional[str] = Field(None, description="Pset the definition was produced from")


# ── Entity schema ────────────────────────────────────────────────────


class EntityRecord(BaseModel):
    name: str
    parent: Optional[str] = None
    is_abstract: bool = False
    predefined_type_enum: Optional[str] = None


class EntitySchemaDocument(BaseModel):
    """Serialized inheritance graph of one schema version."""

    version: str
    entities: list[EntityRecord] = Field(default_factory=list)
    predefined_type_enums: dict[str, list[str]] = Field(default_factory=dict)


class EntitySchemaBundle(BaseModel):
    schemas: list[EntitySchemaDocument] = Field(default_factory=list)
