"""Resolve which property sets apply to which concrete entities.

1. Each pset applies to its applicable classes.
2. An Instance entity and its Type entity (``IfcWall``/``IfcWallType``)
   share applicability in both directions.
3. A concrete entity below ``IfcProduct``, ``IfcTypeProduct`` or ``IfcGroup``
   also inherits the psets of its supertypes, up to and including that root.
"""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import BaseModel, Field

from psdgen.core.models import ComplexProperty, PropertySetDefinition
from psdgen.utils.entity_tree import EntitySchema

logger = logging.getLogger(__name__)

STOP_ROOTS = ("IfcProduct", "IfcTypeProduct", "IfcGroup")
TYPE_SUFFIX = "Type"


class EntityApplicability(BaseModel):
    name: str
    predefined_types: list[str] = Field(default_factory=list)
    psets: list[str] = Field(default_factory=list)
    predefined_type_psets: dict[str, list[str]] = Field(
        default_factory=dict, description="Psets restricted to one predefined type value"
    )


class PsetSummary(BaseModel):
    name: str
    applicable_classes: list[str] = Field(default_factory=list)
    predefined_type: Optional[str] = None
    properties: list[str] = Field(default_factory=list, description="<PsetName>.<PropertyName> names")


class VersionApplicability(BaseModel):
    version: str
    entities: list[EntityApplicability] = Field(default_factory=list)
    property_sets: list[PsetSummary] = Field(default_factory=list)


def paired_entity(schema: EntitySchema, name: str) -> Optional[str]:
    """The Type entity of an Instance entity or vice versa, if the schema has it."""
    if name.endswith(TYPE_SUFFIX):
        candidate = name[: -len(TYPE_SUFFIX)]
    else:
        candidate = name + TYPE_SUFFIX
    node = schema.find(candidate)
    return node.name if node is not None else None


def direct_applicability(schema: EntitySchema, psets: list[PropertySetDefinition]) -> dict[str, set[str]]:
    """Entity name -> pset names from applicable classes and their Instance/Type pairs."""
    result: dict[str, set[str]] = {}
    for pset in psets:
        for class_name in pset.applicable_classes:
            node = schema.find(class_name)
            if node is None:
                logger.debug(f"{pset.name}: applicable class {class_name} not in {schema.version}")
                result.setdefault(class_name, set()).add(pset.name)
                continue
            result.setdefault(node.name, set()).add(pset.name)
            pair = paired_entity(schema, node.name)
            if pair is not None:
                result.setdefault(pair, set()).add(pset.name)
    return result


def resolve_applicability(schema: EntitySchema, psets: list[PropertySetDefinition]) -> dict[str, set[str]]:
    """Concrete entity name -> every pset name that applies to it."""
    direct = direct_applicability(schema, psets)
    resolved: dict[str, set[str]] = {}
    for root in STOP_ROOTS:
        for name in schema.get_branch(root):
            if schema.find(name).is_abstract or name in resolved:
                continue
            names = set(direct.get(name, ()))
            for supertype in schema.find_all_super_types(name, *STOP_ROOTS):
                names |= direct.get(supertype, set())
            resolved[name] = names
    return resolved


def qualified_property_names(pset: PropertySetDefinition) -> list[str]:
    names = []
    for prop in pset.properties:
        if isinstance(prop.property_type, ComplexProperty):
            names += [f"{pset.name}.{prop.name}.{m.name}" for m in prop.property_type.members]
        else:
            names.append(f"{pset.name}.{prop.name}")
    return names


def build_version_applicability(schema: EntitySchema, psets: list[PropertySetDefinition]) -> VersionApplicability:
    resolved = resolve_applicability(schema, psets)
    restricted: dict[str, str] = {
        pset.name: pset.predefined_type.upper() for pset in psets if pset.predefined_type
    }

    entities = []
    for name in sorted(resolved):
        pset_names = sorted(resolved[name])
        by_value: dict[str, list[str]] = {}
        for pset_name in pset_names:
            value = restricted.get(pset_name)
            if value is not None:
                by_value.setdefault(value, []).append(pset_name)
        entities.append(
            EntityApplicability(
                name=name,
                predefined_types=schema.predefined_types(name),
                psets=pset_names,
                predefined_type_psets=by_value,
            )
        )

    summaries = [
        PsetSummary(
            name=pset.name,
            applicable_classes=pset.applicable_classes,
            predefined_type=pset.predefined_type,
            properties=qualified_property_names(pset),
        )
        for pset in psets
    ]
    return VersionApplicability(version=schema.version, entities=entities, property_sets=summaries)
