"""IFC entity inheritance forest with sub/supertype queries.

Entity names are matched case-insensitively, the way ifcXML and PSD files
spell the same entity with varying case. Queries about entities that are
not in the schema answer "no information" (``False``, ``None`` or an empty
list) rather than raising.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional

from psdgen.core.models import EntityRecord, EntitySchemaDocument

logger = logging.getLogger(__name__)

XSD_ROOT_ENTITY = "Entity"


@dataclass(eq=False)
class SchemaEntityNode:
    name: str
    is_abstract: bool = False
    predefined_type_enum: Optional[str] = None
    parent: Optional["SchemaEntityNode"] = field(default=None, repr=False)
    children: list["SchemaEntityNode"] = field(default_factory=list, repr=False)

    def set_parent(self, parent: Optional["SchemaEntityNode"]) -> None:
        if self.parent is parent:
            return
        if self.parent is not None:
            self.parent.children.remove(self)
        self.parent = parent
        if parent is not None:
            parent.children.append(self)

    def ancestors(self) -> Iterator["SchemaEntityNode"]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def descendants(self) -> Iterator["SchemaEntityNode"]:
        for child in self.children:
            yield child
            yield from child.descendants()


class EntitySchema:
    """Inheritance forest of one schema version."""

    def __init__(self, version: str):
        self.version = version
        self._nodes: dict[str, SchemaEntityNode] = {}
        self.predefined_type_enums: dict[str, list[str]] = {}

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, name: str) -> bool:
        return self.find(name) is not None

    def __iter__(self) -> Iterator[SchemaEntityNode]:
        return iter(sorted(self._nodes.values(), key=lambda n: n.name))

    def find(self, name: Optional[str]) -> Optional[SchemaEntityNode]:
        if not name:
            return None
        return self._nodes.get(name.casefold())

    @property
    def roots(self) -> list[SchemaEntityNode]:
        return sorted((n for n in self._nodes.values() if n.parent is None), key=lambda n: n.name)

    # ── Construction ─────────────────────────────────────────────────

    def add(
        self,
        name: str,
        parent_name: Optional[str] = None,
        predefined_type_enum: Optional[str] = None,
        is_abstract: bool = False,
    ) -> Optional[SchemaEntityNode]:
        """Add or complete an entity definition.

        A parent that has not been defined yet is created as a placeholder
        root and completed when its own definition arrives.
        """
        if not name.startswith("Ifc"):
            logger.debug(f"Ignoring non-IFC entity name '{name}'")
            return None

        parent: Optional[SchemaEntityNode] = None
        if parent_name and parent_name != XSD_ROOT_ENTITY:
            if not parent_name.startswith("Ifc"):
                logger.debug(f"Ignoring non-IFC parent '{parent_name}' of {name}")
            else:
                parent = self.find(parent_name) or self._create(parent_name)

        node = self.find(name)
        if node is None:
            node = self._create(name)
        node.is_abstract = is_abstract
        if predefined_type_enum:
            node.predefined_type_enum = predefined_type_enum

        if parent is not None:
            if parent is node or any(a is node for a in parent.ancestors()):
                logger.error(f"Refusing {name} -> {parent_name}: inheritance cycle")
            else:
                node.set_parent(parent)
        return node

    def _create(self, name: str) -> SchemaEntityNode:
        node = SchemaEntityNode(name=name)
        self._nodes[name.casefold()] = node
        return node

    # ── Queries ──────────────────────────────────────────────────────

    def is_subtype_of(self, entity: str, supertype: str, strict: bool = True) -> bool:
        """True if ``entity`` inherits from ``supertype`` (or equals it when not strict)."""
        node = self.find(entity)
        target = self.find(supertype)
        if node is None or target is None:
            return False
        if node is target:
            return not strict
        return any(a is target for a in node.ancestors())

    def is_supertype_of(self, entity: str, subtype: str, strict: bool = True) -> bool:
        """True if ``subtype`` is somewhere below ``entity`` (or equals it when not strict)."""
        node = self.find(entity)
        target = self.find(subtype)
        if node is None or target is None:
            return False
        if node is target:
            return not strict
        return any(d is target for d in node.descendants())

    def find_all_super_types(self, entity: str, *stop_at: str) -> list[str]:
        """Ancestors of ``entity`` nearest first, ending at the first stop ancestor.

        The stop ancestor itself is included. An entity that is itself one of
        the stop names has no relevant supertypes.
        """
        node = self.find(entity)
        if node is None:
            return []
        stops = {s.casefold() for s in stop_at}
        if node.name.casefold() in stops:
            return []

        result = []
        for ancestor in node.ancestors():
            result.append(ancestor.name)
            if ancestor.name.casefold() in stops:
                break
        return result

    def get_branch(self, name: str) -> list[str]:
        """The entity and all its descendants, depth first."""
        node = self.find(name)
        if node is None:
            return []
        return [node.name] + [d.name for d in node.descendants()]

    def predefined_types(self, name: str) -> list[str]:
        """Upper-cased predefined-type values of an entity, if it has any."""
        node = self.find(name)
        if node is None:
            return []
        enums = {k.casefold(): v for k, v in self.predefined_type_enums.items()}
        for enum_name in (node.predefined_type_enum, f"{node.name}Enum", f"{node.name}TypeEnum"):
            if enum_name and enum_name.casefold() in enums:
                return enums[enum_name.casefold()]
        return []

    def dump_tree(self, root: Optional[str] = None) -> str:
        """Indented text dump of the forest, or of one branch."""
        lines: list[str] = []

        def _walk(node: SchemaEntityNode, depth: int) -> None:
            marker = " (ABS)" if node.is_abstract else ""
            lines.append("\t" * depth + node.name + marker)
            for child in sorted(node.children, key=lambda n: n.name):
                _walk(child, depth + 1)

        if root is not None:
            node = self.find(root)
            if node is not None:
                _walk(node, 0)
        else:
            for node in self.roots:
                _walk(node, 0)
        return "\n".join(lines) + ("\n" if lines else "")

    # ── Serialization ────────────────────────────────────────────────

    def to_document(self) -> EntitySchemaDocument:
        return EntitySchemaDocument(
            version=self.version,
            entities=[
                EntityRecord(
                    name=node.name,
                    parent=node.parent.name if node.parent else None,
                    is_abstract=node.is_abstract,
                    predefined_type_enum=node.predefined_type_enum,
                )
                for node in self
            ],
            predefined_type_enums=dict(sorted(self.predefined_type_enums.items())),
        )

    @classmethod
    def from_records(
        cls,
        version: str,
        records: Iterable[EntityRecord],
        predefined_type_enums: Optional[dict[str, list[str]]] = None,
    ) -> "EntitySchema":
        schema = cls(version)
        for rec in records:
            schema.add(rec.name, rec.parent, rec.predefined_type_enum, rec.is_abstract)
        schema.predefined_type_enums = dict(predefined_type_enums or {})
        return schema

    @classmethod
    def from_document(cls, doc: EntitySchemaDocument) -> "EntitySchema":
        return cls.from_records(doc.version, doc.entities, doc.predefined_type_enums)


class SchemaRegistry:
    """Per-version cache of loaded entity schemas.

    Owned by a :class:`~psdgen.core.context.CompilationContext`; one registry
    lives for one compile run.
    """

    def __init__(self):
        self._schemas: dict[str, EntitySchema] = {}

    def __contains__(self, version: str) -> bool:
        return version.upper() in self._schemas

    def __iter__(self) -> Iterator[EntitySchema]:
        return iter(self._schemas[k] for k in sorted(self._schemas))

    def register(self, schema: EntitySchema) -> EntitySchema:
        self._schemas[schema.version.upper()] = schema
        return schema

    def get(self, version: str) -> Optional[EntitySchema]:
        return self._schemas.get(version.upper())

    def versions(self) -> list[str]:
        return [self._schemas[k].version for k in sorted(self._schemas)]
