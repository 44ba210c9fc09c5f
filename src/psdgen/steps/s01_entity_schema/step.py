"""Step 01: build the entity inheritance graph of every schema version.

Reads ``<VERSION>.xsd`` ifcXML schemas (or ifcopenshell's bundled schemas)
into one :class:`EntitySchema` per version and writes them as
``entity_schemas.json`` for the applicability resolver.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import ClassVar

from psdgen.core.step_base import BaseStep
from psdgen.utils.codegen import FILE_SUFFIX, build_enum_block, render_enum_source
from psdgen.utils.entity_tree import EntitySchema, SchemaRegistry
from psdgen.utils.io import write_schema_registry
from ._deprecated import deprecated_entities
from ._xsd_reader import read_xsd_schema
from .config import EntitySchemaConfig
from .contracts import EntitySchemaInput, EntitySchemaOutput

logger = logging.getLogger(__name__)


class EntitySchemaStep(BaseStep[EntitySchemaInput, EntitySchemaOutput, EntitySchemaConfig]):
    name: ClassVar[str] = "entity_schema"
    input_type: ClassVar = EntitySchemaInput
    output_type: ClassVar = EntitySchemaOutput
    config_type: ClassVar = EntitySchemaConfig

    def _schema_dir(self, inputs: EntitySchemaInput) -> Path:
        return self.resolve(inputs.schema_dir or Path(self.config.schema_dir))

    def _xsd_files(self, schema_dir: Path) -> list[Path]:
        files = sorted(schema_dir.glob("*.xsd"), key=lambda p: p.name.upper())
        if self.config.versions:
            wanted = {v.upper() for v in self.config.versions}
            files = [f for f in files if f.stem.upper() in wanted]
        return files

    def validate_inputs(self, inputs: EntitySchemaInput) -> bool:
        if self.config.source == "ifcopenshell":
            if not self.config.versions:
                logger.error("ifcopenshell source needs an explicit list of versions")
                return False
            return True

        schema_dir = self._schema_dir(inputs)
        if not schema_dir.is_dir():
            logger.error(f"Schema folder not found: {schema_dir}")
            return False
        if not self._xsd_files(schema_dir):
            logger.error(f"No matching .xsd files in {schema_dir}")
            return False
        return True

    def load_schemas(self, inputs: EntitySchemaInput) -> SchemaRegistry:
        registry = SchemaRegistry()
        if self.config.source == "ifcopenshell":
            from ._ifcopenshell_reader import read_ifcopenshell_schema

            for version in self.config.versions:
                registry.register(read_ifcopenshell_schema(version))
            return registry

        for xsd in self._xsd_files(self._schema_dir(inputs)):
            registry.register(read_xsd_schema(xsd))
        return registry

    def _write_entity_enum(self, schema: EntitySchema, out_dir: Path) -> Path:
        excluded = deprecated_entities(schema.version) if self.config.exclude_deprecated else frozenset()
        names = [
            name
            for name in schema.get_branch(self.config.entity_enum_root)
            if not schema.find(name).is_abstract and name not in excluded
        ]
        language = self.config.entity_enum_language
        block = build_enum_block("IFCEntityType", sorted(names), language)
        source = render_enum_source(language, schema.version, [block], title="entity types")
        path = out_dir / f"{schema.version}EntityType{FILE_SUFFIX[language]}"
        path.write_text(source, encoding="utf-8")
        logger.info(f"Entity enum for {schema.version}: {len(block.members)} entities -> {path.name}")
        return path

    def run(self, inputs: EntitySchemaInput) -> EntitySchemaOutput:
        registry = self.load_schemas(inputs)
        output_dir = self.data_root / "interim" / "s01_entity_schema"
        output_dir.mkdir(parents=True, exist_ok=True)

        tree_dumps: list[Path] = []
        enum_files: list[Path] = []
        num_entities = 0
        for schema in registry:
            num_entities += len(schema)
            if self.config.write_tree_dump:
                dump = output_dir / f"{schema.version}_tree.txt"
                dump.write_text(schema.dump_tree(), encoding="utf-8")
                tree_dumps.append(dump)
            if self.config.write_entity_enum:
                processed = self.data_root / "processed"
                processed.mkdir(parents=True, exist_ok=True)
                enum_files.append(self._write_entity_enum(schema, processed))

        schema_file = write_schema_registry(output_dir / "entity_schemas.json", registry)
        logger.info(f"Loaded {len(registry.versions())} schema versions, {num_entities} entities")

        return EntitySchemaOutput(
            schema_file=schema_file,
            versions=registry.versions(),
            num_entities=num_entities,
            tree_dumps=tree_dumps,
            entity_enum_files=enum_files,
        )
