"""I/O utilities: JSON artifacts exchanged between compiler steps."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from psdgen.core.models import EntitySchemaBundle, PsetCatalog
from psdgen.utils.entity_tree import EntitySchema, SchemaRegistry


# ── Generic JSON ─────────────────────────────────────────────────────

def write_json(path: Path, data: Any) -> Path:
    """Write plain data or a Pydantic model as indented UTF-8 JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(data, BaseModel):
        text = data.model_dump_json(indent=2, exclude_none=True)
    else:
        text = json.dumps(data, indent=2, ensure_ascii=False)
    path.write_text(text + "\n", encoding="utf-8")
    return path


# ── Step artifacts ───────────────────────────────────────────────────

def read_catalog(path: Path) -> PsetCatalog:
    """Load psets.json written by the PSD parse step."""
    return PsetCatalog.model_validate_json(Path(path).read_text(encoding="utf-8"))


def read_schema_registry(path: Path) -> SchemaRegistry:
    """Load entity_schemas.json written by the entity schema step."""
    bundle = EntitySchemaBundle.model_validate_json(Path(path).read_text(encoding="utf-8"))
    registry = SchemaRegistry()
    for doc in bundle.schemas:
        registry.register(EntitySchema.from_document(doc))
    return registry


def write_schema_registry(path: Path, registry: SchemaRegistry) -> Path:
    bundle = EntitySchemaBundle(schemas=[schema.to_document() for schema in registry])
    return write_json(path, bundle)
