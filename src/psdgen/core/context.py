"""Per-run compilation state threaded through every compiler stage."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Callable

from psdgen.core.models import PsetCatalog, SharedParameterDef
from psdgen.utils.entity_tree import SchemaRegistry


@dataclass
class CompilationContext:
    """Holds everything one compile run reads and mutates.

    Nothing here outlives the run except what a step writes to disk; the
    shared-parameter tables are the only part that may be seeded from a
    previous run's output.
    """

    schemas: SchemaRegistry = field(default_factory=SchemaRegistry)
    catalog: PsetCatalog = field(default_factory=PsetCatalog)

    # Shared-parameter tables keyed by parameter name
    instance_params: dict[str, SharedParameterDef] = field(default_factory=dict)
    type_params: dict[str, SharedParameterDef] = field(default_factory=dict)

    # "<version>.<enum name>" keys already written, with their item values
    emitted_enums: dict[str, list[str]] = field(default_factory=dict)

    new_guid: Callable[[], uuid.UUID] = uuid.uuid4
