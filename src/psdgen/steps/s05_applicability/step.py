"""Step 05: resolve pset applicability per entity and dump it as JSON.

The dump is informational, for tooling that lists which psets an entity
can carry. It is a list with one object per schema version.
"""

from __future__ import annotations

import logging
from typing import ClassVar

from psdgen.core.context import CompilationContext
from psdgen.core.step_base import BaseStep
from psdgen.utils.io import read_catalog, read_schema_registry, write_json
from ._resolver import VersionApplicability, build_version_applicability
from .config import ApplicabilityConfig
from .contracts import ApplicabilityInput, ApplicabilityOutput

logger = logging.getLogger(__name__)


class ApplicabilityStep(BaseStep[ApplicabilityInput, ApplicabilityOutput, ApplicabilityConfig]):
    name: ClassVar[str] = "applicability"
    input_type: ClassVar = ApplicabilityInput
    output_type: ClassVar = ApplicabilityOutput
    config_type: ClassVar = ApplicabilityConfig

    def validate_inputs(self, inputs: ApplicabilityInput) -> bool:
        for path in (inputs.schema_file, inputs.psets_file):
            if not path.exists():
                logger.error(f"Input not found: {path}")
                return False
        return True

    def resolve_all(self, ctx: CompilationContext) -> list[VersionApplicability]:
        results = []
        for schema in ctx.schemas:
            psets = ctx.catalog.for_version(schema.version)
            if not psets:
                logger.warning(f"{schema.version}: no property set definitions for this version")
            result = build_version_applicability(schema, psets)
            if not self.config.include_unattached:
                result.entities = [e for e in result.entities if e.psets]
            attached = sum(1 for e in result.entities if e.psets)
            logger.info(
                f"{schema.version}: {len(psets)} psets, {attached}/{len(result.entities)} entities with psets"
            )
            results.append(result)
        return results

    def run(self, inputs: ApplicabilityInput) -> ApplicabilityOutput:
        ctx = CompilationContext(
            schemas=read_schema_registry(inputs.schema_file),
            catalog=read_catalog(inputs.psets_file),
        )
        results = self.resolve_all(ctx)

        out_path = self.data_root / "processed" / self.config.output_name
        write_json(out_path, [r.model_dump() for r in results])

        return ApplicabilityOutput(
            applicability_file=out_path,
            versions=[r.version for r in results],
            num_entities=sum(len(r.entities) for r in results),
        )
