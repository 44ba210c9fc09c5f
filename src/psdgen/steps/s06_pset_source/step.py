"""Step 06: render the property set definitions as initializer source."""

from __future__ import annotations

import logging
from typing import ClassVar

from psdgen.core.context import CompilationContext
from psdgen.core.step_base import BaseStep
from psdgen.utils.io import read_catalog
from ._entries import build_pset_inits, render_pset_source
from .config import PsetSourceConfig
from .contracts import PsetSourceInput, PsetSourceOutput

logger = logging.getLogger(__name__)


class PsetSourceStep(BaseStep[PsetSourceInput, PsetSourceOutput, PsetSourceConfig]):
    name: ClassVar[str] = "pset_source"
    input_type: ClassVar = PsetSourceInput
    output_type: ClassVar = PsetSourceOutput
    config_type: ClassVar = PsetSourceConfig

    def validate_inputs(self, inputs: PsetSourceInput) -> bool:
        if not inputs.psets_file.exists():
            logger.error(f"psets.json not found: {inputs.psets_file}")
            return False
        return True

    def run(self, inputs: PsetSourceInput) -> PsetSourceOutput:
        ctx = CompilationContext(catalog=read_catalog(inputs.psets_file))
        inits = build_pset_inits(ctx.catalog, enum_namespace=self.config.enum_namespace)

        source = render_pset_source(
            inits,
            namespace=self.config.namespace,
            calculator_namespace=self.config.calculator_namespace if self.config.calculator_hook else "",
        )
        out_path = self.data_root / "processed" / self.config.output_name
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(source, encoding="utf-8")

        num_entries = sum(len(block.entries) for init in inits for block in init.blocks)
        logger.info(f"Wrote {len(inits)} pset initializers with {num_entries} entries -> {out_path.name}")
        return PsetSourceOutput(source_file=out_path, num_psets=len(inits), num_entries=num_entries)
