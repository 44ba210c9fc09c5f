"""Step 03: classify properties and merge them into shared-parameter tables.

Seeds both tables from earlier output first, so GUIDs assigned in a
previous run survive a regeneration from scratch.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import ClassVar, Optional

from psdgen.core.context import CompilationContext
from psdgen.core.step_base import BaseStep
from psdgen.utils.io import read_catalog
from ._merger import merge_catalog
from ._param_file import read_shared_parameter_file, write_shared_parameter_file
from .config import SharedParametersConfig
from .contracts import SharedParametersInput, SharedParametersOutput

logger = logging.getLogger(__name__)


class SharedParametersStep(BaseStep[SharedParametersInput, SharedParametersOutput, SharedParametersConfig]):
    name: ClassVar[str] = "shared_parameters"
    input_type: ClassVar = SharedParametersInput
    output_type: ClassVar = SharedParametersOutput
    config_type: ClassVar = SharedParametersConfig

    @property
    def output_dir(self) -> Path:
        return self.data_root / "processed" / "shared_parameters"

    def validate_inputs(self, inputs: SharedParametersInput) -> bool:
        if not inputs.psets_file.exists():
            logger.error(f"psets.json not found: {inputs.psets_file}")
            return False
        for seed in (self.config.existing_instance_file, self.config.existing_type_file):
            if seed and not self.resolve(Path(seed)).exists():
                logger.error(f"Seed file not found: {seed}")
                return False
        return True

    def _seed_path(self, configured: Optional[str], file_name: str) -> Optional[Path]:
        if configured:
            return self.resolve(Path(configured))
        previous = self.output_dir / file_name
        if self.config.seed_from_previous_output and previous.exists():
            return previous
        return None

    def seed(self, ctx: CompilationContext) -> int:
        seeded = 0
        instance_seed = self._seed_path(self.config.existing_instance_file, self.config.instance_file_name)
        if instance_seed is not None:
            seeded += read_shared_parameter_file(instance_seed, ctx.instance_params)
        type_seed = self._seed_path(self.config.existing_type_file, self.config.type_file_name)
        if type_seed is not None:
            seeded += read_shared_parameter_file(type_seed, ctx.type_params)
        return seeded

    def run(self, inputs: SharedParametersInput) -> SharedParametersOutput:
        ctx = CompilationContext(catalog=read_catalog(inputs.psets_file))
        seeded = self.seed(ctx)
        merged = merge_catalog(ctx, self.config.qualified_names, self.config.group_id)

        instance_file = write_shared_parameter_file(
            self.output_dir / self.config.instance_file_name,
            ctx.instance_params,
            self.config.group_id,
            self.config.group_name,
        )
        type_file = write_shared_parameter_file(
            self.output_dir / self.config.type_file_name,
            ctx.type_params,
            self.config.group_id,
            self.config.group_name,
        )
        logger.info(
            f"Merged {merged} properties: {len(ctx.instance_params)} instance, "
            f"{len(ctx.type_params)} type parameters ({seeded} seeded)"
        )

        return SharedParametersOutput(
            instance_file=instance_file,
            type_file=type_file,
            num_instance=len(ctx.instance_params),
            num_type=len(ctx.type_params),
            num_seeded=seeded,
            num_merged=merged,
        )
