"""Step 04: emit enumerated property domains as generated source files."""

from __future__ import annotations

import logging
from typing import ClassVar

from psdgen.core.context import CompilationContext
from psdgen.core.step_base import BaseStep
from psdgen.utils.io import read_catalog
from ._enum_writer import collect_enums, write_enum_sources
from .config import EnumEmitConfig
from .contracts import EnumEmitInput, EnumEmitOutput

logger = logging.getLogger(__name__)


class EnumEmitStep(BaseStep[EnumEmitInput, EnumEmitOutput, EnumEmitConfig]):
    name: ClassVar[str] = "enum_emit"
    input_type: ClassVar = EnumEmitInput
    output_type: ClassVar = EnumEmitOutput
    config_type: ClassVar = EnumEmitConfig

    def validate_inputs(self, inputs: EnumEmitInput) -> bool:
        if not inputs.psets_file.exists():
            logger.error(f"psets.json not found: {inputs.psets_file}")
            return False
        return True

    def run(self, inputs: EnumEmitInput) -> EnumEmitOutput:
        ctx = CompilationContext(catalog=read_catalog(inputs.psets_file))
        per_version, duplicates = collect_enums(ctx)

        enum_files = write_enum_sources(
            per_version,
            self.data_root / "processed" / "enums",
            language=self.config.language,
            file_stem=self.config.file_stem,
            namespace=self.config.namespace,
        )
        num_enums = sum(len(v) for v in per_version.values())
        logger.info(f"Emitted {num_enums} enumerations, skipped {duplicates} duplicates")
        return EnumEmitOutput(enum_files=enum_files, num_enums=num_enums, num_duplicates=duplicates)
