"""psdgen core: pipeline runner, base step, shared contracts.

Domain models live in ``psdgen.core.models`` and the per-run state in
``psdgen.core.context``; import them from there.
"""

from .step_base import BaseStep
from .contracts import PipelineConfig, StepEntry
from .pipeline_runner import run_pipeline, load_pipeline_config
from .logging import setup_logging

__all__ = [
    "BaseStep",
    "PipelineConfig",
    "StepEntry",
    "run_pipeline",
    "load_pipeline_config",
    "setup_logging",
]
