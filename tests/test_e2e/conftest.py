"""Fixtures for E2E pipeline tests."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

STEPS = [
    ("entity_schema", "s01_entity_schema", []),
    ("psd_parse", "s02_psd_parse", []),
    ("shared_parameters", "s03_shared_parameters", ["psd_parse"]),
    ("enum_emit", "s04_enum_emit", ["psd_parse"]),
    ("applicability", "s05_applicability", ["entity_schema", "psd_parse"]),
    ("pset_source", "s06_pset_source", ["psd_parse"]),
]


def write_pipeline_config(
    config_dir: Path,
    data_root: Path,
    step_configs: dict[str, dict] | None = None,
) -> Path:
    """
    Write a pipeline.yaml with every compiler step plus per-step configs.

    Args:
        config_dir: Directory for pipeline.yaml and steps/*.yaml
        data_root: Absolute data root the steps read from and write to
        step_configs: Optional overrides keyed by step module suffix

    Returns:
        Path to the pipeline.yaml
    """
    step_configs = step_configs or {}
    (config_dir / "steps").mkdir(parents=True, exist_ok=True)

    steps = []
    for name, module, depends_on in STEPS:
        config_file = config_dir / "steps" / f"{module}.yaml"
        with open(config_file, "w") as f:
            yaml.dump(step_configs.get(module, {}), f)
        steps.append({
            "name": name,
            "module": f"psdgen.steps.{module}",
            "config_file": str(config_file),
            "depends_on": depends_on,
            "enabled": True,
        })

    pipeline_file = config_dir / "pipeline.yaml"
    with open(pipeline_file, "w") as f:
        yaml.dump({"project_name": "e2e", "data_root": str(data_root), "steps": steps}, f)
    return pipeline_file


@pytest.fixture
def pipeline_config(tmp_path: Path, data_root: Path, sample_xsd: Path, psd_tree: Path) -> Path:
    """pipeline.yaml over the shared sample schema and PSD tree."""
    return write_pipeline_config(tmp_path / "configs", data_root)
