"""End-to-end pipeline test over a small schema and PSD tree."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from psdgen.cli import app
from psdgen.core.pipeline_runner import run_pipeline

logger = logging.getLogger(__name__)

FIRE_RATING_IFD = "6d5e4bc0-d1d4-11e1-8000-00215ad4efdf"


def _param_rows(path: Path) -> dict[str, list[str]]:
    return {
        line.split("\t")[2]: line.split("\t")
        for line in path.read_text().splitlines()
        if line.startswith("PARAM\t")
    }


@pytest.mark.e2e
def test_pipeline_e2e(pipeline_config: Path, data_root: Path):
    """
    Run all six steps through the pipeline runner.

    Checks that each step's output feeds the next and that a second run
    reproduces every generated file byte for byte.
    """
    results = run_pipeline(pipeline_config)
    assert list(results) == ["entity_schema", "psd_parse", "shared_parameters", "enum_emit", "applicability", "pset_source"]

    # ========== Entity schema ==========
    assert results["entity_schema"].versions == ["IFC2X3", "IFC4"]

    # ========== PSD parse ==========
    parsed = results["psd_parse"]
    assert parsed.num_failed == 1
    assert parsed.psets_file.exists()

    # ========== Shared parameters ==========
    shared = results["shared_parameters"]
    instance = _param_rows(shared.instance_file)
    types = _param_rows(shared.type_file)
    assert instance["FireRating"][1] == FIRE_RATING_IFD
    assert instance["FireRating"][3] == "TEXT"
    assert types["FireRating[Type]"][1] != FIRE_RATING_IFD
    assert "LiningDepth" in instance
    logger.info(f"{shared.num_instance} instance parameters")

    # ========== Enums ==========
    enums = results["enum_emit"]
    assert [f.name for f in enums.enum_files] == ["PropertySetIFC4Enum.cs"]

    # ========== Applicability ==========
    assert results["applicability"].applicability_file.exists()

    # ========== Pset definition source ==========
    psets = results["pset_source"]
    assert psets.num_psets > 5
    source = psets.source_file.read_text()
    assert "InitPset_WallCommon(commonPropertySets);" in source
    assert "ExportAs2x3" in source and "ExportAs4" in source
    assert "new QuantityEntry(\"Qto_WallBaseQuantities.Length\", \"Length\")" in source
    assert "new PreDefinedPropertySetEntry(\"IfcDoorLiningProperties.LiningDepth\", \"LiningDepth\")" in source
    assert "AllowPredefPsetToBeCreated" in source

    # ========== Second run is identical ==========
    outputs = [
        shared.instance_file,
        shared.type_file,
        *enums.enum_files,
        psets.source_file,
        results["applicability"].applicability_file,
        parsed.psets_file,
    ]
    before = [p.read_text() for p in outputs]
    run_pipeline(pipeline_config)
    assert [p.read_text() for p in outputs] == before


@pytest.mark.e2e
def test_disabled_step_skipped(tmp_path: Path, data_root: Path, sample_xsd: Path):
    import yaml

    from tests.test_e2e.conftest import write_pipeline_config

    config = write_pipeline_config(tmp_path / "configs", data_root)
    raw = yaml.safe_load(config.read_text())
    for step in raw["steps"]:
        step["enabled"] = step["name"] == "entity_schema"
    config.write_text(yaml.dump(raw))

    results = run_pipeline(config)
    assert list(results) == ["entity_schema"]


class TestCli:
    def test_info(self, pipeline_config: Path):
        result = CliRunner().invoke(app, ["info", "--config", str(pipeline_config)])
        assert result.exit_code == 0
        assert "shared_parameters" in result.output

    def test_check(self, sample_xsd: Path):
        result = CliRunner().invoke(app, ["check", str(sample_xsd), "IfcWallStandardCase", "IfcProduct"])
        assert result.exit_code == 0
        assert "True" in result.output

    def test_check_unknown_entity(self, sample_xsd: Path):
        result = CliRunner().invoke(app, ["check", str(sample_xsd), "IfcBogus", "IfcProduct"])
        assert result.exit_code == 1

    def test_entities(self, sample_xsd: Path):
        result = CliRunner().invoke(app, ["entities", str(sample_xsd), "--root", "IfcWall"])
        assert result.exit_code == 0
        assert "IfcWallStandardCase" in result.output

    def test_run_step_requires_input(self, pipeline_config: Path):
        result = CliRunner().invoke(app, ["run-step", "enum_emit", "--config", str(pipeline_config)])
        assert result.exit_code == 1
        assert "psets_file" in result.output
