"""Tests for Step 06: pset definition source."""

from pathlib import Path

import pytest

from psdgen.core.models import (
    BoundedValue,
    ComplexProperty,
    EnumeratedValue,
    EnumItem,
    ListValue,
    NameAlias,
    Property,
    PropertySetDefinition,
    PsetCatalog,
    ReferenceValue,
    SingleValue,
    TableValue,
)
from psdgen.steps.s06_pset_source._entries import (
    build_entry,
    build_pset_inits,
    build_version_block,
    entry_class_for,
    language_type,
    render_pset_source,
    revit_type_name,
)
from psdgen.steps.s06_pset_source.config import PsetSourceConfig
from psdgen.steps.s06_pset_source.contracts import PsetSourceInput
from psdgen.steps.s06_pset_source.step import PsetSourceStep
from psdgen.utils.io import write_json


def _pset(name: str, *props: Property, version: str = "IFC4", release: str = "IFC4", classes=None):
    return PropertySetDefinition(
        name=name,
        ifc_version=version,
        schema_file_version=release,
        applicable_classes=classes if classes is not None else ["IfcWall"],
        properties=list(props),
    )


@pytest.fixture
def catalog() -> PsetCatalog:
    catalog = PsetCatalog()
    catalog.add(
        "IFC2X3",
        _pset(
            "Pset_WallCommon",
            Property(name="FireRating", property_type=SingleValue(data_type="IfcLabel")),
            version="IFC2X3",
            release="IFC2X3",
        ),
    )
    catalog.add(
        "IFC4_ADD2",
        _pset(
            "Pset_WallCommon",
            Property(
                name="FireRating",
                aliases=[NameAlias(lang="fr-FR", text='Résistance "au feu"')],
                property_type=SingleValue(data_type="IfcLabel"),
            ),
            Property(
                name="Status",
                property_type=EnumeratedValue(
                    name="PEnum_ElementStatus", items=[EnumItem(value="NEW"), EnumItem(value="EXISTING")]
                ),
            ),
            release="IFC4_ADD2",
        ),
    )
    catalog.add(
        "IFC4",
        _pset(
            "Qto_WallBaseQuantities",
            Property(name="Length", property_type=SingleValue(data_type="IfcLengthMeasure")),
        ),
    )
    return catalog


class TestTypeNames:
    def test_entry_class(self):
        assert entry_class_for("Pset_WallCommon") == ("PropertySetEntry", "PropertyType")
        assert entry_class_for("IfcDoorLiningProperties") == ("PreDefinedPropertySetEntry", "PropertyType")
        assert entry_class_for("Qto_WallBaseQuantities") == ("QuantityEntry", "QuantityType")

    @pytest.mark.parametrize(
        "data_type, expected",
        [
            ("IfcLengthMeasure", "Length"),
            ("IfcPositiveLengthMeasure", "PositiveLength"),
            ("IfcLabel", "Label"),
            ("IfcString", "Text"),
            ("IfcValue", "Label"),
            (None, "Label"),
        ],
    )
    def test_revit_type_name(self, data_type, expected):
        assert revit_type_name(data_type) == expected

    def test_language_type(self):
        assert language_type("en") == "English_USA"
        assert language_type("JA-jp") == "Japanese"
        assert language_type("zh-HK") == "Chinese_Simplified"
        assert language_type("pt-BR") == "Brazilian_Portuguese"
        assert language_type("sv") == "Unknown"


class TestEntries:
    def test_value_kinds(self):
        pset = _pset("Pset_Kinds")
        cases = {
            "Ref": ReferenceValue(ref_entity=" IfcMaterial "),
            "Seq": ListValue(data_type="IfcValue"),
            "Range": BoundedValue(data_type="IfcThermodynamicTemperatureMeasure"),
            "Curve": TableValue(defining_type="IfcTimeMeasure", defined_type=None),
        }
        entries = {
            name: build_entry(pset, Property(name=name, property_type=ptype), "IFC4")
            for name, ptype in cases.items()
        }
        assert (entries["Ref"].property_type, entries["Ref"].value_type) == ("IfcMaterial", "ReferenceValue")
        assert (entries["Seq"].property_type, entries["Seq"].value_type) == ("Label", "ListValue")
        assert entries["Range"].property_type == "ThermodynamicTemperature"
        assert entries["Range"].value_type == "BoundedValue"
        assert entries["Curve"].argument_type == "Time"
        assert entries["Curve"].property_type == "Label"

    def test_enum_type_uses_version_namespace(self):
        prop = Property(name="Status", property_type=EnumeratedValue(name="PEnum_Element-Status"))
        entry = build_entry(_pset("Pset_X"), prop, "IFC4_ADD2", enum_namespace="Revit.PS")
        assert entry.property_type == "Label"
        assert entry.value_type == "EnumeratedValue"
        assert entry.enum_type == "Revit.PS.IFC4_ADD2.PEnum_Element_Status"

    def test_untyped_property_inferred(self, caplog):
        with caplog.at_level("WARNING"):
            entry = build_entry(_pset("Pset_X"), Property(name="ThermalTransmittance"), "IFC2X3")
        assert entry.property_type == "Real"
        assert entry.value_type is None
        assert "Pset_X(IFC2X3).ThermalTransmittance: no property type" in caplog.text

    def test_complex_members_flattened(self):
        panel = Property(
            name="Panel",
            property_type=ComplexProperty(
                name="CP_Panel",
                members=[Property(name="Width", property_type=SingleValue(data_type="IfcLengthMeasure"))],
            ),
        )
        block = build_version_block(_pset("Pset_DoorCommon", panel), "IFC4")
        [entry] = block.entries
        assert entry.param_name == "Pset_DoorCommon.Panel.Width"
        assert entry.property_name == "Panel.Width"
        assert entry.calculator == "WidthCalculator"

    def test_missing_class_defaults_to_proxy(self):
        block = build_version_block(_pset("Pset_X", classes=["IfcWall", ""]), "IFC4")
        assert block.entity_types == ["IfcWall", "IfcBuildingElementProxy"]

    def test_unknown_version_skipped(self, caplog):
        with caplog.at_level("ERROR"):
            block = build_version_block(_pset("Pset_X", version="IFC5", release="IFC5"), "IFC5")
        assert block is None
        assert "unrecognized schema version IFC5" in caplog.text

    def test_inits_per_name(self, catalog):
        inits = build_pset_inits(catalog)
        assert [i.name for i in inits] == ["Pset_WallCommon", "Qto_WallBaseQuantities"]
        wall = inits[0]
        assert wall.var_name == "propertySetWallCommon"
        assert wall.allow_check == "AllowPsetToBeCreated"
        assert [b.export_flag for b in wall.blocks] == ["ExportAs2x3", "ExportAs4_ADD2"]

    def test_pset_without_exportable_version_dropped(self, caplog):
        catalog = PsetCatalog()
        catalog.add("IFC5", _pset("Pset_Future", version="IFC5", release="IFC5"))
        with caplog.at_level("WARNING"):
            assert build_pset_inits(catalog) == []
        assert "Pset_Future: no exportable version" in caplog.text


class TestRender:
    def test_source(self, catalog):
        source = render_pset_source(
            build_pset_inits(catalog, enum_namespace="Revit.IFC.Export.Exporter.PropertySet"),
            namespace="Revit.IFC.Export.Exporter",
            calculator_namespace="Calc",
        )
        assert "namespace Revit.IFC.Export.Exporter\n" in source
        assert "         InitPset_WallCommon(commonPropertySets);\n" in source
        assert "ExportOptionsCache.ExportAs4_ADD2 && certifiedEntityAndPsetList.AllowPsetToBeCreated(" in source
        assert "propertySetWallCommon.EntityTypes.Add(IFCEntityType.IfcWall);" in source
        assert 'ifcPSE = new PropertySetEntry("Pset_WallCommon.FireRating", "FireRating");' in source
        assert 'AddLocalizedParameterName(LanguageType.French, "Résistance \\"au feu\\"");' in source
        assert (
            "ifcPSE.PropertyEnumerationType = typeof(Revit.IFC.Export.Exporter.PropertySet.IFC4_ADD2.PEnum_ElementStatus);"
            in source
        )
        assert 'GetType("Calc.FireRatingCalculator")' in source
        assert "ifcPSE.QuantityType = QuantityType.Length;" in source
        assert 'propertySetWallCommon.Name = "Pset_WallCommon";' in source
        assert source.count("{") == source.count("}")

    def test_without_calculator_hook(self, catalog):
        source = render_pset_source(build_pset_inits(catalog), namespace="N")
        assert "GetExecutingAssembly" not in source
        assert source.count(".AddEntry(ifcPSE);") == 4


class TestPsetSourceStep:
    def test_run(self, data_root: Path, catalog):
        psets_file = write_json(data_root / "interim" / "psets.json", catalog)
        step = PsetSourceStep(config=PsetSourceConfig(), data_root=data_root)
        output = step.execute(PsetSourceInput(psets_file=psets_file))

        assert output.source_file == data_root / "processed" / "ExporterInitializer_PsetDef.cs"
        assert output.num_psets == 2
        assert output.num_entries == 4
        assert "Revit.IFC.Export.Exporter.PropertySet.Calculators.StatusCalculator" in output.source_file.read_text()

    def test_missing_input(self, data_root: Path):
        step = PsetSourceStep(config=PsetSourceConfig(), data_root=data_root)
        with pytest.raises(ValueError):
            step.execute(PsetSourceInput(psets_file=data_root / "interim" / "missing.json"))
