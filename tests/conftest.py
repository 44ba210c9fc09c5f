"""Shared pytest fixtures for psdgen tests: a small ifcXML schema and PSD tree."""

from pathlib import Path

import pytest

SAMPLE_XSD = """<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema"
           xmlns:ifc="http://www.buildingsmart-tech.org/ifcXML/IFC4/final"
           targetNamespace="http://www.buildingsmart-tech.org/ifcXML/IFC4/final"
           elementFormDefault="qualified">
  <xs:complexType name="Entity" abstract="true">
    <xs:attribute name="id" type="xs:ID" use="optional"/>
  </xs:complexType>
  <xs:complexType name="IfcRoot" abstract="true">
    <xs:complexContent>
      <xs:extension base="ifc:Entity">
        <xs:attribute name="GlobalId" type="ifc:IfcGloballyUniqueId" use="optional"/>
      </xs:extension>
    </xs:complexContent>
  </xs:complexType>
  <xs:complexType name="IfcObjectDefinition" abstract="true">
    <xs:complexContent><xs:extension base="ifc:IfcRoot"/></xs:complexContent>
  </xs:complexType>
  <xs:complexType name="IfcObject" abstract="true">
    <xs:complexContent><xs:extension base="ifc:IfcObjectDefinition"/></xs:complexContent>
  </xs:complexType>
  <xs:complexType name="IfcProduct" abstract="true">
    <xs:complexContent><xs:extension base="ifc:IfcObject"/></xs:complexContent>
  </xs:complexType>
  <xs:complexType name="IfcElement" abstract="true">
    <xs:complexContent><xs:extension base="ifc:IfcProduct"/></xs:complexContent>
  </xs:complexType>
  <xs:complexType name="IfcBuildingElement" abstract="true">
    <xs:complexContent><xs:extension base="ifc:IfcElement"/></xs:complexContent>
  </xs:complexType>
  <xs:complexType name="IfcWallStandardCase">
    <xs:complexContent><xs:extension base="ifc:IfcWall"/></xs:complexContent>
  </xs:complexType>
  <xs:complexType name="IfcWall">
    <xs:complexContent>
      <xs:extension base="ifc:IfcBuildingElement">
        <xs:attribute name="PredefinedType" type="ifc:IfcWallTypeEnum" use="optional"/>
      </xs:extension>
    </xs:complexContent>
  </xs:complexType>
  <xs:complexType name="IfcSlab">
    <xs:complexContent>
      <xs:extension base="ifc:IfcBuildingElement">
        <xs:attribute name="PredefinedType" type="ifc:IfcSlabTypeEnum" use="optional"/>
      </xs:extension>
    </xs:complexContent>
  </xs:complexType>
  <xs:complexType name="IfcDoor">
    <xs:complexContent><xs:extension base="ifc:IfcBuildingElement"/></xs:complexContent>
  </xs:complexType>
  <xs:complexType name="IfcTypeObject">
    <xs:complexContent><xs:extension base="ifc:IfcObjectDefinition"/></xs:complexContent>
  </xs:complexType>
  <xs:complexType name="IfcTypeProduct">
    <xs:complexContent><xs:extension base="ifc:IfcTypeObject"/></xs:complexContent>
  </xs:complexType>
  <xs:complexType name="IfcElementType" abstract="true">
    <xs:complexContent><xs:extension base="ifc:IfcTypeProduct"/></xs:complexContent>
  </xs:complexType>
  <xs:complexType name="IfcBuildingElementType" abstract="true">
    <xs:complexContent><xs:extension base="ifc:IfcElementType"/></xs:complexContent>
  </xs:complexType>
  <xs:complexType name="IfcWallType">
    <xs:complexContent>
      <xs:extension base="ifc:IfcBuildingElementType">
        <xs:attribute name="PredefinedType" type="ifc:IfcWallTypeEnum" use="required"/>
      </xs:extension>
    </xs:complexContent>
  </xs:complexType>
  <xs:complexType name="IfcDoorType">
    <xs:complexContent><xs:extension base="ifc:IfcBuildingElementType"/></xs:complexContent>
  </xs:complexType>
  <xs:complexType name="IfcGroup">
    <xs:complexContent><xs:extension base="ifc:IfcObject"/></xs:complexContent>
  </xs:complexType>
  <xs:complexType name="IfcSystem">
    <xs:complexContent><xs:extension base="ifc:IfcGroup"/></xs:complexContent>
  </xs:complexType>
  <xs:complexType name="IfcZone">
    <xs:complexContent><xs:extension base="ifc:IfcSystem"/></xs:complexContent>
  </xs:complexType>
  <xs:simpleType name="IfcWallTypeEnum">
    <xs:restriction base="xs:string">
      <xs:enumeration value="movable"/>
      <xs:enumeration value="parapet"/>
      <xs:enumeration value="solidwall"/>
      <xs:enumeration value="userdefined"/>
      <xs:enumeration value="notdefined"/>
    </xs:restriction>
  </xs:simpleType>
  <xs:simpleType name="IfcSlabTypeEnum">
    <xs:restriction base="xs:string">
      <xs:enumeration value="floor"/>
      <xs:enumeration value="roof"/>
      <xs:enumeration value="notdefined"/>
    </xs:restriction>
  </xs:simpleType>
  <xs:simpleType name="IfcLabel">
    <xs:restriction base="xs:normalizedString"/>
  </xs:simpleType>
</xs:schema>
"""

PSET_WALL_COMMON_IFC2X3 = """<?xml version="1.0" encoding="UTF-8"?>
<PropertySetDef xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">
  <IfcVersion version="IFC2x3 TC1"/>
  <Name>Pset_WallCommon</Name>
  <Definition>Properties common to the definition of all occurrences of IfcWall.</Definition>
  <ApplicableClasses>
    <ClassName>IfcWall</ClassName>
  </ApplicableClasses>
  <PropertyDefs>
    <PropertyDef>
      <Name>Reference</Name>
      <PropertyType><TypePropertySingleValue><DataType type="IfcIdentifier"/></TypePropertySingleValue></PropertyType>
    </PropertyDef>
    <PropertyDef>
      <Name>FireRating</Name>
      <PropertyType><TypePropertySingleValue><DataType type="IfcLabel"/></TypePropertySingleValue></PropertyType>
    </PropertyDef>
    <PropertyDef>
      <Name>ThermalTransmittance</Name>
    </PropertyDef>
    <PropertyDef>
      <Name>LoadBearing</Name>
      <PropertyType><TypePropertySingleValue><DataType type="IfcBoolean"/></TypePropertySingleValue></PropertyType>
    </PropertyDef>
  </PropertyDefs>
</PropertySetDef>
"""

PSET_WALL_COMMON_IFC4 = """<?xml version="1.0" encoding="UTF-8"?>
<PropertySetDef xmlns="http://buildingSMART-tech.org/xml/psd/PSD_IFC4.xsd"
                ifdguid="f6ac3d80d1d311e1800000215ad4efdf">
  <IfcVersion version="IFC4"/>
  <Name>Pset_WallCommon</Name>
  <ApplicableClasses>
    <ClassName>IfcWall</ClassName>
  </ApplicableClasses>
  <ApplicableTypeValue>IfcWall/SOLIDWALL</ApplicableTypeValue>
  <PropertyDefs>
    <PropertyDef ifdguid="6d5e4bc0d1d411e1800000215ad4efdf">
      <Name>FireRating</Name>
      <NameAliases>
        <NameAlias lang="en">Fire Rating</NameAlias>
        <NameAlias lang="fr-FR">Résistance au feu</NameAlias>
      </NameAliases>
      <PropertyType><TypePropertySingleValue><DataType type="IfcLabel"/></TypePropertySingleValue></PropertyType>
    </PropertyDef>
    <PropertyDef>
      <Name>Status</Name>
      <PropertyType>
        <TypePropertyEnumeratedValue>
          <EnumList name="PEnum_ElementStatus">
            <EnumItem>NEW</EnumItem>
            <EnumItem>EXISTING</EnumItem>
            <EnumItem>DEMOLISH</EnumItem>
          </EnumList>
          <ConstantList>
            <ConstantDef>
              <Name>New</Name>
              <NameAliases><NameAlias lang="en">New</NameAlias></NameAliases>
            </ConstantDef>
            <ConstantDef><Name>Existing</Name></ConstantDef>
            <ConstantDef><Name>Demolish</Name></ConstantDef>
          </ConstantList>
        </TypePropertyEnumeratedValue>
      </PropertyType>
    </PropertyDef>
  </PropertyDefs>
</PropertySetDef>
"""

PSET_SLAB_COMMON_IFC4 = """<?xml version="1.0" encoding="UTF-8"?>
<PropertySetDef xmlns="http://buildingSMART-tech.org/xml/psd/PSD_IFC4.xsd">
  <IfcVersion version="IFC4"/>
  <Name>Pset_SlabCommon</Name>
  <ApplicableClasses>
    <ClassName>IfcSlab</ClassName>
  </ApplicableClasses>
  <PropertyDefs>
    <PropertyDef>
      <Name>Status</Name>
      <PropertyType>
        <TypePropertyEnumeratedValue>
          <EnumList name="PEnum_ElementStatus">
            <EnumItem>NEW</EnumItem>
            <EnumItem>EXISTING</EnumItem>
            <EnumItem>DEMOLISH</EnumItem>
          </EnumList>
        </TypePropertyEnumeratedValue>
      </PropertyType>
    </PropertyDef>
    <PropertyDef>
      <Name>PitchAngle</Name>
      <PropertyType><TypePropertySingleValue><DataType type="IfcPlaneAngleMeasure"/></TypePropertySingleValue></PropertyType>
    </PropertyDef>
  </PropertyDefs>
</PropertySetDef>
"""

PSET_ELEMENT_SHADING_IFC4 = """<?xml version="1.0" encoding="UTF-8"?>
<PropertySetDef xmlns="http://buildingSMART-tech.org/xml/psd/PSD_IFC4.xsd">
  <IfcVersion version="IFC4"/>
  <Name>Pset_BuildingElementCommon</Name>
  <ApplicableClasses>
    <ClassName>IfcBuildingElement</ClassName>
  </ApplicableClasses>
  <PropertyDefs>
    <PropertyDef>
      <Name>AcousticRating</Name>
      <PropertyType><TypePropertySingleValue><DataType type="IfcLabel"/></TypePropertySingleValue></PropertyType>
    </PropertyDef>
  </PropertyDefs>
</PropertySetDef>
"""

PSET_ZONE_IFC4 = """<?xml version="1.0" encoding="UTF-8"?>
<PropertySetDef xmlns="http://buildingSMART-tech.org/xml/psd/PSD_IFC4.xsd">
  <IfcVersion version="IFC4"/>
  <Name>Pset_ZoneCommon</Name>
  <ApplicableClasses>
    <ClassName>IfcZone</ClassName>
  </ApplicableClasses>
  <PropertyDefs>
    <PropertyDef>
      <Name>IsExternal</Name>
      <PropertyType><TypePropertySingleValue><DataType type="IfcBoolean"/></TypePropertySingleValue></PropertyType>
    </PropertyDef>
  </PropertyDefs>
</PropertySetDef>
"""

QTO_WALL_IFC4 = """<?xml version="1.0" encoding="UTF-8"?>
<QtoSetDef xmlns="http://buildingSMART-tech.org/xml/qto/QTO_IFC4.xsd">
  <Name>Qto_WallBaseQuantities</Name>
  <IfcVersion version="IFC4"/>
  <ApplicableClasses><ClassName>IfcWall</ClassName></ApplicableClasses>
  <QtoDefs>
    <QtoDef><Name>Length</Name><QtoType>Q_LENGTH</QtoType></QtoDef>
    <QtoDef><Name>GrossVolume</Name><QtoType>Q_VOLUME</QtoType></QtoDef>
  </QtoDefs>
</QtoSetDef>
"""

BROKEN_PSD = """<?xml version="1.0" encoding="UTF-8"?>
<PropertySetDef>
  <Name>Pset_Broken</Name>
  <PropertyDefs>
"""


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    """Create a temporary data root with standard directory structure."""
    for subdir in ["raw/schemas", "interim", "processed"]:
        (tmp_path / subdir).mkdir(parents=True, exist_ok=True)
    return tmp_path


@pytest.fixture
def sample_xsd(data_root: Path) -> Path:
    """Sample ifcXML schema written as both IFC2X3 and IFC4."""
    schema_dir = data_root / "raw" / "schemas"
    for version in ("IFC2X3", "IFC4"):
        (schema_dir / f"{version}.xsd").write_text(SAMPLE_XSD, encoding="utf-8")
    return schema_dir / "IFC4.xsd"


@pytest.fixture
def psd_tree(data_root: Path) -> Path:
    """raw/<release>/psd/... tree with one malformed file."""
    files = {
        "IFC2X3/psd/Pset_WallCommon.xml": PSET_WALL_COMMON_IFC2X3,
        "IFC4/psd/Pset_WallCommon.xml": PSET_WALL_COMMON_IFC4,
        "IFC4/psd/Pset_SlabCommon.xml": PSET_SLAB_COMMON_IFC4,
        "IFC4/psd/Pset_BuildingElementCommon.xml": PSET_ELEMENT_SHADING_IFC4,
        "IFC4/psd/group/Pset_ZoneCommon.xml": PSET_ZONE_IFC4,
        "IFC4/psd/Qto_WallBaseQuantities.xml": QTO_WALL_IFC4,
        "IFC4/psd/Pset_Broken.xml": BROKEN_PSD,
    }
    raw = data_root / "raw"
    for rel, text in files.items():
        path = raw / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return raw


@pytest.fixture
def write_psd(tmp_path: Path):
    """Write a single PSD document and return its path."""

    def _write(text: str, name: str = "Pset_Test.xml") -> Path:
        path = tmp_path / "single" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
