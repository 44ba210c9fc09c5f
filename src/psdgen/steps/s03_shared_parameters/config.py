"""Configuration for Step 03: shared parameters."""

from typing import Optional

from pydantic import BaseModel, Field


class SharedParametersConfig(BaseModel):
    instance_file_name: str = Field(
        "IFCSharedParameters-RevitIFCBuiltIn_ALL.txt", description="Instance parameter file name"
    )
    type_file_name: str = Field(
        "IFCSharedParameters-RevitIFCBuiltIn-Type_ALL.txt", description="Type parameter file name"
    )
    existing_instance_file: Optional[str] = Field(
        None, description="Previously emitted Instance file to seed GUIDs from (relative to data_root)"
    )
    existing_type_file: Optional[str] = Field(
        None, description="Previously emitted Type file to seed GUIDs from (relative to data_root)"
    )
    seed_from_previous_output: bool = Field(
        True, description="Seed from this step's own earlier output when no existing file is given"
    )
    qualified_names: bool = Field(False, description="Name simple parameters <PsetName>.<PropertyName>")
    group_id: int = Field(2, description="Shared parameter group id")
    group_name: str = Field("IFC Parameters", description="Shared parameter group name")
