from typing import Optional, Dict

from pydantic import BaseModel, ConfigDict, Field, AliasChoices

from PartBin.models.component_models import ComponentCategory


class ComponentCreate(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    name: str = Field(min_length=1)
    category: ComponentCategory = ComponentCategory.OTHER
    quantity: int = Field(default=0, ge=0)
    location: str = ""
    description: str = ""
    min_stock_level: int = Field(
        default=10, ge=0, validation_alias=AliasChoices("min_stock_level", "minStockLevel")
    )
    specifications: Optional[Dict[str, str]] = None


class ComponentUpdate(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    name: Optional[str] = Field(default=None, min_length=1)
    category: Optional[ComponentCategory] = None
    quantity: Optional[int] = Field(default=None, ge=0)
    location: Optional[str] = None
    description: Optional[str] = None
    min_stock_level: Optional[int] = Field(
        default=None, ge=0, validation_alias=AliasChoices("min_stock_level", "minStockLevel")
    )
    specifications: Optional[Dict[str, str]] = None


class ComponentStats(BaseModel):
    total_components: int = 0
    total_quantity: int = 0
    categories: int = 0
    low_stock_count: int = 0


class ImportSummary(BaseModel):
    """Outcome of storing an imported batch."""

    source_format: str
    dialect: Optional[str] = None
    total_rows: int = 0
    parsed_count: int = 0
    merged_count: int = 0
    created_count: int = 0
    updated_count: int = 0
    failed_count: int = 0
    skipped_rows: int = 0


class MergeSummary(BaseModel):
    groups_merged: int = 0
    components_removed: int = 0
    remaining_components: int = 0
