"""
Order Import Models

Value types produced by the order import engine. Everything here is built
fresh for each import and is immutable once produced.
"""

import json
from enum import Enum
from typing import Optional, List, Dict, Any

from pydantic import BaseModel, ConfigDict, Field, AliasChoices, model_validator, field_serializer

from PartBin.models.component_models import ComponentCategory, BaseSpecs, build_specs


def identity_key(
    name: str,
    category: str,
    description: str,
    location: str,
    min_stock_level: int,
    specifications: Optional[Dict[str, Any]],
) -> str:
    """
    Composite key used to recognise two records as the same part.

    Covers every field except quantity and the id.
    """
    specs_key = json.dumps(specifications, ensure_ascii=False, separators=(",", ":")) if specifications else ""
    return "|".join([name, category, description, location, str(min_stock_level), specs_key])


class Dialect(str, Enum):
    NATIVE_EXPORT = "native_export"
    MARKETPLACE_ORDER = "marketplace_order"


class SourceFormat(str, Enum):
    BINARY_SHEET = "binary_sheet"
    HTML_TABLE = "html_table"
    DELIMITED_TEXT = "delimited_text"
    JSON_BACKUP = "json_backup"


class NormalizedComponent(BaseModel):
    """One canonical inventory record produced from an order file row."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: Optional[str] = None
    name: str = Field(min_length=1)
    description: str = ""
    category: ComponentCategory = ComponentCategory.OTHER
    quantity: int = Field(default=0, ge=0)
    location: str = ""
    min_stock_level: int = Field(
        default=10, ge=0, validation_alias=AliasChoices("min_stock_level", "minStockLevel")
    )
    specifications: Optional[BaseSpecs] = None

    @model_validator(mode="before")
    @classmethod
    def coerce_specifications(cls, values: Any) -> Any:
        """Turn a plain specifications mapping into the variant for the record's category."""
        if not isinstance(values, dict):
            return values
        specs = values.get("specifications")
        if specs is None or isinstance(specs, BaseSpecs):
            return values
        if isinstance(specs, dict):
            category = values.get("category")
            if not isinstance(category, ComponentCategory):
                category = ComponentCategory.from_label(str(category or "")) or ComponentCategory.OTHER
            values = dict(values)
            values["specifications"] = build_specs(category, specs)
        return values

    @field_serializer("specifications")
    def serialize_specifications(self, specs: Optional[BaseSpecs]) -> Optional[Dict[str, str]]:
        return specs.to_dict() if specs is not None else None

    def specifications_dict(self) -> Optional[Dict[str, str]]:
        return self.specifications.to_dict() if self.specifications is not None else None

    def identity_key(self) -> str:
        return identity_key(
            self.name,
            self.category.value,
            self.description,
            self.location,
            self.min_stock_level,
            self.specifications_dict(),
        )

    def to_store_dict(self) -> Dict[str, Any]:
        """Field mapping accepted by the component store (id excluded)."""
        return {
            "name": self.name,
            "description": self.description,
            "category": self.category.value,
            "quantity": self.quantity,
            "location": self.location,
            "min_stock_level": self.min_stock_level,
            "specifications": self.specifications_dict(),
        }


class RowDiagnostic(BaseModel):
    """A data row that did not become a record, and why."""

    model_config = ConfigDict(frozen=True)

    row_number: int  # 1-based position in the source grid
    reason: str


class ImportResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    source_format: SourceFormat
    dialect: Optional[Dialect] = None
    header_row_index: Optional[int] = None
    total_rows: int = 0
    parsed_count: int = 0
    merged_count: int = 0
    components: List[NormalizedComponent] = Field(default_factory=list)
    diagnostics: List[RowDiagnostic] = Field(default_factory=list)
