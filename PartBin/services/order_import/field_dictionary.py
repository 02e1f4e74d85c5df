"""
Header vocabulary for order files.

Maps each canonical record field to the header strings that may denote it in
either the native export (English) or marketplace orders (Chinese).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple


class CanonicalField(str, Enum):
    ID = "id"
    NAME = "name"
    DESCRIPTION = "description"
    CATEGORY = "category"
    QUANTITY = "quantity"
    LOCATION = "location"
    MIN_STOCK_LEVEL = "minStockLevel"
    SPECIFICATIONS = "specifications"
    BRAND = "brand"
    PACKAGE = "package"
    ATTRIBUTES = "attributes"
    MODEL_NUMBER = "modelNumber"


# Priority ordered; a header matches when it contains any of the strings.
FIELD_HEADERS: Dict[CanonicalField, Tuple[str, ...]] = {
    CanonicalField.ID: ("ID", "id"),
    CanonicalField.NAME: ("Name", "name", "商品编号", "LCSC Part"),
    CanonicalField.DESCRIPTION: ("Description", "description", "商品名称"),
    CanonicalField.CATEGORY: ("Category", "category", "类别"),
    CanonicalField.QUANTITY: ("Quantity", "quantity", "订购数量", "数量", "订购数量（修改后）"),
    CanonicalField.LOCATION: ("Location", "location", "位置"),
    CanonicalField.MIN_STOCK_LEVEL: ("Min Stock Level", "minStockLevel", "Min Stock", "minStock"),
    CanonicalField.SPECIFICATIONS: ("Specifications", "specifications", "specs"),
    # Marketplace-only columns
    CanonicalField.BRAND: ("品牌", "Brand"),
    CanonicalField.PACKAGE: ("封装", "Package"),
    CanonicalField.ATTRIBUTES: ("商品属性", "规格", "属性"),
    CanonicalField.MODEL_NUMBER: ("厂家型号", "型号"),
}


def find_column(headers: Sequence[str], candidates: Sequence[str]) -> Optional[int]:
    """Index of the first header containing any candidate string, or None."""
    for index, header in enumerate(headers):
        text = header.strip()
        if any(candidate in text for candidate in candidates):
            return index
    return None


@dataclass(frozen=True)
class HeaderIndexMap:
    """Column index of every canonical field in one sheet's header row."""

    indices: Dict[CanonicalField, Optional[int]] = field(default_factory=dict)

    @classmethod
    def from_headers(cls, headers: Sequence[str]) -> "HeaderIndexMap":
        return cls({canonical: find_column(headers, names) for canonical, names in FIELD_HEADERS.items()})

    def index_of(self, canonical: CanonicalField) -> Optional[int]:
        return self.indices.get(canonical)

    def has(self, canonical: CanonicalField) -> bool:
        return self.indices.get(canonical) is not None

    def found_fields(self) -> List[CanonicalField]:
        return [canonical for canonical, index in self.indices.items() if index is not None]

    def value(self, row: Sequence[str], canonical: CanonicalField) -> str:
        """Trimmed cell text for a field, "" when the column is absent or the row is short."""
        index = self.indices.get(canonical)
        if index is None or index >= len(row):
            return ""
        return (row[index] or "").strip()
