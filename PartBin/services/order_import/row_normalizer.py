"""
Row Normalizer

Turns one data row into zero or one NormalizedComponent, following the
parsing rules of the sheet's dialect.
"""

import json
import logging
import math
import re
from dataclasses import dataclass
from functools import reduce
from typing import Optional, Sequence, Tuple

from pydantic import ValidationError as PydanticValidationError

from PartBin.models.component_models import BaseSpecs, ComponentCategory, build_specs
from PartBin.models.import_models import Dialect, NormalizedComponent
from PartBin.services.order_import.category_inferencer import infer_category
from PartBin.services.order_import.field_dictionary import CanonicalField, HeaderIndexMap
from PartBin.services.order_import.specification_extractor import extract_specifications
from PartBin.utils.config import ImportSettings

logger = logging.getLogger(__name__)

# Marketplace exports number their rows; such numbers land in the part number column.
SEQUENCE_NUMBER_LIMIT = 100


@dataclass(frozen=True)
class RowOutcome:
    """Result of normalizing one row: a record, or the reason it was dropped."""

    component: Optional[NormalizedComponent] = None
    skip_reason: Optional[str] = None


def parse_count(text: str) -> Optional[int]:
    """Keep only the digits of text ("1,000 pcs" -> 1000); None when there are none."""
    digits = re.sub(r"[^0-9]", "", text or "")
    return int(digits) if digits else None


# === DESCRIPTION COMPOSITION ===


@dataclass(frozen=True)
class DescriptionSegment:
    """
    One optional piece of a composed description.

    prefix=True puts the value in front of the accumulator, otherwise it is
    appended. The separator is only used when the accumulator is non-empty.
    """

    value: str
    separator: str
    prefix: bool = False


def append_if_absent(accumulator: str, segment: DescriptionSegment) -> str:
    if not segment.value or segment.value in accumulator:
        return accumulator
    if not accumulator:
        return segment.value
    if segment.prefix:
        return segment.value + segment.separator + accumulator
    return accumulator + segment.separator + segment.value


def compose_description(base: str, segments: Sequence[DescriptionSegment]) -> str:
    """Fold segments into base; a segment already contained in the text is skipped."""
    return reduce(append_if_absent, segments, base or "")


def marketplace_description(model: str, attributes: str, description: str, brand: str, package: str) -> str:
    return compose_description(
        model or attributes or description,
        (
            DescriptionSegment(brand, " - ", prefix=True),
            DescriptionSegment(package, " | "),
            DescriptionSegment(description, " | "),
        ),
    )


# === SPECIFICATIONS COLUMN ===


def parse_explicit_specifications(category: ComponentCategory, raw: str) -> Tuple[bool, Optional[BaseSpecs]]:
    """
    Parse a specifications cell holding JSON.

    Returns (parsed, specs). parsed is False when the cell is blank, "{}" or
    not valid JSON for the category, in which case the caller extracts
    specifications from the description instead.
    """
    text = (raw or "").strip()
    if not text or text == "{}":
        return False, None
    try:
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("specifications must be a JSON object")
        specs = build_specs(category, data)
    except (ValueError, PydanticValidationError) as e:
        logger.warning(f"Could not parse specifications {text!r}: {e}")
        return False, None
    return specs is not None, specs


# === DIALECT RULES ===


def normalize_native_row(
    row: Sequence[str], index_map: HeaderIndexMap, settings: Optional[ImportSettings] = None
) -> RowOutcome:
    settings = settings or ImportSettings()
    name = index_map.value(row, CanonicalField.NAME)
    if not name:
        return RowOutcome(skip_reason="empty name")

    description = index_map.value(row, CanonicalField.DESCRIPTION)
    category_text = index_map.value(row, CanonicalField.CATEGORY)
    if index_map.has(CanonicalField.CATEGORY):
        category = ComponentCategory.from_label(category_text) or infer_category(name, description)
    else:
        category = ComponentCategory.OTHER

    quantity = parse_count(index_map.value(row, CanonicalField.QUANTITY)) or 0
    min_stock = parse_count(index_map.value(row, CanonicalField.MIN_STOCK_LEVEL))
    if min_stock is None:
        min_stock = settings.default_min_stock

    parsed, specifications = parse_explicit_specifications(
        category, index_map.value(row, CanonicalField.SPECIFICATIONS)
    )
    if not parsed and description:
        specifications = extract_specifications(category, "", description, "")

    component = NormalizedComponent(
        id=index_map.value(row, CanonicalField.ID) or None,
        name=name,
        description=description,
        category=category,
        quantity=quantity,
        location=index_map.value(row, CanonicalField.LOCATION),
        min_stock_level=min_stock,
        specifications=specifications,
    )
    return RowOutcome(component=component)


def normalize_marketplace_row(
    row: Sequence[str], index_map: HeaderIndexMap, settings: Optional[ImportSettings] = None
) -> RowOutcome:
    settings = settings or ImportSettings()
    part_number = index_map.value(row, CanonicalField.NAME)
    if not part_number:
        return RowOutcome(skip_reason="empty name")
    if re.fullmatch(r"[0-9]+", part_number) and int(part_number) < SEQUENCE_NUMBER_LIMIT:
        return RowOutcome(skip_reason="sequence number in name column")

    model = index_map.value(row, CanonicalField.MODEL_NUMBER)
    package = index_map.value(row, CanonicalField.PACKAGE)
    description = marketplace_description(
        model=model,
        attributes=index_map.value(row, CanonicalField.ATTRIBUTES),
        description=index_map.value(row, CanonicalField.DESCRIPTION),
        brand=index_map.value(row, CanonicalField.BRAND),
        package=package,
    )

    quantity = parse_count(index_map.value(row, CanonicalField.QUANTITY)) or 0
    if quantity == 0:
        return RowOutcome(skip_reason="zero quantity")

    category = infer_category(part_number, description)
    component = NormalizedComponent(
        name=part_number,
        description=description or part_number,
        category=category,
        quantity=quantity,
        location="",
        min_stock_level=max(math.floor(quantity * settings.reorder_ratio), settings.reorder_floor),
        specifications=extract_specifications(category, package, description, model),
    )
    return RowOutcome(component=component)


def normalize_row(
    row: Sequence[str],
    dialect: Dialect,
    index_map: HeaderIndexMap,
    settings: Optional[ImportSettings] = None,
) -> RowOutcome:
    if dialect == Dialect.NATIVE_EXPORT:
        return normalize_native_row(row, index_map, settings)
    return normalize_marketplace_row(row, index_map, settings)
