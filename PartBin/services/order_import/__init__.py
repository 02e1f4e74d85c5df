"""
Order import engine: turns native exports and marketplace order files into
normalized component records.
"""

from .category_inferencer import infer_category
from .dialect_classifier import classify_dialect
from .duplicate_merger import merge_duplicates
from .field_dictionary import CanonicalField, HeaderIndexMap
from .header_locator import locate_header
from .pipeline import import_order_file, parse_content, parse_grid
from .row_normalizer import compose_description, normalize_row
from .specification_extractor import extract_specifications

__all__ = [
    "CanonicalField",
    "HeaderIndexMap",
    "classify_dialect",
    "compose_description",
    "extract_specifications",
    "import_order_file",
    "infer_category",
    "locate_header",
    "merge_duplicates",
    "normalize_row",
    "parse_content",
    "parse_grid",
]
