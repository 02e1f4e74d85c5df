import logging

from PartBin.exceptions import FormatError
from PartBin.models.import_models import Dialect
from PartBin.services.order_import.field_dictionary import CanonicalField, HeaderIndexMap

logger = logging.getLogger(__name__)

NATIVE_FIELDS = (CanonicalField.ID, CanonicalField.CATEGORY, CanonicalField.DESCRIPTION)
MARKETPLACE_FIELDS = (CanonicalField.BRAND, CanonicalField.PACKAGE, CanonicalField.MODEL_NUMBER)
REQUIRED_FIELDS = (CanonicalField.NAME, CanonicalField.QUANTITY)


def classify_dialect(index_map: HeaderIndexMap) -> Dialect:
    """
    Native export needs id, category and description columns and none of the
    marketplace-only columns; anything else is parsed as a marketplace order.
    """
    has_native_fields = all(index_map.has(field) for field in NATIVE_FIELDS)
    has_marketplace_fields = any(index_map.has(field) for field in MARKETPLACE_FIELDS)

    dialect = Dialect.NATIVE_EXPORT if has_native_fields and not has_marketplace_fields else Dialect.MARKETPLACE_ORDER
    logger.debug(
        f"Dialect {dialect.value} (native fields: {has_native_fields}, marketplace fields: {has_marketplace_fields})"
    )
    return dialect


def require_fields(index_map: HeaderIndexMap) -> None:
    """
    Raises:
        FormatError: if the name or quantity column is missing.
    """
    missing = [field.value for field in REQUIRED_FIELDS if not index_map.has(field)]
    if missing:
        raise FormatError("required fields missing", details={"missing_fields": missing})
