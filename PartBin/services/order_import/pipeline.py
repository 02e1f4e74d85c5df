"""
Order Import Pipeline

Entry points of the order import engine. Picks an extractor for the raw
payload, locates the header row, classifies the dialect, normalizes every data
row and merges duplicates.

Pure with respect to storage: the caller decides what to do with the
returned records.
"""

import json
import logging
import os
from typing import Callable, Dict, List, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from PartBin.exceptions import FormatError
from PartBin.models.import_models import ImportResult, NormalizedComponent, RowDiagnostic, SourceFormat
from PartBin.services.order_import.dialect_classifier import classify_dialect, require_fields
from PartBin.services.order_import.duplicate_merger import merge_duplicates
from PartBin.services.order_import.field_dictionary import HeaderIndexMap
from PartBin.services.order_import.header_locator import locate_header
from PartBin.services.order_import.row_normalizer import normalize_row
from PartBin.services.order_import.tabular_extractor import (
    Grid,
    decode_text,
    extract_binary_sheet,
    extract_delimited_text,
    extract_html_table,
)
from PartBin.utils.config import ImportSettings, get_settings

logger = logging.getLogger(__name__)

ZIP_MAGIC = b"PK\x03\x04"  # .xlsx
OLE_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"  # legacy .xls

EXTRACTORS: Dict[SourceFormat, Callable[[Union[bytes, str]], Grid]] = {
    SourceFormat.BINARY_SHEET: extract_binary_sheet,
    SourceFormat.HTML_TABLE: extract_html_table,
    SourceFormat.DELIMITED_TEXT: extract_delimited_text,
}


def parse_grid(
    grid: Grid, source_format: SourceFormat, settings: Optional[ImportSettings] = None
) -> ImportResult:
    """
    Normalize and merge the rows of one extracted grid.

    Raises:
        FormatError: if no header row is found, required columns are missing,
            or no row yields a component.
    """
    settings = settings or get_settings()

    header_index, headers = locate_header(grid, settings.header_scan_limit)
    index_map = HeaderIndexMap.from_headers(headers)
    dialect = classify_dialect(index_map)
    require_fields(index_map)
    logger.debug(f"Located fields: {[field.value for field in index_map.found_fields()]}")

    records: List[NormalizedComponent] = []
    diagnostics: List[RowDiagnostic] = []
    total_rows = 0
    for row_number, row in enumerate(grid[header_index + 1 :], start=header_index + 2):
        if not any(cell.strip() for cell in row):
            continue
        total_rows += 1
        outcome = normalize_row(row, dialect, index_map, settings)
        if outcome.component is None:
            logger.debug(f"Row {row_number} skipped: {outcome.skip_reason}")
            diagnostics.append(RowDiagnostic(row_number=row_number, reason=outcome.skip_reason))
        else:
            records.append(outcome.component)

    if not records:
        raise FormatError("no components found", details={"total_rows": total_rows})

    merged = merge_duplicates(records)
    logger.info(
        f"Parsed {len(records)} of {total_rows} rows as {dialect.value} from {source_format.value}, "
        f"{len(merged)} after merging duplicates"
    )
    return ImportResult(
        source_format=source_format,
        dialect=dialect,
        header_row_index=header_index,
        total_rows=total_rows,
        parsed_count=len(records),
        merged_count=len(merged),
        components=merged,
        diagnostics=diagnostics,
    )


def parse_content(
    content: Union[bytes, str], source_format: SourceFormat, settings: Optional[ImportSettings] = None
) -> ImportResult:
    """Extract a grid in the given format and parse it."""
    if source_format == SourceFormat.JSON_BACKUP:
        return parse_json_backup(content)
    grid = EXTRACTORS[source_format](content)
    return parse_grid(grid, source_format, settings)


def parse_json_backup(content: Union[bytes, str]) -> ImportResult:
    """
    Read a backup written by the JSON exporter: {"version", "exportDate", "components": [...]}.

    Records that fail validation are reported as diagnostics instead of
    aborting the import.

    Raises:
        FormatError: if the payload is not a backup document or holds no valid record.
    """
    try:
        document = json.loads(decode_text(content))
    except ValueError as e:
        raise FormatError("invalid backup format", details={"cause": str(e)})

    if not isinstance(document, dict) or not isinstance(document.get("components"), list):
        raise FormatError("invalid backup format")

    records: List[NormalizedComponent] = []
    diagnostics: List[RowDiagnostic] = []
    for position, item in enumerate(document["components"], start=1):
        try:
            records.append(NormalizedComponent.model_validate(item))
        except PydanticValidationError as e:
            reason = "; ".join(f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors())
            diagnostics.append(RowDiagnostic(row_number=position, reason=reason))

    total_rows = len(document["components"])
    if not records:
        raise FormatError("no components found", details={"total_rows": total_rows})

    merged = merge_duplicates(records)
    logger.info(f"Read {len(records)} of {total_rows} backup records, {len(merged)} after merging duplicates")
    return ImportResult(
        source_format=SourceFormat.JSON_BACKUP,
        total_rows=total_rows,
        parsed_count=len(records),
        merged_count=len(merged),
        components=merged,
        diagnostics=diagnostics,
    )


def sniff_format(content: Union[bytes, str]) -> SourceFormat:
    """Guess the format of a payload whose file name carries no usable extension."""
    if isinstance(content, bytes) and (content.startswith(ZIP_MAGIC) or content.startswith(OLE_MAGIC)):
        return SourceFormat.BINARY_SHEET
    text = decode_text(content)
    if text.lstrip().startswith("{"):
        return SourceFormat.JSON_BACKUP
    if "<tr" in text.lower():
        return SourceFormat.HTML_TABLE
    return SourceFormat.DELIMITED_TEXT


def import_order_file(
    content: Union[bytes, str], filename: str = "", settings: Optional[ImportSettings] = None
) -> ImportResult:
    """
    Parse an uploaded order file into merged component records.

    The file extension picks the extractor. Spreadsheet exports that are
    really HTML tables saved as .xls are retried with the HTML extractor when
    the binary reader rejects them.

    Raises:
        FormatError: if the file cannot be turned into at least one component.
    """
    extension = os.path.splitext(filename or "")[1].lower()
    logger.info(f"Importing order file {filename!r} ({len(content)} bytes)")

    if extension == ".csv":
        return parse_content(content, SourceFormat.DELIMITED_TEXT, settings)
    if extension == ".json":
        return parse_content(content, SourceFormat.JSON_BACKUP, settings)
    if extension in (".xls", ".xlsx"):
        try:
            grid = extract_binary_sheet(content)
        except FormatError as e:
            logger.info(f"Binary sheet read failed ({e.reason}), retrying as HTML table")
            return parse_content(content, SourceFormat.HTML_TABLE, settings)
        return parse_grid(grid, SourceFormat.BINARY_SHEET, settings)

    source_format = sniff_format(content)
    logger.debug(f"No known extension on {filename!r}, sniffed {source_format.value}")
    return parse_content(content, source_format, settings)
