"""
Header Locator

Finds the row holding column headers. Marketplace exports put order metadata
(order number, date, shipping address) above the item table, so the header
row is not necessarily the first row.
"""

import logging
from typing import List, Sequence, Tuple

from PartBin.exceptions import FormatError

logger = logging.getLogger(__name__)

DEFAULT_SCAN_LIMIT = 50

# Native export headers are matched exactly.
NATIVE_HEADER_SIGNALS: Tuple[str, ...] = ("ID", "Name", "Category", "Description", "Min Stock Level")

# Marketplace headers are matched by substring: item code, model number, serial number.
MARKETPLACE_HEADER_SIGNALS: Tuple[str, ...] = ("商品编号", "型号", "序号")


def is_header_row(cells: Sequence[str]) -> bool:
    texts = [cell.strip() for cell in cells]
    if any(text in NATIVE_HEADER_SIGNALS for text in texts):
        return True
    return any(signal in text for text in texts for signal in MARKETPLACE_HEADER_SIGNALS)


def locate_header(grid: Sequence[Sequence[str]], scan_limit: int = DEFAULT_SCAN_LIMIT) -> Tuple[int, List[str]]:
    """
    Return (row index, trimmed header cells) of the first row carrying a header signal.

    Raises:
        FormatError: if none of the first scan_limit rows qualifies.
    """
    for index in range(min(scan_limit, len(grid))):
        row = grid[index]
        if not row or not any(cell.strip() for cell in row):
            continue
        if is_header_row(row):
            headers = [cell.strip() for cell in row]
            logger.debug(f"Header row found at index {index}: {headers[:8]}")
            return index, headers

    raise FormatError("header row not found", details={"rows_scanned": min(scan_limit, len(grid))})
