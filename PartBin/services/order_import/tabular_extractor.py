"""
Tabular Extractor

Turns a raw order file (binary workbook, spreadsheet saved as HTML, or
comma-delimited text) into a rectangular-ish grid of trimmed string cells.
"""

import io
import logging
import math
from typing import List, Union

import pandas as pd
from bs4 import BeautifulSoup

from PartBin.exceptions import FormatError

logger = logging.getLogger(__name__)

Grid = List[List[str]]

TEXT_ENCODINGS = ("utf-8-sig", "gb18030")


def decode_text(content: Union[bytes, str]) -> str:
    """Decode raw bytes with the first encoding that accepts them, latin-1 as the last resort."""
    if isinstance(content, str):
        return content
    for encoding in TEXT_ENCODINGS:
        try:
            return content.decode(encoding)
        except UnicodeDecodeError:
            continue
    return content.decode("latin-1")


def _cell_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value).strip()


def extract_binary_sheet(content: bytes) -> Grid:
    """
    Read the first sheet of a binary workbook.

    Raises:
        FormatError: if the payload cannot be read as a workbook.
    """
    try:
        df = pd.read_excel(io.BytesIO(content), sheet_name=0, header=None, dtype=object)
    except Exception as e:
        logger.debug(f"Binary workbook read failed: {e}")
        raise FormatError("unreadable binary sheet", details={"cause": str(e)})

    grid = [[_cell_text(value) for value in row] for row in df.itertuples(index=False, name=None)]
    logger.debug(f"Binary sheet decoded: {len(grid)} rows")
    return grid


def extract_html_table(content: Union[bytes, str]) -> Grid:
    """
    Read rows from spreadsheet-as-HTML markup.

    Uses the first <table> when there is one, otherwise every <tr> in the
    document.

    Raises:
        FormatError: if fewer than two rows are found.
    """
    document = BeautifulSoup(decode_text(content), "html.parser")
    table = document.find("table")
    scope = table if table is not None else document
    if table is None:
        logger.debug("No <table> element, scanning document for rows")

    grid = []
    for row in scope.find_all("tr"):
        cells = row.find_all(["td", "th"])
        grid.append([cell.get_text().replace("\xa0", " ").strip() for cell in cells])

    if len(grid) < 2:
        raise FormatError("no rows found", details={"row_count": len(grid)})
    return grid


def split_delimited_line(line: str) -> List[str]:
    """
    Split one line on commas, keeping commas inside double-quoted spans.

    Quote characters are dropped and a doubled quote is not unescaped.
    """
    values = []
    current = []
    in_quotes = False
    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            values.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    values.append("".join(current).strip())
    return values


def extract_delimited_text(content: Union[bytes, str]) -> Grid:
    """
    Raises:
        FormatError: if fewer than two non-blank lines remain.
    """
    lines = [line for line in decode_text(content).split("\n") if line.strip()]
    if len(lines) < 2:
        raise FormatError("insufficient rows", details={"row_count": len(lines)})
    return [split_delimited_line(line.rstrip("\r")) for line in lines]
