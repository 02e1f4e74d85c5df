"""
Export Service

Renders the stored inventory in the native export layout. The CSV and
HTML spreadsheet renderings share the native header row, so both re-import
as native exports; the JSON rendering is the full backup document.
"""

import csv
import html
import io
import json
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Sequence

from pydantic import BaseModel

from PartBin import __version__
from PartBin.services.base_service import BaseService, ServiceResponse
from PartBin.repositories.component_repository import ComponentRepository

EXPORT_HEADERS = ["ID", "Name", "Description", "Category", "Quantity", "Location", "Min Stock Level", "Specifications"]

XLS_STYLE = (
    "table { border-collapse: collapse; } th, td { border: 1px solid #ddd; padding: 8px; } "
    "th { background-color: #4CAF50; color: white; }"
)


class ExportFormat(str, Enum):
    CSV = "csv"
    XLS = "xls"
    JSON = "json"


class ExportFile(BaseModel):
    filename: str
    media_type: str
    content: str


def _specifications_text(specifications) -> str:
    return json.dumps(specifications, ensure_ascii=False) if specifications else ""


def _export_row(component: Dict[str, Any]) -> List[Any]:
    return [
        component.get("id") or "",
        component.get("name") or "",
        component.get("description") or "",
        component.get("category") or "",
        component.get("quantity") or 0,
        component.get("location") or "",
        component.get("min_stock_level") or 0,
        _specifications_text(component.get("specifications")),
    ]


def render_csv(components: Sequence[Dict[str, Any]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    writer.writerow(EXPORT_HEADERS)
    for component in components:
        writer.writerow(_export_row(component))
    return buffer.getvalue()


def render_xls(components: Sequence[Dict[str, Any]]) -> str:
    """HTML table that spreadsheet applications open as a worksheet."""
    parts = [
        '<html xmlns:o="urn:schemas-microsoft-com:office:office" '
        'xmlns:x="urn:schemas-microsoft-com:office:excel" xmlns="http://www.w3.org/TR/REC-html40">',
        f'<head><meta charset="utf-8"><style>{XLS_STYLE}</style></head>',
        "<body><table>",
        "<tr>" + "".join(f"<th>{header}</th>" for header in EXPORT_HEADERS) + "</tr>",
    ]
    for component in components:
        cells = "".join(f"<td>{html.escape(str(value), quote=False)}</td>" for value in _export_row(component))
        parts.append(f"<tr>{cells}</tr>")
    parts.append("</table></body></html>")
    return "".join(parts)


def render_json(components: Sequence[Dict[str, Any]]) -> str:
    document = {
        "version": __version__,
        "exportDate": datetime.utcnow().isoformat(),
        "components": list(components),
    }
    return json.dumps(document, ensure_ascii=False, indent=2)


RENDERERS = {
    ExportFormat.CSV: (render_csv, "text/csv; charset=utf-8"),
    ExportFormat.XLS: (render_xls, "application/vnd.ms-excel"),
    ExportFormat.JSON: (render_json, "application/json"),
}


class ExportService(BaseService):
    def __init__(self, engine_override=None):
        super().__init__(engine_override)
        self.component_repo = ComponentRepository()

    def export_components(self, export_format: ExportFormat) -> ServiceResponse[ExportFile]:
        try:
            self.log_operation("export", "Component")
            with self.get_session() as session:
                components = [component.to_dict() for component in self.component_repo.list_components(session)]

            render, media_type = RENDERERS[export_format]
            prefix = "inventory-backup" if export_format == ExportFormat.JSON else "inventory-export"
            export_file = ExportFile(
                filename=f"{prefix}-{datetime.utcnow().date().isoformat()}.{export_format.value}",
                media_type=media_type,
                content=render(components),
            )
            return self.success_response(f"Exported {len(components)} components as {export_format.value}", export_file)
        except Exception as e:
            return self.handle_exception(e, "export components")
