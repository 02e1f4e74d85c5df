import logging

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from PartBin.dependencies import get_export_service
from PartBin.routers.base import standard_error_handling, validate_service_response
from PartBin.services.export_service import ExportFormat, ExportService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Export"])


@router.get("/{export_format}")
@standard_error_handling
async def export_components(
    export_format: ExportFormat, export_service: ExportService = Depends(get_export_service)
) -> Response:
    """Download the inventory as csv, xls (HTML table) or a JSON backup."""
    export_file = validate_service_response(export_service.export_components(export_format))
    return Response(
        content=export_file.content.encode("utf-8"),
        media_type=export_file.media_type,
        headers={"Content-Disposition": f'attachment; filename="{export_file.filename}"'},
    )
