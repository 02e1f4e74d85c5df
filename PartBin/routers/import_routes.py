"""
Import Routes

Upload endpoints for native exports, marketplace order files and JSON
backups. Parsing is done by the order import engine; storing the records is
done by the component service.
"""

import logging
from typing import Dict

from fastapi import APIRouter, Depends, File, UploadFile

from PartBin.dependencies import get_component_service, get_import_settings
from PartBin.models.import_models import ImportResult
from PartBin.routers.base import BaseRouter, standard_error_handling, validate_service_response
from PartBin.schemas.component_schemas import ImportSummary, MergeSummary
from PartBin.schemas.response import ResponseSchema
from PartBin.services.component_service import ComponentService
from PartBin.services.order_import import import_order_file
from PartBin.utils.config import ImportSettings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Import"])


@router.post("/preview", response_model=ResponseSchema[ImportResult])
@standard_error_handling
async def preview_import(
    file: UploadFile = File(..., description="Order file, native export or JSON backup"),
    settings: ImportSettings = Depends(get_import_settings),
) -> ResponseSchema[ImportResult]:
    """Parse a file and return the records that would be imported, without storing them."""
    content = await file.read()
    result = import_order_file(content, file.filename or "", settings)
    return BaseRouter.build_success_response(
        data=result,
        message=f"Found {result.merged_count} components in {file.filename}",
        total_components=result.merged_count,
    )


@router.post("/file", response_model=ResponseSchema[ImportSummary])
@standard_error_handling
async def import_file(
    file: UploadFile = File(..., description="Order file, native export or JSON backup"),
    settings: ImportSettings = Depends(get_import_settings),
    component_service: ComponentService = Depends(get_component_service),
) -> ResponseSchema[ImportSummary]:
    content = await file.read()
    result = import_order_file(content, file.filename or "", settings)
    service_response = component_service.import_components(result)
    summary = validate_service_response(service_response)
    return BaseRouter.build_success_response(data=ImportSummary(**summary), message=service_response.message)


@router.post("/merge-duplicates", response_model=ResponseSchema[MergeSummary])
@standard_error_handling
async def merge_duplicates(
    component_service: ComponentService = Depends(get_component_service),
) -> ResponseSchema[MergeSummary]:
    service_response = component_service.merge_stored_duplicates()
    summary = validate_service_response(service_response)
    return BaseRouter.build_success_response(data=MergeSummary(**summary), message=service_response.message)
