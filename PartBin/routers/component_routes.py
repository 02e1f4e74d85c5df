import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from starlette import status

from PartBin.dependencies import get_component_service
from PartBin.routers.base import BaseRouter, standard_error_handling, validate_service_response
from PartBin.schemas.component_schemas import ComponentCreate, ComponentStats, ComponentUpdate
from PartBin.schemas.response import ResponseSchema
from PartBin.services.component_service import ComponentService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Components"])


@router.get("/components", response_model=ResponseSchema[List[Dict[str, Any]]])
@standard_error_handling
async def get_components(
    search: Optional[str] = Query(None, description="Matches name, description, category or location"),
    category: Optional[str] = Query(None, description="Category name, or 'All Categories'"),
    component_service: ComponentService = Depends(get_component_service),
) -> ResponseSchema[List[Dict[str, Any]]]:
    components = validate_service_response(component_service.get_all_components(search=search, category=category))
    return BaseRouter.build_success_response(
        data=components, message="Components retrieved successfully", total_components=len(components)
    )


@router.get("/components/alerts/low-stock", response_model=ResponseSchema[List[Dict[str, Any]]])
@standard_error_handling
async def get_low_stock_components(
    component_service: ComponentService = Depends(get_component_service),
) -> ResponseSchema[List[Dict[str, Any]]]:
    components = validate_service_response(component_service.get_low_stock_components())
    return BaseRouter.build_success_response(
        data=components, message="Low stock components retrieved", total_components=len(components)
    )


@router.get("/components/{component_id}", response_model=ResponseSchema[Dict[str, Any]])
@standard_error_handling
async def get_component(
    component_id: str, component_service: ComponentService = Depends(get_component_service)
) -> ResponseSchema[Dict[str, Any]]:
    component = validate_service_response(component_service.get_component(component_id))
    return BaseRouter.build_success_response(data=component, message="Component retrieved successfully")


@router.post(
    "/components", response_model=ResponseSchema[Dict[str, Any]], status_code=status.HTTP_201_CREATED
)
@standard_error_handling
async def create_component(
    component: ComponentCreate, component_service: ComponentService = Depends(get_component_service)
) -> ResponseSchema[Dict[str, Any]]:
    created = validate_service_response(component_service.create_component(component.model_dump(mode="json")))
    return BaseRouter.build_success_response(data=created, message=f"Component '{created['name']}' created")


@router.patch("/components/{component_id}", response_model=ResponseSchema[Dict[str, Any]])
@standard_error_handling
async def update_component(
    component_id: str,
    updates: ComponentUpdate,
    component_service: ComponentService = Depends(get_component_service),
) -> ResponseSchema[Dict[str, Any]]:
    update_data = updates.model_dump(mode="json", exclude_unset=True)
    updated = validate_service_response(component_service.update_component(component_id, update_data))
    return BaseRouter.build_success_response(data=updated, message=f"Component '{updated['name']}' updated")


@router.delete("/components/{component_id}", response_model=ResponseSchema[Dict[str, str]])
@standard_error_handling
async def delete_component(
    component_id: str, component_service: ComponentService = Depends(get_component_service)
) -> ResponseSchema[Dict[str, str]]:
    deleted = validate_service_response(component_service.delete_component(component_id))
    return BaseRouter.build_success_response(data=deleted, message="Component deleted successfully")


@router.get("/stats", response_model=ResponseSchema[ComponentStats])
@standard_error_handling
async def get_stats(component_service: ComponentService = Depends(get_component_service)) -> ResponseSchema[ComponentStats]:
    stats = validate_service_response(component_service.get_stats())
    return BaseRouter.build_success_response(data=ComponentStats(**stats), message="Inventory statistics")
