from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from movingco.api.deps import get_catalog_service
from movingco.core.audit_log import log_audit
from movingco.core.enums import AuditAction
from movingco.core.response_builders import build_response, build_service_list
from movingco.core.security import require_admin
from movingco.db.session import get_db
from movingco.models.user import User
from movingco.schemas.base import ApiResponse
from movingco.schemas.quote import SortOrder
from movingco.schemas.service import ServiceCreate, ServiceList, ServiceOut, ServiceUpdate
from movingco.services.catalog import CatalogService

router = APIRouter(prefix="/services", tags=["services"])


@router.get("", response_model=ApiResponse[ServiceList])
async def list_services(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    sort_by: str = Query("created_at"),
    order: SortOrder = Query("desc"),
    catalog: CatalogService = Depends(get_catalog_service),
):
    result = await catalog.list_services(page=page, limit=limit, sort_by=sort_by, order=order)
    return build_response("Services retrieved successfully", build_service_list(result))


@router.get("/{service_id}", response_model=ApiResponse[ServiceOut])
async def get_service(service_id: int, catalog: CatalogService = Depends(get_catalog_service)):
    service = await catalog.get_service(service_id)
    return build_response("Service retrieved successfully", ServiceOut.model_validate(service))


@router.post("", response_model=ApiResponse[ServiceOut], status_code=status.HTTP_201_CREATED)
async def create_service(
    payload: ServiceCreate,
    catalog: CatalogService = Depends(get_catalog_service),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    service = ServiceOut.model_validate(await catalog.create_service(payload))
    await log_audit(db, admin.id, AuditAction.CREATE_SERVICE, payload)
    return build_response("Service created successfully", service, status_code=201)


@router.put("/{service_id}", response_model=ApiResponse[ServiceOut])
async def update_service(
    service_id: int,
    payload: ServiceUpdate,
    catalog: CatalogService = Depends(get_catalog_service),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    service = ServiceOut.model_validate(await catalog.update_service(service_id, payload))
    await log_audit(db, admin.id, AuditAction.UPDATE_SERVICE, payload)
    return build_response("Service updated successfully", service)


@router.delete("/{service_id}", response_model=ApiResponse[ServiceOut])
async def delete_service(
    service_id: int,
    catalog: CatalogService = Depends(get_catalog_service),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    service = ServiceOut.model_validate(await catalog.delete_service(service_id))
    await log_audit(db, admin.id, AuditAction.DELETE_SERVICE, {"id": service_id})
    return build_response("Service deleted successfully", service)
