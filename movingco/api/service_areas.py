from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from movingco.api.deps import get_service_area_service
from movingco.core.audit_log import log_audit
from movingco.core.enums import AuditAction
from movingco.core.response_builders import build_response, build_service_area_list
from movingco.core.security import require_admin
from movingco.db.session import get_db
from movingco.models.user import User
from movingco.schemas.base import ApiResponse
from movingco.schemas.service_area import (
    EligibilityOut,
    ServiceAreaCreate,
    ServiceAreaList,
    ServiceAreaOut,
    ServiceAreaUpdate,
    STATE_CODE_PATTERN,
)
from movingco.services.service_areas import ServiceAreaService

router = APIRouter(prefix="/service-areas", tags=["service-areas"])


@router.post("/initialize", response_model=ApiResponse[ServiceAreaList], status_code=status.HTTP_201_CREATED)
async def initialize_states(
    areas: ServiceAreaService = Depends(get_service_area_service),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    created = build_service_area_list(await areas.initialize_states())
    await log_audit(db, admin.id, AuditAction.INITIALIZE_SERVICE_AREAS, {"count": created.count})
    return build_response("States initialized successfully", created, status_code=201)


@router.get("/active", response_model=ApiResponse[ServiceAreaList])
async def active_service_areas(areas: ServiceAreaService = Depends(get_service_area_service)):
    active = await areas.list_active()
    return build_response("Active service areas retrieved successfully", build_service_area_list(active))


@router.get("/eligibility", response_model=ApiResponse[EligibilityOut])
async def check_eligibility(
    from_state: str = Query(..., pattern=STATE_CODE_PATTERN),
    to_state: str = Query(..., pattern=STATE_CODE_PATTERN),
    areas: ServiceAreaService = Depends(get_service_area_service),
):
    states = [from_state.upper(), to_state.upper()]
    unserviced = await areas.unserviced_states(*states)
    result = EligibilityOut(eligible=not unserviced, states=states, unserviced_states=unserviced)
    message = "Both states are serviced" if result.eligible else "Some states are not serviced"
    return build_response(message, result)


@router.get("", response_model=ApiResponse[ServiceAreaList])
async def list_service_areas(
    areas: ServiceAreaService = Depends(get_service_area_service),
    admin: User = Depends(require_admin),
):
    return build_response("Service areas retrieved successfully", build_service_area_list(await areas.list_all()))


@router.post("", response_model=ApiResponse[ServiceAreaOut], status_code=status.HTTP_201_CREATED)
async def create_service_area(
    payload: ServiceAreaCreate,
    areas: ServiceAreaService = Depends(get_service_area_service),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    area = ServiceAreaOut.model_validate(await areas.create(payload))
    await log_audit(db, admin.id, AuditAction.CREATE_SERVICE_AREA, payload)
    return build_response("Service area created successfully", area, status_code=201)


@router.get("/{state_code}", response_model=ApiResponse[ServiceAreaOut])
async def get_service_area(
    state_code: str,
    areas: ServiceAreaService = Depends(get_service_area_service),
    admin: User = Depends(require_admin),
):
    area = await areas.get(state_code)
    return build_response("Service area retrieved successfully", ServiceAreaOut.model_validate(area))


@router.put("/{state_code}", response_model=ApiResponse[ServiceAreaOut])
async def update_service_area(
    state_code: str,
    payload: ServiceAreaUpdate,
    areas: ServiceAreaService = Depends(get_service_area_service),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    area = ServiceAreaOut.model_validate(await areas.update(state_code, payload))
    await log_audit(db, admin.id, AuditAction.UPDATE_SERVICE_AREA, payload)
    return build_response("Service area updated successfully", area)


@router.patch("/{state_code}/toggle", response_model=ApiResponse[ServiceAreaOut])
async def toggle_service_area(
    state_code: str,
    areas: ServiceAreaService = Depends(get_service_area_service),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    area = ServiceAreaOut.model_validate(await areas.toggle(state_code))
    await log_audit(db, admin.id, AuditAction.TOGGLE_SERVICE_AREA, {"state_code": area.state_code})
    return build_response(
        f"Service area {'activated' if area.is_active else 'deactivated'} successfully",
        area,
    )


@router.delete("/{state_code}", response_model=ApiResponse[None])
async def delete_service_area(
    state_code: str,
    areas: ServiceAreaService = Depends(get_service_area_service),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    await areas.delete(state_code)
    await log_audit(db, admin.id, AuditAction.DELETE_SERVICE_AREA, {"state_code": state_code.upper()})
    return build_response("Service area deleted successfully")
