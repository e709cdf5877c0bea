from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from movingco.api.deps import get_user_service
from movingco.core.audit_log import log_audit
from movingco.core.enums import AuditAction, UserRole
from movingco.core.response_builders import build_response, build_user_list
from movingco.core.security import require_admin
from movingco.db.session import get_db
from movingco.models.user import User
from movingco.schemas.base import ApiResponse
from movingco.schemas.quote import SortOrder
from movingco.schemas.user import AdminContactOut, UserList, UserOut, UserStats, UserUpdate
from movingco.services.users import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/admins", response_model=ApiResponse[List[AdminContactOut]])
async def list_admins(users: UserService = Depends(get_user_service)):
    admins = await users.list_admins()
    return build_response(
        "Admin users retrieved successfully",
        [AdminContactOut.model_validate(admin) for admin in admins],
    )


@router.get("/stats", response_model=ApiResponse[UserStats])
async def user_stats(
    users: UserService = Depends(get_user_service),
    admin: User = Depends(require_admin),
):
    return build_response("User statistics retrieved successfully", UserStats(**await users.user_stats()))


@router.get("", response_model=ApiResponse[UserList])
async def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    sort_by: str = Query("created_at"),
    order: SortOrder = Query("desc"),
    user_type: Optional[UserRole] = Query(None),
    users: UserService = Depends(get_user_service),
    admin: User = Depends(require_admin),
):
    result = await users.list_users(page=page, limit=limit, sort_by=sort_by, order=order, user_type=user_type)
    return build_response("Users retrieved successfully", build_user_list(result))


@router.get("/{user_id}", response_model=ApiResponse[UserOut])
async def get_user(
    user_id: int,
    users: UserService = Depends(get_user_service),
    admin: User = Depends(require_admin),
):
    return build_response("User retrieved successfully", UserOut.model_validate(await users.get_user(user_id)))


@router.put("/{user_id}", response_model=ApiResponse[UserOut])
async def update_user(
    user_id: int,
    payload: UserUpdate,
    users: UserService = Depends(get_user_service),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    user = UserOut.model_validate(await users.update_user(user_id, payload))
    await log_audit(db, admin.id, AuditAction.UPDATE_USER, payload)
    return build_response("User updated successfully", user)


@router.delete("/{user_id}", response_model=ApiResponse[UserOut])
async def delete_user(
    user_id: int,
    users: UserService = Depends(get_user_service),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    user = UserOut.model_validate(await users.deactivate_user(user_id))
    await log_audit(db, admin.id, AuditAction.DELETE_USER, {"id": user_id})
    return build_response("User deleted successfully", user)
