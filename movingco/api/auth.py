from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from movingco.api.deps import get_auth_service
from movingco.core.audit_log import log_audit
from movingco.core.enums import AuditAction
from movingco.core.response_builders import build_response
from movingco.core.security import get_current_user
from movingco.db.session import get_db
from movingco.models.user import User
from movingco.schemas.auth import LoginIn, RegisterIn, TokenOut
from movingco.schemas.base import ApiResponse
from movingco.schemas.user import UserOut
from movingco.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=ApiResponse[TokenOut], status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterIn,
    auth: AuthService = Depends(get_auth_service),
    db: AsyncSession = Depends(get_db),
):
    user, token = await auth.register(payload)
    out = TokenOut(token=token, user=UserOut.model_validate(user))
    await log_audit(db, user.id, AuditAction.REGISTER, {"email": out.user.email})
    return build_response("User registered successfully", out, status_code=201)


@router.post("/login", response_model=ApiResponse[TokenOut])
async def login(
    payload: LoginIn,
    auth: AuthService = Depends(get_auth_service),
    db: AsyncSession = Depends(get_db),
):
    user, token = await auth.login(payload)
    out = TokenOut(token=token, user=UserOut.model_validate(user))
    await log_audit(db, user.id, AuditAction.LOGIN, {"email": out.user.email})
    return build_response("Login successful", out)


@router.get("/me", response_model=ApiResponse[UserOut])
async def me(current_user: User = Depends(get_current_user)):
    return build_response("User retrieved successfully", UserOut.model_validate(current_user))


@router.post("/logout", response_model=ApiResponse[None])
async def logout(current_user: User = Depends(get_current_user)):
    # Tokens are stateless; the client discards its copy.
    return build_response("Logout successful")
