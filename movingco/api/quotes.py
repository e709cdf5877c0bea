import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from movingco.api.deps import get_quote_service
from movingco.core.audit_log import log_audit
from movingco.core.enums import AuditAction, QuoteStatus
from movingco.core.rate_limit import check_rate_limit
from movingco.core.response_builders import build_quote_list, build_quote_response, build_response
from movingco.core.security import get_current_user, require_admin
from movingco.db.session import get_db
from movingco.models.user import User
from movingco.schemas.base import ApiResponse
from movingco.schemas.quote import QuoteCreate, QuoteList, QuoteOut, QuoteSortField, QuoteStats, QuoteUpdate, SortOrder
from movingco.services.quotes import QuoteService
from movingco.utils.idempotency import get_idempotent, set_idempotent

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/quotes", tags=["quotes"])


@router.post("", response_model=ApiResponse[QuoteOut], status_code=status.HTTP_201_CREATED)
async def create_quote(
    payload: QuoteCreate,
    idempotency_key: Optional[str] = Header(None),
    quotes: QuoteService = Depends(get_quote_service),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if idempotency_key:
        prev = await get_idempotent(current_user.id, idempotency_key)
        if prev:
            logger.info(f"Replaying quote {prev.get('id')} for idempotency key {idempotency_key}")
            return build_response("Quote created successfully", QuoteOut.model_validate(prev), status_code=201)

    await check_rate_limit(current_user.id)

    quote = await quotes.create_quote(current_user, payload)
    out = build_quote_response(quote)
    await log_audit(db, current_user.id, AuditAction.CREATE_QUOTE, payload)

    if idempotency_key:
        await set_idempotent(current_user.id, idempotency_key, out.model_dump(mode="json", by_alias=True))
    return build_response("Quote created successfully", out, status_code=201)


@router.get("/user/my-quotes", response_model=ApiResponse[QuoteList])
async def my_quotes(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    sort_by: QuoteSortField = Query("created_at"),
    order: SortOrder = Query("desc"),
    quotes: QuoteService = Depends(get_quote_service),
    current_user: User = Depends(get_current_user),
):
    result = await quotes.list_user_quotes(current_user, page=page, limit=limit, sort_by=sort_by, order=order)
    return build_response("User quotes retrieved successfully", build_quote_list(result))


@router.get("/stats", response_model=ApiResponse[QuoteStats])
async def quote_stats(
    quotes: QuoteService = Depends(get_quote_service),
    admin: User = Depends(require_admin),
):
    stats = await quotes.quote_stats()
    return build_response("Quote statistics retrieved successfully", QuoteStats(**stats))


@router.get("", response_model=ApiResponse[QuoteList])
async def list_quotes(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    sort_by: QuoteSortField = Query("created_at"),
    order: SortOrder = Query("desc"),
    status: Optional[QuoteStatus] = Query(None),
    user_id: Optional[int] = Query(None),
    quotes: QuoteService = Depends(get_quote_service),
    admin: User = Depends(require_admin),
):
    result = await quotes.list_quotes(
        page=page, limit=limit, sort_by=sort_by, order=order, status=status, user_id=user_id
    )
    return build_response("Quotes retrieved successfully", build_quote_list(result))


@router.get("/{quote_id}", response_model=ApiResponse[QuoteOut])
async def get_quote(
    quote_id: int,
    quotes: QuoteService = Depends(get_quote_service),
    current_user: User = Depends(get_current_user),
):
    quote = await quotes.get_quote(quote_id, current_user)
    return build_response("Quote retrieved successfully", build_quote_response(quote))


@router.put("/{quote_id}", response_model=ApiResponse[QuoteOut])
async def update_quote(
    quote_id: int,
    payload: QuoteUpdate,
    quotes: QuoteService = Depends(get_quote_service),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    quote = await quotes.update_quote(quote_id, payload)
    out = build_quote_response(quote)
    await log_audit(db, admin.id, AuditAction.UPDATE_QUOTE, payload)
    return build_response("Quote updated successfully", out)


@router.delete("/{quote_id}", response_model=ApiResponse[None])
async def delete_quote(
    quote_id: int,
    quotes: QuoteService = Depends(get_quote_service),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    await quotes.delete_quote(quote_id, current_user)
    await log_audit(db, current_user.id, AuditAction.DELETE_QUOTE, {"id": quote_id})
    return build_response("Quote deleted successfully")
