from typing import Any, Optional

from movingco.models.quote import Quote
from movingco.schemas.base import Page
from movingco.schemas.quote import Address, QuoteList, QuoteOut, QuoteServiceSummary, QuoteUserSummary
from movingco.schemas.service import ServiceList, ServiceOut
from movingco.schemas.service_area import ServiceAreaList, ServiceAreaOut
from movingco.schemas.user import UserList, UserOut


def build_response(message: str, data: Optional[Any] = None, status_code: int = 200) -> dict:
    """Success envelope; FastAPI validates it against the route's ApiResponse[...] model."""
    return {"success": True, "status_code": status_code, "message": message, "data": data}


def build_quote_response(quote: Quote) -> QuoteOut:
    return QuoteOut(
        id=quote.id,
        user_id=quote.user_id,
        service_id=quote.service_id,
        user=QuoteUserSummary.model_validate(quote.user) if quote.user else None,
        service=QuoteServiceSummary.model_validate(quote.service) if quote.service else None,
        from_address=Address(
            street=quote.from_street,
            city=quote.from_city,
            state=quote.from_state,
            zip=quote.from_zip,
        ),
        to_address=Address(
            street=quote.to_street,
            city=quote.to_city,
            state=quote.to_state,
            zip=quote.to_zip,
        ),
        move_date=quote.move_date,
        status=quote.status,
        estimated_price=quote.estimated_price,
        notes=quote.notes or "",
        created_at=quote.created_at,
        updated_at=quote.updated_at,
    )


def build_quote_list(page: Page) -> QuoteList:
    return QuoteList(
        quotes=[build_quote_response(quote) for quote in page.items],
        pagination=page.pagination,
    )


def build_service_list(page: Page) -> ServiceList:
    return ServiceList(
        services=[ServiceOut.model_validate(service) for service in page.items],
        pagination=page.pagination,
    )


def build_service_area_list(areas: list) -> ServiceAreaList:
    return ServiceAreaList(
        count=len(areas),
        service_areas=[ServiceAreaOut.model_validate(area) for area in areas],
    )


def build_user_list(page: Page) -> UserList:
    return UserList(
        users=[UserOut.model_validate(user) for user in page.items],
        pagination=page.pagination,
    )
