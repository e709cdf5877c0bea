import logging
from datetime import date
from typing import Callable, Optional

from movingco.core.auth_utils import check_not_found, check_ownership
from movingco.core.enums import QUOTE_TRANSITIONS, QuoteStatus
from movingco.core.exceptions import ValidationError
from movingco.core.metrics import quote_status_changes, quotes_created
from movingco.models.quote import Quote
from movingco.models.user import User
from movingco.repositories.catalog import ServiceRepository
from movingco.repositories.quotes import QuoteRepository
from movingco.schemas.base import Page
from movingco.schemas.quote import Address, QuoteCreate, QuoteUpdate
from movingco.services.service_areas import ServiceAreaService

logger = logging.getLogger(__name__)


def address_columns(prefix: str, address: Address) -> dict:
    return {
        f"{prefix}_street": address.street,
        f"{prefix}_city": address.city,
        f"{prefix}_state": address.state,
        f"{prefix}_zip": address.zip,
    }


def check_transition(current: QuoteStatus, target: QuoteStatus) -> None:
    if current == target:
        return
    if target not in QUOTE_TRANSITIONS[current]:
        raise ValidationError(f"Cannot change quote status from {current} to {target}")


class QuoteService:
    """Quote lifecycle: submission checks, admin review, listing and stats.

    ``enforce_service_areas`` turns on the server-side admission check and
    ``strict_transitions`` restricts status changes to QUOTE_TRANSITIONS.
    ``today`` is injectable so date validation can be pinned in tests.
    """

    def __init__(
        self,
        quotes: QuoteRepository,
        catalog: ServiceRepository,
        service_areas: ServiceAreaService,
        enforce_service_areas: bool = True,
        strict_transitions: bool = False,
        today: Callable[[], date] = date.today,
    ):
        self.quotes = quotes
        self.catalog = catalog
        self.service_areas = service_areas
        self.enforce_service_areas = enforce_service_areas
        self.strict_transitions = strict_transitions
        self.today = today

    def _check_move_date(self, move_date: date) -> None:
        if move_date <= self.today():
            raise ValidationError("Move date must be in the future")

    async def _check_service(self, service_id: int) -> None:
        service = await self.catalog.get(service_id)
        if not service or not service.is_active:
            raise ValidationError("Selected service is not available")

    async def create_quote(self, user: User, payload: QuoteCreate) -> Quote:
        self._check_move_date(payload.move_date)
        await self._check_service(payload.service_id)
        if self.enforce_service_areas:
            await self.service_areas.ensure_serviceable(
                payload.from_address.state, payload.to_address.state
            )

        quote = await self.quotes.create(
            user_id=user.id,
            service_id=payload.service_id,
            move_date=payload.move_date,
            status=QuoteStatus.PENDING,
            notes="",
            **address_columns("from", payload.from_address),
            **address_columns("to", payload.to_address),
        )
        quotes_created.inc()
        logger.info(
            f"Quote {quote.id} submitted by user {user.id}: "
            f"{quote.from_state} -> {quote.to_state} on {quote.move_date}"
        )
        return quote

    async def get_quote(self, quote_id: int, current_user: Optional[User] = None) -> Quote:
        quote = await self.quotes.get(quote_id)
        check_not_found(quote, "Quote")
        if current_user is not None:
            check_ownership(quote, current_user, "Quote")
        return quote

    async def update_quote(self, quote_id: int, payload: QuoteUpdate) -> Quote:
        quote = await self.get_quote(quote_id)
        patch = payload.model_dump(exclude_unset=True)
        data = {}

        if patch.get("move_date") is not None and payload.move_date != quote.move_date:
            self._check_move_date(payload.move_date)
            data["move_date"] = payload.move_date

        if patch.get("service_id") is not None and payload.service_id != quote.service_id:
            await self._check_service(payload.service_id)
            data["service_id"] = payload.service_id

        new_states = []
        if payload.from_address is not None:
            data.update(address_columns("from", payload.from_address))
            if payload.from_address.state != quote.from_state:
                new_states.append(payload.from_address.state)
        if payload.to_address is not None:
            data.update(address_columns("to", payload.to_address))
            if payload.to_address.state != quote.to_state:
                new_states.append(payload.to_address.state)
        if new_states and self.enforce_service_areas:
            await self.service_areas.ensure_serviceable(*new_states)

        old_status = quote.status
        if patch.get("status") is not None:
            if self.strict_transitions:
                check_transition(old_status, payload.status)
            data["status"] = payload.status

        if "estimated_price" in patch:
            data["estimated_price"] = payload.estimated_price
        if "notes" in patch:
            data["notes"] = payload.notes or ""

        quote = await self.quotes.update(quote, data)
        if quote.status != old_status:
            quote_status_changes.labels(from_status=str(old_status), to_status=str(quote.status)).inc()
            logger.info(f"Quote {quote.id} moved from {old_status} to {quote.status}")
        return quote

    async def delete_quote(self, quote_id: int, current_user: Optional[User] = None) -> None:
        quote = await self.get_quote(quote_id, current_user)
        await self.quotes.delete(quote)
        logger.info(f"Quote {quote_id} deleted")

    async def list_quotes(self, **options) -> Page:
        return await self.quotes.list(**options)

    async def list_user_quotes(self, user: User, **options) -> Page:
        options.pop("user_id", None)
        options.pop("status", None)
        return await self.quotes.list(user_id=user.id, **options)

    async def quote_stats(self) -> dict:
        counts = await self.quotes.count_by_status()
        by_status = {status: counts.get(status, 0) for status in QuoteStatus}
        return {"total": sum(by_status.values()), "by_status": by_status}
