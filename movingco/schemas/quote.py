from datetime import date, datetime
from typing import Dict, List, Literal, Optional

from pydantic import Field, field_validator

from movingco.core.enums import QuoteStatus
from movingco.schemas.base import CamelModel, Pagination

QuoteSortField = Literal["created_at", "updated_at", "move_date", "status"]
SortOrder = Literal["asc", "desc"]


class Address(CamelModel):
    street: str = Field(min_length=1, max_length=255)
    city: str = Field(min_length=1, max_length=120)
    state: str = Field(pattern=r"^[A-Za-z]{2}$")
    zip: str = Field(pattern=r"^\d{5}(-\d{4})?$")

    @field_validator("state")
    @classmethod
    def upper_state(cls, v: str) -> str:
        return v.upper()


class QuoteCreate(CamelModel):
    service_id: int
    from_address: Address
    to_address: Address
    move_date: date


class QuoteUpdate(CamelModel):
    service_id: Optional[int] = None
    from_address: Optional[Address] = None
    to_address: Optional[Address] = None
    move_date: Optional[date] = None
    status: Optional[QuoteStatus] = None
    estimated_price: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None


class QuoteUserSummary(CamelModel):
    id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: str
    phone: Optional[str] = None


class QuoteServiceSummary(CamelModel):
    id: int
    title: str
    description: Optional[str] = None


class QuoteOut(CamelModel):
    id: int
    user_id: int
    service_id: Optional[int] = None
    user: Optional[QuoteUserSummary] = None
    service: Optional[QuoteServiceSummary] = None
    from_address: Address
    to_address: Address
    move_date: date
    status: QuoteStatus
    estimated_price: Optional[float] = None
    notes: str = ""
    created_at: datetime
    updated_at: Optional[datetime] = None


class QuoteList(CamelModel):
    quotes: List[QuoteOut]
    pagination: Pagination


class QuoteStats(CamelModel):
    total: int
    by_status: Dict[QuoteStatus, int]
