from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field

from movingco.core.enums import UserRole
from movingco.schemas.base import CamelModel, Pagination

PHOTO_FILENAME_PATTERN = r"^[a-zA-Z0-9_\-\s.]+\.[jJ][pP][gG]$"


class UserOut(CamelModel):
    id: int
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    full_name: str = ""
    phone: Optional[str] = None
    street_address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    photo_filename: Optional[str] = None
    user_type: UserRole
    is_active: bool
    last_login_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class AdminContactOut(CamelModel):
    id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: str
    phone: Optional[str] = None
    photo_filename: Optional[str] = None


class UserUpdate(CamelModel):
    email: Optional[EmailStr] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    street_address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = Field(None, pattern=r"^[A-Za-z]{2}$")
    zip_code: Optional[str] = Field(None, pattern=r"^\d{5}(-\d{4})?$")
    photo_filename: Optional[str] = Field(None, pattern=PHOTO_FILENAME_PATTERN)
    is_active: Optional[bool] = None


class UserList(CamelModel):
    users: List[UserOut]
    pagination: Pagination


class UserStats(CamelModel):
    total_users: int
    active_users: int
    inactive_users: int
    admin_count: int
    customer_count: int
