from typing import Optional

from pydantic import ConfigDict, EmailStr, Field, field_validator

from movingco.core.enums import UserRole
from movingco.schemas.base import CamelModel
from movingco.schemas.user import UserOut


def _strip(v):
    return v.strip() if isinstance(v, str) else v


class LoginIn(CamelModel):
    # Passwords are compared exactly as typed.
    model_config = ConfigDict(str_strip_whitespace=False)

    email: EmailStr
    password: str = Field(min_length=1)
    user_type: UserRole

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, v):
        return _strip(v)

    @field_validator("user_type", mode="before")
    @classmethod
    def lower_user_type(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class RegisterIn(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=False)

    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    first_name: str = Field(min_length=1, max_length=80)
    last_name: str = Field(min_length=1, max_length=80)
    phone: Optional[str] = None
    street_address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = Field(None, pattern=r"^[A-Za-z]{2}$")
    zip_code: Optional[str] = Field(None, pattern=r"^\d{5}(-\d{4})?$")

    @field_validator(
        "email", "first_name", "last_name", "phone", "street_address", "city", "state", "zip_code",
        mode="before",
    )
    @classmethod
    def strip_fields(cls, v):
        return _strip(v)


class TokenOut(CamelModel):
    token: str
    token_type: str = "bearer"
    user: UserOut
