from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from movingco.schemas.base import CamelModel

STATE_CODE_PATTERN = r"^[A-Za-z]{2}$"


class ServiceAreaCreate(CamelModel):
    state_code: str = Field(pattern=STATE_CODE_PATTERN)
    state_name: str = Field(min_length=1, max_length=80)
    is_active: bool = False

    @field_validator("state_code")
    @classmethod
    def upper_state_code(cls, v: str) -> str:
        return v.upper()


class ServiceAreaUpdate(CamelModel):
    state_name: Optional[str] = Field(None, min_length=1, max_length=80)
    is_active: Optional[bool] = None


class ServiceAreaOut(CamelModel):
    id: int
    state_code: str
    state_name: str
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None


class ServiceAreaList(CamelModel):
    count: int
    service_areas: List[ServiceAreaOut]


class EligibilityOut(CamelModel):
    eligible: bool
    states: List[str]
    unserviced_states: List[str]
