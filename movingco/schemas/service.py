from datetime import datetime
from typing import List, Optional

from pydantic import Field

from movingco.schemas.base import CamelModel, Pagination


class ServiceCreate(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    image_url: str = Field(min_length=1, max_length=500)
    is_active: bool = True


class ServiceUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1)
    image_url: Optional[str] = Field(None, min_length=1, max_length=500)
    is_active: Optional[bool] = None


class ServiceOut(CamelModel):
    id: int
    title: str
    description: str
    image_url: str
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None


class ServiceList(CamelModel):
    services: List[ServiceOut]
    pagination: Pagination
