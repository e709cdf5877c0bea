from sqlalchemy import Boolean, Column, String

from movingco.models.base import BaseModel


class ServiceArea(BaseModel):
    __tablename__ = "service_areas"
    state_code = Column(String(2), unique=True, nullable=False, index=True)
    state_name = Column(String(80), nullable=False)
    is_active = Column(Boolean, nullable=False, default=False)
