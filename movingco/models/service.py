from sqlalchemy import Boolean, Column, String, Text

from movingco.models.base import BaseModel


class Service(BaseModel):
    __tablename__ = "services"
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    image_url = Column(String(500), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
