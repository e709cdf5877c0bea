from sqlalchemy import Boolean, Column, DateTime, Enum, String

from movingco.core.enums import UserRole
from movingco.models.base import BaseModel


class User(BaseModel):
    __tablename__ = "users"
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(80))
    last_name = Column(String(80))
    phone = Column(String(40))
    street_address = Column(String(255))
    city = Column(String(120))
    state = Column(String(2))
    zip_code = Column(String(10))
    photo_filename = Column(String(255), nullable=True)
    user_type = Column(
        Enum(UserRole, name="user_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=UserRole.CUSTOMER,
        index=True,
    )
    is_active = Column(Boolean, nullable=False, default=True)
    last_login_at = Column(DateTime(timezone=True), nullable=True)

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)
