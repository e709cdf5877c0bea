from sqlalchemy import Column, Date, Enum, Float, ForeignKey, Index, String, Text
from sqlalchemy.orm import relationship

from movingco.core.enums import QuoteStatus
from movingco.models.base import BaseModel


class Quote(BaseModel):
    __tablename__ = "quotes"
    __table_args__ = (
        Index("ix_quotes_user_created", "user_id", "created_at"),
        Index("ix_quotes_status_created", "status", "created_at"),
    )

    user_id = Column(ForeignKey("users.id"), nullable=False)
    service_id = Column(ForeignKey("services.id", ondelete="SET NULL"), nullable=True, index=True)

    user = relationship("User", backref="quotes")
    service = relationship("Service")

    from_street = Column(String(255), nullable=False)
    from_city = Column(String(120), nullable=False)
    from_state = Column(String(2), nullable=False)
    from_zip = Column(String(10), nullable=False)

    to_street = Column(String(255), nullable=False)
    to_city = Column(String(120), nullable=False)
    to_state = Column(String(2), nullable=False)
    to_zip = Column(String(10), nullable=False)

    move_date = Column(Date, nullable=False)
    status = Column(
        Enum(QuoteStatus, name="quote_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=QuoteStatus.PENDING,
    )
    estimated_price = Column(Float, nullable=True)
    notes = Column(Text, nullable=False, default="")
