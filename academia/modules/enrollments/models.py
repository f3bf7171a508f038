from __future__ import annotations
from datetime import datetime
from decimal import Decimal

from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Integer, ForeignKey, Numeric, TIMESTAMP, UniqueConstraint, func
from academia.db.base import Base, new_id

PAYMENT_STATUSES = ("free", "pending", "paid")


class Enrollment(Base):
    __tablename__ = "enrollments"
    __table_args__ = (UniqueConstraint("client_id", "course_id", name="uq_enrollment_client_course"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    client_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    course_id: Mapped[str] = mapped_column(ForeignKey("courses.id", ondelete="CASCADE"), index=True)

    price_paid: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0"))
    payment_status: Mapped[str] = mapped_column(String(20), default="pending")  # free | pending | paid
    payment_intent_id: Mapped[str | None] = mapped_column(String(255), nullable=True, unique=True)

    progress: Mapped[int] = mapped_column(Integer, default=0)  # 0..100
    enrolled_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), server_default=func.now())
    completed_at: Mapped[datetime | None] = mapped_column(TIMESTAMP(timezone=True), nullable=True)
    updated_at: Mapped[datetime | None] = mapped_column(TIMESTAMP(timezone=True), nullable=True, onupdate=func.now())
