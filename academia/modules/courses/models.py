from __future__ import annotations
from datetime import datetime
from decimal import Decimal

from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Integer, Boolean, ForeignKey, Numeric, Text, TIMESTAMP
from academia.db.base import Base, TimestampMixin, new_id


class Course(Base, TimestampMixin):
    __tablename__ = "courses"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

    # Dono (admin que criou)
    admin_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)

    title: Mapped[str] = mapped_column(String(255))
    subtitle: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    what_will_learn: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Preço de lista; o preço final é sempre calculado (academia.pricing)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0"))
    discount_percentage: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)
    minimum_gain: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)

    thumbnail_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    video_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    category_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    level_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    duration_hours: Mapped[Decimal] = mapped_column(Numeric(6, 1), default=Decimal("10"))
    language: Mapped[str] = mapped_column(String(50), default="Español")

    is_published: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    published_at: Mapped[datetime | None] = mapped_column(TIMESTAMP(timezone=True), nullable=True)

    lessons: Mapped[list["Lesson"]] = relationship(
        back_populates="course",
        cascade="all, delete-orphan",
        order_by="Lesson.order_index",
        lazy="selectin",
    )


class Lesson(Base):
    __tablename__ = "lessons"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    course_id: Mapped[str] = mapped_column(ForeignKey("courses.id", ondelete="CASCADE"), index=True)

    title: Mapped[str] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    video_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    video_source_type: Mapped[str] = mapped_column(String(20), default="url")  # youtube | local | url
    duration: Mapped[int] = mapped_column(Integer, default=0)  # minutos
    order_index: Mapped[int] = mapped_column(Integer, default=0)
    is_preview: Mapped[bool] = mapped_column(Boolean, default=False)

    course: Mapped[Course] = relationship(back_populates="lessons")
