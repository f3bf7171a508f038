from __future__ import annotations
from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class EnrollmentOut(BaseModel):
    id: str
    client_id: str
    course_id: str
    price_paid: Decimal
    payment_status: str          # free | pending | paid
    payment_intent_id: Optional[str] = None
    progress: int
    enrolled_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CourseSummary(BaseModel):
    id: str
    title: str
    thumbnail_url: Optional[str] = None
    price: Decimal
    duration_hours: float
    language: str
    is_published: bool

    class Config:
        from_attributes = True


class MyEnrollmentOut(EnrollmentOut):
    course: Optional[CourseSummary] = None


class ClientSummary(BaseModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None

    class Config:
        from_attributes = True


class CourseEnrollmentOut(EnrollmentOut):
    client: Optional[ClientSummary] = None


class FreeEnrollmentIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    course_id: str = Field(..., alias="courseId", min_length=1)


class ProgressIn(BaseModel):
    progress: int = Field(..., ge=0, le=100)
    completed: bool = False
