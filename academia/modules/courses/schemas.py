from __future__ import annotations
from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional
from pydantic import BaseModel, Field, model_validator

from academia.pricing.calculator import discount_recommendation, price_breakdown
from academia.utils.media import detect_video_source, is_valid_video_url

VideoSource = Literal["youtube", "local", "url"]
NOT_NULL_FIELDS = ("title", "price", "duration_hours", "language")


def _check_discount(pct: Optional[Decimal]) -> None:
    # 0 (ou vazio) = sem desconto; qualquer outro valor precisa estar entre 1% e 99%
    if pct is not None and pct != 0 and not (1 <= pct <= 99):
        raise ValueError("O desconto deve estar entre 1% e 99%")


class LessonIn(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    video_url: Optional[str] = None
    video_source_type: Optional[VideoSource] = None  # detectado pela URL se ausente
    duration: int = Field(0, ge=0)
    order_index: Optional[int] = None
    is_preview: bool = False

    @model_validator(mode="after")
    def _validate_video(self):
        if self.video_url and detect_video_source(self.video_url) != "local" and not is_valid_video_url(self.video_url):
            raise ValueError(f"URL de vídeo inválida: {self.video_url}")
        return self


class LessonOut(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    video_url: Optional[str] = None
    video_source_type: str
    duration: int
    order_index: int
    is_preview: bool

    class Config:
        from_attributes = True


class CourseCreate(BaseModel):
    title: str = Field(..., min_length=1)
    subtitle: Optional[str] = None
    description: Optional[str] = None
    what_will_learn: Optional[str] = None
    price: Decimal = Field(Decimal("0"), ge=0)
    discount_percentage: Optional[Decimal] = Field(None, ge=0)
    minimum_gain: Optional[Decimal] = Field(None, ge=0)
    thumbnail_url: Optional[str] = None
    video_url: Optional[str] = None
    category_id: Optional[int] = None
    level_id: Optional[int] = None
    duration_hours: float = Field(10, ge=0)
    language: str = "Español"
    is_published: bool = False
    lessons: List[LessonIn] = []

    @model_validator(mode="after")
    def _validate(self):
        _check_discount(self.discount_percentage)
        if self.is_published and not self.lessons:
            raise ValueError("Adicione ao menos uma aula para publicar o curso")
        return self


class CourseUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    subtitle: Optional[str] = None
    description: Optional[str] = None
    what_will_learn: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0)
    discount_percentage: Optional[Decimal] = Field(None, ge=0)
    minimum_gain: Optional[Decimal] = Field(None, ge=0)
    thumbnail_url: Optional[str] = None
    video_url: Optional[str] = None
    category_id: Optional[int] = None
    level_id: Optional[int] = None
    duration_hours: Optional[float] = Field(None, ge=0)
    language: Optional[str] = None
    lessons: Optional[List[LessonIn]] = None  # se enviado, substitui todas as aulas

    @model_validator(mode="after")
    def _validate(self):
        _check_discount(self.discount_percentage)
        # colunas obrigatórias: omitir é ok, null explícito não
        nulls = [f for f in NOT_NULL_FIELDS if f in self.model_fields_set and getattr(self, f) is None]
        if nulls:
            raise ValueError(f"Campos não podem ser nulos: {', '.join(nulls)}")
        return self


class CourseOut(BaseModel):
    id: str
    admin_id: str
    title: str
    subtitle: Optional[str] = None
    description: Optional[str] = None
    what_will_learn: Optional[str] = None
    price: Decimal
    discount_percentage: Optional[Decimal] = None
    minimum_gain: Optional[Decimal] = None
    # calculados, nunca persistidos
    final_price: Decimal
    discount_price: Optional[Decimal] = None
    lost_gain: Decimal
    thumbnail_url: Optional[str] = None
    video_url: Optional[str] = None
    category_id: Optional[int] = None
    level_id: Optional[int] = None
    duration_hours: float
    language: str
    is_published: bool
    published_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    lessons: List[LessonOut] = []

    @classmethod
    def from_course(cls, course) -> "CourseOut":
        pb = price_breakdown(course.price or 0, course.discount_percentage, course.minimum_gain)
        return cls(
            id=course.id,
            admin_id=course.admin_id,
            title=course.title,
            subtitle=course.subtitle,
            description=course.description,
            what_will_learn=course.what_will_learn,
            price=pb.original_amount,
            discount_percentage=course.discount_percentage,
            minimum_gain=course.minimum_gain,
            final_price=pb.final_amount,
            discount_price=pb.final_amount if pb.has_discount else None,
            lost_gain=pb.lost_gain,
            thumbnail_url=course.thumbnail_url,
            video_url=course.video_url,
            category_id=course.category_id,
            level_id=course.level_id,
            duration_hours=float(course.duration_hours or 0),
            language=course.language,
            is_published=course.is_published,
            published_at=course.published_at,
            created_at=course.created_at,
            lessons=[LessonOut.model_validate(l) for l in course.lessons],
        )


class CourseQuoteOut(BaseModel):
    course_id: str
    original_amount: Decimal
    discount_percentage: Optional[Decimal] = None
    minimum_gain: Optional[Decimal] = None
    final_amount: Decimal
    lost_gain: Decimal
    has_discount: bool
    amount_minor_units: int
    currency: str
    recommendation: Optional[str] = None

    @classmethod
    def from_course(cls, course, currency: str) -> "CourseQuoteOut":
        pb = price_breakdown(course.price or 0, course.discount_percentage, course.minimum_gain)
        return cls(
            course_id=course.id,
            original_amount=pb.original_amount,
            discount_percentage=pb.discount_percentage,
            minimum_gain=pb.minimum_gain,
            final_amount=pb.final_amount,
            lost_gain=pb.lost_gain,
            has_discount=pb.has_discount,
            amount_minor_units=pb.amount_minor_units,
            currency=currency,
            recommendation=discount_recommendation(pb.original_amount),
        )
