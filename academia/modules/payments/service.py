# academia/modules/payments/service.py
"""
Checkout de cursos pagos.

O preço nunca vem do cliente: a cada tentativa o curso é relido do banco e o
valor é recalculado por `academia.pricing.compute_final_price`. O valor em
centavos enviado ao processador é `to_minor_units` desse mesmo preço final,
o mesmo exibido ao comprador.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional, Protocol

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from academia.core.config import settings
from academia.core.dependencies import get_db
from academia.core.errors import (
    CourseNotAvailable, FreeCourse, InvalidInput, InvalidUser, UpstreamPaymentError,
)
from academia.integrations.stripe_client import StripeClient, StripeError
from academia.modules.courses.models import Course
from academia.modules.users.models import User
from academia.pricing.calculator import compute_final_price, to_minor_units

logger = logging.getLogger(__name__)


class PaymentGateway(Protocol):
    async def create_payment_intent(self, *, amount: int, currency: str,
                                    metadata: Optional[Dict[str, Any]] = None,
                                    description: Optional[str] = None) -> Dict[str, Any]: ...


@dataclass(frozen=True, slots=True)
class ChargeRequest:
    course_id: str
    user_id: str
    course_title: str
    final_amount: Decimal
    amount_minor_units: int
    currency: str

    def metadata(self) -> Dict[str, str]:
        return {
            "userId": self.user_id,
            "courseId": self.course_id,
            "courseTitle": self.course_title,
            "finalAmount": str(self.final_amount),
        }


@dataclass(frozen=True, slots=True)
class PaymentIntentResult:
    client_secret: str
    payment_intent_id: str
    amount: int
    final_amount: Decimal
    currency: str


def build_charge_request(
    course: Optional[Course],
    user: Optional[User],
    course_title: Optional[str] = None,
    currency: str | None = None,
) -> ChargeRequest:
    if course is None:
        raise CourseNotAvailable.not_found()
    if not course.is_published:
        raise CourseNotAvailable.unpublished()
    if user is None or user.role != "client":
        raise InvalidUser()

    final = compute_final_price(course.price, course.discount_percentage, course.minimum_gain)
    return ChargeRequest(
        course_id=course.id,
        user_id=user.id,
        course_title=(course_title or "").strip() or course.title,
        final_amount=final,
        amount_minor_units=to_minor_units(final),
        currency=(currency or settings.PAYMENT_CURRENCY).lower(),
    )


class CheckoutService:
    def __init__(self, db: AsyncSession, gateway: PaymentGateway, currency: str | None = None):
        self.db = db
        self.gateway = gateway
        self.currency = currency or settings.PAYMENT_CURRENCY

    async def _get_user(self, user_id: str) -> Optional[User]:
        q = await self.db.execute(select(User).where(User.id == user_id))
        return q.scalar_one_or_none()

    async def _get_course(self, course_id: str) -> Optional[Course]:
        q = await self.db.execute(select(Course).where(Course.id == course_id))
        return q.scalar_one_or_none()

    async def create_payment_intent(
        self, course_id: str, user_id: str, course_title: Optional[str] = None
    ) -> PaymentIntentResult:
        if not (course_id or "").strip() or not (user_id or "").strip():
            raise InvalidInput("courseId e userId são obrigatórios")

        user = await self._get_user(user_id)
        if user is None or user.role != "client" or not user.is_active:
            logger.warning("[CHECKOUT] usuário inválido user=%s", user_id)
            raise InvalidUser()

        course = await self._get_course(course_id)
        charge = build_charge_request(course, user, course_title, self.currency)
        logger.info(
            "[CHECKOUT] course=%s user=%s final=%s amount=%s %s",
            charge.course_id, charge.user_id, charge.final_amount, charge.amount_minor_units, charge.currency,
        )

        if charge.amount_minor_units == 0:
            raise FreeCourse()

        try:
            intent = await self.gateway.create_payment_intent(
                amount=charge.amount_minor_units,
                currency=charge.currency,
                metadata=charge.metadata(),
                description=charge.course_title,
            )
        except StripeError as e:
            raise UpstreamPaymentError(e.message, data=e.data) from e

        client_secret = intent.get("client_secret")
        if not client_secret:
            raise UpstreamPaymentError("Processador não devolveu client_secret", data=intent)

        logger.info("[CHECKOUT] PaymentIntent criado: %s", intent.get("id"))
        return PaymentIntentResult(
            client_secret=client_secret,
            payment_intent_id=intent.get("id") or "",
            amount=charge.amount_minor_units,
            final_amount=charge.final_amount,
            currency=charge.currency,
        )


def get_payment_gateway() -> PaymentGateway:
    return StripeClient(
        settings.STRIPE_SECRET_KEY,
        base_url=settings.STRIPE_API_BASE,
        timeout=settings.PAYMENT_TIMEOUT_SECONDS,
    )


def get_checkout_service(
    db: AsyncSession = Depends(get_db),
    gateway: PaymentGateway = Depends(get_payment_gateway),
) -> CheckoutService:
    return CheckoutService(db, gateway)
