# academia/modules/webhooks/router.py
import json
import logging

import stripe
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from academia.core.config import settings
from academia.core.dependencies import get_db
from academia.modules.courses.crud import get_course
from academia.modules.enrollments.crud import (
    create_enrollment, get_enrollment_by_intent, get_enrollment_or_none,
)
from academia.modules.users.models import User
from academia.pricing.calculator import from_minor_units

logger = logging.getLogger(__name__)

router = APIRouter()

SIGNATURE_TOLERANCE_SECONDS = 300
# ambientes em que o webhook aceita eventos sem assinatura
UNSIGNED_ENVIRONMENTS = {"dev", "test"}


def verify_stripe_signature(payload: bytes, header: str | None, secret: str,
                            tolerance: int = SIGNATURE_TOLERANCE_SECONDS) -> None:
    """Valida o header Stripe-Signature ("t=...,v1=...") com o SDK do Stripe."""
    if not header:
        raise HTTPException(status_code=400, detail="Stripe-Signature ausente")
    try:
        stripe.WebhookSignature.verify_header(payload.decode("utf-8"), header, secret, tolerance)
    except (stripe.SignatureVerificationError, UnicodeDecodeError) as e:
        logger.warning("[STRIPE][WEBHOOK] assinatura recusada: %s", e)
        raise HTTPException(status_code=400, detail="Stripe-Signature inválida")


@router.post("/stripe", status_code=status.HTTP_200_OK)
async def stripe_webhook(request: Request, db: AsyncSession = Depends(get_db)):
    raw = await request.body()
    if settings.STRIPE_WEBHOOK_SECRET:
        verify_stripe_signature(raw, request.headers.get("stripe-signature"), settings.STRIPE_WEBHOOK_SECRET)
    elif (settings.ENVIRONMENT or "").lower().strip() not in UNSIGNED_ENVIRONMENTS:
        logger.error("[STRIPE][WEBHOOK] STRIPE_WEBHOOK_SECRET não configurado")
        raise HTTPException(status_code=503, detail="Webhook do Stripe não configurado")
    try:
        event = json.loads(raw)
    except ValueError:
        raise HTTPException(status_code=400, detail="Payload inválido")
    if not isinstance(event, dict):
        raise HTTPException(status_code=400, detail="Payload inválido")

    event_type = event.get("type")
    if event_type != "payment_intent.succeeded":
        return {"received": True, "event": event_type, "handled": False}

    data = event.get("data")
    intent = data.get("object") if isinstance(data, dict) else None
    if not isinstance(intent, dict):
        raise HTTPException(status_code=400, detail="Payload inválido")
    intent_id = intent.get("id")
    metadata = intent.get("metadata")
    if not isinstance(metadata, dict):
        metadata = {}
    course_id = metadata.get("courseId")
    user_id = metadata.get("userId")
    if not intent_id or not course_id or not user_id:
        logger.warning("[STRIPE][WEBHOOK] PaymentIntent sem metadata: %s", intent_id)
        raise HTTPException(status_code=400, detail="PaymentIntent sem courseId/userId")

    # Stripe reenvia eventos: a inscrição é única por PaymentIntent e por aluno+curso
    if await get_enrollment_by_intent(db, intent_id) or await get_enrollment_or_none(db, user_id, course_id):
        return {"received": True, "event": event_type, "handled": False, "duplicate": True}

    user = await db.get(User, user_id)
    if not user or user.role != "client":
        logger.error("[STRIPE][WEBHOOK] usuário %s inválido (intent=%s)", user_id, intent_id)
        raise HTTPException(status_code=400, detail="Usuário inválido para inscrição")

    if not await get_course(db, course_id):
        logger.error("[STRIPE][WEBHOOK] curso %s não existe (intent=%s)", course_id, intent_id)
        raise HTTPException(status_code=404, detail="Curso não encontrado")

    amount = intent.get("amount_received") or intent.get("amount") or 0
    enrollment = await create_enrollment(
        db,
        client_id=user_id,
        course_id=course_id,
        price_paid=from_minor_units(amount),
        payment_status="paid",
        payment_intent_id=intent_id,
    )
    logger.info("[STRIPE][WEBHOOK] inscrição %s criada (intent=%s)", enrollment.id, intent_id)
    return {"received": True, "event": event_type, "handled": True, "enrollment_id": enrollment.id}
