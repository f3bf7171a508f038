# academia/modules/enrollments/crud.py
import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from fastapi import HTTPException, status

from .models import Enrollment

logger = logging.getLogger(__name__)

async def get_enrollment_or_none(db: AsyncSession, client_id: str, course_id: str) -> Enrollment | None:
    q = await db.execute(
        select(Enrollment).where(Enrollment.client_id == client_id, Enrollment.course_id == course_id)
    )
    return q.scalar_one_or_none()

async def get_enrollment_by_intent(db: AsyncSession, payment_intent_id: str) -> Enrollment | None:
    q = await db.execute(select(Enrollment).where(Enrollment.payment_intent_id == payment_intent_id))
    return q.scalar_one_or_none()

async def create_enrollment(
    db: AsyncSession,
    *,
    client_id: str,
    course_id: str,
    price_paid: Decimal,
    payment_status: str,
    payment_intent_id: str | None = None,
) -> Enrollment:
    if await get_enrollment_or_none(db, client_id, course_id):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Aluno já inscrito neste curso.")

    obj = Enrollment(
        client_id=client_id,
        course_id=course_id,
        price_paid=price_paid,
        payment_status=payment_status,
        payment_intent_id=payment_intent_id,
        progress=0,
    )
    db.add(obj)
    try:
        await db.commit()
    except IntegrityError:
        # corrida entre duas requisições para a mesma inscrição
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Aluno já inscrito neste curso.")
    await db.refresh(obj)
    logger.info("[ENROLLMENT] client=%s course=%s status=%s", client_id, course_id, payment_status)
    return obj
