# academia/modules/enrollments/router.py
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_

from academia.core.dependencies import get_db, require_admin, require_client
from academia.modules.courses.crud import get_own_course_or_404, get_published_course_or_404
from academia.modules.courses.models import Course
from academia.modules.users.models import User
from academia.pricing.calculator import compute_final_price
from .crud import create_enrollment
from .models import Enrollment
from .schemas import (
    ClientSummary, CourseEnrollmentOut, CourseSummary, EnrollmentOut,
    FreeEnrollmentIn, MyEnrollmentOut, ProgressIn,
)

router = APIRouter()  # incluído com prefix "/enrollments"

@router.get("/mine", response_model=list[MyEnrollmentOut])
async def list_my_enrollments(
    db: AsyncSession = Depends(get_db),
    me: User = Depends(require_client),
):
    res = await db.execute(
        select(Enrollment, Course)
        .join(Course, Course.id == Enrollment.course_id)
        .where(Enrollment.client_id == me.id)
        .order_by(Enrollment.enrolled_at.desc())
    )
    out = []
    for enr, course in res.all():
        item = MyEnrollmentOut.model_validate(enr)
        item.course = CourseSummary.model_validate(course)
        out.append(item)
    return out

@router.get("/course/{course_id}", response_model=list[CourseEnrollmentOut])
async def list_course_enrollments(
    course_id: str,
    db: AsyncSession = Depends(get_db),
    me: User = Depends(require_admin),
):
    await get_own_course_or_404(db, me.id, course_id)
    res = await db.execute(
        select(Enrollment, User)
        .join(User, User.id == Enrollment.client_id)
        .where(Enrollment.course_id == course_id)
        .order_by(Enrollment.enrolled_at.desc())
    )
    out = []
    for enr, client in res.all():
        item = CourseEnrollmentOut.model_validate(enr)
        item.client = ClientSummary.model_validate(client)
        out.append(item)
    return out

# Inscrição direta: só para cursos cujo preço final é zero
@router.post("/free", response_model=EnrollmentOut, status_code=status.HTTP_201_CREATED)
async def enroll_free_course(
    payload: FreeEnrollmentIn,
    db: AsyncSession = Depends(get_db),
    me: User = Depends(require_client),
):
    course = await get_published_course_or_404(db, payload.course_id)
    final = compute_final_price(course.price, course.discount_percentage, course.minimum_gain)
    if final > 0:
        raise HTTPException(status_code=400, detail="Curso pago: finalize o pagamento para se inscrever")
    return await create_enrollment(
        db, client_id=me.id, course_id=course.id, price_paid=final, payment_status="free",
    )

@router.patch("/{enrollment_id}/progress", response_model=EnrollmentOut)
async def update_progress(
    enrollment_id: str,
    payload: ProgressIn,
    db: AsyncSession = Depends(get_db),
    me: User = Depends(require_client),
):
    res = await db.execute(
        select(Enrollment).where(and_(Enrollment.id == enrollment_id, Enrollment.client_id == me.id))
    )
    obj = res.scalar_one_or_none()
    if not obj:
        raise HTTPException(status_code=404, detail="Inscrição não encontrada")

    obj.progress = payload.progress
    if payload.completed:
        obj.progress = 100
        obj.completed_at = datetime.now(timezone.utc)
    await db.commit()
    await db.refresh(obj)
    return obj
