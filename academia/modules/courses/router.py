# academia/modules/courses/router.py
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from academia.core.config import settings
from academia.core.dependencies import get_db, require_admin
from academia.modules.users.models import User
from .crud import build_lessons, get_course, get_own_course_or_404, get_published_course_or_404
from .models import Course
from .schemas import CourseCreate, CourseOut, CourseQuoteOut, CourseUpdate

router = APIRouter()  # será incluído com prefix "/courses"

# CATÁLOGO (publicados)
@router.get("", response_model=list[CourseOut])
async def list_published_courses(
    db: AsyncSession = Depends(get_db),
    category_id: Optional[int] = None,
    level_id: Optional[int] = None,
    limit: int = Query(100, le=1000),
    offset: int = 0,
):
    stmt = select(Course).where(Course.is_published == True)
    if category_id is not None:
        stmt = stmt.where(Course.category_id == category_id)
    if level_id is not None:
        stmt = stmt.where(Course.level_id == level_id)
    stmt = stmt.order_by(Course.created_at.desc()).limit(limit).offset(offset)
    res = await db.execute(stmt)
    return [CourseOut.from_course(c) for c in res.scalars().all()]

# CURSOS DO ADMIN (inclui rascunhos)
@router.get("/mine", response_model=list[CourseOut])
async def list_my_courses(
    db: AsyncSession = Depends(get_db),
    me: User = Depends(require_admin),
):
    res = await db.execute(
        select(Course).where(Course.admin_id == me.id).order_by(Course.created_at.desc())
    )
    return [CourseOut.from_course(c) for c in res.scalars().all()]

# PRÉ-VISUALIZAÇÃO DO ADMIN
@router.get("/mine/{course_id}", response_model=CourseOut)
async def preview_my_course(
    course_id: str,
    db: AsyncSession = Depends(get_db),
    me: User = Depends(require_admin),
):
    return CourseOut.from_course(await get_own_course_or_404(db, me.id, course_id))

@router.get("/{course_id}", response_model=CourseOut)
async def get_published_course(course_id: str, db: AsyncSession = Depends(get_db)):
    return CourseOut.from_course(await get_published_course_or_404(db, course_id))

# COTAÇÃO: mesmo cálculo usado no checkout
@router.get("/{course_id}/quote", response_model=CourseQuoteOut)
async def quote_course(course_id: str, db: AsyncSession = Depends(get_db)):
    course = await get_published_course_or_404(db, course_id)
    return CourseQuoteOut.from_course(course, settings.PAYMENT_CURRENCY)

# CREATE
@router.post("", response_model=CourseOut, status_code=status.HTTP_201_CREATED)
async def create_course(
    payload: CourseCreate,
    db: AsyncSession = Depends(get_db),
    me: User = Depends(require_admin),
):
    data = payload.model_dump(exclude={"lessons"})
    data["title"] = data["title"].strip()
    obj = Course(**data, admin_id=me.id)
    obj.lessons = build_lessons(payload.lessons)
    if obj.is_published:
        obj.published_at = datetime.now(timezone.utc)
    db.add(obj)
    await db.commit()
    return CourseOut.from_course(await get_course(db, obj.id))

# UPDATE
@router.put("/{course_id}", response_model=CourseOut)
async def update_course(
    course_id: str,
    payload: CourseUpdate,
    db: AsyncSession = Depends(get_db),
    me: User = Depends(require_admin),
):
    obj = await get_own_course_or_404(db, me.id, course_id)

    changes = payload.model_dump(exclude_unset=True, exclude={"lessons"})
    for k, v in changes.items():
        setattr(obj, k, v)
    if payload.lessons is not None:
        if obj.is_published and not payload.lessons:
            raise HTTPException(status_code=400, detail="Curso publicado precisa de ao menos uma aula")
        obj.lessons = build_lessons(payload.lessons)

    await db.commit()
    return CourseOut.from_course(await get_course(db, course_id))

# PUBLICAR / DESPUBLICAR
@router.post("/{course_id}/publish", response_model=CourseOut)
async def toggle_publish(
    course_id: str,
    publish: bool = True,
    db: AsyncSession = Depends(get_db),
    me: User = Depends(require_admin),
):
    obj = await get_own_course_or_404(db, me.id, course_id)
    if publish and not obj.lessons:
        raise HTTPException(status_code=400, detail="Adicione ao menos uma aula para publicar o curso")

    obj.is_published = publish
    obj.published_at = datetime.now(timezone.utc) if publish else None
    await db.commit()
    return CourseOut.from_course(await get_course(db, course_id))

# DELETE
@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_course(
    course_id: str,
    db: AsyncSession = Depends(get_db),
    me: User = Depends(require_admin),
):
    obj = await get_own_course_or_404(db, me.id, course_id)
    await db.delete(obj)
    await db.commit()
    return
