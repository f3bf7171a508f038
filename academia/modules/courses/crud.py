# academia/modules/courses/crud.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fastapi import HTTPException, status

from academia.utils.media import detect_video_source
from .models import Course, Lesson
from .schemas import LessonIn

async def get_course(db: AsyncSession, course_id: str) -> Course | None:
    q = await db.execute(
        select(Course).where(Course.id == course_id).execution_options(populate_existing=True)
    )
    return q.scalar_one_or_none()

async def get_published_course_or_404(db: AsyncSession, course_id: str) -> Course:
    course = await get_course(db, course_id)
    if not course or not course.is_published:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Curso não encontrado.")
    return course

async def get_own_course_or_404(db: AsyncSession, admin_id: str, course_id: str) -> Course:
    course = await get_course(db, course_id)
    if not course or course.admin_id != admin_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Curso não encontrado.")
    return course

def build_lessons(items: list[LessonIn]) -> list[Lesson]:
    lessons = []
    for i, item in enumerate(items):
        lessons.append(Lesson(
            title=item.title.strip(),
            description=item.description or None,
            video_url=item.video_url or None,
            video_source_type=item.video_source_type or detect_video_source(item.video_url),
            duration=item.duration,
            order_index=item.order_index if item.order_index is not None else i,
            is_preview=item.is_preview,
        ))
    return lessons
