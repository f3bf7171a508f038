# academia/api/v1/router.py
from fastapi import APIRouter
from academia.modules.auth.router import router as auth_router
from academia.modules.courses.router import router as courses_router
from academia.modules.enrollments.router import router as enrollments_router
from academia.modules.payments.router import router as payments_router
from academia.modules.webhooks.router import router as webhooks_router

api_router = APIRouter()

api_router.include_router(auth_router,        prefix="/auth",        tags=["auth"])
api_router.include_router(courses_router,     prefix="/courses",     tags=["courses"])
api_router.include_router(enrollments_router, prefix="/enrollments", tags=["enrollments"])
api_router.include_router(payments_router,    prefix="/payments",    tags=["payments"])
api_router.include_router(webhooks_router,    prefix="/webhooks",    tags=["webhooks"])
