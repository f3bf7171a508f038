"""Pytest fixtures: SQLite temporário, gateway de pagamento falso e TestClient."""
import asyncio
import os
from decimal import Decimal

os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["SECRET_KEY"] = "test-secret"
os.environ.pop("STRIPE_WEBHOOK_SECRET", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from academia.core.config import settings
from academia.core.dependencies import get_db
from academia.core.security import create_access_token, hash_password
from academia.db.base import Base
from academia.main import app
from academia.modules.courses.models import Course, Lesson
from academia.modules.payments.service import get_payment_gateway
from academia.modules.users.models import User


class FakeGateway:
    """Registra as chamadas em vez de falar com o Stripe."""

    def __init__(self, error: Exception | None = None):
        self.calls: list[dict] = []
        self.error = error

    async def create_payment_intent(self, *, amount, currency, metadata=None, description=None):
        self.calls.append(
            {"amount": amount, "currency": currency, "metadata": metadata, "description": description}
        )
        if self.error:
            raise self.error
        n = len(self.calls)
        return {"id": f"pi_test_{n}", "client_secret": f"pi_test_{n}_secret_abc", "amount": amount}


@pytest.fixture
def session_factory(tmp_path):
    # NullPool: cada conexão nasce no event loop de quem a usa
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)

    async def _create():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(_create())
    yield async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    asyncio.run(engine.dispose())


@pytest.fixture
def seed(session_factory):
    """seed(obj, ...) grava os objetos e devolve o primeiro."""

    def _seed(*objs):
        async def _run():
            async with session_factory() as db:
                db.add_all(objs)
                await db.commit()

        asyncio.run(_run())
        return objs[0] if len(objs) == 1 else objs

    return _seed


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def client(session_factory, gateway):
    async def _get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def make_user(role: str = "client", email: str | None = None, **kw) -> User:
    return User(
        id=kw.pop("id", None) or f"{role}-{email or 'user'}",
        name=kw.pop("name", role.title()),
        email=email or f"{role}@example.com",
        password_hash=kw.pop("password_hash", None) or hash_password("secret123"),
        role=role,
        is_active=kw.pop("is_active", True),
        **kw,
    )


def make_course(admin: User, **kw) -> Course:
    lessons = kw.pop("lessons", None)
    if lessons is None:
        lessons = [Lesson(title="Introdução", video_url="https://youtu.be/dQw4w9WgXcQ", video_source_type="youtube")]
    return Course(
        id=kw.pop("id", "course-1"),
        admin_id=admin.id,
        title=kw.pop("title", "Python desde cero"),
        price=Decimal(str(kw.pop("price", "100"))),
        is_published=kw.pop("is_published", True),
        lessons=lessons,
        **kw,
    )


def auth_headers(user: User) -> dict:
    token = create_access_token({"sub": user.id, "role": user.role}, secret_key=settings.SECRET_KEY)
    return {"Authorization": f"Bearer {token}"}
