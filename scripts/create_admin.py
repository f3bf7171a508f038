# scripts/create_admin.py
import sys, asyncio
if sys.platform.startswith("win"):
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

from getpass import getpass
from sqlalchemy import select

from academia.db.base import Base
from academia.db.session import AsyncSessionLocal, engine
from academia.modules.users.models import User
from academia.core.security import hash_password

async def main():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as db:
        name = input("Admin nome: ").strip() or "Admin"
        email = input("Admin email: ").strip().lower()
        password = getpass("Admin password: ")

        exists = await db.execute(select(User).where(User.email == email))
        if exists.scalar_one_or_none():
            print("User already exists")
            return

        u = User(
            name=name,
            email=email,
            password_hash=hash_password(password),
            role="admin",
            is_active=True,
        )
        db.add(u)
        await db.commit()
        await db.refresh(u)
        print(f"Admin created: {u.id} ({u.email})")

if __name__ == "__main__":
    asyncio.run(main())
