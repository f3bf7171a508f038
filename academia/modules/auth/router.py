from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fastapi.security import OAuth2PasswordRequestForm

from academia.core.config import settings
from academia.core.dependencies import get_db, get_current_user
from academia.core.security import hash_password, verify_password, create_access_token
from academia.modules.users.models import User
from academia.modules.users.schemas import UserOut, UserRegister
from .schemas import LoginRequest, TokenOut

router = APIRouter()

async def _authenticate(db: AsyncSession, email: str, password: str) -> User:
    q = await db.execute(select(User).where(User.email == email.strip().lower()))
    user = q.scalar_one_or_none()
    if not user or not verify_password(password, user.password_hash):
        raise HTTPException(status_code=401, detail="Credenciais inválidas")
    if not user.is_active:
        raise HTTPException(status_code=403, detail="Usuário inativo")
    return user

def _token_for(user: User) -> TokenOut:
    token = create_access_token(
        {"sub": user.id, "role": user.role},
        expires_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        secret_key=settings.SECRET_KEY,
    )
    return TokenOut(access_token=token)

@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def register(body: UserRegister, db: AsyncSession = Depends(get_db)):
    email = body.email.lower().strip()

    # e-mail único
    exists = await db.execute(select(User).where(User.email == email))
    if exists.scalar_one_or_none():
        raise HTTPException(status_code=400, detail="E-mail já cadastrado")

    u = User(
        name=body.name.strip(),
        email=email,
        password_hash=hash_password(body.password),
        role=body.role,
        phone=(body.phone or "").strip() or None,
        is_active=True,
    )
    db.add(u)
    await db.commit()
    await db.refresh(u)
    return u

@router.post("/login", response_model=TokenOut)
async def login(payload: LoginRequest, db: AsyncSession = Depends(get_db)):
    return _token_for(await _authenticate(db, payload.email, payload.password))

# Variante form-data (OAuth2PasswordRequestForm usa 'username' como e-mail) para o Swagger
@router.post("/token", response_model=TokenOut)
async def token(form: OAuth2PasswordRequestForm = Depends(), db: AsyncSession = Depends(get_db)):
    return _token_for(await _authenticate(db, form.username, form.password))

@router.get("/me", response_model=UserOut)
async def me(user: User = Depends(get_current_user)):
    return user
