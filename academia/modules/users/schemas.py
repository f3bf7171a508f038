from __future__ import annotations
from typing import Literal, Optional
from pydantic import BaseModel, EmailStr, Field


class UserOut(BaseModel):
    id: str
    name: str
    email: EmailStr
    role: str
    phone: Optional[str] = None
    is_active: bool

    class Config:
        from_attributes = True


class UserRegister(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: Literal["client", "admin"] = "client"
    phone: Optional[str] = None
