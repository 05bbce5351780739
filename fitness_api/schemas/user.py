# fitness_api/schemas/user.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, EmailStr, Field

from fitness_api.models.enums import UserRole


class UserCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    email: EmailStr
    password: str = Field(min_length=6)
    first_name: str
    last_name: str
    role: Optional[UserRole] = None
    phone: Optional[str] = None


class LoginIn(BaseModel):
    email: EmailStr
    password: str


class ProfileUpdate(BaseModel):
    first_name: str
    last_name: str
    phone: Optional[str] = None


class PictureIn(BaseModel):
    url: AnyHttpUrl


class UserOut(BaseModel):
    id: int
    email: str
    first_name: str
    last_name: str
    role: str
    phone: Optional[str] = None
    avatar: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
