"""
Authentication schemas
"""
from pydantic import BaseModel, EmailStr, Field, validator
from uuid import UUID

from app.config import settings


class UserRegister(BaseModel):
    name: str
    email: EmailStr
    password: str

    @validator('name')
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('Please add a name')
        return v.strip()

    @validator('password')
    def validate_password(cls, v):
        if len(v) < settings.password_min_length:
            raise ValueError(
                f'Password must be at least {settings.password_min_length} characters long'
            )
        return v


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class AuthResponse(BaseModel):
    id: UUID = Field(..., alias="_id")
    name: str
    email: str
    token: str

    class Config:
        populate_by_name = True
