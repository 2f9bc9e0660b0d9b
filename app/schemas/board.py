"""
Board schemas
"""
from pydantic import BaseModel, EmailStr, Field, validator
from typing import Optional, List
from datetime import datetime
from uuid import UUID

from app.schemas.user import UserSummary


class BoardCreate(BaseModel):
    title: str = Field(..., max_length=100)

    @validator('title')
    def validate_title(cls, v):
        if not v.strip():
            raise ValueError('Please add a title for the board')
        return v.strip()


class BoardUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=100)

    @validator('title')
    def validate_title(cls, v):
        if v is not None and not v.strip():
            raise ValueError('Board title cannot be empty')
        return v.strip() if v else v


class BoardMemberAdd(BaseModel):
    email: EmailStr


class BoardResponse(BaseModel):
    id: UUID = Field(..., alias="_id")
    title: str
    owner: UserSummary
    members: List[UserSummary] = []
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    class Config:
        populate_by_name = True
