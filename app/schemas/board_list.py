"""
List schemas
"""
from pydantic import BaseModel, Field, validator
from typing import Optional
from datetime import datetime
from uuid import UUID


class ListCreate(BaseModel):
    title: str = Field(..., max_length=100)

    @validator('title')
    def validate_title(cls, v):
        if not v.strip():
            raise ValueError('Please add a title for the list')
        return v.strip()


class ListUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=100)
    order: Optional[int] = Field(None, ge=0, strict=True)

    @validator('title')
    def validate_title(cls, v):
        if v is not None and not v.strip():
            raise ValueError('List title cannot be empty')
        return v.strip() if v else v


class ListResponse(BaseModel):
    id: UUID = Field(..., alias="_id")
    title: str
    board_id: UUID = Field(..., alias="board")
    order: int
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    class Config:
        populate_by_name = True

    @classmethod
    def from_list(cls, board_list):
        return cls(
            id=board_list.id,
            title=board_list.title,
            board_id=board_list.board_id,
            order=board_list.order,
            created_at=board_list.created_at,
            updated_at=board_list.updated_at,
        )
