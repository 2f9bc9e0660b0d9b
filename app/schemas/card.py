"""
Card schemas and realtime event payloads
"""
from pydantic import BaseModel, Field, validator
from typing import Optional, List
from datetime import datetime
from uuid import UUID

from app.schemas.user import UserSummary


class CardCreate(BaseModel):
    title: str = Field(..., max_length=200)
    description: Optional[str] = Field("", max_length=1000)
    assigned_to: Optional[UUID] = Field(None, alias="assignedTo")
    due_date: Optional[datetime] = Field(None, alias="dueDate")

    class Config:
        populate_by_name = True

    @validator('title')
    def validate_title(cls, v):
        if not v.strip():
            raise ValueError('Please add a title for the card')
        return v.strip()

    @validator('description')
    def validate_description(cls, v):
        return v.strip() if v else ""


class CardUpdate(BaseModel):
    """Plain field patch; only keys present in the body are applied"""
    title: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    assigned_to: Optional[UUID] = Field(None, alias="assignedTo")
    due_date: Optional[datetime] = Field(None, alias="dueDate")

    class Config:
        populate_by_name = True

    @validator('title')
    def validate_title(cls, v):
        if v is not None and not v.strip():
            raise ValueError('Card title cannot be empty')
        return v.strip() if v else v


class CardMove(BaseModel):
    target_list_id: UUID = Field(..., alias="targetListId")
    new_order_index: int = Field(..., alias="newOrderIndex", ge=0, strict=True)

    class Config:
        populate_by_name = True
        extra = "forbid"


class CardResponse(BaseModel):
    id: UUID = Field(..., alias="_id")
    title: str
    description: Optional[str] = ""
    list_id: UUID = Field(..., alias="list")
    board_id: UUID = Field(..., alias="board")
    order: int
    assigned_to: Optional[UserSummary] = Field(None, alias="assignedTo")
    due_date: Optional[datetime] = Field(None, alias="dueDate")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    class Config:
        populate_by_name = True

    @classmethod
    def from_card(cls, card):
        # Callers eager-load the assignee; async sessions cannot lazy load
        assignee = card.assignee
        return cls(
            id=card.id,
            title=card.title,
            description=card.description,
            list_id=card.list_id,
            board_id=card.board_id,
            order=card.order,
            assigned_to=UserSummary.from_user(assignee) if assignee is not None else None,
            due_date=card.due_date,
            created_at=card.created_at,
            updated_at=card.updated_at,
        )


class CardMoveResponse(BaseModel):
    card: CardResponse
    old_list_id: UUID = Field(..., alias="oldListId")
    new_list_id: UUID = Field(..., alias="newListId")

    class Config:
        populate_by_name = True


class CardDeleted(BaseModel):
    id: UUID = Field(..., alias="_id")
    list_id: UUID = Field(..., alias="list")
    board_id: UUID = Field(..., alias="board")

    class Config:
        populate_by_name = True


class CardOrder(BaseModel):
    id: UUID = Field(..., alias="_id")
    order: int

    class Config:
        populate_by_name = True


class ListReordered(BaseModel):
    list_id: UUID = Field(..., alias="listId")
    cards: List[CardOrder]

    class Config:
        populate_by_name = True
