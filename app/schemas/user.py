"""
User schemas
"""
from pydantic import BaseModel, Field
from uuid import UUID


class UserSummary(BaseModel):
    """Public user fields embedded in boards and cards"""
    id: UUID = Field(..., alias="_id")
    name: str
    email: str

    class Config:
        from_attributes = True
        populate_by_name = True

    @classmethod
    def from_user(cls, user):
        return cls(id=user.id, name=user.name, email=user.email)
