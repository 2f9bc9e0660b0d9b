"""
List model (an ordered column of cards within a board)
"""
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey
from sqlalchemy.sql import func
import uuid

from app.core.database import Base
from app.core.db_types import UUID
from app.models.base import utcnow


class BoardList(Base):
    __tablename__ = "lists"

    id = Column(UUID(), primary_key=True, default=uuid.uuid4)
    board_id = Column(UUID(), ForeignKey('boards.id', ondelete='CASCADE'), nullable=False, index=True)
    title = Column(String(100), nullable=False)
    order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<BoardList(id={self.id}, title={self.title}, order={self.order})>"
