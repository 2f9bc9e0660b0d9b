"""
Card model
"""
from sqlalchemy import Column, String, Text, Integer, DateTime, ForeignKey, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import uuid

from app.core.database import Base
from app.core.db_types import UUID
from app.models.base import utcnow


class Card(Base):
    __tablename__ = "cards"

    id = Column(UUID(), primary_key=True, default=uuid.uuid4)
    list_id = Column(UUID(), ForeignKey('lists.id', ondelete='CASCADE'), nullable=False)
    # Denormalized from the list; the card service keeps it in sync on moves
    board_id = Column(UUID(), ForeignKey('boards.id', ondelete='CASCADE'), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    order = Column(Integer, nullable=False, default=0)
    assigned_to = Column(UUID(), ForeignKey('users.id', ondelete='SET NULL'), nullable=True)
    due_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, server_default=func.now(), nullable=False)

    __table_args__ = (
        Index('ix_cards_list_id_order', 'list_id', 'order'),
    )

    # Relationships
    assignee = relationship("User", foreign_keys=[assigned_to])

    def __repr__(self):
        return f"<Card(id={self.id}, title={self.title}, order={self.order})>"
