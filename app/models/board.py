"""
Board and board membership models
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import uuid

from app.core.database import Base
from app.core.db_types import UUID
from app.models.base import utcnow


class Board(Base):
    __tablename__ = "boards"

    id = Column(UUID(), primary_key=True, default=uuid.uuid4)
    title = Column(String(100), nullable=False)
    owner_id = Column(UUID(), ForeignKey('users.id'), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, server_default=func.now(), nullable=False)

    # Relationships
    owner = relationship("User", foreign_keys=[owner_id])
    memberships = relationship("BoardMember", back_populates="board", cascade="all, delete-orphan")

    @property
    def member_ids(self):
        """Owner plus every member row; owner is always included"""
        ids = {membership.user_id for membership in self.memberships}
        ids.add(self.owner_id)
        return ids

    def __repr__(self):
        return f"<Board(id={self.id}, title={self.title})>"


class BoardMember(Base):
    __tablename__ = "board_members"

    id = Column(UUID(), primary_key=True, default=uuid.uuid4)
    board_id = Column(UUID(), ForeignKey('boards.id', ondelete='CASCADE'), nullable=False, index=True)
    user_id = Column(UUID(), ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    added_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)

    # Constraints
    __table_args__ = (
        UniqueConstraint('board_id', 'user_id', name='unique_board_member'),
    )

    # Relationships
    board = relationship("Board", back_populates="memberships")
    user = relationship("User", foreign_keys=[user_id])

    def __repr__(self):
        return f"<BoardMember(board_id={self.board_id}, user_id={self.user_id})>"
