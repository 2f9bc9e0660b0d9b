# Database models
from .user import User
from .board import Board, BoardMember
from .board_list import BoardList
from .card import Card

__all__ = [
    "User",
    "Board", "BoardMember",
    "BoardList",
    "Card",
]
