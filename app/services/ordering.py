"""
Card ordering engine.

Keeps the `order` of the cards in a list dense and zero-based. Every
structural edit recomputes positions from a freshly sorted snapshot of the
list and reports only the assignments that differ from what is stored, so a
list left with duplicates or gaps by an earlier failed write is repaired by
the next edit that touches it.

The planning functions are pure and work on anything exposing `id` and
`order`; `OrderingEngine` wraps them with the store reads.
"""
import logging
import uuid
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ValidationError
from app.models.card import Card

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrderAssignment:
    card_id: uuid.UUID
    order: int


def validate_insertion_index(index: Any) -> int:
    """Reject missing, non-integer and negative indexes instead of clamping them"""
    if index is None or isinstance(index, bool) or not isinstance(index, int):
        raise ValidationError("newOrderIndex must be a non-negative integer")
    if index < 0:
        raise ValidationError("newOrderIndex must be a non-negative integer")
    return index


def plan_compaction(cards: Sequence[Any]) -> List[OrderAssignment]:
    """Assign each card its position in the snapshot; unchanged cards are skipped"""
    return [
        OrderAssignment(card.id, index)
        for index, card in enumerate(cards)
        if card.order != index
    ]


def plan_insertion(cards: Sequence[Any], moving_card: Any, insertion_index: int) -> List[OrderAssignment]:
    """
    Splice `moving_card` into `cards` at `insertion_index`.

    The index is clamped to the end of the list. The result holds every
    sibling whose order changes plus the moving card's own assignment, which
    is always present.
    """
    validate_insertion_index(insertion_index)
    siblings = [card for card in cards if card.id != moving_card.id]
    position = min(insertion_index, len(siblings))
    sequence = siblings[:position] + [moving_card] + siblings[position:]

    return [
        OrderAssignment(card.id, index)
        for index, card in enumerate(sequence)
        if card.id == moving_card.id or card.order != index
    ]


def order_for(assignments: Iterable[OrderAssignment], card_id: uuid.UUID) -> Optional[int]:
    for assignment in assignments:
        if assignment.card_id == card_id:
            return assignment.order
    return None


class OrderingEngine:
    """Computes order reassignments for one list at a time; never writes"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def snapshot(self, list_id: uuid.UUID, exclude_card_id: Optional[uuid.UUID] = None) -> List[Card]:
        """Cards of a list sorted by order, ties broken by age then id"""
        stmt = select(Card).where(Card.list_id == list_id)
        if exclude_card_id is not None:
            stmt = stmt.where(Card.id != exclude_card_id)
        stmt = (
            stmt.order_by(Card.order, Card.created_at, Card.id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def append_to_end(self, list_id: uuid.UUID) -> int:
        result = await self.db.execute(
            select(func.max(Card.order)).where(Card.list_id == list_id)
        )
        max_order = result.scalar_one_or_none()
        return 0 if max_order is None else max_order + 1

    async def reindex_after_removal(self, list_id: uuid.UUID, removed_order: Optional[int] = None) -> List[OrderAssignment]:
        cards = await self.snapshot(list_id)
        assignments = plan_compaction(cards)
        logger.debug(
            "Compacted list %s after removal at %s: %d reassignments",
            list_id, removed_order, len(assignments)
        )
        return assignments

    async def reindex_for_insertion(
        self,
        list_id: uuid.UUID,
        exclude_card_id: uuid.UUID,
        insertion_index: int,
        moving_card: Card
    ) -> List[OrderAssignment]:
        validate_insertion_index(insertion_index)
        siblings = await self.snapshot(list_id, exclude_card_id=exclude_card_id)
        return plan_insertion(siblings, moving_card, insertion_index)

    async def reindex_for_removal_side(self, list_id: uuid.UUID, exclude_card_id: uuid.UUID) -> List[OrderAssignment]:
        cards = await self.snapshot(list_id, exclude_card_id=exclude_card_id)
        return plan_compaction(cards)
