"""
Card service: create, update, delete and move cards while keeping every
list's order dense, then announce the outcome on the board channel.
"""
import logging
import uuid
from typing import List, Optional, Sequence

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import ResourceNotFoundError, ValidationError
from app.core.permissions import is_board_member, require_member
from app.models.board_list import BoardList
from app.models.card import Card
from app.models.user import User
from app.schemas.card import (
    CardCreate, CardUpdate, CardResponse, CardMoveResponse,
    CardDeleted, CardOrder, ListReordered
)
from app.services import websocket_manager
from app.services.ordering import OrderAssignment, OrderingEngine, order_for, validate_insertion_index

logger = logging.getLogger(__name__)


class CardService:
    """Request-level card operations for a single session"""

    def __init__(self, db: AsyncSession, notifier: Optional[websocket_manager.ConnectionManager] = None):
        self.db = db
        self.ordering = OrderingEngine(db)
        self.notifier = notifier if notifier is not None else websocket_manager.manager

    # -- loading -----------------------------------------------------------

    async def _get_card(self, card_id: uuid.UUID) -> Card:
        result = await self.db.execute(
            select(Card)
            .options(selectinload(Card.assignee))
            .where(Card.id == card_id)
            .execution_options(populate_existing=True)
        )
        card = result.scalar_one_or_none()
        if not card:
            raise ResourceNotFoundError("Card")
        return card

    async def _get_list(self, list_id: uuid.UUID, resource: str = "List") -> BoardList:
        result = await self.db.execute(select(BoardList).where(BoardList.id == list_id))
        board_list = result.scalar_one_or_none()
        if not board_list:
            raise ResourceNotFoundError(resource)
        return board_list

    async def _validate_assignee(self, board_id: uuid.UUID, user_id: Optional[uuid.UUID]):
        if user_id is None:
            return
        exists = await self.db.execute(select(User.id).where(User.id == user_id))
        if exists.scalar_one_or_none() is None:
            raise ValidationError("Assigned user not found")
        if not await is_board_member(self.db, board_id, user_id):
            raise ValidationError("Assigned user must be a member of this board")

    # -- persistence -------------------------------------------------------

    async def _apply_assignments(self, assignments: Sequence[OrderAssignment]):
        """Write all reassignments in one transaction"""
        if not assignments:
            return
        await self.db.execute(
            update(Card),
            [{"id": assignment.card_id, "order": assignment.order} for assignment in assignments]
        )
        await self.db.commit()

    def _publish(self, board_id: uuid.UUID, event_name: str, payload):
        self.notifier.publish(str(board_id), event_name, payload.model_dump(mode="json", by_alias=True))

    # -- reads -------------------------------------------------------------

    async def list_cards(self, list_id: uuid.UUID, user: User) -> List[CardResponse]:
        board_list = await self._get_list(list_id)
        await require_member(self.db, board_list.board_id, user.id)

        result = await self.db.execute(
            select(Card)
            .options(selectinload(Card.assignee))
            .where(Card.list_id == list_id)
            .order_by(Card.order, Card.created_at, Card.id)
        )
        return [CardResponse.from_card(card) for card in result.scalars().all()]

    async def get_card(self, card_id: uuid.UUID, user: User) -> CardResponse:
        card = await self._get_card(card_id)
        await require_member(self.db, card.board_id, user.id)
        return CardResponse.from_card(card)

    # -- mutations ---------------------------------------------------------

    async def create_card(self, list_id: uuid.UUID, card_data: CardCreate, user: User) -> CardResponse:
        board_list = await self._get_list(list_id)
        await require_member(self.db, board_list.board_id, user.id)
        await self._validate_assignee(board_list.board_id, card_data.assigned_to)

        # Appending never disturbs existing positions
        new_order = await self.ordering.append_to_end(list_id)
        card = Card(
            title=card_data.title,
            description=card_data.description or "",
            list_id=board_list.id,
            board_id=board_list.board_id,
            order=new_order,
            assigned_to=card_data.assigned_to,
            due_date=card_data.due_date,
        )
        self.db.add(card)
        await self.db.commit()

        response = CardResponse.from_card(await self._get_card(card.id))
        logger.info(
            "Card created",
            extra={"board_id": str(board_list.board_id), "user_id": str(user.id), "card_id": str(card.id)}
        )
        self._publish(board_list.board_id, websocket_manager.CARD_CREATED, response)
        return response

    async def update_card(self, card_id: uuid.UUID, card_data: CardUpdate, user: User) -> CardResponse:
        """Plain field patch; ordering is untouched"""
        card = await self._get_card(card_id)
        await require_member(self.db, card.board_id, user.id)

        fields = card_data.model_dump(exclude_unset=True)
        if "assigned_to" in fields:
            await self._validate_assignee(card.board_id, fields["assigned_to"])
            card.assigned_to = fields["assigned_to"]
        if fields.get("title") is not None:
            card.title = fields["title"]
        if "description" in fields:
            card.description = fields["description"] or ""
        if "due_date" in fields:
            card.due_date = fields["due_date"]

        await self.db.commit()

        response = CardResponse.from_card(await self._get_card(card.id))
        self._publish(card.board_id, websocket_manager.CARD_UPDATED, response)
        return response

    async def delete_card(self, card_id: uuid.UUID, user: User) -> dict:
        card = await self._get_card(card_id)
        await require_member(self.db, card.board_id, user.id)

        list_id, board_id, removed_order = card.list_id, card.board_id, card.order
        await self.db.delete(card)
        await self.db.commit()
        self._publish(board_id, websocket_manager.CARD_DELETED, CardDeleted(id=card_id, list_id=list_id, board_id=board_id))

        # Compaction is mandatory; skipped deletes leave gaps that accumulate
        assignments = await self.ordering.reindex_after_removal(list_id, removed_order)
        await self._apply_assignments(assignments)
        if assignments:
            self._publish(board_id, websocket_manager.LIST_REORDERED, ListReordered(
                list_id=list_id,
                cards=[CardOrder(id=assignment.card_id, order=assignment.order) for assignment in assignments]
            ))

        logger.info(
            "Card deleted",
            extra={"board_id": str(board_id), "user_id": str(user.id), "card_id": str(card_id)}
        )
        return {"message": "Card removed"}

    async def move_card(
        self,
        card_id: uuid.UUID,
        target_list_id: uuid.UUID,
        new_order_index: int,
        user: User
    ) -> CardMoveResponse:
        """
        Move a card to `new_order_index` in `target_list_id`, which may be its
        current list.

        Every precondition is checked before the first write. The moved card
        is saved first and its former and new siblings are then rewritten in
        one batch; if that batch fails the lists stay transiently uneven
        until the next structural edit on them recompacts the snapshot.
        """
        card = await self._get_card(card_id)
        target_list = await self._get_list(target_list_id, "Target list")
        validate_insertion_index(new_order_index)
        await require_member(self.db, card.board_id, user.id)
        if target_list.board_id != card.board_id:
            raise ValidationError("Cannot move card to a list on a different board")

        old_list_id = card.list_id
        board_id = card.board_id

        if old_list_id == target_list.id:
            assignments = await self.ordering.reindex_for_insertion(
                old_list_id, card.id, new_order_index, card
            )
        else:
            source_assignments = await self.ordering.reindex_for_removal_side(old_list_id, card.id)
            target_assignments = await self.ordering.reindex_for_insertion(
                target_list.id, card.id, new_order_index, card
            )
            # Disjoint by construction: the moving card is excluded from both snapshots
            assignments = source_assignments + target_assignments

        new_order = order_for(assignments, card.id)
        sibling_assignments = [assignment for assignment in assignments if assignment.card_id != card.id]

        card.list_id = target_list.id
        card.board_id = target_list.board_id
        card.order = new_order
        await self.db.commit()
        await self._apply_assignments(sibling_assignments)

        moved = await self._get_card(card.id)
        response = CardMoveResponse(
            card=CardResponse.from_card(moved),
            old_list_id=old_list_id,
            new_list_id=target_list.id,
        )
        logger.info(
            "Card moved from list %s to list %s at index %s",
            old_list_id, target_list.id, new_order,
            extra={"board_id": str(board_id), "user_id": str(user.id), "card_id": str(card.id)}
        )
        self._publish(board_id, websocket_manager.CARD_MOVED, response)
        return response
