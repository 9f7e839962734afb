"""
Order Archive (document store writer)

Copies each newly created order into the relational document store,
line items as child rows. The archive is best effort: failures are
logged and never reach the caller, and the JSON store stays the source
of truth for the API.
"""

import logging
from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from food_ordering.models import OrderDocument, OrderItemDocument
from food_ordering.schemas import Order

logger = logging.getLogger(__name__)


class OrderArchive:
    """Writes created orders to the document store."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self.session_maker = session_maker

    @property
    def provider_name(self) -> str:
        return "sqlalchemy"

    @staticmethod
    def to_document(order: dict[str, Any]) -> OrderDocument:
        """Map a stored order onto the document-store schema."""
        parsed = Order.model_validate(order)
        return OrderDocument(
            order_ref=parsed.id,
            customer_name=parsed.customer_name,
            delivery_address=parsed.delivery_address,
            phone_number=parsed.phone_number,
            payment_method=parsed.payment_method,
            total_amount=parsed.total_amount,
            created_at=parsed.created_at,
            items=[
                OrderItemDocument(
                    position=position,
                    product_id=line.id,
                    name=line.name,
                    price=line.price,
                    quantity=line.quantity,
                    image=line.image,
                )
                for position, line in enumerate(parsed.items or [])
            ],
        )

    async def archive(self, order: dict[str, Any]) -> Optional[int]:
        """
        Insert ``order`` into the document store.

        Returns:
            The document row id, or None when the order could not be archived
        """
        order_id = order.get("id", "unknown")
        try:
            document = self.to_document(order)
            async with self.session_maker() as session:
                session.add(document)
                await session.commit()
            logger.info(f"Order #{order_id} archived as document {document.id}")
            return document.id
        except Exception as e:
            logger.error(f"Error archiving order #{order_id}: {e}")
            return None

    async def count(self) -> int:
        async with self.session_maker() as session:
            result = await session.execute(select(func.count(OrderDocument.id)))
            return result.scalar() or 0

    async def health_check(self) -> bool:
        """Verify the document store answers a trivial query."""
        try:
            await self.count()
            return True
        except Exception as e:
            logger.error(f"Document store health check failed: {e}")
            return False
