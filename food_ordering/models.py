"""
SQLAlchemy Database Models

Document-store representation of an order: one row per order with its
line items as child rows. Required columns mirror the storefront's
required order fields; orders missing any of them are not archived.
"""

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from food_ordering.database import Base


class OrderDocument(Base):
    """
    Archived order.

    ``order_ref`` holds the id the order received in orders.json; the two
    stores are independent and deletes are not propagated here.
    """
    __tablename__ = "order_documents"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    order_ref = Column(String(32), nullable=True, index=True)

    # =========================================================================
    # CUSTOMER INFORMATION
    # =========================================================================
    customer_name = Column(String(100), nullable=False)
    delivery_address = Column(Text, nullable=False)
    phone_number = Column(String(32), nullable=False)
    payment_method = Column(String(50), nullable=False)

    # =========================================================================
    # PRICING
    # =========================================================================
    total_amount = Column(Float, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    items = relationship(
        "OrderItemDocument",
        back_populates="order",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="OrderItemDocument.position",
    )

    def __repr__(self) -> str:
        return f"<OrderDocument #{self.id} ref={self.order_ref} {self.customer_name}>"


class OrderItemDocument(Base):
    """Line item subdocument of an archived order."""
    __tablename__ = "order_item_documents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("order_documents.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)

    product_id = Column(String(32), nullable=True)
    name = Column(String(200), nullable=True)
    price = Column(Float, nullable=True)
    quantity = Column(Integer, nullable=True)
    image = Column(String(500), nullable=True)

    order = relationship("OrderDocument", back_populates="items")
