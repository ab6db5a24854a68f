# bookstore/data/models/order.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, String, DateTime, Numeric, Boolean
from sqlalchemy.orm import relationship

from bookstore.data.database import Base
from bookstore.domain.enums import OrderStatus


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    status = Column(String, nullable=False, default=OrderStatus.PENDING.value)  # PENDING, DELIVERED, COMPLETED
    total = Column(Numeric(10, 2), nullable=False)
    order_date = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    shipping_address = Column(String, nullable=False)
    is_deleted = Column(Boolean, nullable=False, default=False)

    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemModel.id",
    )
