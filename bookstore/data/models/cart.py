# bookstore/data/models/cart.py
from sqlalchemy import Column, Integer, ForeignKey
from sqlalchemy.orm import relationship

from bookstore.data.database import Base


class ShoppingCartModel(Base):
    __tablename__ = "shopping_carts"

    id = Column(Integer, primary_key=True)
    # jeden koszyk na uzytkownika
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True)
    version = Column(Integer, nullable=False, default=1)

    items = relationship(
        "CartItemModel",
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="CartItemModel.id",
    )
