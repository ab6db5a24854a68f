# bookstore/data/models/cart_item.py
from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from bookstore.data.database import Base


class CartItemModel(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True)
    shopping_cart_id = Column(Integer, ForeignKey("shopping_carts.id", ondelete="CASCADE"), nullable=False)
    book_id = Column(Integer, ForeignKey("books.id"), nullable=False)
    quantity = Column(Integer, nullable=False)

    cart = relationship("ShoppingCartModel", back_populates="items")
    book = relationship("BookModel")

    __table_args__ = (UniqueConstraint("shopping_cart_id", "book_id", name="u_cart_book"),)
