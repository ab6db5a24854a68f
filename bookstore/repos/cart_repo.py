# bookstore/repos/cart_repo.py
from typing import Any, Dict

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from bookstore.data.models import ShoppingCartModel, CartItemModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart_by_user(self, user_id: int) -> ShoppingCartModel | None:
        return self.db.execute(
            select(ShoppingCartModel).where(ShoppingCartModel.user_id == user_id)
        ).scalar_one_or_none()

    def create_cart(self, cart: ShoppingCartModel) -> ShoppingCartModel:
        self.db.add(cart)
        self.db.flush()
        return cart

    def get_cart_item(self, cart_id: int, item_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.shopping_cart_id == cart_id,
                CartItemModel.id == item_id,
            )
        ).scalar_one_or_none()

    def get_cart_item_by_book(self, cart_id: int, book_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.shopping_cart_id == cart_id,
                CartItemModel.book_id == book_id,
            )
        ).scalar_one_or_none()

    def add_cart_item(self, cart: ShoppingCartModel, item: CartItemModel) -> CartItemModel:
        cart.items.append(item)
        self.db.flush()
        return item

    def delete_cart_item(self, cart: ShoppingCartModel, item: CartItemModel) -> None:
        # delete-orphan usuwa wiersz
        cart.items.remove(item)
        self.db.flush()

    def clear_cart(self, cart: ShoppingCartModel) -> None:
        cart.items.clear()
        self.db.flush()

    def update_cart_version(self, cart_id: int, old_version: int, new_data: Dict[str, Any]) -> int:
        # UPDATE shopping_carts SET version = :new WHERE id = :id AND version = :old
        result = self.db.execute(
            update(ShoppingCartModel)
            .where(
                ShoppingCartModel.id == cart_id,
                ShoppingCartModel.version == old_version,
            )
            .values(**new_data)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
