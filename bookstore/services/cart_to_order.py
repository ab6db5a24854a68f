# bookstore/services/cart_to_order.py
from decimal import Decimal

from sqlalchemy.orm import Session

from bookstore.data.models import OrderModel, OrderItemModel, UserModel
from bookstore.domain.exceptions import EmptyCartError, EntityNotFoundError
from bookstore.domain.pricing import line_price
from bookstore.repos.cart_repo import CartRepo
from bookstore.utils.logging import get_logger

logger = get_logger(__name__)


class CartToOrderConverter:
    """
    Przepisuje koszyk uzytkownika na pozycje zamowienia.

    1. Pobiera koszyk uzytkownika
    2. Kazda pozycja koszyka -> pozycja zamowienia (ksiazka + ilosc)
    3. Cena pozycji = aktualna cena ksiazki * ilosc
    4. Total zamowienia = suma cen pozycji

    Nic nie commituje - transakcja nalezy do wywolujacego.
    """

    def __init__(self, db: Session):
        self.cart_repo = CartRepo(db)

    def fill(self, user: UserModel, order: OrderModel) -> OrderModel:
        cart = self.cart_repo.get_cart_by_user(user.id)
        if not cart:
            raise EntityNotFoundError(f"Can't find shopping cart for user with id: {user.id}")
        # ksiazki usuniete (soft) po dodaniu do koszyka nie trafiaja do zamowienia
        available = [i for i in cart.items if not i.book.is_deleted]
        if not available:
            raise EmptyCartError("Can't place an order from an empty shopping cart")

        items = [
            OrderItemModel(
                book=cart_item.book,
                book_id=cart_item.book_id,
                quantity=cart_item.quantity,
                price=line_price(cart_item.book.price, cart_item.quantity),
            )
            for cart_item in available
        ]
        order.items = items
        order.total = sum((i.price for i in items), Decimal("0"))

        logger.info(f"Przepisano {len(items)} pozycji z koszyka {cart.id}, total {order.total}")
        return order
