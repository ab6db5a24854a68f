# bookstore/services/order_service.py
import uuid
from decimal import Decimal
from typing import List

from sqlalchemy.orm import Session

from bookstore.data.models import OrderModel
from bookstore.domain.enums import OrderStatus
from bookstore.domain.exceptions import (
    AccessDeniedError,
    CheckoutInProgressError,
    ConcurrentModificationError,
    EntityNotFoundError,
)
from bookstore.domain.schemas import OrderDto, OrderItemDto, PageRequest, PlaceOrderRequest
from bookstore.repos.cart_repo import CartRepo
from bookstore.repos.order_repo import OrderRepo
from bookstore.repos.user_repo import UserRepo
from bookstore.services.cart_to_order import CartToOrderConverter
from bookstore.services.notification_service import NotificationService
from bookstore.utils.settings import CHECKOUT_LOCK_TTL_SECONDS
from bookstore.utils.logging import get_logger

logger = get_logger(__name__)

MISSING_ORDER_MESSAGE = "Order with your id not found, id: "
MISSING_ORDER_ITEM_MESSAGE = "Order item with your id not found, id: "

# PENDING -> DELIVERED -> COMPLETED -> (soft delete)
_NEXT_STATUS = {
    OrderStatus.PENDING.value: OrderStatus.DELIVERED.value,
    OrderStatus.DELIVERED.value: OrderStatus.COMPLETED.value,
}


class OrderService:
    """
    Serwis odpowiedzialny za domene zamowien:
    skladanie zamowienia z koszyka, historia, pozycje i cykl zycia statusu.
    """

    def __init__(self, db: Session, lock_service, notification_service: NotificationService | None = None):
        self.repo = OrderRepo(db)
        self.user_repo = UserRepo(db)
        self.cart_repo = CartRepo(db)
        self.converter = CartToOrderConverter(db)
        self.lock_service = lock_service
        self.notification_service = notification_service or NotificationService()

    def place_order(self, request: PlaceOrderRequest, user_id: int) -> OrderDto:
        """
        Use Case: zamowienie z koszyka.

        1. Blokada checkoutu dla uzytkownika (redis)
        2. Nowe zamowienie PENDING + pozycje z koszyka, jedna transakcja
        3. Czyszczenie koszyka
        4. Powiadomienie (async)
        """
        user = self.user_repo.get_user(user_id)
        if not user:
            raise EntityNotFoundError(f"Can't find user with id: {user_id}")

        token = uuid.uuid4().hex
        if not self.lock_service.acquire_checkout_lock(user_id, token, CHECKOUT_LOCK_TTL_SECONDS):
            raise CheckoutInProgressError("Another order is being placed for this user")

        try:
            order = OrderModel(
                user_id=user.id,
                status=OrderStatus.PENDING.value,
                total=Decimal("0"),
                shipping_address=request.shipping_address,
                is_deleted=False,
            )
            self.converter.fill(user, order)
            self.repo.add(order)

            cart = self.cart_repo.get_cart_by_user(user.id)
            self.cart_repo.clear_cart(cart)
            rowcount = self.cart_repo.update_cart_version(
                cart_id=cart.id,
                old_version=cart.version,
                new_data={"version": cart.version + 1},
            )
            if rowcount == 0:
                raise ConcurrentModificationError(
                    "Shopping cart was modified by another request, try again"
                )

            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise
        finally:
            self._release_lock(user_id, token)

        logger.info(f"Order {order.id} placed by user {user_id}, total {order.total}")
        # zamowienie juz zapisane - blad powiadomienia nie moze go cofnac
        try:
            self.notification_service.send_order_placed(user_id, order.id, order.total)
        except Exception as e:
            logger.warning(f"Failed to send notification for order {order.id}: {e}")
        return OrderDto.model_validate(order)

    def get_history(self, user_id: int, page: PageRequest) -> List[OrderDto]:
        return [OrderDto.model_validate(o) for o in self.repo.find_all_by_user(user_id, page)]

    def get_order_items(self, order_id: int, user_id: int | None = None) -> List[OrderItemDto]:
        order = self._get_order(order_id, user_id)
        return [OrderItemDto.model_validate(i) for i in order.items]

    def get_order_item(self, order_id: int, item_id: int, user_id: int | None = None) -> OrderItemDto:
        order = self._get_order(order_id, user_id)
        item = next((i for i in order.items if i.id == item_id), None)
        if item is None:
            raise EntityNotFoundError(MISSING_ORDER_ITEM_MESSAGE + str(item_id))
        return OrderItemDto.model_validate(item)

    def advance_status(self, order_id: int) -> OrderDto:
        """
        PENDING -> DELIVERED -> COMPLETED, kolejne wywolanie
        oznacza zamowienie jako usuniete (status bez zmian).
        """
        order = self._get_order(order_id)

        next_status = _NEXT_STATUS.get(order.status)
        if next_status:
            logger.info(f"Order {order.id}: {order.status} -> {next_status}")
            order.status = next_status
        else:
            logger.info(f"Order {order.id}: {order.status}, marking as deleted")
            order.is_deleted = True

        saved = self.repo.save(order)
        try:
            self.notification_service.send_status_changed(saved.user_id, saved.id, saved.status, saved.is_deleted)
        except Exception as e:
            logger.warning(f"Failed to send notification for order {saved.id}: {e}")
        return OrderDto.model_validate(saved)

    def _release_lock(self, user_id: int, token: str) -> None:
        # lock i tak wygasnie po CHECKOUT_LOCK_TTL_SECONDS
        try:
            self.lock_service.release_checkout_lock(user_id, token)
        except Exception as e:
            logger.warning(f"Failed to release checkout lock for user {user_id}: {e}")

    def _get_order(self, order_id: int, user_id: int | None = None) -> OrderModel:
        order = self.repo.get_order(order_id)
        if not order:
            raise EntityNotFoundError(MISSING_ORDER_MESSAGE + str(order_id))
        if user_id is not None and order.user_id != user_id:
            raise AccessDeniedError("Access to the order denied")
        return order
