from decimal import Decimal

import pytest
from redis.exceptions import RedisError
from sqlalchemy import select

from bookstore.data.models import OrderModel
from bookstore.domain.enums import OrderStatus
from bookstore.domain.exceptions import (
    AccessDeniedError,
    CheckoutInProgressError,
    EmptyCartError,
    EntityNotFoundError,
)
from bookstore.domain.schemas import (
    AddToCartRequest,
    CreateBookRequest,
    PageRequest,
    PlaceOrderRequest,
)
from bookstore.repos.cart_repo import CartRepo
from bookstore.services.book_service import BookService
from bookstore.services.cart_service import CartService
from bookstore.services.order_service import OrderService
from bookstore.services.user_service import UserService
from tests.factories import FakeLockService, registration


@pytest.fixture
def svc(db, lock_service, notifications):
    return OrderService(db, lock_service=lock_service, notification_service=notifications)


@pytest.fixture
def filled_cart(db, user, books):
    carts = CartService(db)
    carts.add_book(user.id, AddToCartRequest(book_id=books["a"].id, quantity=2))
    carts.add_book(user.id, AddToCartRequest(book_id=books["b"].id, quantity=1))
    return carts


def place(svc, user_id, address="Main St 1"):
    return svc.place_order(PlaceOrderRequest(shipping_address=address), user_id)


def test_cart_converted_to_order(svc, user, books, filled_cart):
    order = place(svc, user.id, address="Delivery St 9")

    assert order.total == Decimal("13.50")
    assert order.status == OrderStatus.PENDING.value
    assert order.shipping_address == "Delivery St 9"
    assert order.user_id == user.id

    prices = {i.book_id: i.price for i in order.items}
    assert prices == {books["a"].id: Decimal("10.00"), books["b"].id: Decimal("3.50")}
    assert order.total == sum(i.price for i in order.items)


def test_order_uses_current_book_price(db, svc, user, books, filled_cart):
    a = books["a"]
    BookService(db).update_book(
        a.id,
        CreateBookRequest(
            title=a.title,
            author=a.author,
            isbn=a.isbn,
            price=Decimal("6.25"),
            description=a.description,
            cover_image=a.cover_image,
        ),
    )

    order = place(svc, user.id)

    assert order.total == Decimal("16.00")


def test_placing_order_clears_cart_and_notifies(db, svc, user, filled_cart, lock_service, notifications):
    order = place(svc, user.id)

    assert filled_cart.get_cart(user.id).items == []
    assert notifications.placed == [(user.id, order.id, order.total)]
    assert lock_service.locks == {}
    assert lock_service.released == [user.id]


def test_empty_cart_is_rejected(db, svc, user):
    with pytest.raises(EmptyCartError):
        place(svc, user.id)
    assert db.execute(select(OrderModel)).scalars().all() == []


def test_unknown_user(svc):
    with pytest.raises(EntityNotFoundError):
        place(svc, 404)


def test_user_without_cart(db, svc, user, monkeypatch):
    monkeypatch.setattr(CartRepo, "get_cart_by_user", lambda self, user_id: None)
    with pytest.raises(EntityNotFoundError):
        place(svc, user.id)


def test_concurrent_checkout_is_rejected(svc, user, filled_cart, lock_service):
    lock_service.locks[user.id] = "other-request"
    with pytest.raises(CheckoutInProgressError):
        place(svc, user.id)
    assert lock_service.locks == {user.id: "other-request"}


def test_failed_placement_leaves_no_order(db, svc, user, filled_cart, lock_service, monkeypatch):
    def boom(self, cart):
        raise RuntimeError("db went away")

    monkeypatch.setattr(CartRepo, "clear_cart", boom)
    with pytest.raises(RuntimeError):
        place(svc, user.id)

    assert db.execute(select(OrderModel)).scalars().all() == []
    assert len(filled_cart.get_cart(user.id).items) == 2
    assert lock_service.locks == {}


def test_status_lifecycle(svc, user, filled_cart, notifications):
    order = place(svc, user.id)

    first = svc.advance_status(order.id)
    second = svc.advance_status(order.id)
    third = svc.advance_status(order.id)

    assert (first.status, first.is_deleted) == ("DELIVERED", False)
    assert (second.status, second.is_deleted) == ("COMPLETED", False)
    assert (third.status, third.is_deleted) == ("COMPLETED", True)

    with pytest.raises(EntityNotFoundError):
        svc.advance_status(order.id)

    assert [c[2:] for c in notifications.status_changes] == [
        ("DELIVERED", False),
        ("COMPLETED", False),
        ("COMPLETED", True),
    ]


def test_advance_unknown_order(svc):
    with pytest.raises(EntityNotFoundError):
        svc.advance_status(42)


def test_history_is_per_user_and_skips_deleted(db, svc, user, books, filled_cart):
    first = place(svc, user.id)
    filled_cart.add_book(user.id, AddToCartRequest(book_id=books["b"].id, quantity=4))
    second = place(svc, user.id)

    other = UserService(db).register(registration("other@example.com"))
    filled_cart.add_book(other.id, AddToCartRequest(book_id=books["a"].id, quantity=1))
    place(svc, other.id)

    history = svc.get_history(user.id, PageRequest(sort=["id,asc"]))
    assert [o.id for o in history] == [first.id, second.id]
    assert history[1].total == Decimal("14.00")

    for _ in range(3):
        svc.advance_status(first.id)
    assert [o.id for o in svc.get_history(user.id, PageRequest())] == [second.id]


def test_order_items(db, svc, user, books, filled_cart):
    order = place(svc, user.id)

    items = svc.get_order_items(order.id, user.id)
    assert len(items) == 2

    item = svc.get_order_item(order.id, items[0].id, user.id)
    assert item == items[0]

    with pytest.raises(EntityNotFoundError):
        svc.get_order_item(order.id, 9999)
    with pytest.raises(EntityNotFoundError):
        svc.get_order_items(9999)

    other = UserService(db).register(registration("other@example.com"))
    with pytest.raises(AccessDeniedError):
        svc.get_order_items(order.id, other.id)


def test_deleted_book_is_left_out_of_order(db, svc, user, books, filled_cart):
    BookService(db).delete_book(books["a"].id)

    order = place(svc, user.id)

    assert [i.book_id for i in order.items] == [books["b"].id]
    assert order.total == Decimal("3.50")
    assert filled_cart.get_cart(user.id).items == []


def test_cart_with_only_deleted_books_is_empty(db, svc, user, books):
    CartService(db).add_book(user.id, AddToCartRequest(book_id=books["a"].id, quantity=1))
    BookService(db).delete_book(books["a"].id)

    with pytest.raises(EmptyCartError):
        place(svc, user.id)
    assert db.execute(select(OrderModel)).scalars().all() == []


class BrokenLockRelease(FakeLockService):
    def release_checkout_lock(self, user_id, token):
        raise RedisError("connection lost")


class BrokenNotifications:
    def send_order_placed(self, user_id, order_id, total):
        raise OSError("broker unreachable")

    def send_status_changed(self, user_id, order_id, status, deleted):
        raise OSError("broker unreachable")


def test_committed_order_survives_lock_release_failure(db, user, filled_cart, notifications):
    svc = OrderService(db, lock_service=BrokenLockRelease(), notification_service=notifications)

    order = place(svc, user.id)

    assert order.total == Decimal("13.50")
    assert [o.id for o in svc.get_history(user.id, PageRequest())] == [order.id]


def test_committed_order_survives_notification_failure(db, user, filled_cart, lock_service):
    svc = OrderService(db, lock_service=lock_service, notification_service=BrokenNotifications())

    order = place(svc, user.id)
    advanced = svc.advance_status(order.id)

    assert advanced.status == OrderStatus.DELIVERED.value
    assert lock_service.locks == {}
