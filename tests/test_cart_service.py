import pytest
from sqlalchemy.exc import IntegrityError

from bookstore.domain.exceptions import ConcurrentModificationError, EntityNotFoundError
from bookstore.domain.schemas import AddToCartRequest, UpdateCartItemRequest
from bookstore.data.models import ShoppingCartModel
from bookstore.repos.cart_repo import CartRepo
from bookstore.services.book_service import BookService
from bookstore.services.cart_service import CartService


@pytest.fixture
def svc(db):
    return CartService(db)


def test_add_books_and_merge_same_book(svc, user, books):
    svc.add_book(user.id, AddToCartRequest(book_id=books["a"].id, quantity=1))
    svc.add_book(user.id, AddToCartRequest(book_id=books["b"].id, quantity=1))
    cart = svc.add_book(user.id, AddToCartRequest(book_id=books["a"].id, quantity=2))

    quantities = {i.book_id: i.quantity for i in cart.items}
    assert quantities == {books["a"].id: 3, books["b"].id: 1}
    assert {i.book_title for i in cart.items} == {"Book A", "Book B"}


def test_each_modification_bumps_version(db, svc, user, books):
    version = CartRepo(db).get_cart_by_user(user.id).version
    svc.add_book(user.id, AddToCartRequest(book_id=books["a"].id, quantity=1))
    assert CartRepo(db).get_cart_by_user(user.id).version == version + 1


def test_add_missing_or_deleted_book(svc, user, books):
    with pytest.raises(EntityNotFoundError):
        svc.add_book(user.id, AddToCartRequest(book_id=999, quantity=1))


def test_update_and_remove_item(svc, user, books):
    cart = svc.add_book(user.id, AddToCartRequest(book_id=books["a"].id, quantity=1))
    item_id = cart.items[0].id

    cart = svc.update_item(user.id, item_id, UpdateCartItemRequest(quantity=5))
    assert cart.items[0].quantity == 5

    svc.remove_item(user.id, item_id)
    assert svc.get_cart(user.id).items == []

    with pytest.raises(EntityNotFoundError):
        svc.remove_item(user.id, item_id)


def test_cart_created_on_first_use(db, svc, user):
    repo = CartRepo(db)
    db.delete(repo.get_cart_by_user(user.id))
    db.commit()

    cart = svc.get_cart(user.id)
    assert cart.user_id == user.id
    assert cart.items == []
    assert repo.get_cart_by_user(user.id) is not None


def test_no_cart_for_unknown_user(db, svc):
    with pytest.raises(EntityNotFoundError):
        svc.get_cart(12345)
    assert CartRepo(db).get_cart_by_user(12345) is None


def test_cart_rows_require_existing_user(db):
    db.add(ShoppingCartModel(user_id=12345, version=1))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_deleted_book_is_hidden_in_cart(db, svc, user, books):
    svc.add_book(user.id, AddToCartRequest(book_id=books["a"].id, quantity=1))
    svc.add_book(user.id, AddToCartRequest(book_id=books["b"].id, quantity=1))

    BookService(db).delete_book(books["a"].id)

    assert [i.book_id for i in svc.get_cart(user.id).items] == [books["b"].id]


def test_stale_version_is_rejected(svc, user, books, monkeypatch):
    monkeypatch.setattr(CartRepo, "update_cart_version", lambda self, **kwargs: 0)
    with pytest.raises(ConcurrentModificationError):
        svc.add_book(user.id, AddToCartRequest(book_id=books["a"].id, quantity=1))
    monkeypatch.undo()
    assert svc.get_cart(user.id).items == []
