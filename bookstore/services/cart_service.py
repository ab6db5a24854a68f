# bookstore/services/cart_service.py
from sqlalchemy.orm import Session

from bookstore.data.models import ShoppingCartModel, CartItemModel
from bookstore.domain.exceptions import ConcurrentModificationError, EntityNotFoundError
from bookstore.domain.schemas import (
    AddToCartRequest,
    CartItemDto,
    ShoppingCartDto,
    UpdateCartItemRequest,
)
from bookstore.repos.book_repo import BookRepo
from bookstore.repos.cart_repo import CartRepo
from bookstore.repos.user_repo import UserRepo
from bookstore.utils.logging import get_logger

logger = get_logger(__name__)


def to_cart_dto(cart: ShoppingCartModel) -> ShoppingCartDto:
    return ShoppingCartDto(
        id=cart.id,
        user_id=cart.user_id,
        items=[
            CartItemDto(
                id=i.id,
                book_id=i.book_id,
                book_title=i.book.title,
                quantity=i.quantity,
            )
            for i in cart.items
            if not i.book.is_deleted
        ],
    )


class CartService:
    """
    Koszyk uzytkownika (jeden na uzytkownika).
    commands (add, update, remove) podbijaja wersje koszyka - optimistic locking
    query (get) tylko odczyt
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.book_repo = BookRepo(db)
        self.user_repo = UserRepo(db)

    #query
    def get_cart(self, user_id: int) -> ShoppingCartDto:
        return to_cart_dto(self._get_or_create_cart(user_id))

    #commands
    def add_book(self, user_id: int, request: AddToCartRequest) -> ShoppingCartDto:
        book = self.book_repo.find_by_id(request.book_id)
        if not book:
            raise EntityNotFoundError(f"Can't find book with id: {request.book_id}")

        cart = self._get_or_create_cart(user_id)
        existing_item = self.repo.get_cart_item_by_book(cart.id, book.id)

        if existing_item:
            logger.info(
                f"Ksiazka {book.id} juz jest w koszyku {cart.id}, zwiekszam ilosc "
                f"z {existing_item.quantity} do {existing_item.quantity + request.quantity}"
            )
            existing_item.quantity += request.quantity
        else:
            logger.info(f"Dodaje ksiazke {book.id} do koszyka {cart.id}")
            self.repo.add_cart_item(cart, CartItemModel(book=book, quantity=request.quantity))

        self._bump_version(cart)
        return to_cart_dto(cart)

    def update_item(self, user_id: int, item_id: int, request: UpdateCartItemRequest) -> ShoppingCartDto:
        cart = self._get_or_create_cart(user_id)
        item = self._get_item_or_raise(cart, item_id)

        logger.info(f"Zmiana ilosci pozycji {item_id} w koszyku {cart.id} na {request.quantity}")
        item.quantity = request.quantity

        self._bump_version(cart)
        return to_cart_dto(cart)

    def remove_item(self, user_id: int, item_id: int) -> None:
        cart = self._get_or_create_cart(user_id)
        item = self._get_item_or_raise(cart, item_id)

        logger.info(f"Usuwanie pozycji {item_id} z koszyka {cart.id}")
        self.repo.delete_cart_item(cart, item)

        self._bump_version(cart)

    def _get_or_create_cart(self, user_id: int) -> ShoppingCartModel:
        cart = self.repo.get_cart_by_user(user_id)
        if cart:
            return cart
        if not self.user_repo.get_user(user_id):
            raise EntityNotFoundError(f"Can't find user with id: {user_id}")
        # koszyk tworzony przy rejestracji, tu tylko dla kont sprzed tej zmiany
        cart = self.repo.create_cart(ShoppingCartModel(user_id=user_id, version=1))
        self.repo.commit()
        logger.info(f"Utworzono nowy koszyk {cart.id} dla uzytkownika {user_id}")
        return cart

    def _get_item_or_raise(self, cart: ShoppingCartModel, item_id: int) -> CartItemModel:
        item = self.repo.get_cart_item(cart.id, item_id)
        if not item:
            raise EntityNotFoundError(f"Can't find cart item with id: {item_id}")
        return item

    def _bump_version(self, cart: ShoppingCartModel) -> None:
        # UPDATE ... SET version = v + 1 WHERE id = :id AND version = v
        old_version = cart.version
        rowcount = self.repo.update_cart_version(
            cart_id=cart.id,
            old_version=old_version,
            new_data={"version": old_version + 1},
        )
        if rowcount == 0:
            self.repo.rollback()
            raise ConcurrentModificationError(
                "Shopping cart was modified by another request, try again"
            )
        self.repo.commit()
        logger.info(f"Koszyk {cart.id} zapisany, nowa wersja: {old_version + 1}")
