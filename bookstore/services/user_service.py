# bookstore/services/user_service.py
from sqlalchemy.orm import Session

from bookstore.data.models import UserModel, ShoppingCartModel
from bookstore.domain.enums import RoleName
from bookstore.domain.exceptions import (
    AuthenticationError,
    EntityNotFoundError,
    FieldMismatchError,
    RegistrationError,
)
from bookstore.domain.schemas import UserLoginRequest, UserRegistrationRequest, UserResponse
from bookstore.domain.security import hash_password, verify_password
from bookstore.repos.cart_repo import CartRepo
from bookstore.repos.user_repo import UserRepo
from bookstore.utils.logging import get_logger

logger = get_logger(__name__)


def to_user_response(user: UserModel) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        shipping_address=user.shipping_address,
        roles=sorted(user.role_names),
    )


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)
        self.cart_repo = CartRepo(db)

    def register(self, request: UserRegistrationRequest, roles=(RoleName.USER,)) -> UserResponse:
        """
        Rejestracja: hasla musza sie zgadzac, email unikalny.
        Nowy uzytkownik dostaje role USER i pusty koszyk (jedna transakcja).
        """
        if request.password != request.repeat_password:
            raise FieldMismatchError("The password fields must match")

        if self.repo.get_by_email(request.email):
            raise RegistrationError(f"Can't register user with email: {request.email}")

        user = UserModel(
            email=request.email,
            password=hash_password(request.password),
            first_name=request.first_name,
            last_name=request.last_name,
            shipping_address=request.shipping_address,
        )
        user.roles = [self.repo.get_or_create_role(r.value) for r in roles]

        try:
            self.repo.add(user)
            self.cart_repo.create_cart(ShoppingCartModel(user_id=user.id, version=1))
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Zarejestrowano uzytkownika {user.id} ({user.email})")
        return to_user_response(user)

    def login(self, request: UserLoginRequest) -> UserResponse:
        user = self.repo.get_by_email(request.email)
        if not user or not verify_password(request.password, user.password):
            raise AuthenticationError("Invalid email or password")
        logger.info(f"Uzytkownik {user.id} zalogowany")
        return to_user_response(user)

    def get_user(self, user_id: int) -> UserModel:
        user = self.repo.get_user(user_id)
        if not user:
            raise EntityNotFoundError(f"Can't find user with id: {user_id}")
        return user
