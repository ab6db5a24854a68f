import pytest

from bookstore.domain.enums import RoleName
from bookstore.domain.exceptions import AuthenticationError, FieldMismatchError, RegistrationError
from bookstore.domain.schemas import UserLoginRequest, UserRegistrationRequest
from bookstore.repos.cart_repo import CartRepo
from bookstore.services.user_service import UserService
from tests.factories import registration


def test_register_creates_user_role_and_cart(db):
    created = UserService(db).register(registration("reader@example.com", address="Elm St 5"))

    assert created.email == "reader@example.com"
    assert created.shipping_address == "Elm St 5"
    assert created.roles == [RoleName.USER.value]

    cart = CartRepo(db).get_cart_by_user(created.id)
    assert cart is not None
    assert cart.items == []


def test_register_rejects_password_mismatch(db):
    request = UserRegistrationRequest(
        email="x@example.com",
        password="secret123",
        repeat_password="secret124",
        first_name="A",
        last_name="B",
        shipping_address="C",
    )
    with pytest.raises(FieldMismatchError):
        UserService(db).register(request)


def test_register_rejects_duplicate_email(db, user):
    with pytest.raises(RegistrationError):
        UserService(db).register(registration("user@example.com"))


def test_login(db, user):
    logged = UserService(db).login(UserLoginRequest(email="user@example.com", password="secret123"))
    assert logged.id == user.id


@pytest.mark.parametrize("email, password", [("user@example.com", "wrong-pass"), ("nobody@example.com", "secret123")])
def test_login_with_bad_credentials(db, user, email, password):
    with pytest.raises(AuthenticationError):
        UserService(db).login(UserLoginRequest(email=email, password=password))


def test_admin_has_both_roles(admin):
    assert admin.roles == ["ADMIN", "USER"]
