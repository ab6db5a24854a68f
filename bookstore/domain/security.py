# bookstore/domain/security.py
from enum import Enum
from typing import Iterable

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(raw: str) -> str:
    return pwd_context.hash(raw)


def verify_password(raw: str, hashed: str) -> bool:
    return pwd_context.verify(raw, hashed)


def _role_name(role) -> str:
    return role.value if isinstance(role, Enum) else str(role)


def is_authorized(user_roles: Iterable, required_roles: Iterable) -> bool:
    """True gdy uzytkownik ma przynajmniej jedna z wymaganych rol.

    Pusta lista wymaganych rol oznacza brak ograniczen.
    """
    required = {_role_name(r) for r in required_roles}
    if not required:
        return True
    return bool(required & {_role_name(r) for r in user_roles})
