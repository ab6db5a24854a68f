# bookstore/api/deps.py
from typing import List

from fastapi import Depends, HTTPException, Query
from sqlalchemy.orm import Session

from bookstore.data.database import get_db
from bookstore.data.models import UserModel
from bookstore.domain.enums import RoleName
from bookstore.domain.schemas import PageRequest
from bookstore.domain.security import is_authorized
from bookstore.repos.user_repo import UserRepo
from bookstore.services.lock_service import LockService
from bookstore.utils.settings import DEFAULT_PAGE_SIZE


def get_current_user(
    user_id: int = Query(..., gt=0),
    db: Session = Depends(get_db),
) -> UserModel:
    user = UserRepo(db).get_user(user_id)
    if not user:
        raise HTTPException(status_code=401, detail="Unknown user")
    return user


def require_roles(*roles: RoleName):
    """Dependency: wpuszcza uzytkownika z przynajmniej jedna z podanych rol."""

    def dependency(user: UserModel = Depends(get_current_user)) -> UserModel:
        if not is_authorized(user.role_names, roles):
            raise HTTPException(status_code=403, detail="Access denied")
        return user

    return dependency


any_user = require_roles(RoleName.ADMIN, RoleName.USER)
admin_only = require_roles(RoleName.ADMIN)
user_only = require_roles(RoleName.USER)


def page_params(
    page: int = Query(0, ge=0),
    size: int = Query(DEFAULT_PAGE_SIZE, ge=1),
    sort: List[str] = Query(default=[]),
) -> PageRequest:
    return PageRequest(page=page, size=size, sort=sort)


def get_lock_service() -> LockService:
    return LockService()
