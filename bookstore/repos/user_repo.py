# bookstore/repos/user_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from bookstore.data.models import UserModel, RoleModel
from bookstore.repos.filters import not_deleted


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def get_by_email(self, email: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(UserModel.email == email)
        ).scalar_one_or_none()

    def get_role(self, name: str) -> RoleModel | None:
        return self.db.execute(
            select(RoleModel).where(RoleModel.name == name, not_deleted(RoleModel))
        ).scalar_one_or_none()

    def get_or_create_role(self, name: str) -> RoleModel:
        role = self.get_role(name)
        if role is None:
            role = RoleModel(name=name, is_deleted=False)
            self.db.add(role)
            self.db.flush()
        return role

    def add(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.flush()
        return user

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
