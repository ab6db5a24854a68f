# bookstore/data/models/role.py
from sqlalchemy import Column, Integer, String, Boolean

from bookstore.data.database import Base


class RoleModel(Base):
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False, unique=True)  # ADMIN, USER
    is_deleted = Column(Boolean, nullable=False, default=False)
