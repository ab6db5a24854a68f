# bookstore/domain/enums.py
from enum import Enum


class RoleName(str, Enum):
    ADMIN = "ADMIN"
    USER = "USER"


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    DELIVERED = "DELIVERED"
    COMPLETED = "COMPLETED"
    DELETED = "DELETED"
