# bookstore/repos/order_repo.py
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from bookstore.data.models import OrderModel
from bookstore.domain.schemas import PageRequest
from bookstore.repos.filters import not_deleted
from bookstore.repos.pagination import paginate

ORDER_SORTABLE = {
    "id": OrderModel.id,
    "order_date": OrderModel.order_date,
    "total": OrderModel.total,
    "status": OrderModel.status,
}


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def add(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.flush()
        return order

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel).where(OrderModel.id == order_id, not_deleted(OrderModel))
        ).scalar_one_or_none()

    def find_all_by_user(self, user_id: int, page: PageRequest) -> List[OrderModel]:
        stmt = select(OrderModel).where(OrderModel.user_id == user_id, not_deleted(OrderModel))
        stmt = paginate(stmt, page, ORDER_SORTABLE, OrderModel.id, default_sort=("order_date,desc",))
        return list(self.db.execute(stmt).scalars().all())

    def save(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.commit()
        self.db.refresh(order)
        return order

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
