# bookstore/repos/category_repo.py
from typing import List, Sequence

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from bookstore.data.models import CategoryModel
from bookstore.domain.schemas import PageRequest
from bookstore.repos.filters import not_deleted
from bookstore.repos.pagination import paginate

CATEGORY_SORTABLE = {
    "id": CategoryModel.id,
    "name": CategoryModel.name,
}


class CategoryRepo:
    def __init__(self, db: Session):
        self.db = db

    def find_all(self, page: PageRequest) -> List[CategoryModel]:
        stmt = paginate(
            select(CategoryModel).where(not_deleted(CategoryModel)),
            page,
            CATEGORY_SORTABLE,
            CategoryModel.id,
        )
        return list(self.db.execute(stmt).scalars().all())

    def find_by_id(self, category_id: int) -> CategoryModel | None:
        return self.db.execute(
            select(CategoryModel).where(CategoryModel.id == category_id, not_deleted(CategoryModel))
        ).scalar_one_or_none()

    def find_by_ids(self, ids: Sequence[int]) -> List[CategoryModel]:
        if not ids:
            return []
        return list(
            self.db.execute(
                select(CategoryModel).where(CategoryModel.id.in_(list(ids)), not_deleted(CategoryModel))
            ).scalars().all()
        )

    def save(self, category: CategoryModel) -> CategoryModel:
        self.db.add(category)
        self.db.commit()
        self.db.refresh(category)
        return category

    def soft_delete(self, category_id: int) -> int:
        result = self.db.execute(
            update(CategoryModel)
            .where(CategoryModel.id == category_id, not_deleted(CategoryModel))
            .values(is_deleted=True)
        )
        self.db.commit()
        return result.rowcount
