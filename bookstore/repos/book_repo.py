# bookstore/repos/book_repo.py
from typing import List

from sqlalchemy import select, update
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from bookstore.data.models import BookModel, CategoryModel
from bookstore.domain.schemas import PageRequest
from bookstore.repos.filters import not_deleted
from bookstore.repos.pagination import paginate

BOOK_SORTABLE = {
    "id": BookModel.id,
    "title": BookModel.title,
    "author": BookModel.author,
    "isbn": BookModel.isbn,
    "price": BookModel.price,
}


class BookRepo:
    def __init__(self, db: Session):
        self.db = db

    def find_all(self, page: PageRequest, predicate: ColumnElement | None = None) -> List[BookModel]:
        stmt = select(BookModel).where(not_deleted(BookModel))
        if predicate is not None:
            stmt = stmt.where(predicate)
        stmt = paginate(stmt, page, BOOK_SORTABLE, BookModel.id)
        return list(self.db.execute(stmt).scalars().all())

    def find_by_category(self, category_id: int, page: PageRequest) -> List[BookModel]:
        stmt = (
            select(BookModel)
            .join(BookModel.categories)
            .where(
                CategoryModel.id == category_id,
                not_deleted(CategoryModel),
                not_deleted(BookModel),
            )
        )
        stmt = paginate(stmt, page, BOOK_SORTABLE, BookModel.id)
        return list(self.db.execute(stmt).scalars().all())

    def find_by_id(self, book_id: int) -> BookModel | None:
        return self.db.execute(
            select(BookModel).where(BookModel.id == book_id, not_deleted(BookModel))
        ).scalar_one_or_none()

    def save(self, book: BookModel) -> BookModel:
        self.db.add(book)
        self.db.commit()
        self.db.refresh(book)
        return book

    def rollback(self):
        self.db.rollback()

    def soft_delete(self, book_id: int) -> int:
        result = self.db.execute(
            update(BookModel)
            .where(BookModel.id == book_id, not_deleted(BookModel))
            .values(is_deleted=True)
        )
        self.db.commit()
        return result.rowcount
