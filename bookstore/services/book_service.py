# bookstore/services/book_service.py
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookstore.data.models import BookModel
from bookstore.domain.exceptions import EntityNotFoundError
from bookstore.domain.schemas import BookDto, BookSearchParams, CreateBookRequest, PageRequest
from bookstore.repos.book_repo import BookRepo
from bookstore.repos.book_spec import BookSpecificationBuilder
from bookstore.repos.category_repo import CategoryRepo
from bookstore.utils.logging import get_logger

logger = get_logger(__name__)


class BookService:
    """
    Use case'y dla ksiazek.
    query: list, get, search, list by category
    commands: create, update, delete (soft)
    """

    def __init__(self, db: Session):
        self.repo = BookRepo(db)
        self.category_repo = CategoryRepo(db)
        self.spec_builder = BookSpecificationBuilder()

    #query
    def list_books(self, page: PageRequest) -> List[BookDto]:
        return [BookDto.model_validate(b) for b in self.repo.find_all(page)]

    def get_book(self, book_id: int) -> BookDto:
        return BookDto.model_validate(self._get_or_raise(book_id))

    def search_books(self, params: BookSearchParams, page: PageRequest) -> List[BookDto]:
        predicate = self.spec_builder.build(params)
        return [BookDto.model_validate(b) for b in self.repo.find_all(page, predicate)]

    def list_books_by_category(self, category_id: int, page: PageRequest) -> List[BookDto]:
        if not self.category_repo.find_by_id(category_id):
            raise EntityNotFoundError(f"Can't find category with id: {category_id}")
        return [BookDto.model_validate(b) for b in self.repo.find_by_category(category_id, page)]

    #commands
    def create_book(self, request: CreateBookRequest) -> BookDto:
        book = BookModel(is_deleted=False)
        self._apply(book, request)
        created = self._save(book)
        logger.info(f"Utworzono ksiazke {created.id} (isbn {created.isbn})")
        return BookDto.model_validate(created)

    def update_book(self, book_id: int, request: CreateBookRequest) -> BookDto:
        # pelna podmiana pol, id zostaje
        book = self._get_or_raise(book_id)
        self._apply(book, request)
        updated = self._save(book)
        logger.info(f"Zaktualizowano ksiazke {book_id}")
        return BookDto.model_validate(updated)

    def delete_book(self, book_id: int) -> None:
        # idempotentne - brak ksiazki to nie blad
        if self.repo.soft_delete(book_id):
            logger.info(f"Usunieto (soft) ksiazke {book_id}")

    def _save(self, book: BookModel) -> BookModel:
        isbn = book.isbn
        try:
            return self.repo.save(book)
        except IntegrityError:
            self.repo.rollback()
            raise ValueError(f"Book with isbn {isbn} already exists")

    def _get_or_raise(self, book_id: int) -> BookModel:
        book = self.repo.find_by_id(book_id)
        if not book:
            raise EntityNotFoundError(f"Can't find book with id: {book_id}")
        return book

    def _apply(self, book: BookModel, request: CreateBookRequest) -> None:
        categories = self.category_repo.find_by_ids(request.category_ids)
        missing = set(request.category_ids) - {c.id for c in categories}
        if missing:
            raise EntityNotFoundError(f"Can't find categories with ids: {sorted(missing)}")

        book.title = request.title
        book.author = request.author
        book.isbn = request.isbn
        book.price = request.price
        book.description = request.description
        book.cover_image = request.cover_image
        book.categories = categories
