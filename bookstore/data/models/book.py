# bookstore/data/models/book.py
from sqlalchemy import Column, Integer, String, Numeric, Boolean, ForeignKey, Table
from sqlalchemy.orm import relationship

from bookstore.data.database import Base

books_categories = Table(
    "books_categories",
    Base.metadata,
    Column("book_id", Integer, ForeignKey("books.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", Integer, ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)


class BookModel(Base):
    __tablename__ = "books"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    author = Column(String, nullable=False)
    isbn = Column(String, nullable=False, unique=True)
    price = Column(Numeric(10, 2), nullable=False)
    description = Column(String, nullable=False)
    cover_image = Column(String, nullable=False)
    is_deleted = Column(Boolean, nullable=False, default=False)

    categories = relationship("CategoryModel", secondary=books_categories, back_populates="books")

    @property
    def category_ids(self) -> list[int]:
        return sorted(c.id for c in self.categories if not c.is_deleted)
