# bookstore/data/models/category.py
from sqlalchemy import Column, Integer, String, Boolean
from sqlalchemy.orm import relationship

from bookstore.data.database import Base
from bookstore.data.models.book import books_categories


class CategoryModel(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    is_deleted = Column(Boolean, nullable=False, default=False)

    books = relationship("BookModel", secondary=books_categories, back_populates="categories")
