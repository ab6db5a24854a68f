# bookstore/services/category_service.py
from typing import List

from sqlalchemy.orm import Session

from bookstore.data.models import CategoryModel
from bookstore.domain.exceptions import EntityNotFoundError
from bookstore.domain.schemas import CategoryDto, CreateCategoryRequest, PageRequest
from bookstore.repos.category_repo import CategoryRepo
from bookstore.utils.logging import get_logger

logger = get_logger(__name__)


class CategoryService:
    def __init__(self, db: Session):
        self.repo = CategoryRepo(db)

    def list_categories(self, page: PageRequest) -> List[CategoryDto]:
        return [CategoryDto.model_validate(c) for c in self.repo.find_all(page)]

    def get_category(self, category_id: int) -> CategoryDto:
        return CategoryDto.model_validate(self._get_or_raise(category_id))

    def create_category(self, request: CreateCategoryRequest) -> CategoryDto:
        category = self.repo.save(
            CategoryModel(name=request.name, description=request.description, is_deleted=False)
        )
        logger.info(f"Utworzono kategorie {category.id} ({category.name})")
        return CategoryDto.model_validate(category)

    def update_category(self, category_id: int, request: CreateCategoryRequest) -> CategoryDto:
        category = self._get_or_raise(category_id)
        category.name = request.name
        category.description = request.description
        return CategoryDto.model_validate(self.repo.save(category))

    def delete_category(self, category_id: int) -> None:
        if self.repo.soft_delete(category_id):
            logger.info(f"Usunieto (soft) kategorie {category_id}")

    def _get_or_raise(self, category_id: int) -> CategoryModel:
        category = self.repo.find_by_id(category_id)
        if not category:
            raise EntityNotFoundError(f"Can't find category with id: {category_id}")
        return category
