# bookstore/api/routers/categories.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from bookstore.api.deps import admin_only, any_user, page_params
from bookstore.data.database import get_db
from bookstore.domain.exceptions import EntityNotFoundError
from bookstore.domain.schemas import BookDto, CategoryDto, CreateCategoryRequest, PageRequest
from bookstore.services.book_service import BookService
from bookstore.services.category_service import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])


def get_service(db: Session):
    return CategoryService(db)


@router.get("", response_model=List[CategoryDto], dependencies=[Depends(any_user)])
def get_all(page: PageRequest = Depends(page_params), db: Session = Depends(get_db)):
    try:
        return get_service(db).list_categories(page)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{category_id}", response_model=CategoryDto, dependencies=[Depends(any_user)])
def get_category(category_id: int, db: Session = Depends(get_db)):
    try:
        return get_service(db).get_category(category_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{category_id}/books", response_model=List[BookDto], dependencies=[Depends(any_user)])
def get_books_by_category(
    category_id: int,
    page: PageRequest = Depends(page_params),
    db: Session = Depends(get_db),
):
    try:
        return BookService(db).list_books_by_category(category_id, page)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("", response_model=CategoryDto, status_code=201, dependencies=[Depends(admin_only)])
def create_category(payload: CreateCategoryRequest, db: Session = Depends(get_db)):
    return get_service(db).create_category(payload)


@router.put("/{category_id}", response_model=CategoryDto, dependencies=[Depends(admin_only)])
def update_category(category_id: int, payload: CreateCategoryRequest, db: Session = Depends(get_db)):
    try:
        return get_service(db).update_category(category_id, payload)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{category_id}", status_code=204, response_class=Response, dependencies=[Depends(admin_only)])
def delete_category(category_id: int, db: Session = Depends(get_db)):
    get_service(db).delete_category(category_id)
    return Response(status_code=204)
