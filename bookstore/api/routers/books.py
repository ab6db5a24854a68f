# bookstore/api/routers/books.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from bookstore.api.deps import admin_only, any_user, page_params
from bookstore.data.database import get_db
from bookstore.domain.exceptions import EntityNotFoundError
from bookstore.domain.schemas import BookDto, BookSearchParams, CreateBookRequest, PageRequest
from bookstore.services.book_service import BookService

router = APIRouter(prefix="/books", tags=["books"])


def get_service(db: Session):
    return BookService(db)


@router.get("", response_model=List[BookDto], dependencies=[Depends(any_user)])
def get_all(page: PageRequest = Depends(page_params), db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.list_books(page)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/search", response_model=List[BookDto], dependencies=[Depends(any_user)])
def search_books(
    title: List[str] = Query(default=[]),
    author: List[str] = Query(default=[]),
    isbn: Optional[str] = Query(default=None),
    page: PageRequest = Depends(page_params),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    params = BookSearchParams(titles=title, authors=author, isbn=isbn)
    try:
        return svc.search_books(params, page)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{book_id}", response_model=BookDto, dependencies=[Depends(any_user)])
def get_book(book_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.get_book(book_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=BookDto, status_code=201, dependencies=[Depends(admin_only)])
def create_book(payload: CreateBookRequest, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.create_book(payload)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/{book_id}", response_model=BookDto, dependencies=[Depends(admin_only)])
def update_book(book_id: int, payload: CreateBookRequest, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.update_book(book_id, payload)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{book_id}", status_code=204, response_class=Response, dependencies=[Depends(admin_only)])
def delete_book(book_id: int, db: Session = Depends(get_db)):
    get_service(db).delete_book(book_id)
    return Response(status_code=204)
