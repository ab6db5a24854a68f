# bookstore/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from bookstore.api.deps import admin_only, get_lock_service, page_params, user_only
from bookstore.data.database import get_db
from bookstore.data.models import UserModel
from bookstore.domain.exceptions import (
    CheckoutInProgressError,
    ConcurrentModificationError,
    EntityNotFoundError,
)
from bookstore.domain.schemas import OrderDto, OrderItemDto, PageRequest, PlaceOrderRequest
from bookstore.services.lock_service import LockService
from bookstore.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session, lock_service: LockService | None = None):
    return OrderService(db, lock_service=lock_service)


@router.post("", response_model=OrderDto, status_code=201)
def place_order(
    payload: PlaceOrderRequest,
    user: UserModel = Depends(user_only),
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
):
    """
    Sklada zamowienie z koszyka uzytkownika.
    Wysyla powiadomienie asynchronicznie.
    """
    svc = get_service(db, lock_service)
    try:
        return svc.place_order(payload, user.id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (CheckoutInProgressError, ConcurrentModificationError) as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("", response_model=List[OrderDto])
def get_history(
    page: PageRequest = Depends(page_params),
    user: UserModel = Depends(user_only),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.get_history(user.id, page)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{order_id}/items", response_model=List[OrderItemDto])
def get_order_items(
    order_id: int,
    user: UserModel = Depends(user_only),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.get_order_items(order_id, user.id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{order_id}/items/{item_id}", response_model=OrderItemDto)
def get_order_item(
    order_id: int,
    item_id: int,
    user: UserModel = Depends(user_only),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.get_order_item(order_id, item_id, user.id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{order_id}", response_model=OrderDto, dependencies=[Depends(admin_only)])
def advance_status(order_id: int, db: Session = Depends(get_db)):
    """
    Przesuwa status zamowienia: PENDING -> DELIVERED -> COMPLETED -> usuniete.
    """
    svc = get_service(db)
    try:
        return svc.advance_status(order_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
