# bookstore/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from bookstore.api.deps import user_only
from bookstore.data.database import get_db
from bookstore.data.models import UserModel
from bookstore.domain.exceptions import ConcurrentModificationError, EntityNotFoundError
from bookstore.domain.schemas import AddToCartRequest, ShoppingCartDto, UpdateCartItemRequest
from bookstore.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db)


@router.get("", response_model=ShoppingCartDto)
def get_cart(user: UserModel = Depends(user_only), db: Session = Depends(get_db)):
    try:
        return get_service(db).get_cart(user.id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=ShoppingCartDto)
def add_book(
    payload: AddToCartRequest,
    user: UserModel = Depends(user_only),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.add_book(user.id, payload)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConcurrentModificationError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.put("/items/{item_id}", response_model=ShoppingCartDto)
def update_item(
    item_id: int,
    payload: UpdateCartItemRequest,
    user: UserModel = Depends(user_only),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.update_item(user.id, item_id, payload)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConcurrentModificationError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.delete("/items/{item_id}", status_code=204, response_class=Response)
def remove_item(
    item_id: int,
    user: UserModel = Depends(user_only),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        svc.remove_item(user.id, item_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConcurrentModificationError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return Response(status_code=204)
