# bookstore/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, EmailStr, StringConstraints
from typing import List, Optional, Annotated
from decimal import Decimal
from datetime import datetime

NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
PasswordStr = Annotated[str, StringConstraints(min_length=6, max_length=20)]


class PageRequest(BaseModel):
    """Numer strony (od 0), rozmiar i sortowanie w formacie "pole,asc|desc"."""

    page: int = Field(0, ge=0)
    size: int = Field(20, ge=1)
    sort: List[str] = Field(default_factory=list)


# ---- books ----

class CreateBookRequest(BaseModel):
    title: NonBlankStr
    author: NonBlankStr
    isbn: NonBlankStr
    price: Decimal = Field(..., ge=0, description="Cena (>= 0)")
    description: NonBlankStr
    cover_image: NonBlankStr
    category_ids: List[int] = Field(default_factory=list)


class BookDto(BaseModel):
    id: int
    title: str
    author: str
    isbn: str
    price: Decimal
    description: str
    cover_image: str
    category_ids: List[int] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class BookSearchParams(BaseModel):
    """Opcjonalne filtry wyszukiwania, puste pola nie ograniczaja wyniku."""

    titles: List[str] = Field(default_factory=list)
    authors: List[str] = Field(default_factory=list)
    isbn: Optional[str] = None


# ---- categories ----

class CreateCategoryRequest(BaseModel):
    name: NonBlankStr
    description: Optional[str] = None


class CategoryDto(BaseModel):
    id: int
    name: str
    description: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


# ---- users ----

class UserRegistrationRequest(BaseModel):
    email: EmailStr
    password: PasswordStr
    repeat_password: PasswordStr
    first_name: NonBlankStr
    last_name: NonBlankStr
    shipping_address: NonBlankStr


class UserLoginRequest(BaseModel):
    email: EmailStr
    password: PasswordStr


class UserResponse(BaseModel):
    id: int
    email: str
    first_name: str
    last_name: str
    shipping_address: Optional[str] = None
    roles: List[str] = Field(default_factory=list)


# ---- cart ----

class AddToCartRequest(BaseModel):
    book_id: int = Field(..., gt=0, description="ID ksiazki (musi byc > 0)")
    quantity: int = Field(..., gt=0, description="Ilosc (musi byc > 0)")


class UpdateCartItemRequest(BaseModel):
    quantity: int = Field(..., gt=0, description="Ilosc (musi byc > 0)")


class CartItemDto(BaseModel):
    id: int
    book_id: int
    book_title: str
    quantity: int


class ShoppingCartDto(BaseModel):
    id: int
    user_id: int
    items: List[CartItemDto]


# ---- orders ----

class PlaceOrderRequest(BaseModel):
    shipping_address: NonBlankStr


class OrderItemDto(BaseModel):
    id: int
    book_id: int
    quantity: int
    price: Decimal

    model_config = ConfigDict(from_attributes=True)


class OrderDto(BaseModel):
    id: int
    user_id: int
    status: str
    total: Decimal
    order_date: datetime
    shipping_address: str
    is_deleted: bool = False
    items: List[OrderItemDto] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)
