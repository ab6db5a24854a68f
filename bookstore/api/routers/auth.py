# bookstore/api/routers/auth.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from bookstore.data.database import get_db
from bookstore.domain.exceptions import AuthenticationError
from bookstore.domain.schemas import UserLoginRequest, UserRegistrationRequest, UserResponse
from bookstore.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/registration", response_model=UserResponse, status_code=201)
def register(payload: UserRegistrationRequest, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.register(payload)
    except ValueError as e:
        # FieldMismatchError, RegistrationError
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/login", response_model=UserResponse)
def login(payload: UserLoginRequest, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.login(payload)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
