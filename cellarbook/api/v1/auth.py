from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from cellarbook.core.database import get_db
from cellarbook.core.security import (
    create_access_token,
    create_refresh_token,
    decode_token,
    get_user_id_from_payload,
)
from cellarbook.schemas.auth import (
    LoginRequest,
    TokenResponse,
    RegisterRequest,
    RefreshRequest,
)
from cellarbook.services.user_service import UserService


router = APIRouter(prefix="/auth", tags=["Authentication"])


def _issue_tokens(user_id: int) -> dict:
    return {
        "access_token": create_access_token({"sub": str(user_id)}),
        "refresh_token": create_refresh_token({"sub": str(user_id)}),
        "token_type": "bearer",
    }


@router.post(
    "/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED
)
def register(request: RegisterRequest, db: Session = Depends(get_db)):
    service = UserService(db)

    if service.get_user_by_email(request.email):
        raise HTTPException(status_code=400, detail="Email already registered")

    user = service.create_user(
        email=request.email, password=request.password, name=request.name
    )
    if not user:
        raise HTTPException(status_code=400, detail="Email already registered")

    return _issue_tokens(user.id)


@router.post("/login", response_model=TokenResponse)
def login(request: LoginRequest, db: Session = Depends(get_db)):
    user = UserService(db).authenticate(request.email, request.password)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
        )

    return _issue_tokens(user.id)


@router.post("/refresh", response_model=TokenResponse)
def refresh_token(request: RefreshRequest, db: Session = Depends(get_db)):
    payload = decode_token(request.refresh_token)

    if payload.get("type") != "refresh":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type",
        )

    user = UserService(db).get_user_by_id(get_user_id_from_payload(payload))
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    return _issue_tokens(user.id)
