from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from cellarbook.core.database import get_db
from cellarbook.core.dependencies import get_current_user
from cellarbook.models.user import User
from cellarbook.schemas.user import UserResponse, UserUpdateRequest
from cellarbook.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me", response_model=UserResponse)
def get_current_user_profile(current_user: User = Depends(get_current_user)):
    """Récupérer le profil de l'utilisateur connecté"""
    return current_user


@router.put("/me", response_model=UserResponse)
def update_profile(
    request: UserUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return UserService(db).update_user(current_user, request)
