from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import Optional
import logging

from cellarbook.middleware.transaction_handler import transactional
from cellarbook.models.user import User
from cellarbook.core.security import get_password_hash, verify_password
from cellarbook.schemas.user import UserUpdateRequest

logger = logging.getLogger(__name__)


class UserService:
    """Service de gestion des utilisateurs"""

    def __init__(self, db: Session):
        self.db = db

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def authenticate(self, email: str, password: str) -> Optional[User]:
        user = self.get_user_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            return None
        return user

    @transactional
    def create_user(
        self,
        email: str,
        password: str,
        name: Optional[str] = None,
        is_admin: bool = False,
    ) -> Optional[User]:
        """
        Crée un nouvel utilisateur

        Returns:
            User créé ou None si l'email existe déjà
        """
        user = User(
            email=email,
            name=name,
            password_hash=get_password_hash(password),
            is_admin=is_admin,
        )
        self.db.add(user)

        try:
            self.db.flush()
        except IntegrityError:
            self.db.rollback()
            logger.warning(f"User creation failed: email {email} already exists")
            return None

        logger.info(f"User created: {user.id} - {user.email}")
        return user

    @transactional
    def update_user(self, user: User, update_data: UserUpdateRequest) -> User:
        if update_data.name is not None:
            user.name = update_data.name

        logger.info(f"User updated: {user.id}")
        return user

    def ensure_admin(self, email: str, password: str, name: str = "Admin") -> User:
        """
        Amorçage du compte administrateur au premier démarrage
        (recherche puis création, sans effet s'il existe déjà)
        """
        existing = self.get_user_by_email(email)
        if existing:
            return existing

        user = self.create_user(email=email, password=password, name=name, is_admin=True)
        if user is None:
            # créé entre-temps par un autre processus
            return self.get_user_by_email(email)

        logger.info(f"Admin account seeded: {email}")
        return user
