from cellarbook.core.config import settings
from cellarbook.core.database import Base, engine, SessionLocal, get_db
from cellarbook.core.security import (
    get_password_hash,
    verify_password,
    create_access_token,
    create_refresh_token,
    decode_token,
    get_user_id_from_payload,
)

__all__ = [
    "settings",
    "Base",
    "engine",
    "SessionLocal",
    "get_db",
    "get_password_hash",
    "verify_password",
    "create_access_token",
    "create_refresh_token",
    "decode_token",
    "get_user_id_from_payload",
]
