from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from cellarbook.core.config import settings
from cellarbook.core.database import engine, Base, SessionLocal
from cellarbook.middleware.error_handler import register_exception_handlers
from cellarbook.middleware.logging import configure_logging
from cellarbook.services.user_service import UserService
from cellarbook import models  # noqa: F401

from cellarbook.api.v1 import api_router

configure_logging()
logger = logging.getLogger(__name__)


def seed_admin():
    """Crée le compte admin configuré s'il n'existe pas encore"""
    if not (settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD):
        return

    db = SessionLocal()
    try:
        UserService(db).ensure_admin(
            settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD, settings.ADMIN_NAME
        )
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Cellarbook API...")

    Base.metadata.create_all(bind=engine)
    seed_admin()

    yield

    logger.info("Shutting down Cellarbook API...")


app = FastAPI(title=settings.APP_NAME, version=settings.VERSION, lifespan=lifespan)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)

register_exception_handlers(app)

app.include_router(api_router, prefix="/api/v1")


@app.get("/")
async def root():
    return {"message": "Cellarbook API", "version": settings.VERSION, "docs": "/docs"}


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
