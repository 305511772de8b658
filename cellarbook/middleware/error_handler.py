from fastapi import Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import logging

from cellarbook.utils.exceptions import (
    ProductNotFoundError,
    OrderNotFoundError,
    DuplicateProductNameError,
)

logger = logging.getLogger(__name__)


async def product_not_found_handler(request: Request, exc: ProductNotFoundError):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": "product_not_found",
            "message": f"Product not found: {exc.product_id}",
            "productId": exc.product_id,
        },
    )


async def order_not_found_handler(request: Request, exc: OrderNotFoundError):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": "order_not_found",
            "message": "Order not found",
            "orderId": exc.order_id,
        },
    )


async def duplicate_name_handler(request: Request, exc: DuplicateProductNameError):
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={
            "error": "conflict",
            "message": "Conflict: Product with this name already exists.",
            "field": exc.field,
        },
    )


async def global_exception_handler(request: Request, exc: Exception):
    """Gestionnaire global des erreurs de base de données"""

    if isinstance(exc, IntegrityError):
        logger.error(f"Database Integrity Error: {exc.orig}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={
                "message": "A resource with these attributes already exists or is linked improperly."
            },
        )

    if isinstance(exc, SQLAlchemyError):
        logger.critical(f"Critical Database Error: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "A critical database operation failed."},
        )

    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "An unexpected error occurred on the server."},
    )


def register_exception_handlers(app):
    app.add_exception_handler(ProductNotFoundError, product_not_found_handler)
    app.add_exception_handler(OrderNotFoundError, order_not_found_handler)
    app.add_exception_handler(DuplicateProductNameError, duplicate_name_handler)
    app.add_exception_handler(SQLAlchemyError, global_exception_handler)
