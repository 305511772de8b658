"""
API v1 routes
"""

from fastapi import APIRouter
from cellarbook.api.v1 import auth, users, products, orders

api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(products.router)
api_router.include_router(orders.router)

__all__ = ["api_router"]
