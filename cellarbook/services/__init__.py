"""
Business logic services
"""

from cellarbook.services.user_service import UserService
from cellarbook.services.product_service import ProductService
from cellarbook.services.stats_service import StatsService
from cellarbook.services.order_service import OrderService

__all__ = [
    "UserService",
    "ProductService",
    "StatsService",
    "OrderService",
]
