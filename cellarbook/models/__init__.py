from cellarbook.models.user import User
from cellarbook.models.product import Product, ProductGrape, ProductTag
from cellarbook.models.order import Order, OrderItem

__all__ = [
    "User",
    "Product",
    "ProductGrape",
    "ProductTag",
    "Order",
    "OrderItem",
]
