from cellarbook.utils.exceptions import (
    ProductNotFoundError,
    OrderNotFoundError,
    DuplicateProductNameError,
)

__all__ = [
    "ProductNotFoundError",
    "OrderNotFoundError",
    "DuplicateProductNameError",
]
