from cellarbook.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    RefreshRequest,
    TokenResponse,
)
from cellarbook.schemas.user import UserResponse, UserUpdateRequest
from cellarbook.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductListResponse,
    ProductFilters,
    ProductSortField,
    SortOrder,
    YearlyStat,
)
from cellarbook.schemas.order import (
    OrderCreate,
    OrderUpdate,
    OrderResponse,
    OrderListResponse,
    OrderStatus,
    OrderSortField,
)

__all__ = [
    # Auth
    "LoginRequest",
    "RegisterRequest",
    "RefreshRequest",
    "TokenResponse",
    # Users
    "UserResponse",
    "UserUpdateRequest",
    # Products
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "ProductListResponse",
    "ProductFilters",
    "ProductSortField",
    "SortOrder",
    "YearlyStat",
    # Orders
    "OrderCreate",
    "OrderUpdate",
    "OrderResponse",
    "OrderListResponse",
    "OrderStatus",
    "OrderSortField",
]
