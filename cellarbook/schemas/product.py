from pydantic import Field, validator
from typing import Optional, List
from datetime import date, datetime
from enum import Enum

from cellarbook.schemas.common import CamelModel


class ProductSortField(str, Enum):
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"
    NAME = "name"
    PRICE = "price"
    TYPE = "type"
    COUNTRY = "country"
    WINE_TYPE = "wineType"
    ALCOHOL_PERCENT = "alcoholPercent"
    DATE_OF_PURCHASE = "dateOfPurchase"
    STOCK = "stock"
    QUANTITY_BOUGHT = "quantityBought"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


def _clean_strings(values: Optional[List[str]]) -> Optional[List[str]]:
    if values is None:
        return None
    cleaned = []
    for v in values:
        v = v.strip()
        if v and v not in cleaned:
            cleaned.append(v)
    return cleaned


class ProductCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)

    liked: bool = False
    bought: bool = False
    reviewed: bool = False
    interested: bool = False
    pickup_status: bool = False
    kosher: bool = False

    type: Optional[str] = Field(None, max_length=50)
    country: Optional[str] = Field(None, max_length=100)
    wine_type: Optional[str] = Field(None, max_length=50)
    grape_type: Optional[List[str]] = None
    alcohol_percent: Optional[float] = None

    stock: Optional[int] = Field(None, ge=0)
    quantity_bought: Optional[int] = Field(None, ge=0)
    quantity_left: Optional[int] = Field(None, ge=0)

    date_of_purchase: Optional[date] = None
    pickup_range: Optional[str] = None
    picture: Optional[str] = None
    url: Optional[str] = None
    tags: Optional[List[str]] = None

    @validator("name")
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("Product name cannot be empty")
        return v.strip()

    @validator("grape_type", "tags")
    def validate_string_sets(cls, v):
        return _clean_strings(v)


class ProductUpdate(CamelModel):
    """
    Mise à jour partielle: seuls les champs envoyés sont appliqués
    (model_dump(exclude_unset=True) côté service)
    """

    name: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)

    liked: Optional[bool] = None
    bought: Optional[bool] = None
    reviewed: Optional[bool] = None
    interested: Optional[bool] = None
    pickup_status: Optional[bool] = None
    kosher: Optional[bool] = None

    type: Optional[str] = Field(None, max_length=50)
    country: Optional[str] = Field(None, max_length=100)
    wine_type: Optional[str] = Field(None, max_length=50)
    grape_type: Optional[List[str]] = None
    alcohol_percent: Optional[float] = None

    stock: Optional[int] = Field(None, ge=0)
    quantity_bought: Optional[int] = Field(None, ge=0)
    quantity_left: Optional[int] = Field(None, ge=0)

    date_of_purchase: Optional[date] = None
    pickup_range: Optional[str] = None
    picture: Optional[str] = None
    url: Optional[str] = None
    tags: Optional[List[str]] = None

    @validator("name")
    def validate_name(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Product name cannot be empty")
        return v.strip() if v else v

    @validator("grape_type", "tags")
    def validate_string_sets(cls, v):
        return _clean_strings(v)


class ProductResponse(CamelModel):
    id: int
    owner_id: int
    name: str
    description: Optional[str] = None
    price: Optional[float] = None

    liked: bool
    bought: bool
    reviewed: bool
    interested: bool
    pickup_status: bool
    kosher: bool

    type: Optional[str] = None
    country: Optional[str] = None
    wine_type: Optional[str] = None
    grape_type: List[str] = []
    alcohol_percent: Optional[float] = None

    stock: Optional[int] = None
    quantity_bought: Optional[int] = None
    quantity_left: Optional[int] = None

    date_of_purchase: Optional[date] = None
    pickup_range: Optional[str] = None
    picture: Optional[str] = None
    url: Optional[str] = None
    tags: List[str] = []

    created_at: datetime
    updated_at: datetime


class YearlyStat(CamelModel):
    year: int = Field(..., alias="_id")
    spent: float
    count: int


class ProductStats(CamelModel):
    total_count: int = 0
    total_spent: float = 0.0
    total_liked: int = 0
    total_items: int = 0
    yearly_stats: List[YearlyStat] = []


class ProductListResponse(ProductStats):
    products: List[ProductResponse] = []


class ProductFilters(CamelModel):
    """Paramètres de filtre de GET /products, tels que reçus"""

    search: Optional[str] = None
    type: Optional[str] = None
    country: Optional[str] = None
    wine_type: Optional[str] = None
    tags: Optional[str] = None
    fav: Optional[str] = None
    purchased: Optional[str] = None
    reviewed: Optional[str] = None
    interested: Optional[str] = None
