from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from cellarbook.core.database import get_db
from cellarbook.core.dependencies import get_current_user
from cellarbook.models.user import User
from cellarbook.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductListResponse,
    ProductFilters,
    ProductSortField,
    SortOrder,
)
from cellarbook.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])


def get_product_filters(
    search: Optional[str] = None,
    type: Optional[str] = None,
    country: Optional[str] = None,
    wine_type: Optional[str] = Query(None, alias="wineType"),
    tags: Optional[str] = None,
    fav: Optional[str] = None,
    purchased: Optional[str] = None,
    reviewed: Optional[str] = None,
    interested: Optional[str] = None,
) -> ProductFilters:
    return ProductFilters(
        search=search,
        type=type,
        country=country,
        wine_type=wine_type,
        tags=tags,
        fav=fav,
        purchased=purchased,
        reviewed=reviewed,
        interested=interested,
    )


@router.get("", response_model=ProductListResponse)
def list_products(
    filters: ProductFilters = Depends(get_product_filters),
    sort_by: Optional[ProductSortField] = Query(None, alias="sortBy"),
    order: Optional[SortOrder] = None,
    limit: Optional[int] = Query(None, ge=0),
    year: Optional[int] = Query(None, ge=1, le=9998),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Liste des produits de l'utilisateur + statistiques

    - limit=0 : statistiques seules, liste vide
    - year : restreint totalSpent / totalItems aux achats de l'année
    """
    service = ProductService(db)
    return service.list_products(
        current_user.id,
        filters,
        sort_by=sort_by,
        order=order,
        limit=limit,
        year=year,
    )


@router.get("/suggestions", response_model=List[str])
def get_suggestions(
    q: Optional[str] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ProductService(db).get_suggestions(current_user.id, q)


@router.get("/grape-types", response_model=List[str])
def get_grape_types(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ProductService(db).get_grape_types(current_user.id)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    request: ProductCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ProductService(db).create_product(current_user.id, request)


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ProductService(db).get_product(current_user.id, product_id)


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: int,
    request: ProductUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Modifier un produit (seuls les champs envoyés changent)"""
    return ProductService(db).update_product(current_user.id, product_id, request)


@router.delete("/{product_id}")
def delete_product(
    product_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    ProductService(db).delete_product(current_user.id, product_id)
    return {"message": "Product deleted successfully"}
