from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from cellarbook.core.database import get_db
from cellarbook.core.dependencies import get_current_user
from cellarbook.models.user import User
from cellarbook.schemas.order import (
    OrderCreate,
    OrderUpdate,
    OrderResponse,
    OrderListResponse,
    OrderSortField,
)
from cellarbook.schemas.product import SortOrder
from cellarbook.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    request: OrderCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Créer une commande

    Les prix sont copiés depuis les produits de l'utilisateur; un produit
    introuvable annule toute la commande (404).
    """
    return OrderService(db).create_order(current_user.id, request)


@router.get("", response_model=OrderListResponse)
def list_orders(
    status: Optional[str] = None,
    sort_by: OrderSortField = Query(OrderSortField.ORDER_DATE, alias="sortBy"),
    order: SortOrder = SortOrder.DESC,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return OrderService(db).list_orders(
        current_user.id, status=status, sort_by=sort_by, order=order
    )


@router.get("/{order_id}", response_model=OrderResponse)
def get_order(
    order_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return OrderService(db).get_order(current_user.id, order_id)


@router.put("/{order_id}", response_model=OrderResponse)
def update_order(
    order_id: int,
    request: OrderUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return OrderService(db).update_order(current_user.id, order_id, request)


@router.delete("/{order_id}")
def delete_order(
    order_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    OrderService(db).delete_order(current_user.id, order_id)
    return {"message": "Order deleted successfully"}
