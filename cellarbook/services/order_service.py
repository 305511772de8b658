from sqlalchemy.orm import Session
from sqlalchemy import func, case
from typing import Optional, List, Dict, Any, Tuple
from datetime import datetime
import logging

from cellarbook.middleware.transaction_handler import transactional
from cellarbook.models.order import Order, OrderItem
from cellarbook.models.product import Product
from cellarbook.schemas.order import (
    OrderCreate,
    OrderUpdate,
    OrderItemCreate,
    OrderSortField,
)
from cellarbook.schemas.product import SortOrder
from cellarbook.utils.exceptions import ProductNotFoundError, OrderNotFoundError

logger = logging.getLogger(__name__)

ORDER_SORT_COLUMNS = {
    OrderSortField.ORDER_DATE: Order.order_date,
    OrderSortField.ORDER_NUMBER: Order.order_number,
    OrderSortField.TOTAL_PRICE: Order.total_price,
    OrderSortField.STATUS: Order.status,
    OrderSortField.CREATED_AT: Order.created_at,
}

# Champs scalaires remplacés individuellement lorsqu'ils sont présents
ORDER_SCALAR_FIELDS = ("order_number", "order_date", "notes", "status")


class OrderService:
    """
    Composition des commandes

    Chaque item est résolu vers un produit de l'utilisateur et son prix est
    copié au moment de la création / mise à jour (priceAtOrder). Aucune
    transaction multi-documents n'entoure la résolution: le prix lu est
    celui du moment de la lecture.
    """

    def __init__(self, db: Session):
        self.db = db

    def _compose_items(
        self, owner_id: int, item_specs: List[OrderItemCreate]
    ) -> Tuple[List[OrderItem], float]:
        items = []
        total_price = 0.0

        for position, spec in enumerate(item_specs):
            product = (
                self.db.query(Product)
                .filter(Product.id == spec.product_id, Product.owner_id == owner_id)
                .first()
            )
            if not product:
                raise ProductNotFoundError(spec.product_id)

            price_at_order = product.price if product.price is not None else 0.0
            total_price += price_at_order * spec.quantity

            items.append(
                OrderItem(
                    product_id=product.id,
                    position=position,
                    quantity=spec.quantity,
                    price_at_order=price_at_order,
                )
            )

        return items, total_price

    def get_order(self, owner_id: int, order_id: int) -> Order:
        order = (
            self.db.query(Order)
            .filter(Order.id == order_id, Order.owner_id == owner_id)
            .first()
        )

        if not order:
            raise OrderNotFoundError(order_id)

        return order

    @transactional
    def create_order(self, owner_id: int, data: OrderCreate) -> Order:
        items, total_price = self._compose_items(owner_id, data.items)

        order = Order(
            owner_id=owner_id,
            order_number=data.order_number,
            order_date=data.order_date or datetime.utcnow(),
            status=data.status.value,
            notes=data.notes,
            total_price=total_price,
            items=items,
        )

        self.db.add(order)
        self.db.flush()

        logger.info(
            f"Order created: {order.id} - {order.order_number} "
            f"({len(items)} items, total {total_price})"
        )
        return order

    @transactional
    def update_order(self, owner_id: int, order_id: int, data: OrderUpdate) -> Order:
        order = self.get_order(owner_id, order_id)
        patch = data.model_dump(exclude_unset=True)

        if data.items is not None:
            # remplacement complet, prix relus maintenant
            items, total_price = self._compose_items(owner_id, data.items)
            order.items = items
            order.total_price = total_price

        for field in ORDER_SCALAR_FIELDS:
            if field not in patch:
                continue
            value = getattr(data, field)
            if value is None and field != "notes":
                continue
            if field == "status":
                value = value.value
            setattr(order, field, value)

        self.db.flush()

        logger.info(f"Order updated: {order.id} ({', '.join(patch) or 'no fields'})")
        return order

    @transactional
    def delete_order(self, owner_id: int, order_id: int) -> None:
        order = self.get_order(owner_id, order_id)
        self.db.delete(order)
        logger.info(f"Order deleted: {order_id} (owner {owner_id})")

    def list_orders(
        self,
        owner_id: int,
        status: Optional[str] = None,
        sort_by: OrderSortField = OrderSortField.ORDER_DATE,
        order: SortOrder = SortOrder.DESC,
    ) -> Dict[str, Any]:
        query = self.db.query(Order).filter(Order.owner_id == owner_id)

        if status:
            query = query.filter(Order.status == status)

        column = ORDER_SORT_COLUMNS[sort_by]
        if order == SortOrder.DESC:
            query = query.order_by(column.desc(), Order.id.desc())
        else:
            query = query.order_by(column.asc(), Order.id.asc())

        return {"orders": query.all(), "stats": self.get_order_stats(owner_id)}

    def get_order_stats(self, owner_id: int) -> Dict[str, Any]:
        """Compteurs sur toutes les commandes de l'utilisateur, sans filtre de statut"""
        total_orders, pending_orders, collected_orders, total_spent = (
            self.db.query(
                func.count(Order.id),
                func.coalesce(func.sum(case((Order.status == "pending", 1), else_=0)), 0),
                func.coalesce(func.sum(case((Order.status == "collected", 1), else_=0)), 0),
                func.coalesce(func.sum(Order.total_price), 0),
            )
            .filter(Order.owner_id == owner_id)
            .one()
        )

        return {
            "total_orders": total_orders,
            "pending_orders": int(pending_orders),
            "collected_orders": int(collected_orders),
            "total_spent": float(total_spent),
        }
