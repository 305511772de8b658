from sqlalchemy.orm import Session
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from typing import Optional, List, Dict, Any
import logging

from cellarbook.middleware.transaction_handler import transactional
from cellarbook.models.product import Product, ProductGrape, ProductTag
from cellarbook.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductFilters,
    ProductSortField,
    SortOrder,
)
from cellarbook.services.product_filters import build_product_filters, product_ordering
from cellarbook.services.stats_service import StatsService
from cellarbook.utils.exceptions import ProductNotFoundError, DuplicateProductNameError

logger = logging.getLogger(__name__)

SUGGESTIONS_PER_SOURCE = 5
MAX_SUGGESTIONS = 10

# Un null explicite sur ces champs est ignoré au lieu d'être écrit
NON_NULLABLE_FIELDS = {
    "name",
    "liked",
    "bought",
    "reviewed",
    "interested",
    "pickup_status",
    "kosher",
}

NAME_CONSTRAINT_MARKERS = ("uq_products_owner_name", "products.owner_id, products.name")


def _is_name_conflict(exc: IntegrityError) -> bool:
    message = str(exc.orig)
    return any(marker in message for marker in NAME_CONSTRAINT_MARKERS)


class ProductService:
    """Gestion du catalogue de boissons d'un utilisateur"""

    def __init__(self, db: Session):
        self.db = db

    def get_product(self, owner_id: int, product_id: int) -> Product:
        product = (
            self.db.query(Product)
            .filter(Product.id == product_id, Product.owner_id == owner_id)
            .first()
        )

        if not product:
            raise ProductNotFoundError(product_id)

        return product

    def list_products(
        self,
        owner_id: int,
        filters: ProductFilters,
        sort_by: Optional[ProductSortField] = None,
        order: Optional[SortOrder] = None,
        limit: Optional[int] = None,
        year: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Liste filtrée + statistiques

        limit=0 renvoie uniquement les statistiques. Toute autre valeur de
        limit est acceptée mais ne tronque pas la liste.
        """
        result = StatsService(self.db).get_product_stats(owner_id, year=year)

        if limit == 0:
            result["products"] = []
            return result

        result["products"] = (
            self.db.query(Product)
            .filter(*build_product_filters(owner_id, filters))
            .order_by(*product_ordering(sort_by, order))
            .all()
        )
        return result

    def _flush_or_conflict(self, name: str):
        try:
            self.db.flush()
        except IntegrityError as e:
            if _is_name_conflict(e):
                logger.warning(f"Duplicate product name rejected: {name!r}")
                raise DuplicateProductNameError(name)
            raise

    @transactional
    def create_product(self, owner_id: int, data: ProductCreate) -> Product:
        product = Product(owner_id=owner_id, **data.model_dump())

        self.db.add(product)
        self._flush_or_conflict(product.name)

        logger.info(f"Product created: {product.id} - {product.name} (owner {owner_id})")
        return product

    @transactional
    def update_product(
        self, owner_id: int, product_id: int, data: ProductUpdate
    ) -> Product:
        product = self.get_product(owner_id, product_id)

        update_data = data.model_dump(exclude_unset=True)
        for key, value in update_data.items():
            if value is None and key in NON_NULLABLE_FIELDS:
                continue
            setattr(product, key, value)

        self._flush_or_conflict(product.name)

        logger.info(f"Product updated: {product.id} ({', '.join(update_data) or 'no fields'})")
        return product

    @transactional
    def delete_product(self, owner_id: int, product_id: int) -> None:
        product = self.get_product(owner_id, product_id)
        self.db.delete(product)
        logger.info(f"Product deleted: {product_id} (owner {owner_id})")

    def get_suggestions(self, owner_id: int, query: Optional[str]) -> List[str]:
        """
        Suggestions "vous vouliez dire" : noms, puis cépages, puis tags
        (5 max par source, 10 au total, sans doublons)
        """
        if not query:
            return []

        names = (
            self.db.query(Product.name)
            .filter(Product.owner_id == owner_id, Product.name.icontains(query, autoescape=True))
            .order_by(Product.id)
            .limit(SUGGESTIONS_PER_SOURCE)
            .all()
        )

        grapes = self._matching_values(ProductGrape, owner_id, query)
        tags = self._matching_values(ProductTag, owner_id, query)

        suggestions = []
        for value in [row[0] for row in names] + grapes + tags:
            if value not in suggestions:
                suggestions.append(value)

        return suggestions[:MAX_SUGGESTIONS]

    def _matching_values(self, entry_model, owner_id: int, query: str) -> List[str]:
        rows = (
            self.db.query(entry_model.value)
            .join(Product, Product.id == entry_model.product_id)
            .filter(
                Product.owner_id == owner_id,
                entry_model.value.icontains(query, autoescape=True),
            )
            .group_by(entry_model.value)
            .order_by(func.min(entry_model.id))
            .limit(SUGGESTIONS_PER_SOURCE)
            .all()
        )
        return [row[0] for row in rows]

    def get_grape_types(self, owner_id: int) -> List[str]:
        """Cépages distincts utilisés par l'utilisateur, triés"""
        rows = (
            self.db.query(ProductGrape.value)
            .join(Product, Product.id == ProductGrape.product_id)
            .filter(Product.owner_id == owner_id)
            .distinct()
            .order_by(ProductGrape.value)
            .all()
        )
        return [row[0] for row in rows]
