from sqlalchemy.orm import Session
from sqlalchemy import func, extract
from typing import Optional, Dict, Any, List
from datetime import date
import logging

from cellarbook.models.product import Product

logger = logging.getLogger(__name__)


class StatsService:
    """
    Statistiques du catalogue d'un utilisateur

    Calculées indépendamment des filtres de liste (recherche, type, ...):
    seuls le statut d'achat et l'année éventuelle restreignent les montants.
    """

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def _spent_expr():
        # prix absent = 0, quantité absente = 1
        return func.coalesce(Product.price, 0) * func.coalesce(
            Product.quantity_bought, 1
        )

    @staticmethod
    def _year_window(year: int) -> List:
        return [
            Product.date_of_purchase >= date(year, 1, 1),
            Product.date_of_purchase < date(year + 1, 1, 1),
        ]

    def get_product_stats(self, owner_id: int, year: Optional[int] = None) -> Dict[str, Any]:
        total_count = (
            self.db.query(func.count(Product.id))
            .filter(Product.owner_id == owner_id)
            .scalar()
        )

        total_liked = (
            self.db.query(func.count(Product.id))
            .filter(Product.owner_id == owner_id, Product.liked.is_(True))
            .scalar()
        )

        bought_filters = [Product.owner_id == owner_id, Product.bought.is_(True)]
        if year is not None:
            bought_filters.extend(self._year_window(year))

        total_spent, total_items = (
            self.db.query(
                func.coalesce(func.sum(self._spent_expr()), 0),
                func.coalesce(func.sum(func.coalesce(Product.quantity_bought, 1)), 0),
            )
            .filter(*bought_filters)
            .one()
        )

        return {
            "total_count": total_count or 0,
            "total_spent": float(total_spent),
            "total_liked": total_liked or 0,
            "total_items": int(total_items),
            "yearly_stats": self.get_yearly_stats(owner_id),
        }

    def get_yearly_stats(self, owner_id: int) -> List[Dict[str, Any]]:
        """Dépenses et nombre d'achats par année de dateOfPurchase, année décroissante"""
        year_expr = extract("year", Product.date_of_purchase)

        rows = (
            self.db.query(
                year_expr.label("year"),
                func.sum(self._spent_expr()).label("spent"),
                func.count(Product.id).label("count"),
            )
            .filter(
                Product.owner_id == owner_id,
                Product.bought.is_(True),
                Product.date_of_purchase.isnot(None),
            )
            .group_by(year_expr)
            .order_by(year_expr.desc())
            .all()
        )

        return [
            {"year": int(row.year), "spent": float(row.spent or 0), "count": row.count}
            for row in rows
        ]
