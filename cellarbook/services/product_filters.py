"""
Construction des prédicats et du tri pour GET /products

Tous les filtres sont des conjonctions (AND) toujours limitées au
propriétaire; l'ordre d'application n'a donc aucun effet sur le résultat.
"""

from typing import List, Optional

from sqlalchemy import or_

from cellarbook.models.product import Product, ProductGrape, ProductTag
from cellarbook.schemas.product import ProductFilters, ProductSortField, SortOrder

PRODUCT_SORT_COLUMNS = {
    ProductSortField.CREATED_AT: Product.created_at,
    ProductSortField.UPDATED_AT: Product.updated_at,
    ProductSortField.NAME: Product.name,
    ProductSortField.PRICE: Product.price,
    ProductSortField.TYPE: Product.type,
    ProductSortField.COUNTRY: Product.country,
    ProductSortField.WINE_TYPE: Product.wine_type,
    ProductSortField.ALCOHOL_PERCENT: Product.alcohol_percent,
    ProductSortField.DATE_OF_PURCHASE: Product.date_of_purchase,
    ProductSortField.STOCK: Product.stock,
    ProductSortField.QUANTITY_BOUGHT: Product.quantity_bought,
}

# paramètre de requête -> colonne booléenne
FLAG_COLUMNS = (
    ("fav", Product.liked),
    ("purchased", Product.bought),
    ("reviewed", Product.reviewed),
    ("interested", Product.interested),
)


def _is_present(value: Optional[str]) -> bool:
    return value is not None and value != ""


def parse_flag(value: Optional[str]) -> Optional[bool]:
    """None = pas de filtre; seule la chaîne "true" vaut True"""
    if value is None:
        return None
    return value == "true"


def search_clause(term: str):
    return or_(
        Product.name.icontains(term, autoescape=True),
        Product.description.icontains(term, autoescape=True),
        Product.grape_entries.any(ProductGrape.value.icontains(term, autoescape=True)),
        Product.tag_entries.any(ProductTag.value.icontains(term, autoescape=True)),
    )


def build_product_filters(owner_id: int, filters: ProductFilters) -> List:
    clauses = [Product.owner_id == owner_id]

    if _is_present(filters.search):
        clauses.append(search_clause(filters.search))

    if _is_present(filters.type):
        clauses.append(Product.type == filters.type)

    if _is_present(filters.country):
        clauses.append(Product.country == filters.country)

    if _is_present(filters.wine_type):
        clauses.append(Product.wine_type == filters.wine_type)

    if _is_present(filters.tags):
        clauses.append(Product.tag_entries.any(ProductTag.value == filters.tags))

    for param, column in FLAG_COLUMNS:
        flag = parse_flag(getattr(filters, param))
        if flag is not None:
            clauses.append(column == flag)

    return clauses


def product_ordering(
    sort_by: Optional[ProductSortField], order: Optional[SortOrder]
) -> List:
    """
    Sans sortBy: createdAt décroissant. Avec sortBy et sans order: croissant.
    L'id départage les égalités pour un ordre stable.
    """
    if sort_by is None:
        column = Product.created_at
        direction = order or SortOrder.DESC
    else:
        column = PRODUCT_SORT_COLUMNS[sort_by]
        direction = order or SortOrder.ASC

    if direction == SortOrder.DESC:
        return [column.desc(), Product.id.desc()]
    return [column.asc(), Product.id.asc()]
