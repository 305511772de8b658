"""Tests des produits (API)"""

import pytest

from cellarbook.models.product import Product


def _create(client, headers, **fields):
    return client.post("/api/v1/products", headers=headers, json=fields)


def test_create_product(client, auth_headers, test_user):
    response = _create(
        client,
        auth_headers,
        name="Lagavulin 16",
        type="whisky",
        country="Scotland",
        price=89.9,
        alcoholPercent=43,
        grapeType=[],
        tags=["islay", "peat", "islay"],
        pickupRange="Feb-March",
    )
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Lagavulin 16"
    assert data["ownerId"] == test_user.id
    assert data["alcoholPercent"] == 43
    assert data["tags"] == ["islay", "peat"]
    assert data["pickupRange"] == "Feb-March"
    assert data["liked"] is False
    assert data["kosher"] is False
    assert "createdAt" in data


def test_create_product_accepts_snake_case(client, auth_headers):
    response = _create(client, auth_headers, name="Rioja", wine_type="red")
    assert response.status_code == 201
    assert response.json()["wineType"] == "red"


def test_create_product_empty_name(client, auth_headers):
    response = _create(client, auth_headers, name="   ")
    assert response.status_code == 422


def test_create_duplicate_name_conflict(client, auth_headers, db, test_product):
    before = db.query(Product).count()

    response = _create(client, auth_headers, name=test_product.name, price=10)

    assert response.status_code == 409
    assert response.json()["field"] == "name"
    assert db.query(Product).count() == before


def test_same_name_allowed_for_other_owner(client, auth_headers_user2, test_product):
    response = _create(client, auth_headers_user2, name=test_product.name)
    assert response.status_code == 201


def test_get_product(client, auth_headers, test_product):
    response = client.get(f"/api/v1/products/{test_product.id}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["grapeType"] == ["Malbec"]


@pytest.mark.parametrize(
    "method,kwargs",
    [
        ("get", {}),
        ("put", {"json": {"price": 1}}),
        ("delete", {}),
    ],
)
def test_other_owner_sees_not_found(
    client, auth_headers_user2, test_product, method, kwargs
):
    """Produit d'un autre utilisateur: identique à un produit inexistant"""
    path = f"/api/v1/products/{test_product.id}"
    foreign = getattr(client, method)(path, headers=auth_headers_user2, **kwargs)
    missing = getattr(client, method)(
        "/api/v1/products/999999", headers=auth_headers_user2, **kwargs
    )

    assert foreign.status_code == 404
    assert missing.status_code == 404
    assert foreign.json()["error"] == missing.json()["error"]


def test_update_product_partial(client, auth_headers, test_product):
    response = client.put(
        f"/api/v1/products/{test_product.id}",
        headers=auth_headers,
        json={"price": 50, "liked": True},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["price"] == 50
    assert data["liked"] is True
    assert data["name"] == "Malbec 2019"
    assert data["country"] == "Argentina"
    assert data["tags"] == ["asado"]


def test_update_product_null_semantics(client, auth_headers, test_product):
    """null efface un champ optionnel, mais est ignoré pour name et les drapeaux"""
    response = client.put(
        f"/api/v1/products/{test_product.id}",
        headers=auth_headers,
        json={"country": None, "name": None, "bought": None, "tags": ["bbq"]},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["country"] is None
    assert data["name"] == "Malbec 2019"
    assert data["bought"] is True
    assert data["tags"] == ["bbq"]


def test_update_product_empty_name(client, auth_headers, test_product):
    response = client.put(
        f"/api/v1/products/{test_product.id}",
        headers=auth_headers,
        json={"name": ""},
    )
    assert response.status_code == 422


def test_update_product_name_conflict(client, auth_headers, test_user, test_product, make_product):
    other = make_product(test_user, name="Cabernet")

    response = client.put(
        f"/api/v1/products/{other.id}",
        headers=auth_headers,
        json={"name": test_product.name},
    )
    assert response.status_code == 409
    assert response.json()["field"] == "name"


def test_delete_product(client, auth_headers, test_product):
    response = client.delete(
        f"/api/v1/products/{test_product.id}", headers=auth_headers
    )
    assert response.status_code == 200
    assert "message" in response.json()

    response = client.get(f"/api/v1/products/{test_product.id}", headers=auth_headers)
    assert response.status_code == 404


def test_year_scenario(client, auth_headers):
    _create(
        client,
        auth_headers,
        name="Malbec 2019",
        price=45.5,
        bought=True,
        quantityBought=2,
        dateOfPurchase="2021-06-01",
    )

    response = client.get("/api/v1/products?year=2021", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["totalSpent"] == 91.0
    assert data["totalItems"] == 2
    assert {"_id": 2021, "spent": 91.0, "count": 1} in data["yearlyStats"]


def test_limit_zero_returns_stats_only(client, auth_headers, test_product):
    response = client.get("/api/v1/products?limit=0", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["products"] == []
    assert data["totalCount"] == 1
    assert data["totalSpent"] == 91.0
    assert data["totalItems"] == 2
    assert data["totalLiked"] == 0
    assert data["yearlyStats"] == [{"_id": 2021, "spent": 91.0, "count": 1}]


def test_positive_limit_does_not_truncate(client, auth_headers, test_user, make_product):
    for i in range(3):
        make_product(test_user, name=f"Bottle {i}")

    response = client.get("/api/v1/products?limit=1", headers=auth_headers)
    assert len(response.json()["products"]) == 3


def test_negative_limit_rejected(client, auth_headers):
    response = client.get("/api/v1/products?limit=-1", headers=auth_headers)
    assert response.status_code == 422


def test_total_count_ignores_list_filters(client, auth_headers, test_product):
    response = client.get("/api/v1/products?search=zzz", headers=auth_headers)
    data = response.json()
    assert data["products"] == []
    assert data["totalCount"] == 1


def test_default_sort_newest_first(client, auth_headers, test_user, make_product):
    names = ["First", "Second", "Third"]
    for name in names:
        make_product(test_user, name=name)

    response = client.get("/api/v1/products", headers=auth_headers)
    assert [p["name"] for p in response.json()["products"]] == list(reversed(names))


def test_sort_by_price(client, auth_headers, test_user, make_product):
    make_product(test_user, name="Mid", price=20)
    make_product(test_user, name="Cheap", price=5)
    make_product(test_user, name="Dear", price=80)

    asc = client.get("/api/v1/products?sortBy=price", headers=auth_headers).json()
    desc = client.get(
        "/api/v1/products?sortBy=price&order=desc", headers=auth_headers
    ).json()

    assert [p["name"] for p in asc["products"]] == ["Cheap", "Mid", "Dear"]
    assert [p["name"] for p in desc["products"]] == ["Dear", "Mid", "Cheap"]


def test_unknown_sort_field_rejected(client, auth_headers):
    response = client.get("/api/v1/products?sortBy=password_hash", headers=auth_headers)
    assert response.status_code == 422


def test_listing_is_repeatable(client, auth_headers, test_user, make_product):
    for i in range(4):
        make_product(test_user, name=f"Same price {i}", price=10)

    url = "/api/v1/products?sortBy=price&search=same"
    first = client.get(url, headers=auth_headers)
    second = client.get(url, headers=auth_headers)
    assert first.content == second.content


def test_list_filters_through_api(client, auth_headers, test_user, make_product, test_product):
    make_product(test_user, name="Talisker", type="whisky", liked=True)

    wines = client.get("/api/v1/products?type=wine", headers=auth_headers).json()
    favs = client.get("/api/v1/products?fav=true", headers=auth_headers).json()
    not_bought = client.get(
        "/api/v1/products?purchased=false", headers=auth_headers
    ).json()
    tagged = client.get("/api/v1/products?tags=asado", headers=auth_headers).json()
    by_wine_type = client.get(
        "/api/v1/products?wineType=red", headers=auth_headers
    ).json()

    assert [p["name"] for p in wines["products"]] == ["Malbec 2019"]
    assert [p["name"] for p in favs["products"]] == ["Talisker"]
    assert [p["name"] for p in not_bought["products"]] == ["Talisker"]
    assert [p["name"] for p in tagged["products"]] == ["Malbec 2019"]
    assert [p["name"] for p in by_wine_type["products"]] == ["Malbec 2019"]


def test_suggestions_endpoint(client, auth_headers, test_product):
    response = client.get("/api/v1/products/suggestions?q=MAL", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == ["Malbec 2019", "Malbec"]


def test_suggestions_empty_query(client, auth_headers, test_product):
    assert client.get("/api/v1/products/suggestions", headers=auth_headers).json() == []
    assert client.get("/api/v1/products/suggestions?q=", headers=auth_headers).json() == []


def test_grape_types(client, auth_headers, test_user, make_product, test_product):
    make_product(test_user, name="GSM", grape_type=["Syrah", "Grenache", "Mourvedre"])
    make_product(test_user, name="Cotes", grape_type=["Grenache"])

    response = client.get("/api/v1/products/grape-types", headers=auth_headers)
    assert response.json() == ["Grenache", "Malbec", "Mourvedre", "Syrah"]
